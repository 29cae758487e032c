"""Sitemap entry models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ChangeFrequency(str, Enum):
    """Allowed <changefreq> values from the sitemaps.org protocol."""

    always = "always"
    hourly = "hourly"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"
    never = "never"


class UrlEntry(BaseModel):
    """A single URL listed in the sitemap."""

    url: str = Field(..., description="Absolute URL")
    last_modified: datetime = Field(..., description="Last modification time")
    change_frequency: ChangeFrequency = Field(default=ChangeFrequency.weekly)
    priority: float = Field(default=0.5, ge=0.0, le=1.0)
