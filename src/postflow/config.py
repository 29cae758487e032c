"""Configuration management using pydantic-settings."""

from pathlib import Path
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Content API
    api_base_url: str = Field(
        default="http://localhost:8080", description="Base URL of the content API"
    )
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Public site
    site_base_url: str = Field(
        default="http://localhost:3000", description="Public site URL used in sitemap entries"
    )
    site_name: str = Field(default="PostFlow", description="Human-friendly site name")

    # Aggregation
    combined_fetch_size: int = Field(
        default=1000,
        gt=0,
        description="Page size of the combined multi-category post query",
    )
    exhaust_combined_fetch: bool = Field(
        default=False,
        description="Keep paging the combined query until the upstream reports the last page",
    )
    category_page_size: int = Field(
        default=12, gt=0, description="Posts per page on category listings"
    )

    # Sitemap
    sitemap_post_limit: int = Field(
        default=1000, gt=0, description="Maximum number of posts listed in the sitemap"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_file: Path | None = Field(default=None, description="Optional debug log file")

    @property
    def site_root(self) -> str:
        """Site base URL without a trailing slash."""
        return self.site_base_url.rstrip("/")

    def site_url(self, path: str = "") -> str:
        """Build an absolute public URL for a site path."""
        if not path:
            return self.site_root
        return f"{self.site_root}/{path.lstrip('/')}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
