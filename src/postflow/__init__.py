"""Blog content aggregation, tag cloud and sitemap engine."""

__version__ = "0.1.0"
