from .base import BaseScraper
from .firecrawl_scraper import FirecrawlScraper, FirecrawlDependencies, build_firecrawl_scraper

__all__ = [
    "BaseScraper",
    "FirecrawlScraper",
    "FirecrawlDependencies",
    "build_firecrawl_scraper",
]
