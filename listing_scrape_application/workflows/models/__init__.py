"""Crawl state and options shared across workflows."""

from .crawl import CrawlOptions, CrawlPhase, CrawlState

__all__ = ["CrawlOptions", "CrawlPhase", "CrawlState"]
