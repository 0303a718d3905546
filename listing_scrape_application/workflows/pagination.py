from __future__ import annotations

import logging
from typing import List, Sequence
from urllib.parse import urljoin

from ..components.models import build_pagination_schema, parse_pagination_links
from ..services import telemetry
from .models import CrawlOptions
from .scrapers.base import BaseScraper

logger = logging.getLogger("listing_scrape.pagination")


def join_page_links(base_origin: str, links: Sequence[str]) -> List[str]:
    """Resolve pagination links against ``base_origin``, dropping repeats in order."""

    base = base_origin if base_origin.endswith("/") else f"{base_origin}/"
    urls: List[str] = []
    seen: set[str] = set()
    for link in links:
        absolute = urljoin(base, link)
        if absolute in seen:
            continue
        seen.add(absolute)
        urls.append(absolute)
    return urls


async def discover_page_urls(scraper: BaseScraper, options: CrawlOptions) -> List[str]:
    """Return absolute page URLs for the crawl; never empty and never raises.

    A failed extraction counts as "no links found", and no links means the
    index page itself is the only page.
    """

    index_url = options.index_url
    links: List[str] = []
    try:
        payload = await scraper.extract(
            index_url,
            schema=build_pagination_schema(),
            wait_selector=options.pagination_wait_selector,
        )
        links = parse_pagination_links(payload)
        logger.info("Fetched pagination data url=%s links=%s", index_url, len(links))
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to fetch pagination url=%s error=%s", index_url, exc)
        telemetry.emit_crawl_event(
            "crawl.pagination.fetch_failed", level="error", url=index_url, error=str(exc)
        )

    page_urls = join_page_links(options.base_origin, links)
    if not page_urls:
        logger.warning("No pagination links found; falling back to index page url=%s", index_url)
        telemetry.emit_crawl_event("crawl.pagination.fallback", level="warning", url=index_url)
        page_urls = [index_url]

    if options.max_pages is not None and options.max_pages > 0:
        page_urls = page_urls[: options.max_pages]
    return page_urls
