from __future__ import annotations

import logging
from typing import List

from ..components.models import Listing, build_listing_schema, parse_listings
from .helpers.backoff import retry_with_backoff
from .helpers.jitter import jitter_delay
from .models import CrawlOptions
from .scrapers.base import BaseScraper

logger = logging.getLogger("listing_scrape.page")


async def scrape_page(
    scraper: BaseScraper,
    url: str,
    page_index: int,
    total_pages: int,
    options: CrawlOptions,
) -> List[Listing]:
    """Scrape one results page into validated listings.

    Rate limits are retried with backoff; any other failure propagates to the
    caller.
    """

    logger.info("Scraping page %s/%s url=%s", page_index + 1, total_pages, url)

    await jitter_delay(options.jitter_min_ms, options.jitter_max_ms, sleep=options.sleep, rng=options.rng)

    schema = build_listing_schema()

    async def _extract() -> object:
        return await scraper.extract(
            url,
            schema=schema,
            wait_selector=options.listings_wait_selector,
        )

    payload = await retry_with_backoff(
        _extract,
        attempts=options.retry_attempts,
        base_delay_ms=options.retry_base_delay_ms,
        label=f"page {page_index + 1}/{total_pages}",
        sleep=options.sleep,
    )

    listings = parse_listings(payload)
    raw_rows = payload.get("listings") if isinstance(payload, dict) else None
    dropped = len(raw_rows) - len(listings) if isinstance(raw_rows, list) else 0
    if dropped:
        logger.info("Dropped %s invalid listings on page %s/%s", dropped, page_index + 1, total_pages)
    return listings
