from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..services import telemetry
from ..services.checkpoint import load_checkpoint, serialize_listings, write_checkpoint
from .models import CrawlOptions, CrawlPhase, CrawlState
from .page_scraper import scrape_page
from .pagination import discover_page_urls
from .scrapers.base import BaseScraper
from .scrapers.firecrawl_scraper import build_firecrawl_scraper

logger = logging.getLogger("listing_scrape.workflow")


class ScrapeOrchestrator:
    """Drives one crawl: discover pages, then scrape them one at a time.

    Pages are processed sequentially so backoff timing stays predictable under
    the provider's rate limits. A failed page is logged and skipped; once
    discovery has finished, ``run`` always returns the accumulated state.
    """

    def __init__(
        self,
        scraper: BaseScraper,
        options: CrawlOptions,
        *,
        checkpoint_writer: Callable[..., Any] = write_checkpoint,
    ) -> None:
        self.scraper = scraper
        self.options = options
        self._write_checkpoint = checkpoint_writer

    async def discover(self, state: CrawlState) -> CrawlState:
        state.phase = CrawlPhase.DISCOVERING
        state.page_urls = await discover_page_urls(self.scraper, self.options)
        state.phase = CrawlPhase.SCRAPING
        return state

    async def scrape_step(self, state: CrawlState, page_index: int) -> CrawlState:
        url = state.page_urls[page_index]
        total = state.pages_total
        state.current_page = page_index
        try:
            page_listings = await scrape_page(self.scraper, url, page_index, total, self.options)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Failed to scrape page %s/%s url=%s error=%s", page_index + 1, total, url, exc
            )
            telemetry.emit_crawl_event(
                "crawl.page.failed",
                level="error",
                url=url,
                page=page_index + 1,
                totalPages=total,
                errorType=type(exc).__name__,
                error=str(exc),
            )
            state.failed_pages.append(url)
            return state

        state.listings.extend(page_listings)
        state.pages_succeeded += 1
        self._checkpoint(state)
        logger.info("Successfully scraped page %s/%s", page_index + 1, total)
        logger.info("Total listings so far: %s", len(state.listings))
        return state

    def _checkpoint(self, state: CrawlState) -> None:
        path = self.options.output_path
        if not path:
            return
        try:
            self._write_checkpoint(path, state.listings)
        except OSError as exc:
            logger.error("Checkpoint write failed path=%s error=%s", path, exc)

    async def run(self) -> CrawlState:
        state = CrawlState()
        state = await self.discover(state)
        for page_index in range(state.pages_total):
            state = await self.scrape_step(state, page_index)

        state.phase = CrawlPhase.DONE
        state.current_page = None
        logger.info(
            "Crawl finished pages=%s succeeded=%s failed=%s listings=%s",
            state.pages_total,
            state.pages_succeeded,
            len(state.failed_pages),
            len(state.listings),
        )
        telemetry.emit_crawl_event(
            "crawl.completed",
            pages=state.pages_total,
            succeeded=state.pages_succeeded,
            failed=len(state.failed_pages),
            listings=len(state.listings),
        )
        return state


async def run_crawl(
    options: Optional[CrawlOptions] = None,
    *,
    scraper: Optional[BaseScraper] = None,
) -> CrawlState:
    # Building the scraper validates FIRECRAWL_API_KEY before any request.
    scraper = scraper or build_firecrawl_scraper()
    options = options or CrawlOptions.from_config()
    return await ScrapeOrchestrator(scraper, options).run()


async def scrape_listings(
    options: Optional[CrawlOptions] = None,
    *,
    scraper: Optional[BaseScraper] = None,
) -> List[Dict[str, Any]]:
    """Crawl the configured index page and return every listing as a plain dict."""

    state = await run_crawl(options, scraper=scraper)
    return state.records()


async def scrape_listings_json(
    options: Optional[CrawlOptions] = None,
    *,
    scraper: Optional[BaseScraper] = None,
) -> str:
    state = await run_crawl(options, scraper=scraper)
    return serialize_listings(state.listings)


async def load_or_scrape_listings(
    options: Optional[CrawlOptions] = None,
    *,
    scraper: Optional[BaseScraper] = None,
    refresh: bool = False,
) -> List[Dict[str, Any]]:
    """Reuse the saved listings file when it has data, otherwise crawl."""

    options = options or CrawlOptions.from_config()
    if not refresh and options.output_path:
        cached = load_checkpoint(options.output_path)
        if cached:
            logger.info("Loaded %s cached listings from %s", len(cached), options.output_path)
            return cached
        if cached is None:
            logger.info("File not found, scraping data... path=%s", options.output_path)
        else:
            logger.info("File contains an empty list, scraping data... path=%s", options.output_path)

    return await scrape_listings(options, scraper=scraper)
