from __future__ import annotations

import logging
import os
import random
import sys
from typing import Any, Callable, Dict, List, Optional

import pytest

sys.path.insert(0, os.path.abspath("."))

from listing_scrape_application.workflows.models import CrawlOptions  # noqa: E402
from listing_scrape_application.workflows.scrapers.base import BaseScraper  # noqa: E402

INDEX_URL = "https://www.avito.ru/moskva/kvartiry/prodam"
BASE_ORIGIN = "https://www.avito.ru"


class RecordingSleep:
    """Async sleep replacement that records requested durations (seconds)."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class ScriptedScraper(BaseScraper):
    """Extraction stub returning scripted outcomes per URL.

    Each URL maps to a list of payloads or exceptions consumed in order; the
    last entry repeats once the list is down to one item.
    """

    provider = "scripted"

    def __init__(self, responses: Dict[str, List[Any]]) -> None:
        self.responses = {url: list(items) for url, items in responses.items()}
        self.calls: List[Dict[str, Any]] = []

    async def extract(
        self,
        url: str,
        *,
        schema: Dict[str, Any],
        wait_selector: Optional[str] = None,
    ) -> Any:
        self.calls.append({"url": url, "schema": schema, "wait_selector": wait_selector})
        queue = self.responses.get(url)
        if not queue:
            raise AssertionError(f"unexpected extraction for {url}")
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def scripted_scraper() -> Callable[[Dict[str, List[Any]]], ScriptedScraper]:
    return ScriptedScraper


@pytest.fixture
def make_options(tmp_path, recording_sleep) -> Callable[..., CrawlOptions]:
    def _make(**overrides: Any) -> CrawlOptions:
        values: Dict[str, Any] = {
            "index_url": INDEX_URL,
            "base_origin": BASE_ORIGIN,
            "output_path": str(tmp_path / "listings.json"),
            "pagination_wait_selector": ".pagination-root-Ntd_O",
            "listings_wait_selector": ".items-items-kAJAg",
            "sleep": recording_sleep,
            "rng": random.Random(7),
        }
        values.update(overrides)
        return CrawlOptions(**values)

    return _make


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
