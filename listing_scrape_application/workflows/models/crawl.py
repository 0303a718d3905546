from __future__ import annotations

import asyncio
import enum
import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional

from ...components.models import Listing
from ...config import RuntimeConfig, Settings, runtime_config, settings


class CrawlPhase(str, enum.Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    SCRAPING = "scraping"
    DONE = "done"


@dataclass
class CrawlOptions:
    """Everything a crawl needs besides the scraper itself."""

    index_url: str
    base_origin: str
    output_path: Optional[str] = None
    max_pages: Optional[int] = None
    retry_attempts: int = 3
    retry_base_delay_ms: int = 2000
    jitter_min_ms: int = 1000
    jitter_max_ms: int = 3000
    pagination_wait_selector: Optional[str] = None
    listings_wait_selector: Optional[str] = None
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    rng: Optional[random.Random] = None

    @classmethod
    def from_config(
        cls,
        cfg: Optional[Settings] = None,
        runtime: Optional[RuntimeConfig] = None,
        **overrides: Any,
    ) -> "CrawlOptions":
        cfg = cfg or settings
        runtime = runtime or runtime_config
        values: dict[str, Any] = {
            "index_url": cfg.index_url,
            "base_origin": cfg.base_origin,
            "output_path": cfg.output_path,
            "retry_attempts": runtime.scrape_retry_attempts,
            "retry_base_delay_ms": runtime.scrape_retry_base_delay_ms,
            "jitter_min_ms": runtime.jitter_min_ms,
            "jitter_max_ms": runtime.jitter_max_ms,
            "pagination_wait_selector": runtime.pagination_wait_selector,
            "listings_wait_selector": runtime.listings_wait_selector,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class CrawlState:
    """Accumulated crawl result; mutated only by the orchestrator."""

    listings: List[Listing] = field(default_factory=list)
    phase: CrawlPhase = CrawlPhase.IDLE
    page_urls: List[str] = field(default_factory=list)
    current_page: Optional[int] = None
    pages_succeeded: int = 0
    failed_pages: List[str] = field(default_factory=list)

    @property
    def pages_total(self) -> int:
        return len(self.page_urls)

    def records(self) -> List[dict[str, Any]]:
        return [listing.to_record() for listing in self.listings]
