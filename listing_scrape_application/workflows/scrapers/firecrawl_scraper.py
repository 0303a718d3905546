from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from firecrawl import Firecrawl

from ...config import RuntimeConfig, Settings, runtime_config, settings
from ..exceptions import MissingConfigurationError, PageExtractionError
from ..helpers.firecrawl import (
    build_json_format,
    build_wait_actions,
    classify_firecrawl_error,
    extract_json_payload,
)
from .base import BaseScraper

logger = logging.getLogger("listing_scrape.firecrawl")


@dataclass
class FirecrawlDependencies:
    settings: Any
    firecrawl_cls: Any
    timeout_ms: int
    settle_ms: int
    max_retries: int


def require_firecrawl_api_key(cfg: Any) -> str:
    api_key = getattr(cfg, "firecrawl_api_key", None)
    if not api_key or not str(api_key).strip():
        raise MissingConfigurationError("FIRECRAWL_API_KEY env var is required for Firecrawl")
    return str(api_key).strip()


class FirecrawlScraper(BaseScraper):
    provider = "firecrawl"

    def __init__(self, deps: FirecrawlDependencies):
        self.deps = deps
        # Fails fast, before any request is issued.
        self._api_key = require_firecrawl_api_key(deps.settings)
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = self.deps.firecrawl_cls(
                api_key=self._api_key,
                api_url=getattr(self.deps.settings, "firecrawl_api_url", None)
                or "https://api.firecrawl.dev",
                max_retries=self.deps.max_retries,
            )
        return self._client

    async def extract(
        self,
        url: str,
        *,
        schema: Dict[str, Any],
        wait_selector: Optional[str] = None,
    ) -> Any:
        def _do_scrape() -> Any:
            client = self._get_client()
            return client.scrape(
                url,
                formats=[build_json_format(schema)],
                only_main_content=False,
                actions=build_wait_actions(wait_selector, self.deps.settle_ms),
                timeout=self.deps.timeout_ms,
            )

        logger.info(
            "Dispatching Firecrawl scrape url=%s wait_selector=%s timeout_ms=%s",
            url,
            wait_selector,
            self.deps.timeout_ms,
        )
        started_at = time.monotonic()
        try:
            document = await asyncio.to_thread(_do_scrape)
        except Exception as exc:  # noqa: BLE001
            raise classify_firecrawl_error(exc, url=url) from exc

        payload = extract_json_payload(document)
        if payload is None:
            raise PageExtractionError(f"Firecrawl returned no json payload for {url}")

        logger.debug(
            "Firecrawl scrape finished url=%s elapsed_ms=%s",
            url,
            int((time.monotonic() - started_at) * 1000),
        )
        return payload


def build_firecrawl_scraper(
    cfg: Optional[Settings] = None,
    runtime: Optional[RuntimeConfig] = None,
    *,
    firecrawl_cls: Any = None,
) -> FirecrawlScraper:
    runtime = runtime or runtime_config
    return FirecrawlScraper(
        FirecrawlDependencies(
            settings=cfg or settings,
            firecrawl_cls=firecrawl_cls or Firecrawl,
            timeout_ms=runtime.extraction_timeout_ms,
            settle_ms=runtime.extraction_settle_ms,
            max_retries=runtime.extraction_retries,
        )
    )
