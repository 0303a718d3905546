from __future__ import annotations

from typing import Any, Dict, Optional


class BaseScraper:
    """Common interface for extraction-service adapters."""

    provider: str = "unknown"

    async def extract(
        self,
        url: str,
        *,
        schema: Dict[str, Any],
        wait_selector: Optional[str] = None,
    ) -> Any:
        """Fetch ``url`` and return the payload shaped by ``schema``."""

        raise NotImplementedError("extract must be implemented by scraper classes")
