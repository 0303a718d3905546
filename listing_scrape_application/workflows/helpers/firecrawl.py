from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from firecrawl.v2.utils.error_handler import PaymentRequiredError, RateLimitError, RequestTimeoutError

from ..exceptions import (
    NonRetryableScrapeError,
    PaymentRequiredScrapeError,
    RateLimitScrapeError,
    ScrapeError,
    TimeoutScrapeError,
)


def build_wait_actions(wait_selector: Optional[str], settle_ms: int) -> List[Dict[str, Any]]:
    """Browser actions: wait for the on-page marker, then let the page settle."""

    actions: List[Dict[str, Any]] = []
    if wait_selector:
        actions.append({"type": "wait", "selector": wait_selector})
    if settle_ms > 0:
        actions.append({"type": "wait", "milliseconds": settle_ms})
    return actions


def build_json_format(schema: Dict[str, Any], prompt: Optional[str] = None) -> Dict[str, Any]:
    fmt: Dict[str, Any] = {"type": "json", "schema": schema}
    if prompt:
        fmt["prompt"] = prompt
    return fmt


def _status_code(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def classify_firecrawl_error(exc: BaseException, *, url: str) -> ScrapeError:
    """Map an SDK/transport failure onto a structured scrape error kind.

    This is the only place provider error text is inspected; callers branch on
    the returned type.
    """

    if isinstance(exc, ScrapeError):
        return exc

    msg = str(exc).lower()
    status = _status_code(exc)
    detail = f"Firecrawl scrape failed for {url}: {exc}"

    if (
        isinstance(exc, RateLimitError)
        or status == 429
        or "too many requests" in msg
        or "rate limit" in msg
    ):
        return RateLimitScrapeError(detail)

    if (
        status == 402
        or isinstance(exc, PaymentRequiredError)
        or "payment required" in msg
        or "insufficient credits" in msg
    ):
        return PaymentRequiredScrapeError(detail)

    if status in {408, 504} or isinstance(exc, (RequestTimeoutError, TimeoutError)) or "timeout" in msg:
        return TimeoutScrapeError(detail)

    return NonRetryableScrapeError(detail)


def extract_json_payload(document: Any) -> Any:
    """Return the structured ``json`` field of a Firecrawl scrape result.

    Accepts the SDK ``Document`` model, a plain dict, or a legacy
    ``{"data": {"llm_extraction": ...}}`` payload. String payloads are decoded.
    """

    if document is None:
        return None

    value: Any = None
    if isinstance(document, dict):
        value = document.get("json")
        if value is None:
            data = document.get("data")
            if isinstance(data, dict):
                value = data.get("json") or data.get("llm_extraction")
    else:
        value = getattr(document, "json", None)
        if callable(value):
            # pydantic v1 style BaseModel.json(); not an extraction payload
            value = None
        if value is None:
            value = getattr(document, "extract", None) or getattr(document, "llm_extraction", None)

    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return None
    return value
