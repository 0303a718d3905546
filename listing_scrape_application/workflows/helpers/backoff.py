from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from ..exceptions import RateLimitScrapeError

logger = logging.getLogger("listing_scrape.backoff")

T = TypeVar("T")

DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_BASE_DELAY_MS = 2000


def backoff_delay_ms(attempt_index: int, base_delay_ms: int = DEFAULT_BASE_DELAY_MS) -> int:
    """Exponential wait before retry ``attempt_index + 1`` (2s, 4s, 8s... by default)."""

    return base_delay_ms * (2**attempt_index)


async def retry_with_backoff(
    op: Callable[[], Awaitable[T]],
    *,
    attempts: int = DEFAULT_RETRY_ATTEMPTS,
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    label: Optional[str] = None,
) -> T:
    """Run ``op`` and retry it only when it fails with a rate limit.

    Any other exception propagates on the first failure. When every attempt is
    rate limited, the last ``RateLimitScrapeError`` is raised.
    """

    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    for attempt_index in range(attempts):
        try:
            return await op()
        except RateLimitScrapeError:
            if attempt_index >= attempts - 1:
                raise
            wait_ms = backoff_delay_ms(attempt_index, base_delay_ms)
            logger.warning(
                "Rate limited%s. Waiting %sms before retry %s/%s",
                f" ({label})" if label else "",
                wait_ms,
                attempt_index + 1,
                attempts,
            )
            await sleep(wait_ms / 1000)

    # Unreachable: the loop either returns or raises.
    raise RuntimeError("retry_with_backoff exhausted without result")
