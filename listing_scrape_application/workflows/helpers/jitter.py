from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional

logger = logging.getLogger("listing_scrape.jitter")

DEFAULT_JITTER_MIN_MS = 1000
DEFAULT_JITTER_MAX_MS = 3000


async def jitter_delay(
    min_ms: int = DEFAULT_JITTER_MIN_MS,
    max_ms: int = DEFAULT_JITTER_MAX_MS,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    rng: Optional[random.Random] = None,
) -> int:
    """Pause for a random duration in ``[min_ms, max_ms)`` and return it in ms."""

    if max_ms < min_ms:
        raise ValueError("max_ms must be >= min_ms")

    source = rng or random
    span = max_ms - min_ms
    delay_ms = min_ms + int(source.random() * span) if span else min_ms
    logger.debug("Jitter delay %sms", delay_ms)
    await sleep(delay_ms / 1000)
    return delay_ms
