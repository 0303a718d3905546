from __future__ import annotations

import pytest

from listing_scrape_application.workflows.exceptions import (
    NonRetryableScrapeError,
    RateLimitScrapeError,
    TimeoutScrapeError,
)
from listing_scrape_application.workflows.helpers.backoff import backoff_delay_ms, retry_with_backoff


def _scripted_op(outcomes):
    calls = {"count": 0}

    async def op():
        outcome = outcomes[calls["count"]]
        calls["count"] += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    return op, calls


def test_backoff_delay_doubles():
    assert [backoff_delay_ms(i) for i in range(3)] == [2000, 4000, 8000]
    assert backoff_delay_ms(1, base_delay_ms=500) == 1000


@pytest.mark.asyncio
async def test_returns_first_success_without_waiting(recording_sleep):
    op, calls = _scripted_op(["ok"])

    assert await retry_with_backoff(op, sleep=recording_sleep) == "ok"
    assert calls["count"] == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_rate_limited_twice_then_succeeds(recording_sleep):
    op, calls = _scripted_op(
        [RateLimitScrapeError("429 Too Many Requests"), RateLimitScrapeError("429"), ["listing"]]
    )

    result = await retry_with_backoff(op, attempts=3, base_delay_ms=2000, sleep=recording_sleep)

    assert result == ["listing"]
    assert calls["count"] == 3
    assert recording_sleep.calls == [2.0, 4.0]
    assert sum(recording_sleep.calls) * 1000 >= 2000 + 4000


@pytest.mark.asyncio
async def test_other_failures_propagate_immediately(recording_sleep):
    op, calls = _scripted_op([TimeoutScrapeError("timed out"), "unreachable"])

    with pytest.raises(TimeoutScrapeError):
        await retry_with_backoff(op, sleep=recording_sleep)

    assert calls["count"] == 1
    assert recording_sleep.calls == []


@pytest.mark.asyncio
async def test_exhausted_attempts_raise_last_rate_limit(recording_sleep):
    errors = [RateLimitScrapeError(f"429 #{i}") for i in range(3)]
    op, calls = _scripted_op(errors)

    with pytest.raises(RateLimitScrapeError) as excinfo:
        await retry_with_backoff(op, attempts=3, sleep=recording_sleep)

    assert excinfo.value is errors[-1]
    assert calls["count"] == 3
    assert recording_sleep.calls == [2.0, 4.0]


@pytest.mark.asyncio
async def test_non_retryable_after_rate_limit_stops(recording_sleep):
    op, calls = _scripted_op([RateLimitScrapeError("429"), NonRetryableScrapeError("500"), "ok"])

    with pytest.raises(NonRetryableScrapeError):
        await retry_with_backoff(op, sleep=recording_sleep)

    assert calls["count"] == 2
    assert recording_sleep.calls == [2.0]


@pytest.mark.asyncio
async def test_rejects_zero_attempts():
    async def op():
        return None

    with pytest.raises(ValueError):
        await retry_with_backoff(op, attempts=0)
