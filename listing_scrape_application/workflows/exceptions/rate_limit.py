from .base import RetryableScrapeError


class RateLimitScrapeError(RetryableScrapeError):
    """Provider rate limit hit (HTTP 429); safe to retry after backing off."""

    pass
