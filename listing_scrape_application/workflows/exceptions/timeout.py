from .base import RetryableScrapeError


class TimeoutScrapeError(RetryableScrapeError):
    """Transient timeout from provider or network."""

    pass
