from .base import NonRetryableScrapeError


class PaymentRequiredScrapeError(NonRetryableScrapeError):
    """Firecrawl returned 402 / insufficient credits."""

    pass
