from .base import NonRetryableScrapeError


class MissingConfigurationError(NonRetryableScrapeError):
    """Required configuration (e.g. FIRECRAWL_API_KEY) is missing; nothing was fetched."""

    pass
