from .base import NonRetryableScrapeError


class PageExtractionError(NonRetryableScrapeError):
    """Extraction call succeeded but returned no usable structured payload."""

    pass
