from .base import ScrapeError, RetryableScrapeError, NonRetryableScrapeError
from .config import MissingConfigurationError
from .extraction import PageExtractionError
from .payment import PaymentRequiredScrapeError
from .rate_limit import RateLimitScrapeError
from .timeout import TimeoutScrapeError

__all__ = [
    "ScrapeError",
    "RetryableScrapeError",
    "NonRetryableScrapeError",
    "MissingConfigurationError",
    "PageExtractionError",
    "PaymentRequiredScrapeError",
    "RateLimitScrapeError",
    "TimeoutScrapeError",
]
