from __future__ import annotations


class ScrapeError(Exception):
    """Base error that carries retryability information across the extraction boundary."""

    def __init__(self, message: str, *, retryable: bool) -> None:  # noqa: D401
        super().__init__(message)
        self.retryable = retryable


class RetryableScrapeError(ScrapeError):
    """Errors that a caller may safely retry."""

    def __init__(self, message: str) -> None:  # noqa: D401
        super().__init__(message, retryable=True)


class NonRetryableScrapeError(ScrapeError):
    """Errors that should fail the current call without retry."""

    def __init__(self, message: str) -> None:  # noqa: D401
        super().__init__(message, retryable=False)
