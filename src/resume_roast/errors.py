"""Exception types raised across the roast and generation pipeline."""

from __future__ import annotations


class ResumeRoastError(Exception):
    """Base class for errors surfaced to callers."""


class InputValidationError(ResumeRoastError, ValueError):
    """Request rejected before any call to the generation service."""


class RateLimitExceededError(ResumeRoastError):
    """Caller exceeded its local request quota."""

    def __init__(self, key: str, retry_after: int):
        super().__init__(f"Too many requests for {key}; retry after {retry_after}s")
        self.key = key
        self.retry_after = retry_after


class GenerationUnavailableError(ResumeRoastError):
    """Generation service failed terminally (retries exhausted or non-retryable status)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PersistenceError(ResumeRoastError):
    """Reading from or writing to the resume store failed."""
