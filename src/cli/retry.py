"""Retry utilities with exponential backoff."""

import logging

import httpx
import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.stdlib.get_logger(__name__)

# Connection-level failures only; HTTP error statuses are never retried.
TRANSIENT_ERRORS: tuple = (httpx.TransportError,)


def http_retry(
    max_attempts: int = 2,
    min_wait: float = 0.5,
    max_wait: float = 4.0,
    exceptions: tuple = TRANSIENT_ERRORS,
):
    """Retry decorator for idempotent HTTP reads.

    Never wrap a vote or comment submission: replaying a toggle flips it back.

    Args:
        max_attempts: Max attempts, including the first call
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
