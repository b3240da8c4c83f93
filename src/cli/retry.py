"""Retry helpers for LLM calls made while closing a session."""

from typing import Optional

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

logger = structlog.get_logger(source="retry")


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "llm_call_retrying",
        attempt=retry_state.attempt_number,
        wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
        error=str(error) if error else None,
    )


def llm_retry(
    max_attempts: int = 2,
    min_wait: float = 1.0,
    max_wait: float = 4.0,
    exceptions: tuple = (Exception,),
    max_delay: Optional[float] = None,
):
    """Retry decorator for LLM API calls.

    The last exception is re-raised once attempts (or ``max_delay``) run out.

    Args:
        max_attempts: Max attempts including the first call
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
        max_delay: Stop retrying once this many seconds have passed since the first call
    """
    stop = stop_after_attempt(max_attempts)
    if max_delay is not None:
        stop = stop | stop_after_delay(max_delay)
    return retry(
        stop=stop,
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=_log_retry,
        reraise=True,
    )
