"""talentgate.infrastructure.services.retry

Name: Retry Helper with Exponential Backoff + Jitter

CRC (Component Card)
--------------------
Component: retry helper
Responsibilities:
  - Decide which provider errors are worth retrying
  - Provide a standard tenacity decorator with backoff + jitter
  - Log each retry attempt with useful context
Collaborators:
  - tenacity (retry engine)
  - crosscutting.config.get_settings (attempts/delays)
  - crosscutting.logger
Constraints:
  - Retry ONLY transient errors (429, 5xx, timeouts, connection issues)
  - Never retry permanent errors (400, 401, 403, 404)
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger

T = TypeVar("T")


TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})

PERMANENT_HTTP_CODES: frozenset[int] = frozenset({400, 401, 403, 404})


def get_http_status_code(exception: BaseException) -> int | None:
    """R: Best-effort HTTP status code from SDK / httpx exceptions."""
    # R: google.genai.errors.APIError exposes `code`.
    code = getattr(exception, "code", None)
    if isinstance(code, int) and code >= 100:
        return code

    resp = getattr(exception, "response", None)
    status_code = getattr(resp, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    status_code = getattr(exception, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    return None


def is_transient_error(exception: BaseException) -> bool:
    """R: True when the call may succeed if repeated.

    Order: HTTP status, built-in IO errors, class name, then message.
    Unknown errors are not retried.
    """
    status_code = get_http_status_code(exception)
    if status_code is not None:
        if status_code in PERMANENT_HTTP_CODES:
            return False
        if status_code in TRANSIENT_HTTP_CODES:
            return True

    if isinstance(exception, (TimeoutError, ConnectionError, OSError)):
        return True

    exception_name = type(exception).__name__.lower()
    if any(
        p in exception_name
        for p in (
            "timeout",
            "connection",
            "unavailable",
            "resourceexhausted",
            "deadline",
        )
    ):
        return True

    message = str(exception).lower()
    return any(
        p in message
        for p in (
            "rate limit",
            "too many requests",
            "quota exceeded",
            "temporarily unavailable",
            "service unavailable",
            "timed out",
            "deadline exceeded",
        )
    )


def _log_retry(retry_state: RetryCallState) -> None:
    fn = getattr(retry_state, "fn", None)
    wait_time = (
        retry_state.next_action.sleep
        if getattr(retry_state, "next_action", None) is not None
        else 0
    )

    exc: Optional[BaseException] = None
    if getattr(retry_state, "outcome", None) is not None:
        exc = retry_state.outcome.exception()

    logger.warning(
        "Retrying external call",
        extra={
            "function": getattr(fn, "__name__", "unknown"),
            "attempt": retry_state.attempt_number,
            "wait_seconds": round(float(wait_time), 2),
            "error_type": type(exc).__name__ if exc else None,
        },
    )


def create_retry_decorator(
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """R: tenacity decorator: exponential backoff + jitter, transient errors only."""
    settings = get_settings()

    _max_attempts = (
        settings.retry_max_attempts if max_attempts is None else max_attempts
    )
    _base_delay = (
        settings.retry_base_delay_seconds if base_delay is None else float(base_delay)
    )
    _max_delay = (
        settings.retry_max_delay_seconds if max_delay is None else float(max_delay)
    )

    if _max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    if _base_delay < 0:
        raise ValueError("base_delay must be >= 0")
    if _max_delay <= 0:
        raise ValueError("max_delay must be > 0")

    return retry(
        stop=stop_after_attempt(_max_attempts),
        wait=wait_exponential_jitter(initial=_base_delay, max=_max_delay),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        reraise=True,
    )
