import logging
from collections.abc import Callable
from typing import Any

import httpx
from tenacity import RetryCallState, retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter

logger = logging.getLogger(__name__)

type RetryDecorator = Callable[[Callable[..., Any]], Callable[..., Any]]


def is_transient_http_error(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


def default_http_retry(label: str, *, attempts: int = 3, max_wait: float = 10) -> RetryDecorator:
    """Return a tenacity retry decorator for MLB Stats API calls.

    Transport errors, 429s and 5xx responses are retried with exponential
    backoff plus jitter; other 4xx responses fail at once. After *attempts*
    tries the last error is re-raised. *label* is interpolated into the
    warning logged before each retry.
    """

    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning("Retrying %s (attempt %d): %s", label, retry_state.attempt_number, retry_state.outcome)

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=1, max=max_wait),
        retry=retry_if_exception(is_transient_http_error),
        before_sleep=_log_retry,
        reraise=True,
    )
