"""Retry policy for storage calls.

Only ``StorageUnavailableError`` is retried; every other failure (quota,
entitlement, programming errors) propagates on the first attempt. So does
``StorageCommitUncertainError``: a commit that may have landed is never
replayed. When the
attempts are exhausted the last ``StorageUnavailableError`` is re-raised so
callers fail closed.
"""

from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from quotaguard.core.exceptions import StorageCommitUncertainError, StorageUnavailableError
from quotaguard.core.logging import ContextualLogger
from quotaguard.core.logging import logger as default_logger

T = TypeVar("T")


def should_retry_on_storage_error(exception: BaseException) -> bool:
    """Check if exception is a transient storage failure that should be retried.

    A failed commit is excluded: its transaction may already be applied.
    """
    return isinstance(exception, StorageUnavailableError) and not isinstance(
        exception, StorageCommitUncertainError
    )


def _log_before_sleep(logger: ContextualLogger) -> Callable[[RetryCallState], None]:
    def _before_sleep(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Storage call failed (attempt {retry_state.attempt_number}), retrying: {exc}",
            extra={"retry_attempt": retry_state.attempt_number},
        )

    return _before_sleep


async def run_with_storage_retry(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    attempts: int = 3,
    wait_multiplier: float = 0.1,
    max_wait: float = 2.0,
    logger: Optional[ContextualLogger] = None,
    **kwargs: Any,
) -> T:
    """Await ``fn(*args, **kwargs)``, retrying transient storage failures.

    Args:
        fn: Coroutine function to call
        attempts: Total attempts including the first one
        wait_multiplier: Base of the exponential backoff, in seconds
        max_wait: Upper bound of a single backoff sleep, in seconds
        logger: Logger used for retry warnings
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=wait_multiplier, max=max_wait),
        retry=retry_if_exception(should_retry_on_storage_error),
        before_sleep=_log_before_sleep(logger or default_logger),
        reraise=True,
    )
    return await retrying(fn, *args, **kwargs)
