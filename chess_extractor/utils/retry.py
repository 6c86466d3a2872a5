# chess_extractor/utils/retry.py
"""
Provides a generic retry decorator for handling transient errors.

This utility makes archive downloads resilient to temporary network issues by
automatically retrying a failed call with an exponential backoff delay.
"""
import functools
import random
import time
from typing import Any, Callable, Tuple, Type, TypeVar

import requests
import structlog

from chess_extractor.utils import metrics

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# A tuple of default exception types that are considered "transient" and worth retrying.
DEFAULT_TRANSIENT_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    requests.ConnectionError,
    requests.Timeout,
)


def retry_with_backoff(
    attempts: int = 3,
    initial_backoff_s: float = 0.5,
    max_backoff_s: float = 5.0,
    jitter_factor: float = 0.2,
    exceptions_to_catch: Tuple[Type[Exception], ...] = DEFAULT_TRANSIENT_EXCEPTIONS,
    target: str = "unknown",
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[F], F]:
    """
    Retries a synchronous call that fails with a transient network error.

    The wait before retry n is `initial_backoff_s * 2 ** (n - 1)`, shifted by
    up to `jitter_factor` of itself in either direction and capped at
    `max_backoff_s`. After the last attempt the original exception is
    re-raised unchanged, so callers decide how to report it.

    Args:
        attempts: Total number of calls, the first one included.
        initial_backoff_s: Wait before the first retry, in seconds.
        max_backoff_s: Upper bound on any single wait.
        jitter_factor: Relative spread of the random jitter (0.2 means +/-20%).
        exceptions_to_catch: Exception types treated as transient.
        target: Label for the transient-error counter, e.g. "archive".
        sleep: Called with each wait; tests pass a mock.
    """
    def decorator(func: F) -> F:
        func_name = getattr(func, "__name__", repr(func))

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            current_delay = initial_backoff_s
            for attempt in range(1, attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions_to_catch as e:
                    metrics.HTTP_TRANSIENT_ERRORS_TOTAL.labels(target=target).inc()

                    if attempt == attempts:
                        logger.error(
                            "Function call failed after max attempts.",
                            function=func_name,
                            total_attempts=attempts,
                            error=str(e),
                        )
                        raise

                    jitter = random.uniform(-current_delay * jitter_factor, current_delay * jitter_factor)
                    wait_time = max(0.0, min(max_backoff_s, current_delay + jitter))

                    logger.warning(
                        "Caught transient error, retrying function.",
                        function=func_name,
                        attempt=attempt,
                        total_attempts=attempts,
                        wait_seconds=round(wait_time, 2),
                        error=str(e),
                    )

                    sleep(wait_time)
                    current_delay *= 2
        return wrapper  # type: ignore[return-value]
    return decorator
