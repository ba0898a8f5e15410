"""Retry policy shared by the goal use cases."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff.

    Waits initial_delay_seconds, then doubles up to max_delay_seconds
    between attempts: 0.5s, 1s, 2s, 4s... with the defaults.

    Attributes:
        max_attempts: Total attempts including the first one
        initial_delay_seconds: Wait before the second attempt
        max_delay_seconds: Upper bound for any single wait
    """

    max_attempts: int = 3
    initial_delay_seconds: float = 0.5
    max_delay_seconds: float = 4.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.initial_delay_seconds < 0 or self.max_delay_seconds < 0:
            raise ValueError("Retry delays must be non-negative")

    async def run(
        self,
        operation: str,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **log_context: Any,
    ) -> T:
        """
        Await func(*args), retrying on any exception.

        Args:
            operation: Name used in retry logs
            func: Coroutine function to call
            *args: Positional arguments for func
            **log_context: Extra key-values for retry logs (e.g. owner_id)

        Returns:
            The first successful result

        Raises:
            Exception: The last error once attempts are exhausted
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.initial_delay_seconds,
                max=self.max_delay_seconds,
            ),
            reraise=True,
            before_sleep=_log_before_sleep(operation, log_context),
        )
        return await retrying(func, *args)


def _log_before_sleep(
    operation: str, log_context: dict
) -> Callable[[RetryCallState], None]:
    def log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retrying after failure",
            operation=operation,
            attempt=retry_state.attempt_number,
            next_wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
            error=str(error),
            **log_context,
        )

    return log_retry
