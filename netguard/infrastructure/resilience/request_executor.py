"""Service for executing requests with automatic retries and offline fallback.

Retries recoverable failures (408, 429, 5xx, or no status at all) with
exponential backoff. Once the budget is spent, or a non-recoverable
failure stops the loop early, the last failure either becomes a
fallback outcome (when it looks like the server or network is down)
or is re-raised to the caller unchanged.
"""

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from netguard.domain.events.network_events import (
    AttemptFailed, DomainEvent, EventListener, FailurePropagated, OfflineFallbackTriggered,
    RequestAborted, RequestSucceeded, RetryScheduled,
)
from netguard.domain.models.network import FailureInfo, RetryOutcome, RetryPolicy
from netguard.infrastructure.resilience import error_classifier
from netguard.infrastructure.resilience.backoff import BackoffScheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[], Union[T, Awaitable[T]]]
SleepFunc = Callable[[float], Awaitable[Any]]


class RequestExecutor:
    """Runs an opaque operation under the retry/fallback state machine.

    Holds no per-call state; concurrent calls each own their attempt
    counter and backoff timer.
    """

    def __init__(
        self,
        scheduler: Optional[BackoffScheduler] = None,
        sleep: SleepFunc = asyncio.sleep,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the RequestExecutor.

        Args:
            scheduler: Backoff schedule between attempts (default 1s doubling, 10s cap).
            sleep: Awaitable sleep taking seconds; replaceable for tests.
            event_listener: Optional callable receiving every domain event.
        """
        self.scheduler = scheduler or BackoffScheduler()
        self._sleep = sleep
        self._event_listener = event_listener

    def _dispatch_event(self, event: DomainEvent) -> None:
        logger.debug(f"EVENT: {event}")
        if self._event_listener is None:
            return
        try:
            self._event_listener(event)
        except Exception:
            # A broken listener must not replace the caller's result or failure.
            logger.exception(f"Event listener failed on {type(event).__name__}")

    async def execute_with_retry(
        self,
        operation: Operation,
        fallback_value: T,
        policy: Union[RetryPolicy, int, None] = None,
        operation_name: Optional[str] = None,
    ) -> RetryOutcome[T]:
        """Executes an operation with retries, falling back when offline.

        Args:
            operation: Zero-argument callable returning a value or an awaitable.
            fallback_value: Returned verbatim when the offline path is taken.
            policy: RetryPolicy, a bare max_retries int, or None for the default (3).
            operation_name: Label used in logs and events.

        Returns:
            RetryOutcome with `is_offline=False` on success, or the fallback
            value with `is_offline=True` and a user-facing error message.

        Raises:
            Exception: The last failure, unmodified, when it is neither
                retryable to success nor offline-indicating.
        """
        if policy is None:
            policy = RetryPolicy()
        elif isinstance(policy, int):
            policy = RetryPolicy(max_retries=policy)
        name = operation_name or getattr(operation, "__name__", "operation")
        total_attempts = policy.max_retries + 1

        last_error: Optional[Exception] = None
        attempts = 0

        for attempt in range(total_attempts):
            attempts = attempt + 1
            try:
                start_time = time.perf_counter()
                result = operation()
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                last_error = e
                info = FailureInfo.from_error(e)
                recoverable = error_classifier.is_recoverable_error(info)
                logger.warning(
                    f"Attempt {attempts}/{total_attempts} of {name} failed: "
                    f"{type(e).__name__} (status={info.status_code}): {info.message}"
                )
                self._dispatch_event(AttemptFailed(
                    operation=name, attempt_number=attempts, recoverable=recoverable,
                    error_type=type(e).__name__, error_message=info.message, status_code=info.status_code,
                ))

                if not recoverable:
                    logger.error(f"Non-recoverable error calling {name} (status={info.status_code}); not retrying.")
                    self._dispatch_event(RequestAborted(operation=name, attempts=attempts, status_code=info.status_code))
                    break

                if attempt == policy.max_retries:
                    logger.error(f"Max retries ({policy.max_retries}) reached for {name}. Last error: {e}")
                    break

                delay_ms = self.scheduler.delay_for(attempt)
                logger.info(f"Retrying {name} in {delay_ms}ms...")
                self._dispatch_event(RetryScheduled(operation=name, attempt_number=attempts, delay_ms=delay_ms))
                await self._sleep(delay_ms / 1000)
            else:
                latency_ms = (time.perf_counter() - start_time) * 1000
                self._dispatch_event(RequestSucceeded(operation=name, attempts=attempts, latency_ms=latency_ms))
                return RetryOutcome(data=result, is_offline=False)

        # --- Loop ended without success: exhausted or aborted ---
        if error_classifier.should_use_offline_mode(last_error):
            user_message = error_classifier.format_error_for_user(last_error)
            logger.warning(f"Using offline fallback for {name} after {attempts} attempt(s): {user_message}")
            self._dispatch_event(OfflineFallbackTriggered(operation=name, attempts=attempts, user_message=user_message))
            return RetryOutcome(data=fallback_value, is_offline=True, error=user_message)

        logger.error(f"Propagating failure from {name} after {attempts} attempt(s): {last_error}")
        self._dispatch_event(FailurePropagated(
            operation=name, attempts=attempts,
            error_type=type(last_error).__name__, error_message=str(last_error),
        ))
        raise last_error


async def execute_with_retry(
    operation: Operation,
    fallback_value: T,
    max_retries: int = 3,
) -> RetryOutcome[T]:
    """Convenience wrapper running `operation` through a default RequestExecutor."""
    return await RequestExecutor().execute_with_retry(operation, fallback_value, RetryPolicy(max_retries=max_retries))
