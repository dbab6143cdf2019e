"""Exponential backoff schedule for retry attempts.

Deterministic doubling from a base delay up to a cap: with the defaults
the waits are 1s, 2s, 4s, 8s, then 10s for every later attempt.
No jitter is applied.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)

DEFAULT_BASE_DELAY_MS = 1000
DEFAULT_MAX_DELAY_MS = 10000

class BackoffScheduler:
    """Computes the wait before a given retry attempt."""

    def __init__(
        self,
        base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
        max_delay_ms: int = DEFAULT_MAX_DELAY_MS,
    ):
        """Initializes the scheduler.

        Args:
            base_delay_ms: Wait before the first retry (attempt index 0).
            max_delay_ms: Upper bound for any single wait.
        """
        if base_delay_ms < 0 or max_delay_ms < 0:
            raise ValueError("Backoff delays must be non-negative")
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        logger.debug(f"BackoffScheduler initialized: base={base_delay_ms}ms, cap={max_delay_ms}ms")

    def delay_for(self, attempt_index: int) -> int:
        """Returns the wait in milliseconds after the failed attempt `attempt_index`."""
        if attempt_index < 0:
            raise ValueError(f"attempt_index must be >= 0, got {attempt_index}")
        # Stop doubling once past the cap so huge indexes stay cheap
        delay = self.base_delay_ms
        for _ in range(attempt_index):
            if delay == 0 or delay >= self.max_delay_ms:
                break
            delay *= 2
        return min(delay, self.max_delay_ms)

    def schedule(self, max_retries: int) -> List[int]:
        """Returns the full list of waits for a retry budget of `max_retries`."""
        return [self.delay_for(attempt) for attempt in range(max_retries)]


_default_scheduler = BackoffScheduler()

def delay_for(attempt_index: int) -> int:
    """Default schedule: min(1000 * 2**attempt_index, 10000) milliseconds."""
    return _default_scheduler.delay_for(attempt_index)
