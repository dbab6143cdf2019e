"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the
work to the resilience and network components: health probes, the
status tracker, and retried backend requests with offline fallback.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from netguard.domain.interfaces.user_interface import UserInterface
from netguard.domain.models.network import RetryPolicy
from netguard.infrastructure.http.api_client import ApiClient
from netguard.infrastructure.network.health_prober import HealthProber
from netguard.infrastructure.network.status_tracker import NetworkStatusTracker
from netguard.infrastructure.resilience.error_classifier import format_error_for_user
from netguard.infrastructure.resilience.request_executor import RequestExecutor

logger = logging.getLogger(__name__)

class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        ui: UserInterface,
        tracker: NetworkStatusTracker,
        prober: HealthProber,
        executor: RequestExecutor,
        api_client_factory: Callable[[], ApiClient],
        default_base_url: str,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """Initializes the CommandHandler with required services."""
        self.ui = ui
        self.tracker = tracker
        self.prober = prober
        self.executor = executor
        self.api_client_factory = api_client_factory
        self.default_base_url = default_base_url
        self._sleep = sleep

    async def handle_probe(self, base_url: Optional[str] = None) -> bool:
        """Handles the 'probe' command: one health check, then the resulting status."""
        target = base_url or self.default_base_url
        logger.info(f"Handling 'probe' command for {target}")
        healthy = await self.prober.check_server_health(target)
        if healthy:
            self.ui.display_info(f"Server at {target} is healthy.")
        else:
            self.ui.display_error(f"Server at {target} is unreachable or unhealthy.")
        self.ui.display_status(self.tracker.get_status())
        return healthy

    async def handle_watch(self, base_url: Optional[str], interval_s: float, count: int) -> int:
        """Handles the 'watch' command: repeated probes. Returns the number of healthy probes."""
        target = base_url or self.default_base_url
        logger.info(f"Handling 'watch' command for {target}: {count} probe(s) every {interval_s}s")
        healthy_count = 0
        for probe_number in range(count):
            if await self.prober.check_server_health(target):
                healthy_count += 1
            status = self.tracker.get_status()
            state = "healthy" if status.is_server_reachable else "unhealthy"
            self.ui.display_info(
                f"[{probe_number + 1}/{count}] {target}: {state} at {status.last_checked.isoformat(timespec='seconds')}"
            )
            if probe_number < count - 1:
                await self._sleep(interval_s)
        return healthy_count

    def handle_backoff(self, attempts: int) -> None:
        """Handles the 'backoff' command: prints the wait before each retry."""
        if attempts < 0:
            self.ui.display_error("Number of attempts must be >= 0.")
            return
        self.ui.display_backoff_schedule(self.executor.scheduler.schedule(attempts))

    async def handle_fetch(self, path: str, fallback: Any = None, max_retries: Optional[int] = None) -> None:
        """Handles the 'fetch' command: GET a backend path with retries and offline fallback."""
        policy = RetryPolicy(max_retries=max_retries) if max_retries is not None else RetryPolicy()
        logger.info(f"Handling 'fetch' command for {path} (max_retries={policy.max_retries})")
        try:
            async with self.api_client_factory() as api_client:
                outcome = await self.executor.execute_with_retry(
                    lambda: api_client.get_json(path),
                    fallback,
                    policy,
                    operation_name=f"GET {path}",
                )
        except Exception as e:
            logger.error(f"Fetch command failed: {e}", exc_info=True)
            self.ui.display_error(f"Request failed: {format_error_for_user(e)}")
            return
        self.ui.display_outcome(outcome)
