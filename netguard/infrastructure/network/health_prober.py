"""Bounded-time liveness probe against a backend server.

Issues `GET <base_url>/health` and races it against a fixed timeout.
Every outcome, including timeouts and transport errors, resolves to a
boolean and is recorded on the NetworkStatusTracker.
"""

import asyncio
import logging
import time
from typing import Optional

import httpx

from netguard.infrastructure.network.status_tracker import NetworkStatusTracker
from netguard.domain.events.network_events import EventListener, HealthCheckCompleted

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_TIMEOUT_S = 5.0
DEFAULT_HEALTH_PATH = "/health"


def build_health_url(base_url: str, path: str = DEFAULT_HEALTH_PATH) -> str:
    """Joins a base URL and the health path with exactly one slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class HealthProber:
    """Performs single liveness checks and writes the result to a tracker."""

    def __init__(
        self,
        tracker: NetworkStatusTracker,
        client: Optional[httpx.AsyncClient] = None,
        timeout_s: float = DEFAULT_HEALTH_TIMEOUT_S,
        health_path: str = DEFAULT_HEALTH_PATH,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the HealthProber.

        Args:
            tracker: Status record updated after every probe.
            client: Optional shared httpx client; a short-lived one is created per probe otherwise.
            timeout_s: Deadline for the whole probe, in seconds.
            health_path: Path appended to the base URL.
            event_listener: Optional callable receiving HealthCheckCompleted events.
        """
        self.tracker = tracker
        self._client = client
        self.timeout_s = timeout_s
        self.health_path = health_path
        self._event_listener = event_listener

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url)
        async with httpx.AsyncClient() as client:
            return await client.get(url)

    async def check_server_health(self, base_url: str) -> bool:
        """Probes `base_url` once. Never raises.

        Returns:
            True only if the server answered with a 2xx status before the timeout.
        """
        url = build_health_url(base_url, self.health_path)
        healthy = False
        status_code: Optional[int] = None
        reason: Optional[str] = None
        start_time = time.perf_counter()

        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout_s)
            status_code = response.status_code
            healthy = response.is_success
            if not healthy:
                reason = f"HTTP {status_code}"
        except asyncio.TimeoutError:
            reason = "timeout"
            logger.warning(f"Server health check timed out after {self.timeout_s}s: {url}")
        except httpx.HTTPError as e:
            reason = type(e).__name__
            logger.warning(f"Server health check failed for {url}: {e}")
        except Exception as e:
            reason = type(e).__name__
            logger.warning(f"Unexpected error during health check of {url}: {e}", exc_info=True)

        latency_ms = (time.perf_counter() - start_time) * 1000
        self.tracker.record_health_check(healthy)
        logger.info(f"Server health check: {'Healthy' if healthy else 'Unhealthy'} ({url}, {latency_ms:.0f}ms)")

        event = HealthCheckCompleted(
            url=url, healthy=healthy, latency_ms=latency_ms, status_code=status_code, reason=reason
        )
        self._dispatch_event(event)
        return healthy

    def _dispatch_event(self, event: HealthCheckCompleted) -> None:
        logger.debug(f"EVENT: {event}")
        if self._event_listener is None:
            return
        try:
            self._event_listener(event)
        except Exception:
            logger.exception(f"Event listener failed on {type(event).__name__}")
