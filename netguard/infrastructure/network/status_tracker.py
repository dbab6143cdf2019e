"""Holder of the last-known connectivity state.

The record is an immutable NetworkStatus that is swapped as a whole on
every update, so readers always get a complete snapshot without locking.
Writers are serialized so that `last_checked` never moves backwards.
"""

import dataclasses
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from netguard.domain.models.network import NetworkStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NetworkStatusTracker:
    """Owned, injectable record of connectivity and server reachability.

    Advisory only: the request executor never consults it to decide
    whether to retry or fall back.
    """

    def __init__(self, clock: Clock = _utc_now, initial: Optional[NetworkStatus] = None):
        self._clock = clock
        self._write_lock = threading.Lock()
        self._status = initial or NetworkStatus(
            is_connected=True,
            is_server_reachable=True,
            last_checked=clock(),
        )

    def get_status(self) -> NetworkStatus:
        """Returns the current snapshot."""
        return self._status

    def record_health_check(self, reachable: bool) -> NetworkStatus:
        """Stores the result of a health probe and stamps `last_checked`."""
        with self._write_lock:
            previous = self._status
            checked_at = max(previous.last_checked, self._clock())
            updated = dataclasses.replace(
                previous, is_server_reachable=reachable, last_checked=checked_at
            )
            self._status = updated
        if previous.is_server_reachable != reachable:
            logger.info(f"Server reachability changed: {previous.is_server_reachable} -> {reachable}")
        return updated

    def set_connected(self, is_connected: bool) -> NetworkStatus:
        """Applies a connectivity signal from the host platform."""
        with self._write_lock:
            updated = dataclasses.replace(self._status, is_connected=is_connected)
            self._status = updated
        logger.debug(f"Connectivity signal applied: is_connected={is_connected}")
        return updated
