"""Value objects shared by the resilience and network contexts.

These describe connectivity state, the read-only view of a failed
request, and the result handed back by the retry executor.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3


@dataclass(frozen=True)
class NetworkStatus:
    """Last-known connectivity and server reachability.

    Frozen so that a snapshot handed to a reader can never change under it.
    """
    is_connected: bool
    is_server_reachable: bool
    last_checked: datetime


@dataclass(frozen=True)
class RetryPolicy:
    """Per-call retry budget. `max_retries` counts retries, not attempts."""
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Result of `RequestExecutor.execute_with_retry`.

    `is_offline` is True only when the caller-supplied fallback was returned.
    """
    data: T
    is_offline: bool
    error: Optional[str] = None


def _coerce_status(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip()) or None
    return None


def _status_from_response(response: Any) -> Optional[int]:
    if response is None:
        return None
    if isinstance(response, Mapping):
        return _coerce_status(response.get("status_code", response.get("status")))
    for attr_name in ("status_code", "status"):
        status = _coerce_status(getattr(response, attr_name, None))
        if status is not None:
            return status
    return None


@dataclass(frozen=True)
class FailureInfo:
    """Read-only view of a failed operation: an optional message and status code.

    A status code of 0 is treated the same as no status code.
    """
    message: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def from_error(cls, error: Any) -> "FailureInfo":
        """Derives a FailureInfo from whatever an operation raised.

        Understands exceptions carrying `status_code`/`status` directly or on a
        nested `response` (httpx exposes `response.status_code`, aiohttp-style
        clients `response.status`), plain mappings, and existing FailureInfo
        values. Anything else yields no status code.

        Args:
            error: The raised exception or failure-like value.

        Returns:
            The derived FailureInfo.
        """
        if isinstance(error, FailureInfo):
            return error
        if error is None:
            return cls()

        if isinstance(error, Mapping):
            message = error.get("message")
            status = None
            for key in ("status_code", "statusCode", "status"):
                status = _coerce_status(error.get(key))
                if status is not None:
                    break
            if status is None:
                status = _status_from_response(error.get("response"))
            return cls(message=message if isinstance(message, str) else None, status_code=status)

        message = getattr(error, "message", None)
        if not isinstance(message, str):
            message = str(error) if isinstance(error, BaseException) else None
        status = None
        for attr_name in ("status_code", "status"):
            status = _coerce_status(getattr(error, attr_name, None))
            if status is not None:
                break
        if status is None:
            status = _status_from_response(getattr(error, "response", None))
        return cls(message=message or None, status_code=status)
