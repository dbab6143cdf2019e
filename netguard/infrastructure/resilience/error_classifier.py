"""Failure classification for outbound requests.

Three independent, side-effect-free decisions over a failure:
whether it is worth retrying, whether it indicates unreachable
infrastructure (offline mode), and what message to show a user.
Each accepts either a FailureInfo or the raw raised error.
"""

from typing import Any, Tuple

from netguard.domain.models.network import FailureInfo

# Message fragments that point at the server or the link rather than the request
OFFLINE_INDICATORS: Tuple[str, ...] = (
    "internal server error",
    "server is temporarily unavailable",
    "500",
    "econnrefused",
    "network request failed",
    "timeout",
)

# 4xx codes that are still worth retrying: request timeout, rate limit
RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})
SERVER_UNAVAILABLE_STATUSES = frozenset({500, 502, 503, 504})

MSG_SESSION_EXPIRED = "Please log in again to continue"
MSG_FORBIDDEN = "You don't have permission to access this"
MSG_NOT_FOUND = "The requested resource was not found"
MSG_SERVER_UNAVAILABLE = "Server is temporarily unavailable. Please try again later."
MSG_CHECK_CONNECTION = "Please check your internet connection and try again"
MSG_UNKNOWN = "Unknown error"


def _as_failure(failure: Any) -> FailureInfo:
    return FailureInfo.from_error(failure)


def _is_server_error(status_code) -> bool:
    return status_code is not None and 500 <= status_code < 600


def is_recoverable_error(failure: Any) -> bool:
    """Checks whether a failure is worth retrying.

    Client errors (4xx) are final except 408 and 429. Server errors and
    failures with no status code at all (network-level) are retried.
    """
    status = _as_failure(failure).status_code
    if status is None:
        return True
    if 400 <= status < 500:
        return status in RETRYABLE_CLIENT_STATUSES
    return status >= 500


def should_use_offline_mode(failure: Any) -> bool:
    """Checks whether a failure should be answered with fallback data.

    True for any 5xx status; otherwise true when the message contains one of
    OFFLINE_INDICATORS (case-insensitive).
    """
    info = _as_failure(failure)
    if _is_server_error(info.status_code):
        return True
    message = (info.message or "").lower()
    return any(indicator in message for indicator in OFFLINE_INDICATORS)


def format_error_for_user(failure: Any) -> str:
    """Renders a failure as a message fit for display to an end user."""
    info = _as_failure(failure)
    status = info.status_code

    if status == 401:
        return MSG_SESSION_EXPIRED
    if status == 403:
        return MSG_FORBIDDEN
    if status == 404:
        return MSG_NOT_FOUND
    if status in SERVER_UNAVAILABLE_STATUSES:
        return MSG_SERVER_UNAVAILABLE

    message = info.message or MSG_UNKNOWN
    if "network" in message.lower():
        return MSG_CHECK_CONNECTION
    return message
