import pytest
import httpx

from netguard.domain.models.network import FailureInfo
from netguard.infrastructure.resilience.error_classifier import (
    is_recoverable_error, should_use_offline_mode, format_error_for_user,
    MSG_SESSION_EXPIRED, MSG_FORBIDDEN, MSG_NOT_FOUND, MSG_SERVER_UNAVAILABLE,
    MSG_CHECK_CONNECTION, MSG_UNKNOWN,
)

def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example.com/items")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"HTTP {status_code}", request=request, response=response)

# --- is_recoverable_error ---

@pytest.mark.parametrize("status, expected", [
    (400, False),
    (401, False),
    (404, False),
    (408, True),
    (429, True),
    (499, False),
    (500, True),
    (503, True),
    (599, True),
])
def test_is_recoverable_error_by_status(status, expected):
    assert is_recoverable_error(FailureInfo(status_code=status)) is expected

def test_missing_status_is_recoverable():
    assert is_recoverable_error(FailureInfo()) is True
    assert is_recoverable_error(ConnectionError("connection reset")) is True

def test_redirect_status_is_not_recoverable():
    assert is_recoverable_error(FailureInfo(status_code=302)) is False

def test_recoverable_reads_httpx_status_error():
    assert is_recoverable_error(_status_error(404)) is False
    assert is_recoverable_error(_status_error(502)) is True

# --- should_use_offline_mode ---

def test_server_status_triggers_offline_mode():
    assert should_use_offline_mode(FailureInfo(status_code=503)) is True

def test_client_error_does_not_trigger_offline_mode():
    assert should_use_offline_mode(FailureInfo(message="not found", status_code=404)) is False

@pytest.mark.parametrize("message", [
    "Network request failed",
    "NETWORK REQUEST FAILED",
    "Internal Server Error",
    "Server is temporarily unavailable",
    "Request failed with status code 500",
    "connect ECONNREFUSED 127.0.0.1:8000",
    "Request Timeout",
])
def test_offline_indicators_in_message(message):
    assert should_use_offline_mode(FailureInfo(message=message)) is True

def test_offline_indicator_overrides_client_status():
    assert should_use_offline_mode(FailureInfo(message="gateway timeout upstream", status_code=404)) is True

def test_unrelated_message_without_status_is_not_offline():
    assert should_use_offline_mode(FailureInfo(message="invalid payload")) is False
    assert should_use_offline_mode(FailureInfo()) is False

def test_offline_mode_reads_raw_exception_message():
    assert should_use_offline_mode(TimeoutError("read timeout")) is True

# --- format_error_for_user ---

@pytest.mark.parametrize("status, expected", [
    (401, MSG_SESSION_EXPIRED),
    (403, MSG_FORBIDDEN),
    (404, MSG_NOT_FOUND),
    (500, MSG_SERVER_UNAVAILABLE),
    (502, MSG_SERVER_UNAVAILABLE),
    (503, MSG_SERVER_UNAVAILABLE),
    (504, MSG_SERVER_UNAVAILABLE),
])
def test_format_error_by_status(status, expected):
    assert format_error_for_user(FailureInfo(message="raw", status_code=status)) == expected

def test_format_error_network_message():
    assert format_error_for_user(FailureInfo(message="Network Error")) == MSG_CHECK_CONNECTION

def test_format_error_other_status_returns_raw_message():
    assert format_error_for_user(FailureInfo(message="Too many requests", status_code=429)) == "Too many requests"
    assert format_error_for_user(FailureInfo(message="Gateway loop", status_code=508)) == "Gateway loop"

def test_format_error_without_message():
    assert format_error_for_user(FailureInfo()) == MSG_UNKNOWN
    assert format_error_for_user(RuntimeError()) == MSG_UNKNOWN
