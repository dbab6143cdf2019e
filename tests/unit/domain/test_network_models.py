import dataclasses

import pytest
import httpx

from netguard.domain.models.network import FailureInfo, NetworkStatus, RetryOutcome, RetryPolicy

def test_failure_info_from_httpx_status_error():
    request = httpx.Request("GET", "https://api.example.com/posts")
    response = httpx.Response(503, request=request)
    error = httpx.HTTPStatusError("Server error '503 Service Unavailable'", request=request, response=response)

    info = FailureInfo.from_error(error)

    assert info.status_code == 503
    assert "503" in info.message

def test_failure_info_from_transport_error_has_no_status():
    error = httpx.ConnectError("[Errno 111] Connection refused")

    info = FailureInfo.from_error(error)

    assert info.status_code is None
    assert info.message == "[Errno 111] Connection refused"

def test_failure_info_from_direct_status_attribute():
    class StatusError(Exception):
        status_code = 429

    assert FailureInfo.from_error(StatusError("rate limited")) == FailureInfo(message="rate limited", status_code=429)

def test_failure_info_from_mapping():
    assert FailureInfo.from_error({"statusCode": 404, "message": "missing"}) == FailureInfo("missing", 404)
    assert FailureInfo.from_error({"response": {"status": 500}}) == FailureInfo(None, 500)

def test_failure_info_ignores_unusable_shapes():
    assert FailureInfo.from_error(object()) == FailureInfo()
    assert FailureInfo.from_error(None) == FailureInfo()
    assert FailureInfo.from_error({"status": "n/a", "message": 12}) == FailureInfo()

def test_zero_status_counts_as_absent():
    assert FailureInfo.from_error({"status": 0}).status_code is None

def test_failure_info_passthrough():
    info = FailureInfo(message="x", status_code=500)
    assert FailureInfo.from_error(info) is info

def test_retry_policy_defaults_and_validation():
    assert RetryPolicy().max_retries == 3
    with pytest.raises(ValueError):
        RetryPolicy(max_retries=-1)

def test_network_status_is_immutable():
    status = NetworkStatus(is_connected=True, is_server_reachable=True, last_checked=None)
    with pytest.raises(dataclasses.FrozenInstanceError):
        status.is_connected = False

def test_retry_outcome_error_defaults_to_none():
    assert RetryOutcome(data=1, is_offline=False).error is None
