import os
import pytest
from datetime import datetime, timedelta, timezone
from typing import List

from netguard.infrastructure.config import settings
from netguard.infrastructure.network.status_tracker import NetworkStatusTracker
from netguard.infrastructure.resilience.request_executor import RequestExecutor

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class RecordingSleep:
    """Stands in for asyncio.sleep; records requested waits without waiting."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def calls_ms(self) -> List[int]:
        return [round(seconds * 1000) for seconds in self.calls]


class FakeClock:
    """Manually advanced clock for the status tracker."""

    def __init__(self, start: datetime = EPOCH):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()

@pytest.fixture
def events() -> list:
    return []

@pytest.fixture
def executor(recording_sleep, events) -> RequestExecutor:
    """RequestExecutor with default backoff, no real sleeping, events collected."""
    return RequestExecutor(sleep=recording_sleep, event_listener=events.append)

@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def tracker(fake_clock) -> NetworkStatusTracker:
    return NetworkStatusTracker(clock=fake_clock)

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep NETGUARD_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith(settings.ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    yield
    settings.clear_test_config()
