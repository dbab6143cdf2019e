import threading
from datetime import timedelta

from netguard.domain.models.network import NetworkStatus
from netguard.infrastructure.network.status_tracker import NetworkStatusTracker

def test_initial_status(tracker, fake_clock):
    status = tracker.get_status()
    assert status == NetworkStatus(is_connected=True, is_server_reachable=True, last_checked=fake_clock.now)

def test_record_health_check_updates_reachability_and_time(tracker, fake_clock):
    fake_clock.advance(30)

    tracker.record_health_check(False)

    status = tracker.get_status()
    assert status.is_server_reachable is False
    assert status.last_checked == fake_clock.now
    assert status.is_connected is True

def test_snapshot_is_not_a_live_reference(tracker, fake_clock):
    before = tracker.get_status()
    fake_clock.advance(5)

    tracker.record_health_check(False)

    assert before.is_server_reachable is True
    assert tracker.get_status() is not before

def test_last_checked_never_goes_backwards(tracker, fake_clock):
    fake_clock.advance(60)
    tracker.record_health_check(True)
    latest = tracker.get_status().last_checked

    fake_clock.now = fake_clock.now - timedelta(minutes=10)
    tracker.record_health_check(False)

    status = tracker.get_status()
    assert status.last_checked == latest
    assert status.is_server_reachable is False

def test_set_connected_leaves_probe_fields_alone(tracker):
    before = tracker.get_status()

    tracker.set_connected(False)

    status = tracker.get_status()
    assert status.is_connected is False
    assert status.is_server_reachable == before.is_server_reachable
    assert status.last_checked == before.last_checked

def test_independent_trackers_do_not_share_state(fake_clock):
    first = NetworkStatusTracker(clock=fake_clock)
    second = NetworkStatusTracker(clock=fake_clock)

    first.record_health_check(False)

    assert second.get_status().is_server_reachable is True

def test_concurrent_writers_keep_records_whole(tracker):
    seen = []

    def writer(reachable):
        for _ in range(200):
            tracker.record_health_check(reachable)
            tracker.set_connected(reachable)

    def reader():
        for _ in range(400):
            seen.append(tracker.get_status())

    threads = [threading.Thread(target=writer, args=(flag,)) for flag in (True, False)]
    threads.append(threading.Thread(target=reader))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert all(isinstance(status, NetworkStatus) for status in seen)
    assert all(status.last_checked is not None for status in seen)
