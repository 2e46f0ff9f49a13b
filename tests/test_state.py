from datetime import datetime

from qbit_port_sync.state import SyncState, isoformat


class TestSyncState:
    def test_initial_state(self):
        state = SyncState(now=1000.0)
        snapshot = state.snapshot()

        assert snapshot.current_port is None
        assert snapshot.last_check == 1000.0
        assert snapshot.update_count == 0
        assert snapshot.started_at == 1000.0

    def test_begin_cycle_counts_and_timestamps(self):
        state = SyncState(now=1000.0)

        assert state.begin_cycle(now=1010.0) == 1
        assert state.begin_cycle(now=1020.0) == 2

        snapshot = state.snapshot()
        assert snapshot.update_count == 2
        assert snapshot.last_check == 1020.0
        assert snapshot.started_at == 1000.0

    def test_record_port(self):
        state = SyncState()
        state.record_port(55000)
        assert state.snapshot().current_port == 55000

    def test_snapshot_is_detached(self):
        state = SyncState()
        before = state.snapshot()
        state.record_port(55000)
        assert before.current_port is None


class TestNextUpdateIn:
    def test_counts_down_within_interval(self):
        snapshot = SyncState(now=1000.0).snapshot()

        values = [snapshot.next_update_in(300, now=1000.0 + elapsed) for elapsed in (0, 1, 59.6, 150, 299.4)]

        assert values == [300, 299, 240, 150, 1]
        assert values == sorted(values, reverse=True)

    def test_floored_at_zero(self):
        snapshot = SyncState(now=1000.0).snapshot()
        assert snapshot.next_update_in(300, now=2000.0) == 0

    def test_resets_after_cycle(self):
        state = SyncState(now=1000.0)
        assert state.snapshot().next_update_in(300, now=1200.0) == 100

        state.begin_cycle(now=1200.0)
        assert state.snapshot().next_update_in(300, now=1200.0) == 300


def test_isoformat():
    formatted = isoformat(0.25)
    assert formatted == "1970-01-01T00:00:00.250Z"
    assert datetime.fromisoformat(formatted.replace("Z", "+00:00")).timestamp() == 0.25
