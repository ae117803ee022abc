from __future__ import annotations

import threading
from dataclasses import replace

from hrm_system.core.exceptions import PersistenceError
from hrm_system.state.codec import to_document
from hrm_system.state.seed import initial_state
from hrm_system.sync.local_cache import LocalCache
from hrm_system.sync.manager import SyncManager, SyncOutcome
from hrm_system.sync.storage import HRMStorage


class FakeStoreClient:
    def __init__(self, document=None):
        self.document = document
        self.fail = False
        self.saved: list[dict] = []
        self.on_fetch = None

    def fetch(self):
        if self.on_fetch:
            self.on_fetch()
        if self.fail:
            raise PersistenceError("connection refused")
        return self.document

    def save(self, document):
        if self.fail:
            raise PersistenceError("connection refused")
        self.saved.append(document)
        self.document = document

    def init(self, document):
        if self.document:
            return False
        self.document = document
        return True

    def reset(self, document):
        self.document = document


def _seed():
    return initial_state(hasher=lambda p: f"plain${p}")


def _manager(tmp_path, document=None):
    client = FakeStoreClient(document)
    storage = HRMStorage(client, LocalCache(tmp_path / "cache.json"), seed=_seed)
    return SyncManager(storage, interval=0.01), client


def test_pull_returns_state_only_when_document_changed(tmp_path):
    state = _seed()
    manager, client = _manager(tmp_path, to_document(state))

    assert manager.pull() == state
    assert manager.pull() is None

    changed = replace(state, current_user="emp3")
    client.document = to_document(changed)
    assert manager.pull() == changed


def test_pull_of_empty_store_is_none(tmp_path):
    manager, _ = _manager(tmp_path)
    assert manager.pull() is None


def test_push_marks_document_as_seen(tmp_path):
    manager, client = _manager(tmp_path)
    state = _seed()

    assert manager.push(state) is True
    assert client.saved == [to_document(state)]
    # Our own write does not come back as a remote update.
    assert manager.pull() is None


def test_push_failure_is_reported_not_raised(tmp_path):
    manager, client = _manager(tmp_path)
    client.fail = True

    assert manager.push(_seed()) is False
    # Local cache still holds the state.
    assert LocalCache(tmp_path / "cache.json").load() == to_document(_seed())


def test_poll_once_outcomes(tmp_path):
    state = _seed()
    manager, client = _manager(tmp_path, to_document(state))
    received = []

    assert manager.poll_once(received.append) == SyncOutcome.UPDATED
    assert manager.poll_once(received.append) == SyncOutcome.UNCHANGED
    client.fail = True
    assert manager.poll_once(received.append) == SyncOutcome.FAILED
    assert received == [state]


def test_response_after_stop_is_ignored(tmp_path):
    manager, client = _manager(tmp_path, to_document(_seed()))
    received = []
    manager.start(received.append, interval=3600)
    assert manager.is_running()

    # Stop lands while the request is in flight.
    client.on_fetch = manager.stop
    assert manager.poll_once(received.append) == SyncOutcome.IGNORED
    assert received == []
    assert not manager.is_running()


def test_background_poll_delivers_updates_until_stopped(tmp_path):
    manager, client = _manager(tmp_path, to_document(_seed()))
    delivered = threading.Event()

    manager.start(lambda state: delivered.set())
    try:
        assert delivered.wait(timeout=5)
    finally:
        manager.stop()
    assert not manager.is_running()


def test_start_twice_keeps_single_poller(tmp_path):
    manager, _ = _manager(tmp_path)
    manager.start(lambda s: None, interval=3600)
    first = manager._thread
    manager.start(lambda s: None, interval=3600)
    assert manager._thread is first
    manager.stop()


def test_push_overtaken_by_poll_converges_on_next_poll(tmp_path):
    seed = _seed()
    manager, client = _manager(tmp_path, to_document(seed))
    manager.mark_seen(seed)
    local = {"state": seed}
    manager.track(lambda: local["state"])

    # Local edit is applied, its push still queued.
    local_edit = replace(seed, current_user="emp3")
    local["state"] = local_edit
    # Another client writes first and our poll picks it up.
    other = replace(seed, current_user="emp4")
    client.document = to_document(other)
    assert manager.poll_once(lambda s: local.update(state=s)) == SyncOutcome.UPDATED
    assert local["state"] == other

    # The queued push lands after the poll.
    assert manager.push(local_edit) is True
    assert client.document == to_document(local_edit)

    assert manager.poll_once(lambda s: local.update(state=s)) == SyncOutcome.UPDATED
    assert local["state"] == local_edit
    assert manager.poll_once(lambda s: local.update(state=s)) == SyncOutcome.UNCHANGED


def test_push_of_live_state_is_not_echoed_back(tmp_path):
    manager, client = _manager(tmp_path)
    state = _seed()
    manager.track(lambda: state)

    assert manager.push(state) is True
    assert manager.poll_once(lambda s: None) == SyncOutcome.UNCHANGED
