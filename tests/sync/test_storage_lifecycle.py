from __future__ import annotations

from dataclasses import replace

from hrm_system.core.exceptions import PersistenceError
from hrm_system.state.codec import to_document
from hrm_system.state.seed import initial_state
from hrm_system.sync.local_cache import LocalCache
from hrm_system.sync.storage import HRMStorage


class FakeStoreClient:
    def __init__(self, document=None, *, fail=False):
        self.document = document
        self.fail = fail
        self.calls: list[str] = []

    def _check(self, name):
        self.calls.append(name)
        if self.fail:
            raise PersistenceError("store down")

    def fetch(self):
        self._check("fetch")
        return self.document

    def save(self, document):
        self._check("save")
        self.document = document

    def init(self, document):
        self._check("init")
        if self.document:
            return False
        self.document = document
        return True

    def reset(self, document):
        self._check("reset")
        self.document = document


def _seed():
    return initial_state(hasher=lambda p: f"plain${p}")


def test_load_uses_remote_and_refreshes_cache(tmp_path):
    state = replace(_seed(), current_user="emp2")
    cache = LocalCache(tmp_path / "cache.json")
    storage = HRMStorage(FakeStoreClient(to_document(state)), cache, seed=_seed)

    assert storage.load_data() == state
    assert cache.load() == to_document(state)


def test_load_initializes_empty_store_with_seed(tmp_path):
    client = FakeStoreClient()
    storage = HRMStorage(client, LocalCache(tmp_path / "cache.json"), seed=_seed)

    assert storage.load_data() == _seed()
    assert client.calls == ["fetch", "init"]
    assert client.document == to_document(_seed())


def test_load_falls_back_to_cache_then_seed(tmp_path):
    cache = LocalCache(tmp_path / "cache.json")
    storage = HRMStorage(FakeStoreClient(fail=True), cache, seed=_seed)
    assert storage.load_data() == _seed()

    cached = replace(_seed(), current_user="emp9")
    cache.store(to_document(cached))
    assert storage.load_data() == cached


def test_save_writes_cache_even_when_remote_fails(tmp_path):
    cache = LocalCache(tmp_path / "cache.json")
    storage = HRMStorage(FakeStoreClient(fail=True), cache, seed=_seed)

    assert storage.save_data(_seed()) is False
    assert cache.load() == to_document(_seed())


def test_reset_replaces_remote_with_seed(tmp_path):
    client = FakeStoreClient(to_document(replace(_seed(), current_user="emp4")))
    storage = HRMStorage(client, LocalCache(tmp_path / "cache.json"), seed=_seed)

    assert storage.reset_data() == _seed()
    assert client.document == to_document(_seed())


def test_corrupt_cache_reads_as_empty(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{not json", encoding="utf-8")
    assert LocalCache(path).load() is None
