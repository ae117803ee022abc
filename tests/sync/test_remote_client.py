from __future__ import annotations

import pytest
import requests

from hrm_system.core.exceptions import PersistenceError
from hrm_system.sync.client import RemoteStoreClient


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.requests: list[tuple] = []

    def request(self, method, url, json=None, timeout=None):
        self.requests.append((method, url, json, timeout))
        if self.error:
            raise self.error
        return self.response


def test_fetch_reads_data_field():
    session = FakeSession(FakeResponse({"data": {"employees": []}}))
    client = RemoteStoreClient("http://store/hrm/", timeout=3, session=session)

    assert client.fetch() == {"employees": []}
    assert session.requests == [("GET", "http://store/hrm/data", None, 3)]
    assert session.headers["Content-Type"] == "application/json"


def test_save_posts_whole_document():
    session = FakeSession(FakeResponse({"success": True}))
    client = RemoteStoreClient("http://store/hrm", session=session)

    client.save({"employees": [1]})
    assert session.requests[0][:3] == ("POST", "http://store/hrm/data", {"data": {"employees": [1]}})


def test_init_reports_whether_it_initialized():
    client = RemoteStoreClient(
        "http://store/hrm", session=FakeSession(FakeResponse({"success": True, "initialized": False}))
    )
    assert client.init({"employees": []}) is False


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("refused")),
        FakeSession(FakeResponse({"error": "boom"}, status=500)),
        FakeSession(FakeResponse(None)),
    ],
)
def test_transport_failures_become_persistence_errors(session):
    client = RemoteStoreClient("http://store/hrm", session=session)
    with pytest.raises(PersistenceError):
        client.fetch()


def test_unsuccessful_save_raises():
    client = RemoteStoreClient("http://store/hrm", session=FakeSession(FakeResponse({"success": False})))
    with pytest.raises(PersistenceError):
        client.save({})
