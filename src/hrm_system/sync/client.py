from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_STORE_TIMEOUT_SECONDS
from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class RemoteStoreClient:
    """HTTP client for the store API.

    Every body carries the whole serialized aggregate; there are no partial
    updates. Transport and protocol failures surface as PersistenceError.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> dict:
        url = f"{self._base_url}{path}"
        try:
            resp = self._session.request(method, url, json=payload, timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            raise PersistenceError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise PersistenceError(f"{method} {url} returned invalid JSON") from e

    def fetch(self) -> Optional[Any]:
        return self._request("GET", "/data").get("data")

    def save(self, document: dict) -> None:
        result = self._request("POST", "/data", {"data": document})
        if not result.get("success"):
            raise PersistenceError("Backend save failed")

    def init(self, document: dict) -> bool:
        result = self._request("POST", "/init", {"data": document})
        logger.info("Backend initialization result: %s", result.get("message"))
        return bool(result.get("initialized"))

    def reset(self, document: dict) -> None:
        result = self._request("POST", "/reset", {"data": document})
        if not result.get("success"):
            raise PersistenceError("Backend reset failed")
