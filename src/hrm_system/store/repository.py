from __future__ import annotations

from typing import Optional, Protocol


class KeyValueRepository(Protocol):
    """Raw string storage behind the store API.

    Note (DIP): the store service depends on this interface, not on a concrete DB.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError
