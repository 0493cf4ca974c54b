"""In-memory storage, used by tests and throwaway sessions."""

from typing import Optional

from mileage_mate.config import DEFAULT_STORAGE_KEY
from mileage_mate.storage.interface import StorageBackend


class InMemoryStorage(StorageBackend):
    """
    Key-value slots kept in a dict.

    Several instances may share one ``slots`` dict to simulate
    reopening the same storage.
    """

    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        slots: Optional[dict[str, bytes]] = None,
    ):
        self._key = key
        self.slots = slots if slots is not None else {}

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> Optional[bytes]:
        return self.slots.get(self._key)

    def write(self, data: bytes) -> bool:
        self.slots[self._key] = bytes(data)
        return True
