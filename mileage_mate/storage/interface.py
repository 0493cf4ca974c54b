"""
Abstract Storage Interface

DESIGN DECISION: The ledger store never touches files directly.
It talks to a backend that holds one opaque blob under a fixed key.
This allows us to:
1. Keep the JSON file on disk for normal use
2. Use in-memory storage for testing
3. Swap in another key-value slot later without changing the store

The interface is intentionally tiny: the ledger is always read
and written as a whole.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """
    Abstract interface for the ledger's persistence slot.

    Any backend (file, in-memory, keychain...) must implement these methods.
    """

    @property
    @abstractmethod
    def key(self) -> str:
        """The fixed key this backend reads and writes."""
        pass

    @abstractmethod
    def read(self) -> Optional[bytes]:
        """
        Read the stored blob.

        Returns:
            The stored bytes, or None if nothing has been stored yet

        Raises:
            StorageReadError: If the slot exists but cannot be read
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> bool:
        """
        Replace the stored blob.

        Args:
            data: The full serialized ledger

        Returns:
            True if written successfully, False if the backend declined
            the write without an error

        Raises:
            StorageWriteError: If the slot could not be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """The stored ledger exists but could not be read."""
    pass


class StorageWriteError(StorageError):
    """The ledger could not be written."""
    pass
