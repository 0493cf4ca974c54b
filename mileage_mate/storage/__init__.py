"""
Storage Package

Provides the abstract persistence interface and its implementations.
The JSON file backend is the default; in-memory storage is for tests.
"""

from mileage_mate.storage.interface import (
    StorageBackend,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from mileage_mate.storage.file_backend import JsonFileStorage
from mileage_mate.storage.memory_backend import InMemoryStorage

__all__ = [
    # Interface
    "StorageBackend",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
