"""
Mileage Mate - Core Package

A personal vehicle-expense tracker: fuel fill-ups, insurance, service,
tolls and challans, with fuel efficiency and running-cost statistics.

DESIGN PRINCIPLES:
1. The ledger store is the only owner of ledger state
2. Statistics are pure functions, recomputed on demand
3. Persistence is best effort and never blocks startup
4. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Mileage Mate Team"

from mileage_mate.export import ExportError
from mileage_mate.storage import StorageError, StorageReadError, StorageWriteError

__all__ = [
    "ExportError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
