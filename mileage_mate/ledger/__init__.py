"""Ledger store package."""

from mileage_mate.ledger.store import LedgerStore

__all__ = ["LedgerStore"]
