"""Shared fixtures. No test touches the real data directory."""

from datetime import date

import pytest

from mileage_mate.config import get_settings
from mileage_mate.ledger import LedgerStore
from mileage_mate.models.expense import FuelEntry, OtherExpense
from mileage_mate.storage import InMemoryStorage


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point storage and exports at a temp dir for every test."""
    monkeypatch.setenv("MILEAGE_MATE_STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MILEAGE_MATE_EXPORT_DIRECTORY", str(tmp_path / "exports"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend():
    return InMemoryStorage()


@pytest.fixture
def store(backend):
    return LedgerStore.open(backend=backend)


@pytest.fixture
def january_fill():
    return FuelEntry.create(
        expense_date=date(2024, 1, 10),
        price_per_liter=100,
        liters=40,
        odometer=10000,
    )


@pytest.fixture
def february_fill():
    return FuelEntry.create(
        expense_date=date(2024, 2, 10),
        price_per_liter=105,
        liters=38,
        odometer=10600,
    )


@pytest.fixture
def service_bill():
    return OtherExpense.create(
        expense_type="service",
        expense_date=date(2024, 2, 20),
        amount=2500,
        odometer=10800,
        notes="oil change",
    )
