"""
Ledger Store

The single owner of the in-memory ledger. Everything else either reads
a snapshot from it or changes the ledger through its methods.

DESIGN DECISION: Persistence is best effort and never raises.
- A ledger that cannot be read or parsed is replaced by an empty one
- A failed write is logged and reported with a False return value
- There is no retry queue; the next mutation writes the whole ledger again

Every mutation saves the full ledger immediately.
"""

from datetime import date
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from mileage_mate.audit import AuditLogger
from mileage_mate.config import get_settings
from mileage_mate.export import ExportError, write_full_backup, write_tabular
from mileage_mate.models.expense import (
    Expense,
    ExpenseBase,
    ExpenseType,
    FuelEntry,
    Ledger,
    OtherExpense,
    UserProfile,
)
from mileage_mate.models.insights import LedgerInsights
from mileage_mate.statistics import compute_insights
from mileage_mate.storage import JsonFileStorage, StorageBackend, StorageError


_expense_adapter = TypeAdapter(Expense)

# Accept both python names and serialized (camelCase) names for profile fields
_PROFILE_FIELDS = {
    **{name: name for name in UserProfile.model_fields},
    **{
        field.alias: name
        for name, field in UserProfile.model_fields.items()
        if field.alias
    },
}


def _as_uuid(expense_id: Union[UUID, str]) -> Optional[UUID]:
    if isinstance(expense_id, UUID):
        return expense_id
    try:
        return UUID(str(expense_id))
    except ValueError:
        return None


class LedgerStore:
    """
    Owns the ledger and keeps the storage backend in sync with it.

    Usage:
        store = LedgerStore.open()
        store.record_fuel(price_per_liter=102.5, liters=35, odometer=12000)
        store.insights().average_efficiency
    """

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._backend = backend or JsonFileStorage.from_settings()
        self._audit = audit_logger or AuditLogger()
        self._ledger = Ledger()

    @classmethod
    def open(
        cls,
        backend: Optional[StorageBackend] = None,
        audit_logger: Optional[AuditLogger] = None,
    ) -> "LedgerStore":
        """Create a store and load whatever is persisted."""
        store = cls(backend=backend, audit_logger=audit_logger)
        store.load()
        return store

    # =========================================================================
    # SNAPSHOTS
    # =========================================================================

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def ledger(self) -> Ledger:
        """A deep copy of the current ledger."""
        return self._ledger.model_copy(deep=True)

    @property
    def expenses(self) -> list[Expense]:
        """Expenses, newest date first. Entries are frozen, the list is a copy."""
        return list(self._ledger.expenses)

    @property
    def profile(self) -> UserProfile:
        return self._ledger.profile.model_copy(deep=True)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def load(self) -> Ledger:
        """
        Load the persisted ledger and make it current.

        Missing, unreadable or malformed data all yield the empty
        default ledger. Failures are logged, never raised.
        """
        try:
            raw = self._backend.read()
        except StorageError as e:
            self._audit.log_ledger_load_failed(str(e))
            self._ledger = Ledger()
            return self.ledger

        if raw is None:
            self._ledger = Ledger()
            self._audit.log_ledger_loaded(0, found=False)
            return self.ledger

        try:
            self._ledger = Ledger.from_json(raw)
        except ValidationError as e:
            self._audit.log_ledger_load_failed(
                f"{e.error_count()} validation errors: {e.errors()[0]['msg']}"
            )
            self._ledger = Ledger()
            return self.ledger

        self._audit.log_ledger_loaded(len(self._ledger.expenses), found=True)
        return self.ledger

    def save(self, ledger: Optional[Ledger] = None) -> bool:
        """
        Write the full ledger, replacing whatever was stored.

        If a ledger is given it becomes the current one first.
        Returns False (and logs) if the write failed.
        """
        if ledger is not None:
            self._ledger = ledger.model_copy(deep=True)

        payload = self._ledger.to_json().encode("utf-8")
        try:
            written = self._backend.write(payload)
        except (StorageError, OSError) as e:
            self._audit.log_save_failed(str(e))
            return False

        if not written:
            self._audit.log_save_failed(f"backend '{self._backend.key}' rejected the write")
            return False

        self._audit.log_ledger_saved(len(self._ledger.expenses), len(payload))
        return True

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def add_expense(self, expense: Union[Expense, dict[str, Any]]) -> Expense:
        """
        Append an expense and re-sort the ledger by date, newest first.

        The sort is stable: entries on the same date keep their prior order,
        so a new entry lands after existing ones from its day.
        Plain dicts (snake_case or camelCase keys) are validated first.
        """
        if not isinstance(expense, ExpenseBase):
            expense = _expense_adapter.validate_python(expense)

        self._ledger.expenses = sorted(
            [*self._ledger.expenses, expense],
            key=lambda e: e.expense_date,
            reverse=True,
        )
        self._audit.log_expense_added(expense.id, expense.type, expense.total_cost)
        self.save()
        return expense

    def delete_expense(self, expense_id: Union[UUID, str]) -> bool:
        """
        Remove the expense with this id.

        Returns False, without saving, if no such expense exists.
        """
        target = _as_uuid(expense_id)
        remaining = [e for e in self._ledger.expenses if e.id != target]
        if len(remaining) == len(self._ledger.expenses):
            return False

        self._ledger.expenses = remaining
        self._audit.log_expense_deleted(target)
        self.save()
        return True

    def update_profile(self, changes: Optional[dict[str, Any]] = None, **fields: Any) -> UserProfile:
        """
        Shallow-merge fields into the profile.

        Unspecified fields keep their values. Raises ValueError for unknown
        field names and pydantic's ValidationError for out-of-range values.
        """
        updates = {**(changes or {}), **fields}
        normalized = {}
        for key, value in updates.items():
            if key not in _PROFILE_FIELDS:
                raise ValueError(f"Unknown profile field: {key}")
            normalized[_PROFILE_FIELDS[key]] = value

        merged = {**self._ledger.profile.model_dump(), **normalized}
        self._ledger.profile = UserProfile.model_validate(merged)
        self._audit.log_profile_updated(sorted(normalized))
        self.save()
        return self.profile

    def last_odometer(self) -> int:
        """Odometer of the most recent expense by date, or 0 if there are none."""
        if not self._ledger.expenses:
            return 0
        latest = sorted(self._ledger.expenses, key=lambda e: e.expense_date, reverse=True)[0]
        return latest.odometer

    # =========================================================================
    # ENTRY HELPERS
    # =========================================================================

    def record_fuel(
        self,
        price_per_liter: float,
        liters: float,
        odometer: Optional[int] = None,
        expense_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> FuelEntry:
        """
        Build and add a fill-up the way the entry form does.

        A blank (None or 0) odometer falls back to the last known reading.
        """
        entry = FuelEntry.create(
            expense_date=expense_date or date.today(),
            price_per_liter=price_per_liter,
            liters=liters,
            odometer=odometer or self.last_odometer(),
            notes=notes,
        )
        self.add_expense(entry)
        return entry

    def record_expense(
        self,
        expense_type: Union[ExpenseType, str],
        amount: float,
        odometer: Optional[int] = None,
        expense_date: Optional[date] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> OtherExpense:
        """Build and add a non-fuel expense; description defaults to the category label."""
        entry = OtherExpense.create(
            expense_type=expense_type,
            expense_date=expense_date or date.today(),
            amount=amount,
            odometer=odometer or self.last_odometer(),
            description=description,
            notes=notes,
        )
        self.add_expense(entry)
        return entry

    # =========================================================================
    # STATISTICS & EXPORT
    # =========================================================================

    def insights(self, today: Optional[date] = None) -> LedgerInsights:
        """Statistics over the current snapshot, recomputed on every call."""
        return compute_insights(self.expenses, today)

    def export_full_backup(
        self,
        directory: Optional[Union[str, Path]] = None,
        today: Optional[date] = None,
    ) -> Path:
        """Write the JSON backup; raises ExportError if the file cannot be written."""
        directory = directory or get_settings().export.directory
        try:
            path = write_full_backup(self._ledger, directory, today)
        except ExportError as e:
            self._audit.log_export_failed("json", str(directory), str(e))
            raise
        self._audit.log_export_completed("json", str(path), len(self._ledger.expenses))
        return path

    def export_tabular(
        self,
        directory: Optional[Union[str, Path]] = None,
        today: Optional[date] = None,
    ) -> Path:
        """Write the CSV export; raises ExportError if the file cannot be written."""
        directory = directory or get_settings().export.directory
        try:
            path = write_tabular(self.expenses, directory, today)
        except ExportError as e:
            self._audit.log_export_failed("csv", str(directory), str(e))
            raise
        self._audit.log_export_completed("csv", str(path), len(self._ledger.expenses))
        return path
