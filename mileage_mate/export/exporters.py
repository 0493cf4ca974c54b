"""
Ledger Exporters

Two formats:
1. Full backup: the persisted JSON form, pretty-printed. Lossless, so a
   ledger can be rebuilt from it with ``Ledger.from_json``.
2. Tabular: a flat CSV with one row per expense, for spreadsheets.

TRADEOFFS:
- CSV values are joined with commas as-is. A comma in the notes shifts
  the columns of that row. Quoting would change the output byte-for-byte,
  so it is not done.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union

from mileage_mate.models.expense import Expense, FuelEntry, Ledger


# Column headers for the tabular export
CSV_HEADERS = [
    "Date",
    "Type",
    "Odometer",
    "Amount",
    "Price/L",
    "Liters",
    "Notes",
]

BACKUP_FILENAME = "mileage-mate-backup-{day}.json"
CSV_FILENAME = "mileage-mate-export-{day}.csv"


class ExportError(Exception):
    """An export file could not be written."""
    pass


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing '.0' when it is integral."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def expense_to_row(expense: Expense) -> list[str]:
    """Convert an expense to a CSV row (fuel columns empty for other types)."""
    if isinstance(expense, FuelEntry):
        price, liters = format_number(expense.price_per_liter), format_number(expense.liters)
    else:
        price, liters = "", ""
    return [
        expense.expense_date.isoformat(),
        expense.type,
        format_number(expense.odometer),
        format_number(expense.total_cost),
        price,
        liters,
        expense.notes or "",
    ]


def to_full_backup(ledger: Ledger) -> str:
    """Serialize the whole ledger (expenses and profile)."""
    return ledger.to_json(indent=2)


def to_tabular(expenses: list[Expense]) -> str:
    """Header plus one line per expense, newline separated, no trailing newline."""
    rows = [CSV_HEADERS] + [expense_to_row(e) for e in expenses]
    return "\n".join(",".join(row) for row in rows)


def backup_filename(today: Optional[date] = None) -> str:
    return BACKUP_FILENAME.format(day=(today or date.today()).isoformat())


def tabular_filename(today: Optional[date] = None) -> str:
    return CSV_FILENAME.format(day=(today or date.today()).isoformat())


def _write_text(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    return path


def write_full_backup(
    ledger: Ledger,
    directory: Union[str, Path],
    today: Optional[date] = None,
) -> Path:
    """Write the dated backup file into ``directory`` and return its path."""
    return _write_text(Path(directory) / backup_filename(today), to_full_backup(ledger))


def write_tabular(
    expenses: list[Expense],
    directory: Union[str, Path],
    today: Optional[date] = None,
) -> Path:
    """Write the dated CSV file into ``directory`` and return its path."""
    return _write_text(Path(directory) / tabular_filename(today), to_tabular(expenses))
