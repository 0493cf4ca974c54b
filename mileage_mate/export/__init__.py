"""Export package."""

from mileage_mate.export.exporters import (
    CSV_HEADERS,
    ExportError,
    backup_filename,
    expense_to_row,
    format_number,
    tabular_filename,
    to_full_backup,
    to_tabular,
    write_full_backup,
    write_tabular,
)

__all__ = [
    "CSV_HEADERS",
    "ExportError",
    "backup_filename",
    "expense_to_row",
    "format_number",
    "tabular_filename",
    "to_full_backup",
    "to_tabular",
    "write_full_backup",
    "write_tabular",
]
