"""Tests for the exporters."""

import json
from datetime import date

import pytest

from mileage_mate.export import (
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
from mileage_mate.models.expense import FuelEntry, Ledger, OtherExpense, UserProfile


class TestTabularExport:
    """Tests for the CSV export."""

    def test_two_fill_ups_give_three_lines(self, january_fill, february_fill):
        """Test header plus one row per expense, in ledger order."""
        csv_text = to_tabular([february_fill, january_fill])
        assert csv_text.split("\n") == [
            "Date,Type,Odometer,Amount,Price/L,Liters,Notes",
            "2024-02-10,fuel,10600,3990,105,38,",
            "2024-01-10,fuel,10000,4000,100,40,",
        ]
        assert not csv_text.endswith("\n")

    def test_non_fuel_leaves_fuel_columns_empty(self, service_bill):
        """Test price and liters are blank for other types."""
        assert expense_to_row(service_bill) == [
            "2024-02-20", "service", "10800", "2500", "", "", "oil change",
        ]

    def test_fractional_values_kept(self):
        """Test non-integral numbers are written in full."""
        entry = FuelEntry.create(date(2024, 1, 1), price_per_liter=102.5, liters=33.3, odometer=1)
        row = expense_to_row(entry)
        assert row[4] == "102.5"
        assert row[5] == "33.3"

    def test_delimiters_in_notes_not_escaped(self):
        """Test commas in notes are written verbatim."""
        entry = OtherExpense.create("toll", date(2024, 1, 1), amount=50, notes="NH48, return")
        line = to_tabular([entry]).split("\n")[1]
        assert line == "2024-01-01,toll,0,50,,,NH48, return"

    def test_empty_ledger_header_only(self):
        """Test an empty ledger exports just the header."""
        assert to_tabular([]) == ",".join(CSV_HEADERS)

    @pytest.mark.parametrize("value,expected", [
        (4000.0, "4000"),
        (3990, "3990"),
        (0.1 + 0.2, "0.30000000000000004"),
        (-12.5, "-12.5"),
    ])
    def test_format_number(self, value, expected):
        """Test integral floats lose their '.0'."""
        assert format_number(value) == expected


class TestFullBackup:
    """Tests for the JSON backup."""

    def test_backup_is_lossless(self, january_fill, service_bill):
        """Test the backup rebuilds the exact ledger."""
        ledger = Ledger(
            expenses=[service_bill, january_fill],
            profile=UserProfile(name="Asha", car_brand="Maruti Suzuki", car_name="Swift",
                                purchase_month=6, purchase_year=2019,
                                profile_picture=b"\x00\x01picture"),
        )
        assert Ledger.from_json(to_full_backup(ledger)) == ledger

    def test_backup_shape(self, january_fill):
        """Test the backup has expenses and profile with camelCase keys."""
        data = json.loads(to_full_backup(Ledger(expenses=[january_fill])))
        assert set(data) == {"expenses", "profile"}
        assert data["expenses"][0]["pricePerLiter"] == 100
        assert "purchaseMonth" in data["profile"]

    def test_backup_is_indented(self):
        """Test the backup is pretty-printed."""
        assert "\n  " in to_full_backup(Ledger())


class TestExportFiles:
    """Tests for writing export files."""

    def test_filenames_embed_date(self):
        """Test the date is part of each file name."""
        day = date(2024, 12, 31)
        assert backup_filename(day) == "mileage-mate-backup-2024-12-31.json"
        assert tabular_filename(day) == "mileage-mate-export-2024-12-31.csv"

    def test_write_creates_directory(self, tmp_path, january_fill):
        """Test missing export directories are created."""
        target = tmp_path / "nested" / "exports"
        path = write_tabular([january_fill], target, today=date(2024, 1, 31))
        assert path == target / "mileage-mate-export-2024-01-31.csv"
        assert path.read_text(encoding="utf-8").startswith("Date,Type")

    def test_write_failure_raises_export_error(self, tmp_path):
        """Test an unwritable target raises ExportError."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        with pytest.raises(ExportError):
            write_full_backup(Ledger(), blocker)
