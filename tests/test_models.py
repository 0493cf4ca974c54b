"""
Tests for Mileage Mate models

Test strategy:
1. Unit tests for the models, statistics and exporters
2. Store tests against in-memory storage
3. File storage tests against pytest's tmp_path
"""

import base64
import json
from datetime import date, datetime, timezone
from uuid import UUID

import pytest
from pydantic import TypeAdapter, ValidationError

from mileage_mate.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from mileage_mate.models.expense import (
    EXPENSE_LABELS,
    Expense,
    ExpenseType,
    FuelEntry,
    Ledger,
    OtherExpense,
    UserProfile,
)


class TestExpenseModels:
    """Tests for the expense sum type."""

    def test_fuel_entry_total_is_price_times_liters(self):
        """Test FuelEntry.create computes the total cost."""
        entry = FuelEntry.create(
            expense_date=date(2024, 1, 10),
            price_per_liter=102.5,
            liters=40,
            odometer=10000,
        )
        assert entry.total_cost == pytest.approx(4100.0)
        assert entry.type == "fuel"
        assert entry.is_fuel is True
        assert isinstance(entry.id, UUID)

    def test_fuel_total_not_revalidated(self):
        """Test an inconsistent stored total is kept as given."""
        entry = FuelEntry(
            expense_date=date(2024, 1, 10),
            price_per_liter=100,
            liters=40,
            total_cost=1,
        )
        assert entry.total_cost == 1

    def test_other_expense_description_defaults_to_label(self):
        """Test the category label is used when no description is given."""
        entry = OtherExpense.create("toll", date(2024, 3, 1), amount=150)
        assert entry.description == "Toll"
        assert entry.expense_type is ExpenseType.TOLL
        assert entry.is_fuel is False

    def test_other_expense_keeps_user_description(self):
        """Test a user-supplied description wins over the label."""
        entry = OtherExpense.create(
            ExpenseType.INSURANCE, date(2024, 3, 1), amount=12000,
            description="Annual comprehensive",
        )
        assert entry.description == "Annual comprehensive"
        assert entry.type == "insurance"

    def test_other_expense_rejects_fuel(self):
        """Test fuel cannot be built through OtherExpense."""
        with pytest.raises(ValueError, match="FuelEntry.create"):
            OtherExpense.create("fuel", date(2024, 3, 1), amount=100)

    def test_zero_and_negative_amounts_accepted(self):
        """Test the core does not sanitize amounts."""
        entry = OtherExpense.create("challan", date(2024, 3, 1), amount=-500)
        assert entry.total_cost == -500
        fill = FuelEntry.create(date(2024, 3, 1), price_per_liter=0, liters=0)
        assert fill.total_cost == 0

    def test_expenses_are_frozen(self):
        """Test an expense cannot be edited in place."""
        entry = OtherExpense.create("service", date(2024, 3, 1), amount=100)
        with pytest.raises(ValidationError):
            entry.total_cost = 200

    def test_discriminated_union_parses_by_type(self):
        """Test the 'type' field selects the variant."""
        adapter = TypeAdapter(Expense)
        fuel = adapter.validate_python({
            "type": "fuel", "date": "2024-01-10", "odometer": 10000,
            "pricePerLiter": 100, "liters": 40, "totalCost": 4000,
        })
        other = adapter.validate_python({
            "type": "service", "date": "2024-01-12", "odometer": 10100,
            "totalCost": 2500, "description": "Service",
        })
        assert isinstance(fuel, FuelEntry)
        assert isinstance(other, OtherExpense)

    def test_unknown_type_rejected(self):
        """Test an unknown expense type fails validation."""
        with pytest.raises(ValidationError):
            TypeAdapter(Expense).validate_python({
                "type": "parking", "date": "2024-01-10", "totalCost": 50,
            })

    def test_serialized_keys_are_camel_case(self):
        """Test the persisted form uses camelCase keys and plain dates."""
        entry = FuelEntry.create(date(2024, 1, 10), 100, 40, odometer=10000)
        data = json.loads(entry.model_dump_json(by_alias=True, exclude_none=True))
        assert data["date"] == "2024-01-10"
        assert data["pricePerLiter"] == 100
        assert data["totalCost"] == 4000
        assert "createdAt" in data
        assert "notes" not in data

    def test_labels_cover_every_type(self):
        """Test every expense type has a display label."""
        assert set(EXPENSE_LABELS) == set(ExpenseType)
        assert ExpenseType.CHALLAN.label == "Challan"


class TestUserProfile:
    """Tests for the user profile."""

    def test_default_profile_uses_current_month(self):
        """Test the default purchase date is the current month and year."""
        profile = UserProfile()
        today = date.today()
        assert profile.name == ""
        assert profile.purchase_month == today.month
        assert profile.purchase_year == today.year
        assert profile.profile_picture is None

    def test_month_range_enforced(self):
        """Test purchase month must be 1-12."""
        with pytest.raises(ValidationError):
            UserProfile(purchase_month=13)

    def test_picture_bytes_encoded_once(self):
        """Test raw bytes are stored base64-encoded and decoded on demand."""
        picture = b"\x89PNG\r\n\x1a\nfake"
        profile = UserProfile(name="Asha", profile_picture=picture)
        data = json.loads(profile.model_dump_json(by_alias=True))
        assert data["profilePicture"] == base64.b64encode(picture).decode("ascii")
        assert UserProfile.model_validate(data).picture_bytes == picture

    def test_data_url_kept_verbatim(self):
        """Test a data: URL keeps its media type through a read and write."""
        encoded = base64.b64encode(b"jpeg-bytes").decode("ascii")
        stored = f"data:image/jpeg;base64,{encoded}"
        profile = UserProfile.model_validate({"profilePicture": stored})
        assert profile.profile_picture == stored
        assert profile.picture_bytes == b"jpeg-bytes"
        assert json.loads(profile.model_dump_json(by_alias=True))["profilePicture"] == stored


class TestLedgerModel:
    """Tests for the ledger container."""

    def test_empty_ledger(self):
        """Test a new ledger has no expenses and a default profile."""
        ledger = Ledger()
        assert ledger.expenses == []
        assert isinstance(ledger.profile, UserProfile)

    def test_json_round_trip(self, january_fill, service_bill):
        """Test the serialized form rebuilds an equal ledger."""
        ledger = Ledger(
            expenses=[service_bill, january_fill],
            profile=UserProfile(name="Asha", car_brand="Tata", car_name="Nexon"),
        )
        restored = Ledger.from_json(ledger.to_json())
        assert restored == ledger

    def test_reads_original_format(self):
        """Test a ledger written by the browser app parses."""
        raw = json.dumps({
            "expenses": [{
                "id": "0b9f2c1e-6a55-4a53-9d0e-7f3c0a1b2c3d",
                "type": "fuel",
                "date": "2024-01-10",
                "odometer": 10000,
                "pricePerLiter": 100,
                "liters": 40,
                "totalCost": 4000,
                "createdAt": "2024-01-10T08:15:00.000Z",
            }],
            "profile": {
                "name": "Asha",
                "carBrand": "Tata",
                "carName": "Nexon",
                "purchaseMonth": 3,
                "purchaseYear": 2022,
            },
        })
        ledger = Ledger.from_json(raw)
        assert ledger.expenses[0].created_at == datetime(2024, 1, 10, 8, 15, tzinfo=timezone.utc)
        assert ledger.profile.car_brand == "Tata"

    def test_malformed_json_raises_validation_error(self):
        """Test parse failures surface as ValidationError."""
        with pytest.raises(ValidationError):
            Ledger.from_json("{not json")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            description="Ledger saved",
        )
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.profile_updated(["car_brand", "name"])
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "profile_updated"
        assert log_dict["details"]["fields"] == ["car_brand", "name"]

    def test_builder_failures_are_errors(self):
        """Test failure events carry error severity and message."""
        event = AuditEventBuilder.save_failed("disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"
        assert AuditEventBuilder.ledger_load_failed("bad").severity == AuditSeverity.ERROR


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
