"""
Core Data Models for Mileage Mate

These models define the schemas for everything the ledger stores:
1. Expenses, as a tagged union discriminated by ``type``
2. The user profile (car details and an optional picture)
3. The ledger, which bundles both and is persisted as one unit

DESIGN DECISION: The serialized form uses camelCase keys so a ledger written
by this package has the same shape as the one the entry forms have always
produced. Python code works with snake_case attributes; aliases bridge the two.

Amounts are plain floats. The core never rejects a zero or negative amount;
sanitizing user input is the job of whatever builds the entry.
"""

import base64
from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================

class ExpenseType(str, Enum):
    """Supported expense categories."""
    FUEL = "fuel"
    INSURANCE = "insurance"
    SERVICE = "service"
    TOLL = "toll"
    CHALLAN = "challan"

    @property
    def label(self) -> str:
        """Display label, also the default description of non-fuel entries."""
        return EXPENSE_LABELS[self]


EXPENSE_LABELS: dict[ExpenseType, str] = {
    ExpenseType.FUEL: "Fuel",
    ExpenseType.INSURANCE: "Insurance",
    ExpenseType.SERVICE: "Service",
    ExpenseType.TOLL: "Toll",
    ExpenseType.CHALLAN: "Challan",
}

OtherExpenseKind = Literal["insurance", "service", "toll", "challan"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# EXPENSES
# =============================================================================

class ExpenseBase(BaseModel):
    """
    Fields shared by every expense variant.

    Expenses are frozen: once created they are only ever removed,
    never edited in place.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique entry ID"
    )
    expense_date: date = Field(
        ...,
        alias="date",
        description="Calendar date of the expense"
    )
    odometer: int = Field(
        default=0,
        description="Total distance reading (km) at the time of the entry"
    )
    total_cost: float = Field(
        default=0.0,
        description="Amount paid in INR"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free text notes"
    )
    created_at: datetime = Field(
        default_factory=_utc_now,
        description="When the entry was created (UTC)"
    )

    @property
    def expense_type(self) -> ExpenseType:
        return ExpenseType(self.type)

    @property
    def is_fuel(self) -> bool:
        return self.type == ExpenseType.FUEL.value


class FuelEntry(ExpenseBase):
    """
    A fill-up.

    ``total_cost`` is computed from price and liters when the entry is built
    through :meth:`create`; it is stored as given and never re-checked.
    """
    type: Literal["fuel"] = "fuel"
    price_per_liter: float = Field(
        default=0.0,
        description="Price per liter in INR"
    )
    liters: float = Field(
        default=0.0,
        description="Liters filled"
    )

    @classmethod
    def create(
        cls,
        expense_date: date,
        price_per_liter: float,
        liters: float,
        odometer: int = 0,
        notes: Optional[str] = None,
    ) -> "FuelEntry":
        return cls(
            expense_date=expense_date,
            odometer=odometer,
            price_per_liter=price_per_liter,
            liters=liters,
            total_cost=price_per_liter * liters,
            notes=notes or None,
        )


class OtherExpense(ExpenseBase):
    """Insurance, service, toll or challan payment."""
    type: OtherExpenseKind
    description: str = Field(
        default="",
        description="What the payment was for"
    )

    @classmethod
    def create(
        cls,
        expense_type: Union[ExpenseType, str],
        expense_date: date,
        amount: float,
        odometer: int = 0,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "OtherExpense":
        kind = ExpenseType(expense_type)
        if kind is ExpenseType.FUEL:
            raise ValueError("Fuel entries must be created with FuelEntry.create")
        return cls(
            type=kind.value,
            expense_date=expense_date,
            odometer=odometer,
            total_cost=amount,
            description=description or kind.label,
            notes=notes or None,
        )


Expense = Annotated[Union[FuelEntry, OtherExpense], Field(discriminator="type")]


# =============================================================================
# PROFILE & LEDGER
# =============================================================================

class UserProfile(BaseModel):
    """
    Owner and car details.

    The profile picture is kept exactly as it was stored: bare base64 or a
    ``data:`` URL with its media type. Raw bytes given in Python are
    base64-encoded once; ``picture_bytes`` decodes either form.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    name: str = ""
    car_brand: str = ""
    car_name: str = ""
    purchase_month: int = Field(
        default_factory=lambda: date.today().month,
        ge=1,
        le=12,
        description="Month the car was bought (1-12)"
    )
    purchase_year: int = Field(
        default_factory=lambda: date.today().year,
        ge=1,
        description="Year the car was bought"
    )
    profile_picture: Optional[str] = Field(
        default=None,
        description="Encoded picture, written back unchanged"
    )

    @field_validator('profile_picture', mode='before')
    @classmethod
    def encode_picture(cls, v):
        """Encode raw bytes; stored text passes through untouched."""
        if isinstance(v, (bytes, bytearray)):
            return base64.b64encode(v).decode("ascii")
        return v

    @property
    def picture_bytes(self) -> Optional[bytes]:
        """Decoded picture, with any ``data:`` URL prefix removed."""
        if self.profile_picture is None:
            return None
        encoded = self.profile_picture
        if encoded.startswith("data:") and "," in encoded:
            encoded = encoded.split(",", 1)[1]
        return base64.b64decode(encoded)


class Ledger(BaseModel):
    """
    Every expense plus the profile.

    This is the unit of persistence: it is always read and written whole.
    """
    model_config = ConfigDict(populate_by_name=True)

    expenses: list[Expense] = Field(default_factory=list)
    profile: UserProfile = Field(default_factory=UserProfile)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to the persisted / backup form."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "Ledger":
        """Parse the persisted / backup form. Raises ``ValidationError``."""
        return cls.model_validate_json(data)
