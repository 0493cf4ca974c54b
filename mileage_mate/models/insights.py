"""
Statistics Result Models

Read-only view models produced by the statistics engine.
They carry no behaviour beyond a few convenience views and are rebuilt
from scratch on every call.
"""

from datetime import date

from pydantic import BaseModel, Field

from mileage_mate.models.expense import Expense


class MonthSummary(BaseModel):
    """Spend and fuel figures for one calendar month."""

    year: int
    month: int = Field(ge=1, le=12)
    total_spent: float = 0.0
    fuel_liters: float = 0.0
    fill_ups: int = Field(
        default=0,
        ge=0,
        description="Number of fuel entries in the month"
    )


class MonthlyGroup(BaseModel):
    """All expenses of one (year, month), newest entry first."""

    year: int
    month: int = Field(ge=1, le=12)
    label: str = Field(
        ...,
        description="Display label, e.g. 'January 2024'"
    )
    total_amount: float = 0.0
    entries: list[Expense] = Field(default_factory=list)

    @property
    def key(self) -> str:
        """Sortable ``YYYY-MM`` key."""
        return f"{self.year:04d}-{self.month:02d}"


class MonthlyBreakdown(BaseModel):
    """Monthly groups in chronological order (oldest first), for charting."""

    groups: list[MonthlyGroup] = Field(default_factory=list)

    def most_recent_first(self) -> list[MonthlyGroup]:
        """Groups for the drill-down log view."""
        return list(reversed(self.groups))

    @property
    def total_amount(self) -> float:
        return sum(group.total_amount for group in self.groups)

    def __len__(self) -> int:
        return len(self.groups)


class YearlyTotal(BaseModel):
    """Total spend for one calendar year."""

    year: int
    amount: float = 0.0


class LedgerInsights(BaseModel):
    """
    Every derived figure shown on the insights screen.

    Efficiency and cost-per-km are 0 when there is not enough data
    to compute them.
    """

    computed_for: date = Field(
        ...,
        description="The day 'this month' was evaluated against"
    )
    total_spent: float = 0.0
    total_fuel_liters: float = 0.0
    total_fuel_cost: float = 0.0
    average_efficiency: float = Field(
        default=0.0,
        description="km per liter"
    )
    cost_per_km: float = 0.0
    this_month: MonthSummary
    average_price_per_liter: float = 0.0
    last_price_per_liter: float = 0.0
    monthly: MonthlyBreakdown = Field(default_factory=MonthlyBreakdown)
    yearly: list[YearlyTotal] = Field(default_factory=list)
