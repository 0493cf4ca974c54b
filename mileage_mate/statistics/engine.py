"""
Statistics Engine

DESIGN DECISION: Statistics are pure functions of an expense list.
Nothing is cached or maintained incrementally; every call recomputes
from the snapshot it is given, so the caller decides when to recompute.

Two different odometer spans are used on purpose:
- efficiency spans fuel entries only
- cost per km spans every expense
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from mileage_mate.models.expense import Expense, FuelEntry
from mileage_mate.models.insights import (
    LedgerInsights,
    MonthlyBreakdown,
    MonthlyGroup,
    MonthSummary,
    YearlyTotal,
)


# Group labels are English regardless of the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def fuel_entries(expenses: Iterable[Expense]) -> list[FuelEntry]:
    """Fill-ups only, in the order given."""
    return [e for e in expenses if isinstance(e, FuelEntry)]


def total_spent(expenses: Iterable[Expense]) -> float:
    return sum((e.total_cost for e in expenses), 0.0)


def total_fuel_liters(expenses: Iterable[Expense]) -> float:
    return sum((e.liters for e in fuel_entries(expenses)), 0.0)


def total_fuel_cost(expenses: Iterable[Expense]) -> float:
    return sum((e.total_cost for e in fuel_entries(expenses)), 0.0)


def average_efficiency(expenses: Iterable[Expense]) -> float:
    """
    Kilometers per liter over the whole fuel history.

    Distance is the odometer span between the lowest and highest fill-up,
    divided by every liter ever filled (including the first fill-up).
    Returns 0 with fewer than two fill-ups or no fuel.
    """
    fuel = sorted(fuel_entries(expenses), key=lambda e: e.odometer)
    if len(fuel) < 2:
        return 0.0

    distance = fuel[-1].odometer - fuel[0].odometer
    liters = sum(e.liters for e in fuel)
    if distance <= 0 or liters <= 0:
        return 0.0
    return distance / liters


def cost_per_km(expenses: Sequence[Expense]) -> float:
    """Total spend divided by the odometer span of all expenses (0 if no span)."""
    if not expenses:
        return 0.0
    readings = [e.odometer for e in expenses]
    odometer_range = max(readings) - min(readings)
    if odometer_range <= 0:
        return 0.0
    return total_spent(expenses) / odometer_range


def month_summary(expenses: Iterable[Expense], year: int, month: int) -> MonthSummary:
    """Spend, liters and fill-up count for one calendar month."""
    in_month = [
        e for e in expenses
        if e.expense_date.year == year and e.expense_date.month == month
    ]
    fuel = fuel_entries(in_month)
    return MonthSummary(
        year=year,
        month=month,
        total_spent=total_spent(in_month),
        fuel_liters=sum((e.liters for e in fuel), 0.0),
        fill_ups=len(fuel),
    )


def this_month(expenses: Iterable[Expense], today: Optional[date] = None) -> MonthSummary:
    """Summary of the current calendar month (evaluated at call time)."""
    today = today or date.today()
    return month_summary(expenses, today.year, today.month)


def average_price_per_liter(expenses: Iterable[Expense]) -> float:
    fuel = fuel_entries(expenses)
    if not fuel:
        return 0.0
    return sum(e.price_per_liter for e in fuel) / len(fuel)


def last_price_per_liter(expenses: Iterable[Expense]) -> float:
    """
    Price of the most recent fill-up by date.

    On equal dates the entry that comes first in the list wins.
    """
    fuel = fuel_entries(expenses)
    if not fuel:
        return 0.0
    latest = max(fuel, key=lambda e: e.expense_date)
    return latest.price_per_liter


def _newest_first(entries: Iterable[Expense]) -> list[Expense]:
    return sorted(
        entries,
        key=lambda e: (e.expense_date, e.created_at),
        reverse=True,
    )


def monthly_breakdown(expenses: Iterable[Expense]) -> MonthlyBreakdown:
    """
    Group expenses by (year, month).

    Groups are oldest first; use ``most_recent_first()`` for the log view.
    Entries inside a group are newest first.
    """
    groups: dict[tuple[int, int], list[Expense]] = {}
    for expense in expenses:
        key = (expense.expense_date.year, expense.expense_date.month)
        groups.setdefault(key, []).append(expense)

    result = []
    for (year, month) in sorted(groups):
        entries = groups[(year, month)]
        result.append(MonthlyGroup(
            year=year,
            month=month,
            label=month_label(year, month),
            total_amount=total_spent(entries),
            entries=_newest_first(entries),
        ))
    return MonthlyBreakdown(groups=result)


def yearly_breakdown(expenses: Iterable[Expense]) -> list[YearlyTotal]:
    """Total spend per calendar year, oldest first."""
    totals: dict[int, float] = {}
    for expense in expenses:
        year = expense.expense_date.year
        totals[year] = totals.get(year, 0.0) + expense.total_cost
    return [YearlyTotal(year=year, amount=totals[year]) for year in sorted(totals)]


def compute_insights(
    expenses: Sequence[Expense],
    today: Optional[date] = None,
) -> LedgerInsights:
    """Every statistic at once, for one snapshot of the ledger."""
    today = today or date.today()
    return LedgerInsights(
        computed_for=today,
        total_spent=total_spent(expenses),
        total_fuel_liters=total_fuel_liters(expenses),
        total_fuel_cost=total_fuel_cost(expenses),
        average_efficiency=average_efficiency(expenses),
        cost_per_km=cost_per_km(expenses),
        this_month=this_month(expenses, today),
        average_price_per_liter=average_price_per_liter(expenses),
        last_price_per_liter=last_price_per_liter(expenses),
        monthly=monthly_breakdown(expenses),
        yearly=yearly_breakdown(expenses),
    )
