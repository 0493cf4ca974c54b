"""Statistics package."""

from mileage_mate.statistics.engine import (
    average_efficiency,
    average_price_per_liter,
    compute_insights,
    cost_per_km,
    fuel_entries,
    last_price_per_liter,
    month_summary,
    monthly_breakdown,
    this_month,
    total_fuel_cost,
    total_fuel_liters,
    total_spent,
    yearly_breakdown,
)
from mileage_mate.statistics.formatting import format_inr

__all__ = [
    "average_efficiency",
    "average_price_per_liter",
    "compute_insights",
    "cost_per_km",
    "format_inr",
    "fuel_entries",
    "last_price_per_liter",
    "month_summary",
    "monthly_breakdown",
    "this_month",
    "total_fuel_cost",
    "total_fuel_liters",
    "total_spent",
    "yearly_breakdown",
]
