"""
Data Models Package

This package contains all Pydantic models used in Mileage Mate.
Everything stored in or derived from the ledger conforms to these schemas.
"""

from mileage_mate.models.expense import (
    EXPENSE_LABELS,
    Expense,
    ExpenseBase,
    ExpenseType,
    FuelEntry,
    Ledger,
    OtherExpense,
    UserProfile,
)
from mileage_mate.models.insights import (
    LedgerInsights,
    MonthlyBreakdown,
    MonthlyGroup,
    MonthSummary,
    YearlyTotal,
)
from mileage_mate.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "EXPENSE_LABELS",
    "Expense",
    "ExpenseBase",
    "ExpenseType",
    "FuelEntry",
    "Ledger",
    "OtherExpense",
    "UserProfile",
    # Statistics models
    "LedgerInsights",
    "MonthlyBreakdown",
    "MonthlyGroup",
    "MonthSummary",
    "YearlyTotal",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
