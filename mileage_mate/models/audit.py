"""
Audit Models for Mileage Mate

Every change to the ledger, and every attempt to read, write or export it,
is described by an AuditEvent. Events are only logged, never persisted
alongside the ledger.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"
    LEDGER_SAVED = "ledger_saved"
    SAVE_FAILED = "save_failed"

    # Ledger changes
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    PROFILE_UPDATED = "profile_updated"

    # Exports
    EXPORT_COMPLETED = "export_completed"
    EXPORT_FAILED = "export_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'profile', 'ledger')"
    )
    entity_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "fuel", 4000.0)
        event = AuditEventBuilder.save_failed("disk full")
    """

    @staticmethod
    def ledger_loaded(expense_count: int, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=(
                f"Ledger loaded with {expense_count} expenses"
                if found else "No stored ledger, starting empty"
            ),
            details={
                "expense_count": expense_count,
                "found": found,
            },
        )

    @staticmethod
    def ledger_load_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description="Stored ledger could not be read, starting empty",
            error_message=error_message,
        )

    @staticmethod
    def ledger_saved(expense_count: int, size_bytes: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="ledger",
            description=f"Ledger saved ({expense_count} expenses)",
            details={
                "expense_count": expense_count,
                "size_bytes": size_bytes,
            },
        )

    @staticmethod
    def save_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description="Failed to persist ledger",
            error_message=error_message,
        )

    @staticmethod
    def expense_added(
        expense_id: UUID,
        expense_type: str,
        amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {expense_type} - ₹{amount:.2f}",
            details={
                "type": expense_type,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted",
        )

    @staticmethod
    def profile_updated(fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFILE_UPDATED,
            entity_type="profile",
            description=f"Profile updated: {', '.join(fields) or 'no fields'}",
            details={
                "fields": fields,
            },
        )

    @staticmethod
    def export_completed(export_format: str, path: str, rows: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_COMPLETED,
            entity_type="export",
            description=f"Exported {rows} expenses as {export_format}",
            details={
                "format": export_format,
                "path": path,
                "rows": rows,
            },
        )

    @staticmethod
    def export_failed(export_format: str, path: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="export",
            description=f"{export_format} export failed",
            details={
                "format": export_format,
                "path": path,
            },
            error_message=error_message,
        )
