"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of what was added, deleted and exported
2. A record of load and save failures, which the store never raises

The audit logger gracefully handles failures: it never crashes the
calling flow if logging itself goes wrong.

Importing this module configures structlog with fixed defaults and reads no
settings. Call configure_logging() to apply the log level and renderer from
AppSettings.
"""

import logging
import sys
from typing import Optional
from uuid import UUID

import structlog

from mileage_mate.config import get_settings
from mileage_mate.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


DEFAULT_LOG_LEVEL = "INFO"


def _configure_structlog(json_output: bool = True) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> str:
    """
    Configure structlog on top of the stdlib logging module.

    Defaults come from AppSettings. If those settings are invalid the level
    falls back to INFO with JSON output, and a warning is logged.
    Safe to call more than once. Returns the level applied.
    """
    settings_error = None
    settings_level, settings_json = DEFAULT_LOG_LEVEL, True
    if level is None or json_output is None:
        try:
            app_settings = get_settings().app
            settings_level, settings_json = app_settings.log_level, app_settings.log_json
        except ValueError as e:
            settings_error = str(e)

    level = (level or settings_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        settings_error = settings_error or f"Unknown log level: {level}"
        level = DEFAULT_LOG_LEVEL
    if json_output is None:
        json_output = settings_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
    )
    logging.getLogger("mileage_mate").setLevel(getattr(logging, level))
    _configure_structlog(json_output)

    if settings_error:
        get_logger(__name__).warning("invalid_log_settings", error=settings_error, level=level)
    return level


def get_logger(name: str = "mileage_mate"):
    """Get a structlog logger bound to a stdlib logger name."""
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Turns AuditEvents into structured log lines at the event's severity.
    """

    def __init__(self, logger=None):
        self._logger = logger or get_logger("mileage_mate.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the logging backend raised; the error is swallowed
        so auditing can never break a ledger operation.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            print(f"audit logging failed: {e}", file=sys.stderr)
            return False
        return True

    def log_ledger_loaded(self, expense_count: int, found: bool) -> None:
        """Log a successful (or empty) load."""
        self.log(AuditEventBuilder.ledger_loaded(expense_count, found))

    def log_ledger_load_failed(self, error_message: str) -> None:
        """Log a load that fell back to the empty ledger."""
        self.log(AuditEventBuilder.ledger_load_failed(error_message))

    def log_ledger_saved(self, expense_count: int, size_bytes: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(expense_count, size_bytes))

    def log_save_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(error_message))

    def log_expense_added(self, expense_id: UUID, expense_type: str, amount: float) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, expense_type, amount))

    def log_expense_deleted(self, expense_id: UUID) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id))

    def log_profile_updated(self, fields: list[str]) -> None:
        self.log(AuditEventBuilder.profile_updated(fields))

    def log_export_completed(self, export_format: str, path: str, rows: int) -> None:
        self.log(AuditEventBuilder.export_completed(export_format, path, rows))

    def log_export_failed(self, export_format: str, path: str, error_message: str) -> None:
        self.log(AuditEventBuilder.export_failed(export_format, path, error_message))


_configure_structlog()
