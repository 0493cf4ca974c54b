"""Audit logging package."""

from mileage_mate.audit.logger import AuditLogger, configure_logging, get_logger

__all__ = ["AuditLogger", "configure_logging", "get_logger"]
