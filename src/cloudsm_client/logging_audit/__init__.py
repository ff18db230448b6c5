"""Logging Audit module.

This module provides logging configuration and audit trail functionality.
"""

from .audit import log_audit_event, log_transaction
from .formatters import CredentialRedactingFormatter, redact_credentials
from .logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "log_audit_event",
    "log_transaction",
    "CredentialRedactingFormatter",
    "redact_credentials",
]
