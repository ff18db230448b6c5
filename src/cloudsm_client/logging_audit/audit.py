"""Audit trail functionality for CloudSM Client.

This module provides structured audit logging for tracking web service
exchanges and client events.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from .formatters import redact_credentials
from .logger import get_logger

logger = get_logger(__name__)

# Fields listed first, in this order; any others follow as given
AUDIT_FIELD_ORDER = (
    "status",
    "operation",
    "duration",
    "status_code",
    "error_message",
    "correlation_id",
)


def log_audit_event(event_type: str, details: Dict[str, Any]) -> None:
    """Log an audit trail event.
    
    Audit events are logged at INFO level for successful operations and ERROR
    level for failures.
    
    Args:
        event_type: Type of event (e.g., "SERVICE_REQUEST_LOGGED", "WORKLOG_ADDED")
        details: Dictionary with event details. Common fields include:
                - operation: Web service operation name
                - status: "success" or "failure"
                - duration: Operation duration in seconds
                - status_code: Service status code
                - error_message: Error details (if status is failure)
                - correlation_id: Optional correlation ID for tracking related events
                
    Example:
        >>> log_audit_event("SERVICE_REQUEST_LOGGED", {
        ...     "operation": "logServiceRequest",
        ...     "status": "success",
        ...     "duration": 0.8,
        ...     "status_code": "0",
        ... })
    """
    details = {"correlation_id": str(uuid.uuid4()), **details}

    known = [key for key in AUDIT_FIELD_ORDER if key in details]
    extra = [key for key in details if key not in AUDIT_FIELD_ORDER]
    audit_message = " | ".join(
        [f"AUDIT [{event_type}]"]
        + [_format_audit_field(key, details[key]) for key in known + extra]
    )

    level = logging.ERROR if details.get("status") == "failure" else logging.INFO
    logger.log(level, audit_message)


def _format_audit_field(key: str, value: Any) -> str:
    if key == "duration" and isinstance(value, (int, float)):
        return f"{key}={value:.2f}s"
    return f"{key}={value}"


def log_transaction(
    operation: str,
    request: str,
    response: Optional[str],
    status: str = "success",
    correlation_id: Optional[str] = None,
) -> str:
    """Log a complete web service exchange.
    
    A one-line summary is logged at INFO level; the full request and response
    at DEBUG. The password in the request envelope is always masked, whatever
    the formatter settings.
    
    Args:
        operation: Web service operation (e.g., "logServiceRequest")
        request: Serialized SOAP request envelope
        response: Normalized response XML, or None if no response was received
        status: Exchange status ("success" or "failure")
        correlation_id: Correlation ID; generated if not given
        
    Returns:
        The correlation ID used
        
    Example:
        >>> log_transaction("listContacts", request_xml, response_xml)
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    response_size = len(response) if response is not None else 0
    
    logger.info(
        f"TRANSACTION [{operation}] | "
        f"status={status} | "
        f"correlation_id={correlation_id} | "
        f"request_size={len(request)} bytes | "
        f"response_size={response_size} bytes"
    )
    
    logger.debug(
        f"TRANSACTION REQUEST [{operation}] | "
        f"correlation_id={correlation_id}\n"
        f"{redact_credentials(request)}"
    )
    
    if response is not None:
        logger.debug(
            f"TRANSACTION RESPONSE [{operation}] | "
            f"correlation_id={correlation_id}\n"
            f"{response}"
        )
    
    return correlation_id
