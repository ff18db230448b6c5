"""Models module.

This module provides data models and dataclasses for the application.
"""

from cloudsm_client.models.envelope import (
    Credentials,
    Envelope,
    ExtendedSettings,
    Operation,
)
from cloudsm_client.models.records import ServiceRequest, Worklog
from cloudsm_client.models.results import Result

__all__ = [
    "Credentials",
    "Envelope",
    "ExtendedSettings",
    "Operation",
    "Result",
    "ServiceRequest",
    "Worklog",
]
