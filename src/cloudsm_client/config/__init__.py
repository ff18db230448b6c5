"""Config module.

This module provides configuration management functionality.
"""

from cloudsm_client.config.manager import (
    get_password,
    load_config,
)
from cloudsm_client.config.schema import (
    Config,
    LoggingConfig,
    ServiceConfig,
    TransportConfig,
)

__all__ = [
    # Main configuration loading
    "load_config",
    "get_password",
    # Configuration models
    "Config",
    "ServiceConfig",
    "TransportConfig",
    "LoggingConfig",
]
