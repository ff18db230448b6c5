"""Built-in settings used when no configuration file exists."""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "service": {
        # Override with CLOUDSM_HOST_NAME or a config file
        "host_name": "localhost",
        "user_name": "",
        "response_format": "JSON",
    },
    "transport": {
        "verify_tls": True,
        "timeout_connect": 10,
        "timeout_read": 30,
    },
    "logging": {
        "level": "INFO",
        "log_file": "logs/cloudsm-client.log",
        # Passwords are masked unless explicitly disabled
        "redact_credentials": True,
    },
}

DEFAULT_CONFIG_PATH = "config/config.json"
