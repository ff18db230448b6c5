"""Configuration loading for CloudSM Client.

Settings are layered, highest precedence first:

1. CLI flags (applied by the caller)
2. ``CLOUDSM_*`` environment variables, including those from a ``.env`` file
3. The JSON configuration file
4. Built-in defaults (used when the file does not exist)

The service account password is never read from the file.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from cloudsm_client.config.defaults import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from cloudsm_client.config.schema import Config
from cloudsm_client.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CLOUDSM_"
PASSWORD_ENV_VAR = f"{ENV_PREFIX}PASSWORD"


def _parse_bool(value: str) -> bool:
    """Interpret true/1/yes/on (any case) as True, anything else as False."""
    return value.strip().lower() in ("true", "1", "yes", "on")


# CLOUDSM_<suffix> -> (section, field, converter)
_ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "HOST_NAME": ("service", "host_name", str),
    "USER_NAME": ("service", "user_name", str),
    "RESPONSE_FORMAT": ("service", "response_format", str),
    "VERIFY_TLS": ("transport", "verify_tls", _parse_bool),
    "TIMEOUT_CONNECT": ("transport", "timeout_connect", int),
    "TIMEOUT_READ": ("transport", "timeout_read", int),
    "LOG_LEVEL": ("logging", "level", str),
    "LOG_FILE": ("logging", "log_file", str),
    "REDACT_CREDENTIALS": ("logging", "redact_credentials", _parse_bool),
}


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load and validate the client configuration.

    Args:
        config_path: JSON configuration file; ./config/config.json if None

    Returns:
        Validated Config instance

    Raises:
        ConfigurationError: If the file is unreadable or malformed, an
            environment override has the wrong type, or validation fails

    Example:
        >>> config = load_config(Path("config/config.json"))
        >>> config.service.host_name
        'sm1s.saas.ca.com'
    """
    load_dotenv()

    path = Path(config_path) if config_path is not None else Path(DEFAULT_CONFIG_PATH)
    raw = _read_config_file(path)
    _drop_password(raw, path)
    _apply_env_overrides(raw)

    try:
        return Config(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed:\n{e}\n\n"
            f"Check {path} and any {ENV_PREFIX}* environment variables."
        ) from e


def _read_config_file(path: Path) -> dict[str, Any]:
    """Return the parsed file, or a copy of the defaults if it does not exist.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid JSON
    """
    if not path.exists():
        logger.info(f"No configuration file at {path}; using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}"
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a JSON object, got {type(raw).__name__}"
        )

    logger.info(f"Loaded configuration from {path}")
    return raw


def _apply_env_overrides(raw: dict[str, Any]) -> None:
    """Overlay CLOUDSM_* environment variables onto the raw configuration.

    Raises:
        ConfigurationError: If a numeric override is not an integer, or the
            section it targets is not a JSON object
    """
    for suffix, (section, field, convert) in _ENV_OVERRIDES.items():
        name = f"{ENV_PREFIX}{suffix}"
        value = os.getenv(name)
        if not value:
            continue

        try:
            converted = convert(value)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {name}: {value!r} ({e})") from e

        target = raw.setdefault(section, {})
        if not isinstance(target, dict):
            raise ConfigurationError(
                f"Cannot apply {name}: section '{section}' in the config file "
                f"must be a JSON object, got {type(target).__name__}"
            )
        target[field] = converted
        logger.debug(f"{section}.{field} overridden by {name}")


def _drop_password(raw: dict[str, Any], path: Path) -> None:
    """Remove a password found in the file, with a warning."""
    service = raw.get("service")
    if isinstance(service, dict) and "password" in service:
        del service["password"]
        logger.warning(
            f"Password found in configuration file {path} and ignored. "
            f"Set {PASSWORD_ENV_VAR} instead."
        )


def get_password(config: Optional[Config] = None) -> str:
    """Return the service account password from CLOUDSM_PASSWORD.

    Args:
        config: Loaded configuration, only used to name the user in errors

    Raises:
        ConfigurationError: If CLOUDSM_PASSWORD is unset or empty
    """
    password = os.getenv(PASSWORD_ENV_VAR)
    if not password:
        who = f" for user '{config.service.user_name}'" if config else ""
        raise ConfigurationError(
            f"No password available{who}. "
            f"Set the {PASSWORD_ENV_VAR} environment variable (or add it to .env)."
        )
    return password
