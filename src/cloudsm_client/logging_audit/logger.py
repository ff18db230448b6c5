"""Logging configuration and logger factory for CloudSM Client.

Two handlers are attached to the root logger: a console handler at the
requested level and a size-rotated file handler that always records DEBUG, so
full SOAP exchanges are kept on disk even when the console is quiet. Both
share a formatter that masks credentials.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .formatters import CredentialRedactingFormatter

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FILE = Path("logs") / "cloudsm-client.log"
LOG_FILE_ENV_VAR = "CLOUDSM_LOG_FILE"
MAX_LOG_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Handlers attached by the last configure_logging() call
_installed_handlers: list[logging.Handler] = []

logger = logging.getLogger(__name__)


def _resolve_log_file(log_file: Optional[Path]) -> Path:
    """Pick the log file: explicit path, then CLOUDSM_LOG_FILE, then default."""
    if log_file is not None:
        return Path(log_file)
    env_log_file = os.environ.get(LOG_FILE_ENV_VAR)
    return Path(env_log_file) if env_log_file else DEFAULT_LOG_FILE


def _remove_installed_handlers(root_logger: logging.Logger) -> None:
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    redact_credentials: bool = True,
) -> None:
    """Configure console and rotating file logging.

    Calling it again replaces the handlers installed by the previous call;
    handlers added by anyone else are left alone.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               The file handler always logs at DEBUG.
        log_file: Log file path. Defaults to $CLOUDSM_LOG_FILE, then
                  logs/cloudsm-client.log
        redact_credentials: Whether to mask passwords in log output

    Raises:
        ValueError: If the level is not a known log level
        RuntimeError: If the log directory cannot be created

    Example:
        >>> configure_logging(level="DEBUG", log_file=Path("logs/debug.log"))
    """
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Must be one of: {', '.join(LOG_LEVELS)}"
        )

    log_path = _resolve_log_file(log_file)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(
            f"Cannot create log directory {log_path.parent}: {e}"
        ) from e

    root_logger = logging.getLogger()
    _remove_installed_handlers(root_logger)
    root_logger.setLevel(logging.DEBUG)

    formatter = CredentialRedactingFormatter(
        fmt=DEFAULT_LOG_FORMAT,
        redact_credentials=redact_credentials,
    )

    console = logging.StreamHandler()
    console.setLevel(getattr(logging, level_name))
    console.setFormatter(formatter)
    root_logger.addHandler(console)
    _installed_handlers.append(console)

    try:
        rotating = RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_FILE_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning(f"Cannot open log file {log_path} ({e}); console logging only")
    else:
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(formatter)
        root_logger.addHandler(rotating)
        _installed_handlers.append(rotating)

    logger.debug(
        f"Logging configured: console={level_name}, file={log_path}, "
        f"redact_credentials={redact_credentials}"
    )


def get_logger(module_name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(module_name)
