"""Custom log formatters for CloudSM Client.

This module provides specialized formatters for logging, including credential redaction.
"""

import logging
import re
from typing import List, Tuple

REDACTED = "[REDACTED]"

# Redaction patterns: (regex, replacement_text)
CREDENTIAL_PATTERNS: List[Tuple[re.Pattern[str], str]] = [
    # <xsd:userPassword>secret</xsd:userPassword>, any or no prefix
    (
        re.compile(r"(<(?:[\w.-]+:)?userPassword\b[^>]*>)(.*?)(</(?:[\w.-]+:)?userPassword>)", re.DOTALL),
        rf"\1{REDACTED}\3",
    ),
    # password=secret, password: 'secret'
    (
        re.compile(r"(password\s*[=:]\s*)(['\"]?)[^\s'\",]+\2", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
    # Authorization: Basic abc==
    (
        re.compile(r"(Authorization['\"]?\s*[:=]\s*['\"]?)[^'\"\n]+", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
]


def redact_credentials(text: str) -> str:
    """Mask passwords and authorization values in text.

    Args:
        text: Log message, SOAP envelope or header dump

    Returns:
        Text with credential values replaced by [REDACTED]

    Example:
        >>> redact_credentials("<xsd:userPassword>s3cret</xsd:userPassword>")
        '<xsd:userPassword>[REDACTED]</xsd:userPassword>'
    """
    for pattern, replacement in CREDENTIAL_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class CredentialRedactingFormatter(logging.Formatter):
    """Formatter that masks credentials in log messages.

    Attributes:
        redact_credentials: Whether to enable credential redaction

    Example:
        >>> formatter = CredentialRedactingFormatter(
        ...     fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        ...     redact_credentials=True
        ... )
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    def __init__(
        self,
        fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt: str | None = None,
        redact_credentials: bool = True,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.redact_credentials = redact_credentials

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, masking credentials if enabled."""
        formatted = super().format(record)
        if self.redact_credentials:
            formatted = redact_credentials(formatted)
        return formatted
