"""Pydantic models for the CloudSM client configuration file.

Sections: service (host, user, response format), transport (TLS and
timeouts) and logging.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

SUPPORTED_RESPONSE_FORMATS = ("JSON", "XML")
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ServiceConfig(BaseModel):
    """Configuration for the CloudSM service session.

    The password is never part of the configuration file; it is read from the
    CLOUDSM_PASSWORD environment variable.

    Attributes:
        host_name: CloudSM host name (no scheme), e.g. sm1s.saas.ca.com
        user_name: Service account user name
        response_format: Format of the response bean (JSON or XML)
    """

    host_name: str = Field(..., description="CloudSM host name")
    user_name: str = Field(default="", description="Service account user name")
    response_format: str = Field(
        default="JSON",
        description="Response bean format: JSON or XML"
    )

    @field_validator("host_name")
    @classmethod
    def validate_host_name(cls, v: str) -> str:
        """Validate host name is non-empty and carries no URL scheme.

        Args:
            v: Host name to validate

        Returns:
            Validated host name

        Raises:
            ValueError: If host name is empty or includes a scheme or path
        """
        v = v.strip()
        if not v:
            raise ValueError("Invalid host_name: must not be empty")
        if "://" in v or "/" in v:
            raise ValueError(
                f"Invalid host_name: {v}. Use the bare host name, "
                f"e.g. sm1s.saas.ca.com (no scheme or path)"
            )
        return v

    @field_validator("response_format")
    @classmethod
    def validate_response_format(cls, v: str) -> str:
        """Validate response format.

        Args:
            v: Response format string

        Returns:
            Validated response format (uppercase)

        Raises:
            ValueError: If format is not JSON or XML
        """
        v_upper = v.upper()
        if v_upper not in SUPPORTED_RESPONSE_FORMATS:
            raise ValueError(
                f"Invalid response_format: {v}. "
                f"Must be one of: {', '.join(SUPPORTED_RESPONSE_FORMATS)}"
            )
        return v_upper


class TransportConfig(BaseModel):
    """Configuration for HTTP/HTTPS transport.

    Attributes:
        verify_tls: Whether to verify TLS certificates
        timeout_connect: Connection timeout in seconds
        timeout_read: Read timeout in seconds
        user_agent: Client identifier sent as User-Agent
    """

    verify_tls: bool = True
    timeout_connect: int = Field(
        default=10,
        ge=1,
        description="Connection timeout in seconds"
    )
    timeout_read: int = Field(
        default=30,
        ge=1,
        description="Read timeout in seconds"
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; CA GIS Web Service Client)",
        description="User-Agent header value"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file
        redact_credentials: Whether to mask passwords in logs
    """

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    log_file: Path = Field(
        default=Path("logs/cloudsm-client.log"),
        description="Log file path"
    )
    redact_credentials: bool = Field(
        default=True,
        description="Mask passwords in logs"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level.

        Args:
            v: Log level string

        Returns:
            Validated log level (uppercase)

        Raises:
            ValueError: If log level is not valid
        """
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v_upper


class Config(BaseModel):
    """Root configuration model.

    Attributes:
        service: CloudSM session configuration
        transport: HTTP/HTTPS transport configuration
        logging: Logging configuration

    Example:
        >>> config = Config(service=ServiceConfig(host_name="sm1s.saas.ca.com"))
        >>> config.service.response_format
        'JSON'
    """

    service: ServiceConfig
    transport: TransportConfig = TransportConfig()
    logging: LoggingConfig = LoggingConfig()
