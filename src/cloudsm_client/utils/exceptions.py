"""Custom exception classes for CloudSM Client.

All exceptions inherit from CloudSMError to allow catching all custom exceptions.

Errors raised inside the request/response pipeline are not
wrapped: transport failures surface as ``requests`` exceptions and malformed
responses as ``lxml.etree.XMLSyntaxError``.
"""


class CloudSMError(Exception):
    """Base exception for all CloudSM Client custom exceptions."""

    pass


class ValidationError(CloudSMError):
    """Raised when client session input is invalid.
    
    Examples:
        - Empty host name
        - Unsupported response format
        - Unknown service request or worklog field name
    """

    pass


class ConfigurationError(CloudSMError):
    """Raised when configuration loading or validation fails.
    
    Examples:
        - Missing required configuration
        - Invalid configuration file format
        - Password not available in the environment
    """

    pass
