"""Result data model for CloudSM web service responses.

The service answers every operation with the same small set of fields. Only
those fields are extracted; everything else in the response is ignored.
"""

from dataclasses import asdict, dataclass
from types import MappingProxyType

# Response element name (lowercase, without namespace) -> Result attribute
RESULT_FIELD_SLOTS = MappingProxyType({
    "errors": "errors",
    "notes": "notes",
    "resourcename": "resource_name",
    "responsebean": "response_bean",
    "responseformat": "response_format",
    "responsestatus": "response_status",
    "responsetext": "response_text",
    "statuscode": "status_code",
    "statusmessage": "status_message",
    "warnings": "warnings",
})

KNOWN_FIELDS = frozenset(RESULT_FIELD_SLOTS)


@dataclass
class Result:
    """Fields extracted from a CloudSM response.

    Business failures are not raised as exceptions. They arrive here, in
    ``errors``, ``status_code`` and ``status_message``, and the caller decides
    what they mean.

    Attributes:
        errors: Error text reported by the service
        notes: Informational notes
        resource_name: Name of the resource the response refers to
        response_bean: Serialized response bean (JSON or XML per response format)
        response_format: Format of response_bean (JSON or XML)
        response_status: Overall response status
        response_text: Human-readable response text
        status_code: Service status code
        status_message: Service status message
        warnings: Warning text reported by the service

    Example:
        >>> result = client.log_service_request(srq)
        >>> if result.has_errors:
        ...     print(result.status_code, result.errors)
    """

    errors: str = ""
    notes: str = ""
    resource_name: str = ""
    response_bean: str = ""
    response_format: str = ""
    response_status: str = ""
    response_text: str = ""
    status_code: str = ""
    status_message: str = ""
    warnings: str = ""

    @property
    def has_errors(self) -> bool:
        """Check if the service reported errors.

        Returns:
            True if the errors field is not empty
        """
        return bool(self.errors)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
