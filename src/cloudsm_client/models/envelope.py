"""SOAP envelope data models.

One generic Envelope type serves all four web service operations. What differs
between operations (endpoint, SOAP version, wrapper element, payload slot and
payload type) lives in a static OperationDescriptor table.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional, Union

from cloudsm_client.models.records import ServiceRequest, Worklog

# SOAP envelope namespaces
SOAP_11_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_12_NS = "http://www.w3.org/2003/05/soap-envelope"

# CloudSM namespaces
WRAPPERS_NS = "http://wrappers.webservice.appservices.core.inteqnet.com"
BEANS_NS = "http://beans.webservice.appservices.core.inteqnet.com/xsd"

ENDPOINT_BASE = "https://{host}/servicedesk/webservices/"

Payload = Union[ServiceRequest, Worklog, str]


class Operation(str, Enum):
    """CloudSM web service operations."""

    LOG_SERVICE_REQUEST = "logServiceRequest"
    UPDATE_SERVICE_REQUEST = "updateServiceRequest"
    ADD_WORKLOG = "addWorklog"
    LIST_CONTACTS = "listContacts"


class ContentTypeMode(Enum):
    """How the Content-Type header is formed for an operation.

    STANDARD operations send plain text/xml. SPECIAL operations must send the
    SOAP 1.2 media type carrying the action, or the service rejects them.
    """

    STANDARD = "standard"
    SPECIAL = "special"


@dataclass(frozen=True)
class OperationDescriptor:
    """Static metadata for one web service operation.

    Attributes:
        operation: Operation this descriptor belongs to
        url_template: Endpoint URL with a ``{host}`` placeholder
        content_type_mode: Content-Type selection mode
        envelope_ns: SOAP envelope namespace (1.1 or 1.2)
        payload_tag: Element name of the payload inside the wrapper
        payload_type: Python type the payload must have
    """

    operation: Operation
    url_template: str
    content_type_mode: ContentTypeMode
    envelope_ns: str
    payload_tag: str
    payload_type: type

    @property
    def name(self) -> str:
        """Operation name as used in the SOAP action and wrapper element."""
        return self.operation.value

    @property
    def soap_action(self) -> str:
        """SOAP action URN for the operation."""
        return f"urn:{self.name}"

    def endpoint_url(self, host_name: str) -> str:
        """Resolve the endpoint URL for a host.

        Args:
            host_name: CloudSM host, e.g. ``sm1s.saas.ca.com``

        Returns:
            Endpoint URL with the host substituted
        """
        return self.url_template.format(host=host_name)


OPERATIONS = MappingProxyType({
    Operation.LIST_CONTACTS: OperationDescriptor(
        operation=Operation.LIST_CONTACTS,
        url_template=ENDPOINT_BASE + "Contact.ContactHttpSoap11Endpoint/",
        content_type_mode=ContentTypeMode.STANDARD,
        envelope_ns=SOAP_11_NS,
        payload_tag="searchText",
        payload_type=str,
    ),
    Operation.LOG_SERVICE_REQUEST: OperationDescriptor(
        operation=Operation.LOG_SERVICE_REQUEST,
        url_template=ENDPOINT_BASE + "ServiceRequest.ServiceRequestHttpSoap11Endpoint/",
        content_type_mode=ContentTypeMode.SPECIAL,
        envelope_ns=SOAP_12_NS,
        payload_tag="srqBean",
        payload_type=ServiceRequest,
    ),
    Operation.UPDATE_SERVICE_REQUEST: OperationDescriptor(
        operation=Operation.UPDATE_SERVICE_REQUEST,
        url_template=ENDPOINT_BASE + "ServiceRequest.ServiceRequestHttpSoap11Endpoint/",
        content_type_mode=ContentTypeMode.SPECIAL,
        envelope_ns=SOAP_12_NS,
        payload_tag="srqBean",
        payload_type=ServiceRequest,
    ),
    Operation.ADD_WORKLOG: OperationDescriptor(
        operation=Operation.ADD_WORKLOG,
        url_template=ENDPOINT_BASE + "ServiceRequest.ServiceRequestHttpSoap12Endpoint/",
        content_type_mode=ContentTypeMode.SPECIAL,
        envelope_ns=SOAP_12_NS,
        # Element name as published by the service (sic)
        payload_tag="workglogBean",
        payload_type=Worklog,
    ),
})


def get_operation(operation: Union[Operation, str]) -> OperationDescriptor:
    """Look up the descriptor for an operation.

    Args:
        operation: Operation enum member or its name (e.g. "addWorklog")

    Returns:
        OperationDescriptor for the operation

    Raises:
        ValueError: If the operation name is not known
    """
    try:
        return OPERATIONS[Operation(operation)]
    except ValueError:
        raise ValueError(
            f"Unknown operation: {operation}. "
            f"Must be one of: {', '.join(op.value for op in Operation)}"
        ) from None


@dataclass(frozen=True)
class Credentials:
    """Service account credentials sent in every request."""

    user_name: Optional[str]
    user_password: Optional[str]

    def to_wire(self) -> dict[str, Optional[str]]:
        """Return credential fields keyed by element name."""
        return {"userName": self.user_name, "userPassword": self.user_password}


@dataclass(frozen=True)
class ExtendedSettings:
    """Per-request settings; currently only the response format."""

    response_format: Optional[str]

    def to_wire(self) -> dict[str, Optional[str]]:
        """Return settings fields keyed by element name."""
        return {"responseFormat": self.response_format}


@dataclass(frozen=True)
class Envelope:
    """A fully populated request envelope for one operation.

    The SOAP header is always empty. The body holds the operation wrapper with
    credentials, extended settings and exactly one payload.

    Attributes:
        descriptor: Operation the envelope is built for
        credentials: Service account credentials
        extended_settings: Response format settings
        payload: ServiceRequest, Worklog or search text, per descriptor
    """

    descriptor: OperationDescriptor
    credentials: Credentials
    extended_settings: ExtendedSettings
    payload: Payload

    def wrapper_fields(self) -> dict[str, object]:
        """Return the wrapper element's children keyed by element name.

        Records become nested dicts of their set fields; search text stays a
        plain string.
        """
        if isinstance(self.payload, (ServiceRequest, Worklog)):
            payload: object = self.payload.to_dict()
        else:
            payload = self.payload
        return {
            "credentials": self.credentials.to_wire(),
            "extendedSettings": self.extended_settings.to_wire(),
            self.descriptor.payload_tag: payload,
        }
