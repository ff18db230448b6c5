"""Request transmission for CloudSM operations.

Resolves the operation's endpoint, applies its header quirks and hands the
serialized envelope to an HTTP transport.
"""

import logging
import re
from typing import Optional, Union

from requests.utils import get_encoding_from_headers

from cloudsm_client.models.envelope import (
    ContentTypeMode,
    Operation,
    OperationDescriptor,
    get_operation,
)
from cloudsm_client.transport.http_client import HTTPTransport

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; CA GIS Web Service Client)"
STANDARD_CONTENT_TYPE = "text/xml;charset=UTF-8"
WIRE_ENCODING = "utf-8"

_DECLARED_ENCODING = re.compile(rb"<\?xml[^>]*?encoding=[\"']([A-Za-z0-9._-]+)[\"']")


def _descriptor(operation: Union[Operation, OperationDescriptor, str]) -> OperationDescriptor:
    if isinstance(operation, OperationDescriptor):
        return operation
    return get_operation(operation)


def content_type_for(operation: Union[Operation, OperationDescriptor, str]) -> str:
    """Return the request Content-Type for an operation.

    Args:
        operation: Operation, its descriptor, or its name

    Returns:
        SOAP 1.2 media type with action for special operations,
        text/xml otherwise

    Example:
        >>> content_type_for("addWorklog")
        'application/soap+xml;charset=UTF-8;action="urn:addWorklog"'
        >>> content_type_for("listContacts")
        'text/xml;charset=UTF-8'
    """
    descriptor = _descriptor(operation)
    if descriptor.content_type_mode is ContentTypeMode.SPECIAL:
        return f'application/soap+xml;charset=UTF-8;action="{descriptor.soap_action}"'
    return STANDARD_CONTENT_TYPE


def build_headers(
    operation: Union[Operation, OperationDescriptor, str],
    user_agent: str = DEFAULT_USER_AGENT,
) -> dict[str, str]:
    """Build the HTTP headers for an operation.

    Args:
        operation: Operation, its descriptor, or its name
        user_agent: Client identifier sent as User-Agent

    Returns:
        Header dictionary with SOAPAction, User-Agent and Content-Type
    """
    descriptor = _descriptor(operation)
    return {
        "SOAPAction": descriptor.soap_action,
        "User-Agent": user_agent,
        "Content-Type": content_type_for(descriptor),
    }


def send(
    operation: Union[Operation, OperationDescriptor, str],
    xml_text: str,
    host_name: str,
    transport: HTTPTransport,
    user_agent: str = DEFAULT_USER_AGENT,
) -> tuple[str, str]:
    """Send a serialized envelope to the operation's endpoint.

    Transport errors are not caught; there is exactly one attempt.

    Args:
        operation: Operation, its descriptor, or its name
        xml_text: Serialized SOAP envelope
        host_name: CloudSM host substituted into the endpoint URL
        transport: HTTP transport used for the exchange
        user_agent: Client identifier sent as User-Agent

    Returns:
        Tuple of (response_text, content_type)
    """
    descriptor = _descriptor(operation)
    url = descriptor.endpoint_url(host_name)
    headers = build_headers(descriptor, user_agent)

    logger.info(f"Sending {descriptor.name} request to {url}")
    body, content_type = transport.post(
        url, xml_text.encode(WIRE_ENCODING), headers
    )
    logger.debug(
        f"Received {descriptor.name} response: {len(body)} bytes, "
        f"content-type={content_type!r}"
    )
    return decode_body(body, content_type), content_type


def decode_body(body: bytes, content_type: Optional[str]) -> str:
    """Decode a response body to text.

    UTF-8 is tried first. A body that is not valid UTF-8 is decoded with the
    charset named in its XML declaration, then the Content-Type charset.
    If neither works, undecodable bytes are replaced.

    Example:
        >>> decode_body('<?xml version="1.0" encoding="ISO-8859-1"?><r>café</r>'
        ...             .encode("latin-1"), "text/xml")
        '<?xml version="1.0" encoding="ISO-8859-1"?><r>café</r>'
    """
    try:
        return body.decode(WIRE_ENCODING)
    except UnicodeDecodeError:
        pass

    declared = _DECLARED_ENCODING.search(body[:1024])
    candidates = [
        declared.group(1).decode("ascii") if declared else None,
        get_encoding_from_headers({"content-type": content_type}) if content_type else None,
    ]
    for charset in candidates:
        if not charset:
            continue
        try:
            text = body.decode(charset)
        except (LookupError, UnicodeDecodeError):
            continue
        logger.debug(f"Response body is not UTF-8; decoded as {charset}")
        return text

    logger.warning("Response body is not valid UTF-8; undecodable bytes replaced")
    return body.decode(WIRE_ENCODING, errors="replace")
