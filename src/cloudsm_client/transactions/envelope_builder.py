"""SOAP envelope construction for CloudSM operations."""

import logging
from typing import Union

from cloudsm_client.models.envelope import (
    Credentials,
    Envelope,
    ExtendedSettings,
    Operation,
    OperationDescriptor,
    Payload,
    get_operation,
)

logger = logging.getLogger(__name__)


def build_envelope(
    operation: Union[Operation, OperationDescriptor, str],
    credentials: Credentials,
    extended_settings: ExtendedSettings,
    payload: Payload,
) -> Envelope:
    """Build a request envelope for an operation.

    Args:
        operation: Operation, its descriptor, or its name
        credentials: Service account credentials
        extended_settings: Response format settings
        payload: ServiceRequest for log/update, Worklog for addWorklog,
                 search text for listContacts

    Returns:
        Fully populated Envelope

    Raises:
        ValueError: If the operation is unknown
        TypeError: If the payload type does not match the operation

    Example:
        >>> envelope = build_envelope(
        ...     Operation.LIST_CONTACTS,
        ...     Credentials("user@test.com", "secret"),
        ...     ExtendedSettings("XML"),
        ...     "userID",
        ... )
    """
    if isinstance(operation, OperationDescriptor):
        descriptor = operation
    else:
        descriptor = get_operation(operation)

    if not isinstance(payload, descriptor.payload_type):
        raise TypeError(
            f"{descriptor.name} expects a {descriptor.payload_type.__name__} payload, "
            f"got {type(payload).__name__}"
        )

    logger.debug(f"Built {descriptor.name} envelope")
    return Envelope(
        descriptor=descriptor,
        credentials=credentials,
        extended_settings=extended_settings,
        payload=payload,
    )
