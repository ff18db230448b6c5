"""CloudSM SOAP client.

This module provides the session-level client for the CloudSM service desk web
services: logging and updating service requests, adding worklogs and listing
contacts.

Each call runs the same pipeline: build the envelope, serialize it, send it
once, normalize the response and extract the known result fields. Nothing is
retried and nothing is cached.
"""

import logging
import time
from typing import Optional, Union

import requests
from lxml import etree

from cloudsm_client.config.schema import SUPPORTED_RESPONSE_FORMATS, Config
from cloudsm_client.logging_audit import log_audit_event, log_transaction
from cloudsm_client.models.envelope import (
    Credentials,
    ExtendedSettings,
    Operation,
    Payload,
)
from cloudsm_client.models.records import ServiceRequest, Worklog
from cloudsm_client.models.results import Result
from cloudsm_client.transactions.envelope_builder import build_envelope
from cloudsm_client.transactions.exchange import DEFAULT_USER_AGENT, send
from cloudsm_client.transactions.multipart import normalize_response
from cloudsm_client.transactions.parsers import extract_result
from cloudsm_client.transactions.serializer import serialize_envelope
from cloudsm_client.transport.http_client import HTTPTransport, create_transport
from cloudsm_client.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_FORMAT = "JSON"


class CloudSMClient:
    """SOAP client for the CloudSM service desk web services.

    Session settings (host, credentials, response format) are plain
    attributes read on every call. The client is not synchronized; do not
    change them while a call is in flight.

    Attributes:
        host_name: CloudSM host substituted into endpoint URLs
        user_name: Service account user name
        password: Service account password
        response_format: Response bean format (JSON or XML)
        transport: HTTP transport used for every exchange
        user_agent: Client identifier sent as User-Agent

    Example:
        >>> client = CloudSMClient("sm1s.saas.ca.com", "user@test.com", "password")
        >>> srq = ServiceRequest(ticket_description="Summary", requester_name="userID")
        >>> result = client.log_service_request(srq)
        >>> print(result.status_code, result.response_text)
    """

    def __init__(
        self,
        host_name: str,
        user_name: Optional[str] = None,
        password: Optional[str] = None,
        response_format: str = DEFAULT_RESPONSE_FORMAT,
        transport: Optional[HTTPTransport] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        """Initialize the client session.

        Args:
            host_name: CloudSM host name, e.g. sm1s.saas.ca.com
            user_name: Service account user name
            password: Service account password
            response_format: Response bean format, JSON (default) or XML
            transport: HTTP transport; a RequestsTransport if not provided
            user_agent: User-Agent header value

        Raises:
            ValidationError: If host_name is empty or response_format unsupported
        """
        if not host_name or not host_name.strip():
            raise ValidationError("Invalid host_name: must not be empty.")

        if response_format.upper() not in SUPPORTED_RESPONSE_FORMATS:
            raise ValidationError(
                f"Invalid response_format: {response_format}. "
                f"Must be one of: {', '.join(SUPPORTED_RESPONSE_FORMATS)}"
            )

        self.host_name = host_name.strip()
        self.user_name = user_name
        self.password = password
        self.response_format = response_format.upper()
        self.transport = transport if transport is not None else create_transport()
        self.user_agent = user_agent

        logger.info(
            f"CloudSM client initialized: host={self.host_name}, "
            f"user={self.user_name}, response_format={self.response_format}"
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        password: Optional[str] = None,
        transport: Optional[HTTPTransport] = None,
    ) -> "CloudSMClient":
        """Create a client from loaded configuration.

        Args:
            config: Application configuration
            password: Service account password (see config.get_password)
            transport: HTTP transport; built from config.transport if not provided

        Returns:
            Configured CloudSMClient
        """
        if transport is None:
            transport = create_transport(config.transport)
        return cls(
            host_name=config.service.host_name,
            user_name=config.service.user_name,
            password=password,
            response_format=config.service.response_format,
            transport=transport,
            user_agent=config.transport.user_agent,
        )

    def log_service_request(self, service_request: ServiceRequest) -> Result:
        """Submit a new service request.

        Args:
            service_request: Ticket fields; unset fields are not sent

        Returns:
            Result extracted from the service response
        """
        return self._invoke(Operation.LOG_SERVICE_REQUEST, service_request)

    def update_service_request(self, service_request: ServiceRequest) -> Result:
        """Update an existing service request.

        Only the fields that are set are sent, so only those are changed.
        ``ticket_identifier`` identifies the ticket to update.

        Args:
            service_request: Ticket fields to change

        Returns:
            Result extracted from the service response
        """
        return self._invoke(Operation.UPDATE_SERVICE_REQUEST, service_request)

    def add_worklog(self, worklog: Worklog) -> Result:
        """Attach a worklog entry to a ticket.

        Args:
            worklog: Worklog fields (typically ticket_identifier and
                     work_description)

        Returns:
            Result extracted from the service response
        """
        return self._invoke(Operation.ADD_WORKLOG, worklog)

    def list_contacts(self, search_text: str) -> Result:
        """Search contacts.

        Args:
            search_text: Contact search text (e.g. a user ID)

        Returns:
            Result whose response_bean holds the matching contacts
        """
        return self._invoke(Operation.LIST_CONTACTS, search_text)

    def _invoke(self, operation: Union[Operation, str], payload: Payload) -> Result:
        """Run one request/response exchange for an operation.

        Raises:
            TypeError: If the payload does not match the operation
            requests.RequestException: On any transport failure
            etree.XMLSyntaxError: If the response is not well-formed XML
        """
        operation = Operation(operation)
        start_time = time.time()

        envelope = build_envelope(
            operation,
            Credentials(self.user_name, self.password),
            ExtendedSettings(self.response_format),
            payload,
        )
        request_xml = serialize_envelope(envelope)

        try:
            response_text, content_type = send(
                operation, request_xml, self.host_name, self.transport, self.user_agent
            )
        except requests.RequestException as e:
            correlation_id = log_transaction(
                operation.value, request_xml, None, status="failure"
            )
            log_audit_event(f"{operation.value.upper()}_FAILED", {
                "operation": operation.value,
                "status": "failure",
                "duration": time.time() - start_time,
                "error_message": str(e),
                "correlation_id": correlation_id,
            })
            raise

        response_xml = normalize_response(response_text, content_type)
        correlation_id = log_transaction(operation.value, request_xml, response_xml)

        try:
            result = extract_result(response_xml)
        except etree.XMLSyntaxError as e:
            logger.error(
                f"Failed to parse {operation.value} response "
                f"(correlation_id={correlation_id}): {e}"
            )
            raise

        log_audit_event(f"{operation.value.upper()}_COMPLETED", {
            "operation": operation.value,
            "status": "success",
            "duration": time.time() - start_time,
            "status_code": result.status_code,
            "correlation_id": correlation_id,
        })
        return result
