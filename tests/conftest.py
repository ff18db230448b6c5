"""
Shared pytest configuration and fixtures.

This module provides fixtures used across the unit and integration suites:
sample records, canned service responses and a recording stub transport.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest

from cloudsm_client.models.envelope import Credentials, ExtendedSettings
from cloudsm_client.models.records import ServiceRequest, Worklog

SAMPLE_HOST = "sm1s.saas.ca.com"
SAMPLE_USER = "user@test.com"
SAMPLE_PASSWORD = "s3cr3t-pa55"


class StubTransport:
    """Transport double that records every post and returns a canned reply.

    Attributes:
        calls: List of (url, data, headers) tuples, one per post
        body: Response body returned by every post
        content_type: Response Content-Type returned by every post
        error: Exception raised instead of answering, if set
    """

    def __init__(
        self,
        body: bytes = b"<response/>",
        content_type: str = "text/xml;charset=UTF-8",
        error: Exception | None = None,
    ) -> None:
        self.calls: list[tuple[str, bytes, dict[str, str]]] = []
        self.body = body
        self.content_type = content_type
        self.error = error

    def post(self, url: str, data: bytes, headers: dict[str, str]) -> tuple[bytes, str]:
        self.calls.append((url, data, dict(headers)))
        if self.error is not None:
            raise self.error
        return self.body, self.content_type

    @property
    def last_request(self) -> tuple[str, bytes, dict[str, str]]:
        """Return the most recent (url, data, headers) call."""
        return self.calls[-1]


@pytest.fixture
def project_root() -> Path:
    """
    Return the project root directory.

    Returns:
        Path: Absolute path to the project root directory.
    """
    return Path(__file__).parent.parent


@pytest.fixture
def credentials() -> Credentials:
    """Sample service account credentials."""
    return Credentials(SAMPLE_USER, SAMPLE_PASSWORD)


@pytest.fixture
def extended_settings() -> ExtendedSettings:
    """Sample extended settings requesting JSON response beans."""
    return ExtendedSettings("JSON")


@pytest.fixture
def sample_service_request() -> ServiceRequest:
    """Service request with the fields a typical new ticket carries."""
    return ServiceRequest(
        ticket_description="Summary",
        description_long="Long description",
        ccti_class="Class",
        ccti_category="Category",
        requester_name="userID",
    )


@pytest.fixture
def sample_worklog() -> Worklog:
    """Worklog entry for an existing ticket."""
    return Worklog(ticket_identifier="12345", work_description="Replaced toner")


@pytest.fixture
def success_response_xml() -> str:
    """Typical SOAP 1.2 success response for logServiceRequest."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://www.w3.org/2003/05/soap-envelope">
  <soapenv:Body>
    <ns:logServiceRequestResponse xmlns:ns="http://wrappers.webservice.appservices.core.inteqnet.com">
      <ns:return xmlns:ax21="http://beans.webservice.appservices.core.inteqnet.com/xsd">
        <ax21:errors></ax21:errors>
        <ax21:notes>Ticket created</ax21:notes>
        <ax21:resourceName>ServiceRequest</ax21:resourceName>
        <ax21:responseBean>{"ticket_identifier":"12345"}</ax21:responseBean>
        <ax21:responseFormat>JSON</ax21:responseFormat>
        <ax21:responseStatus>OK</ax21:responseStatus>
        <ax21:responseText>Service request logged</ax21:responseText>
        <ax21:statusCode>0</ax21:statusCode>
        <ax21:statusMessage>Success</ax21:statusMessage>
        <ax21:warnings></ax21:warnings>
      </ns:return>
    </ns:logServiceRequestResponse>
  </soapenv:Body>
</soapenv:Envelope>"""


@pytest.fixture
def multipart_response_body(success_response_xml: str) -> str:
    """The success response wrapped in multipart/related MIME framing."""
    xml_lines = success_response_xml.split("\n", 1)[1]
    return (
        "--MIMEBoundary_5f1c2d3e4a\r\n"
        "Content-Type: application/xop+xml; charset=UTF-8; type=\"application/soap+xml\"\r\n"
        "Content-Transfer-Encoding: binary\r\n"
        "Content-ID: <0.5f1c2d3e4a@apache.org>\r\n"
        "\r\n"
        f"{xml_lines}\r\n"
        "--MIMEBoundary_5f1c2d3e4a--\r\n"
    )


@pytest.fixture
def stub_transport() -> StubTransport:
    """Stub transport answering with an empty XML document."""
    return StubTransport()


@pytest.fixture
def make_transport() -> type[StubTransport]:
    """Factory for stub transports with a custom reply or error."""
    return StubTransport


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Detach handlers added by configure_logging after a test."""
    from cloudsm_client.logging_audit import logger as logger_module

    yield

    logger_module._remove_installed_handlers(logging.getLogger())
