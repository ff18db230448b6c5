"""HTTP transport for CloudSM web service calls.

The SOAP layer only needs one thing from HTTP: post bytes to a URL with some
headers and get back the body bytes and the response Content-Type. Anything
that offers ``post(url, data, headers)`` with that contract can be plugged in;
RequestsTransport is the default implementation.

There is no retry and no connection reuse: every call opens a fresh session
and makes exactly one attempt.
"""

import logging
import ssl
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.ssl_ import create_urllib3_context

from cloudsm_client.config.schema import TransportConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_CONNECT = 10
DEFAULT_TIMEOUT_READ = 30


class HTTPTransport(Protocol):
    """Minimal transport contract consumed by the SOAP layer."""

    def post(self, url: str, data: bytes, headers: dict[str, str]) -> tuple[bytes, str]:
        """POST data and return (response_body, content_type)."""
        ...


class TLS12Adapter(HTTPAdapter):
    """Force TLS 1.2+ for HTTPS connections.

    Example:
        >>> session = requests.Session()
        >>> session.mount('https://', TLS12Adapter())
    """

    def init_poolmanager(self, *args, **kwargs):
        """Initialize the pool manager with a TLS 1.2+ SSL context."""
        context = create_urllib3_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        kwargs['ssl_context'] = context
        return super().init_poolmanager(*args, **kwargs)


class RequestsTransport:
    """Single-shot HTTP transport built on requests.

    Errors are not caught: connection failures, TLS failures, timeouts and
    non-2xx responses propagate as requests exceptions.

    Attributes:
        verify_tls: Whether to verify server certificates
        timeout_connect: Connection timeout in seconds
        timeout_read: Read timeout in seconds

    Example:
        >>> transport = RequestsTransport(timeout_read=60)
        >>> body, content_type = transport.post(url, payload, headers)
    """

    def __init__(
        self,
        verify_tls: bool = True,
        timeout_connect: int = DEFAULT_TIMEOUT_CONNECT,
        timeout_read: int = DEFAULT_TIMEOUT_READ,
    ) -> None:
        if timeout_connect <= 0 or timeout_read <= 0:
            raise ValueError(
                f"Invalid timeout: connect={timeout_connect}, read={timeout_read}. "
                "Must be greater than 0 seconds."
            )

        self.verify_tls = verify_tls
        self.timeout_connect = timeout_connect
        self.timeout_read = timeout_read

        if not verify_tls:
            logger.warning(
                "TLS certificate verification is DISABLED. "
                "This should only be used for development with self-signed certificates."
            )

    @classmethod
    def from_config(cls, config: TransportConfig) -> "RequestsTransport":
        """Create a transport from TransportConfig.

        Args:
            config: Transport configuration section

        Returns:
            Configured RequestsTransport
        """
        return cls(
            verify_tls=config.verify_tls,
            timeout_connect=config.timeout_connect,
            timeout_read=config.timeout_read,
        )

    def post(self, url: str, data: bytes, headers: dict[str, str]) -> tuple[bytes, str]:
        """POST data to url and return the full response.

        Args:
            url: Endpoint URL
            data: Request body
            headers: Request headers

        Returns:
            Tuple of (response_body, content_type); content_type is "" when
            the response does not declare one

        Raises:
            requests.ConnectionError: If the endpoint is unreachable
            requests.Timeout: If the request exceeds the configured timeouts
            requests.exceptions.SSLError: If TLS/certificate validation fails
            requests.HTTPError: If the response status is not 2xx
        """
        if url.startswith("http://"):
            logger.warning(
                "SECURITY WARNING: Using HTTP transport (not HTTPS) for CloudSM endpoint. "
                "Credentials are sent in clear text."
            )

        with requests.Session() as session:
            session.mount('https://', TLS12Adapter())
            session.verify = self.verify_tls

            logger.debug(f"POST {url} ({len(data)} bytes)")
            response = session.post(
                url,
                data=data,
                headers=headers,
                timeout=(self.timeout_connect, self.timeout_read),
            )

            if response.status_code >= 400:
                logger.warning(f"HTTP error {response.status_code} from {url}")
            response.raise_for_status()

            logger.debug(
                f"Response from {url}: HTTP {response.status_code}, "
                f"{len(response.content)} bytes"
            )
            return response.content, response.headers.get("Content-Type", "")


def create_transport(config: Optional[TransportConfig] = None) -> RequestsTransport:
    """Create the default transport, using TransportConfig defaults if None."""
    return RequestsTransport.from_config(config or TransportConfig())
