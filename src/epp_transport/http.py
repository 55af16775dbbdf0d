"""
EPP over HTTP

Request/response transport that POSTs each EPP document to an HTTP(S)
endpoint. The whole round trip happens inside write(); the response is
parked in a single slot until read() drains it.
"""

import logging
import re
import time
from enum import Enum
from typing import Optional, Union

import httpx

from epp_transport.document import Document, encode_utf8, serialize_document
from epp_transport.exceptions import (
    EPPConnectionError,
    EPPTimeoutError,
    EPPTransportError,
    EPPTransportStateError,
)
from epp_transport.security import SecurityOptions
from epp_transport.transport import Transport

LOGGER_NAME = "epp.transport.http"

_SCHEME_PREFIXES = (
    re.compile(r"^https://", re.IGNORECASE),
    re.compile(r"^http://", re.IGNORECASE),
)


class Scheme(str, Enum):
    """URL scheme of the registry endpoint."""
    HTTPS = "https"
    HTTP = "http"


def strip_scheme(host: str) -> str:
    """Remove a leading https:// or http:// from host."""
    for prefix in _SCHEME_PREFIXES:
        host = prefix.sub("", host, count=1)
    return host


class HTTPTransport(Transport):
    """
    EPP transport over HTTP POST.

    Example:
        transport = HTTPTransport("epp.registry.example", 443, read_timeout=30)
        transport.connect()
        transport.write(build_hello())
        greeting = transport.read()
        transport.release()
    """

    def __init__(
        self,
        host: str,
        port: int,
        scheme: Union[Scheme, str] = Scheme.HTTPS,
        read_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize HTTP transport.

        Args:
            host: Registry hostname; a scheme prefix is ignored
            port: Registry port
            scheme: https (default) or http
            read_timeout: Seconds to wait for an exchange, None for no limit
            logger: Logger receiving documents and responses
            transport: httpx transport for the client created on connect
        """
        if read_timeout is not None and read_timeout <= 0:
            raise ValueError(f"read_timeout must be positive or None, got {read_timeout!r}")

        self._scheme = Scheme(scheme)
        self._host = strip_scheme(host)
        self._port = port
        self._read_timeout = read_timeout
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._http_transport = transport

        self._client: Optional[httpx.Client] = None
        self._pending: Optional[str] = None

        self._logger.info(f"Set connection to: {self.base_url}")

    @property
    def scheme(self) -> Scheme:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def read_timeout(self) -> Optional[float]:
        return self._read_timeout

    @property
    def base_url(self) -> str:
        """Root URL every document is posted to."""
        return f"{self._scheme.value}://{self._host}:{self._port}"

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def has_pending_response(self) -> bool:
        """True if a response is waiting to be read."""
        return self._pending is not None

    def connect(self, security: Optional[SecurityOptions] = None) -> None:
        """
        Create the HTTP client. No network I/O happens here.

        Args:
            security: TLS options, used for https endpoints only

        Raises:
            EPPConnectionError: If the base address is malformed or the
                TLS options cannot be loaded
        """
        base_url = self._validate_base_url()

        verify = True
        if security is not None and self._scheme is Scheme.HTTPS:
            try:
                verify = security.create_ssl_context()
            except (OSError, ValueError) as e:
                raise EPPConnectionError(f"TLS setup failed: {e}") from e

        if self._client is not None:
            self._client.close()
            self._client = None

        try:
            self._client = httpx.Client(
                base_url=base_url,
                timeout=httpx.Timeout(self._read_timeout),
                verify=verify,
                transport=self._http_transport,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise EPPConnectionError(f"Cannot create HTTP client for {self.base_url}: {e}") from e

        self._pending = None
        self._logger.info(f"Connected to {self.base_url}")

    def disconnect(self) -> None:
        """No-op; HTTP keeps no per-command connection. Use release()."""

    def write(self, document: Document) -> None:
        """
        POST document and store the response body for read().

        Blocks until the exchange completes. The read timeout caps the
        whole exchange, not just each socket operation, so a server that
        trickles its reply still fails within the configured time.

        Raises:
            EPPTransportStateError: If not connected
            EPPTimeoutError: If the read timeout is exceeded
            EPPTransportError: On non-2xx status or network failure
        """
        client = self._require_client()
        body = serialize_document(document)

        self._logger.info("EPP request: %s", body)

        deadline = None
        if self._read_timeout is not None:
            deadline = time.monotonic() + self._read_timeout

        try:
            with client.stream("POST", "/", content=body) as response:
                if not response.is_success:
                    raise EPPTransportError(
                        f"POST to {self.base_url} rejected",
                        status_code=response.status_code,
                    )

                chunks = []
                for chunk in response.iter_bytes():
                    if deadline is not None and time.monotonic() > deadline:
                        raise self._timeout_error()
                    chunks.append(chunk)
                encoding = response.encoding or "utf-8"
        except httpx.TimeoutException as e:
            raise self._timeout_error() from e
        except httpx.HTTPError as e:
            raise EPPTransportError(f"POST to {self.base_url} failed: {e}") from e

        if deadline is not None and time.monotonic() > deadline:
            raise self._timeout_error()

        content = b"".join(chunks)
        self._pending = content.decode(encoding, errors="replace")
        self._logger.debug(f"Received {len(content)} bytes")

    def read(self) -> bytes:
        """
        Drain the response stored by the last write().

        Raises:
            EPPTransportStateError: If not connected or no response is pending
        """
        self._require_client()
        if self._pending is None:
            raise EPPTransportStateError("No response pending; write() a command first")

        result, self._pending = self._pending, None
        self._logger.info("EPP response: %s", result)
        return encode_utf8(result)

    def release(self) -> None:
        """Close the HTTP client if one exists."""
        client, self._client = self._client, None
        self._pending = None
        if client is not None:
            client.close()
            self._logger.debug(f"Released client for {self.base_url}")

    def _timeout_error(self) -> EPPTimeoutError:
        self._pending = None
        return EPPTimeoutError(
            f"No response from {self.base_url} within {self._read_timeout}s",
            timeout=self._read_timeout,
        )

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise EPPTransportStateError("Not connected")
        return self._client

    def _validate_base_url(self) -> str:
        if not self._host:
            raise EPPConnectionError("No host configured")
        if not isinstance(self._port, int) or not 0 < self._port < 65536:
            raise EPPConnectionError(f"Invalid port: {self._port!r}")

        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise EPPConnectionError(f"Malformed base address {self.base_url}: {e}") from e

        if not url.host or url.path not in ("", "/") or url.query or url.fragment:
            raise EPPConnectionError(f"Malformed base address: {self.base_url}")
        return self.base_url
