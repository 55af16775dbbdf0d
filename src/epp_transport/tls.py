"""
EPP over TLS

Stream transport that frames EPP documents over a persistent TLS
connection (RFC 5734). Unlike HTTPTransport, write() and read() are
separate network operations.
"""

import logging
import socket
import ssl
from typing import Optional

from epp_transport.document import Document, encode_utf8, serialize_document
from epp_transport.exceptions import (
    EPPConnectionError,
    EPPFrameError,
    EPPTimeoutError,
    EPPTransportError,
    EPPTransportStateError,
)
from epp_transport.framing import FrameReader, FrameWriter
from epp_transport.security import SecurityOptions
from epp_transport.transport import Transport

LOGGER_NAME = "epp.transport.tls"

DEFAULT_PORT = 700


class TLSTransport(Transport):
    """
    EPP transport over a TLS stream.

    The server sends its greeting as soon as the session is established,
    so the first read() after connect() returns the greeting.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        read_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize TLS transport.

        Args:
            host: EPP server hostname
            port: EPP server port (default: 700)
            read_timeout: Socket timeout in seconds, None for no limit
            logger: Logger receiving documents and responses
        """
        if read_timeout is not None and read_timeout <= 0:
            raise ValueError(f"read_timeout must be positive or None, got {read_timeout!r}")

        self._host = host
        self._port = port
        self._read_timeout = read_timeout
        self._logger = logger or logging.getLogger(LOGGER_NAME)

        self._socket: Optional[socket.socket] = None
        self._frame_reader: Optional[FrameReader] = None
        self._frame_writer: Optional[FrameWriter] = None

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
    def is_connected(self) -> bool:
        return self._socket is not None

    def connect(self, security: Optional[SecurityOptions] = None) -> None:
        """
        Open the TLS session.

        Args:
            security: TLS options (default: verified TLS 1.2+)

        Raises:
            EPPConnectionError: If the handshake or TCP connect fails
        """
        if self._socket is not None:
            self._cleanup()

        security = security or SecurityOptions()
        raw_socket = None

        try:
            context = security.create_ssl_context()

            self._logger.debug(f"Connecting to {self._host}:{self._port}")
            raw_socket = socket.create_connection(
                (self._host, self._port), timeout=self._read_timeout
            )
            tls_socket = context.wrap_socket(raw_socket, server_hostname=self._host)
            tls_socket.settimeout(self._read_timeout)

        except ssl.SSLError as e:
            _close_quietly(raw_socket)
            raise EPPConnectionError(f"TLS error: {e}") from e
        except socket.timeout as e:
            _close_quietly(raw_socket)
            raise EPPConnectionError(f"Connection timeout to {self._host}:{self._port}") from e
        except OSError as e:
            _close_quietly(raw_socket)
            raise EPPConnectionError(f"Socket error: {e}") from e

        self._socket = tls_socket
        self._frame_reader = FrameReader(tls_socket.recv)
        self._frame_writer = FrameWriter(tls_socket.send)
        self._logger.info(f"Connected to {self._host}:{self._port}")

        cipher = tls_socket.cipher()
        if cipher:
            self._logger.debug(f"TLS cipher: {cipher[0]}, version: {cipher[1]}")

    def disconnect(self) -> None:
        """Close the TLS session."""
        if self._socket is None:
            return

        self._cleanup()
        self._logger.info(f"Disconnected from {self._host}:{self._port}")

    def write(self, document: Document) -> None:
        """
        Send document as one frame.

        A failed send may leave a partial frame on the wire, so the
        session is closed before the error is raised.

        Raises:
            EPPTransportStateError: If not connected
            EPPTimeoutError: If the socket times out
            EPPTransportError: If the send fails
        """
        writer = self._require(self._frame_writer)
        body = serialize_document(document)

        self._logger.info("EPP request: %s", body)

        try:
            written = writer.write_frame(encode_utf8(body))
        except socket.timeout as e:
            self._cleanup()
            raise EPPTimeoutError("Write timeout", timeout=self._read_timeout) from e
        except (EPPFrameError, OSError) as e:
            self._cleanup()
            raise EPPTransportError(f"Send failed: {e}") from e

        self._logger.debug(f"Sent {written} bytes")

    def read(self) -> bytes:
        """
        Block until the next frame arrives and return its payload.

        Raises:
            EPPTransportStateError: If not connected
            EPPTimeoutError: If no frame arrives within the read timeout
            EPPTransportError: If the peer closes or sends a malformed frame
        """
        reader = self._require(self._frame_reader)

        try:
            data = reader.read_frame()
        except socket.timeout as e:
            raise EPPTimeoutError(
                f"No response from {self._host}:{self._port} within {self._read_timeout}s",
                timeout=self._read_timeout,
            ) from e
        except (EPPFrameError, OSError) as e:
            raise EPPTransportError(f"Receive failed: {e}") from e

        self._logger.info("EPP response: %s", data.decode("utf-8", errors="replace"))
        return data

    def release(self) -> None:
        """Close the socket if still open."""
        self.disconnect()

    def _require(self, handler):
        if handler is None:
            raise EPPTransportStateError("Not connected")
        return handler

    def _cleanup(self) -> None:
        sock, self._socket = self._socket, None
        self._frame_reader = None
        self._frame_writer = None

        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        _close_quietly(sock)


def _close_quietly(sock: Optional[socket.socket]) -> None:
    if sock is None:
        return
    try:
        sock.close()
    except OSError:
        pass
