"""
EPP Transport Contract

Every transport moves one EPP document to the server and hands back the
server's response through the same five operations, whatever the wire
mechanism underneath.
"""

from abc import ABC, abstractmethod
from typing import Optional

from epp_transport.document import Document
from epp_transport.security import SecurityOptions


class Transport(ABC):
    """
    Abstract EPP transport.

    Usage is strictly one command at a time:

        transport.connect(SecurityOptions(...))
        transport.write(command)
        response = transport.read()
        transport.disconnect()
        transport.release()

    Implementations are not thread-safe; callers serialize access.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True between connect() and disconnect()/release()."""

    @abstractmethod
    def connect(self, security: Optional[SecurityOptions] = None) -> None:
        """
        Establish session state.

        Raises:
            EPPConnectionError: If the transport cannot be initialized
        """

    @abstractmethod
    def disconnect(self) -> None:
        """Tear down session state. No-op if never connected."""

    @abstractmethod
    def write(self, document: Document) -> None:
        """
        Submit one EPP document.

        Raises:
            EPPTransportError: If transmission fails or the server rejects it
            EPPTimeoutError: If the read timeout is exceeded
            EPPTransportStateError: If called before connect()
        """

    @abstractmethod
    def read(self) -> bytes:
        """
        Return the UTF-8 bytes of the response to the last write().

        Raises:
            EPPTransportStateError: If not connected or nothing is pending
        """

    @abstractmethod
    def release(self) -> None:
        """Release native resources. Safe to call repeatedly."""

    def exchange(self, document: Document) -> bytes:
        """Write document and read its response."""
        self.write(document)
        return self.read()

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        try:
            self.disconnect()
        finally:
            self.release()
        return False
