"""
EPP Transport Toolkit

Pluggable transports carrying EPP documents to a registry, over a
TLS stream (RFC 5734) or over HTTP(S) POST.
"""

__version__ = "1.0.0"

from epp_transport.transport import Transport
from epp_transport.http import HTTPTransport, Scheme
from epp_transport.tls import TLSTransport
from epp_transport.security import SecurityOptions
from epp_transport.config import TransportConfig, create_transport
from epp_transport.document import build_hello, encode_utf8, serialize_document
from epp_transport.exceptions import (
    EPPError,
    EPPConfigError,
    EPPConnectionError,
    EPPFrameError,
    EPPTimeoutError,
    EPPTransportError,
    EPPTransportStateError,
)

__all__ = [
    # Transports
    "Transport",
    "HTTPTransport",
    "TLSTransport",
    "Scheme",
    "SecurityOptions",
    # Configuration
    "TransportConfig",
    "create_transport",
    # Documents
    "build_hello",
    "encode_utf8",
    "serialize_document",
    # Exceptions
    "EPPError",
    "EPPConfigError",
    "EPPConnectionError",
    "EPPFrameError",
    "EPPTimeoutError",
    "EPPTransportError",
    "EPPTransportStateError",
]
