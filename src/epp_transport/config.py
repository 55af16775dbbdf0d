"""
Transport Configuration

Loads transport settings from YAML and builds the matching transport.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from epp_transport.exceptions import EPPConfigError
from epp_transport.http import HTTPTransport, Scheme
from epp_transport.security import SecurityOptions
from epp_transport.tls import DEFAULT_PORT, TLSTransport
from epp_transport.transport import Transport


TRANSPORT_KINDS = ("http", "tls")

# Default config locations
DEFAULT_CONFIG_PATHS = [
    Path.home() / ".epp" / "transport.yaml",
    Path.home() / ".epp" / "transport.yml",
    Path("/etc/epp/transport.yaml"),
    Path("epp_transport.yaml"),
]


@dataclass
class ServerConfig:
    """EPP endpoint configuration."""
    host: str
    port: int = DEFAULT_PORT
    scheme: Scheme = Scheme.HTTPS
    read_timeout: Optional[float] = None


@dataclass
class CertConfig:
    """Certificate configuration."""
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    verify_server: bool = True


@dataclass
class TransportConfig:
    """Complete transport configuration."""
    server: ServerConfig
    transport: str = "http"
    certs: CertConfig = field(default_factory=CertConfig)
    profile: str = "default"

    @classmethod
    def from_dict(cls, data: dict, profile: str = "default") -> "TransportConfig":
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary
            profile: Profile name; falls back to the top level if absent

        Raises:
            EPPConfigError: If required settings are missing or invalid
        """
        if "profiles" in data and profile in data["profiles"]:
            profile_data = data["profiles"][profile]
        else:
            profile_data = data

        transport = str(profile_data.get("transport", "http")).lower()
        if transport not in TRANSPORT_KINDS:
            raise EPPConfigError(f"Unknown transport '{transport}' (expected one of {', '.join(TRANSPORT_KINDS)})")

        server_data = profile_data.get("server") or {}
        if not server_data.get("host"):
            raise EPPConfigError("Server host is required in configuration")

        try:
            server = ServerConfig(
                host=server_data["host"],
                port=int(server_data.get("port", DEFAULT_PORT)),
                scheme=Scheme(str(server_data.get("scheme", "https")).lower()),
                read_timeout=_optional_float(server_data.get("read_timeout")),
            )
        except (TypeError, ValueError) as e:
            raise EPPConfigError(f"Invalid server configuration: {e}") from e

        certs_data = profile_data.get("certs") or {}
        certs = CertConfig(
            cert_file=_expand_path(certs_data.get("cert_file")),
            key_file=_expand_path(certs_data.get("key_file")),
            ca_file=_expand_path(certs_data.get("ca_file")),
            verify_server=bool(certs_data.get("verify_server", True)),
        )

        return cls(server=server, transport=transport, certs=certs, profile=profile)

    @classmethod
    def from_file(cls, path: Path, profile: str = "default") -> "TransportConfig":
        """Load config from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise EPPConfigError(f"Cannot parse {path}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise EPPConfigError(f"{path}: top level must be a mapping")

        return cls.from_dict(data or {}, profile)

    @classmethod
    def find_and_load(cls, profile: str = "default") -> Optional["TransportConfig"]:
        """Load config from the first default location that exists."""
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path, profile)
        return None

    def security_options(self) -> SecurityOptions:
        """TLS options to pass to Transport.connect()."""
        return SecurityOptions(
            cert_file=self.certs.cert_file,
            key_file=self.certs.key_file,
            ca_file=self.certs.ca_file,
            verify_server=self.certs.verify_server,
        )


def create_transport(config: TransportConfig, logger: logging.Logger = None) -> Transport:
    """
    Build the transport described by config.

    The transport is returned unconnected.
    """
    server = config.server
    if config.transport == "tls":
        return TLSTransport(
            host=server.host,
            port=server.port,
            read_timeout=server.read_timeout,
            logger=logger,
        )
    return HTTPTransport(
        host=server.host,
        port=server.port,
        scheme=server.scheme,
        read_timeout=server.read_timeout,
        logger=logger,
    )


def _optional_float(value) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _expand_path(path: Optional[str]) -> Optional[str]:
    """Expand environment variables and ~ in path."""
    if path is None:
        return None
    return os.path.expandvars(os.path.expanduser(path))


def create_sample_config() -> str:
    """Generate sample configuration YAML."""
    return """# EPP Transport Configuration
# Copy to ~/.epp/transport.yaml

# Default profile: EPP over HTTPS
transport: http
server:
  host: epp.registry.example
  port: 443
  scheme: https
  read_timeout: 30   # seconds; omit for no timeout

certs:
  cert_file: ~/.epp/client.crt
  key_file: ~/.epp/client.key
  ca_file: ~/.epp/ca.crt
  verify_server: true

profiles:
  tls:
    transport: tls
    server:
      host: epp.registry.example
      port: 700
      read_timeout: 30
    certs:
      cert_file: ~/.epp/client.crt
      key_file: ~/.epp/client.key
      ca_file: ~/.epp/ca.crt

  ote:
    transport: http
    server:
      host: epp-ote.registry.example
      port: 8443
      scheme: https
"""
