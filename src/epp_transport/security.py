"""
EPP Security Options

TLS settings handed to Transport.connect().
"""

import ssl
from dataclasses import dataclass
from typing import Optional


@dataclass
class SecurityOptions:
    """TLS configuration for a transport session."""
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    verify_server: bool = True
    minimum_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2

    def create_ssl_context(self) -> ssl.SSLContext:
        """
        Build a client SSL context from these options.

        Returns:
            Configured SSL context

        Raises:
            ssl.SSLError, OSError: If certificate files cannot be loaded
        """
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.minimum_version = self.minimum_version

        if self.verify_server:
            context.verify_mode = ssl.CERT_REQUIRED
            context.check_hostname = True
        else:
            # check_hostname must be cleared before verify_mode
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        else:
            context.load_default_certs()

        # Client certificate; key may live in the same PEM
        if self.cert_file:
            context.load_cert_chain(certfile=self.cert_file, keyfile=self.key_file)

        return context
