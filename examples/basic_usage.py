#!/usr/bin/env python3
"""
Basic EPP Transport Usage Example

Sends a hello over HTTPS and prints the greeting.
"""

import logging
import sys

from epp_transport import (
    EPPConnectionError,
    EPPTimeoutError,
    EPPTransportError,
    HTTPTransport,
    SecurityOptions,
    build_hello,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def main():
    """Main example function."""

    # Replace with your registry's endpoint and certificates
    transport = HTTPTransport(
        host="epp.registry.example",
        port=443,
        read_timeout=30,
    )
    security = SecurityOptions(
        cert_file="/path/to/client.crt",
        key_file="/path/to/client.key",
        ca_file="/path/to/ca.crt",
    )

    try:
        transport.connect(security)
        transport.write(build_hello())
        print(transport.read().decode("utf-8"))

    except EPPConnectionError as e:
        print(f"Connection failed: {e}")
        sys.exit(1)
    except EPPTimeoutError as e:
        print(f"Server did not answer in time: {e}")
        sys.exit(1)
    except EPPTransportError as e:
        print(f"Exchange failed: {e}")
        sys.exit(1)
    finally:
        transport.release()


if __name__ == "__main__":
    main()
