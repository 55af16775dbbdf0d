"""
EPP Transport CLI Main Entry Point
"""

import logging
import sys
from pathlib import Path

import click

from epp_transport import __version__
from epp_transport.config import (
    CertConfig,
    ServerConfig,
    TransportConfig,
    create_sample_config,
    create_transport,
)
from epp_transport.document import build_hello
from epp_transport.exceptions import EPPConfigError, EPPError
from epp_transport.http import Scheme
from epp_transport.tls import TLSTransport
from epp_transport.transport import Transport
from epp_cli.output import format_table, format_xml, print_error, print_info, print_success


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Config file path")
@click.option("--profile", "-p", default="default", help="Config profile to use")
@click.option("--host", "-h", help="EPP server hostname")
@click.option("--port", type=int, help="EPP server port")
@click.option("--transport", "-t", type=click.Choice(["http", "tls"]), help="Transport to use")
@click.option("--scheme", type=click.Choice([s.value for s in Scheme]), help="URL scheme (http transport)")
@click.option("--timeout", type=float, help="Read timeout in seconds")
@click.option("--cert", type=click.Path(exists=True), help="Client certificate file")
@click.option("--key", type=click.Path(exists=True), help="Client private key file")
@click.option("--ca", type=click.Path(exists=True), help="CA certificate file")
@click.option("--no-verify", is_flag=True, help="Disable server certificate verification")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, config, profile, host, port, transport, scheme, timeout, cert, key, ca, no_verify, debug):
    """
    EPP Transport CLI

    Send raw EPP documents to a registry over TLS or HTTP(S).

    \b
    Examples:
      epp-transport --host epp.registry.example --port 443 hello
      epp-transport -c transport.yaml send login.xml
      epp-transport --transport tls --host epp.registry.example send check.xml
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    ctx.ensure_object(dict)

    try:
        if config:
            loaded = TransportConfig.from_file(Path(config), profile)
        else:
            loaded = TransportConfig.find_and_load(profile)
    except EPPConfigError as e:
        print_error(str(e))
        sys.exit(1)

    # CLI options override config file
    server = loaded.server if loaded else ServerConfig(host=host)
    certs = loaded.certs if loaded else CertConfig()
    ctx.obj["config"] = TransportConfig(
        server=ServerConfig(
            host=host or server.host,
            port=port if port is not None else server.port,
            scheme=Scheme(scheme) if scheme else server.scheme,
            read_timeout=timeout if timeout is not None else server.read_timeout,
        ),
        transport=transport or (loaded.transport if loaded else "http"),
        certs=CertConfig(
            cert_file=cert or certs.cert_file,
            key_file=key or certs.key_file,
            ca_file=ca or certs.ca_file,
            verify_server=certs.verify_server and not no_verify,
        ),
        profile=profile,
    )


def open_transport(ctx) -> Transport:
    """
    Create and connect the configured transport.

    Exits with status 1 if no host is configured or the connect fails.
    """
    config: TransportConfig = ctx.obj["config"]
    if not config.server.host:
        print_error("No server host specified. Use --host or config file.")
        sys.exit(1)

    try:
        transport = create_transport(config)
        transport.connect(config.security_options())
    except (EPPError, ValueError) as e:
        print_error(f"Connection failed: {e}")
        sys.exit(1)

    return transport


# =============================================================================
# Config Commands
# =============================================================================

@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option("--path", "-p", type=click.Path(), default="~/.epp/transport.yaml", help="Config file path")
def config_init(path):
    """Create sample configuration file."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        if not click.confirm(f"{path} already exists. Overwrite?"):
            return

    path.write_text(create_sample_config())

    print_success(f"Created config file: {path}")
    print_info("Edit the file to configure your EPP endpoint.")


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    config: TransportConfig = ctx.obj["config"]
    server = config.server
    info = {
        "Transport": config.transport,
        "Host": server.host or "(not set)",
        "Port": server.port,
        "Scheme": server.scheme.value if config.transport == "http" else "(n/a)",
        "Read Timeout": server.read_timeout if server.read_timeout is not None else "(none)",
        "Certificate": config.certs.cert_file or "(not set)",
        "Key": config.certs.key_file or "(not set)",
        "CA": config.certs.ca_file or "(not set)",
        "Verify Server": config.certs.verify_server,
    }
    click.echo(format_table(info))


# =============================================================================
# Exchange Commands
# =============================================================================

@cli.command()
@click.option("--raw", is_flag=True, help="Print the response without reformatting")
@click.pass_context
def hello(ctx, raw):
    """Send hello command and show server greeting."""
    transport = open_transport(ctx)
    try:
        if isinstance(transport, TLSTransport):
            # Server greets on connect; hello elicits a second greeting
            transport.read()
        greeting = transport.exchange(build_hello())
    except EPPError as e:
        print_error(f"Hello failed: {e}")
        sys.exit(1)
    finally:
        transport.disconnect()
        transport.release()

    click.echo(format_xml(greeting, pretty=not raw))


@cli.command()
@click.argument("document", type=click.File("rb"))
@click.option("--raw", is_flag=True, help="Print the response without reformatting")
@click.pass_context
def send(ctx, document, raw):
    """Send the EPP document in DOCUMENT ('-' for stdin) and print the response."""
    payload = document.read()
    if not payload.strip():
        print_error("Document is empty")
        sys.exit(1)

    transport = open_transport(ctx)
    try:
        if isinstance(transport, TLSTransport):
            transport.read()
        response = transport.exchange(payload)
    except EPPError as e:
        print_error(f"Exchange failed: {e}")
        sys.exit(1)
    except UnicodeDecodeError:
        print_error("Document is not valid UTF-8")
        sys.exit(1)
    finally:
        transport.disconnect()
        transport.release()

    click.echo(format_xml(response, pretty=not raw))


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
