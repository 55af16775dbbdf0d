"""
CLI Output Formatting
"""

import sys
from typing import Any, Dict

from lxml import etree


def format_xml(data: bytes, pretty: bool = True) -> str:
    """
    Format an EPP response for display.

    Falls back to the raw text when data is not well-formed XML.
    """
    if not pretty:
        return data.decode("utf-8", errors="replace")

    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError:
        return data.decode("utf-8", errors="replace")
    return etree.tostring(root, pretty_print=True, encoding="unicode").rstrip("\n")


def format_table(data: Dict[str, Any]) -> str:
    """Format a flat mapping as aligned key/value lines."""
    if not data:
        return ""
    width = max(len(str(key)) for key in data)
    return "\n".join(f"{str(key).ljust(width)} : {value}" for key, value in data.items())


def print_success(message: str) -> None:
    """Print success message."""
    print(f"SUCCESS: {message}")


def print_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"ERROR: {message}", file=sys.stderr)


def print_info(message: str) -> None:
    """Print info message."""
    print(f"INFO: {message}")
