"""
EPP Documents

Serialization of outgoing XML documents and encoding of responses.
"""

from typing import Union

from lxml import etree

EPP_NS = "urn:ietf:params:xml:ns:epp-1.0"

Document = Union[etree._Element, etree._ElementTree, bytes, str]


def serialize_document(document: Document) -> str:
    """
    Convert an XML document to its string form.

    Accepts lxml elements and element trees as well as already serialized
    XML (bytes are decoded as UTF-8).

    Raises:
        TypeError: If document is of an unsupported type
    """
    if isinstance(document, str):
        return document
    if isinstance(document, bytes):
        return document.decode("utf-8")
    if isinstance(document, (etree._Element, etree._ElementTree)):
        return etree.tostring(document, encoding="unicode")
    raise TypeError(f"Unsupported document type: {type(document).__name__}")


def encode_utf8(text: str) -> bytes:
    """Return the UTF-8 bytes of text."""
    return text.encode("utf-8")


def build_hello() -> etree._Element:
    """Build an EPP hello command."""
    root = etree.Element("{%s}epp" % EPP_NS, nsmap={None: EPP_NS})
    etree.SubElement(root, "{%s}hello" % EPP_NS)
    return root
