import logging
import re
import xml.etree.ElementTree as ET
from re import Pattern
from typing import Any, Iterator, Optional


logger = logging.getLogger(__name__)

ILLEGAL_XML_RE: Pattern[str] = re.compile(
    "[\x00-\x08\x0b-\x1f\x7f-\x84\x86-\x9f\ud800-\udfff\ufdd0-\ufddf\ufffe-\uffff]"
)


def safe_utf8(text: str) -> str:
    """Remove illegal XML characters from text."""
    return ILLEGAL_XML_RE.sub(" ", text)


def local_name(name: str) -> str:
    """Strip the namespace from an ElementTree tag or attribute name.

    Example:
        >>> local_name("{http://www.w3.org/1999/02/22-rdf-syntax-ns#}Description")
        'Description'
        >>> local_name("bopt:scont")
        'scont'
    """
    if "}" in name:
        return name.rsplit("}", 1)[1]
    if ":" in name:
        return name.split(":", 1)[1]
    return name


def iter_local(node: ET.Element, name: str) -> Iterator[ET.Element]:
    """Iterate over descendants (including node) with the given local name."""
    for element in node.iter():
        if isinstance(element.tag, str) and local_name(element.tag) == name:
            yield element


def create_node(
    tag: str,
    parent: Optional[ET.Element] = None,
    attrib: Optional[dict[str, str]] = None,
) -> ET.Element:
    """Create an XML node with attributes.

    Prefixed names such as ``bopt:scont`` are kept verbatim, so the namespace
    declarations must be given explicitly as ``xmlns:*`` attributes.
    """
    node = ET.Element(tag)
    for key, value in (attrib or {}).items():
        node.set(key, safe_utf8(value))
    if parent is not None:
        parent.append(node)
    return node


def fromstring(data: str | bytes) -> ET.Element:
    """Parse an XML string to an Element."""
    return ET.fromstring(data)


def parse(file: Any) -> ET.Element:
    """Parse an XML file to an Element."""
    tree = ET.parse(file)
    if tree is None or tree.getroot() is None:
        raise ValueError("Failed to parse XML file.")
    return tree.getroot()


def tostring(node: ET.Element, indent: str = "    ") -> str:
    """Convert an XML node to a string."""
    ET.indent(node, space=indent)
    return ET.tostring(node, encoding="unicode", xml_declaration=False)


def break_attributes(text: str, prefix: str, column: int = 40) -> str:
    """Put every attribute with the given prefix on its own line.

    This is a presentation-only transform applied to serialized XML.

    Example:
        >>> break_attributes('<a bopt:x="1" bopt:y="2" />', "bopt", column=2)
        '<a\\n  bopt:x="1"\\n  bopt:y="2" />'
    """
    pattern = re.compile(rf'\s+(?={re.escape(prefix)}:[\w.\-]+=")')
    return pattern.sub("\n" + " " * column, text)
