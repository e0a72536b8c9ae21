"""
Encode and decode the nested dict form of a track as XML.

Conventions for the dict form:
- keys starting with "@_" are attributes of the enclosing element
- "#text" is the element's text when it also has attributes or children
- a list value repeats the element once per item
- None becomes an empty element, booleans are written true/false

Namespaced names keep their prefix ("@_xsi:type") in both directions.
"""

import io
import xml.etree.ElementTree as ET

from trackgen.errors import TrackReadError


ATTR_PREFIX = "@_"
TEXT_KEY = "#text"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


# ============================================================================
# Encoding
# ============================================================================

def _text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill(element: ET.Element, value) -> None:
    if value is None:
        return
    if not isinstance(value, dict):
        element.text = _text(value)
        return

    for key, child in value.items():
        if key.startswith(ATTR_PREFIX):
            element.set(key[len(ATTR_PREFIX):], _text(child))
        elif key == TEXT_KEY:
            element.text = _text(child)
        else:
            _append(element, key, child)


def _append(parent: ET.Element, tag: str, value) -> None:
    if isinstance(value, list):
        for item in value:
            _append(parent, tag, item)
        return
    _fill(ET.SubElement(parent, tag), value)


def to_element(tree: dict) -> ET.Element:
    """Build an Element from a dict with exactly one root key."""
    roots = [k for k in tree if not k.startswith(ATTR_PREFIX)]
    if len(roots) != 1:
        raise ValueError(f"XML tree needs exactly one root element, got {roots}")
    root = ET.Element(roots[0])
    _fill(root, tree[roots[0]])
    return root


def encode(tree: dict, pretty: bool = True) -> str:
    """Serialize a dict tree to an XML document string."""
    root = to_element(tree)
    if pretty:
        ET.indent(root, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"


# ============================================================================
# Decoding
# ============================================================================

def _collect_namespaces(text: str) -> dict[str, str]:
    """Map namespace URI -> prefix for every xmlns declaration in the document."""
    namespaces = {}
    for _, (prefix, uri) in ET.iterparse(io.BytesIO(text.encode("utf-8")), events=("start-ns",)):
        namespaces.setdefault(uri, prefix)
    return namespaces


def _qname(name: str, namespaces: dict[str, str]) -> str:
    if not name.startswith("{"):
        return name
    uri, local = name[1:].split("}", 1)
    prefix = namespaces.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _parse(element: ET.Element, namespaces: dict[str, str]):
    result: dict = {}
    for key, value in element.attrib.items():
        result[ATTR_PREFIX + _qname(key, namespaces)] = value

    for child in element:
        tag = _qname(child.tag, namespaces)
        value = _parse(child, namespaces)
        if tag not in result:
            result[tag] = value
        elif isinstance(result[tag], list):
            result[tag].append(value)
        else:
            result[tag] = [result[tag], value]

    text = (element.text or "").strip()
    if not result:
        return text
    if text:
        result[TEXT_KEY] = text
    return result


def decode(text: str) -> dict:
    """Parse an XML document string into the dict tree form."""
    try:
        namespaces = _collect_namespaces(text)
        root = ET.fromstring(text.encode("utf-8"))
    except ET.ParseError as e:
        raise TrackReadError(f"Malformed XML: {e}") from e

    body = _parse(root, namespaces)
    ns_attrs = {
        ATTR_PREFIX + (f"xmlns:{prefix}" if prefix else "xmlns"): uri
        for uri, prefix in namespaces.items()
    }
    if ns_attrs:
        if not isinstance(body, dict):
            body = {TEXT_KEY: body} if body else {}
        body = {**ns_attrs, **body}
    return {_qname(root.tag, namespaces): body}
