"""
XML response normalizer.

Several RM operations return an XML document as a plain string (report
metadata, process results).  These helpers turn such a string into nested
dicts and lists without any knowledge of the document's schema.
"""

from __future__ import annotations

__all__ = ["parse_xml", "to_map"]

import logging
from typing import Any
from xml.etree.ElementTree import Element
from xml.etree.ElementTree import ParseError as _XMLParseError

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from .constants import XML_PREVIEW_LENGTH
from .errors import MalformedResponseError

_logger = logging.getLogger(__name__)

_TEXT_KEY = "#text"
_ATTR_PREFIX = "@"


def _strip_namespace(tag: str) -> str:
    """Strip XML namespace prefix from a tag name."""
    return tag.split("}")[-1] if "}" in tag else tag


def _element_to_value(elem: Element) -> Any:
    """Convert an element to a str (leaf) or dict (children/attributes)."""
    children = list(elem)
    text = (elem.text or "").strip()
    if not children and not elem.attrib:
        return text

    value: dict[str, Any] = {
        f"{_ATTR_PREFIX}{_strip_namespace(name)}": attr for name, attr in elem.attrib.items()
    }
    for child in children:
        key = _strip_namespace(child.tag)
        child_value = _element_to_value(child)
        if key not in value:
            value[key] = child_value
        elif isinstance(value[key], list):
            value[key].append(child_value)
        else:
            value[key] = [value[key], child_value]
    if text:
        value[_TEXT_KEY] = text
    return value


def parse_xml(xml_text: str | bytes | None) -> dict[str, Any]:
    """
    Convert an XML document to a dict keyed by its root tag.

    Elements with children become dicts, repeated siblings become lists,
    leaves become their stripped text.  Attributes are stored under
    ``"@name"`` and mixed text under ``"#text"``.

    Returns:
        dict -- empty for empty or None input.

    Raises:
        MalformedResponseError: If the document is not well-formed or uses
            forbidden constructs (entity declarations, external references).
    """
    if not xml_text or not xml_text.strip():
        return {}

    try:
        root = ET.fromstring(xml_text)
    except (_XMLParseError, DefusedXmlException) as e:
        preview = xml_text[:XML_PREVIEW_LENGTH]
        raise MalformedResponseError(f"Invalid XML response: {e}\nRaw: {preview!r}") from e

    return {_strip_namespace(root.tag): _element_to_value(root)}


def to_map(xml_text: str | bytes | None) -> dict[str, Any]:
    """Lenient :func:`parse_xml`.

    Never raises -- malformed input is logged and yields an empty dict.
    """
    try:
        return parse_xml(xml_text)
    except MalformedResponseError as e:
        cause = e.__cause__
        position = getattr(cause, "position", None)
        if position is not None:
            line, column = position
            _logger.warning("Error loading XML at line %d, column %d: %s", line, column, cause)
        else:
            _logger.warning("Error loading XML: %s", cause)
        return {}
