"""
Report parameter XML builder.

``GenerateReport`` takes its parameters as a .NET DataContract-serialized
``ArrayOfRptParameterReportPar``.  The server deserializes the ``Type``
node as a ``System.RuntimeType`` through ``UnitySerializationHolder``, so
namespaces, node order and the constant strings below must match exactly.
"""

from __future__ import annotations

__all__ = [
    "ParameterType",
    "ReportParameter",
    "build_parameter_xml",
    "pretty_print_xml",
    "xml_escape",
]

import datetime
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union
from xml.sax.saxutils import escape as _xml_escape

from lxml import etree

from ..errors import SchemaViolationError

_logger = logging.getLogger(__name__)

_XML_DECLARATION = '<?xml version="1.0"?>\n'

_NS_RM = "http://www.totvs.com.br/RM/"
_NS_XSI = "http://www.w3.org/2001/XMLSchema-instance"
_NS_XSD = "http://www.w3.org/2001/XMLSchema"
_NS_SYSTEM = "http://schemas.datacontract.org/2004/07/System"
_NS_SERIALIZATION = "http://schemas.microsoft.com/2003/10/Serialization/"

_MSCORLIB = "mscorlib, Version=4.0.0.0, Culture=neutral, PublicKeyToken=b77a5c561934e089"
_NS_RUNTIME_TYPE = f"-{_MSCORLIB}-System-System.RuntimeType"
_NS_UNITY_HOLDER = f"-{_MSCORLIB}-System-System.UnitySerializationHolder"

# UnitySerializationHolder.RuntimeTypeUnity
_UNITY_TYPE = "4"

# Characters outside the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")

# libxml2 diagnostics for namespace names that are not valid URIs
_TOLERATED_XML_ERRORS = frozenset({"WAR_NS_URI", "WAR_NS_URI_RELATIVE"})


class ParameterType(str, Enum):
    """Report parameter types accepted by the RM report server."""

    STRING = "String"
    INT16 = "Int16"
    INT32 = "Int32"
    DATETIME = "DateTime"


# ParameterType -> (System type name for <Data>, xsd type for <Value>)
_TYPE_DESCRIPTORS: dict[ParameterType, tuple[str, str]] = {
    ParameterType.STRING: ("System.String", "string"),
    ParameterType.INT16: ("System.Int16", "int"),
    ParameterType.INT32: ("System.Int32", "int"),
    ParameterType.DATETIME: ("System.DateTime", "dateTime"),
}


def xml_escape(s: str) -> str:
    """Escape XML special characters in user input."""
    return _xml_escape(s, {'"': "&quot;", "'": "&apos;"})


def _coerce_type(value: Any) -> ParameterType:
    if isinstance(value, ParameterType):
        return value
    try:
        return ParameterType(value)
    except ValueError as e:
        allowed = ", ".join(t.value for t in ParameterType)
        raise SchemaViolationError(
            f"Unrecognized report parameter type {value!r} (expected one of: {allowed})"
        ) from e


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return str(value)


def _check_xml_text(field_name: str, text: str) -> None:
    match = _ILLEGAL_XML_CHARS.search(text)
    if match:
        raise SchemaViolationError(
            f"Report parameter {field_name} contains a character not allowed in XML: "
            f"{match.group()!r} at position {match.start()}"
        )


@dataclass(frozen=True)
class ReportParameter:
    """One report parameter.

    Attributes:
        description: Label shown by RM for the parameter.
        param_name: Parameter name as declared in the report.
        type: Parameter type.
        value: Parameter value. Dates are sent in ISO 8601 form.
    """

    description: str
    param_name: str
    type: ParameterType
    value: Any = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", _coerce_type(self.type))
        _check_xml_text("description", str(self.description))
        _check_xml_text("param_name", str(self.param_name))
        _check_xml_text("value", _format_value(self.value))

    @classmethod
    def from_mapping(cls, item: Mapping[str, Any]) -> ReportParameter:
        """Build from a mapping with ``Description``, ``ParamName``, ``Type``, ``Value`` keys.

        Raises:
            SchemaViolationError: If a key is missing or the type is unknown.
        """
        try:
            return cls(
                description=item["Description"],
                param_name=item["ParamName"],
                type=item["Type"],
                value=item.get("Value", ""),
            )
        except KeyError as e:
            raise SchemaViolationError(f"Report parameter is missing key {e.args[0]!r}") from e


ParameterLike = Union[ReportParameter, Mapping[str, Any]]


def _build_item(param: ReportParameter) -> str:
    system_type, value_type = _TYPE_DESCRIPTORS[param.type]
    return (
        "<RptParameterReportPar>"
        f"<Description>{xml_escape(str(param.description))}</Description>"
        f"<ParamName>{xml_escape(str(param.param_name))}</ParamName>"
        f'<Type xmlns:d3p1="{_NS_SYSTEM}" xmlns:d3p2="{_NS_RUNTIME_TYPE}"'
        f' xmlns:d3p3="{_NS_UNITY_HOLDER}" xmlns:z="{_NS_SERIALIZATION}"'
        ' i:type="d3p2:RuntimeType" z:FactoryType="d3p3:UnitySerializationHolder">'
        f'<Data xmlns:d4p1="{_NS_XSD}" xmlns="" i:type="d4p1:string">{system_type}</Data>'
        f'<UnityType xmlns:d4p1="{_NS_XSD}" xmlns="" i:type="d4p1:int">{_UNITY_TYPE}</UnityType>'
        f'<AssemblyName xmlns:d4p1="{_NS_XSD}" xmlns="" i:type="d4p1:string">'
        f"{_MSCORLIB}</AssemblyName>"
        "</Type>"
        f'<Value xmlns:d3p1="{_NS_XSD}" i:type="d3p1:{value_type}">'
        f"{xml_escape(_format_value(param.value))}</Value>"
        "<Visible>true</Visible>"
        "</RptParameterReportPar>"
    )


def pretty_print_xml(xml: str | bytes) -> str:
    """
    Re-parse an XML document and serialize it with stable indentation.

    Blank text between elements is dropped before indenting, so the output
    is a fixed point: ``pretty_print_xml(pretty_print_xml(x)) == pretty_print_xml(x)``.

    The .NET namespace names (``-mscorlib, Version=...``) are not URIs, which
    libxml2 rejects in strict mode.  The document is parsed in recover mode
    and only those namespace diagnostics are tolerated.

    Raises:
        SchemaViolationError: If the document is not well-formed.
    """
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    parser = etree.XMLParser(
        remove_blank_text=True, recover=True, resolve_entities=False, no_network=True
    )
    try:
        root = etree.fromstring(xml, parser)
    except etree.XMLSyntaxError as e:
        raise SchemaViolationError(f"Report parameter XML is not well-formed: {e}") from e
    errors = [
        entry
        for entry in parser.error_log
        if entry.level >= etree.ErrorLevels.ERROR and entry.type_name not in _TOLERATED_XML_ERRORS
    ]
    if root is None or errors:
        detail = errors[0].message if errors else "no root element"
        raise SchemaViolationError(f"Report parameter XML is not well-formed: {detail}")
    return _XML_DECLARATION + etree.tostring(root, pretty_print=True, encoding="unicode")


def build_parameter_xml(params: Iterable[ParameterLike]) -> str:
    """
    Build the ``ArrayOfRptParameterReportPar`` document for ``GenerateReport``.

    Args:
        params: ReportParameter instances or mappings with ``Description``,
            ``ParamName``, ``Type`` and ``Value`` keys, in report order.

    Returns:
        Pretty-printed XML document as string.

    Raises:
        SchemaViolationError: If a parameter has an unrecognized type, a
            mapping lacks a required key, or a field holds a character that
            XML 1.0 does not allow. Nothing is built in that case.
    """
    items = [p if isinstance(p, ReportParameter) else ReportParameter.from_mapping(p) for p in params]
    body = "".join(_build_item(p) for p in items)
    document = (
        f'<ArrayOfRptParameterReportPar xmlns:i="{_NS_XSI}" xmlns="{_NS_RM}">'
        f"{body}</ArrayOfRptParameterReportPar>"
    )
    _logger.debug("Built report parameter XML: %d parameter(s)", len(items))
    return pretty_print_xml(document)
