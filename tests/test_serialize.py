"""Tests for totvs_rm_soap.serialize -- XML to dict conversion."""

import logging

import pytest

from totvs_rm_soap.errors import MalformedResponseError
from totvs_rm_soap.serialize import parse_xml, to_map

_BILLION_LAUGHS = (
    '<?xml version="1.0"?>'
    '<!DOCTYPE lolz [<!ENTITY lol "lol"><!ENTITY lol2 "&lol;&lol;&lol;">]>'
    "<lolz>&lol2;</lolz>"
)


# ── to_map ──────────────────────────────────────────────────────────


@pytest.mark.parametrize("xml", [None, "", "  \n ", b""], ids=["none", "empty", "blank", "bytes"])
def test_empty_input(xml):
    assert to_map(xml) == {}


def test_leaf_elements():
    assert to_map("<Report><Id>12</Id><Name> Extrato </Name></Report>") == {
        "Report": {"Id": "12", "Name": "Extrato"}
    }


def test_repeated_siblings_become_list():
    assert to_map("<a><b>1</b><b>2</b></a>") == {"a": {"b": ["1", "2"]}}
    assert to_map("<a><b>1</b><b>2</b><b>3</b></a>") == {"a": {"b": ["1", "2", "3"]}}


def test_nested_elements():
    xml = "<Meta><Params><Param><Name>DATAINI</Name></Param></Params></Meta>"
    assert to_map(xml) == {"Meta": {"Params": {"Param": {"Name": "DATAINI"}}}}


def test_attributes_and_text():
    assert to_map('<a><b id="1" kind="x">texto</b></a>') == {
        "a": {"b": {"@id": "1", "@kind": "x", "#text": "texto"}}
    }


def test_namespaces_stripped():
    xml = (
        '<r:Root xmlns:r="http://www.totvs.com.br/RM/" '
        'xmlns:i="http://www.w3.org/2001/XMLSchema-instance">'
        '<r:Item i:nil="true"/></r:Root>'
    )
    assert to_map(xml) == {"Root": {"Item": {"@nil": "true"}}}


def test_empty_leaf_is_empty_string():
    assert to_map("<a><b/></a>") == {"a": {"b": ""}}


def test_root_only():
    assert to_map("<Status>Finished</Status>") == {"Status": "Finished"}


def test_bytes_input():
    assert to_map("<a><b>ç</b></a>".encode()) == {"a": {"b": "ç"}}


def test_malformed_logs_and_returns_empty(caplog):
    with caplog.at_level(logging.WARNING, logger="totvs_rm_soap.serialize"):
        assert to_map("<a><b></a>") == {}
    assert "Error loading XML at line 1" in caplog.text


def test_entities_forbidden_returns_empty(caplog):
    with caplog.at_level(logging.WARNING, logger="totvs_rm_soap.serialize"):
        assert to_map(_BILLION_LAUGHS) == {}
    assert "Error loading XML" in caplog.text


# ── parse_xml ───────────────────────────────────────────────────────


def test_parse_xml_raises_on_malformed():
    with pytest.raises(MalformedResponseError, match="Invalid XML response") as exc_info:
        parse_xml("not xml at all")
    assert exc_info.value.__cause__ is not None


def test_parse_xml_raises_on_entities():
    with pytest.raises(MalformedResponseError):
        parse_xml(_BILLION_LAUGHS)


def test_parse_xml_matches_to_map():
    xml = "<a><b>1</b></a>"
    assert parse_xml(xml) == to_map(xml)
