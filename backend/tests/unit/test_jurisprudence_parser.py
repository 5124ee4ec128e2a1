from __future__ import annotations

import json

import pytest

from toga_legal.core.errors import ParseFailure
from toga_legal.services.jurisprudence_import import ParseError, ParseOk, parse_records, require_records
from tests.fixtures.jurisprudence_mocks import RECORD_52059, RECORD_61820, RECORD_SIN_RADICADO, fenced


def test_fenced_array_is_parsed():
    result = parse_records(fenced([RECORD_52059, RECORD_61820]))
    assert isinstance(result, ParseOk)
    assert [r.radicado for r in result.records] == ["52059", "61820"]
    assert result.records[0].sentencia_id == "SP2163-2018"
    assert result.records[1].source_url is None
    assert result.dropped == 0


def test_prose_around_array_is_ignored():
    raw = "Claro, estas son las fichas: " + json.dumps([RECORD_52059]) + " Espero que sirva."
    result = parse_records(raw)
    assert isinstance(result, ParseOk)
    assert len(result.records) == 1


def test_records_without_radicado_are_dropped_not_guessed():
    result = parse_records(json.dumps([RECORD_SIN_RADICADO, {"radicado": "  "}, {"radicado": "null"}, RECORD_52059]))
    assert isinstance(result, ParseOk)
    assert [r.radicado for r in result.records] == ["52059"]
    assert result.dropped == 3


def test_non_object_items_are_dropped():
    result = parse_records('["52059", 7, null, {"radicado": "61820"}]')
    assert isinstance(result, ParseOk)
    assert [r.radicado for r in result.records] == ["61820"]
    assert result.dropped == 3


def test_numeric_radicado_is_normalized_to_text():
    result = parse_records('[{"radicado": 52059, "tema": "  Inasistencia alimentaria "}]')
    assert isinstance(result, ParseOk)
    assert result.records[0].radicado == "52059"
    assert result.records[0].tema == "Inasistencia alimentaria"
    assert result.records[0].tesis is None


def test_empty_array_is_valid():
    result = parse_records("```json\n[]\n```")
    assert isinstance(result, ParseOk)
    assert result.records == []


def test_missing_array_is_a_parse_error():
    assert isinstance(parse_records('{"radicado": "52059"}'), ParseError)
    assert isinstance(parse_records("No encontré fichas en el documento."), ParseError)


def test_malformed_json_is_a_parse_error():
    result = parse_records('[{"radicado": "52059",}')
    assert isinstance(result, ParseError)
    assert "JSON" in result.reason or "arreglo" in result.reason


def test_empty_response_is_a_parse_error():
    assert isinstance(parse_records(""), ParseError)
    assert isinstance(parse_records(None), ParseError)


def test_require_records_raises_parse_failure():
    with pytest.raises(ParseFailure) as info:
        require_records("No encontré fichas en el documento.")
    assert "arreglo" in str(info.value)
    assert [r.radicado for r in require_records(fenced([RECORD_52059])).records] == ["52059"]
