"""Tests for decoding service payloads into values."""

from __future__ import annotations

import pytest

from firetruck.errors import TransportError
from firetruck.values import (
    ConstructorValue,
    FloatValue,
    IntValue,
    ListValue,
    PseudoValue,
    QualifiedName,
    RecordValue,
    StringValue,
    ValueDecodeError,
    contract_id_value,
    decode_value,
    encode_value,
    qual,
    value_to_json,
)


def _qn(name, *qualifier):
    return {"qualifier": list(qualifier), "name": name}


def test_decodes_nested_record_from_service_payload():
    payload = {
        "class": "RecordValue",
        "recordTag": _qn("AcceptCarShare", "CarShare"),
        "fields": {
            "price": {"class": "FloatValue", "d": 12},
            "agent": {"class": "StringValue", "s": "alice"},
            "options": {
                "class": "ListValue",
                "elements": [
                    {"class": "ConstructorValue", "name": _qn("Some"), "args": [{"class": "IntValue", "i": 3}]}
                ],
            },
        },
    }

    value = decode_value(payload)

    assert value == RecordValue(
        QualifiedName(("CarShare",), "AcceptCarShare"),
        {
            "price": FloatValue(12.0),
            "agent": StringValue("alice"),
            "options": ListValue((ConstructorValue(qual("Some"), (IntValue(3),)),)),
        },
    )
    assert list(value.fields) == ["price", "agent", "options"]
    assert encode_value(value)["recordTag"] == _qn("AcceptCarShare", "CarShare")


def test_constructor_without_args_field():
    assert decode_value({"class": "ConstructorValue", "name": _qn("None")}) == ConstructorValue(qual("None"))


def test_pseudo_value_keeps_opaque_payload():
    encoded = encode_value(contract_id_value("c-1"))
    assert encoded["pseudoValue"] == {"class": "ContractIdValue", "id": "c-1"}
    decoded = decode_value(encoded)
    assert isinstance(decoded, PseudoValue)
    assert decoded.payload == {"class": "ContractIdValue", "id": "c-1"}


@pytest.mark.parametrize(
    "payload",
    [
        {"class": "MysteryValue"},
        {"class": "IntValue", "i": "1"},
        {"class": "IntValue", "i": True},
        {"class": "FloatValue", "d": False},
        {"class": "RecordValue", "recordTag": {"name": 1}, "fields": {}},
        {"class": "ListValue", "elements": None},
        [1, 2],
    ],
)
def test_rejects_malformed_payloads(payload):
    with pytest.raises(ValueDecodeError):
        decode_value(payload)


def test_decode_error_is_a_transport_error():
    assert issubclass(ValueDecodeError, TransportError)


def test_value_to_json_strips_tags():
    record = RecordValue(qual("E"), {"n": IntValue(2), "xs": ListValue((StringValue("a"),))})
    assert value_to_json(record) == {"n": 2, "xs": ["a"]}
    assert value_to_json(IntValue(7)) == 7


def test_qual_parses_namespaces():
    assert qual("A::B::c") == QualifiedName(("A", "B"), "c")
    with pytest.raises(ValueError):
        qual("A::")


@pytest.mark.parametrize("text", ["::Foo", "A::::b", ""])
def test_qual_rejects_empty_segments(text):
    with pytest.raises(ValueError):
        qual(text)
