"""Conversion between the service's JSON value encoding and Value objects."""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..errors import TransportError
from .models import (
    BooleanValue,
    ConstructorValue,
    FloatValue,
    InstantValue,
    IntValue,
    ListValue,
    PseudoValue,
    QualifiedName,
    RecordValue,
    StringValue,
    Value,
)


class ValueDecodeError(TransportError):
    """A payload did not describe a well-formed value."""


def decode_qualified_name(data: Any) -> QualifiedName:
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise ValueDecodeError(f"Invalid qualified name: {data!r}")
    qualifier = data.get("qualifier") or []
    if not isinstance(qualifier, list) or not all(isinstance(part, str) for part in qualifier):
        raise ValueDecodeError(f"Invalid qualifier in qualified name: {data!r}")
    return QualifiedName(tuple(qualifier), data["name"])


def encode_qualified_name(name: QualifiedName) -> Dict[str, Any]:
    return {"qualifier": list(name.qualifier), "name": name.name}


def _field(data: Dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data.get(key)
    # bool is an int subclass; an IntValue must not accept true/false
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueDecodeError(f"{data.get('class')} has invalid '{key}': {value!r}")
    return value


def _decode_float(data: Dict[str, Any]) -> FloatValue:
    value = _field(data, "d", (int, float))
    if isinstance(value, bool):
        raise ValueDecodeError(f"FloatValue has invalid 'd': {value!r}")
    return FloatValue(float(value))


def _decode_record(data: Dict[str, Any]) -> RecordValue:
    fields = _field(data, "fields", dict)
    return RecordValue(
        decode_qualified_name(data.get("recordTag")),
        {key: decode_value(value) for key, value in fields.items()},
    )


def _decode_list(data: Dict[str, Any]) -> ListValue:
    return ListValue(tuple(decode_value(item) for item in _field(data, "elements", list)))


def _decode_constructor(data: Dict[str, Any]) -> ConstructorValue:
    args = data.get("args") or []
    if not isinstance(args, list):
        raise ValueDecodeError(f"ConstructorValue has invalid 'args': {args!r}")
    return ConstructorValue(
        decode_qualified_name(data.get("name")),
        tuple(decode_value(arg) for arg in args),
    )


_DECODERS: Dict[str, Callable[[Dict[str, Any]], Value]] = {
    "IntValue": lambda data: IntValue(_field(data, "i", int)),
    "StringValue": lambda data: StringValue(_field(data, "s", str)),
    "FloatValue": _decode_float,
    "InstantValue": lambda data: InstantValue(_field(data, "instant", str)),
    "BooleanValue": lambda data: BooleanValue(_field(data, "b", bool)),
    "RecordValue": _decode_record,
    "ListValue": _decode_list,
    "ConstructorValue": _decode_constructor,
    "PseudoValue": lambda data: PseudoValue(
        decode_qualified_name(data.get("boundName")), data.get("pseudoValue")
    ),
}


def decode_value(data: Any) -> Value:
    """Build a Value from its JSON encoding.

    Raises:
        ValueDecodeError: If the payload is not a known value kind or a
            required field is missing or mistyped.
    """
    if not isinstance(data, dict):
        raise ValueDecodeError(f"Expected a value object, got: {data!r}")
    decoder = _DECODERS.get(data.get("class"))  # type: ignore[arg-type]
    if decoder is None:
        raise ValueDecodeError(f"Unknown value kind: {data.get('class')!r}")
    return decoder(data)


def encode_value(value: Value) -> Dict[str, Any]:
    """Inverse of :func:`decode_value`."""
    if isinstance(value, IntValue):
        return {"class": "IntValue", "i": value.i}
    if isinstance(value, StringValue):
        return {"class": "StringValue", "s": value.s}
    if isinstance(value, FloatValue):
        return {"class": "FloatValue", "d": value.d}
    if isinstance(value, InstantValue):
        return {"class": "InstantValue", "instant": value.instant}
    if isinstance(value, BooleanValue):
        return {"class": "BooleanValue", "b": value.b}
    if isinstance(value, RecordValue):
        return {
            "class": "RecordValue",
            "recordTag": encode_qualified_name(value.record_tag),
            "fields": {key: encode_value(item) for key, item in value.fields.items()},
        }
    if isinstance(value, ListValue):
        return {"class": "ListValue", "elements": [encode_value(item) for item in value.elements]}
    if isinstance(value, ConstructorValue):
        return {
            "class": "ConstructorValue",
            "name": encode_qualified_name(value.name),
            "args": [encode_value(arg) for arg in value.args],
        }
    if isinstance(value, PseudoValue):
        return {
            "class": "PseudoValue",
            "boundName": encode_qualified_name(value.bound_name),
            "pseudoValue": value.payload,
        }
    raise TypeError(f"Not a value: {value!r}")


def value_to_json(value: Value) -> Any:
    """Plain Python data for a value, dropping type tags.

    Records become dicts of their fields, lists become lists, constructors
    become ``{"constructor": name, "args": [...]}`` and pseudo values become
    their opaque payload.
    """
    if isinstance(value, IntValue):
        return value.i
    if isinstance(value, StringValue):
        return value.s
    if isinstance(value, FloatValue):
        return value.d
    if isinstance(value, InstantValue):
        return value.instant
    if isinstance(value, BooleanValue):
        return value.b
    if isinstance(value, RecordValue):
        return {key: value_to_json(item) for key, item in value.fields.items()}
    if isinstance(value, ListValue):
        return [value_to_json(item) for item in value.elements]
    if isinstance(value, ConstructorValue):
        return {"constructor": str(value.name), "args": [value_to_json(arg) for arg in value.args]}
    if isinstance(value, PseudoValue):
        return value.payload
    raise TypeError(f"Not a value: {value!r}")
