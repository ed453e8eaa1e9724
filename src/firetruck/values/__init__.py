"""Contract service runtime values: model, wire codec, rendering and ordering."""

from .models import (
    NAMESPACE_SEPARATOR,
    QualifiedName,
    Value,
    IntValue,
    StringValue,
    FloatValue,
    InstantValue,
    BooleanValue,
    RecordValue,
    ListValue,
    ConstructorValue,
    PseudoValue,
    contract_id_value,
    qual,
)
from .codec import ValueDecodeError, decode_value, encode_value, value_to_json
from .render import render_qualified_name, render_value
from .compare import ValueComparer, instant_value_comparer, int_value_comparer, sort_values

__all__ = [
    "NAMESPACE_SEPARATOR",
    "QualifiedName",
    "Value",
    "IntValue",
    "StringValue",
    "FloatValue",
    "InstantValue",
    "BooleanValue",
    "RecordValue",
    "ListValue",
    "ConstructorValue",
    "PseudoValue",
    "contract_id_value",
    "qual",
    "ValueDecodeError",
    "decode_value",
    "encode_value",
    "value_to_json",
    "render_qualified_name",
    "render_value",
    "ValueComparer",
    "instant_value_comparer",
    "int_value_comparer",
    "sort_values",
]
