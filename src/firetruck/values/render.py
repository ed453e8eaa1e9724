"""Render values in the syntax of the contract service's expression language.

The output is compared verbatim against the service's own printer, so the
spacing here (including the empty record ``Tag {  }`` and the list layout
with only continuation lines indented) is intentional.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal

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

logger = logging.getLogger(__name__)


def render_qualified_name(name: QualifiedName) -> str:
    return str(name)


def _render_float(value: FloatValue) -> str:
    number = float(value.d)
    if not math.isfinite(number):
        return repr(number)
    if number == 0:
        return "0.0"
    # Positional between 1e-6 and 1e21, shortest round-trip digits either way
    if 1e-6 <= abs(number) < 1e21:
        digits = Decimal(repr(number))
        if number.is_integer():
            return format(digits.to_integral_value(), "f") + ".0"
        return format(digits, "f")
    mantissa, _, exponent = repr(number).partition("e")
    text = f"{mantissa}e{int(exponent):+d}"
    return text + ".0" if number.is_integer() else text


def _render_record(value: RecordValue) -> str:
    fields = ", ".join(f"{key} = {render_value(item)}" for key, item in value.fields.items())
    return f"{render_qualified_name(value.record_tag)} {{ {fields} }}"


def _render_argument(value: Value) -> str:
    if isinstance(value, ConstructorValue) and value.args:
        return f"({render_value(value)})"
    return render_value(value)


def _render_constructor(value: ConstructorValue) -> str:
    parts = [render_qualified_name(value.name)]
    parts.extend(_render_argument(arg) for arg in value.args)
    return " ".join(parts)


def _render_list(value: ListValue) -> str:
    return "[\n" + ",\n  ".join(render_value(item) for item in value.elements) + "\n]"


def render_value(value: Value) -> str:
    """Render ``value`` as expression-language text.

    Objects outside the Value union render as the empty string, which keeps
    listings printable even if a future service version adds a value kind.
    """
    if isinstance(value, IntValue):
        return str(value.i)
    if isinstance(value, StringValue):
        return f'"{value.s}"'
    if isinstance(value, FloatValue):
        return _render_float(value)
    if isinstance(value, InstantValue):
        return f"#{value.instant}#"
    if isinstance(value, BooleanValue):
        return "True" if value.b else "False"
    if isinstance(value, RecordValue):
        return _render_record(value)
    if isinstance(value, ListValue):
        return _render_list(value)
    if isinstance(value, ConstructorValue):
        return _render_constructor(value)
    if isinstance(value, PseudoValue):
        return render_qualified_name(value.bound_name)
    logger.warning("Cannot render unrecognized value kind %s", type(value).__name__)
    return ""
