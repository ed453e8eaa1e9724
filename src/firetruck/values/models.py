"""Runtime values returned by the contract service.

``Value`` is a closed union of frozen dataclasses. Values are built by
:mod:`firetruck.values.codec` from response payloads and are never
mutated afterwards; transformations return new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple, Union

NAMESPACE_SEPARATOR = "::"


@dataclass(frozen=True)
class QualifiedName:
    """A name with its enclosing namespace segments."""
    qualifier: Tuple[str, ...]
    name: str

    def __str__(self) -> str:
        return NAMESPACE_SEPARATOR.join((*self.qualifier, self.name))


def qual(text: str) -> QualifiedName:
    """Parse ``Ns::Sub::Name`` into a QualifiedName."""
    *qualifier, name = text.strip().split(NAMESPACE_SEPARATOR)
    if not name or not all(qualifier):
        raise ValueError(f"Invalid qualified name: {text!r}")
    return QualifiedName(tuple(qualifier), name)


@dataclass(frozen=True)
class IntValue:
    i: int


@dataclass(frozen=True)
class StringValue:
    s: str


@dataclass(frozen=True)
class FloatValue:
    d: float


@dataclass(frozen=True)
class InstantValue:
    """A timestamp kept in the serialized form the service sent."""
    instant: str

    @property
    def moment(self) -> Optional[datetime]:
        """Parsed instant, or None when the text is not ISO-8601.

        Naive timestamps are taken to be UTC so that all parsed instants
        are mutually comparable.
        """
        value = self.instant
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


@dataclass(frozen=True)
class BooleanValue:
    b: bool


@dataclass(frozen=True)
class RecordValue:
    """A tagged record. Field order is the order the service sent."""
    record_tag: QualifiedName
    fields: Mapping[str, "Value"] = field(default_factory=dict)

    def with_field(self, key: str, value: "Value") -> "RecordValue":
        """Return a copy with ``key`` set to ``value``."""
        fields = dict(self.fields)
        fields[key] = value
        return RecordValue(self.record_tag, fields)


@dataclass(frozen=True)
class ListValue:
    elements: Tuple["Value", ...] = ()


@dataclass(frozen=True)
class ConstructorValue:
    name: QualifiedName
    args: Tuple["Value", ...] = ()


@dataclass(frozen=True)
class PseudoValue:
    """A value that can only be shown by the name it is bound to.

    ``payload`` is the service's opaque representation and is passed back
    untouched when the value is used as a report argument.
    """
    bound_name: QualifiedName
    payload: Any = None


Value = Union[
    IntValue,
    StringValue,
    FloatValue,
    InstantValue,
    BooleanValue,
    RecordValue,
    ListValue,
    ConstructorValue,
    PseudoValue,
]

VALUE_TYPES: Tuple[type, ...] = (
    IntValue,
    StringValue,
    FloatValue,
    InstantValue,
    BooleanValue,
    RecordValue,
    ListValue,
    ConstructorValue,
    PseudoValue,
)


def contract_id_value(contract_id: str, bound_name: str = "self") -> PseudoValue:
    """Reference to a contract, usable as a report value argument."""
    return PseudoValue(
        QualifiedName((), bound_name),
        {"class": "ContractIdValue", "id": contract_id},
    )
