"""Event transformations applied between extraction and replay.

Transformations are pure: they return a new value and leave their input
untouched. They must not drop, add or reorder events.
"""

from __future__ import annotations

from typing import Callable

from ..values import QualifiedName, RecordValue, StringValue, Value, qual

EventTransformation = Callable[[Value], Value]

ACCEPT_CAR_SHARE = qual("AcceptCarShare")
KEY_LOCATION_FIELD = "keyLocation"


def identity(event: Value) -> Value:
    return event


def fill_missing_field(tag: QualifiedName, field_name: str, default: Value) -> EventTransformation:
    """Build a transformation setting ``field_name`` on ``tag`` records that lack it.

    Existing values are never overwritten, so applying the result twice is
    the same as applying it once.
    """

    def _transform(event: Value) -> Value:
        if isinstance(event, RecordValue) and event.record_tag == tag and field_name not in event.fields:
            return event.with_field(field_name, default)
        return event

    return _transform


add_empty_key_location = fill_missing_field(ACCEPT_CAR_SHARE, KEY_LOCATION_FIELD, StringValue(""))
