"""Orderings over optional values, used to sort per-contract report results.

A report can fail for a single contract, in which case its result is
``None``. Missing and wrongly typed results sort before every well-typed
value and compare equal to each other, so a stable sort keeps them in
encounter order.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Optional

from .models import InstantValue, IntValue, Value

ValueComparer = Callable[[Optional[Value], Optional[Value]], int]


def _three_way(a, b) -> int:
    return -1 if a < b else (1 if a > b else 0)


def int_value_comparer(a: Optional[Value], b: Optional[Value]) -> int:
    a_ok = isinstance(a, IntValue)
    b_ok = isinstance(b, IntValue)
    if not a_ok:
        return 0 if not b_ok else -1
    if not b_ok:
        return 1
    return _three_way(a.i, b.i)  # type: ignore[union-attr]


def _instant_key(value: InstantValue):
    moment = value.moment
    # unparseable instants fall back to their text, after all parsed ones
    return (0, moment, "") if moment is not None else (1, None, value.instant)


def instant_value_comparer(a: Optional[Value], b: Optional[Value]) -> int:
    a_ok = isinstance(a, InstantValue)
    b_ok = isinstance(b, InstantValue)
    if not a_ok:
        return 0 if not b_ok else -1
    if not b_ok:
        return 1
    key_a = _instant_key(a)  # type: ignore[arg-type]
    key_b = _instant_key(b)  # type: ignore[arg-type]
    if key_a[0] != key_b[0]:
        return _three_way(key_a[0], key_b[0])
    if key_a[0] == 0:
        return _three_way(key_a[1], key_b[1])
    return _three_way(key_a[2], key_b[2])


def sort_values(values: list, comparer: ValueComparer, key: Callable = lambda item: item) -> list:
    """Stable ascending sort of ``values`` by ``comparer`` applied to ``key(item)``."""
    return sorted(values, key=cmp_to_key(lambda x, y: comparer(key(x), key(y))))
