"""Ordering commands and matching tag lists."""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping, Sequence


def intersect(a: Iterable[str], b: Iterable[str]) -> bool:
    """Return True if the two collections share at least one element."""
    seen = set(a)
    return any(item in seen for item in b)


def _leading_number(name: str) -> int | None:
    """Return the number a name starts with, or None if it has none."""
    digits = []
    for char in name:
        if not char.isdecimal():
            break
        digits.append(char)
    prefix = "".join(digits)
    if not prefix or not prefix.isascii():
        return None
    return int(prefix)


def _precedes(a: str, b: str, priorities: Mapping[str, int]) -> bool:
    priority_a = priorities.get(a) or 0
    priority_b = priorities.get(b) or 0

    if priority_a or priority_b:
        if not priority_a:
            return False
        if not priority_b:
            return True
        return priority_a < priority_b

    number_a = _leading_number(a)
    if number_a is None:
        return a < b
    number_b = _leading_number(b)
    if number_b is None:
        return True
    return number_a < number_b


def sort_commands(names: Sequence[str], priorities: Mapping[str, int] | None = None) -> list[str]:
    """Return command names in execution order.

    Names with a non-zero priority come first, lowest priority first. The
    rest are ordered by the number they start with, if any, and otherwise
    alphabetically. The sort is stable.
    """
    table: Mapping[str, int] = priorities or {}

    def compare(a: str, b: str) -> int:
        if _precedes(a, b, table):
            return -1
        if _precedes(b, a, table):
            return 1
        return 0

    return sorted(names, key=functools.cmp_to_key(compare))