"""
Display order for the easy-mode bus picker.

Light rail first (Line 1, then Line 2), then purely numeric buses by value,
then purely alphabetic buses, then mixed ones like "N5". The raw string is
the last tie-break, so two different ids never compare equal.

Alphabetic ids collate with locale.strxfrm, i.e. the process LC_COLLATE.
Nothing here calls setlocale, so unless the app does, that is the C locale
and the order is casefolded code-point order. Ids that differ only in case
put lowercase first ("a" before "A").
"""

import locale
import re
from functools import cmp_to_key
from typing import Iterable, List

from .types import LIGHT_RAIL

_NUMERIC = re.compile(r"^\d+$")
_ALPHA = re.compile(r"^[A-Za-z]+$")

# group ranks
_LIGHT_RAIL, _NUMBER, _WORD, _MIXED = 0, 1, 2, 3


def _group(bus: str) -> int:
    if bus in LIGHT_RAIL:
        return _LIGHT_RAIL
    if _NUMERIC.match(bus):
        return _NUMBER
    if _ALPHA.match(bus):
        return _WORD
    return _MIXED


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_bus_ids(a: str, b: str) -> int:
    """Three-way comparison: negative if a sorts first, 0 only when a == b."""
    group_a, group_b = _group(a), _group(b)
    if group_a != group_b:
        return _cmp(group_a, group_b)

    if group_a == _LIGHT_RAIL:
        return _cmp(LIGHT_RAIL.index(a), LIGHT_RAIL.index(b))

    if group_a == _NUMBER:
        result = _cmp(int(a), int(b))
        if result:
            return result
    elif group_a == _WORD:
        result = _cmp(locale.strxfrm(a.casefold()), locale.strxfrm(b.casefold()))
        if result:
            return result
        # lowercase first
        return _cmp(a.swapcase(), b.swapcase())

    # "07" vs "7", and every mixed id
    return _cmp(a, b)


def order_bus_bank(buses: Iterable[str]) -> List[str]:
    return sorted(set(buses), key=cmp_to_key(compare_bus_ids))
