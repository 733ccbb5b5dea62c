"""
Pure game logic (no HTTP, no storage).
For every position of a guess we produce one verdict:
- exact: right bus, right place
- displaced: the bus is in the target but somewhere else
- absent: no unclaimed copy of that bus is left in the target

Duplicates are allowed in both the target and the guess, so we count copies
instead of asking "is this bus anywhere in the target?".
"""

import re
from collections import Counter
from typing import List

from .errors import InvalidLength
from .types import Sequence, Verdict

_NOT_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def evaluate(target: Sequence, guess: Sequence) -> List[Verdict]:
    """
    Example:
      target = ["A", "B", "A"]
      guess  = ["A", "A", "B"]
      -> ["exact", "displaced", "displaced"]

    The first A is exact and uses up one A. The second guessed A takes the
    remaining A, and B takes the only B.
    """

    # 0. Validate lengths match
    if len(guess) != len(target):
        raise InvalidLength(
            f"Guess has {len(guess)} buses but the target has {len(target)}."
        )

    # 1. How many copies of each bus the target still has to give out
    remaining = Counter(target)
    verdicts: List[Verdict] = ["absent"] * len(target)

    # 2. Exact matches first, they always win the copy
    for i, bus in enumerate(guess):
        if bus == target[i]:
            verdicts[i] = "exact"
            remaining[bus] -= 1

    # 3. Left to right, hand out what is left
    for i, bus in enumerate(guess):
        if verdicts[i] == "exact":
            continue
        if remaining[bus] > 0:
            verdicts[i] = "displaced"
            remaining[bus] -= 1

    return verdicts


def is_win(verdicts: List[Verdict]) -> bool:
    """Win = every position exact."""
    return len(verdicts) > 0 and all(v == "exact" for v in verdicts)


def normalize_bus_id(raw: str) -> str:
    """Free text -> uppercase alphanumeric ("n 5!" -> "N5")."""
    return _NOT_ALNUM.sub("", raw or "").upper()
