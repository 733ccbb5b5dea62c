"""
Labels for clarity.
"""

from typing import List, Literal

BusId = str  # "10", "N5", "Line 1"
Sequence = List[BusId]  # ordered guess or target
Verdict = Literal["exact", "displaced", "absent"]
GameMode = Literal["easy", "hard"]

# Light rail shows up in ride logs but never in a Busdle target
LIGHT_RAIL = ("Line 1", "Line 2")
