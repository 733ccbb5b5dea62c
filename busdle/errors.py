"""
Error kinds raised by the Busdle core.

InvalidLength and IncompleteGuess are also ValueErrors so callers that only
care about "bad guess" can keep catching ValueError.
"""

from typing import List


class BusdleError(Exception):
    """Base class for every error the game core raises."""


class InvalidLength(BusdleError, ValueError):
    """Guess and target lengths differ (caller broke the contract)."""


class IncompleteGuess(BusdleError, ValueError):
    """Guess has the wrong number of positions or a blank one."""


class UnknownIdentifier(BusdleError):
    """Easy mode only: some guessed buses are not in the bus bank."""

    def __init__(self, invalid: List[str]):
        self.invalid = invalid
        super().__init__("Invalid buses: " + ", ".join(invalid))


class GameAlreadyWon(BusdleError):
    pass


class SubmissionInProgress(BusdleError):
    pass


class ModeLocked(BusdleError):
    """Mode can only change before the first guess."""


class StorageUnavailable(BusdleError):
    """A state store could not read or write."""
