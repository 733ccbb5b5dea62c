"""
Busdle game state machine.

One BusdleGame per player. It owns the whole game state (history, win flag,
pending input, mode) for one target. Every change is saved through the
GameStateStore passed to that call; the game never keeps a store, so each
request saves through its own DB session:

  awaiting input --submit--> evaluated --all exact--> won (until reset)
                                       --otherwise--> awaiting input

A saved game is only restored when it was played against the same target:
same id, and every saved verdict still matches what the target scores today.
Anything else (no record, unreadable record, other target) starts fresh.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock, RLock
from typing import Dict, List, Optional, Tuple

from .config import GAME_STATE_KEY
from .engine import evaluate, is_win
from .errors import (
    GameAlreadyWon,
    IncompleteGuess,
    ModeLocked,
    StorageUnavailable,
    SubmissionInProgress,
    UnknownIdentifier,
)
from .state_store import GameStateStore
from .types import GameMode, Sequence, Verdict

logger = logging.getLogger(__name__)

VERDICTS = ("exact", "displaced", "absent")


@dataclass(frozen=True)
class TargetInfo:
    id: str
    sequence: Tuple[str, ...]
    bus_bank: Optional[Tuple[str, ...]] = None

    @classmethod
    def of(cls, id: str, sequence: Sequence, bus_bank=None) -> "TargetInfo":
        return cls(
            id=id,
            sequence=tuple(sequence),
            bus_bank=tuple(bus_bank) if bus_bank else None,
        )


@dataclass
class GuessEntry:
    guess: List[str]
    verdict: List[Verdict]
    # True while the latest row is still being revealed; never saved
    animating: bool = False


@dataclass
class GameState:
    target_id: str
    history: List[GuessEntry] = field(default_factory=list)
    game_won: bool = False
    pending_input: List[str] = field(default_factory=list)
    mode: GameMode = "hard"


class BusdleGame:
    def __init__(self, target: TargetInfo, store: GameStateStore, key: str = GAME_STATE_KEY) -> None:
        """store is only read here, to restore a saved game."""
        self._target = target
        self._key = key
        self._lock = RLock()
        # Held for the duration of one submit; a second submit fails instead of queueing
        self._in_flight = Lock()
        self.state = self._load_or_fresh(store)

    # --- Read side ---

    @property
    def target(self) -> TargetInfo:
        return self._target

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    def get_history(self) -> List[GuessEntry]:
        with self._lock:
            return [
                GuessEntry(guess=list(e.guess), verdict=list(e.verdict), animating=e.animating)
                for e in self.state.history
            ]

    def is_won(self) -> bool:
        return self.state.game_won

    # --- Transitions ---

    def sync_target(self, target: TargetInfo, store: GameStateStore) -> None:
        """Pick up a template change; a new id or a new order drops the old game."""
        with self._lock:
            if target.id == self._target.id and target.sequence == self._target.sequence:
                # Same game, the bus bank may still have been edited
                self._target = target
                return
            logger.info("Target changed from %s to %s; reloading", self._target.id, target.id)
            self._target = target
            self.state = self._load_or_fresh(store)
            self._save(store)

    def submit_guess(self, raw_guess: List[str], store: GameStateStore) -> GuessEntry:
        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgress("A guess is already being evaluated.")
        try:
            with self._lock:
                if self.state.game_won:
                    raise GameAlreadyWon("Game won. No more guesses until reset.")

                guess = [(bus or "").strip() for bus in raw_guess]
                n = len(self._target.sequence)

                # --- shape guard ---
                if len(guess) != n or any(bus == "" for bus in guess):
                    raise IncompleteGuess(f"Guess must have exactly {n} non-empty buses.")

                # --- easy mode: only buses from the bank ---
                if self.state.mode == "easy":
                    bank = set(self._target.bus_bank or ())
                    invalid: List[str] = []
                    for bus in guess:
                        if bus not in bank and bus not in invalid:
                            invalid.append(bus)
                    if invalid:
                        raise UnknownIdentifier(invalid)

                verdict = evaluate(list(self._target.sequence), guess)

                # Only the newest row animates
                for old in self.state.history:
                    old.animating = False
                entry = GuessEntry(guess=guess, verdict=verdict, animating=True)
                self.state.history.append(entry)
                self.state.pending_input = [""] * n

                if is_win(verdict):
                    self.state.game_won = True
                    logger.info("Busdle %s won in %d guesses", self._target.id, len(self.state.history))
                else:
                    logger.info("Guess %d for %s: %s", len(self.state.history), self._target.id, verdict)

                self._save(store)
                return entry
        finally:
            self._in_flight.release()

    def set_mode(self, mode: GameMode, store: GameStateStore) -> None:
        with self._lock:
            if mode == self.state.mode:
                return
            if self.state.history:
                raise ModeLocked("Mode can only be changed before the first guess.")
            self.state.mode = mode
            self._save(store)

    def set_pending_input(self, values: List[str], store: GameStateStore) -> None:
        with self._lock:
            n = len(self._target.sequence)
            padded = list(values[:n]) + [""] * max(0, n - len(values))
            self.state.pending_input = padded
            self._save(store)

    def reset(self, store: GameStateStore) -> None:
        with self._lock:
            try:
                store.clear(self._key)
            except StorageUnavailable as e:
                logger.warning("Could not clear saved game %s: %s", self._key, e)
            self.state = self._fresh()
            self._save(store)

    # --- Persistence ---

    def _fresh(self) -> GameState:
        return GameState(
            target_id=self._target.id,
            pending_input=[""] * len(self._target.sequence),
        )

    def _load_or_fresh(self, store: GameStateStore) -> GameState:
        try:
            record = store.load(self._key)
        except StorageUnavailable as e:
            logger.warning("Could not load saved game %s: %s", self._key, e)
            record = None

        if not record or record.get("target_id") != self._target.id:
            return self._fresh()

        try:
            return self._from_record(record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring unreadable saved game %s: %s", self._key, e)
            return self._fresh()

    def _from_record(self, record: Dict) -> GameState:
        target = list(self._target.sequence)
        history = []
        for item in record["history"]:
            guess, verdict = list(item["guess"]), list(item["verdict"])
            if len(guess) != len(target) or len(verdict) != len(target):
                raise ValueError("saved guess does not fit this target")
            if any(v not in VERDICTS for v in verdict):
                raise ValueError(f"unknown verdict in {verdict!r}")
            # Same id but the order was edited since this was saved
            if evaluate(target, guess) != verdict:
                raise ValueError("saved verdict does not match the target")
            history.append(GuessEntry(guess=guess, verdict=verdict))

        game_won = bool(record.get("game_won", False))
        if game_won != any(is_win(e.verdict) for e in history):
            raise ValueError("saved win flag does not match the history")

        mode = record.get("mode") or "hard"
        if mode not in ("easy", "hard"):
            raise ValueError(f"unknown mode {mode!r}")

        return GameState(
            target_id=record["target_id"],
            history=history,
            game_won=game_won,
            pending_input=list(record.get("pending_input") or [""] * len(target)),
            mode=mode,
        )

    def to_record(self) -> Dict:
        return {
            "history": [{"guess": list(e.guess), "verdict": list(e.verdict)} for e in self.state.history],
            "pending_input": list(self.state.pending_input),
            "game_won": self.state.game_won,
            "target_id": self.state.target_id,
            "mode": self.state.mode,
        }

    def _save(self, store: GameStateStore) -> None:
        try:
            store.save(self._key, self.to_record())
        except StorageUnavailable as e:
            # Keep playing in memory
            logger.warning("Could not save game %s: %s", self._key, e)


class GameRegistry:
    """Live games by player id (one per client), all for the current target."""

    def __init__(self) -> None:
        self._games: Dict[str, BusdleGame] = {}
        self._lock = RLock()

    def get(self, player_id: str, target: TargetInfo, store: GameStateStore) -> BusdleGame:
        with self._lock:
            # Games for an older target would start fresh anyway; drop them
            stale = [pid for pid, g in self._games.items() if g.target.id != target.id]
            for pid in stale:
                del self._games[pid]

            game = self._games.get(player_id)
            if game is None:
                game = BusdleGame(target, store, key=f"{GAME_STATE_KEY}:{player_id}")
                self._games[player_id] = game
            else:
                game.sync_target(target, store)
            return game

    def __len__(self) -> int:
        return len(self._games)

    def clear(self) -> None:
        with self._lock:
            self._games.clear()
