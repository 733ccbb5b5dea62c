"""
Where a player's Busdle game is saved between page loads.

BusdleGame only talks to the GameStateStore protocol, so tests can hand it
the in-memory store and the API hands it the DB-backed one. Both raise
StorageUnavailable on failure; the game decides what to do with that.
"""

from __future__ import annotations

import copy
from datetime import datetime
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StorageUnavailable
from .models import SavedGameState


class GameStateStore(Protocol):
    def load(self, key: str) -> Optional[dict]: ...

    def save(self, key: str, record: dict) -> None: ...

    def clear(self, key: str) -> None: ...


class MemoryGameStateStore:
    """Dict-backed store, handy for tests and for playing without a DB."""

    def __init__(self) -> None:
        self._records: Dict[str, dict] = {}

    def load(self, key: str) -> Optional[dict]:
        record = self._records.get(key)
        return copy.deepcopy(record) if record is not None else None

    def save(self, key: str, record: dict) -> None:
        self._records[key] = copy.deepcopy(record)

    def clear(self, key: str) -> None:
        self._records.pop(key, None)


class DBGameStateStore:
    """Same API, but one saved_game_states row per key."""

    def __init__(self, db: Session):
        self.db = db

    def load(self, key: str) -> Optional[dict]:
        try:
            row = self.db.get(SavedGameState, key)
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Could not load {key}: {e}") from e
        return dict(row.payload) if row else None

    def save(self, key: str, record: dict) -> None:
        try:
            row = self.db.get(SavedGameState, key)
            if row is None:
                row = SavedGameState(key=key, payload=record)
                self.db.add(row)
            else:
                row.payload = record
            row.updated_at = datetime.utcnow()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageUnavailable(f"Could not save {key}: {e}") from e

    def clear(self, key: str) -> None:
        try:
            row = self.db.get(SavedGameState, key)
            if row is not None:
                self.db.delete(row)
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageUnavailable(f"Could not clear {key}: {e}") from e
