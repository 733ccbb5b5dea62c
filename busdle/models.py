"""
SQLAlchemy ORM models.

Tables:
- bus_log_entries: one row per logged ride, grouped by ISO date
- busdle_templates: the hidden bus order, keyed ("current" or a date)
- bus_banks: single-row active bus bank (fallback for templates without one)
- saved_game_states: one JSON record per player, fully overwritten on save

Why JSON?
- Bus orders and banks are short lists of strings; JSON keeps them simple.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base


class BusLogEntry(Base):
    __tablename__ = "bus_log_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # "YYYY-MM-DD"; rides of one day are read back in id order
    log_date: Mapped[str] = mapped_column(String(10), index=True, nullable=False)
    bus_number: Mapped[str] = mapped_column(String(32), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


class BusdleTemplate(Base):
    __tablename__ = "busdle_templates"

    key: Mapped[str] = mapped_column(String(32), primary_key=True)

    # The date tag doubles as the game identity
    date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    bus_order: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    unique_bus_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bus_bank: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)

    # Cleared templates stay as tombstones
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


# Only one active bank: store exactly one row with id=1.
class BusBank(Base):
    __tablename__ = "bus_banks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    buses: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    last_updated: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


class SavedGameState(Base):
    __tablename__ = "saved_game_states"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
