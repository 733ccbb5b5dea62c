"""
DB-backed repository for everything around the game.

Public methods:
- ride log: list_log, add_entry, undo_last, remove_entry, clear_log
- templates: set_template, get_template, clear_template, get_current_target
- bus bank: set_bus_bank, get_bus_bank, effective_bus_bank

The game itself only sees get_current_target(); the rest feeds the admin page.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from .config import CURRENT_TEMPLATE_KEY
from .game import TargetInfo
from .models import BusBank, BusLogEntry, BusdleTemplate
from .ordering import order_bus_bank
from .schemas import BusEntryOut, TemplateOut
from .types import LIGHT_RAIL

logger = logging.getLogger(__name__)


def _to_entry_out(e: BusLogEntry) -> BusEntryOut:
    return BusEntryOut(bus_number=e.bus_number, timestamp=e.timestamp.isoformat())


def _to_template_out(t: BusdleTemplate) -> TemplateOut:
    return TemplateOut(
        date=t.date,
        bus_order=list(t.bus_order),
        unique_bus_count=t.unique_bus_count,
        bus_bank=list(t.bus_bank) if t.bus_bank else None,
    )


def parse_bus_order(raw) -> List[str]:
    """'10, N5,,Line 1' or a list -> ['10', 'N5', 'Line 1'] (blanks dropped)."""
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    return [p.strip() for p in parts if p and p.strip()]


class DBBusStore:
    def __init__(self, db: Session):
        self.db = db

    # --- Ride log ---

    def _log_rows(self, log_date: str) -> List[BusLogEntry]:
        return list(
            self.db.execute(
                select(BusLogEntry).where(BusLogEntry.log_date == log_date).order_by(BusLogEntry.id.asc())
            )
            .scalars()
            .all()
        )

    def list_log(self, log_date: str) -> List[BusEntryOut]:
        return [_to_entry_out(e) for e in self._log_rows(log_date)]

    def add_entry(self, log_date: str, bus_number: str) -> BusEntryOut:
        entry = BusLogEntry(log_date=log_date, bus_number=bus_number, timestamp=datetime.utcnow())
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info("Logged bus %s on %s", bus_number, log_date)
        return _to_entry_out(entry)

    def undo_last(self, log_date: str) -> Optional[BusEntryOut]:
        rows = self._log_rows(log_date)
        if not rows:
            return None
        return self._remove(rows[-1])

    def remove_entry(self, log_date: str, index: int) -> Optional[BusEntryOut]:
        rows = self._log_rows(log_date)
        if index < 0 or index >= len(rows):
            return None
        return self._remove(rows[index])

    def _remove(self, row: BusLogEntry) -> BusEntryOut:
        removed = _to_entry_out(row)
        self.db.delete(row)
        self.db.commit()
        return removed

    def clear_log(self, log_date: str) -> None:
        self.db.execute(delete(BusLogEntry).where(BusLogEntry.log_date == log_date))
        self.db.commit()

    # --- Templates ---

    def set_template(
        self,
        order,
        date: str,
        bus_bank: Optional[List[str]] = None,
        key: str = CURRENT_TEMPLATE_KEY,
    ) -> TemplateOut:
        buses = [b for b in parse_bus_order(order) if b not in LIGHT_RAIL]
        if not buses:
            raise ValueError("Bus order must contain at least one bus (light rail is ignored).")

        template = self.db.get(BusdleTemplate, key)
        if template is None:
            template = BusdleTemplate(key=key)
            self.db.add(template)

        template.date = date
        template.bus_order = buses
        template.unique_bus_count = len(set(buses))
        template.bus_bank = order_bus_bank(bus_bank) if bus_bank else None
        template.deleted = False
        template.last_updated = datetime.utcnow()
        self.db.commit()

        logger.info("Busdle template %s set for %s: %d buses, %d unique",
                    key, date, len(buses), template.unique_bus_count)
        return _to_template_out(template)

    def get_template(self, key: str = CURRENT_TEMPLATE_KEY) -> Optional[TemplateOut]:
        template = self.db.get(BusdleTemplate, key)
        if template is None or template.deleted:
            return None
        return _to_template_out(template)

    def clear_template(self, key: str = CURRENT_TEMPLATE_KEY) -> None:
        template = self.db.get(BusdleTemplate, key)
        if template is None:
            template = BusdleTemplate(key=key)
            self.db.add(template)
        template.deleted = True
        template.last_updated = datetime.utcnow()
        self.db.commit()
        logger.info("Busdle template %s cleared", key)

    def get_current_target(self) -> Optional[TargetInfo]:
        template = self.get_template(CURRENT_TEMPLATE_KEY)
        if template is None:
            return None
        return TargetInfo.of(
            id=template.date or CURRENT_TEMPLATE_KEY,
            sequence=template.bus_order,
            bus_bank=self.effective_bus_bank(template),
        )

    # --- Bus bank ---

    def set_bus_bank(self, buses: List[str]) -> List[str]:
        cleaned = order_bus_bank(b.strip() for b in buses if b and b.strip())
        bank = self.db.get(BusBank, 1)
        if bank is None:
            bank = BusBank(id=1)
            self.db.add(bank)
        bank.buses = cleaned
        bank.last_updated = datetime.utcnow()
        self.db.commit()
        return cleaned

    def get_bus_bank(self) -> List[str]:
        bank = self.db.get(BusBank, 1)
        return list(bank.buses) if bank else []

    def effective_bus_bank(self, template: Optional[TemplateOut] = None) -> List[str]:
        """The template's own bank wins; otherwise the active bank."""
        if template is None:
            template = self.get_template(CURRENT_TEMPLATE_KEY)
        if template is not None and template.bus_bank:
            return list(template.bus_bank)
        return self.get_bus_bank()
