"""VAT rate manager: bounded numeric rates instead of free-text names."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from contracts_desk.core.notifications import NotificationKind, Notifier
from contracts_desk.database.db import Database, is_foreign_key_violation
from contracts_desk.models import VatRate
from contracts_desk.models.base import NEW_IDENTITY
from contracts_desk.schemas.lookups import VatRateInput
from contracts_desk.services.base_service import BaseService
from contracts_desk.utils.validators import contains_text, is_valid_rate, parse_rate

logger = logging.getLogger(__name__)

INVALID_RATE_MESSAGE = "Введите корректную ставку НДС (0–100)"
IN_USE_MESSAGE = "Нельзя удалить ставку НДС: она используется в договорах."
SAVED_MESSAGE = "Успешно сохранено."

_table = VatRate.__table__


@dataclass
class VatRateItem:
    id: int = NEW_IDENTITY
    rate: Decimal | None = None


class VatRateService(BaseService[VatRateItem]):
    def __init__(self, database: Database, notifier: Notifier | None = None) -> None:
        super().__init__(database, notifier)
        self.new_rate: str | None = None

    def load(self) -> list[VatRateItem]:
        with self.database.connect() as conn:
            rows = conn.execute(select(_table.c.vat_id, _table.c.rate).order_by(_table.c.rate)).all()
        self.items = [VatRateItem(id=row[0], rate=row[1]) for row in rows]
        self.selected = None
        self._changed("loaded")
        return self.items

    @property
    def can_add(self) -> bool:
        return is_valid_rate(parse_rate(self.new_rate))

    def add(self, rate: str | None = None) -> VatRateItem | None:
        candidate = self.new_rate if rate is None else rate
        try:
            value = VatRateInput(rate=candidate).rate
        except SchemaValidationError:
            self.notifier.notify(NotificationKind.WARNING, INVALID_RATE_MESSAGE)
            return None

        try:
            with self.database.begin() as conn:
                new_id = conn.execute(insert(_table).values(rate=value)).inserted_primary_key[0]
        except SQLAlchemyError as exc:
            self._report_error(exc)
            return None

        item = VatRateItem(id=int(new_id), rate=value)
        self.items.append(item)
        self.new_rate = ""
        logger.info("vat_rate.added", extra={"event": "vat_rate.added", "id": item.id})
        self._changed("added")
        return item

    def delete(self, item: VatRateItem | None = None) -> bool:
        item = item or self.selected
        if item is None:
            return False

        if item.id == NEW_IDENTITY:
            self._forget(item)
            self._changed("deleted")
            return True

        try:
            with self.database.begin() as conn:
                conn.execute(delete(_table).where(_table.c.vat_id == item.id))
        except SQLAlchemyError as exc:
            if is_foreign_key_violation(exc):
                logger.warning(
                    "vat_rate.delete.conflict",
                    extra={"event": "vat_rate.delete.conflict", "id": item.id},
                )
                self._report_conflict(IN_USE_MESSAGE, "Удаление ставки НДС")
            else:
                self._report_error(exc, "Удаление ставки НДС")
            return False

        self._forget(item)
        self._changed("deleted")
        return True

    def save(self) -> bool:
        """Insert new rates and update the rest; rows without a rate are skipped."""
        assigned: list[tuple[VatRateItem, int]] = []
        try:
            with self.database.begin() as conn:
                for item in self.items:
                    if item.rate is None:
                        continue
                    if item.id == NEW_IDENTITY:
                        result = conn.execute(insert(_table).values(rate=item.rate))
                        assigned.append((item, int(result.inserted_primary_key[0])))
                    else:
                        conn.execute(update(_table).where(_table.c.vat_id == item.id).values(rate=item.rate))
        except SQLAlchemyError as exc:
            self._report_error(exc)
            return False

        for item, new_id in assigned:
            item.id = new_id
        logger.info("vat_rate.saved", extra={"event": "vat_rate.saved", "inserted": len(assigned)})
        self.notifier.notify(NotificationKind.SUCCESS, SAVED_MESSAGE, "Уведомление")
        self._changed("saved")
        return True

    def matches(self, item: VatRateItem, needle: str) -> bool:
        return item.rate is not None and contains_text(item.rate, needle)
