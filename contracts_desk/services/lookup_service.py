"""Generic id + name lookup manager (contract types, stages, payment types)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import column, delete, insert, select, table, update
from sqlalchemy.exc import SQLAlchemyError

from contracts_desk.core.exceptions import ValidationError
from contracts_desk.core.notifications import NotificationKind, Notifier
from contracts_desk.database.db import Database, is_foreign_key_violation
from contracts_desk.models.base import NEW_IDENTITY
from contracts_desk.schemas.lookups import LookupNameInput
from contracts_desk.services.base_service import SAVED_MESSAGE, BaseService
from contracts_desk.utils.validators import contains_text

logger = logging.getLogger(__name__)

IN_USE_MESSAGE = "Нельзя удалить: значение используется в связанных данных."
EMPTY_NAME_MESSAGE = "Введите непустое наименование."

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class LookupItem:
    id: int = NEW_IDENTITY
    name: str = ""


@dataclass(frozen=True)
class LookupTable:
    table: str
    id_column: str


CONTRACT_TYPES = LookupTable("contract_types", "type_id")
STAGES = LookupTable("stages", "stage_id")
PAYMENT_TYPES = LookupTable("payment_types", "payment_type_id")


class SimpleLookupService(BaseService[LookupItem]):
    """CRUD over a two-column ``(id, name)`` table chosen at construction time."""

    def __init__(
        self,
        database: Database,
        table_name: str,
        id_column: str,
        notifier: Notifier | None = None,
    ) -> None:
        super().__init__(database, notifier)
        for identifier in (table_name, id_column):
            if not _IDENTIFIER.match(identifier):
                raise ValidationError(f"Invalid SQL identifier: {identifier!r}")
        self.table_name = table_name
        self.id_column = id_column
        self._table = table(table_name, column(id_column), column("name"))
        self._id = self._table.c[id_column]
        self._name = self._table.c.name
        self.new_name = ""

    @classmethod
    def for_table(cls, lookup: LookupTable, database: Database, notifier: Notifier | None = None) -> "SimpleLookupService":
        return cls(database, lookup.table, lookup.id_column, notifier=notifier)

    def load(self) -> list[LookupItem]:
        with self.database.connect() as conn:
            rows = conn.execute(select(self._id, self._name).order_by(self._name)).all()
        self.items = [LookupItem(id=row[0], name=row[1]) for row in rows]
        self.selected = None
        self._changed("loaded")
        return self.items

    @property
    def can_add(self) -> bool:
        return bool(self.new_name and self.new_name.strip())

    def add(self, name: str | None = None) -> LookupItem | None:
        candidate = self.new_name if name is None else name
        try:
            clean = LookupNameInput(name=candidate or "").name
        except SchemaValidationError:
            self.notifier.notify(NotificationKind.WARNING, EMPTY_NAME_MESSAGE)
            return None

        try:
            with self.database.begin() as conn:
                new_id = conn.execute(insert(self._table).values({"name": clean})).lastrowid
        except SQLAlchemyError as exc:
            self._report_error(exc)
            return None

        item = LookupItem(id=int(new_id), name=clean)
        self.items.append(item)
        self.new_name = ""
        logger.info(
            "lookup.added",
            extra={"event": "lookup.added", "table": self.table_name, "id": item.id},
        )
        self._changed("added")
        return item

    def delete(self, item: LookupItem | None = None) -> bool:
        item = item or self.selected
        if item is None:
            return False

        if item.id == NEW_IDENTITY:
            self._forget(item)
            self._changed("deleted")
            return True

        try:
            with self.database.begin() as conn:
                affected = conn.execute(delete(self._table).where(self._id == item.id)).rowcount
        except SQLAlchemyError as exc:
            if is_foreign_key_violation(exc):
                logger.warning(
                    "lookup.delete.conflict",
                    extra={"event": "lookup.delete.conflict", "table": self.table_name, "id": item.id},
                )
                self._report_conflict(IN_USE_MESSAGE)
            else:
                self._report_error(exc, "Удаление не выполнено")
            return False

        if affected > 0:
            self._forget(item)
            self._changed("deleted")
        return affected > 0

    def save(self) -> bool:
        try:
            with self.database.begin() as conn:
                for item in self.items:
                    conn.execute(update(self._table).where(self._id == item.id).values({"name": item.name}))
        except SQLAlchemyError as exc:
            self._report_error(exc)
            return False

        logger.info(
            "lookup.saved",
            extra={"event": "lookup.saved", "table": self.table_name, "count": len(self.items)},
        )
        self.notifier.notify(NotificationKind.SUCCESS, SAVED_MESSAGE)
        self._changed("saved")
        self.load()
        return True

    def matches(self, item: LookupItem, needle: str) -> bool:
        return contains_text(item.name, needle)
