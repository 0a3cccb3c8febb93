"""Create the schema in a database file and optionally seed default lookups."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from contracts_desk.core.exceptions import DatabaseError
from contracts_desk.database.db import Database
from contracts_desk.database.schema import create_schema
from contracts_desk.models import ContractType, PaymentType, Stage, VatRate

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_TYPES = ("Договор подряда", "Договор поставки", "Договор оказания услуг")
DEFAULT_STAGES = ("Подготовка", "Исполнение", "Завершён")
DEFAULT_VAT_RATES = (Decimal("0"), Decimal("10"), Decimal("20"))
DEFAULT_PAYMENT_TYPES = ("Аванс", "Оплата этапа", "Окончательный расчёт")


def seed_defaults(database: Database) -> int:
    """Insert default lookup rows into empty lookup tables; return rows added."""
    added = 0
    with database.get_session() as session:
        try:
            if not session.scalar(select(func.count()).select_from(ContractType)):
                session.add_all(ContractType(name=name) for name in DEFAULT_CONTRACT_TYPES)
                added += len(DEFAULT_CONTRACT_TYPES)
            if not session.scalar(select(func.count()).select_from(Stage)):
                session.add_all(Stage(name=name) for name in DEFAULT_STAGES)
                added += len(DEFAULT_STAGES)
            if not session.scalar(select(func.count()).select_from(VatRate)):
                session.add_all(VatRate(rate=rate) for rate in DEFAULT_VAT_RATES)
                added += len(DEFAULT_VAT_RATES)
            if not session.scalar(select(func.count()).select_from(PaymentType)):
                session.add_all(PaymentType(name=name) for name in DEFAULT_PAYMENT_TYPES)
                added += len(DEFAULT_PAYMENT_TYPES)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise DatabaseError(f"Seeding failed: {exc}") from exc
    return added


def init_db(database: Database, seed: bool = False) -> None:
    create_schema(database.get_engine())
    logger.info(
        "database.schema.created",
        extra={"event": "database.schema.created", "db_path": str(database.path)},
    )
    if seed:
        added = seed_defaults(database)
        logger.info("database.seeded", extra={"event": "database.seeded", "rows": added})
