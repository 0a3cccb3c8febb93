"""Table and view DDL for the contracts database file."""

from __future__ import annotations

from sqlalchemy import Engine, inspect, text

import contracts_desk.models  # noqa: F401
from contracts_desk.models.base import Base
from contracts_desk.models.reports import CONTRACT_INFO, PAYMENT_SCHEDULE, PLAN_SCHEDULE

TABLES = (
    "organizations",
    "contract_types",
    "stages",
    "vat_rates",
    "payment_types",
    "contracts",
    "contract_phases",
    "payments",
)

VIEW_DDL = {
    CONTRACT_INFO.view: f"""
CREATE VIEW IF NOT EXISTS {CONTRACT_INFO.view} AS
SELECT
    c.contract_id AS "Код_договора",
    cu.name AS "Заказчик",
    co.name AS "Исполнитель",
    ct.name AS "Тип_договора",
    s.name AS "Стадия",
    c.date_signed AS "Дата_заключения",
    c.due_date AS "Дата_исполнения",
    c.subject AS "Тема",
    COALESCE(ph.planned, 0) AS "Плановая_сумма",
    COALESCE(pm.paid, 0) AS "Оплачено",
    COALESCE(ph.planned, 0) - COALESCE(pm.paid, 0) AS "Дебиторская_задолженность"
FROM contracts c
LEFT JOIN organizations cu ON cu.org_id = c.customer_id
LEFT JOIN organizations co ON co.org_id = c.contractor_id
LEFT JOIN contract_types ct ON ct.type_id = c.type_id
LEFT JOIN stages s ON s.stage_id = c.stage_id
LEFT JOIN (
    SELECT contract_id, SUM(amount) AS planned FROM contract_phases GROUP BY contract_id
) ph ON ph.contract_id = c.contract_id
LEFT JOIN (
    SELECT contract_id, SUM(amount) AS paid FROM payments GROUP BY contract_id
) pm ON pm.contract_id = c.contract_id
ORDER BY c.date_signed DESC, c.contract_id
""",
    PAYMENT_SCHEDULE.view: f"""
CREATE VIEW IF NOT EXISTS {PAYMENT_SCHEDULE.view} AS
SELECT
    p.contract_id AS "Код_договора",
    c.subject AS "Тема_договора",
    p.payment_date AS "Дата_оплаты",
    p.amount AS "Сумма_оплаты",
    pt.name AS "Вид_оплаты",
    p.document_number AS "№_платежного_документа"
FROM payments p
JOIN contracts c ON c.contract_id = p.contract_id
LEFT JOIN payment_types pt ON pt.payment_type_id = p.payment_type_id
ORDER BY p.payment_date, p.payment_id
""",
    PLAN_SCHEDULE.view: f"""
CREATE VIEW IF NOT EXISTS {PLAN_SCHEDULE.view} AS
SELECT
    ph.contract_id AS "Код_договора",
    c.subject AS "Тема_договора",
    ph.phase_num AS "Номер_этапа",
    ph.due_date AS "Дата_исполнения_этапа",
    ph.amount AS "Сумма_этапа",
    ph.advance AS "Сумма_аванса",
    s.name AS "Стадия_этапа"
FROM contract_phases ph
JOIN contracts c ON c.contract_id = ph.contract_id
LEFT JOIN stages s ON s.stage_id = ph.stage_id
ORDER BY ph.contract_id, ph.phase_num
""",
}


def create_schema(engine: Engine) -> None:
    """Create missing tables and report views."""
    Base.metadata.create_all(bind=engine)
    with engine.begin() as conn:
        for ddl in VIEW_DDL.values():
            conn.execute(text(ddl))


def missing_objects(engine: Engine) -> set[str]:
    """Names of expected tables and views absent from the database file."""
    inspector = inspect(engine)
    present = set(inspector.get_table_names()) | set(inspector.get_view_names())
    return (set(TABLES) | set(VIEW_DDL)) - present
