"""Read-only report views and their column labels."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReportDefinition:
    """A predefined read-only view selectable by name."""

    view: str
    title: str
    columns: tuple[str, ...]


CONTRACT_INFO = ReportDefinition(
    view="v_contract_info",
    title="Сведения по договорам",
    columns=(
        "Код_договора",
        "Заказчик",
        "Исполнитель",
        "Тип_договора",
        "Стадия",
        "Дата_заключения",
        "Дата_исполнения",
        "Тема",
        "Плановая_сумма",
        "Оплачено",
        "Дебиторская_задолженность",
    ),
)

PAYMENT_SCHEDULE = ReportDefinition(
    view="v_payment_schedule",
    title="График оплат",
    columns=(
        "Код_договора",
        "Тема_договора",
        "Дата_оплаты",
        "Сумма_оплаты",
        "Вид_оплаты",
        "№_платежного_документа",
    ),
)

PLAN_SCHEDULE = ReportDefinition(
    view="v_plan_schedule",
    title="График этапов",
    columns=(
        "Код_договора",
        "Тема_договора",
        "Номер_этапа",
        "Дата_исполнения_этапа",
        "Сумма_этапа",
        "Сумма_аванса",
        "Стадия_этапа",
    ),
)

REPORTS: tuple[ReportDefinition, ...] = (CONTRACT_INFO, PAYMENT_SCHEDULE, PLAN_SCHEDULE)
REPORTS_BY_VIEW = {report.view: report for report in REPORTS}

DEFAULT_REPORT = CONTRACT_INFO.view

# Column-name tokens that mark date and money columns.
DATE_TOKENS = ("Дата", "Date")
MONEY_TOKENS = ("Сумма", "Оплачено", "Плановая")
