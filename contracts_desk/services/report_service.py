"""Report projection: read a predefined view into a DataFrame, filter, format and total it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

import pandas as pd
from sqlalchemy import text

from contracts_desk.core.exceptions import ValidationError
from contracts_desk.database.db import Database
from contracts_desk.models.reports import DATE_TOKENS, DEFAULT_REPORT, MONEY_TOKENS, REPORTS, REPORTS_BY_VIEW
from contracts_desk.utils.validators import format_date

logger = logging.getLogger(__name__)

SUMMARY_PREFIX = "Итоги — "
SUMMARY_SEPARATOR = "   "


def _has_token(name: str, tokens: tuple[str, ...]) -> bool:
    lowered = str(name).casefold()
    return any(token.casefold() in lowered for token in tokens)


def date_columns(frame: pd.DataFrame) -> list[str]:
    return [name for name in frame.columns if _has_token(name, DATE_TOKENS)]


def money_columns(frame: pd.DataFrame) -> list[str]:
    return [name for name in frame.columns if _has_token(name, MONEY_TOKENS)]


def parse_date(value) -> date | None:
    """Best-effort date from a view cell: ISO text, dd.mm.yyyy text or date objects."""
    if value is None or pd.isna(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = str(value).strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        pass
    try:
        return datetime.strptime(raw, "%d.%m.%Y").date()
    except ValueError:
        return None


def filter_by_date_range(
    frame: pd.DataFrame,
    date_from: date | None = None,
    date_to: date | None = None,
) -> pd.DataFrame:
    """Drop rows with any parseable date outside ``[date_from, date_to]``.

    Columns are checked left to right and a row is dropped at the first failing
    column, so a kept row passes every date column. Empty or unparseable cells
    never exclude a row.
    """
    columns = date_columns(frame)
    if (date_from is None and date_to is None) or not columns or frame.empty:
        return frame

    def _keep(row: pd.Series) -> bool:
        for name in columns:
            value = parse_date(row[name])
            if value is None:
                continue
            if (date_from is not None and value < date_from) or (date_to is not None and value > date_to):
                return False
        return True

    mask = frame.apply(_keep, axis=1)
    return frame[mask.astype(bool)].reset_index(drop=True)


def format_date_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """Rewrite parseable date cells as ``dd.mm.yyyy`` text."""
    frame = frame.copy()
    for name in date_columns(frame):

        def _format(value):
            parsed = parse_date(value)
            return format_date(parsed) if parsed is not None else value

        frame[name] = frame[name].astype(object).map(_format)
    return frame


def money_totals(frame: pd.DataFrame) -> dict[str, float]:
    """Sum of the numeric-parseable cells of every money column, in column order."""
    totals: dict[str, float] = {}
    for name in money_columns(frame):
        values = pd.to_numeric(frame[name].astype(object).map(_as_number_text), errors="coerce")
        totals[name] = float(values.sum())
    return totals


def _as_number_text(value):
    if value is None or isinstance(value, (int, float)):
        return value
    return str(value).strip().replace(",", ".")


def build_summary(totals: dict[str, float]) -> str:
    if not totals:
        return ""
    return SUMMARY_PREFIX + SUMMARY_SEPARATOR.join(f"{name}: {total:.2f}" for name, total in totals.items())


@dataclass
class ReportResult:
    """A loaded, filtered and formatted report ready for display."""

    report: str
    title: str
    frame: pd.DataFrame
    summary: str = ""
    totals: dict[str, float] = field(default_factory=dict)

    @property
    def columns(self) -> list[str]:
        return list(self.frame.columns)

    def to_records(self) -> list[dict]:
        return self.frame.to_dict(orient="records")


def project(
    frame: pd.DataFrame,
    date_from: date | None = None,
    date_to: date | None = None,
) -> tuple[pd.DataFrame, dict[str, float]]:
    """Filter by date, format dates, then total the money columns of what is left."""
    filtered = filter_by_date_range(frame, date_from, date_to)
    formatted = format_date_columns(filtered)
    return formatted, money_totals(formatted)


class ReportService:
    """Runs one of the predefined report views; nothing here is written back."""

    reports = REPORTS

    def __init__(self, database: Database) -> None:
        self.database = database
        self._selected_report = DEFAULT_REPORT
        self.date_from: date | None = None
        self.date_to: date | None = None
        self.result: ReportResult | None = None

    @property
    def selected_report(self) -> str:
        return self._selected_report

    @selected_report.setter
    def selected_report(self, view: str) -> None:
        if view not in REPORTS_BY_VIEW:
            raise ValidationError(f"Unknown report: {view!r}")
        self._selected_report = view

    @property
    def summary(self) -> str:
        return self.result.summary if self.result else ""

    def read_view(self, view: str) -> pd.DataFrame:
        if view not in REPORTS_BY_VIEW:
            raise ValidationError(f"Unknown report: {view!r}")
        with self.database.connect() as conn:
            return pd.read_sql(text(f'SELECT * FROM "{view}"'), conn)

    def load(
        self,
        report: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ReportResult:
        if report is not None:
            self.selected_report = report
        self.date_from = date_from
        self.date_to = date_to

        self.result = None
        definition = REPORTS_BY_VIEW[self.selected_report]
        raw = self.read_view(definition.view)
        frame, totals = project(raw, self.date_from, self.date_to)

        self.result = ReportResult(
            report=definition.view,
            title=definition.title,
            frame=frame,
            summary=build_summary(totals),
            totals=totals,
        )
        logger.info(
            "report.loaded",
            extra={
                "event": "report.loaded",
                "report": definition.view,
                "rows": len(raw),
                "kept": len(frame),
            },
        )
        return self.result
