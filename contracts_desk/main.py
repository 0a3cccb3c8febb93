"""Command-line entry point: open the database, load the workspace or print a report."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from contracts_desk.core.exceptions import ContractsDeskException, StartupError
from contracts_desk.core.startup import bootstrap
from contracts_desk.database.init_db import init_db
from contracts_desk.models.reports import REPORTS_BY_VIEW
from contracts_desk.services.workspace import Workspace

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _prompt_for_path(title: str) -> str | None:
    if not sys.stdin.isatty():
        return None
    try:
        return input(f"{title}: ").strip() or None
    except EOFError:
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contracts-desk", description="Contracts registry over a SQLite file.")
    parser.add_argument("--db", help="Path to contracts.db (skips file discovery).")
    parser.add_argument("--init", action="store_true", help="Create missing tables and report views.")
    parser.add_argument("--seed", action="store_true", help="With --init, insert default lookup rows.")
    parser.add_argument("--report", choices=sorted(REPORTS_BY_VIEW), help="Print one report and its totals.")
    parser.add_argument("--from", dest="date_from", type=_parse_date, help="Report start date (inclusive).")
    parser.add_argument("--to", dest="date_to", type=_parse_date, help="Report end date (inclusive).")
    return parser


def run(args: argparse.Namespace) -> int:
    database = bootstrap(db_path=args.db, prompt=_prompt_for_path)
    if args.init:
        init_db(database, seed=args.seed)

    workspace = Workspace(database)
    try:
        if args.report:
            result = workspace.reports.load(args.report, args.date_from, args.date_to)
            print(result.title)
            print(result.frame.to_string(index=False) if not result.frame.empty else "(нет данных)")
            if result.summary:
                print(result.summary)
            return 0

        for name, count in workspace.load_all().items():
            print(f"{name}: {count}")
        return 0
    finally:
        workspace.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except StartupError:
        return 1
    except ContractsDeskException as exc:
        logger.error("main.failed: %s", exc, extra={"event": "main.failed"})
        return 2


if __name__ == "__main__":
    sys.exit(main())
