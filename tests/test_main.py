from __future__ import annotations

import sqlite3

import pytest

from contracts_desk.main import build_parser, main


def test_init_and_seed_then_list_counts(tmp_path, capsys):
    db_path = tmp_path / "cli.db"

    assert main(["--db", str(db_path), "--init", "--seed"]) == 0

    out = capsys.readouterr().out
    assert "contracts: 0" in out
    assert "vat_rates: 3" in out
    with sqlite3.connect(db_path) as conn:
        assert conn.execute("SELECT COUNT(*) FROM stages").fetchone()[0] == 3


def test_report_run_prints_title_and_empty_marker(tmp_path, capsys):
    db_path = tmp_path / "cli.db"

    assert main(["--db", str(db_path), "--init", "--report", "v_payment_schedule", "--from", "2023-01-01"]) == 0

    out = capsys.readouterr().out
    assert "График оплат" in out
    assert "(нет данных)" in out
    assert "Итоги — Сумма_оплаты: 0.00" in out


def test_missing_database_exits_with_startup_code(monkeypatch):
    monkeypatch.setattr("contracts_desk.main._prompt_for_path", lambda title: None)

    assert main([]) == 1


def test_bad_date_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--from", "01.01.2023"])
