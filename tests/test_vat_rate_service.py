from __future__ import annotations

import sqlite3
from decimal import Decimal

from contracts_desk.core.notifications import NotificationKind
from contracts_desk.models.base import NEW_IDENTITY
from contracts_desk.services.vat_rate_service import INVALID_RATE_MESSAGE, IN_USE_MESSAGE, VatRateItem, VatRateService


def _rates(database) -> list[float]:
    with sqlite3.connect(database.path) as conn:
        return [row[0] for row in conn.execute("SELECT rate FROM vat_rates ORDER BY rate")]


def test_save_inserts_new_rate_and_assigns_id(database, notifier):
    service = VatRateService(database, notifier)
    service.load()
    item = VatRateItem(rate=Decimal("20"))
    service.items.append(item)

    assert service.save() is True

    assert item.id not in (None, NEW_IDENTITY)
    assert _rates(database) == [20]
    assert notifier.messages[-1].kind is NotificationKind.SUCCESS
    assert notifier.messages[-1].message == "Успешно сохранено."


def test_save_skips_rows_without_rate(database, seeded, notifier):
    service = VatRateService(database, notifier)
    service.load()
    blank = VatRateItem(rate=None)
    service.items.append(blank)
    service.items[0].rate = Decimal("5")

    assert service.save() is True
    assert blank.id == NEW_IDENTITY
    assert _rates(database) == [5, 20]


def test_add_accepts_comma_separator(database, notifier):
    service = VatRateService(database, notifier)
    service.load()

    item = service.add("12,5")

    assert item.rate == Decimal("12.5")
    assert item.id > 0
    assert service.new_rate == ""
    assert _rates(database) == [12.5]


def test_add_rejects_out_of_range_and_garbage(database, notifier):
    service = VatRateService(database, notifier)

    for raw in ("101", "-1", "abc", ""):
        service.new_rate = raw
        assert not service.can_add
        assert service.add() is None

    assert {m.message for m in notifier.messages} == {INVALID_RATE_MESSAGE}
    assert _rates(database) == []


def test_can_add_accepts_bounds(database):
    service = VatRateService(database)
    for raw in ("0", "100", "18,00"):
        service.new_rate = raw
        assert service.can_add


def test_delete_rate_used_by_contract_is_refused(database, seeded, notifier):
    service = VatRateService(database, notifier)
    used = next(item for item in service.load() if item.id == seeded["vats"][1])

    assert service.delete(used) is False
    assert notifier.messages[-1].kind is NotificationKind.CONFLICT
    assert notifier.messages[-1].message == IN_USE_MESSAGE
    assert len(_rates(database)) == 2


def test_delete_unused_rate(database, seeded, notifier):
    service = VatRateService(database, notifier)
    unused = next(item for item in service.load() if item.id == seeded["vats"][0])

    assert service.delete(unused) is True
    assert _rates(database) == [20]


def test_search_matches_rate_text(database, seeded, notifier):
    service = VatRateService(database, notifier)
    service.load()

    service.search_text = "20"

    assert [float(item.rate) for item in service.visible_items] == [20.0]


def test_add_store_failure_is_reported(database, seeded, notifier):
    with sqlite3.connect(database.path) as conn:
        conn.execute(
            "CREATE TRIGGER no_new_rates BEFORE INSERT ON vat_rates "
            "BEGIN SELECT RAISE(ABORT, 'rates are read-only'); END"
        )
    service = VatRateService(database, notifier)
    service.load()

    assert service.add("10") is None
    assert notifier.messages[-1].kind is NotificationKind.ERROR
    assert "rates are read-only" in notifier.messages[-1].message
    assert len(service.items) == 2
