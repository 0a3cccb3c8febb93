from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from contracts_desk.core.config import get_config
from contracts_desk.core.notifications import Notification, NotificationKind, Notifier
from contracts_desk.database.db import Database
from contracts_desk.database.schema import create_schema
from contracts_desk.models import (
    Contract,
    ContractPhase,
    ContractType,
    Organization,
    Payment,
    PaymentType,
    Stage,
    VatRate,
)


class RecordingNotifier(Notifier):
    def __init__(self, confirm_answer: bool = True) -> None:
        self.confirm_answer = confirm_answer
        self.messages: list[Notification] = []
        self.confirmations: list[str] = []

    def notify(self, kind: NotificationKind, message: str, title: str = "") -> None:
        self.messages.append(Notification(kind=kind, message=message, title=title))

    def confirm(self, message: str, title: str = "") -> bool:
        self.confirmations.append(message)
        return self.confirm_answer

    def kinds(self) -> list[NotificationKind]:
        return [message.kind for message in self.messages]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTRACTS_LOCATOR_CONFIG", str(tmp_path / "locator" / "config.txt"))
    monkeypatch.setenv("CONTRACTS_BASE_DIR", str(tmp_path / "base"))
    monkeypatch.delenv("CONTRACTS_DB_PATH", raising=False)
    monkeypatch.setenv("ENV", "test")
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "contracts.db")
    create_schema(db.get_engine())
    yield db
    db.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def seeded(database):
    """Three organizations, two of each lookup and one contract with phases and payments."""
    with database.get_session() as session:
        alpha = Organization(name="Альфа", address="Москва, ул. Ленина, 1", phone="+7 495 000-00-01", tax_id="7701000001")
        beta = Organization(name="Бета", address="Казань, пр. Победы, 5", tax_id="1655000002")
        gamma = Organization(name="Гамма", address="Тверь, ул. Советская, 9")
        works = ContractType(name="Подряд")
        supply = ContractType(name="Поставка")
        prep = Stage(name="Подготовка")
        execution = Stage(name="Исполнение")
        vat0 = VatRate(rate=Decimal("0"))
        vat20 = VatRate(rate=Decimal("20"))
        advance = PaymentType(name="Аванс")
        final = PaymentType(name="Окончательный расчёт")
        session.add_all([alpha, beta, gamma, works, supply, prep, execution, vat0, vat20, advance, final])
        session.flush()

        contract = Contract(
            date_signed=date(2023, 3, 1),
            customer_id=alpha.org_id,
            contractor_id=beta.org_id,
            type_id=works.type_id,
            stage_id=execution.stage_id,
            vat_id=vat20.vat_id,
            due_date=date(2023, 12, 31),
            subject="Ремонт кровли",
            note="Срочно",
        )
        contract.phases.extend(
            [
                ContractPhase(phase_num=1, due_date=date(2023, 5, 1), stage_id=execution.stage_id, amount=1000.0, advance=100.0, subject="Демонтаж"),
                ContractPhase(phase_num=2, due_date=date(2023, 8, 1), stage_id=prep.stage_id, amount=2000.0, advance=0.0, subject="Монтаж"),
            ]
        )
        contract.payments.append(
            Payment(payment_date=date(2023, 4, 1), amount=500.0, payment_type_id=advance.payment_type_id, document_number="П-1")
        )
        session.add(contract)
        session.commit()

        return {
            "orgs": [alpha.org_id, beta.org_id, gamma.org_id],
            "types": [works.type_id, supply.type_id],
            "stages": [prep.stage_id, execution.stage_id],
            "vats": [vat0.vat_id, vat20.vat_id],
            "payment_types": [advance.payment_type_id, final.payment_type_id],
            "contract_id": contract.contract_id,
        }
