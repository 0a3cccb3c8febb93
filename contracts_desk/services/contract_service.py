"""Contract aggregate manager: contracts with their phases and payments."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from contracts_desk.core.notifications import NotificationKind, Notifier
from contracts_desk.database.db import Database, is_foreign_key_violation
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
from contracts_desk.services.base_service import SAVED_MESSAGE, BaseService
from contracts_desk.utils.validators import contains_text, format_date

logger = logging.getLogger(__name__)

CONFIRM_DELETE_MESSAGE = "Удалить договор и связанные этапы/оплаты?"
DELETE_CONFLICT_MESSAGE = "Нельзя удалить договор: на него ссылаются связанные данные."


def _first_id(rows: list, attr: str) -> int | None:
    return getattr(rows[0], attr) if rows else None


class ContractService(BaseService[Contract]):
    """Working set of contracts with their phases and payments.

    The loaded graph is kept detached; every save or delete opens its own
    session, so a failed commit never touches the objects being edited.
    Lookup lists (organizations, types, stages, VAT rates, payment types) are
    loaded alongside so that new rows get sensible foreign-key defaults.
    """

    def __init__(self, database: Database, notifier: Notifier | None = None) -> None:
        super().__init__(database, notifier)
        self.organizations: list[Organization] = []
        self.contract_types: list[ContractType] = []
        self.stages: list[Stage] = []
        self.vat_rates: list[VatRate] = []
        self.payment_types: list[PaymentType] = []

    # ------------------------------------------------------------------
    # loading
    # ------------------------------------------------------------------

    def load(self) -> list[Contract]:
        with self.database.get_session() as session:
            self.organizations = list(session.scalars(select(Organization).order_by(Organization.name)))
            self.contract_types = list(session.scalars(select(ContractType).order_by(ContractType.name)))
            self.stages = list(session.scalars(select(Stage).order_by(Stage.name)))
            self.vat_rates = sorted(session.scalars(select(VatRate)), key=lambda v: v.rate or 0)
            self.payment_types = list(session.scalars(select(PaymentType).order_by(PaymentType.name)))

            contracts = session.scalars(
                select(Contract)
                .options(selectinload(Contract.phases), selectinload(Contract.payments))
                .order_by(Contract.date_signed.desc())
            ).all()

        for contract in contracts:
            self._repair_organizations(contract)

        self.items = list(contracts)
        self.selected = self.items[0] if self.items else None
        logger.info("contracts.loaded", extra={"event": "contracts.loaded", "count": len(self.items)})
        self._changed("loaded")
        return self.items

    def _default_customer_id(self) -> int | None:
        return _first_id(self.organizations, "org_id")

    def _default_contractor_id(self) -> int | None:
        if len(self.organizations) > 1:
            return self.organizations[1].org_id
        return self._default_customer_id()

    def _repair_organizations(self, contract: Contract) -> None:
        """Point contracts at existing organizations; the change stays in memory until saved."""
        if not self.organizations:
            return
        known = {org.org_id for org in self.organizations}
        if contract.customer_id not in known:
            logger.warning(
                "contracts.customer.remapped",
                extra={"event": "contracts.customer.remapped", "contract_id": contract.contract_id},
            )
            contract.customer_id = self._default_customer_id()
        if contract.contractor_id not in known:
            logger.warning(
                "contracts.contractor.remapped",
                extra={"event": "contracts.contractor.remapped", "contract_id": contract.contract_id},
            )
            contract.contractor_id = self._default_contractor_id()

    # ------------------------------------------------------------------
    # contracts
    # ------------------------------------------------------------------

    def add_contract(self) -> Contract:
        contract = Contract(
            date_signed=date.today(),
            customer_id=self._default_customer_id(),
            contractor_id=self._default_contractor_id(),
            type_id=_first_id(self.contract_types, "type_id"),
            stage_id=_first_id(self.stages, "stage_id"),
            vat_id=_first_id(self.vat_rates, "vat_id"),
            due_date=None,
            subject="",
            note="",
        )
        self.items.insert(0, contract)
        self._changed("added")
        self.select(contract)
        return contract

    @property
    def can_delete_selected(self) -> bool:
        return self.selected is not None

    def delete_selected(self) -> bool:
        contract = self.selected
        if contract is None:
            return False

        if contract.is_new:
            self._forget(contract)
            self._changed("deleted")
            return True

        if not self.notifier.confirm(CONFIRM_DELETE_MESSAGE, "Подтверждение"):
            return False

        contract_id = contract.contract_id
        with self.database.get_session() as session:
            try:
                stored = session.get(Contract, contract_id)
                if stored is not None:
                    session.delete(stored)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                if is_foreign_key_violation(exc):
                    logger.warning(
                        "contracts.delete.conflict",
                        extra={"event": "contracts.delete.conflict", "contract_id": contract_id},
                    )
                    self._report_conflict(DELETE_CONFLICT_MESSAGE)
                else:
                    self._report_error(exc, "Удаление не выполнено")
                return False

        self.items.remove(contract)
        self.selected = self.items[0] if self.items else None
        logger.info("contracts.deleted", extra={"event": "contracts.deleted", "contract_id": contract_id})
        self._changed("deleted")
        return True

    def save_all(self) -> bool:
        """Commit the working set in one transaction, then reload.

        The detached graph is merged into a fresh session; on failure only that
        session is rolled back, so edits and unsaved rows stay in place for a retry.
        """
        with self.database.get_session() as session:
            try:
                for contract in self.items:
                    session.merge(contract)
                inserted = len(session.new)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                self._report_error(exc)
                return False

        logger.info("contracts.saved", extra={"event": "contracts.saved", "inserted": inserted})
        self.notifier.notify(NotificationKind.SUCCESS, SAVED_MESSAGE)
        self._changed("saved")
        self.load()
        return True

    # ------------------------------------------------------------------
    # payments and phases of the selected contract
    # ------------------------------------------------------------------

    def add_payment(self) -> Payment | None:
        contract = self.selected
        if contract is None:
            return None
        payment = Payment(
            payment_date=date.today(),
            amount=0.0,
            payment_type_id=_first_id(self.payment_types, "payment_type_id"),
            document_number="",
        )
        contract.payments.append(payment)
        self._changed("added")
        return payment

    @property
    def can_delete_payment(self) -> bool:
        return self.selected is not None and bool(self.selected.payments)

    def delete_payment(self) -> Payment | None:
        """Remove the last payment of the selected contract."""
        if not self.can_delete_payment:
            return None
        payment = self.selected.payments[-1]
        self.selected.payments.remove(payment)
        self._changed("deleted")
        return payment

    def add_phase(self) -> ContractPhase | None:
        contract = self.selected
        if contract is None:
            return None
        phase = ContractPhase(
            phase_num=contract.next_phase_number(),
            due_date=date.today(),
            stage_id=_first_id(self.stages, "stage_id"),
            amount=0.0,
            advance=0.0,
            subject="",
        )
        contract.phases.append(phase)
        self._changed("added")
        return phase

    @property
    def can_delete_phase(self) -> bool:
        return self.selected is not None and bool(self.selected.phases)

    def delete_phase(self) -> ContractPhase | None:
        """Remove the highest-numbered phase of the selected contract."""
        if not self.can_delete_phase:
            return None
        phase = max(self.selected.phases, key=lambda ph: ph.phase_num)
        self.selected.phases.remove(phase)
        self._changed("deleted")
        return phase

    # ------------------------------------------------------------------
    # filtering
    # ------------------------------------------------------------------

    def matches(self, item: Contract, needle: str) -> bool:
        return (
            contains_text(item.subject, needle)
            or contains_text(item.note, needle)
            or contains_text(item.contract_id if item.contract_id is not None else 0, needle)
            or (item.date_signed is not None and contains_text(format_date(item.date_signed), needle))
        )
