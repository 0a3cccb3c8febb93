"""Contract aggregate: contract root with its phases and payments."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contracts_desk.models.base import Base
from contracts_desk.models.lookups import ContractType, PaymentType, Stage, VatRate
from contracts_desk.models.organization import Organization


class Contract(Base):
    __tablename__ = "contracts"
    __table_args__ = (
        Index("idx_contracts_date_signed", "date_signed"),
        Index("idx_contracts_customer", "customer_id"),
        Index("idx_contracts_contractor", "contractor_id"),
    )
    __identity__ = "contract_id"

    contract_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date_signed: Mapped[date] = mapped_column(Date, nullable=False)
    customer_id: Mapped[int] = mapped_column(ForeignKey("organizations.org_id", ondelete="RESTRICT"), nullable=False)
    contractor_id: Mapped[int] = mapped_column(ForeignKey("organizations.org_id", ondelete="RESTRICT"), nullable=False)
    type_id: Mapped[int] = mapped_column(ForeignKey("contract_types.type_id", ondelete="RESTRICT"), nullable=False)
    stage_id: Mapped[int] = mapped_column(ForeignKey("stages.stage_id", ondelete="RESTRICT"), nullable=False)
    vat_id: Mapped[int] = mapped_column(ForeignKey("vat_rates.vat_id", ondelete="RESTRICT"), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    subject: Mapped[str | None] = mapped_column(Text)
    note: Mapped[str | None] = mapped_column(Text)

    customer: Mapped[Organization | None] = relationship(foreign_keys=[customer_id])
    contractor: Mapped[Organization | None] = relationship(foreign_keys=[contractor_id])
    contract_type: Mapped[ContractType | None] = relationship()
    stage: Mapped[Stage | None] = relationship()
    vat_rate: Mapped[VatRate | None] = relationship()

    phases: Mapped[list["ContractPhase"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ContractPhase.phase_num",
    )
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Payment.payment_id",
    )

    def next_phase_number(self) -> int:
        return max((phase.phase_num for phase in self.phases), default=0) + 1

    def __repr__(self) -> str:
        return f"Contract(contract_id={self.contract_id!r}, date_signed={self.date_signed!r}, subject={self.subject!r})"


class ContractPhase(Base):
    __tablename__ = "contract_phases"
    # A phase of an unsaved contract has no contract_id yet; merge treats it as new.
    __mapper_args__ = {"allow_partial_pks": False}

    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.contract_id", ondelete="CASCADE"), primary_key=True
    )
    phase_num: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    stage_id: Mapped[int | None] = mapped_column(ForeignKey("stages.stage_id", ondelete="RESTRICT"))
    amount: Mapped[float | None] = mapped_column(Float)
    advance: Mapped[float | None] = mapped_column(Float)
    subject: Mapped[str | None] = mapped_column(Text)

    contract: Mapped[Contract] = relationship(back_populates="phases")
    stage: Mapped[Stage | None] = relationship()


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (Index("idx_payments_contract", "contract_id"),)
    __identity__ = "payment_id"

    payment_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contract_id: Mapped[int] = mapped_column(ForeignKey("contracts.contract_id", ondelete="CASCADE"), nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    payment_type_id: Mapped[int] = mapped_column(
        ForeignKey("payment_types.payment_type_id", ondelete="RESTRICT"), nullable=False
    )
    document_number: Mapped[str | None] = mapped_column(String)

    contract: Mapped[Contract] = relationship(back_populates="payments")
    payment_type: Mapped[PaymentType | None] = relationship()
