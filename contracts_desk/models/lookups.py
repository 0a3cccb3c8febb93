"""Lookup tables referenced by contracts, phases and payments."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from contracts_desk.models.base import Base


class ContractType(Base):
    __tablename__ = "contract_types"
    __identity__ = "type_id"

    type_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class Stage(Base):
    __tablename__ = "stages"
    __identity__ = "stage_id"

    stage_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)


class VatRate(Base):
    __tablename__ = "vat_rates"
    __table_args__ = (CheckConstraint("rate IS NULL OR (rate >= 0 AND rate <= 100)", name="ck_vat_rates_rate_range"),)
    __identity__ = "vat_id"

    vat_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 2))


class PaymentType(Base):
    __tablename__ = "payment_types"
    __identity__ = "payment_type_id"

    payment_type_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
