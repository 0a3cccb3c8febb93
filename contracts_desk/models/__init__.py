"""SQLAlchemy model package for the contract schema."""

from contracts_desk.models.base import NEW_IDENTITY, Base
from contracts_desk.models.contract import Contract, ContractPhase, Payment
from contracts_desk.models.lookups import ContractType, PaymentType, Stage, VatRate
from contracts_desk.models.organization import Organization
from contracts_desk.models.reports import REPORTS, ReportDefinition

__all__ = [
    "Base",
    "Contract",
    "ContractPhase",
    "ContractType",
    "NEW_IDENTITY",
    "Organization",
    "Payment",
    "PaymentType",
    "REPORTS",
    "ReportDefinition",
    "Stage",
    "VatRate",
]
