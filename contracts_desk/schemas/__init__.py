"""Pydantic schemas for validating user input."""

from contracts_desk.schemas.lookups import LookupNameInput, VatRateInput
from contracts_desk.schemas.organizations import OrganizationForm

__all__ = ["LookupNameInput", "OrganizationForm", "VatRateInput"]
