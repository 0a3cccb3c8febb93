"""Organization form schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OrganizationForm(BaseModel):
    model_config = ConfigDict(from_attributes=True, str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=500)
    address: str | None = Field(default=None, max_length=1000)
    phone: str | None = Field(default=None, max_length=100)
    tax_id: str | None = Field(default=None, max_length=32)
    bank_account: str | None = Field(default=None, max_length=64)
    bank_code: str | None = Field(default=None, max_length=32)
