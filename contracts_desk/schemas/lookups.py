"""Input schemas for lookup and VAT rate candidates."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contracts_desk.utils.validators import parse_rate


class LookupNameInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)


class VatRateInput(BaseModel):
    rate: Decimal = Field(ge=0, le=100)

    @field_validator("rate", mode="before")
    @classmethod
    def rate_accepts_comma_separator(cls, value):
        if isinstance(value, str):
            parsed = parse_rate(value)
            if parsed is None:
                raise ValueError("rate must be a number")
            return parsed
        return value
