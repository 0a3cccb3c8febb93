"""Organization model module."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from contracts_desk.models.base import Base


class Organization(Base):
    """Customer or contractor."""

    __tablename__ = "organizations"
    __identity__ = "org_id"

    org_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str | None] = mapped_column(String)
    phone: Mapped[str | None] = mapped_column(String)
    tax_id: Mapped[str | None] = mapped_column("inn", String)
    bank_account: Mapped[str | None] = mapped_column(String)
    bank_code: Mapped[str | None] = mapped_column("bik", String)

    def __repr__(self) -> str:
        return f"Organization(org_id={self.org_id!r}, name={self.name!r})"
