"""Organization registry manager."""

from __future__ import annotations

import logging

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import delete, exists, or_, select
from sqlalchemy.exc import SQLAlchemyError

from contracts_desk.core.notifications import NotificationKind
from contracts_desk.models import Contract, Organization
from contracts_desk.schemas.organizations import OrganizationForm
from contracts_desk.services.base_service import SAVED_MESSAGE, BaseService
from contracts_desk.utils.validators import contains_text

logger = logging.getLogger(__name__)

NEW_ORGANIZATION_NAME = "Новая организация"
IN_USE_MESSAGE = "Нельзя удалить организацию: она используется в договорах (как заказчик или исполнитель)."
INVALID_FORM_MESSAGE = "Наименование организации не может быть пустым."

_SEARCH_FIELDS = ("name", "address", "phone", "tax_id", "bank_account", "bank_code")


class OrganizationService(BaseService[Organization]):
    """Customers and contractors, loaded detached and saved in one unit of work."""

    def load(self) -> list[Organization]:
        with self.database.get_session() as session:
            self.items = list(session.scalars(select(Organization).order_by(Organization.name)))
        self.selected = None
        self._changed("loaded")
        return self.items

    def add(self) -> Organization:
        organization = Organization(name=NEW_ORGANIZATION_NAME)
        self.items.append(organization)
        self._changed("added")
        return organization

    def is_referenced(self, org_id: int) -> bool:
        """True when any contract names the organization as customer or contractor."""
        with self.database.get_session() as session:
            return bool(
                session.scalar(
                    select(
                        exists().where(or_(Contract.customer_id == org_id, Contract.contractor_id == org_id))
                    )
                )
            )

    def delete(self, item: Organization | None = None) -> bool:
        item = item or self.selected
        if item is None:
            return False

        if item.is_new:
            self._forget(item)
            self._changed("deleted")
            return True

        if self.is_referenced(item.org_id):
            logger.warning(
                "organization.delete.conflict",
                extra={"event": "organization.delete.conflict", "org_id": item.org_id},
            )
            self._report_conflict(IN_USE_MESSAGE)
            return False

        try:
            with self.database.get_session() as session:
                session.execute(delete(Organization).where(Organization.org_id == item.org_id))
                session.commit()
        except SQLAlchemyError as exc:
            self._report_error(exc, "Удаление не выполнено")
            return False

        self._forget(item)
        logger.info("organization.deleted", extra={"event": "organization.deleted", "org_id": item.org_id})
        self._changed("deleted")
        return True

    def validate(self) -> list[Organization]:
        """Organizations whose fields fail the form schema."""
        invalid = []
        for organization in self.items:
            try:
                OrganizationForm.model_validate(organization)
            except SchemaValidationError:
                invalid.append(organization)
        return invalid

    def save(self) -> bool:
        if self.validate():
            self.notifier.notify(NotificationKind.WARNING, INVALID_FORM_MESSAGE)
            return False

        with self.database.get_session() as session:
            try:
                for organization in self.items:
                    session.merge(organization)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                self._report_error(exc)
                return False

        logger.info("organization.saved", extra={"event": "organization.saved", "count": len(self.items)})
        self.notifier.notify(NotificationKind.SUCCESS, SAVED_MESSAGE)
        self._changed("saved")
        self.load()
        return True

    def matches(self, item: Organization, needle: str) -> bool:
        return any(contains_text(getattr(item, field), needle) for field in _SEARCH_FIELDS)
