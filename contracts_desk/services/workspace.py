"""All managers of the application bound to one database."""

from __future__ import annotations

import logging

from contracts_desk.core.notifications import LoggingNotifier, Notifier
from contracts_desk.database.db import Database
from contracts_desk.services.contract_service import ContractService
from contracts_desk.services.lookup_service import CONTRACT_TYPES, PAYMENT_TYPES, STAGES, SimpleLookupService
from contracts_desk.services.organization_service import OrganizationService
from contracts_desk.services.report_service import ReportService
from contracts_desk.services.vat_rate_service import VatRateService

logger = logging.getLogger(__name__)


class Workspace:
    """One manager per tab of the application; each opens its own sessions."""

    def __init__(self, database: Database, notifier: Notifier | None = None) -> None:
        self.database = database
        self.notifier = notifier or LoggingNotifier()
        self.contracts = ContractService(database, self.notifier)
        self.organizations = OrganizationService(database, self.notifier)
        self.contract_types = SimpleLookupService.for_table(CONTRACT_TYPES, database, self.notifier)
        self.stages = SimpleLookupService.for_table(STAGES, database, self.notifier)
        self.payment_types = SimpleLookupService.for_table(PAYMENT_TYPES, database, self.notifier)
        self.vat_rates = VatRateService(database, self.notifier)
        self.reports = ReportService(database)

    @property
    def managers(self) -> dict[str, object]:
        return {
            "contracts": self.contracts,
            "organizations": self.organizations,
            "contract_types": self.contract_types,
            "stages": self.stages,
            "payment_types": self.payment_types,
            "vat_rates": self.vat_rates,
        }

    def load_all(self) -> dict[str, int]:
        """Load every manager; returns the row count per manager."""
        counts = {name: len(manager.load()) for name, manager in self.managers.items()}
        logger.info("workspace.loaded", extra={"event": "workspace.loaded", "counts": counts})
        return counts

    def close(self) -> None:
        self.database.dispose()
