from __future__ import annotations

from contracts_desk.services.workspace import Workspace


def test_load_all_counts_rows_per_manager(database, seeded, notifier):
    workspace = Workspace(database, notifier)

    counts = workspace.load_all()

    assert counts == {
        "contracts": 1,
        "organizations": 3,
        "contract_types": 2,
        "stages": 2,
        "payment_types": 2,
        "vat_rates": 2,
    }
    assert workspace.contracts.selected is not None
    workspace.close()


def test_managers_share_one_notifier(database, notifier):
    workspace = Workspace(database, notifier)

    assert all(manager.notifier is notifier for manager in workspace.managers.values())
    assert workspace.reports.selected_report == "v_contract_info"
