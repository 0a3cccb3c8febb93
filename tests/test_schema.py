from __future__ import annotations

from sqlalchemy import inspect

from contracts_desk.database.db import Database
from contracts_desk.database.init_db import DEFAULT_CONTRACT_TYPES, init_db, seed_defaults
from contracts_desk.database.schema import TABLES, VIEW_DDL, missing_objects
from contracts_desk.models import Base, Organization, Stage, VatRate
from contracts_desk.models.base import NEW_IDENTITY, clear_new_identities
from contracts_desk.services.lookup_service import CONTRACT_TYPES, SimpleLookupService


def test_metadata_declares_every_table():
    assert set(TABLES) == set(Base.metadata.tables)


def test_identity_helpers():
    stage = Stage(name="Новая")
    assert stage.stage_id == NEW_IDENTITY
    assert stage.is_new

    clear_new_identities([stage])
    assert stage.stage_id is None


def test_explicit_identity_is_kept():
    assert Organization(org_id=7, name="X").identity == 7
    assert not Organization(org_id=7, name="X").is_new


def test_fresh_file_is_missing_everything(tmp_path):
    database = Database(tmp_path / "empty.db")
    try:
        assert missing_objects(database.get_engine()) == set(TABLES) | set(VIEW_DDL)
    finally:
        database.dispose()


def test_init_db_creates_tables_and_views(tmp_path):
    database = Database(tmp_path / "fresh.db")
    try:
        init_db(database)
        init_db(database)

        assert missing_objects(database.get_engine()) == set()
        assert set(VIEW_DDL) <= set(inspect(database.get_engine()).get_view_names())
    finally:
        database.dispose()


def test_seed_fills_only_empty_tables(tmp_path):
    database = Database(tmp_path / "seeded.db")
    try:
        init_db(database, seed=True)
        assert seed_defaults(database) == 0

        names = [item.name for item in SimpleLookupService.for_table(CONTRACT_TYPES, database).load()]
        assert sorted(names) == sorted(DEFAULT_CONTRACT_TYPES)
        with database.get_session() as session:
            assert sorted(float(v.rate) for v in session.query(VatRate)) == [0.0, 10.0, 20.0]
    finally:
        database.dispose()


def test_foreign_keys_are_enforced(database):
    with database.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
