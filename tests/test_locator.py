from __future__ import annotations

from contracts_desk.database.locator import PROMPT_TITLE, read_saved_path, resolve_db_path, save_path


def test_saved_path_wins(tmp_path):
    config_path = tmp_path / "config.txt"
    saved = tmp_path / "saved.db"
    saved.touch()
    candidate = tmp_path / "contracts.db"
    candidate.touch()
    save_path(config_path, saved)

    assert resolve_db_path(config_path, [candidate]) == saved


def test_missing_saved_file_is_ignored(tmp_path):
    config_path = tmp_path / "config.txt"
    config_path.write_text(str(tmp_path / "gone.db"), encoding="utf-8")

    assert read_saved_path(config_path) is None


def test_first_existing_candidate_is_used_and_remembered(tmp_path):
    config_path = tmp_path / "nested" / "config.txt"
    data_db = tmp_path / "Data" / "contracts.db"
    data_db.parent.mkdir()
    data_db.touch()

    resolved = resolve_db_path(config_path, [tmp_path / "contracts.db", data_db])

    assert resolved == data_db
    assert config_path.read_text(encoding="utf-8") == str(data_db)


def test_prompt_is_asked_last(tmp_path):
    config_path = tmp_path / "config.txt"
    chosen = tmp_path / "picked.db"
    chosen.touch()
    titles = []

    def prompt(title):
        titles.append(title)
        return str(chosen)

    assert resolve_db_path(config_path, [tmp_path / "contracts.db"], prompt) == chosen
    assert titles == [PROMPT_TITLE]
    assert read_saved_path(config_path) == chosen


def test_cancelled_prompt_resolves_nothing(tmp_path):
    config_path = tmp_path / "config.txt"

    assert resolve_db_path(config_path, [tmp_path / "contracts.db"], lambda title: None) is None
    assert resolve_db_path(config_path, [tmp_path / "contracts.db"]) is None
    assert not config_path.exists()


def test_prompted_file_must_exist(tmp_path):
    config_path = tmp_path / "config.txt"

    assert resolve_db_path(config_path, [], lambda title: tmp_path / "missing.db") is None
