"""Tests for the SQLAlchemy key-value storage."""

from spendlog.database.factories import create_sqlite_storage, resolve_database_path


def test_get_missing_key_returns_none(temp_storage):
    assert temp_storage.get_item("expenses") is None


def test_set_and_get_item(temp_storage):
    temp_storage.set_item("expenses", "[]")
    assert temp_storage.get_item("expenses") == "[]"


def test_set_item_overwrites(temp_storage):
    temp_storage.set_item("expenses", "[1]")
    temp_storage.set_item("expenses", "[2]")

    assert temp_storage.get_item("expenses") == "[2]"
    assert temp_storage.keys() == ["expenses"]


def test_remove_item(temp_storage):
    temp_storage.set_item("expenses", "[]")
    temp_storage.remove_item("expenses")
    temp_storage.remove_item("never-set")

    assert temp_storage.get_item("expenses") is None
    assert temp_storage.keys() == []


def test_values_survive_reconnect(temp_storage):
    temp_storage.set_item("expenses", '[{"id": 1}]')
    temp_storage.disconnect()

    reopened = create_sqlite_storage(database_path=temp_storage.database_path)
    try:
        assert reopened.get_item("expenses") == '[{"id": 1}]'
    finally:
        reopened.disconnect()


def test_factory_uses_environment_variable(monkeypatch, tmp_path):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("SPENDLOG_DB_PATH", str(db_path))

    storage = create_sqlite_storage()
    try:
        assert storage.database_url == f"sqlite:///{db_path}"
    finally:
        storage.disconnect()


def test_resolve_database_path_prefers_argument(tmp_path):
    env = {"SPENDLOG_DB_PATH": str(tmp_path / "env.db")}

    assert resolve_database_path(str(tmp_path / "arg.db"), environ=env) == tmp_path / "arg.db"
    assert resolve_database_path(None, environ=env) == tmp_path / "env.db"


def test_resolve_database_path_defaults_to_home(tmp_path):
    path = resolve_database_path(None, environ={}, home=tmp_path)

    assert path == tmp_path / ".spendlog" / "spendlog.db"


def test_create_sqlite_storage_creates_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "expenses.db"

    storage = create_sqlite_storage(database_path=str(db_path))
    storage.connect()
    storage.initialize_schema()
    try:
        storage.set_item("expenses", "[]")
    finally:
        storage.disconnect()

    assert db_path.exists()
