import pytest

from app.config import Settings
from app.storage import (
    InMemorySubmissionStore,
    SqliteSubmissionStore,
    StorageError,
    build_submission_store,
    generate_submission_id,
)


def test_submission_id_format():
    sid = generate_submission_id("quote")
    prefix, date, time, suffix = sid.split("_")
    assert prefix == "quote"
    assert len(date) == 8 and len(time) == 6 and len(suffix) == 6


def test_in_memory_store_roundtrip():
    store = InMemorySubmissionStore()
    sid = store.save("contact", {"name": "Marie"})
    assert store.get(sid) == {"kind": "contact", "name": "Marie"}
    assert store.get("missing") is None
    assert len(store) == 1


def test_sqlite_store_roundtrip(tmp_path):
    store = SqliteSubmissionStore(str(tmp_path / "db" / "submissions.sqlite3"))
    sid = store.save("quote", {"name": "Jean", "estimatedCost": 65340})
    assert store.get(sid) == {"kind": "quote", "name": "Jean", "estimatedCost": 65340}
    assert store.get("quote_nope") is None


def test_sqlite_store_wraps_errors(tmp_path):
    store = SqliteSubmissionStore(str(tmp_path / "submissions.sqlite3"))
    # A directory where the database file should be makes every connect fail
    (tmp_path / "gone.sqlite3").mkdir()
    store.path = str(tmp_path / "gone.sqlite3")
    with pytest.raises(StorageError):
        store.save("contact", {"name": "x"})


def test_build_submission_store(tmp_path):
    assert build_submission_store(Settings(SUBMISSION_STORE="none")) is None
    assert isinstance(build_submission_store(Settings(SUBMISSION_STORE="memory")), InMemorySubmissionStore)
    sqlite_store = build_submission_store(
        Settings(SUBMISSION_STORE="sqlite", SUBMISSION_DB_PATH=str(tmp_path / "s.sqlite3"))
    )
    assert isinstance(sqlite_store, SqliteSubmissionStore)
    with pytest.raises(ValueError):
        build_submission_store(Settings(SUBMISSION_STORE="postgres"))
