import json

import pytest

from app.db.backends import JsonFileBackend, SqlDocumentBackend
from app.db.document_store import DocumentStore


def test_missing_file_starts_with_empty_collections(store):
    with store.read() as db:
        assert db.collection("employees") == []
        assert db.size("projects") == 0


def test_insert_assigns_ids_starting_at_one_and_persists(store, db_path):
    with store.with_write_lock() as db:
        first = db.insert("employees", {"name": "A"})
        second = db.insert("employees", {"name": "B"})
    assert (first["id"], second["id"]) == (1, 2)

    on_disk = json.loads(db_path.read_text())
    assert [e["name"] for e in on_disk["employees"]] == ["A", "B"]


def test_ids_continue_from_max_existing_and_tolerate_gaps(db_path):
    db_path.write_text(json.dumps({"employees": [{"id": 3}, {"id": 10}], "projects": []}))
    store = DocumentStore(JsonFileBackend(str(db_path)))

    with store.with_write_lock() as db:
        assert db.insert("employees", {"name": "X"})["id"] == 11
        db.delete("employees", 11)
        # silinen id tekrar verilmez
        assert db.insert("employees", {"name": "Y"})["id"] == 12
        assert db.insert("projects", {"name": "P"})["id"] == 1


def test_update_merges_fields(store):
    with store.with_write_lock() as db:
        db.insert("employees", {"name": "A", "code": "E1"})
        rec = db.update("employees", 1, {"code": "E2"})
    assert rec == {"id": 1, "name": "A", "code": "E2"}
    with store.read() as db:
        assert db.writable is False


def test_failed_write_block_reloads_and_does_not_persist(store, db_path):
    with store.with_write_lock() as db:
        db.insert("employees", {"name": "A"})

    with pytest.raises(RuntimeError):
        with store.with_write_lock() as db:
            db.update("employees", 1, {"name": "changed"})
            raise RuntimeError("boom")

    with store.read() as db:
        assert db.get("employees", 1)["name"] == "A"
    assert json.loads(db_path.read_text())["employees"][0]["name"] == "A"


def test_read_session_rejects_writes(store):
    with store.read() as db:
        with pytest.raises(RuntimeError):
            db.insert("employees", {"name": "A"})


def test_find_and_filter(store):
    with store.with_write_lock() as db:
        db.insert("employees", {"name": "A", "is_manager": True})
        db.insert("employees", {"name": "B", "is_manager": False})
        db.insert("employees", {"name": "C", "is_manager": True})
    with store.read() as db:
        assert [e["name"] for e in db.filter("employees", is_manager=True)] == ["A", "C"]
        assert db.find("employees", lambda e: e["name"] == "B")["id"] == 2
        assert db.get("employees", 99) is None


def test_sql_backend_round_trip(tmp_path):
    url = f"sqlite:///{tmp_path / 'docs.db'}"
    store = DocumentStore(SqlDocumentBackend(url))
    with store.with_write_lock() as db:
        db.insert("positions", {"name": "Tester"})

    fresh = DocumentStore(SqlDocumentBackend(url))
    with fresh.read() as db:
        assert db.collection("positions") == [{"id": 1, "name": "Tester"}]
        assert db.collection("employees") == []


def test_extra_top_level_keys_are_kept_and_ignored_by_counters(db_path):
    db_path.write_text(json.dumps({"profile": {"name": "hr"}, "employees": [{"id": 4}]}))
    store = DocumentStore(JsonFileBackend(str(db_path)))

    with store.with_write_lock() as db:
        assert db.insert("employees", {"name": "X"})["id"] == 5
        assert db.insert("positions", {"name": "P"})["id"] == 1

    assert json.loads(db_path.read_text())["profile"] == {"name": "hr"}
