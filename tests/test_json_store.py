"""
Tests for the whole-document JSON store (read-through, write-through, atomic save).
"""

from __future__ import annotations

import json

import backend_bundlebot.database.json_store as json_store_mod
from backend_bundlebot.database import JsonStore


def test_missing_file_starts_empty(tmp_path):
    store = JsonStore(tmp_path / "bundles.json")
    assert len(store) == 0
    assert store.get("anything") is None
    assert not (tmp_path / "bundles.json").exists()


def test_set_writes_through_and_reloads(tmp_path):
    path = tmp_path / "sessions.json"
    store = JsonStore(path)
    store.set("s1", {"bundle": [{"address": "a", "amount": "1"}]})
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "s1": {"bundle": [{"address": "a", "amount": "1"}]}
    }
    reloaded = JsonStore(path)
    assert "s1" in reloaded
    assert reloaded.get("s1")["bundle"][0]["amount"] == "1"


def test_save_leaves_no_temp_files(tmp_path):
    store = JsonStore(tmp_path / "history.json")
    store.set("u1", [1, 2, 3])
    store.set("u2", [])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["history.json"]


def test_malformed_file_loads_empty(tmp_path):
    path = tmp_path / "bundles.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonStore(path)
    assert len(store) == 0


def test_non_object_document_loads_empty(tmp_path):
    path = tmp_path / "bundles.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert len(JsonStore(path)) == 0


def test_failed_save_keeps_memory_state(tmp_path, monkeypatch):
    """A write failure is logged and swallowed; in-memory value still served."""
    path = tmp_path / "sessions.json"
    store = JsonStore(path)

    def boom(path, obj):
        raise OSError("disk full")

    monkeypatch.setattr(json_store_mod, "_atomic_write_json", boom)
    store.set("s1", {"bundle": []})
    assert store.get("s1") == {"bundle": []}
    assert not path.exists()
