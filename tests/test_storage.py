from __future__ import annotations

import json

import pytest

from houselist.errors import StorageUnavailable
from houselist.storage import JsonFileStore, MemoryStore, load_seed_records


def test_memory_store_absent_key_is_none():
    assert MemoryStore().get("search") is None


def test_memory_store_keeps_empty_string():
    s = MemoryStore()
    s.set("search", "")
    assert s.get("search") == ""


def test_memory_store_rejects_non_strings():
    with pytest.raises(TypeError):
        MemoryStore().set("n", 3)


def test_json_store_missing_file_is_absent(tmp_path):
    assert JsonFileStore(tmp_path / "state.json").get("search") is None


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "state.json"
    JsonFileStore(path).set("search", "usa")
    JsonFileStore(path).set("other", "x")

    fresh = JsonFileStore(path)
    assert fresh.get("search") == "usa"
    assert fresh.get("other") == "x"
    assert json.loads(path.read_text(encoding="utf-8")) == {"search": "usa", "other": "x"}


def test_json_store_corrupt_file_read_raises_write_replaces(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)

    with pytest.raises(StorageUnavailable):
        store.get("search")

    store.set("search", "x")
    assert json.loads(path.read_text(encoding="utf-8")) == {"search": "x"}
    assert store.get("search") == "x"


def test_json_store_non_object_raises_unavailable(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        JsonFileStore(path).get("search")


def test_json_store_ignores_non_string_entries(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"search": 5}), encoding="utf-8")
    assert JsonFileStore(path).get("search") is None


def test_json_store_unwritable_location_raises_unavailable(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        JsonFileStore(blocker / "state.json").set("search", "x")


def test_load_seed_records_skips_malformed_items(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(
        json.dumps([
            {"id": 1, "address": "a", "country": "USA", "price": 5},
            "garbage",
            {"address": "no id"},
            {"id": 2, "address": "b", "country": "Italy", "price": -3},
            {"objectID": 3, "address": "c", "country": "Peru", "price": 7},
        ]),
        encoding="utf-8",
    )
    recs = load_seed_records(path)
    assert [r.id for r in recs] == [1, 3]


def test_load_seed_records_missing_or_invalid_file(tmp_path):
    assert load_seed_records(tmp_path / "missing.json") == []
    bad = tmp_path / "bad.json"
    bad.write_text("nope", encoding="utf-8")
    assert load_seed_records(bad) == []
    obj = tmp_path / "obj.json"
    obj.write_text("{}", encoding="utf-8")
    assert load_seed_records(obj) == []
