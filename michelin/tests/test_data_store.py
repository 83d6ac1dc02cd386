from __future__ import annotations

import json
from pathlib import Path

import pytest

from michelin.restaurants.data_store import RecordStore, load_store
from michelin.restaurants.errors import DatasetError, StoreUnavailable
from michelin.restaurants.models import Restaurant

RECORDS = [
    Restaurant(id=1, name="Mirazur", cuisine=["Creative"], location=["Menton", "France"]),
    Restaurant(id=2, name="Geranium", cuisine=["Creative", "Scandinavian"], location=["Copenhagen"]),
    Restaurant(id=3, name="Le Cinq", cuisine=["Modern Cuisine", "French"], location=["Paris", "France"]),
]


def test_empty_store_is_unavailable():
    store = RecordStore()
    assert not store.is_loaded
    assert len(store) == 0
    with pytest.raises(StoreUnavailable):
        store.snapshot()


def test_reload_publishes_whole_dataset():
    store = RecordStore(RECORDS)
    snapshot = store.snapshot()
    assert snapshot.records == tuple(RECORDS)
    assert snapshot.by_id[3].name == "Le Cinq"


def test_old_snapshot_survives_reload():
    store = RecordStore(RECORDS)
    before = store.snapshot()
    store.reload(RECORDS[:1])
    after = store.snapshot()
    assert len(before) == 3
    assert len(after) == 1
    assert after.generation > before.generation


def test_duplicate_ids_rejected_and_previous_kept():
    store = RecordStore(RECORDS)
    with pytest.raises(DatasetError):
        store.reload([RECORDS[0], RECORDS[0]])
    assert len(store) == 3


def test_slice_past_end_is_empty():
    assert RecordStore(RECORDS).snapshot().slice(100, 100) == ()


def test_distinct_first_seen_order():
    assert RecordStore(RECORDS).snapshot().distinct("cuisine") == [
        "Creative",
        "Scandinavian",
        "Modern Cuisine",
        "French",
    ]


def test_clear():
    store = RecordStore(RECORDS)
    store.clear()
    assert not store.is_loaded


def test_load_store_from_file(tmp_path: Path):
    path = tmp_path / "michelin-data.json"
    path.write_text(json.dumps([
        {"id": 5, "name": "Chez Pim", "cuisine": "Thai", "location": "Bangkok, Thailand", "award": "Bib Gourmand"},
    ]))
    store = load_store(path, RecordStore())
    record = store.snapshot().by_id[5]
    assert record.location == ["Bangkok", "Thailand"]
    assert record.model_dump()["award"] == "Bib Gourmand"


def test_load_store_missing_file(tmp_path: Path):
    with pytest.raises(StoreUnavailable):
        load_store(tmp_path / "missing.json", RecordStore())


def test_bundled_dataset_loads():
    store = load_store(store=RecordStore())
    assert len(store) > 0
