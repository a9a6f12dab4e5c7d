from __future__ import annotations

import json

import numpy as np
import pytest

from lumenplan import compute_lighting
from lumenplan.project.presets import default_requirements, default_room
from lumenplan.results.store import CalculationStore, hash_calculation_inputs, write_grid_csv


def _save(store: CalculationStore, user: str, name: str):
    room = default_room()
    req = default_requirements()
    results = compute_lighting(room, req).results
    return store.create(user, name, room, req, results)


def test_create_and_reload(tmp_path) -> None:
    path = tmp_path / "data" / "calculations.json"
    store = CalculationStore(path)
    rec = _save(store, "user-1", "Open office")

    assert path.exists()
    assert rec.id
    assert rec.created_at == rec.updated_at
    assert rec.input_hash == hash_calculation_inputs(default_room(), default_requirements())

    loaded = CalculationStore(path).get(rec.id)
    assert loaded == rec
    assert loaded.results.number_of_lamps == 20

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["calculations"][0]["lighting_requirements"]["contamination_level"] == "normal"


def test_list_by_user_and_delete(tmp_path) -> None:
    store = CalculationStore(tmp_path / "calculations.json")
    a = _save(store, "alice", "Lab")
    _save(store, "bob", "Warehouse")
    c = _save(store, "alice", "Hall")

    assert [r.name for r in store.list_by_user("alice")] == ["Lab", "Hall"]
    assert len(store.list_all()) == 3

    with pytest.raises(PermissionError):
        store.delete(a.id, user_id="bob")
    store.delete(a.id, user_id="alice")
    assert [r.id for r in store.list_by_user("alice")] == [c.id]

    with pytest.raises(KeyError):
        store.delete(a.id)
    with pytest.raises(KeyError):
        store.get(a.id)


def test_rename(tmp_path) -> None:
    store = CalculationStore(tmp_path / "calculations.json")
    rec = _save(store, "alice", "Draft")
    renamed = store.rename(rec.id, "  Final  ", user_id="alice")
    assert renamed.name == "Final"
    assert store.get(rec.id).name == "Final"
    with pytest.raises(PermissionError):
        store.rename(rec.id, "Other", user_id="bob")
    with pytest.raises(ValueError):
        store.rename(rec.id, "   ")


def test_create_requires_name_and_user(tmp_path) -> None:
    store = CalculationStore(tmp_path / "calculations.json")
    with pytest.raises(ValueError):
        _save(store, "alice", " ")
    with pytest.raises(ValueError):
        _save(store, "", "Named")
    assert store.list_all() == []


def test_missing_store_file_reads_empty(tmp_path) -> None:
    store = CalculationStore(tmp_path / "nope.json")
    assert store.list_by_user("anyone") == []


def test_write_grid_csv(tmp_path) -> None:
    out = compute_lighting(default_room(), default_requirements(), grid_size=4)
    path = write_grid_csv(tmp_path / "grid.csv", list(out.illuminance_grid))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "x,y,illuminance"
    data = np.loadtxt(path, delimiter=",", skiprows=1)
    assert data.shape == (16, 3)
    assert data[:, 2] == pytest.approx([p.illuminance for p in out.illuminance_grid])
