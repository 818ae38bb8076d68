"""
Snapshot persistence tests: save/load round trip, wire format, seed data.
"""

import pytest

from constructtrack import models
from constructtrack.seed import DEFAULT_PROJECTS, default_projects
from constructtrack.snapshots import (
    check_quantities,
    load_latest,
    parse_projects,
    save_snapshot,
    serialize_projects,
)


def test_serialized_layout_uses_camel_case_and_wire_values(projects):
    data = serialize_projects(projects)
    item = data[0]["areas"][0]["workItems"][0]
    assert item["unitType"] == "sqft"
    assert item["status"] == "In Progress"
    assert item["subWorks"][0] == {"id": "sw-1", "name": "Grinding", "isCompleted": True}
    assert item["quantity"] == 5000
    assert "imageUrl" in data[0]["areas"][0]
    assert [p["id"] for p in data] == ["proj-1", "proj-2"]


def test_parse_rejects_non_list():
    with pytest.raises(ValueError):
        parse_projects({"id": "proj-1"})


def test_parse_rejects_bad_entries():
    with pytest.raises(ValueError, match="project schema"):
        parse_projects([{"name": "no id"}])


def test_save_and_load_latest(db, projects):
    assert load_latest(db) is None
    save_snapshot(db, projects[:1])
    snapshot = save_snapshot(db, projects)
    assert snapshot.project_count == 2
    assert db.query(models.ProjectSnapshot).count() == 2

    loaded = load_latest(db)
    assert [p.model_dump() for p in loaded] == [p.model_dump() for p in projects]


def test_load_does_not_recompute_quantity(db, projects):
    """Stored quantities are trusted; mismatches are only reported."""
    bad = projects[1].areas[0].work_items[0].model_copy(update={"quantity": 99})
    area = projects[1].areas[0].model_copy(update={"work_items": [bad]})
    broken = [projects[0], projects[1].model_copy(update={"areas": [area]})]
    save_snapshot(db, broken)
    loaded = load_latest(db)
    assert loaded[1].areas[0].work_items[0].quantity == 99
    assert len(check_quantities(loaded)) == 1


def test_save_endpoint_then_load_endpoint(client, store, projects):
    store.replace(projects)
    resp = client.post("/api/save")
    assert resp.status_code == 200
    assert resp.json()["projectCount"] == 2

    store.replace([])
    resp = client.post("/api/load")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == ["proj-1", "proj-2"]
    assert [p.model_dump() for p in store.projects] == [p.model_dump() for p in projects]


def test_load_endpoint_with_nothing_saved(client):
    assert client.post("/api/load").status_code == 404


def test_load_endpoint_with_corrupt_snapshot(client, db, store):
    db.add(models.ProjectSnapshot(projects_json={"not": "a list"}, project_count=0))
    db.commit()
    resp = client.post("/api/load")
    assert resp.status_code == 500
    assert store.projects == []


def test_seed_projects_are_consistent():
    seeded = default_projects()
    assert [p.name for p in seeded] == ["Downtown Highrise"]
    assert check_quantities(seeded) == []
    assert len(DEFAULT_PROJECTS[0]["areas"]) == 2
