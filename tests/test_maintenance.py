# tests/test_maintenance.py
"""Tests for store maintenance commands"""
import json

import pytest

from roadside_dispatch.maintenance import PLACEHOLDER, clean_requests, import_document


class TestCleanRequests:
    def test_removes_duplicates_and_renumbers(self, store):
        store.create_request("Jane, Toyota, Rabat")
        store.create_request("Jane, Toyota, Rabat")
        store.create_request("Omar, Dacia, Fes", "/uploads/photo-1.jpg")
        store.create_request("Omar, Dacia, Fes", "/uploads/photo-2.jpg")

        summary = clean_requests(store)
        assert summary["kept"] == 3
        assert summary["removed"] == 1

        requests = sorted(store.list_requests(), key=lambda r: r["id"])
        assert [r["id"] for r in requests] == [1, 2, 3]
        assert requests[0]["imageUrl"] == PLACEHOLDER
        assert requests[2]["imageUrl"] == "/uploads/photo-2.jpg"

    def test_assignments_follow_their_request(self, store):
        store.create_request("dup")
        store.create_request("dup")
        store.create_request("unique")
        store.upsert_assignment(2, 1, 1, "assigned")
        store.upsert_assignment(3, 2, 2, "assigned")

        summary = clean_requests(store, placeholder="/uploads/none.png")
        assert summary["assignmentsRemoved"] == 1

        assignments = store.list_assignments()
        assert len(assignments) == 1
        assert assignments[0]["requestId"] == 2
        assert assignments[0]["userInfo"] == "unique"


def test_import_legacy_document(store, tmp_path):
    legacy = {
        "requests": [{"id": 5, "userInfo": "Jane", "imageUrl": None, "status": "Submitted", "createdAt": "2024-03-01T10:00:00.000Z"}],
        "operators": [{"id": 1, "name": "Old Towing", "phone": "0600", "email": "t@x.com", "role": "towing"}],
    }
    path = tmp_path / "database.json"
    path.write_text(json.dumps(legacy), encoding="utf-8")

    counts = import_document(store, str(path))
    assert counts["requests"] == 1
    assert counts["contacts"] == 1
    assert [c["name"] for c in store.list_contacts()] == ["Old Towing"]
    assert store.create_request("next")["id"] == 6


def test_import_rejects_non_object_file(store, tmp_path):
    path = tmp_path / "database.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="not a JSON object"):
        import_document(store, str(path))
    assert len(store.list_contacts()) == 3


def test_import_rejects_non_object_entries(store, tmp_path):
    path = tmp_path / "database.json"
    path.write_text('{"contacts": ["Ahmed"]}', encoding="utf-8")

    with pytest.raises(ValueError, match="non-object entry"):
        import_document(store, str(path))
    assert len(store.list_contacts()) == 3
