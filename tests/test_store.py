"""Tests for the collection-oriented document store."""

from datetime import datetime, timedelta

import pytest

from design_agent.designs.service import append_versions
from design_agent.errors import ConflictError


def _project(store, user_id, name, created_at):
    return store.insert("projects", {
        "name": name,
        "description": "",
        "user_id": user_id,
        "brand_elements": {"colorPalette": [], "fonts": []},
        "design_type": "print",
        "created_at": created_at,
    })


class TestInsertAndGet:
    def test_insert_assigns_id_and_timestamps(self, store):
        doc_id = store.insert("users", {"email": "a@x.com", "password_hash": "h", "role": "user"})
        doc = store.get("users", doc_id)
        assert doc["id"] == doc_id
        assert doc["email"] == "a@x.com"
        assert doc["created_at"] is not None
        assert doc["updated_at"] is not None

    def test_get_missing_returns_none(self, store):
        assert store.get("designs", "nope") is None

    def test_unknown_collection(self, store):
        with pytest.raises(KeyError):
            store.get("invoices", "x")


class TestQuery:
    def test_order_newest_first(self, store):
        base = datetime(2024, 1, 1)
        _project(store, "u1", "old", base)
        _project(store, "u1", "new", base + timedelta(days=2))
        _project(store, "u1", "mid", base + timedelta(days=1))

        names = [p["name"] for p in store.query("projects", {"user_id": "u1"}, order_by="created_at")]
        assert names == ["new", "mid", "old"]

    def test_ascending_order(self, store):
        base = datetime(2024, 1, 1)
        _project(store, "u1", "a", base)
        _project(store, "u1", "b", base + timedelta(hours=1))
        names = [p["name"] for p in store.query("projects", {"user_id": "u1"}, order_by="created_at", descending=False)]
        assert names == ["a", "b"]

    def test_two_filters_are_combined_with_and(self, store):
        for project_id, user_id in [("p1", "u1"), ("p1", "u2"), ("p2", "u1")]:
            store.insert("designs", {
                "project_id": project_id,
                "user_id": user_id,
                "content": {},
                "generated_images": [],
                "current_version": 0,
                "is_active": True,
            })
        found = store.query("designs", {"project_id": "p1", "user_id": "u1"})
        assert len(found) == 1
        assert (found[0]["project_id"], found[0]["user_id"]) == ("p1", "u1")


class TestUpdate:
    def test_partial_update_merges(self, store):
        doc_id = _project(store, "u1", "Sale Banner", datetime(2024, 1, 1))
        before = store.get("projects", doc_id)
        assert store.update("projects", doc_id, {"description": "spring"})
        after = store.get("projects", doc_id)
        assert after["description"] == "spring"
        assert after["name"] == "Sale Banner"
        assert after["updated_at"] >= before["updated_at"]

    def test_expected_values_guard_the_write(self, store):
        doc_id = store.insert("designs", {
            "project_id": "p1", "user_id": "u1", "content": {},
            "generated_images": [], "current_version": 0, "is_active": True,
        })
        assert not store.update("designs", doc_id, {"current_version": 5}, expected={"current_version": 3})
        assert store.get("designs", doc_id)["current_version"] == 0
        assert store.update("designs", doc_id, {"current_version": 5}, expected={"current_version": 0})
        assert store.get("designs", doc_id)["current_version"] == 5

    def test_update_missing_document(self, store):
        assert not store.update("designs", "missing", {"is_active": False})


class TestAppendVersions:
    def _design(self, store):
        design_id = store.insert("designs", {
            "project_id": "p1", "user_id": "u1", "content": {},
            "generated_images": [], "current_version": 0, "is_active": True,
        })
        return store.get("designs", design_id)

    def test_append_keeps_version_and_images_in_step(self, store):
        design = self._design(store)
        design = append_versions(store, design, ["a", "b"])
        design = append_versions(store, design, ["c"])
        assert design["generated_images"] == ["a", "b", "c"]
        assert design["current_version"] == 3

    def test_concurrent_append_is_not_lost(self, store):
        stale = self._design(store)
        append_versions(store, store.get("designs", stale["id"]), ["first"])

        result = append_versions(store, stale, ["second", "third"])
        assert result["generated_images"] == ["first", "second", "third"]
        assert result["current_version"] == 3

    def test_gives_up_after_repeated_conflicts(self):
        class AlwaysStale:
            def update(self, *args, **kwargs):
                return False

            def get(self, collection, doc_id):
                return {"id": doc_id, "generated_images": [], "current_version": 0}

        with pytest.raises(ConflictError):
            append_versions(AlwaysStale(), {"id": "d1", "generated_images": [], "current_version": 0}, ["x"])
