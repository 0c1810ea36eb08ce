"""Unit tests for node persistence in DuckDB."""

from datetime import timezone

import pytest

from graph_canvas.models.graph import NodeDraft, NodePatch
from graph_canvas.storage.node_store import NodeStore
from graph_canvas.utils.exceptions import NotFoundError, ValidationError
from graph_canvas.utils.ids import new_id


class TestNodeStore:
    """Test suite for node storage and retrieval."""

    @pytest.fixture
    def store(self):
        return NodeStore()

    @pytest.fixture
    def conn(self, db):
        """Autocommit cursor; transaction boundaries are tested elsewhere."""
        cur = db.cursor()
        yield cur
        cur.close()

    def test_create_applies_defaults(self, store, conn):
        node = store.create(conn, NodeDraft(label="  React  "))

        assert len(node.id) == 32
        assert node.label == "React"
        assert node.type == "default"
        assert node.properties == {}
        assert (node.x, node.y) == (0.0, 0.0)
        assert node.fx is None and node.fy is None
        assert node.created_at.tzinfo == timezone.utc
        assert node.created_at == node.updated_at

    def test_create_persists_properties(self, store, conn):
        properties = {"description": "Typed superset", "tags": ["lang"], "stars": 10}
        created = store.create(
            conn, NodeDraft(label="TypeScript", type="language", properties=properties, x=1.5, y=-2)
        )

        fetched = store.get(conn, created.id)
        assert fetched.properties == properties
        assert fetched.type == "language"
        assert (fetched.x, fetched.y) == (1.5, -2.0)

    def test_create_without_label_writes_nothing(self, store, conn):
        with pytest.raises(ValidationError):
            store.create(conn, NodeDraft(label="   "))
        assert store.count(conn) == 0

    def test_get_missing_raises(self, store, conn):
        assert store.find(conn, new_id()) is None
        with pytest.raises(NotFoundError):
            store.get(conn, new_id())

    def test_list_all_keeps_insertion_order(self, store, conn):
        labels = ["c", "a", "b"]
        for label in labels:
            store.create(conn, NodeDraft(label=label))
        assert [n.label for n in store.list_all(conn)] == labels

    def test_existing_ids(self, store, conn):
        a = store.create(conn, NodeDraft(label="A"))
        missing = new_id()
        assert store.existing_ids(conn, [a.id, missing, a.id]) == {a.id}
        assert store.existing_ids(conn, []) == set()

    def test_update_changes_only_given_fields(self, store, conn):
        node = store.create(conn, NodeDraft(label="Node.js", type="runtime", x=5, y=6))

        updated = store.update(conn, node.id, NodePatch(x=10.0, fx=10.0))

        assert updated.label == "Node.js"
        assert updated.type == "runtime"
        assert updated.x == 10.0
        assert updated.y == 6.0
        assert updated.fx == 10.0
        assert updated.updated_at >= node.updated_at
        assert updated.created_at == node.created_at

    def test_update_can_unpin(self, store, conn):
        node = store.create(conn, NodeDraft(label="Pinned", fx=1.0, fy=2.0))
        updated = store.update(conn, node.id, NodePatch.model_validate({"fx": None, "fy": None}))
        assert updated.fx is None and updated.fy is None

    def test_update_replaces_properties(self, store, conn):
        node = store.create(conn, NodeDraft(label="A", properties={"a": 1}))
        updated = store.update(conn, node.id, NodePatch(properties={"b": 2}))
        assert updated.properties == {"b": 2}

    def test_update_rejects_empty_label(self, store, conn):
        node = store.create(conn, NodeDraft(label="A"))
        with pytest.raises(ValidationError):
            store.update(conn, node.id, NodePatch(label=""))
        assert store.get(conn, node.id).label == "A"

    def test_update_missing_raises(self, store, conn):
        with pytest.raises(NotFoundError):
            store.update(conn, new_id(), NodePatch(label="B"))

    def test_empty_update_returns_current(self, store, conn):
        node = store.create(conn, NodeDraft(label="A"))
        assert store.update(conn, node.id, NodePatch()).updated_at == node.updated_at
        with pytest.raises(NotFoundError):
            store.update(conn, new_id(), NodePatch())

    def test_delete(self, store, conn):
        node = store.create(conn, NodeDraft(label="A"))
        store.delete(conn, node.id)
        assert store.find(conn, node.id) is None
        with pytest.raises(NotFoundError):
            store.delete(conn, node.id)

    def test_delete_all(self, store, conn):
        store.create(conn, NodeDraft(label="A"))
        store.create(conn, NodeDraft(label="B"))
        assert store.delete_all(conn) == 2
        assert store.count(conn) == 0


class TestNodeSearch:
    @pytest.fixture
    def store(self):
        return NodeStore()

    @pytest.fixture
    def conn(self, db):
        cur = db.cursor()
        store = NodeStore()
        store.create(cur, NodeDraft(label="React", type="frontend-framework"))
        store.create(cur, NodeDraft(label="TypeScript", type="programming-language"))
        store.create(cur, NodeDraft(label="Express", type="backend-framework"))
        store.create(cur, NodeDraft(label="100%_done", type="note"))
        yield cur
        cur.close()

    def test_label_match_is_case_insensitive(self, store, conn):
        assert [n.label for n in store.search(conn, "REACT")] == ["React"]

    def test_type_match(self, store, conn):
        assert [n.label for n in store.search(conn, "framework")] == ["React", "Express"]

    def test_substring_match(self, store, conn):
        assert [n.label for n in store.search(conn, "script")] == ["TypeScript"]

    def test_pattern_characters_are_literal(self, store, conn):
        assert [n.label for n in store.search(conn, "%_")] == ["100%_done"]
        assert store.search(conn, "_x") == []

    def test_limit(self, store, conn):
        assert len(store.search(conn, "e", limit=2)) == 2

    def test_non_ascii_label_matches_itself(self, store, conn):
        store.create(conn, NodeDraft(label="İstanbul", type="city"))

        assert [n.label for n in store.search(conn, "İstanbul")] == ["İstanbul"]
        assert [n.label for n in store.search(conn, "istanbul")] == ["İstanbul"]
        assert "İstanbul" in [n.label for n in store.search(conn, "İ")]

    def test_create_rejects_non_finite_properties(self, store, conn):
        with pytest.raises(ValidationError):
            store.create(conn, NodeDraft(label="NaN", properties={"v": float("nan")}))
        assert store.search(conn, "nan") == []
