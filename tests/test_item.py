"""Tests for Item: values, metadata and the child-to-parent link."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlewalk import Item, Keys


class TestItemBasics:
    """Value, parent and metadata behaviour."""

    def test_root_item_has_no_parent(self):
        item = Item({"a": 1})
        assert item.value == {"a": 1}
        assert item.parent is None
        assert item.metadata == {}

    def test_none_is_a_valid_value(self):
        item = Item(None)
        assert item.value is None

    def test_put_get_remove(self):
        item = Item("x")
        assert item.put("kind", "leaf") is item
        assert item.get("kind") == "leaf"
        assert item.get("missing") is None
        assert item.get("missing", 42) == 42

        assert item.remove("kind") == "leaf"
        assert item.get("kind") is None
        assert item.remove("kind") is None

    def test_put_replaces_previous_value(self):
        item = Item("x").put("k", 1).put("k", 2)
        assert item.get("k") == 2
        assert item.all_metadata() == {"k": 2}

    def test_metadata_is_live(self):
        item = Item("x")
        item.metadata["direct"] = True
        assert item.get("direct") is True


class TestDeriveChild:
    """derive_child creates a fresh Item linked back to its parent."""

    def test_child_links_to_parent(self):
        parent = Item({"a": 1})
        child = parent.derive_child(1)
        assert child.parent is parent
        assert child.value == 1

    def test_child_does_not_inherit_metadata(self):
        parent = Item({"a": 1}).put(Keys.PATH, ".")
        child = parent.derive_child(1)
        assert child.metadata == {}
        assert child.path is None
        # Parent is untouched by changes on the child
        child.put(Keys.PATH, ".a")
        assert parent.path == "."

    def test_ancestors_walks_up_to_root(self):
        root = Item("root")
        middle = root.derive_child("middle")
        leaf = middle.derive_child("leaf")
        assert [a.value for a in leaf.ancestors()] == ["middle", "root"]
        assert list(root.ancestors()) == []

    def test_items_compare_by_identity(self):
        parent = Item([1, 1])
        first = parent.derive_child(1)
        second = parent.derive_child(1)
        assert first != second
        assert first == first
