"""Tests for property tree clone, merge and lookup."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from themeforge.errors import UnsupportedNodeError
from themeforge.themes.tree import NodeKind, deep_clone, deep_merge, leaf_paths, lookup, node_kind


class TestNodeKind:
    def test_classifies_known_kinds(self):
        assert node_kind("a") is NodeKind.SCALAR
        assert node_kind(3.5) is NodeKind.SCALAR
        assert node_kind(True) is NodeKind.SCALAR
        assert node_kind(None) is NodeKind.SCALAR
        assert node_kind(date(2024, 1, 2)) is NodeKind.DATE
        assert node_kind(datetime(2024, 1, 2, tzinfo=timezone.utc)) is NodeKind.DATE
        assert node_kind([1, 2]) is NodeKind.LIST
        assert node_kind((1, 2)) is NodeKind.LIST
        assert node_kind({"a": 1}) is NodeKind.RECORD

    def test_functions_are_unsupported(self):
        assert node_kind(lambda: None) is NodeKind.UNSUPPORTED
        assert node_kind({1, 2}) is NodeKind.UNSUPPORTED


class TestDeepClone:
    def test_clone_shares_no_mutable_structure(self):
        source = {"a": {"b": [1, {"c": 2}]}, "when": date(2024, 5, 1)}
        cloned = deep_clone(source)

        assert cloned == source
        assert cloned is not source
        assert cloned["a"] is not source["a"]
        assert cloned["a"]["b"] is not source["a"]["b"]
        assert cloned["a"]["b"][1] is not source["a"]["b"][1]

        cloned["a"]["b"][1]["c"] = 99
        assert source["a"]["b"][1]["c"] == 2

    def test_tuples_stay_tuples(self):
        assert deep_clone(("x", "y")) == ("x", "y")
        assert isinstance(deep_clone(("x",)), tuple)

    def test_unsupported_value_raises(self):
        with pytest.raises(UnsupportedNodeError):
            deep_clone({"fn": print})


class TestDeepMerge:
    def test_records_merge_and_source_wins_at_leaves(self):
        target = {"primary": {"main": "#111", "light": "#222"}, "keep": 1}
        source = {"primary": {"main": "#999"}}

        merged = deep_merge(target, source)

        assert merged == {"primary": {"main": "#999", "light": "#222"}, "keep": 1}
        assert target["primary"]["main"] == "#111"

    def test_lists_replace_wholesale(self):
        merged = deep_merge({"items": [1, 2, 3]}, {"items": [9]})
        assert merged["items"] == [9]

    def test_non_record_source_replaces_target(self):
        assert deep_merge({"a": 1}, [1, 2]) == [1, 2]
        assert deep_merge({"a": 1}, "flat") == "flat"
        assert deep_merge({"a": 1}, None) is None

    def test_record_over_non_record_starts_empty(self):
        assert deep_merge("scalar", {"a": {"b": 1}}) == {"a": {"b": 1}}
        assert deep_merge({"a": 5}, {"a": {"b": 1}}) == {"a": {"b": 1}}

    def test_none_source_leaf_overwrites(self):
        assert deep_merge({"a": 1}, {"a": None}) == {"a": None}

    def test_unsupported_leaf_replaces_and_is_reported(self):
        seen: list[tuple[str, object]] = []

        def marker():
            return None

        merged = deep_merge(
            {"a": {"fn": 1}},
            {"a": {"fn": marker}},
            on_unsupported=lambda path, value: seen.append((path, value)),
        )

        assert merged["a"]["fn"] is marker
        assert seen == [("a.fn", marker)]


class TestLookup:
    def test_walks_nested_path(self):
        assert lookup({"a": {"b": {"c": "x"}}}, "a.b.c") == (True, "x")

    def test_missing_segment_or_scalar_intermediate(self):
        tree = {"a": {"b": "leaf"}}
        assert lookup(tree, "a.x") == (False, None)
        assert lookup(tree, "a.b.c") == (False, None)
        assert lookup(tree, "") == (False, None)

    def test_present_falsy_value_is_found(self):
        assert lookup({"xs": 0}, "xs") == (True, 0)


def test_leaf_paths_lists_every_non_record_value():
    tree = {"a": {"b": 1, "c": {"d": [1, 2]}}, "e": "x"}
    assert sorted(leaf_paths(tree, "root")) == ["root.a.b", "root.a.c.d", "root.e"]
    assert leaf_paths(None) == []
