"""Tests for resolving a node's value from document text."""

import json

import pytest

from json_node_editor.models.core import Resolved, Unresolved, UnresolvedReason
from json_node_editor.services.path_resolver import resolve_path, resolve_value


class TestResolvePath:

    def test_empty_path_returns_root(self, sample_text):
        outcome = resolve_path(sample_text, [])
        assert outcome == Resolved(value=json.loads(sample_text))

    def test_nested_value(self, sample_text):
        assert resolve_path(sample_text, ["customer", 0, "name"]) == Resolved(value="Alice")

    def test_container_value(self, sample_text):
        assert resolve_path(sample_text, ["customer", 0, "tags"]) == Resolved(value=["a", "b"])

    def test_null_is_resolved_not_unresolved(self, sample_text):
        outcome = resolve_path(sample_text, ["note"])
        assert isinstance(outcome, Resolved)
        assert outcome.value is None

    def test_false_value_is_resolved(self):
        assert resolve_path('{"flag": false}', ["flag"]) == Resolved(value=False)

    @pytest.mark.parametrize("path", [
        ["missing"],
        ["customer", 3],
        ["customer", 0, "name", "first"],
        ["active", 0],
    ])
    def test_unreachable_path(self, sample_text, path):
        assert resolve_path(sample_text, path) == Unresolved(reason=UnresolvedReason.UNRESOLVED_PATH)

    def test_key_does_not_index_arrays(self):
        assert isinstance(resolve_path('["x", "y"]', ["0"]), Unresolved)

    def test_index_does_not_index_objects(self):
        assert isinstance(resolve_path('{"0": "x"}', [0]), Unresolved)

    @pytest.mark.parametrize("text", ["", "{", "{'a': 1}", '{"a": NaN}', "[1, 2,]", "Infinity"])
    def test_malformed_document(self, text):
        assert resolve_path(text, []) == Unresolved(reason=UnresolvedReason.MALFORMED_DOCUMENT)

    def test_duplicate_keys_resolve_to_last(self):
        assert resolve_path('{"a": 1, "a": 2}', ["a"]) == Resolved(value=2)


class TestResolveValue:

    def test_walks_parsed_value(self):
        document = {"rows": [{"id": 7}]}
        assert resolve_value(document, ["rows", 0, "id"]) == Resolved(value=7)

    def test_structural_indexing_matches(self):
        document = {"a": [{"b": [10, 20, 30]}]}
        assert resolve_value(document, ["a", 0, "b", 2]).value == document["a"][0]["b"][2]

    def test_missing_index(self):
        assert resolve_value([1, 2], [2]) == Unresolved(reason=UnresolvedReason.UNRESOLVED_PATH)
