"""Tests for rendering resolved values and the row-summary fallback."""

import json

import pytest

from json_node_editor.models.core import Resolved, RowSummary, Unresolved, UnresolvedReason
from json_node_editor.services.value_renderer import render_rows, render_text, render_value


UNRESOLVED = Unresolved(reason=UnresolvedReason.UNRESOLVED_PATH)


class TestRenderResolved:

    def test_string_is_json_quoted(self):
        assert render_text(Resolved(value="5")) == '"5"'

    def test_number_is_bare(self):
        assert render_text(Resolved(value=5)) == "5"

    def test_null(self):
        assert render_text(Resolved(value=None)) == "null"

    def test_object_uses_two_space_indent(self):
        assert render_text(Resolved(value={"a": 1, "b": [True]})) == (
            '{\n  "a": 1,\n  "b": [\n    true\n  ]\n}'
        )

    def test_empty_containers(self):
        assert render_text(Resolved(value={})) == "{}"
        assert render_text(Resolved(value=[])) == "[]"

    def test_non_ascii_not_escaped(self):
        assert render_text(Resolved(value="héllo")) == '"héllo"'

    def test_string_with_newline_stays_single_line(self):
        assert render_text(Resolved(value="a\nb")) == '"a\\nb"'

    def test_key_order_preserved(self):
        text = render_text(Resolved(value={"z": 1, "a": 2}))
        assert text.index('"z"') < text.index('"a"')

    @pytest.mark.parametrize("value", [
        {"a": {"b": [1, 2.5, None]}},
        [[], {}, "x"],
        False,
        -3,
    ])
    def test_rendering_is_idempotent(self, value):
        first = render_text(Resolved(value=value))
        assert render_text(Resolved(value=json.loads(first))) == first

    def test_not_from_fallback(self):
        assert render_value(Resolved(value=1)).from_fallback is False

    def test_unserialisable_value_falls_back(self):
        rendered = render_value(Resolved(value=float("inf")), [{"key": "a", "value": 1}])
        assert rendered.from_fallback is True
        assert json.loads(rendered.text) == {"a": 1}


class TestRowFallback:

    def test_no_rows(self):
        rendered = render_value(UNRESOLVED, [])
        assert rendered.text == "{}"
        assert rendered.from_fallback is True

    def test_none_rows(self):
        assert render_text(UNRESOLVED, None) == "{}"

    @pytest.mark.parametrize("value,expected", [
        (42, "42"),
        (1.0, "1"),
        (-3.0, "-3"),
        (2.5, "2.5"),
        (1e21, "1e+21"),
        ("hello", "hello"),
        (None, "null"),
        (True, "true"),
        (False, "false"),
    ])
    def test_single_keyless_row_renders_raw_value(self, value, expected):
        assert render_text(UNRESOLVED, [RowSummary(value=value)]) == expected

    def test_container_rows_excluded(self):
        rows = [
            RowSummary(key="a", value=1, type="primitive"),
            RowSummary(key="b", value=None, type="object"),
        ]
        text = render_text(UNRESOLVED, rows)
        assert json.loads(text) == {"a": 1}
        assert text == '{\n  "a": 1\n}'

    def test_array_rows_and_keyless_rows_excluded(self):
        rows = [
            {"key": "list", "type": "array"},
            {"value": 3, "type": "number"},
            {"key": "name", "value": "x", "type": "string"},
        ]
        assert json.loads(render_text(UNRESOLVED, rows)) == {"name": "x"}

    def test_malformed_document_uses_fallback(self):
        outcome = Unresolved(reason=UnresolvedReason.MALFORMED_DOCUMENT)
        assert json.loads(render_text(outcome, [{"key": "k", "value": "v"}])) == {"k": "v"}

    def test_render_rows_directly(self):
        assert render_rows([{"key": "n", "value": 1.5}]) == '{\n  "n": 1.5\n}'
