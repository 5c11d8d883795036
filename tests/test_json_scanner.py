"""Tests for the position-aware JSON scanner."""

import pytest

from json_node_editor.models.path import Index, Key
from json_node_editor.services.json_scanner import (
    JSONSyntaxError, find_node, loads_strict, parse_tree,
)


TEXT = '{"a": 1, "b": [true, null]}'


class TestParseTree:

    def test_root_spans_whole_value(self):
        root = parse_tree(TEXT)
        assert root.type == "object"
        assert (root.offset, root.length) == (0, len(TEXT))

    def test_value_offsets(self):
        root = parse_tree(TEXT)
        a = find_node(root, [Key(name="a")])
        assert (a.type, a.offset, a.length, a.value) == ("number", 6, 1, 1)

        b = find_node(root, [Key(name="b")])
        assert (b.type, b.offset, b.length) == ("array", 14, 12)

        null = find_node(root, [Key(name="b"), Index(index=1)])
        assert (null.type, null.offset, null.length) == ("null", 21, 4)
        assert TEXT[null.offset:null.end] == "null"

    def test_surrounding_whitespace_excluded(self):
        root = parse_tree("  [1]\n")
        assert (root.offset, root.length) == (2, 3)

    def test_string_escapes_decoded(self):
        root = parse_tree('"caf\\u00e9 \\"x\\""')
        assert root.value == 'café "x"'

    @pytest.mark.parametrize("literal,value", [
        ("10", 10),
        ("-1.5e3", -1500.0),
        ("0.25", 0.25),
        ("true", True),
        ("false", False),
        ("null", None),
    ])
    def test_scalars(self, literal, value):
        assert parse_tree(literal).value == value

    def test_property_children(self):
        root = parse_tree('{"k" : "v"}')
        prop = root.children[0]
        assert prop.type == "property"
        assert [child.type for child in prop.children] == ["string", "string"]
        assert prop.children[0].value == "k"

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "{",
        '{"a":}',
        "[1,]",
        '{"a": 1,}',
        "01",
        "NaN",
        "[1] x",
        "'a'",
        '{"a" 1}',
        "tru",
        "-",
        "1.",
        '"unterminated',
        "[1 2]",
    ])
    def test_malformed_text_rejected(self, text):
        with pytest.raises(JSONSyntaxError):
            parse_tree(text)

    def test_error_reports_offset(self):
        with pytest.raises(JSONSyntaxError) as exc_info:
            parse_tree('{"a": 1 "b": 2}')
        assert exc_info.value.offset == 8


class TestFindNode:

    def test_empty_path_is_root(self):
        root = parse_tree(TEXT)
        assert find_node(root, []) is root

    def test_last_duplicate_wins(self):
        root = parse_tree('{"a": 1, "a": 2}')
        assert find_node(root, [Key(name="a")]).value == 2

    def test_kind_mismatch(self):
        root = parse_tree('{"0": [1]}')
        assert find_node(root, [Index(index=0)]) is None
        assert find_node(root, [Key(name="0"), Key(name="0")]) is None

    def test_out_of_range(self):
        assert find_node(parse_tree("[1]"), [Index(index=1)]) is None


class TestLoadsStrict:

    def test_parses_standard_json(self):
        assert loads_strict(' {"a": [1, 2.5]} ') == {"a": [1, 2.5]}

    @pytest.mark.parametrize("text", ["NaN", "[Infinity]", '{"x": -Infinity}'])
    def test_rejects_non_standard_constants(self, text):
        with pytest.raises(ValueError):
            loads_strict(text)
