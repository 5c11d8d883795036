"""Position-aware JSON parsing.

``parse_tree`` builds a light node tree that remembers where each value
sits in the source text, so a single value can be replaced without
re-serialising the rest of the document. ``loads_strict`` is the plain
value parser shared by resolution and commit.
"""

import json
import re
from json.decoder import scanstring
from typing import Any, List, Optional

from ..models.path import Index, Key, PathSegment


_WHITESPACE = " \t\n\r"
_NUMBER_RE = re.compile(r'-?(?:0|[1-9]\d*)(\.\d+)?([eE][-+]?\d+)?')
_LITERALS = {"true": True, "false": False, "null": None}


class JSONSyntaxError(ValueError):
    """Raised when text is not a single well-formed JSON value."""

    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(f"{message} at offset {offset}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """Parse JSON text, rejecting NaN and Infinity literals.

    Raises:
        ValueError: If the text is not valid JSON (JSONDecodeError included)
    """
    return json.loads(text, parse_constant=_reject_constant)


class JSONNode:
    """A value in the source text: its type, span and children."""

    __slots__ = ("type", "offset", "length", "value", "children", "parent")

    def __init__(self, type: str, offset: int, length: int = 0, value: Any = None,
                 parent: Optional["JSONNode"] = None):
        self.type = type
        self.offset = offset
        self.length = length
        self.value = value
        self.children: List["JSONNode"] = []
        self.parent = parent

    @property
    def end(self) -> int:
        return self.offset + self.length

    def __repr__(self) -> str:
        return f"JSONNode({self.type!r}, offset={self.offset}, length={self.length})"


class _Scanner:
    """Recursive-descent scanner over a JSON string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def parse(self) -> JSONNode:
        self._skip_whitespace()
        if self.pos >= len(self.text):
            raise JSONSyntaxError("Expected a JSON value", self.pos)
        root = self._value(None)
        self._skip_whitespace()
        if self.pos != len(self.text):
            raise JSONSyntaxError("Unexpected content after JSON value", self.pos)
        return root

    def _skip_whitespace(self) -> None:
        text = self.text
        while self.pos < len(text) and text[self.pos] in _WHITESPACE:
            self.pos += 1

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _value(self, parent: Optional[JSONNode]) -> JSONNode:
        ch = self._peek()
        if ch == "{":
            return self._object(parent)
        if ch == "[":
            return self._array(parent)
        if ch == '"':
            return self._string(parent)
        if ch == "-" or ch.isdigit():
            return self._number(parent)
        for literal, value in _LITERALS.items():
            if self.text.startswith(literal, self.pos):
                kind = "null" if value is None else "boolean"
                node = JSONNode(kind, self.pos, len(literal), value, parent)
                self.pos += len(literal)
                return node
        raise JSONSyntaxError("Expected a JSON value", self.pos)

    def _string(self, parent: Optional[JSONNode]) -> JSONNode:
        start = self.pos
        try:
            value, end = scanstring(self.text, start + 1, True)
        except json.JSONDecodeError as e:
            raise JSONSyntaxError(e.msg, e.pos)
        self.pos = end
        return JSONNode("string", start, end - start, value, parent)

    def _number(self, parent: Optional[JSONNode]) -> JSONNode:
        match = _NUMBER_RE.match(self.text, self.pos)
        if match is None:
            raise JSONSyntaxError("Invalid number", self.pos)
        literal = match.group(0)
        if match.group(1) or match.group(2):
            value: Any = float(literal)
        else:
            value = int(literal)
        node = JSONNode("number", self.pos, len(literal), value, parent)
        self.pos = match.end()
        return node

    def _object(self, parent: Optional[JSONNode]) -> JSONNode:
        node = JSONNode("object", self.pos, parent=parent)
        self.pos += 1
        self._skip_whitespace()
        if self._peek() == "}":
            self.pos += 1
            node.length = self.pos - node.offset
            return node

        while True:
            if self._peek() != '"':
                raise JSONSyntaxError("Expected property name", self.pos)
            prop = JSONNode("property", self.pos, parent=node)
            prop.children.append(self._string(prop))
            self._skip_whitespace()
            if self._peek() != ":":
                raise JSONSyntaxError("Expected ':'", self.pos)
            self.pos += 1
            self._skip_whitespace()
            prop.children.append(self._value(prop))
            prop.length = self.pos - prop.offset
            node.children.append(prop)

            self._skip_whitespace()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
                self._skip_whitespace()
                continue
            if ch == "}":
                self.pos += 1
                break
            raise JSONSyntaxError("Expected ',' or '}'", self.pos)

        node.length = self.pos - node.offset
        return node

    def _array(self, parent: Optional[JSONNode]) -> JSONNode:
        node = JSONNode("array", self.pos, parent=parent)
        self.pos += 1
        self._skip_whitespace()
        if self._peek() == "]":
            self.pos += 1
            node.length = self.pos - node.offset
            return node

        while True:
            node.children.append(self._value(node))
            self._skip_whitespace()
            ch = self._peek()
            if ch == ",":
                self.pos += 1
                self._skip_whitespace()
                continue
            if ch == "]":
                self.pos += 1
                break
            raise JSONSyntaxError("Expected ',' or ']'", self.pos)

        node.length = self.pos - node.offset
        return node


def parse_tree(text: str) -> JSONNode:
    """
    Parse JSON text into a position-aware node tree.

    Args:
        text: Full document text

    Returns:
        Root JSONNode spanning the value (surrounding whitespace excluded)

    Raises:
        JSONSyntaxError: If the text is not exactly one well-formed JSON value
    """
    return _Scanner(text).parse()


def property_value(prop: JSONNode) -> JSONNode:
    return prop.children[1]


def property_key(prop: JSONNode) -> str:
    return prop.children[0].value


def find_child(node: JSONNode, segment: PathSegment) -> Optional[JSONNode]:
    """Return the value node one step below ``node``, or None."""
    if isinstance(segment, Key):
        if node.type != "object":
            return None
        found = None
        # Last duplicate wins, matching json.loads
        for prop in node.children:
            if property_key(prop) == segment.name:
                found = property_value(prop)
        return found
    if isinstance(segment, Index):
        if node.type != "array" or segment.index >= len(node.children):
            return None
        return node.children[segment.index]
    raise TypeError(f"Unsupported path segment: {segment!r}")


def find_node(root: JSONNode, path: List[PathSegment]) -> Optional[JSONNode]:
    """Walk ``path`` from ``root`` and return the addressed value node, or None."""
    node: Optional[JSONNode] = root
    for segment in path:
        node = find_child(node, segment)
        if node is None:
            return None
    return node
