"""Format-preserving edits that set a value at a path inside JSON text."""

import json
import logging
from typing import Any, List, Optional

from ..config.models import FormattingConfig
from ..models.core import TextEdit
from ..models.errors import PatchFailure
from ..models.path import Index, JsonPath, Key, PathSegment
from .json_scanner import JSONNode, JSONSyntaxError, find_node, parse_tree
from .path_formatter import format_path

logger = logging.getLogger(__name__)


def detect_eol(text: str) -> str:
    """Line ending used by the document, LF when it has none."""
    return "\r\n" if "\r\n" in text else "\n"


def line_indent(text: str, offset: int) -> str:
    """Leading whitespace of the line containing ``offset``."""
    line_start = max(text.rfind("\n", 0, offset), text.rfind("\r", 0, offset)) + 1
    end = line_start
    while end < len(text) and text[end] in " \t":
        end += 1
    return text[line_start:end]


class _Layout:
    """Serialises inserted values with the configured indent and line ending."""

    def __init__(self, text: str, formatting: FormattingConfig):
        self.text = text
        self.unit = formatting.indent_unit
        self.eol = formatting.eol or detect_eol(text)

    def dumps(self, value: Any, base_indent: str) -> str:
        try:
            serialized = json.dumps(value, indent=self.unit, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise PatchFailure(
                error_code="UNSERIALIZABLE_VALUE",
                message=f"Value cannot be written as JSON: {str(e)}",
                details={"processing_stage": "serialize", "error": str(e)}
            )
        return serialized.replace("\n", self.eol + base_indent)

    def is_multiline(self, node: JSONNode) -> bool:
        return "\n" in self.text[node.offset:node.end]


def _wrap(segment: PathSegment, value: Any) -> Any:
    if isinstance(segment, Key):
        return {segment.name: value}
    return [value]


def _member_text(layout: _Layout, container: JSONNode, segment: PathSegment,
                 value: Any, indent: str) -> str:
    serialized = layout.dumps(value, indent)
    if container.type == "object":
        return f"{json.dumps(segment.name, ensure_ascii=False)}: {serialized}"
    return serialized


def _insert_into(layout: _Layout, container: JSONNode, segment: PathSegment,
                 value: Any) -> TextEdit:
    """Edit adding a new member at the end of ``container``."""
    text = layout.text
    if not container.children:
        base = line_indent(text, container.offset)
        indent = base + layout.unit
        member = _member_text(layout, container, segment, value, indent)
        return TextEdit(
            offset=container.offset + 1,
            length=container.length - 2,
            content=f"{layout.eol}{indent}{member}{layout.eol}{base}"
        )

    previous = container.children[-1]
    if layout.is_multiline(container):
        indent = line_indent(text, previous.offset)
        member = _member_text(layout, container, segment, value, indent)
        content = f",{layout.eol}{indent}{member}"
    else:
        indent = line_indent(text, container.offset)
        member = _member_text(layout, container, segment, value, indent)
        content = f", {member}"
    return TextEdit(offset=previous.end, length=0, content=content)


def _incompatible(path: JsonPath, segment: Optional[PathSegment], parent: JSONNode) -> PatchFailure:
    kind = "property" if isinstance(segment, Key) else "item"
    return PatchFailure(
        error_code="INCOMPATIBLE_PATH",
        message=f"Cannot set {kind} of {parent.type} at {format_path(path)}",
        details={
            "path_label": format_path(path),
            "container_type": parent.type,
            "processing_stage": "locate"
        }
    )


def compute_edits(text: str, path: JsonPath, value: Any,
                  formatting: Optional[FormattingConfig] = None) -> List[TextEdit]:
    """
    Compute the edits that set ``value`` at ``path`` inside ``text``.

    Only the bytes of the targeted value (or the insertion point of a new
    member) are touched; everything else keeps its original formatting.

    Args:
        text: Original document text
        path: Typed path to the value being written
        value: New JSON value
        formatting: Indentation and line-ending options for new structure

    Returns:
        List of TextEdit objects; empty when the value is already present verbatim

    Raises:
        PatchFailure: If the text is malformed or the path cannot be written
    """
    layout = _Layout(text, formatting or FormattingConfig())

    try:
        root = parse_tree(text)
    except JSONSyntaxError as e:
        raise PatchFailure(
            error_code="MALFORMED_DOCUMENT",
            message=f"Document is not valid JSON: {str(e)}",
            details={
                "offset": e.offset,
                "path_label": format_path(path),
                "processing_stage": "parse"
            }
        )

    # Walk up until an existing ancestor is found, wrapping the value for
    # every missing level on the way
    remaining = list(path)
    segment: Optional[PathSegment] = None
    parent: Optional[JSONNode] = None
    while remaining:
        segment = remaining.pop()
        parent = find_node(root, remaining)
        if parent is not None:
            break
        value = _wrap(segment, value)

    if parent is None:
        edit = TextEdit(offset=root.offset, length=root.length,
                        content=layout.dumps(value, line_indent(text, root.offset)))
    elif parent.type == "object" and isinstance(segment, Key):
        existing = find_node(parent, [segment])
        if existing is not None:
            edit = TextEdit(offset=existing.offset, length=existing.length,
                            content=layout.dumps(value, line_indent(text, existing.offset)))
        else:
            edit = _insert_into(layout, parent, segment, value)
    elif parent.type == "array" and isinstance(segment, Index):
        if segment.index < len(parent.children):
            existing = parent.children[segment.index]
            edit = TextEdit(offset=existing.offset, length=existing.length,
                            content=layout.dumps(value, line_indent(text, existing.offset)))
        else:
            edit = _insert_into(layout, parent, segment, value)
    else:
        raise _incompatible(path, segment, parent)

    if text[edit.offset:edit.end] == edit.content:
        logger.debug(f"Value at {format_path(path)} unchanged; no edits")
        return []
    return [edit]


def apply_edits(text: str, edits: List[TextEdit]) -> str:
    """
    Apply non-overlapping edits to ``text``.

    Raises:
        PatchFailure: If edits overlap or fall outside the text
    """
    ordered = sorted(edits, key=lambda edit: edit.offset)
    last_end = 0
    for edit in ordered:
        if edit.offset < last_end:
            raise PatchFailure(
                error_code="OVERLAPPING_EDITS",
                message=f"Edit at offset {edit.offset} overlaps a previous edit",
                details={"offset": edit.offset, "processing_stage": "apply"}
            )
        if edit.end > len(text):
            raise PatchFailure(
                error_code="EDIT_OUT_OF_RANGE",
                message=f"Edit ending at {edit.end} exceeds document length {len(text)}",
                details={"offset": edit.offset, "processing_stage": "apply"}
            )
        last_end = edit.end

    result = text
    for edit in reversed(ordered):
        result = result[:edit.offset] + edit.content + result[edit.end:]
    return result
