"""Resolution, rendering and commit services for the JSON node editor."""

from .path_resolver import resolve_path, resolve_value
from .value_renderer import render_value, render_text, render_rows
from .path_formatter import format_path
from .json_scanner import JSONNode, JSONSyntaxError, parse_tree, find_node, loads_strict
from .patch_builder import compute_edits, apply_edits
from .patch_committer import PatchCommitter, create_committer
from .stores import DocumentStore, MirroredSourceStore, InMemoryDocumentStore, InMemorySourceStore
from .edit_session import EditSession

__all__ = [
    "resolve_path",
    "resolve_value",
    "render_value",
    "render_text",
    "render_rows",
    "format_path",
    "JSONNode",
    "JSONSyntaxError",
    "parse_tree",
    "find_node",
    "loads_strict",
    "compute_edits",
    "apply_edits",
    "PatchCommitter",
    "create_committer",
    "DocumentStore",
    "MirroredSourceStore",
    "InMemoryDocumentStore",
    "InMemorySourceStore",
    "EditSession",
]
