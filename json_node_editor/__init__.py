"""Resolve, view and format-preservingly edit a single node of a JSON document."""

from .models import (
    Key,
    Index,
    to_path,
    RowSummary,
    Resolved,
    Unresolved,
    UnresolvedReason,
    CommitResult,
    SessionState,
    PatchFailure,
)
from .services import (
    resolve_path,
    resolve_value,
    render_value,
    render_text,
    format_path,
    PatchCommitter,
    create_committer,
    InMemoryDocumentStore,
    InMemorySourceStore,
    EditSession,
)
from .config import EditorConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "Key",
    "Index",
    "to_path",
    "RowSummary",
    "Resolved",
    "Unresolved",
    "UnresolvedReason",
    "CommitResult",
    "SessionState",
    "PatchFailure",
    "resolve_path",
    "resolve_value",
    "render_value",
    "render_text",
    "format_path",
    "PatchCommitter",
    "create_committer",
    "InMemoryDocumentStore",
    "InMemorySourceStore",
    "EditSession",
    "EditorConfig",
    "load_config",
]
