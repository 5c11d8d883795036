"""Data models for the JSON node editor."""

from .path import (
    Key,
    Index,
    PathSegment,
    JsonPath,
    to_segment,
    to_path,
)

from .core import (
    RowSummary,
    UnresolvedReason,
    Resolved,
    Unresolved,
    Resolution,
    RenderedValue,
    TextEdit,
    CommitResult,
)

from .session import (
    SessionState,
)

from .errors import (
    ErrorResponse,
    ValidationError,
    PatchError,
    SessionError,
    NodeEditorException,
    ValidationException,
    PatchFailure,
    SessionException,
)

__all__ = [
    # Path models
    "Key",
    "Index",
    "PathSegment",
    "JsonPath",
    "to_segment",
    "to_path",

    # Core models
    "RowSummary",
    "UnresolvedReason",
    "Resolved",
    "Unresolved",
    "Resolution",
    "RenderedValue",
    "TextEdit",
    "CommitResult",

    # Session models
    "SessionState",

    # Error models
    "ErrorResponse",
    "ValidationError",
    "PatchError",
    "SessionError",

    # Exception classes
    "NodeEditorException",
    "ValidationException",
    "PatchFailure",
    "SessionException",
]
