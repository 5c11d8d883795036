"""Core data models for the JSON node editor."""

from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ErrorResponse


CONTAINER_ROW_TYPES = ("object", "array")


class RowSummary(BaseModel):
    """One flattened child row of a node, as summarised by the graph view."""

    key: Optional[str] = Field(default=None, description="Child key; absent for array items or a scalar root")
    value: Any = Field(default=None, description="Primitive value of the row; containers carry none")
    type: str = Field(default="primitive", description="Row type tag, 'object'/'array' for containers")

    @property
    def is_container(self) -> bool:
        """True when the row stands for a nested object or array."""
        return self.type in CONTAINER_ROW_TYPES


class UnresolvedReason(str, Enum):
    """Why a path could not be resolved against a document."""

    MALFORMED_DOCUMENT = "malformed_document"
    UNRESOLVED_PATH = "unresolved_path"


class Resolved(BaseModel):
    """Value found by walking a path; ``value`` may legitimately be None (JSON null)."""

    model_config = ConfigDict(frozen=True)

    value: Any = Field(default=None, description="JSON value at the path")


class Unresolved(BaseModel):
    """The path does not address a reachable value in the document."""

    model_config = ConfigDict(frozen=True)

    reason: UnresolvedReason = Field(..., description="Why resolution failed")


Resolution = Union[Resolved, Unresolved]


class RenderedValue(BaseModel):
    """Display/edit text for a node and whether it came from the row fallback."""

    text: str = Field(..., description="Rendered text")
    from_fallback: bool = Field(default=False, description="True when rebuilt from row summaries")


class TextEdit(BaseModel):
    """Replace ``length`` characters at ``offset`` with ``content``."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(..., ge=0, description="Start offset in the original text")
    length: int = Field(..., ge=0, description="Number of characters replaced")
    content: str = Field(..., description="Replacement text")

    @property
    def end(self) -> int:
        return self.offset + self.length


class CommitResult(BaseModel):
    """Outcome of committing an edited value back into the document."""

    status: str = Field(..., description="Status of the commit")
    path_label: str = Field(..., description="Canonical label of the committed path")
    new_text: Optional[str] = Field(default=None, description="Full replacement document text on success")
    error: Optional[ErrorResponse] = Field(default=None, description="Failure details when the commit was rejected")

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        """Ensure status is one of the allowed values."""
        allowed_statuses = ["success", "failure"]
        if v not in allowed_statuses:
            raise ValueError(f"Status must be one of: {', '.join(allowed_statuses)}")
        return v

    @property
    def ok(self) -> bool:
        return self.status == "success"
