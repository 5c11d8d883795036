"""Path segment models addressing a node inside a JSON value tree."""

from typing import Any, Iterable, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ValidationException


class Key(BaseModel):
    """Object-key step into a JSON object."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., strict=True, description="Object key to look up")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Ensure the key is not empty."""
        if not v:
            raise ValueError("Key segment cannot be empty")
        return v


class Index(BaseModel):
    """Array-index step into a JSON array."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, strict=True, description="Zero-based array position")


PathSegment = Union[Key, Index]
JsonPath = List[PathSegment]


def to_segment(raw: Any) -> PathSegment:
    """Convert a raw ``str``/``int`` step into a typed segment."""
    if isinstance(raw, (Key, Index)):
        return raw
    # bool is an int subclass but never a valid array index
    if isinstance(raw, bool):
        raise ValidationException(
            error_code="INVALID_PATH_SEGMENT",
            message=f"Path segment must be a string or integer, got bool: {raw!r}",
            details={"segment": raw}
        )
    if isinstance(raw, int):
        if raw < 0:
            raise ValidationException(
                error_code="INVALID_PATH_SEGMENT",
                message=f"Array index cannot be negative: {raw}",
                details={"segment": raw}
            )
        return Index(index=raw)
    if isinstance(raw, str):
        if not raw:
            raise ValidationException(
                error_code="INVALID_PATH_SEGMENT",
                message="Object key segment cannot be empty",
                details={"segment": raw}
            )
        return Key(name=raw)
    raise ValidationException(
        error_code="INVALID_PATH_SEGMENT",
        message=f"Path segment must be a string or integer, got {type(raw).__name__}",
        details={"segment": repr(raw)}
    )


def to_path(raw: Optional[Iterable[Any]]) -> JsonPath:
    """
    Convert a raw path, as supplied by the graph view, into typed segments.

    Args:
        raw: Sequence of keys and indices, already-typed segments, or None for the root

    Returns:
        List of Key/Index segments

    Raises:
        ValidationException: If any segment is not a valid key or index
    """
    if raw is None:
        return []
    return [to_segment(segment) for segment in raw]
