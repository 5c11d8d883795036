"""Error models for the JSON node editor."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error_type: str = Field(..., description="Category of error (validation, patch, session, configuration)")
    error_code: str = Field(..., description="Specific error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    suggestions: Optional[List[str]] = Field(default=None, description="Suggested actions to resolve the error")

    @field_validator('error_type')
    @classmethod
    def validate_error_type(cls, v):
        """Ensure error type is one of the allowed categories."""
        allowed_types = ["validation", "patch", "session", "configuration", "processing"]
        if v not in allowed_types:
            raise ValueError(f"Error type must be one of: {', '.join(allowed_types)}")
        return v

    @field_validator('error_code')
    @classmethod
    def validate_error_code(cls, v):
        """Ensure error code is not empty."""
        if not v or not v.strip():
            raise ValueError("Error code cannot be empty")
        return v.strip().upper()

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        """Ensure message is not empty."""
        if not v or not v.strip():
            raise ValueError("Error message cannot be empty")
        return v.strip()


class ValidationError(ErrorResponse):
    """Specific error model for validation failures."""

    error_type: str = Field(default="validation", description="Error type is always validation")
    field_errors: Optional[Dict[str, List[str]]] = Field(
        default=None,
        description="Field-specific validation errors"
    )


class PatchError(ErrorResponse):
    """Specific error model for a commit that could not be patched into the document."""

    error_type: str = Field(default="patch", description="Error type is always patch")
    path_label: Optional[str] = Field(default=None, description="Canonical label of the path being written")
    document_size: Optional[int] = Field(default=None, description="Size of the document the patch targeted")
    processing_stage: Optional[str] = Field(default=None, description="Commit stage where the failure happened")


class SessionError(ErrorResponse):
    """Specific error model for edit session misuse."""

    error_type: str = Field(default="session", description="Error type is always session")
    state: Optional[str] = Field(default=None, description="Session state when the error occurred")


# Exception classes for raising errors
class NodeEditorException(Exception):
    """Base exception for the JSON node editor."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(NodeEditorException):
    """Exception for invalid input such as malformed path segments."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(error_code, message, details)
        self.error_type = "validation"


class PatchFailure(NodeEditorException):
    """Exception for edits that cannot be written back into the document text."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(error_code, message, details)
        self.error_type = "patch"


class SessionException(NodeEditorException):
    """Exception for invalid edit session transitions."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(error_code, message, details)
        self.error_type = "session"
