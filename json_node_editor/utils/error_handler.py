"""Error categorisation for the JSON node editor."""

import json
import logging
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from ..models.errors import (
    ErrorResponse, ValidationError, PatchError, SessionError,
    NodeEditorException, ValidationException, PatchFailure, SessionException
)
from .logging_config import log_error_with_context

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Maps exceptions onto ErrorResponse models and counts them by code."""

    def __init__(self):
        self.error_counts: Dict[str, int] = {}

    def categorize_error(self, error: Exception) -> ErrorResponse:
        """Categorize an exception into appropriate error response."""

        if isinstance(error, NodeEditorException):
            response = self._handle_node_editor_exception(error)
        elif isinstance(error, PydanticValidationError):
            response = self._handle_pydantic_validation_error(error)
        elif isinstance(error, json.JSONDecodeError):
            response = self._handle_json_parsing_error(error)
        elif isinstance(error, (MemoryError, RecursionError)):
            response = self._handle_resource_error(error)
        else:
            response = self._handle_generic_error(error)

        self.error_counts[response.error_code] = self.error_counts.get(response.error_code, 0) + 1
        return response

    def _handle_node_editor_exception(self, error: NodeEditorException) -> ErrorResponse:
        """Handle known editor exceptions."""

        if isinstance(error, ValidationException):
            return ValidationError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                field_errors=error.details.get('field_errors')
            )

        elif isinstance(error, PatchFailure):
            return PatchError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                path_label=error.details.get('path_label'),
                document_size=error.details.get('document_size'),
                processing_stage=error.details.get('processing_stage'),
                suggestions=self._patch_suggestions(error.error_code)
            )

        elif isinstance(error, SessionException):
            return SessionError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                state=error.details.get('state')
            )

        return ErrorResponse(
            error_type="processing",
            error_code=error.error_code,
            message=error.message,
            details=error.details
        )

    def _patch_suggestions(self, error_code: str) -> Optional[list]:
        """Suggested follow-ups for the commit failures a user can act on."""

        suggestions = {
            "MALFORMED_DOCUMENT": [
                "Fix the syntax errors in the document before editing a node",
            ],
            "INCOMPATIBLE_PATH": [
                "The document changed shape since the node was selected",
                "Reselect the node and retry the edit",
            ],
            "DOCUMENT_TOO_LARGE": [
                "Raise max_document_size in the editor configuration",
            ],
        }
        return suggestions.get(error_code)

    def _handle_pydantic_validation_error(self, error: PydanticValidationError) -> ValidationError:
        """Handle Pydantic validation errors."""

        field_errors: Dict[str, list] = {}
        for err in error.errors():
            field_path = ".".join(str(loc) for loc in err['loc'])
            field_errors.setdefault(field_path, []).append(err['msg'])

        return ValidationError(
            error_code="VALIDATION_FAILED",
            message="Input validation failed",
            details={"error_count": error.error_count()},
            field_errors=field_errors
        )

    def _handle_json_parsing_error(self, error: json.JSONDecodeError) -> ValidationError:
        """Handle JSON parsing errors."""

        return ValidationError(
            error_code="INVALID_JSON",
            message=f"Invalid JSON document: {str(error)}",
            details={
                "line": error.lineno,
                "column": error.colno,
                "offset": error.pos
            },
            suggestions=[
                "Check for missing quotes, brackets, or commas",
            ]
        )

    def _handle_resource_error(self, error: Exception) -> PatchError:
        """Handle memory and recursion-depth errors."""

        return PatchError(
            error_code="RESOURCE_EXHAUSTED",
            message=f"Resource limit exceeded: {type(error).__name__}",
            details={"original_error": str(error)},
            suggestions=[
                "Reduce document size or nesting depth",
            ]
        )

    def _handle_generic_error(self, error: Exception) -> PatchError:
        """Handle unhandled exceptions."""

        error_id = f"generic_{int(time.time())}"
        logger.error(f"Unhandled error [{error_id}]: {type(error).__name__}: {str(error)}",
                     exc_info=error)

        return PatchError(
            error_code="UNEXPECTED_ERROR",
            message="An unexpected error occurred",
            details={
                "error_id": error_id,
                "error_type": type(error).__name__,
                "original_error": str(error)
            }
        )

    def get_error_counts(self) -> Dict[str, int]:
        return dict(self.error_counts)


_default_handler = ErrorHandler()


def handle_error(error: Exception, context: Optional[Dict[str, Any]] = None,
                 operation: str = "operation",
                 handler: Optional[ErrorHandler] = None) -> ErrorResponse:
    """Log an error with its context and return the categorised response."""

    log_error_with_context(logger, error, context or {}, operation)
    return (handler or _default_handler).categorize_error(error)
