"""Commit an edited node value back into the document text."""

import logging
from typing import Any, Iterable, Optional

from ..config.loader import load_config
from ..config.models import EditorConfig
from ..models.core import CommitResult
from ..models.errors import NodeEditorException, PatchFailure
from ..models.path import to_path
from ..utils.error_handler import ErrorHandler, handle_error
from ..utils.logging_config import setup_logging_from_config
from .json_scanner import loads_strict
from .patch_builder import apply_edits, compute_edits
from .path_formatter import format_path
from .stores import DocumentStore, MirroredSourceStore


class PatchCommitter:
    """Writes a node's edited text into the document and propagates the result."""

    def __init__(self, document_store: DocumentStore, source_store: MirroredSourceStore,
                 config: Optional[EditorConfig] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """Initialize the committer with its two store collaborators.

        Args:
            document_store: Authoritative document text
            source_store: Mirrored source view updated alongside the document
            config: Editor configuration; defaults apply when omitted
            error_handler: Categorises commit failures into error responses
        """
        self.document_store = document_store
        self.source_store = source_store
        self.config = config or EditorConfig()
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logging.getLogger(__name__)

    def interpret_edited_text(self, edited_text: str) -> Any:
        """Parse edited text as JSON, keeping it as a plain string when it is not."""
        try:
            return loads_strict(edited_text)
        except (ValueError, RecursionError):
            self.logger.debug("Edited text is not valid JSON; committing it as a string")
            return edited_text

    def build_document(self, original_text: str, path: Optional[Iterable[Any]],
                       edited_text: str) -> str:
        """
        Produce the full replacement document text for an edit.

        Pure: neither store is read or written.

        Args:
            original_text: Document text the edit applies to
            path: Typed or raw path of the edited node
            edited_text: Text entered for the node

        Returns:
            New document text, identical to ``original_text`` outside the edited value

        Raises:
            PatchFailure: If the document is malformed, too large, or the path cannot be written
        """
        typed_path = to_path(path)

        document_size = len(original_text.encode('utf-8'))
        if document_size > self.config.max_document_size:
            raise PatchFailure(
                error_code="DOCUMENT_TOO_LARGE",
                message=f"Document size {document_size} exceeds limit of {self.config.max_document_size} bytes",
                details={
                    "document_size": document_size,
                    "path_label": format_path(typed_path),
                    "processing_stage": "validate"
                }
            )

        new_value = self.interpret_edited_text(edited_text)
        edits = compute_edits(original_text, typed_path, new_value, self.config.formatting)
        return apply_edits(original_text, edits)

    def commit(self, path: Optional[Iterable[Any]], edited_text: str) -> CommitResult:
        """
        Commit an edit against the latest document and update both stores.

        Patch failures never raise: nothing is written, the error is logged
        and returned in the result so the caller can keep the edit for retry.

        Args:
            path: Typed or raw path of the edited node
            edited_text: Text entered for the node

        Returns:
            CommitResult with the new text on success or the error on failure

        Raises:
            ValidationException: If the path contains invalid segments
        """
        path_label = format_path(path)
        original_text = self.document_store.get_document()

        try:
            new_text = self.build_document(original_text, path, edited_text)
            self._propagate(original_text, new_text, path_label)
        except (NodeEditorException, RecursionError) as e:
            return self._failure(e, path_label, original_text)

        self.logger.info(f"Committed edit at {path_label} ({len(original_text)} -> {len(new_text)} chars)")
        return CommitResult(status="success", path_label=path_label, new_text=new_text)

    def _propagate(self, original_text: str, new_text: str, path_label: str) -> None:
        """Update the document store, then the mirrored source; roll back on any failure."""
        try:
            self.document_store.set_document(new_text)
        except Exception as e:
            self._rollback(original_text, path_label)
            raise self._propagation_failure("document", e, path_label)

        try:
            self.source_store.set_contents(new_text, has_changes=True)
        except Exception as e:
            self._rollback(original_text, path_label)
            raise self._propagation_failure("mirrored source", e, path_label)

    def _rollback(self, original_text: str, path_label: str) -> None:
        """Restore the document text; listener errors while restoring are logged only."""
        try:
            self.document_store.set_document(original_text)
        except Exception:
            if self.document_store.get_document() != original_text:
                raise
            self.logger.warning(f"Document listener failed while rolling back {path_label}", exc_info=True)

    def _propagation_failure(self, target: str, error: Exception, path_label: str) -> PatchFailure:
        return PatchFailure(
            error_code="PROPAGATION_FAILED",
            message=f"Failed to update {target}: {str(error)}",
            details={"path_label": path_label, "processing_stage": "propagate", "error": str(error)}
        )

    def _failure(self, error: Exception, path_label: str, original_text: str) -> CommitResult:
        response = handle_error(
            error,
            context={"path_label": path_label, "document_length": len(original_text)},
            operation="commit",
            handler=self.error_handler
        )
        return CommitResult(status="failure", path_label=path_label, error=response)


def create_committer(document_store: DocumentStore, source_store: MirroredSourceStore,
                     config_file: Optional[str] = None, env_file: Optional[str] = None,
                     configure_logging: bool = True) -> PatchCommitter:
    """
    Load the editor configuration and build a committer around the two stores.

    Args:
        document_store: Authoritative document text
        source_store: Mirrored source view
        config_file: Optional path to YAML configuration file
        env_file: Optional path to .env file
        configure_logging: Install the configured logging handlers

    Returns:
        PatchCommitter using the loaded formatting and size limits

    Raises:
        ConfigurationError: If configuration loading or validation fails
    """
    config = load_config(config_file, env_file)
    if configure_logging:
        setup_logging_from_config(config.logging)
    logging.getLogger(__name__).info(
        f"Node editor configured (tab_size={config.formatting.tab_size}, "
        f"max_document_size={config.max_document_size})"
    )
    return PatchCommitter(document_store, source_store, config=config)
