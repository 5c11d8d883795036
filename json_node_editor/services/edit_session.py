"""View/edit/commit lifecycle for one selected node."""

import logging
from typing import Any, Iterable, List, Optional

from ..models.core import CommitResult, RowSummary
from ..models.errors import ErrorResponse, SessionException
from ..models.path import JsonPath, to_path
from ..models.session import SessionState
from .patch_committer import PatchCommitter
from .path_formatter import format_path
from .path_resolver import resolve_path
from .value_renderer import RowInput, render_rows, render_value
from .stores import DocumentStore


class EditSession:
    """
    Transient state behind a node's view/edit surface.

    The session re-reads the document whenever it (re)renders, so it
    never holds on to a stale snapshot. External document changes and
    reselection discard any draft unconditionally.
    """

    def __init__(self, document_store: DocumentStore, committer: PatchCommitter,
                 path: Optional[Iterable[Any]] = None,
                 rows: Optional[Iterable[RowInput]] = None,
                 subscribe: bool = True):
        """Open a session on the node at ``path``.

        Args:
            document_store: Store holding the authoritative document text
            committer: Writes saved edits back into the stores
            path: Typed or raw path of the selected node
            rows: Row summaries of the node, used when the path cannot be resolved
            subscribe: Re-render on document-store change notifications
        """
        self.document_store = document_store
        self.committer = committer
        self.logger = logging.getLogger(__name__)

        self.path: JsonPath = []
        self.rows: List[RowSummary] = []
        self.state = SessionState.VIEWING
        self.text = ""
        self.from_fallback = False
        self.error: Optional[ErrorResponse] = None

        self._committing = False
        self._subscribed = False

        self.reselect(path, rows)
        if subscribe:
            self.document_store.subscribe(self.on_document_changed)
            self._subscribed = True

    @property
    def path_label(self) -> str:
        return format_path(self.path)

    @property
    def editing(self) -> bool:
        return self.state == SessionState.EDITING

    @property
    def display_text(self) -> str:
        """Text shown in view mode; the row summary stands in for empty text."""
        return self.text or render_rows(self.rows)

    def refresh(self) -> None:
        """Re-resolve and re-render from the current document, back in view mode."""
        self._ensure_open()
        outcome = resolve_path(self.document_store.get_document(), self.path)
        rendered = render_value(outcome, self.rows)
        self.text = rendered.text
        self.from_fallback = rendered.from_fallback
        self.state = SessionState.VIEWING
        self.error = None

    def reselect(self, path: Optional[Iterable[Any]], rows: Optional[Iterable[RowInput]] = None) -> None:
        """Point the session at another node, discarding any draft."""
        self._ensure_open()
        self.path = to_path(path)
        self.rows = [row if isinstance(row, RowSummary) else RowSummary.model_validate(row)
                     for row in rows or []]
        self.refresh()

    def on_document_changed(self, _text: Optional[str] = None) -> None:
        """Document-store listener: rebuild the view from the new document."""
        if self._committing or self.state == SessionState.COMMITTED:
            return
        if self.editing:
            self.logger.debug(f"Document changed while editing {self.path_label}; draft discarded")
        self.refresh()

    def start_edit(self) -> None:
        self._require(SessionState.VIEWING, "start editing")
        self.state = SessionState.EDITING
        self.error = None

    def update_text(self, text: str) -> None:
        self._require(SessionState.EDITING, "change the text")
        self.text = text

    def cancel(self) -> None:
        """Drop the draft and show the node's current value again."""
        self._require(SessionState.EDITING, "cancel")
        self.refresh()

    def save(self) -> CommitResult:
        """
        Commit the draft.

        On success the session ends in the committed state. On failure
        it stays in editing with the text untouched and ``error`` set.
        """
        self._require(SessionState.EDITING, "save")
        self._committing = True
        try:
            result = self.committer.commit(self.path, self.text)
        finally:
            self._committing = False

        if result.ok:
            self.state = SessionState.COMMITTED
            self.error = None
            self.close()
        else:
            self.error = result.error
            self.logger.warning(f"Save failed for {self.path_label}; edit kept for retry")
        return result

    def close(self) -> None:
        """Stop listening to the document store."""
        if self._subscribed:
            self.document_store.unsubscribe(self.on_document_changed)
            self._subscribed = False

    def _ensure_open(self) -> None:
        if self.state == SessionState.COMMITTED:
            raise SessionException(
                error_code="INVALID_SESSION_STATE",
                message="Session already committed",
                details={"state": self.state.value, "path_label": self.path_label}
            )

    def _require(self, expected: SessionState, action: str) -> None:
        if self.state != expected:
            raise SessionException(
                error_code="INVALID_SESSION_STATE",
                message=f"Cannot {action} while {self.state.value}",
                details={"state": self.state.value, "path_label": self.path_label}
            )
