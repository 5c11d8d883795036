"""Document and mirrored-source store interfaces and in-memory implementations."""

from abc import ABC, abstractmethod
from typing import Callable, List
import threading


DocumentListener = Callable[[str], None]


class DocumentStore(ABC):
    """Holds the authoritative JSON text of the document being edited."""

    @abstractmethod
    def get_document(self) -> str:
        """Return the current document text."""
        pass

    @abstractmethod
    def set_document(self, text: str) -> None:
        """Replace the document text and notify subscribers."""
        pass

    @abstractmethod
    def subscribe(self, listener: DocumentListener) -> None:
        """Register a callback invoked with the new text after each change."""
        pass

    @abstractmethod
    def unsubscribe(self, listener: DocumentListener) -> None:
        """Remove a previously registered callback."""
        pass


class MirroredSourceStore(ABC):
    """Secondary editable view of the document source kept in sync after commits."""

    @abstractmethod
    def get_contents(self) -> str:
        """Return the mirrored source text."""
        pass

    @abstractmethod
    def set_contents(self, contents: str, has_changes: bool = True) -> None:
        """Replace the mirrored source text."""
        pass


class InMemoryDocumentStore(DocumentStore):
    """In-memory document store."""

    def __init__(self, text: str = ""):
        self._text = text
        self._listeners: List[DocumentListener] = []
        self._lock = threading.RLock()

    def get_document(self) -> str:
        with self._lock:
            return self._text

    def set_document(self, text: str) -> None:
        with self._lock:
            changed = text != self._text
            self._text = text
            listeners = list(self._listeners)

        if not changed:
            return
        for listener in listeners:
            listener(text)

    def subscribe(self, listener: DocumentListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: DocumentListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)


class InMemorySourceStore(MirroredSourceStore):
    """In-memory mirrored source store."""

    def __init__(self, contents: str = ""):
        self._contents = contents
        self.has_changes = False
        self._lock = threading.RLock()

    def get_contents(self) -> str:
        with self._lock:
            return self._contents

    def set_contents(self, contents: str, has_changes: bool = True) -> None:
        with self._lock:
            self._contents = contents
            self.has_changes = has_changes
