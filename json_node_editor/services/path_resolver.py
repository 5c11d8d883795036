"""Resolve a node's current value from the live document."""

import logging
from typing import Any, Iterable, Optional

from ..models.core import Resolution, Resolved, Unresolved, UnresolvedReason
from ..models.path import Index, Key, to_path
from .json_scanner import loads_strict

logger = logging.getLogger(__name__)


def resolve_value(document: Any, path: Optional[Iterable[Any]]) -> Resolution:
    """
    Walk ``path`` through an already-parsed JSON value.

    A Key only indexes objects and an Index only indexes arrays; any
    other combination, or a missing key or index, stops the walk.

    Args:
        document: Parsed JSON value
        path: Typed or raw path; None or empty for the root

    Returns:
        Resolved with the value found, or Unresolved
    """
    current = document
    for segment in to_path(path):
        if isinstance(segment, Key):
            if not isinstance(current, dict) or segment.name not in current:
                return Unresolved(reason=UnresolvedReason.UNRESOLVED_PATH)
            current = current[segment.name]
        elif isinstance(segment, Index):
            if not isinstance(current, list) or segment.index >= len(current):
                return Unresolved(reason=UnresolvedReason.UNRESOLVED_PATH)
            current = current[segment.index]
    return Resolved(value=current)


def resolve_path(text: str, path: Optional[Iterable[Any]]) -> Resolution:
    """
    Parse the document text and resolve ``path`` against it.

    Never raises for malformed documents or unreachable paths; both come
    back as Unresolved with the matching reason.

    Args:
        text: Document text
        path: Typed or raw path; None or empty for the root

    Returns:
        Resolved with the value found, or Unresolved
    """
    try:
        document = loads_strict(text)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug(f"Document could not be parsed for resolution: {e}")
        return Unresolved(reason=UnresolvedReason.MALFORMED_DOCUMENT)
    return resolve_value(document, path)
