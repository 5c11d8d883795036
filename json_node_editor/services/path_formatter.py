"""Canonical ``$[...]`` labels for node paths."""

from typing import Any, Iterable, Optional

from ..models.path import Index, Key, to_path


def format_path(path: Optional[Iterable[Any]]) -> str:
    """
    Render a path as a bracket-notation label such as ``$["customer"][0]``.

    Keys are wrapped in double quotes without escaping; the label is for
    display and is not meant to be parsed back into a path.

    Args:
        path: Typed or raw path; None or empty for the document root

    Returns:
        The path label, ``$`` for the root
    """
    tokens = []
    for segment in to_path(path):
        if isinstance(segment, Index):
            tokens.append(f"[{segment.index}]")
        elif isinstance(segment, Key):
            tokens.append(f'["{segment.name}"]')
    return "$" + "".join(tokens)
