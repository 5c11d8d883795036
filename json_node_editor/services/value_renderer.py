"""Render a resolved node, or its row summary, as display/edit text."""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ..models.core import RenderedValue, Resolution, Resolved, RowSummary

logger = logging.getLogger(__name__)

RENDER_INDENT = 2

RowInput = Union[RowSummary, Dict[str, Any]]


def _coerce_rows(rows: Optional[Iterable[RowInput]]) -> List[RowSummary]:
    if not rows:
        return []
    return [row if isinstance(row, RowSummary) else RowSummary.model_validate(row) for row in rows]


def _scalar_text(value: Any) -> str:
    """Raw display form of a primitive row value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return json.dumps(value, ensure_ascii=False, default=str)


def render_rows(rows: Optional[Iterable[RowInput]]) -> str:
    """
    Rebuild display text from a node's flattened child rows.

    Container rows (objects and arrays) carry no inline value and are
    left out, so the result is a lossy approximation of the node.
    """
    summaries = _coerce_rows(rows)
    if not summaries:
        return "{}"
    if len(summaries) == 1 and not summaries[0].key:
        return _scalar_text(summaries[0].value)

    obj: Dict[str, Any] = {}
    for row in summaries:
        if not row.is_container and row.key:
            obj[row.key] = row.value
    return json.dumps(obj, indent=RENDER_INDENT, ensure_ascii=False, default=str)


def render_value(outcome: Resolution, rows: Optional[Iterable[RowInput]] = None) -> RenderedValue:
    """
    Render a resolution outcome as canonical, re-parseable text.

    Strings render as a single JSON-quoted line so ``"5"`` and ``5`` stay
    distinguishable; other values are pretty-printed with a 2-space
    indent. Unresolved outcomes, and values that cannot be written as
    strict JSON, fall back to the row summary.

    Args:
        outcome: Result of resolving the node's path
        rows: Row summaries of the node, used only for the fallback

    Returns:
        RenderedValue with the text and whether the fallback produced it
    """
    if isinstance(outcome, Resolved):
        value = outcome.value
        try:
            if isinstance(value, str):
                text = json.dumps(value, ensure_ascii=False)
            else:
                text = json.dumps(value, indent=RENDER_INDENT, ensure_ascii=False, allow_nan=False)
            return RenderedValue(text=text, from_fallback=False)
        except (TypeError, ValueError, RecursionError) as e:
            logger.debug(f"Resolved value could not be serialised, using row fallback: {e}")
    else:
        logger.debug(f"Path unresolved ({outcome.reason.value}), using row fallback")

    return RenderedValue(text=render_rows(rows), from_fallback=True)


def render_text(outcome: Resolution, rows: Optional[Iterable[RowInput]] = None) -> str:
    """Text-only form of :func:`render_value`."""
    return render_value(outcome, rows).text
