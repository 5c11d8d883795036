"""Edit session state."""

from enum import Enum


class SessionState(str, Enum):
    """Lifecycle of a single node view/edit interaction."""

    VIEWING = "viewing"
    EDITING = "editing"
    COMMITTED = "committed"
