"""Data models for Panekit."""

from dataclasses import dataclass
from enum import Enum

from .geometry import Rect


class PaneView(Enum):
    """Content kinds known to the debugger front end."""
    TERMINAL = "terminal"
    SOURCE = "source"
    TRACE = "trace"
    OPCODE = "opcode"
    VARIABLE = "variable"
    EXPRESSION = "expression"
    MEMORY = "memory"
    STACK = "stack"
    NULL = "null"


# Collaborators may display content kinds of their own, named by a plain string
ViewTag = PaneView | str


def parse_view(value: str) -> ViewTag:
    """Map a stored view name back to a PaneView, keeping unknown names as-is."""
    try:
        return PaneView(value)
    except ValueError:
        return value


def view_name(view: ViewTag) -> str:
    """Name of a view tag as stored in config and layout files."""
    return view.value if isinstance(view, PaneView) else view


def is_terminal(view: ViewTag) -> bool:
    return view == PaneView.TERMINAL


@dataclass
class Pane:
    """A leaf of the layout tree showing one content view."""

    id: int
    view: ViewTag

    def set_view(self, view: ViewTag) -> None:
        self.view = view


@dataclass(frozen=True)
class PaneFlattened:
    """One pane as it should be drawn in the current frame."""

    id: int
    view: ViewTag
    rect: Rect
    focused: bool
