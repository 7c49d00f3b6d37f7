"""Screen profiles and display modes on top of pane managers."""

import logging

from .errors import InvalidMergeError, InvalidStateError, NotFoundError
from .geometry import Direction, Point, Rect
from .layout import Layout
from .manager import DEFAULT_VIEWPORT, PaneManager
from .models import Pane, PaneFlattened, PaneView, ViewTag
from .utils import forward

logger = logging.getLogger(__name__)

SMALL_SCREEN_NAME = "small"
LARGE_SCREEN_NAME = "large"


@forward(lambda self: self.active_pane_manager,
         ["focus_up",
          "focus_down",
          "focus_left",
          "focus_right"])
class ScreenManager:
    """Named pane managers ("profiles") plus full-screen and input modes.

    Full-screen and input capture are independent flags: full-screen decides
    how the active profile is flattened, input capture decides whether keys
    go to the focused pane's content or to pane navigation.
    """

    def __init__(self, profiles: dict[str, Layout] | None = None, initial: str = SMALL_SCREEN_NAME) -> None:
        self.panes: dict[str, PaneManager] = {}
        self.current_pane = SMALL_SCREEN_NAME
        self.full_screen = False
        self.input_captured = False
        self.pending_pointer: Point | None = None
        self.viewport = DEFAULT_VIEWPORT

        self.add_pane_manager(SMALL_SCREEN_NAME, PaneManager.default_small_screen())
        self.add_pane_manager(LARGE_SCREEN_NAME, PaneManager.default_large_screen())
        for name, layout in (profiles or {}).items():
            self.add_pane_manager(name, PaneManager.from_layout(layout))
        if initial != SMALL_SCREEN_NAME:
            self.set_pane(initial)

    # Profiles

    def add_pane_manager(self, name: str, manager: PaneManager) -> None:
        """Register a profile, replacing any profile with the same name."""
        manager.set_viewport(self.viewport)
        self.panes[name] = manager

    def get_available_pane_profiles(self) -> list[str]:
        return sorted(self.panes)

    @property
    def active_pane_manager(self) -> PaneManager:
        manager = self.panes.get(self.current_pane)
        if manager is None:
            raise NotFoundError(f"No profile named {self.current_pane!r}")
        return manager

    def set_pane(self, name: str) -> None:
        if name not in self.panes:
            raise NotFoundError(f"No profile named {name!r}")
        self.current_pane = name
        logger.debug("Switched to profile %s", name)

    def set_small_screen(self) -> None:
        self.set_pane(SMALL_SCREEN_NAME)

    def set_large_screen(self) -> None:
        self.set_pane(LARGE_SCREEN_NAME)

    def resize(self, area: Rect) -> None:
        """Record the viewport used for focus navigation in every profile."""
        self.viewport = area
        for manager in self.panes.values():
            manager.set_viewport(area)

    # Modes

    def toggle_full_screen(self) -> None:
        self.full_screen = not self.full_screen
        if self.full_screen:
            self.pending_pointer = None
        logger.debug("Full screen %s", "on" if self.full_screen else "off")

    def capture_input(self) -> None:
        """Route keys to the focused pane's content."""
        self.input_captured = True

    def release_input(self) -> None:
        """Route keys back to pane navigation."""
        self.input_captured = False

    def set_mouse_move(self, x: int, y: int) -> None:
        # Pointer events are meaningless while one pane covers the screen
        if self.full_screen:
            return
        self.pending_pointer = Point(x, y)

    def dispatch_pointer(self) -> bool:
        """Consume the pending pointer position and focus the pane under it.

        Returns True if a pane was hit.
        """
        point, self.pending_pointer = self.pending_pointer, None
        if point is None or self.full_screen:
            return False
        return self.active_pane_manager.focus_at(point)

    def enter_terminal(self) -> None:
        """Focus the terminal pane and hand it the keyboard."""
        if self.full_screen:
            raise InvalidStateError("Cannot enter terminal in full screen mode")
        self.active_pane_manager.force_goto_by_view(PaneView.TERMINAL)
        self.capture_input()

    # Panes

    def get_focused_pane(self) -> Pane:
        return self.active_pane_manager.get_focused_pane()

    def get_focused_view(self) -> ViewTag:
        return self.active_pane_manager.get_focused_view()

    def split_focused_pane(self, direction: Direction, ratio: tuple[int, int] = (1, 1)) -> int:
        manager = self.active_pane_manager
        return manager.split(manager.focused, direction, ratio)

    def merge_focused_pane(self) -> None:
        """Absorb the focused pane's sibling into the focused pane."""
        manager = self.active_pane_manager
        sibling = manager.sibling_of(manager.focused)
        if sibling is None:
            raise InvalidMergeError("Focused pane has no sibling pane to merge with")
        manager.merge(manager.focused, sibling)

    def close_focused_pane(self) -> int:
        """Close the focused pane and return the id of the pane focused after.

        The closed pane's structural sibling takes over its space. Terminal
        panes cannot be closed, nor can the last pane of a profile.

        A sibling that is itself a split does not make the close fail with
        ``UnmergeableError``: the whole subtree is promoted into the freed
        space and focus goes to its pane nearest the closed one.
        """
        manager = self.active_pane_manager
        origin = manager.focused
        focused = manager.remove(origin)
        logger.debug("Closed pane %d in profile %s", origin, self.current_pane)
        return focused

    def get_flattened_layout(self, area: Rect) -> list[PaneFlattened]:
        """Layout for one frame. In full screen only the focused pane is shown."""
        if self.full_screen:
            pane = self.get_focused_pane()
            return [PaneFlattened(id=pane.id, view=pane.view, rect=area, focused=True)]
        return self.active_pane_manager.get_flattened_layout(area)
