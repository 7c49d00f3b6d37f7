"""Textual front end driving a ScreenManager."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from rich.text import Text as RichText
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.message import Message
from textual.widgets import Footer, Static

from .errors import LayoutError
from .geometry import Direction, Rect
from .models import PaneFlattened, view_name
from .screen import ScreenManager

logger = logging.getLogger(__name__)


# CSS Styles
CSS = """
Screen {
    layout: vertical;
}

#panes {
    height: 1fr;
}

#status {
    height: 1;
    padding: 0 1;
    background: $panel;
}
"""


class PaneWidget(Static):
    """One flattened pane, placed at its rectangle inside the pane area."""

    DEFAULT_CSS = """
    PaneWidget {
        position: absolute;
        border: round $surface;
        color: $text-muted;
        content-align: center middle;
    }

    PaneWidget.focused {
        border: round $accent;
        color: $text;
    }
    """

    class PointerMoved(Message):
        """Posted when the mouse moves over a pane."""
        def __init__(self, screen_x: int, screen_y: int) -> None:
            super().__init__()
            self.screen_x = screen_x
            self.screen_y = screen_y

    def __init__(self, entry: PaneFlattened, **kwargs) -> None:
        super().__init__(**kwargs)
        self.entry = entry

    def on_mount(self) -> None:
        rect = self.entry.rect
        self.styles.offset = (rect.x, rect.y)
        self.styles.width = rect.width
        self.styles.height = rect.height
        self.border_title = f"{self.entry.id}: {view_name(self.entry.view)}"
        self.set_class(self.entry.focused, "focused")

    def render(self) -> RichText:
        # Content belongs to the debugger; the pane only names its view
        return RichText(view_name(self.entry.view))

    def on_mouse_move(self, event) -> None:
        self.post_message(self.PointerMoved(event.screen_x, event.screen_y))


class PaneApp(App):
    """Event loop: one key or pointer event at a time into the ScreenManager."""

    CSS = CSS

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("h", "focus_left", "Left", show=False),
        Binding("j", "focus_down", "Down", show=False),
        Binding("k", "focus_up", "Up", show=False),
        Binding("l", "focus_right", "Right", show=False),
        Binding("left", "focus_left", "Left", show=False),
        Binding("down", "focus_down", "Down", show=False),
        Binding("up", "focus_up", "Up", show=False),
        Binding("right", "focus_right", "Right", show=False),
        Binding("|", "split_horizontal", "Split |"),
        Binding("-", "split_vertical", "Split -"),
        Binding("x", "close_pane", "Close"),
        Binding("m", "merge_pane", "Merge", show=False),
        Binding("f", "toggle_full_screen", "Full Screen"),
        Binding("t", "enter_terminal", "Terminal"),
        Binding("escape", "release_input", "Release", show=False),
        Binding("1", "small_screen", "Small", show=False),
        Binding("2", "large_screen", "Large", show=False),
    ]

    # Allowed while keys are routed to pane content
    CAPTURED_ACTIONS = {"release_input", "quit"}

    def __init__(self, screen_manager: ScreenManager) -> None:
        super().__init__()
        self.screen_manager = screen_manager
        self._layout_lock = asyncio.Lock()
        self._status_message: str | None = None

    def compose(self) -> ComposeResult:
        yield Container(id="panes")
        yield Static(id="status")
        yield Footer()

    def on_mount(self) -> None:
        # Pane area has no size until the first layout pass
        self.call_after_refresh(self._refresh_layout)

    def on_resize(self, event) -> None:
        self.call_after_refresh(self._refresh_layout)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable navigation bindings while input is captured by a pane."""
        if self.screen_manager.input_captured and action not in self.CAPTURED_ACTIONS:
            return False
        return True

    async def _refresh_layout(self) -> None:
        """Re-flatten the active profile into the pane area."""
        async with self._layout_lock:
            area_widget = self.query_one("#panes", Container)
            area = Rect(0, 0, area_widget.size.width, area_widget.size.height)
            if area.area:
                self.screen_manager.resize(area)
            entries = self.screen_manager.get_flattened_layout(area)
            await area_widget.remove_children()
            await area_widget.mount_all(PaneWidget(entry) for entry in entries)
            self._refresh_status()

    def _refresh_status(self) -> None:
        screen = self.screen_manager
        parts = [f"profile: {screen.current_pane}"]
        if screen.full_screen:
            parts.append("full screen")
        if screen.input_captured:
            parts.append("input: pane (esc to release)")
        self.query_one("#status", Static).update(" | ".join(parts))

    def _show_status(self, message: str) -> None:
        """Show a transient status message."""
        self._status_message = message
        self.notify(message, severity="warning", timeout=3)

    async def _apply(self, operation: Callable[[], object]) -> None:
        """Run one manager operation, reporting layout errors instead of raising."""
        try:
            operation()
        except LayoutError as e:
            logger.debug("Rejected: %s", e)
            self._show_status(str(e))
            return
        await self._refresh_layout()

    async def on_pane_widget_pointer_moved(self, message: PaneWidget.PointerMoved) -> None:
        region = self.query_one("#panes", Container).region
        screen = self.screen_manager
        before = screen.active_pane_manager.focused
        screen.set_mouse_move(message.screen_x - region.x, message.screen_y - region.y)
        if screen.dispatch_pointer() and screen.active_pane_manager.focused != before:
            await self._refresh_layout()

    # Action handlers
    async def action_focus_left(self) -> None:
        await self._apply(self.screen_manager.focus_left)

    async def action_focus_right(self) -> None:
        await self._apply(self.screen_manager.focus_right)

    async def action_focus_up(self) -> None:
        await self._apply(self.screen_manager.focus_up)

    async def action_focus_down(self) -> None:
        await self._apply(self.screen_manager.focus_down)

    async def action_split_horizontal(self) -> None:
        await self._apply(lambda: self.screen_manager.split_focused_pane(Direction.HORIZONTAL))

    async def action_split_vertical(self) -> None:
        await self._apply(lambda: self.screen_manager.split_focused_pane(Direction.VERTICAL))

    async def action_close_pane(self) -> None:
        await self._apply(self.screen_manager.close_focused_pane)

    async def action_merge_pane(self) -> None:
        await self._apply(self.screen_manager.merge_focused_pane)

    async def action_toggle_full_screen(self) -> None:
        await self._apply(self.screen_manager.toggle_full_screen)

    async def action_enter_terminal(self) -> None:
        await self._apply(self.screen_manager.enter_terminal)

    async def action_release_input(self) -> None:
        await self._apply(self.screen_manager.release_input)

    async def action_small_screen(self) -> None:
        await self._apply(self.screen_manager.set_small_screen)

    async def action_large_screen(self) -> None:
        await self._apply(self.screen_manager.set_large_screen)
