"""Tests for the Textual front end key handling."""

import pytest

from panekit.screen import LARGE_SCREEN_NAME, ScreenManager
from panekit.tui_textual import PaneApp, PaneWidget


def _make_app(large: bool = False) -> PaneApp:
    screen = ScreenManager()
    if large:
        screen.set_large_screen()
    return PaneApp(screen)


def _widgets(app: PaneApp) -> list[PaneWidget]:
    return list(app.query(PaneWidget))


@pytest.mark.asyncio
async def test_initial_view_shows_focused_terminal():
    app = _make_app()

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause(0.2)
        widgets = _widgets(app)
        assert len(widgets) == 1
        assert widgets[0].entry.focused
        assert widgets[0].has_class("focused")


@pytest.mark.asyncio
async def test_split_and_move_focus():
    """| splits the focused pane, l moves focus into the new pane."""
    app = _make_app()

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("|")
        await pilot.pause()
        manager = app.screen_manager.active_pane_manager
        assert manager.pane_ids() == [0, 1]
        assert manager.focused == 0

        await pilot.press("l")
        await pilot.pause()
        assert manager.focused == 1

        await pilot.press("h")
        await pilot.pause()
        assert manager.focused == 0


@pytest.mark.asyncio
async def test_close_terminal_shows_status():
    """x on the terminal pane is rejected with a status message."""
    app = _make_app()

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("x")
        await pilot.pause()
        assert app._status_message == "Cannot close the terminal pane"
        assert app.screen_manager.active_pane_manager.pane_ids() == [0]


@pytest.mark.asyncio
async def test_close_source_pane_in_large_profile():
    app = _make_app(large=True)

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("k")
        await pilot.pause()
        manager = app.screen_manager.active_pane_manager
        assert manager.focused == 0

        await pilot.press("x")
        await pilot.pause()
        assert manager.pane_ids() == [1, 2, 3]
        assert manager.focused == 1


@pytest.mark.asyncio
async def test_full_screen_blocks_enter_terminal():
    app = _make_app(large=True)

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("f")
        await pilot.pause(0.2)
        assert app.screen_manager.full_screen is True
        assert len(_widgets(app)) == 1

        await pilot.press("t")
        await pilot.pause()
        assert app._status_message == "Cannot enter terminal in full screen mode"
        assert app.screen_manager.input_captured is False

        await pilot.press("f")
        await pilot.pause(0.2)
        assert app.screen_manager.full_screen is False
        assert len(_widgets(app)) == 4


@pytest.mark.asyncio
async def test_captured_input_disables_navigation():
    """After t, pane keys are ignored until escape releases input."""
    app = _make_app()

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("t")
        await pilot.pause()
        assert app.screen_manager.input_captured is True

        await pilot.press("|")
        await pilot.pause()
        assert app.screen_manager.active_pane_manager.pane_ids() == [0]

        await pilot.press("escape")
        await pilot.pause()
        assert app.screen_manager.input_captured is False

        await pilot.press("|")
        await pilot.pause()
        assert app.screen_manager.active_pane_manager.pane_ids() == [0, 1]


@pytest.mark.asyncio
async def test_profile_switch():
    app = _make_app()

    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("2")
        await pilot.pause(0.2)
        assert app.screen_manager.current_pane == LARGE_SCREEN_NAME
        assert sorted(w.entry.id for w in _widgets(app)) == [0, 1, 2, 3]
