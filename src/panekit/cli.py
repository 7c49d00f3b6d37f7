"""CLI entry point for Panekit."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import BUILTIN_PROFILES, CONFIG_FILE, Config, load_config, save_config
from .errors import LayoutError
from .geometry import Rect
from .models import view_name
from .screen import ScreenManager
from .store import LayoutStore

console = Console()

LOG_FILE = Path.home() / ".cache" / "panekit" / "debug.log"


def configure_logging(debug_logging: bool) -> None:
    """Configure logging based on config (opt-in debug logging)."""
    if debug_logging:
        # Debug logging enabled - use rotating file handler
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
        )
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            handlers=[handler],
        )
        logging.info("Panekit starting (debug logging enabled)")
    else:
        # Default: only warn+ so TUI stays clean
        logging.basicConfig(
            level=logging.WARNING,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def build_screen_manager(config: Config, profile: str | None = None, store: LayoutStore | None = None) -> ScreenManager:
    """Create the screen manager for a run.

    User profiles from the config come first; layouts saved on a previous
    exit replace them (and the built-in presets) when restoring is enabled.
    """
    profiles = dict(config.profiles)
    if store is not None and config.restore_layouts:
        profiles.update(store.load())
    return ScreenManager(profiles=profiles, initial=profile or config.default_profile)


@click.group(invoke_without_command=True)
@click.option("--profile", "-p", default=None, help="Profile to start with (default: from config)")
@click.option("--debug-logging/--no-debug-logging", default=None, help="Enable debug logging to file")
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def main(ctx: click.Context, profile: str | None, debug_logging: bool | None, version: bool) -> None:
    """Panekit - a tmux-like pane manager for terminal debuggers."""
    if version:
        console.print(f"panekit v{__version__}")
        return

    # If no subcommand, run the main TUI
    if ctx.invoked_subcommand is None:
        config = load_config()
        # Apply CLI overrides (not saved to config file)
        if debug_logging is not None:
            config.debug_logging = debug_logging
        run_panes(config=config, profile=profile)


def run_panes(config: Config | None = None, profile: str | None = None) -> None:
    """Run the pane front end, saving layouts on the way out."""
    from .tui_textual import PaneApp

    if config is None:
        config = load_config()
    configure_logging(config.debug_logging)

    store = LayoutStore()
    try:
        screen = build_screen_manager(config, profile=profile, store=store)
    except LayoutError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    try:
        PaneApp(screen).run()
    except KeyboardInterrupt:
        pass
    finally:
        if config.restore_layouts:
            store.save_screen(screen)


@main.command()
@click.option("--profile", "-p", default=None, help="Profile to flatten (default: from config)")
@click.option("--width", "-W", type=click.IntRange(min=1), default=80, help="Viewport width in cells")
@click.option("--height", "-H", type=click.IntRange(min=1), default=24, help="Viewport height in cells")
@click.option("--full-screen", is_flag=True, help="Flatten as in full-screen mode")
def layout(profile: str | None, width: int, height: int, full_screen: bool) -> None:
    """Print the flattened layout of a profile.

    Examples:
      panekit layout                     # Default profile at 80x24
      panekit layout -p large -W 160 -H 48
      panekit layout -p large --full-screen
    """
    config = load_config()
    try:
        screen = build_screen_manager(config, profile=profile, store=LayoutStore())
    except LayoutError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    if full_screen:
        screen.toggle_full_screen()
    area = Rect(0, 0, width, height)

    table = Table(title=f"{screen.current_pane} ({width}x{height})")
    table.add_column("Id", justify="right")
    table.add_column("View")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Focused")
    for entry in screen.get_flattened_layout(area):
        rect = entry.rect
        table.add_row(
            str(entry.id),
            view_name(entry.view),
            str(rect.x),
            str(rect.y),
            str(rect.width),
            str(rect.height),
            "[green]*[/green]" if entry.focused else "",
        )
    console.print(table)


@main.command()
def profiles() -> None:
    """List available profiles."""
    config = load_config()
    try:
        screen = build_screen_manager(config, store=LayoutStore())
    except LayoutError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1)

    for name in screen.get_available_pane_profiles():
        marker = " [dim](default)[/dim]" if name == config.default_profile else ""
        count = len(screen.panes[name].pane_ids())
        console.print(f"  [cyan]{name:12}[/cyan] {count} pane{'s' if count != 1 else ''}{marker}")


@main.command()
@click.option("--default-profile", default=None, help="Profile to start with")
@click.option("--debug-logging/--no-debug-logging", default=None, help="Enable debug logging to file")
@click.option("--restore-layouts/--no-restore-layouts", default=None, help="Reopen profiles as they were left")
@click.option("--show", is_flag=True, help="Show current configuration")
def config(default_profile: str | None, debug_logging: bool | None, restore_layouts: bool | None, show: bool) -> None:
    """Configure Panekit settings.

    Examples:
      panekit config --default-profile large   # Start with the large preset
      panekit config --debug-logging           # Enable debug logging
      panekit config --show                    # Show current config
    """
    current_config = load_config()

    if show:
        console.print("\n[bold]Current Configuration:[/bold]")
        console.print(f"  Default Profile: [cyan]{current_config.default_profile}[/cyan]")
        console.print(f"  Debug Logging:   [cyan]{current_config.debug_logging}[/cyan]")
        console.print(f"  Restore Layouts: [cyan]{current_config.restore_layouts}[/cyan]")
        if current_config.profiles:
            console.print("\n[bold]User Profiles:[/bold]")
            for name in sorted(current_config.profiles):
                console.print(f"  [cyan]{name}[/cyan]")
        console.print(f"\nConfig file: [dim]{CONFIG_FILE}[/dim]")
        return

    if default_profile is None and debug_logging is None and restore_layouts is None:
        console.print("Use --default-profile, --debug-logging or --restore-layouts to change settings.")
        console.print("Use --show to view current configuration.")
        return

    if default_profile is not None:
        known = set(BUILTIN_PROFILES) | set(current_config.profiles)
        if default_profile not in known:
            console.print(f"[red]Error:[/red] Unknown profile '{default_profile}'")
            raise SystemExit(1)
        current_config.default_profile = default_profile
    if debug_logging is not None:
        current_config.debug_logging = debug_logging
    if restore_layouts is not None:
        current_config.restore_layouts = restore_layouts

    save_config(current_config)

    console.print("\n[green]Configuration saved![/green]")
    console.print(f"  Default Profile: [cyan]{current_config.default_profile}[/cyan]")
    console.print(f"  Debug Logging:   [cyan]{current_config.debug_logging}[/cyan]")
    console.print(f"  Restore Layouts: [cyan]{current_config.restore_layouts}[/cyan]")
    console.print(f"\nSaved to: [dim]{CONFIG_FILE}[/dim]")


if __name__ == "__main__":
    main()
