"""Panekit - a tmux-like pane layout engine for terminal debugger front ends."""

try:
    from ._version import __version__
except ImportError:
    try:
        from importlib.metadata import version

        __version__ = version("panekit")
    except Exception:
        __version__ = "0.0.0+unknown"
