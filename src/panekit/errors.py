"""Errors raised by pane and screen managers.

All of them are expected conditions: the event loop reports the message to
the user and keeps running.
"""


class LayoutError(Exception):
    """Base class for recoverable layout errors."""


class NotFoundError(LayoutError):
    """Raised when a pane id or profile name does not exist."""


class InvalidMergeError(LayoutError):
    """Raised when two panes to merge are not direct siblings."""


class InvalidOperationError(LayoutError):
    """Raised for edits that are structurally impossible or forbidden.

    Closing a terminal pane or splitting with a non-positive ratio both
    end up here.
    """


class InvalidStateError(LayoutError):
    """Raised when an action is not allowed in the current screen mode."""


class UnmergeableError(LayoutError):
    """Raised when closing the last remaining pane."""
