"""Declarative layout literals.

A layout literal describes the shape of a pane tree without any ids. The
built-in presets are written as literals, user profiles in the config file
and saved layouts are stored as their dict form, and comparing the literals
of two managers compares their whole trees.
"""

from dataclasses import dataclass
from typing import Any

from .geometry import Direction
from .models import PaneView, ViewTag, parse_view, view_name


@dataclass(frozen=True)
class Leaf:
    """A pane showing ``view``. The first leaf marked ``focused`` gets focus."""

    view: ViewTag
    focused: bool = False


@dataclass(frozen=True)
class Split:
    """Two layouts dividing their parent's area along ``direction``."""

    direction: Direction
    ratio: tuple[int, int]
    first: "Layout"
    second: "Layout"


Layout = Leaf | Split


SMALL_SCREEN = Leaf(PaneView.TERMINAL, focused=True)

# Source over terminal on the left, trace over variables on the right
LARGE_SCREEN = Split(
    Direction.HORIZONTAL,
    (3, 2),
    Split(Direction.VERTICAL, (2, 1), Leaf(PaneView.SOURCE), Leaf(PaneView.TERMINAL, focused=True)),
    Split(Direction.VERTICAL, (1, 1), Leaf(PaneView.TRACE), Leaf(PaneView.VARIABLE)),
)


def valid_ratio(ratio: Any) -> bool:
    """Check that a ratio is a pair of positive integers."""
    if not isinstance(ratio, (tuple, list)) or len(ratio) != 2:
        return False
    return all(isinstance(r, int) and not isinstance(r, bool) and r > 0 for r in ratio)


def layout_to_dict(layout: Layout) -> dict[str, Any]:
    """Convert a layout literal to plain data for TOML or JSON."""
    if isinstance(layout, Leaf):
        data: dict[str, Any] = {"view": view_name(layout.view)}
        if layout.focused:
            data["focused"] = True
        return data
    return {
        "split": layout.direction.value,
        "ratio": list(layout.ratio),
        "first": layout_to_dict(layout.first),
        "second": layout_to_dict(layout.second),
    }


def layout_from_dict(data: dict[str, Any]) -> Layout:
    """Parse plain data produced by ``layout_to_dict`` or written by hand.

    Raises:
        ValueError: If the data does not describe a valid layout.
    """
    if not isinstance(data, dict):
        raise ValueError(f"layout node must be a table, got {type(data).__name__}")

    if "view" in data:
        view = data["view"]
        if not isinstance(view, str) or not view:
            raise ValueError(f"invalid view: {view!r}")
        return Leaf(parse_view(view), focused=bool(data.get("focused", False)))

    if "split" not in data:
        raise ValueError("layout node needs either 'view' or 'split'")
    try:
        direction = Direction(data["split"])
    except ValueError:
        raise ValueError(f"invalid split direction: {data['split']!r}")

    ratio = data.get("ratio", [1, 1])
    if not valid_ratio(ratio):
        raise ValueError(f"invalid ratio: {ratio!r}")

    if "first" not in data or "second" not in data:
        raise ValueError("split node needs 'first' and 'second'")
    return Split(
        direction,
        (ratio[0], ratio[1]),
        layout_from_dict(data["first"]),
        layout_from_dict(data["second"]),
    )
