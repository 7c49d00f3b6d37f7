"""Pane tree management: split, merge, focus navigation and flattening.

The tree is kept in an arena of nodes keyed by small integer indices. Every
node records the index of its parent, and split nodes record the indices of
their two children, so structural edits only rewrite a handful of indices and
the sibling of any pane is found in constant time.
"""

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Callable

from .errors import InvalidMergeError, InvalidOperationError, NotFoundError, UnmergeableError
from .geometry import Direction, Point, Rect, distance
from .layout import LARGE_SCREEN, SMALL_SCREEN, Layout, Leaf, Split, valid_ratio
from .models import Pane, PaneFlattened, ViewTag, is_terminal

logger = logging.getLogger(__name__)

# Used for focus navigation until the front end reports its real size
DEFAULT_VIEWPORT = Rect(0, 0, 80, 24)

# Predicates on the offset (dx, dy) from the focused pane's centre
_DIRECTIONS: dict[str, Callable[[float, float], bool]] = {
    "up": lambda dx, dy: dy < 0,
    "down": lambda dx, dy: dy > 0,
    "left": lambda dx, dy: dx < 0,
    "right": lambda dx, dy: dx > 0,
}


@dataclass
class LeafNode:
    pane: Pane
    parent: int | None = None


@dataclass
class SplitNode:
    direction: Direction
    ratio: tuple[int, int]
    first: int
    second: int
    parent: int | None = None


Node = LeafNode | SplitNode


class PaneManager:
    """Owns one pane tree and the pointer to its focused pane."""

    def __init__(self, layout: Layout = SMALL_SCREEN, viewport: Rect = DEFAULT_VIEWPORT) -> None:
        self._nodes: dict[int, Node] = {}
        self._leaves: dict[int, int] = {}  # pane id -> node index
        self._node_ids = itertools.count()
        self._pane_ids = itertools.count()
        self.viewport = viewport

        self._focused: int | None = None
        self._root = self._build(layout, None)
        if self._focused is None:
            self._focused = self.pane_ids()[0]

    @classmethod
    def from_layout(cls, layout: Layout, viewport: Rect = DEFAULT_VIEWPORT) -> "PaneManager":
        return cls(layout, viewport)

    @classmethod
    def default_small_screen(cls) -> "PaneManager":
        """A single terminal pane."""
        return cls(SMALL_SCREEN)

    @classmethod
    def default_large_screen(cls) -> "PaneManager":
        """Source, terminal, trace and variable panes with the terminal focused."""
        return cls(LARGE_SCREEN)

    def _build(self, layout: Layout, parent: int | None) -> int:
        index = next(self._node_ids)
        if isinstance(layout, Leaf):
            pane = Pane(next(self._pane_ids), layout.view)
            self._nodes[index] = LeafNode(pane, parent)
            self._leaves[pane.id] = index
            if layout.focused and self._focused is None:
                self._focused = pane.id
            return index

        if not valid_ratio(layout.ratio):
            raise InvalidOperationError(f"Invalid split ratio {layout.ratio!r}")
        # Children need the split's index, so reserve the slot first
        node = SplitNode(layout.direction, tuple(layout.ratio), -1, -1, parent)
        self._nodes[index] = node
        node.first = self._build(layout.first, index)
        node.second = self._build(layout.second, index)
        return index

    def to_layout(self) -> Layout:
        """Describe the current tree, including focus, as a layout literal."""
        return self._export(self._root)

    def _export(self, index: int) -> Layout:
        node = self._nodes[index]
        if isinstance(node, LeafNode):
            return Leaf(node.pane.view, focused=node.pane.id == self._focused)
        return Split(node.direction, node.ratio, self._export(node.first), self._export(node.second))

    # Lookup

    def _iter_leaves(self, start: int | None = None) -> Iterator[LeafNode]:
        """Yield leaves depth-first, first child before second."""
        stack = [self._root if start is None else start]
        while stack:
            node = self._nodes[stack.pop()]
            if isinstance(node, LeafNode):
                yield node
            else:
                stack.append(node.second)
                stack.append(node.first)

    def _leaf_index(self, pane_id: int) -> int:
        index = self._leaves.get(pane_id)
        if index is None:
            raise NotFoundError(f"No pane with id {pane_id}")
        return index

    def panes(self) -> list[Pane]:
        return [leaf.pane for leaf in self._iter_leaves()]

    def pane_ids(self) -> list[int]:
        return [leaf.pane.id for leaf in self._iter_leaves()]

    def get_pane(self, pane_id: int) -> Pane:
        return self._nodes[self._leaf_index(pane_id)].pane

    @property
    def focused(self) -> int:
        return self._focused

    def get_focused_pane(self) -> Pane:
        return self.get_pane(self._focused)

    def get_focused_view(self) -> ViewTag:
        return self.get_focused_pane().view

    def sibling_of(self, pane_id: int) -> int | None:
        """Return the pane sharing ``pane_id``'s split, if that sibling is a pane.

        Returns None for the root pane and when the sibling is a subtree.
        """
        node = self._nodes[self._leaf_index(pane_id)]
        if node.parent is None:
            return None
        parent = self._nodes[node.parent]
        sibling_index = parent.second if parent.first == self._leaves[pane_id] else parent.first
        sibling = self._nodes[sibling_index]
        return sibling.pane.id if isinstance(sibling, LeafNode) else None

    # Structural edits

    def _replace_child(self, parent: int | None, old: int, new: int) -> None:
        if parent is None:
            self._root = new
            return
        node = self._nodes[parent]
        if node.first == old:
            node.first = new
        else:
            node.second = new

    def split(self, pane_id: int, direction: Direction, ratio: tuple[int, int] = (1, 1)) -> int:
        """Split a pane in two and return the id of the new second pane.

        The original pane keeps its id and view and becomes the first child.
        The new pane starts out showing the same view.
        """
        index = self._leaf_index(pane_id)
        if not valid_ratio(ratio):
            raise InvalidOperationError(f"Invalid split ratio {ratio!r}")

        leaf = self._nodes[index]
        new_pane = Pane(next(self._pane_ids), leaf.pane.view)
        split_index = next(self._node_ids)
        new_index = next(self._node_ids)

        self._nodes[split_index] = SplitNode(direction, tuple(ratio), index, new_index, leaf.parent)
        self._nodes[new_index] = LeafNode(new_pane, split_index)
        self._leaves[new_pane.id] = new_index
        self._replace_child(leaf.parent, index, split_index)
        leaf.parent = split_index

        logger.debug("Split pane %d %s %s -> new pane %d", pane_id, direction.value, ratio, new_pane.id)
        return new_pane.id

    def _collapse(self, index: int) -> int:
        """Drop a leaf and let its sibling take the parent's place.

        Returns the sibling's node index.
        """
        node = self._nodes[index]
        parent_index = node.parent
        parent = self._nodes[parent_index]
        sibling_index = parent.second if parent.first == index else parent.first

        self._nodes[sibling_index].parent = parent.parent
        self._replace_child(parent.parent, parent_index, sibling_index)
        del self._nodes[parent_index]
        del self._nodes[index]
        del self._leaves[node.pane.id]
        return sibling_index

    def merge(self, a: int, b: int) -> None:
        """Merge sibling panes ``a`` and ``b`` into ``a``, discarding ``b``."""
        leaf_a = self._nodes[self._leaf_index(a)]
        leaf_b = self._nodes[self._leaf_index(b)]
        if a == b or leaf_a.parent is None or leaf_a.parent != leaf_b.parent:
            raise InvalidMergeError(f"Panes {a} and {b} are not siblings")
        if is_terminal(leaf_b.pane.view) and not is_terminal(leaf_a.pane.view):
            raise InvalidOperationError(f"Pane {b} shows the terminal and cannot be discarded")

        self._collapse(self._leaves[b])
        if self._focused == b:
            self._focused = a
        logger.debug("Merged pane %d into %d", b, a)

    def remove(self, pane_id: int) -> int:
        """Close a pane, letting its sibling take over its space.

        A pane sibling absorbs the closed pane exactly as ``merge`` would. A
        subtree sibling is promoted into the parent's place as a whole. If the
        closed pane had focus, focus moves to the pane of the sibling closest
        to where the closed pane was.

        Returns:
            The id of the focused pane afterwards.
        """
        index = self._leaf_index(pane_id)
        node = self._nodes[index]
        if is_terminal(node.pane.view):
            raise InvalidOperationError("Cannot close the terminal pane")
        if node.parent is None:
            raise UnmergeableError("Cannot close the last pane")

        sibling = self.sibling_of(pane_id)
        if sibling is not None:
            self.merge(sibling, pane_id)
            return self._focused

        was_focused = self._focused == pane_id
        closed_rect = self._rect_of(pane_id, self.viewport)
        subtree = self._collapse(index)
        if was_focused:
            placed = dict(self._leaf_rects(self.viewport))
            candidates = [leaf.pane for leaf in self._iter_leaves(subtree)]
            nearest = min(
                enumerate(candidates),
                key=lambda item: (distance(closed_rect, placed[item[1].id]), item[0]),
            )
            self._focused = nearest[1].id
        logger.debug("Removed pane %d, focus on %d", pane_id, self._focused)
        return self._focused

    # Geometry

    def set_viewport(self, area: Rect) -> None:
        self.viewport = area

    def _partition(self, index: int, area: Rect, out: list[tuple[int, Rect]]) -> None:
        node = self._nodes[index]
        if isinstance(node, LeafNode):
            out.append((node.pane.id, area))
            return
        first, second = area.split(node.direction, node.ratio)
        self._partition(node.first, first, out)
        self._partition(node.second, second, out)

    def _leaf_rects(self, area: Rect) -> list[tuple[int, Rect]]:
        placed: list[tuple[int, Rect]] = []
        self._partition(self._root, area, placed)
        return placed

    def _rect_of(self, pane_id: int, area: Rect) -> Rect:
        return dict(self._leaf_rects(area))[pane_id]

    def get_flattened_layout(self, area: Rect) -> list[PaneFlattened]:
        """Partition ``area`` among the panes, depth-first in tree order."""
        return [
            PaneFlattened(
                id=pane_id,
                view=self.get_pane(pane_id).view,
                rect=rect,
                focused=pane_id == self._focused,
            )
            for pane_id, rect in self._leaf_rects(area)
        ]

    # Focus

    def focus(self, pane_id: int) -> None:
        self._leaf_index(pane_id)
        self._focused = pane_id

    def focus_at(self, point: Point) -> bool:
        """Focus the pane under ``point``. Returns False if no pane is there."""
        for pane_id, rect in self._leaf_rects(self.viewport):
            if rect.contains(point):
                self._focused = pane_id
                return True
        return False

    def _focus_towards(self, direction: str) -> None:
        in_direction = _DIRECTIONS[direction]
        placed = self._leaf_rects(self.viewport)
        current = dict(placed)[self._focused]
        cx, cy = current.center

        best: tuple[tuple[float, int], int] | None = None
        for order, (pane_id, rect) in enumerate(placed):
            x, y = rect.center
            if not in_direction(x - cx, y - cy):
                continue
            key = (distance(current, rect), order)
            if best is None or key < best[0]:
                best = (key, pane_id)

        if best is not None:
            self._focused = best[1]

    def focus_up(self) -> None:
        self._focus_towards("up")

    def focus_down(self) -> None:
        self._focus_towards("down")

    def focus_left(self) -> None:
        self._focus_towards("left")

    def focus_right(self) -> None:
        self._focus_towards("right")

    def force_goto(self, view: ViewTag) -> None:
        """Show ``view`` in the focused pane."""
        self.get_focused_pane().set_view(view)

    def force_goto_by_view(self, view: ViewTag) -> None:
        """Focus a pane already showing ``view``, or show it in the focused pane."""
        for pane in self.panes():
            if pane.view == view:
                self._focused = pane.id
                return
        self.force_goto(view)
