"""Screen geometry in terminal cells."""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Axis along which a split divides its area."""
    HORIZONTAL = "horizontal"  # Children side by side, width is divided
    VERTICAL = "vertical"  # Children stacked, height is divided


@dataclass(frozen=True)
class Point:
    """A cell position on screen."""

    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        """Centre of the rectangle, may fall between cells."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, point: Point) -> bool:
        """Check if a cell lies inside the rectangle."""
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )

    def split(self, direction: Direction, ratio: tuple[int, int]) -> tuple["Rect", "Rect"]:
        """Divide the rectangle in two along ``direction`` by ``ratio``.

        The first part gets ``extent * a // (a + b)`` cells and the second
        part the rest, so the integer remainder always lands in the second.
        """
        a, b = ratio
        if direction == Direction.HORIZONTAL:
            first_width = self.width * a // (a + b)
            return (
                Rect(self.x, self.y, first_width, self.height),
                Rect(self.x + first_width, self.y, self.width - first_width, self.height),
            )
        first_height = self.height * a // (a + b)
        return (
            Rect(self.x, self.y, self.width, first_height),
            Rect(self.x, self.y + first_height, self.width, self.height - first_height),
        )


def distance(a: Rect, b: Rect) -> float:
    """Euclidean distance between the centres of two rectangles."""
    (ax, ay), (bx, by) = a.center, b.center
    return ((ax - bx) ** 2 + (ay - by) ** 2) ** 0.5
