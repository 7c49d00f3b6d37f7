"""Tests for geometry helpers and layout literals."""

import pytest

from panekit.geometry import Direction, Point, Rect
from panekit.layout import LARGE_SCREEN, SMALL_SCREEN, Leaf, Split, layout_from_dict, layout_to_dict, valid_ratio
from panekit.models import PaneView


class TestRect:
    def test_split_horizontal_divides_width(self):
        first, second = Rect(2, 3, 81, 10).split(Direction.HORIZONTAL, (1, 1))
        assert first == Rect(2, 3, 40, 10)
        assert second == Rect(42, 3, 41, 10)

    def test_split_vertical_divides_height(self):
        first, second = Rect(0, 0, 10, 24).split(Direction.VERTICAL, (2, 1))
        assert first == Rect(0, 0, 10, 16)
        assert second == Rect(0, 16, 10, 8)

    def test_split_tiny_area(self):
        first, second = Rect(0, 0, 1, 1).split(Direction.HORIZONTAL, (1, 1))
        assert first.width == 0
        assert second == Rect(0, 0, 1, 1)

    def test_contains_excludes_far_edge(self):
        rect = Rect(10, 5, 4, 2)
        assert rect.contains(Point(10, 5))
        assert rect.contains(Point(13, 6))
        assert not rect.contains(Point(14, 6))
        assert not rect.contains(Point(13, 7))


class TestValidRatio:
    @pytest.mark.parametrize("ratio", [(1, 1), [3, 2], (100, 1)])
    def test_valid(self, ratio):
        assert valid_ratio(ratio)

    @pytest.mark.parametrize("ratio", [(0, 1), (1, 0), (-1, 2), (1.0, 1), (1, 2, 3), "11", None, (False, 1)])
    def test_invalid(self, ratio):
        assert not valid_ratio(ratio)


class TestLayoutDicts:
    def test_large_preset_round_trip(self):
        assert layout_from_dict(layout_to_dict(LARGE_SCREEN)) == LARGE_SCREEN

    def test_leaf_dict_form(self):
        assert layout_to_dict(SMALL_SCREEN) == {"view": "terminal", "focused": True}
        assert layout_to_dict(Leaf(PaneView.TRACE)) == {"view": "trace"}

    def test_custom_view_names_survive(self):
        layout = layout_from_dict({"view": "disassembly"})
        assert layout == Leaf("disassembly")
        assert layout_to_dict(layout) == {"view": "disassembly"}

    def test_ratio_defaults_to_even(self):
        layout = layout_from_dict({
            "split": "vertical",
            "first": {"view": "source"},
            "second": {"view": "terminal"},
        })
        assert layout == Split(Direction.VERTICAL, (1, 1), Leaf(PaneView.SOURCE), Leaf(PaneView.TERMINAL))

    @pytest.mark.parametrize("data", [
        {},
        {"view": ""},
        {"split": "diagonal", "first": {"view": "source"}, "second": {"view": "trace"}},
        {"split": "vertical", "ratio": [0, 1], "first": {"view": "source"}, "second": {"view": "trace"}},
        {"split": "vertical", "first": {"view": "source"}},
        {"split": "vertical", "first": {"view": "source"}, "second": "trace"},
    ])
    def test_invalid_layouts(self, data):
        with pytest.raises(ValueError):
            layout_from_dict(data)
