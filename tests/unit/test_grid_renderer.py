"""Unit tests for the canvas grid and brush overlays."""

from pygame import Rect, Surface

from editor.core.constants import COLOR_GRID, COLOR_SELECTION
from editor.rendering.grid_renderer import GridRenderer, cell_rect_to_screen


def test_cell_rect_to_screen_applies_scroll():
    canvas = Rect(200, 40, 400, 300)
    assert cell_rect_to_screen(canvas, (1, 2, 3, 2), 10, 5, 0) == Rect(205, 60, 30, 10)


class TestGridRenderer:
    def test_lines_stop_at_map_edge(self):
        screen = Surface((100, 100))
        GridRenderer.render(screen, Rect(0, 0, 100, 100), 2, 2, 10, 0, 0)

        assert tuple(screen.get_at((0, 5)))[:3] == COLOR_GRID
        assert tuple(screen.get_at((10, 5)))[:3] == COLOR_GRID
        assert tuple(screen.get_at((5, 20)))[:3] == COLOR_GRID
        assert tuple(screen.get_at((50, 5)))[:3] == (0, 0, 0)
        assert tuple(screen.get_at((5, 50)))[:3] == (0, 0, 0)

    def test_map_scrolled_out_of_view(self):
        screen = Surface((50, 50))
        GridRenderer.render(screen, Rect(0, 0, 50, 50), 2, 2, 10, 500, 0)
        assert tuple(screen.get_at((0, 0)))[:3] == (0, 0, 0)

    def test_brush_outline(self):
        screen = Surface((100, 100))
        GridRenderer.render_brush(screen, Rect(0, 0, 100, 100), (1, 1, 2, 2), 10, 0, 0)

        assert tuple(screen.get_at((10, 15)))[:3] == COLOR_SELECTION
        assert tuple(screen.get_at((15, 15)))[:3] == (0, 0, 0)
        assert screen.get_clip() == Rect(0, 0, 100, 100)
