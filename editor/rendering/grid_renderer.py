"""
BMP Blend - Grid Renderer

Cell grid and brush footprint overlays for the canvas.
"""

from typing import Tuple

import pygame
from pygame import Surface, Rect

from editor.core.constants import COLOR_GRID, COLOR_SELECTION


def cell_rect_to_screen(
    canvas_rect: Rect,
    cells: Tuple[int, int, int, int],
    cell_size: int,
    offset_x: int,
    offset_y: int,
) -> Rect:
    """Screen rectangle covering an inclusive (x1, y1, x2, y2) cell rectangle."""
    x1, y1, x2, y2 = cells
    return Rect(
        canvas_rect.x + x1 * cell_size - offset_x,
        canvas_rect.y + y1 * cell_size - offset_y,
        (x2 - x1 + 1) * cell_size,
        (y2 - y1 + 1) * cell_size,
    )


class GridRenderer:
    """Draws the map's cell lines and the brush outline."""

    @staticmethod
    def render(
        screen: Surface,
        canvas_rect: Rect,
        width: int,
        height: int,
        cell_size: int,
        offset_x: int,
        offset_y: int,
    ):
        """
        Draw one line per cell edge, stopping at the map's far edge.

        Args:
            width: Map width in cells
            height: Map height in cells
            cell_size: Cell size in pixels
            offset_x: Horizontal scroll offset
            offset_y: Vertical scroll offset
        """
        map_area = cell_rect_to_screen(
            canvas_rect, (0, 0, width - 1, height - 1), cell_size, offset_x, offset_y
        ).clip(canvas_rect)
        if map_area.width == 0 or map_area.height == 0:
            return

        first_col = max(0, offset_x // cell_size)
        first_row = max(0, offset_y // cell_size)

        for col in range(first_col, width + 1):
            x = canvas_rect.x + col * cell_size - offset_x
            if x > map_area.right:
                break
            pygame.draw.line(screen, COLOR_GRID, (x, map_area.top), (x, map_area.bottom))

        for row in range(first_row, height + 1):
            y = canvas_rect.y + row * cell_size - offset_y
            if y > map_area.bottom:
                break
            pygame.draw.line(screen, COLOR_GRID, (map_area.left, y), (map_area.right, y))

    @staticmethod
    def render_brush(
        screen: Surface,
        canvas_rect: Rect,
        cells: Tuple[int, int, int, int],
        cell_size: int,
        offset_x: int,
        offset_y: int,
    ):
        """Outline the cells the next brush dab would paint."""
        outline = cell_rect_to_screen(canvas_rect, cells, cell_size, offset_x, offset_y)
        previous_clip = screen.get_clip()
        screen.set_clip(canvas_rect)
        pygame.draw.rect(screen, COLOR_SELECTION, outline, 1)
        screen.set_clip(previous_clip)
