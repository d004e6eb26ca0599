"""
BMP Blend - Editor State

Manages application state including the bitmap being painted, the current
color and brush, view settings, and canvas position.
"""

from typing import Optional, Tuple

from bmpblend.core.constants import BLACK, MAIN_BITMAP, VEG_BITMAP

from editor.core.constants import BRUSH_SIZES, DEFAULT_CELL_SIZE, MAX_CELL_SIZE, MIN_CELL_SIZE


class EditorState:
    """Manages editor application state."""

    def __init__(self):
        # Which bitmap brushes paint into
        self.bitmap_index: int = MAIN_BITMAP

        # Current paint colors, one per bitmap
        self.colors: list[int] = [BLACK, BLACK]
        self.brush_index: int = 0

        # View settings
        self.show_grid: bool = False
        self.show_bitmap: bool = False

        # Canvas position and zoom
        self.canvas_offset_x: int = 0
        self.canvas_offset_y: int = 0
        self.cell_size: int = DEFAULT_CELL_SIZE

        # Mouse state
        self.mouse_down: bool = False
        self.last_paint_pos: Optional[Tuple[int, int]] = None

    @property
    def color(self) -> int:
        """Paint color for the selected bitmap."""
        return self.colors[self.bitmap_index]

    @color.setter
    def color(self, value: int):
        self.colors[self.bitmap_index] = value

    @property
    def brush_size(self) -> int:
        return BRUSH_SIZES[self.brush_index]

    def set_bitmap(self, bitmap_index: int):
        """Select the Main or Vegetation bitmap."""
        if bitmap_index in (MAIN_BITMAP, VEG_BITMAP):
            self.bitmap_index = bitmap_index

    def toggle_bitmap(self):
        self.set_bitmap(VEG_BITMAP if self.bitmap_index == MAIN_BITMAP else MAIN_BITMAP)

    def cycle_brush(self, step: int = 1):
        self.brush_index = (self.brush_index + step) % len(BRUSH_SIZES)

    def toggle_grid(self):
        """Toggle grid visibility."""
        self.show_grid = not self.show_grid

    def toggle_bitmap_overlay(self):
        """Toggle drawing the painted bitmap over the tiles."""
        self.show_bitmap = not self.show_bitmap

    def zoom(self, factor: float):
        self.cell_size = int(min(MAX_CELL_SIZE, max(MIN_CELL_SIZE, self.cell_size * factor)))

    def reset_canvas_position(self):
        """Reset canvas to origin."""
        self.canvas_offset_x = 0
        self.canvas_offset_y = 0
