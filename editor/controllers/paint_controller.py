"""
BMP Blend - Paint Controller

Paints brush strokes into the selected bitmap and keeps the blender's tile
layers current by recomputing only the painted rectangle.
"""

from typing import Optional, Tuple

from bmpblend.core.bmp_blender import BmpBlender

from .editor_state import EditorState
from .undo_manager import UndoManager

Rect = Tuple[int, int, int, int]


def brush_rect(x: int, y: int, size: int) -> Rect:
    """Inclusive rectangle of a square brush centered on (x, y)."""
    half = (size - 1) // 2
    return (x - half, y - half, x - half + size - 1, y - half + size - 1)


class PaintController:
    """Applies brush strokes and eyedropper picks to a blender's map."""

    def __init__(self, blender: BmpBlender, state: EditorState, undo_manager: UndoManager):
        self.blender = blender
        self.state = state
        self.undo_manager = undo_manager

    def begin_stroke(self):
        """Snapshot the bitmaps so the whole stroke undoes as one step."""
        if self.blender.map is None:
            return
        self.undo_manager.push_state(self.blender.map)

    def paint_at(self, x: int, y: int) -> Optional[Rect]:
        """
        Paint the current brush at a cell and recompute the painted area.

        Returns:
            The painted rectangle (clamped to the map), or None when the brush
            lies outside the map or the cell was already painted this stroke
        """
        if self.blender.map is None:
            return None
        if self.state.last_paint_pos == (x, y):
            return None
        self.state.last_paint_pos = (x, y)

        bmp_map = self.blender.map
        painted = bmp_map.paint_bmp(
            self.state.bitmap_index,
            *brush_rect(x, y, self.state.brush_size),
            self.state.color,
        )
        if painted is None:
            return None

        self.blender.update(*painted)
        return painted

    def end_stroke(self):
        self.state.last_paint_pos = None

    def pick_color(self, x: int, y: int) -> Optional[int]:
        """Eyedropper: take the selected bitmap's color at a cell."""
        if self.blender.map is None:
            return None
        bitmap = self.blender.map.bmp(self.state.bitmap_index)
        if not bitmap.contains(x, y):
            return None
        color = bitmap.pixel(x, y)
        self.state.color = color
        return color

    def undo(self) -> bool:
        return self._restore(self.undo_manager.undo(self.blender.map))

    def redo(self) -> bool:
        return self._restore(self.undo_manager.redo(self.blender.map))

    def _restore(self, snapshot) -> bool:
        if snapshot is None:
            return False
        rect = self.undo_manager.restore(self.blender.map, snapshot)
        if rect is not None:
            self.blender.update(*rect)
        return True
