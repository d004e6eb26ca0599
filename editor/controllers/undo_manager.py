"""
BMP Blend - Undo Manager

Manages undo/redo history of the painted bitmaps.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from bmpblend.core.bmp_map import BmpMap


@dataclass
class BitmapSnapshot:
    """Copies of both bitmaps' pixels at one point in the history."""

    pixels: List[np.ndarray]
    modified: bool


class UndoManager:
    """Manages undo/redo stacks for bitmap modifications."""

    def __init__(self, max_undo_levels: int = 50):
        """
        Initialize undo manager.

        Args:
            max_undo_levels: Maximum number of undo levels to keep (default: 50)
        """
        self.undo_stack: list[BitmapSnapshot] = []
        self.redo_stack: list[BitmapSnapshot] = []
        self.max_undo_levels = max_undo_levels

    def push_state(self, bmp_map: BmpMap):
        """
        Push current state onto undo stack before making changes.
        Clears redo stack when new action is taken.
        """
        self.undo_stack.append(self._create_snapshot(bmp_map))

        if len(self.undo_stack) > self.max_undo_levels:
            self.undo_stack.pop(0)

        self.redo_stack.clear()

    def can_undo(self) -> bool:
        return len(self.undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self.redo_stack) > 0

    def undo(self, bmp_map: BmpMap) -> Optional[BitmapSnapshot]:
        """
        Undo last action.

        Returns:
            Previous state, or None if no undo available
        """
        if not self.can_undo():
            return None
        self.redo_stack.append(self._create_snapshot(bmp_map))
        return self.undo_stack.pop()

    def redo(self, bmp_map: BmpMap) -> Optional[BitmapSnapshot]:
        """
        Redo last undone action.

        Returns:
            Next state, or None if no redo available
        """
        if not self.can_redo():
            return None
        self.undo_stack.append(self._create_snapshot(bmp_map))
        return self.redo_stack.pop()

    def restore(self, bmp_map: BmpMap, snapshot: BitmapSnapshot) -> Optional[Tuple[int, int, int, int]]:
        """
        Put a snapshot's pixels back into the map.

        Returns:
            Inclusive bounding rectangle of the cells that changed, or None
            if nothing did
        """
        changed = np.zeros((bmp_map.height, bmp_map.width), dtype=bool)
        for index, pixels in enumerate(snapshot.pixels):
            old = bmp_map.swap_bitmap_pixels(index, pixels.copy())
            changed |= old != pixels
        bmp_map.modified = snapshot.modified

        ys, xs = np.nonzero(changed)
        if len(xs) == 0:
            return None
        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def _create_snapshot(self, bmp_map: BmpMap) -> BitmapSnapshot:
        return BitmapSnapshot(
            [bitmap.copy_pixels() for bitmap in bmp_map.bitmaps],
            bmp_map.modified,
        )

    def clear(self):
        """Clear all undo/redo history."""
        self.undo_stack.clear()
        self.redo_stack.clear()
