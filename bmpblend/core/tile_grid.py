"""
BMP Blend - Tile Name Grid

Dense width x height grid of resolved tile names for one output layer.
"""

from typing import List


class TileNameGrid:
    """Stores one tile name per cell; "" means no tile."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._rows: List[List[str]] = [[""] * width for _ in range(height)]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> str:
        """Tile name at (x, y), or "" outside the grid."""
        if not self.contains(x, y):
            return ""
        return self._rows[y][x]

    def replace(self, x: int, y: int, tile_name: str):
        """Set the tile name at (x, y); ignored outside the grid."""
        if self.contains(x, y):
            self._rows[y][x] = tile_name

    def clear(self):
        for row in self._rows:
            row[:] = [""] * self.width

    def is_empty(self) -> bool:
        return not any(name for row in self._rows for name in row)

    def rows(self) -> List[List[str]]:
        """Copy of the grid contents, row by row."""
        return [list(row) for row in self._rows]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TileNameGrid):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        return f"TileNameGrid({self.width}x{self.height})"
