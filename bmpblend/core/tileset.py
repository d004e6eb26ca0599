"""
BMP Blend - Tilesets and Tile Layers

Tilesets slice a tile sheet image into equally sized tiles. Tile layers hold
one tile reference (or nothing) per map cell. Both are rendering-agnostic;
drawing is left to the PIL and pygame renderers.
"""

from pathlib import Path
from typing import Dict, List, Optional

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from .constants import DEFAULT_TILE_HEIGHT, DEFAULT_TILE_WIDTH
from .tile_names import name_for_tile


class Tile:
    """One tile of a tileset."""

    def __init__(self, tileset: "Tileset", tile_id: int):
        self.tileset = tileset
        self.id = tile_id

    @property
    def name(self) -> str:
        return name_for_tile(self.tileset.name, self.id)

    def image(self) -> Optional[Image.Image]:
        return self.tileset.tile_image(self.id)

    def __repr__(self) -> str:
        return f"Tile({self.name})"


class Tileset:
    """
    A named sheet of tiles.

    Tiles are numbered left to right, top to bottom. A tileset may be created
    without an image (tile_count tiles, nothing to draw), which is how a map
    refers to a tileset whose sheet could not be found.
    """

    def __init__(
        self,
        name: str,
        image: Optional[Image.Image] = None,
        tile_width: int = DEFAULT_TILE_WIDTH,
        tile_height: int = DEFAULT_TILE_HEIGHT,
        tile_count: Optional[int] = None,
        image_source: Optional[str] = None,
    ):
        self.name = name
        self.image = image
        self.image_source = image_source
        self.tile_width = tile_width
        self.tile_height = tile_height

        if image is not None:
            self.columns = max(1, image.width // tile_width)
            rows = image.height // tile_height
            count = self.columns * rows
        else:
            self.columns = 1
            count = tile_count or 0

        self.tiles: List[Tile] = [Tile(self, i) for i in range(count)]
        self._image_cache: Dict[int, Image.Image] = {}

    @property
    def tile_count(self) -> int:
        return len(self.tiles)

    def tile_at(self, index: int) -> Optional[Tile]:
        """Tile at index, or None if out of range."""
        if 0 <= index < len(self.tiles):
            return self.tiles[index]
        return None

    def tile_image(self, index: int) -> Optional[Image.Image]:
        """Cropped RGBA image of one tile (cached)."""
        if self.image is None or self.tile_at(index) is None:
            return None
        if index in self._image_cache:
            return self._image_cache[index]

        col = index % self.columns
        row = index // self.columns
        box = (
            col * self.tile_width,
            row * self.tile_height,
            (col + 1) * self.tile_width,
            (row + 1) * self.tile_height,
        )
        img = self.image.crop(box).convert("RGBA")
        self._image_cache[index] = img
        return img

    def __repr__(self) -> str:
        return f"Tileset({self.name!r}, {self.tile_count} tiles)"


def load_tileset(
    path: str,
    name: Optional[str] = None,
    tile_width: int = DEFAULT_TILE_WIDTH,
    tile_height: int = DEFAULT_TILE_HEIGHT,
) -> Tileset:
    """
    Load a tileset from a tile sheet image.

    Args:
        path: Path to the sheet (PNG or any format Pillow reads)
        name: Tileset name; defaults to the file stem
        tile_width: Tile width in pixels
        tile_height: Tile height in pixels

    Raises:
        FileNotFoundError: If the image doesn't exist
    """
    sheet_path = Path(path)
    if not sheet_path.exists():
        raise FileNotFoundError(f"Tileset image not found: {sheet_path}")

    with Image.open(sheet_path) as img:
        image = img.convert("RGBA")

    return Tileset(
        name or sheet_path.stem,
        image,
        tile_width,
        tile_height,
        image_source=str(sheet_path),
    )


class TileLayer:
    """A width x height grid of tile references."""

    def __init__(self, name: str, width: int, height: int):
        self.name = name
        self.width = width
        self.height = height
        self._cells: List[List[Optional[Tile]]] = [
            [None] * width for _ in range(height)
        ]

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Optional[Tile]:
        if not self.contains(x, y):
            return None
        return self._cells[y][x]

    def set_cell(self, x: int, y: int, tile: Optional[Tile]):
        if self.contains(x, y):
            self._cells[y][x] = tile

    def is_empty(self) -> bool:
        return all(tile is None for row in self._cells for tile in row)

    def tile_names(self) -> List[List[str]]:
        """Tile names row by row, "" for empty cells."""
        return [[tile.name if tile else "" for tile in row] for row in self._cells]

    def used_tilesets(self) -> List[str]:
        """Names of tilesets referenced by any cell, sorted."""
        return sorted({tile.tileset.name for row in self._cells for tile in row if tile})

    def __repr__(self) -> str:
        return f"TileLayer({self.name!r}, {self.width}x{self.height})"
