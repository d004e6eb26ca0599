"""
BMP Blend - Pygame Rendering

Converts Pillow tile images into pygame Surfaces, caching one Surface per
tile and cell size.
"""

from typing import Optional

import pygame
from pygame import Surface

from bmpblend.core.bmp_map import MapBitmap
from bmpblend.core.tileset import Tile


_placeholder_cache: dict[int, Surface] = {}


def render_placeholder_tile(size: int) -> Surface:
    """Checkered square drawn where a cell names a tile that can't be found."""
    if size in _placeholder_cache:
        return _placeholder_cache[size]

    surf = Surface((size, size))
    gray1 = (100, 100, 100)
    gray2 = (140, 140, 140)
    checker_size = max(1, size // 4)

    for row in range(4):
        for col in range(4):
            color = gray1 if (row + col) % 2 == 0 else gray2
            rect = (col * checker_size, row * checker_size, checker_size, checker_size)
            pygame.draw.rect(surf, color, rect)

    _placeholder_cache[size] = surf
    return surf


def pil_to_surface(image) -> Surface:
    """Convert a Pillow image to an RGBA pygame Surface."""
    rgba = image.convert("RGBA")
    return pygame.image.frombytes(rgba.tobytes(), rgba.size, "RGBA")


class SurfaceCache:
    """Scaled pygame Surfaces for tiles, keyed by tileset, tile index and scale."""

    def __init__(self):
        self._cache: dict[tuple[str, int, int], Surface] = {}

    def tile_surface(self, tile: Tile, cell_size: int, tile_width: int) -> Optional[Surface]:
        """
        Surface for a tile at the current cell size.

        Tiles keep their aspect ratio, so tall tiles stay taller than a cell.

        Args:
            tile: Tile to convert
            cell_size: On-screen cell width in pixels
            tile_width: Tile width the map's cells are laid out with

        Returns:
            The scaled Surface, or None if the tile has no image
        """
        cache_key = (tile.tileset.name, tile.id, cell_size)
        if cache_key in self._cache:
            return self._cache[cache_key]

        image = tile.image()
        if image is None:
            return None

        surf = pil_to_surface(image)
        if cell_size != tile_width:
            scale = cell_size / tile_width
            size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
            surf = pygame.transform.scale(surf, size)

        self._cache[cache_key] = surf
        return surf

    def forget_tileset(self, tileset_name: str):
        """Drop cached Surfaces of a tileset that was removed or reloaded."""
        for key in [key for key in self._cache if key[0] == tileset_name]:
            del self._cache[key]

    def clear(self):
        self._cache.clear()


def bitmap_to_surface(bitmap: MapBitmap, cell_size: int) -> Surface:
    """Render a bitmap as one colored square per cell."""
    surf = pil_to_surface(bitmap.to_image())
    return pygame.transform.scale(surf, (bitmap.width * cell_size, bitmap.height * cell_size))
