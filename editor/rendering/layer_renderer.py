"""
BMP Blend - Layer Renderer

Draws the map's hand-authored layers and the blender's tile layers onto an
off-screen map surface. After the first full draw, only rectangles reported
through the blender's region_altered signal are redrawn.
"""

import math
from typing import List, Optional, Tuple

import pygame
from pygame import Surface, Rect

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.constants import DEFAULT_TILE_WIDTH
from bmpblend.rendering.pil_renderer import ordered_layers

from editor.core.constants import BITMAP_OVERLAY_ALPHA
from editor.core.pygame_rendering import SurfaceCache, bitmap_to_surface, render_placeholder_tile


class LayerRenderer:
    """Keeps a pygame rendering of all tile layers in sync with a blender."""

    def __init__(self, blender: BmpBlender, surface_cache: Optional[SurfaceCache] = None):
        self.blender = blender
        self.surface_cache = surface_cache or SurfaceCache()
        self.map_surface: Optional[Surface] = None
        self.cell_size = 0
        self.dirty: List[Tuple[int, int, int, int]] = []

        blender.layers_recreated.connect(self.invalidate)
        blender.region_altered.connect(self.mark_dirty)

    def detach(self):
        self.blender.layers_recreated.disconnect(self.invalidate)
        self.blender.region_altered.disconnect(self.mark_dirty)

    def invalidate(self):
        """Force a full redraw on the next render."""
        self.map_surface = None
        self.dirty.clear()

    def mark_dirty(self, rect: Tuple[int, int, int, int]):
        if self.map_surface is not None:
            self.dirty.append(rect)

    def _tile_width(self) -> int:
        first = next(iter(self.blender.map.tilesets.values()), None)
        return first.tile_width if first else DEFAULT_TILE_WIDTH

    def _overhang_rows(self) -> int:
        """Rows a tall tile can reach above its own cell."""
        tilesets = self.blender.map.tilesets.values()
        cell_height = next(iter(tilesets)).tile_height if tilesets else 1
        tallest = max((ts.tile_height for ts in tilesets), default=cell_height)
        return max(0, math.ceil(tallest / cell_height) - 1)

    def update(self, cell_size: int) -> Surface:
        """
        Bring the map surface up to date and return it.

        A changed cell size or an invalidated surface redraws everything;
        otherwise only the dirty rectangles are redrawn.
        """
        bmp_map = self.blender.map
        if self.map_surface is None or cell_size != self.cell_size:
            self.cell_size = cell_size
            self.map_surface = Surface(
                (bmp_map.width * cell_size, bmp_map.height * cell_size), pygame.SRCALPHA
            )
            self.dirty = [(0, 0, bmp_map.width - 1, bmp_map.height - 1)]

        dirty, self.dirty = self.dirty, []
        for rect in dirty:
            self._draw_region(*rect)
        return self.map_surface

    def _draw_region(self, x1: int, y1: int, x2: int, y2: int):
        bmp_map = self.blender.map
        size = self.cell_size
        overhang = self._overhang_rows()
        tile_width = self._tile_width()

        top = max(0, y1 - overhang)
        clip = Rect(x1 * size, top * size, (x2 - x1 + 1) * size, (y2 - top + 1) * size)
        self.map_surface.set_clip(clip)
        self.map_surface.fill((0, 0, 0, 0), clip)

        layers = ordered_layers(bmp_map, self.blender.tile_layers())
        last_row = min(bmp_map.height - 1, y2 + overhang)
        for layer in layers:
            for y in range(top, last_row + 1):
                for x in range(x1, x2 + 1):
                    tile = layer.cell_at(x, y)
                    if tile is None:
                        continue
                    surf = self.surface_cache.tile_surface(tile, size, tile_width)
                    if surf is None:
                        surf = render_placeholder_tile(size)
                    # Tall tiles are anchored at the bottom of their cell
                    self.map_surface.blit(surf, (x * size, (y + 1) * size - surf.get_height()))

        self.map_surface.set_clip(None)

    def render(
        self,
        screen: Surface,
        canvas_rect: Rect,
        cell_size: int,
        offset_x: int,
        offset_y: int,
        bitmap_index: Optional[int] = None,
    ):
        """
        Blit the map onto the canvas.

        Args:
            screen: Pygame surface to draw on
            canvas_rect: Canvas area rectangle
            cell_size: Size of each cell in pixels
            offset_x: Horizontal scroll offset
            offset_y: Vertical scroll offset
            bitmap_index: If given, draw that bitmap translucently on top
        """
        map_surface = self.update(cell_size)

        screen.set_clip(canvas_rect)
        dest = (canvas_rect.x - offset_x, canvas_rect.y - offset_y)
        screen.blit(map_surface, dest)

        if bitmap_index is not None:
            overlay = bitmap_to_surface(self.blender.map.bmp(bitmap_index), cell_size)
            overlay.set_alpha(BITMAP_OVERLAY_ALPHA)
            screen.blit(overlay, dest)

        screen.set_clip(None)
