"""
BMP Blend - PIL Renderer

PIL-based rendering of map tile layers and painted bitmaps to images.
Used by the render tool to create static PNGs.
"""

from typing import Iterable, List, Optional, Tuple

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.bmp_map import BmpMap, MapBitmap
from ..core.constants import DEFAULT_TILE_HEIGHT, DEFAULT_TILE_WIDTH
from ..core.tileset import TileLayer


def ordered_layers(
    bmp_map: BmpMap, blender_layers: Iterable[TileLayer] = ()
) -> List[TileLayer]:
    """
    Merge the map's own layers with blender output layers in draw order.

    Layers are drawn by name ("0_Floor" before "0_FloorOverlay" before
    "0_Vegetation"); for equal names the map's layer is drawn first.
    """
    keyed: List[Tuple[str, int, TileLayer]] = []
    for layer in bmp_map.layers.values():
        keyed.append((layer.name, 0, layer))
    for layer in blender_layers:
        keyed.append((layer.name, 1, layer))
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [layer for _, _, layer in keyed]


def render_layers_to_image(
    bmp_map: BmpMap,
    layers: Iterable[TileLayer],
    tile_width: Optional[int] = None,
    tile_height: Optional[int] = None,
) -> Image.Image:
    """
    Render tile layers to a PIL Image.

    Args:
        bmp_map: Map the layers belong to (for its size and tilesets)
        layers: Layers to draw, bottom first
        tile_width: Cell width in pixels (default: first tileset's, or 32)
        tile_height: Cell height in pixels (default: first tileset's, or 32)

    Returns:
        RGBA PIL Image; cells without tiles are transparent
    """
    if tile_width is None or tile_height is None:
        first = next(iter(bmp_map.tilesets.values()), None)
        tile_width = tile_width or (first.tile_width if first else DEFAULT_TILE_WIDTH)
        tile_height = tile_height or (first.tile_height if first else DEFAULT_TILE_HEIGHT)

    img = Image.new("RGBA", (bmp_map.width * tile_width, bmp_map.height * tile_height), (0, 0, 0, 0))

    for layer in layers:
        for y in range(layer.height):
            for x in range(layer.width):
                tile = layer.cell_at(x, y)
                if tile is None:
                    continue
                tile_img = tile.image()
                if tile_img is None:
                    continue
                # Tall tiles are anchored at the bottom of their cell
                dest_y = (y + 1) * tile_height - tile_img.height
                img.alpha_composite(tile_img, dest=(x * tile_width, max(0, dest_y)))

    return img


def render_bitmap_to_image(bitmap: MapBitmap, scale: int = 1) -> Image.Image:
    """Render a painted bitmap, scaled up with nearest-neighbor sampling."""
    img = bitmap.to_image()
    if scale != 1:
        img = img.resize(
            (bitmap.width * scale, bitmap.height * scale), Image.Resampling.NEAREST
        )
    return img
