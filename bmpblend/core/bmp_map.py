"""
BMP Blend - Map Data Model

Manages the painted Main/Vegetation bitmaps, their per-cell random values,
loaded tilesets, hand-authored tile layers and rule/blend settings.
Handles loading from and saving to JSON project files.
"""

import json
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from PIL import Image

from .constants import (
    BITMAP_NAMES,
    BLACK,
    DEFAULT_TILE_HEIGHT,
    DEFAULT_TILE_WIDTH,
    MAIN_BITMAP,
    RAND_MAX,
    VEG_BITMAP,
)
from .rules import BlendSet, RuleSet
from .tile_names import parse_tile_name
from .tileset import TileLayer, Tileset, load_tileset

logger = logging.getLogger(__name__)

Rect = Tuple[int, int, int, int]


class MapRands:
    """
    Per-cell random values for one bitmap.

    Values are drawn once from a generator seeded with `seed`, so the same
    seed always gives the same value at the same cell.
    """

    def __init__(self, width: int, height: int, seed: int):
        self.seed = seed
        rng = np.random.default_rng(seed)
        self.values = rng.integers(0, RAND_MAX, size=(height, width), dtype=np.int64)

    def rand(self, x: int, y: int) -> int:
        return int(self.values[y, x])


class MapBitmap:
    """A width x height grid of packed 0xRRGGBB pixels."""

    def __init__(self, width: int, height: int, seed: int = 0):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint32)
        self.rands = MapRands(width, height, seed)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> int:
        """Color at (x, y); black outside the bitmap."""
        if not self.contains(x, y):
            return BLACK
        return int(self.pixels[y, x])

    def set_pixel(self, x: int, y: int, color: int):
        if self.contains(x, y):
            self.pixels[y, x] = color

    def rand(self, x: int, y: int) -> int:
        return self.rands.rand(x, y)

    def load_image(self, image: Image.Image):
        """
        Replace the pixels with an image's RGB values.

        Raises:
            ValueError: If the image size doesn't match the bitmap
        """
        if image.size != (self.width, self.height):
            raise ValueError(
                f"Bitmap image is {image.width}x{image.height}, "
                f"expected {self.width}x{self.height}"
            )
        rgb = np.asarray(image.convert("RGB"), dtype=np.uint32)
        self.pixels = (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]

    def to_image(self) -> Image.Image:
        rgb = np.stack(
            [(self.pixels >> 16) & 0xFF, (self.pixels >> 8) & 0xFF, self.pixels & 0xFF],
            axis=-1,
        ).astype(np.uint8)
        return Image.fromarray(rgb)

    def copy_pixels(self) -> np.ndarray:
        return self.pixels.copy()


@dataclass
class BmpSettings:
    """Rule/blend tables a map was last configured with, and their files."""

    rules_file: str = ""
    blends_file: str = ""
    rules: RuleSet = field(default_factory=RuleSet)
    blends: BlendSet = field(default_factory=BlendSet)


class BmpMap:
    """Map document the blender reads from."""

    def __init__(self, width: int, height: int, seeds: Optional[Tuple[int, int]] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid map size {width}x{height}")
        if seeds is None:
            seeds = (random.randrange(RAND_MAX), random.randrange(RAND_MAX))

        self.width = width
        self.height = height
        self.bitmaps: List[MapBitmap] = [
            MapBitmap(width, height, seeds[MAIN_BITMAP]),
            MapBitmap(width, height, seeds[VEG_BITMAP]),
        ]
        self.tilesets: Dict[str, Tileset] = {}
        self.layers: Dict[str, TileLayer] = {}
        self.bmp_settings = BmpSettings()
        self.filepath: Optional[str] = None
        self.modified: bool = False

    # Bitmaps

    def bmp(self, bitmap_index: int) -> MapBitmap:
        return self.bitmaps[bitmap_index]

    def rand(self, bitmap_index: int, x: int, y: int) -> int:
        return self.bitmaps[bitmap_index].rand(x, y)

    def clamp_rect(self, x1: int, y1: int, x2: int, y2: int) -> Rect:
        """Clamp inclusive corners into the map."""
        return (
            min(max(x1, 0), self.width - 1),
            min(max(y1, 0), self.height - 1),
            min(max(x2, 0), self.width - 1),
            min(max(y2, 0), self.height - 1),
        )

    def paint_bmp(
        self, bitmap_index: int, x1: int, y1: int, x2: int, y2: int, color: int
    ) -> Optional[Rect]:
        """
        Fill an inclusive rectangle of a bitmap with one color.

        Returns:
            The clamped rectangle that was painted, or None if it lies
            entirely outside the map
        """
        if x2 < 0 or y2 < 0 or x1 >= self.width or y1 >= self.height:
            return None
        cx1, cy1, cx2, cy2 = self.clamp_rect(x1, y1, x2, y2)
        self.bitmaps[bitmap_index].pixels[cy1 : cy2 + 1, cx1 : cx2 + 1] = color
        self.modified = True
        return (cx1, cy1, cx2, cy2)

    def swap_bitmap_pixels(self, bitmap_index: int, pixels: np.ndarray) -> np.ndarray:
        """Replace a bitmap's pixels, returning the previous array."""
        bitmap = self.bitmaps[bitmap_index]
        if pixels.shape != bitmap.pixels.shape:
            raise ValueError(
                f"Pixel array shape {pixels.shape} doesn't match {bitmap.pixels.shape}"
            )
        old = bitmap.pixels
        bitmap.pixels = pixels
        self.modified = True
        return old

    # Tilesets and layers

    def tileset(self, name: str) -> Optional[Tileset]:
        return self.tilesets.get(name)

    def add_tileset(self, tileset: Tileset):
        self.tilesets[tileset.name] = tileset
        self.modified = True

    def remove_tileset(self, name: str) -> Optional[Tileset]:
        """Remove a tileset and clear every hand-authored cell using it."""
        tileset = self.tilesets.pop(name, None)
        if tileset is None:
            return None
        for layer in self.layers.values():
            for y in range(layer.height):
                for x in range(layer.width):
                    tile = layer.cell_at(x, y)
                    if tile is not None and tile.tileset is tileset:
                        layer.set_cell(x, y, None)
        self.modified = True
        return tileset

    def tile_for_name(self, tile_name: str):
        """Resolve a tile name against the loaded tilesets."""
        parsed = parse_tile_name(tile_name)
        if parsed is None:
            return None
        tileset = self.tilesets.get(parsed[0])
        if tileset is None:
            return None
        return tileset.tile_at(parsed[1])

    def layer(self, name: str) -> Optional[TileLayer]:
        return self.layers.get(name)

    def ensure_layer(self, name: str) -> TileLayer:
        if name not in self.layers:
            self.layers[name] = TileLayer(name, self.width, self.height)
        return self.layers[name]

    # Project files

    @classmethod
    def load(cls, path: str) -> "BmpMap":
        """
        Load a map from a JSON project file.

        Bitmap, rule, blend and tileset paths are resolved relative to the
        project file. Tileset images that can't be found are skipped with a
        warning; tiles using them resolve to nothing.

        Raises:
            FileNotFoundError: If the project file or a bitmap is missing
            ValueError: If the project is malformed
        """
        project_path = Path(path)
        if not project_path.exists():
            raise FileNotFoundError(f"Project file not found: {project_path}")

        with open(project_path) as f:
            data = json.load(f)

        base = project_path.parent
        try:
            width = int(data["width"])
            height = int(data["height"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Project {project_path} has no valid map size") from e

        seeds = data.get("seeds")
        bmp_map = cls(width, height, tuple(seeds) if seeds else None)

        for index, key in enumerate(BITMAP_NAMES):
            rel = data.get("bitmaps", {}).get(key)
            if not rel:
                continue
            bmp_path = base / rel
            if not bmp_path.exists():
                raise FileNotFoundError(f"Bitmap not found: {bmp_path}")
            with Image.open(bmp_path) as img:
                bmp_map.bitmaps[index].load_image(img)

        for ts_data in data.get("tilesets", []):
            image_path = base / ts_data["image"]
            try:
                tileset = load_tileset(
                    str(image_path),
                    ts_data.get("name"),
                    ts_data.get("tile_width", DEFAULT_TILE_WIDTH),
                    ts_data.get("tile_height", DEFAULT_TILE_HEIGHT),
                )
            except FileNotFoundError as e:
                logger.warning("Skipping tileset: %s", e)
                continue
            bmp_map.tilesets[tileset.name] = tileset

        for layer_name, rows in data.get("layers", {}).items():
            layer = bmp_map.ensure_layer(layer_name)
            for y, row in enumerate(rows[:height]):
                for x, tile_name in enumerate(row[:width]):
                    if tile_name:
                        layer.set_cell(x, y, bmp_map.tile_for_name(tile_name))

        settings = bmp_map.bmp_settings
        if data.get("rules"):
            settings.rules_file = str(base / data["rules"])
        if data.get("blends"):
            settings.blends_file = str(base / data["blends"])

        bmp_map.filepath = str(project_path)
        bmp_map.modified = False
        return bmp_map

    def save(self, path: Optional[str] = None):
        """
        Save the map to a JSON project file.

        Bitmaps are written as PNG files next to the project file.
        """
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        project_path = Path(path)
        base = project_path.parent

        bitmaps: Dict[str, str] = {}
        for index, key in enumerate(BITMAP_NAMES):
            bmp_name = f"{project_path.stem}_{key}.png"
            self.bitmaps[index].to_image().save(base / bmp_name)
            bitmaps[key] = bmp_name

        data: Dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "seeds": [bitmap.rands.seed for bitmap in self.bitmaps],
            "bitmaps": bitmaps,
            "rules": _relative_to(self.bmp_settings.rules_file, base),
            "blends": _relative_to(self.bmp_settings.blends_file, base),
            "tilesets": [
                {
                    "name": ts.name,
                    "image": _relative_to(ts.image_source or "", base),
                    "tile_width": ts.tile_width,
                    "tile_height": ts.tile_height,
                }
                for ts in self.tilesets.values()
            ],
            "layers": {name: layer.tile_names() for name, layer in self.layers.items()},
        }

        with open(project_path, "w") as f:
            json.dump(data, f, indent=2)

        self.filepath = str(project_path)
        self.modified = False


def _relative_to(path: str, base: Path) -> str:
    if not path:
        return ""
    try:
        return str(Path(path).resolve().relative_to(base.resolve()))
    except ValueError:
        return str(path)
