"""
Core engine.

This package contains the map and bitmap model, rule/blend tables, tile name
grids, tilesets and the bitmap blender itself.
"""

from .bmp_map import BmpMap, BmpSettings, MapBitmap, MapRands
from .rules import Blend, BlendSet, Direction, Rule, RuleSet
from .tile_grid import TileNameGrid
from .tileset import Tile, TileLayer, Tileset, load_tileset
from .bmp_blender import BmpBlender

__all__ = [
    "BmpMap",
    "BmpSettings",
    "MapBitmap",
    "MapRands",
    "Blend",
    "BlendSet",
    "Direction",
    "Rule",
    "RuleSet",
    "TileNameGrid",
    "Tile",
    "TileLayer",
    "Tileset",
    "load_tileset",
    "BmpBlender",
]
