"""
BMP Blend - Bitmap Blender

Turns the painted Main and Vegetation bitmaps into named tile layers.

Algorithm:
    1. Classify: match each cell's Main color (and Vegetation color, with
       an optional Main-color condition) against the rule table and pick
       one of the rule's tile choices with the cell's random value.
    2. Blend: for every blend layer, look at the resolved "0_Floor" tile
       names around each cell and overlay the last matching blend's tile.
    3. Materialize: resolve tile names against the map's tilesets into
       tile layers.

update() reruns the three passes over a rectangle plus a one-cell halo,
producing the same cells as a full recreate().
"""

import logging
from typing import Dict, List, Optional, Set

from .bmp_map import BmpMap
from .constants import BLACK, FLOOR_LAYER, MAIN_BITMAP, VEG_BITMAP
from .rules import DIRECTION_OFFSETS, Blend, BlendSet, RuleSet
from .signals import Signal
from .tile_grid import TileNameGrid
from .tile_names import parse_tile_name
from .tileset import Tile, TileLayer, Tileset
from ..formats.blends_file import read_blends_file
from ..formats.errors import BmpFileError
from ..formats.rules_file import read_rules_file

logger = logging.getLogger(__name__)

# 8-connected neighbor offsets
NEIGHBOR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class BmpBlender:
    """
    Rule/blend engine for one map.

    Signals:
        layers_recreated(): the tile layer objects were replaced
        region_altered(rect): cells inside the inclusive (x1, y1, x2, y2)
            rectangle were rewritten
        warnings_changed(): warnings() changed
    """

    def __init__(self, bmp_map: Optional[BmpMap] = None):
        self.map: Optional[BmpMap] = None
        self.rules = RuleSet()
        self.blends = BlendSet()
        self.error_string = ""

        self._tile_name_grids: Dict[str, TileNameGrid] = {}
        self._tile_layers: Dict[str, TileLayer] = {}
        self._warnings: Set[str] = set()

        self.layers_recreated = Signal()
        self.region_altered = Signal()
        self.warnings_changed = Signal()

        if bmp_map is not None:
            self.set_map(bmp_map)

    def set_map(self, bmp_map: BmpMap):
        """Attach to a map and take its rule/blend settings."""
        self.map = bmp_map
        self._tile_name_grids.clear()
        self._tile_layers.clear()
        self.from_map()

    def from_map(self):
        """Reload the rule and blend tables from the map's settings."""
        if self.map is None:
            return
        self.rules = self.map.bmp_settings.rules
        self.blends = self.map.bmp_settings.blends
        self.update_warnings()

    # Loading

    def read(self, rules_path: str, blends_path: str) -> bool:
        """
        Load rule and blend files and rebuild all layers.

        Both files must parse; otherwise error_string describes the failure
        and the current tables stay in use.

        Returns:
            True on success
        """
        try:
            rules = read_rules_file(rules_path)
            blends = read_blends_file(blends_path)
        except BmpFileError as e:
            return self._load_failed(e)
        self.set_tables(rules, blends, rules_path, blends_path)
        return True

    def read_rules(self, path: str) -> bool:
        """Load only a rules file; see read()."""
        try:
            rules = read_rules_file(path)
        except BmpFileError as e:
            return self._load_failed(e)
        self.set_tables(rules, self.blends, rules_file=path)
        return True

    def read_blends(self, path: str) -> bool:
        """Load only a blends file; see read()."""
        try:
            blends = read_blends_file(path)
        except BmpFileError as e:
            return self._load_failed(e)
        self.set_tables(self.rules, blends, blends_file=path)
        return True

    def _load_failed(self, error: BmpFileError) -> bool:
        self.error_string = str(error)
        logger.warning("Rule/blend load failed: %s", self.error_string)
        return False

    def set_tables(
        self,
        rules: RuleSet,
        blends: BlendSet,
        rules_file: Optional[str] = None,
        blends_file: Optional[str] = None,
    ):
        """Store new tables in the map's settings and rebuild all layers."""
        self.error_string = ""
        if self.map is None:
            self.rules = rules
            self.blends = blends
            return
        settings = self.map.bmp_settings
        settings.rules = rules
        settings.blends = blends
        if rules_file is not None:
            settings.rules_file = rules_file
        if blends_file is not None:
            settings.blends_file = blends_file
        self.from_map()
        self.recreate()

    # Layer access

    def rule_layers(self) -> List[str]:
        return self.rules.layers

    def blend_layers(self) -> List[str]:
        return self.blends.layers

    def _layer_names(self) -> List[str]:
        names = self.rules.layers
        names += [name for name in self.blends.layers if name not in names]
        return names

    def tile_layer_names(self) -> List[str]:
        return sorted(self._tile_layers)

    def tile_layers(self) -> List[TileLayer]:
        """Output tile layers in layer-name order."""
        return [self._tile_layers[name] for name in self.tile_layer_names()]

    def tile_layer(self, name: str) -> Optional[TileLayer]:
        return self._tile_layers.get(name)

    def tile_name_grid(self, name: str) -> Optional[TileNameGrid]:
        return self._tile_name_grids.get(name)

    def tile_name_at(self, layer: str, x: int, y: int) -> str:
        grid = self._tile_name_grids.get(layer)
        return grid.at(x, y) if grid is not None else ""

    # Recompute

    def recreate(self):
        """Drop every grid and tile layer and rebuild the whole map."""
        self._tile_name_grids.clear()
        self._tile_layers.clear()
        if self.map is None:
            return
        self.update(0, 0, self.map.width, self.map.height)
        logger.debug(
            "Recreated %d layers for %dx%d map",
            len(self._tile_layers), self.map.width, self.map.height,
        )

    def update(self, x1: int, y1: int, x2: int, y2: int):
        """
        Recompute the inclusive rectangle (x1, y1)-(x2, y2).

        The classifier widens the rectangle by one cell itself. Blending and
        materializing are given the same one-cell halo, so blends just outside
        the rectangle that depend on a changed neighbor are refreshed and
        written out too.
        """
        if self.map is None:
            return
        self.images_to_tile_names(x1, y1, x2, y2)
        self.blend(x1 - 1, y1 - 1, x2 + 1, y2 + 1)
        self.tile_names_to_layers(x1 - 1, y1 - 1, x2 + 1, y2 + 1)
        self.region_altered.emit(self.map.clamp_rect(x1 - 1, y1 - 1, x2 + 1, y2 + 1))

    def _ensure_grids(self):
        if self._tile_name_grids:
            return
        for name in self._layer_names():
            self._tile_name_grids[name] = TileNameGrid(self.map.width, self.map.height)

    def _adjacent_to_non_black(self, x: int, y: int) -> bool:
        main = self.map.bmp(MAIN_BITMAP)
        veg = self.map.bmp(VEG_BITMAP)
        for dx, dy in NEIGHBOR_OFFSETS:
            if main.pixel(x + dx, y + dy) != BLACK or veg.pixel(x + dx, y + dy) != BLACK:
                return True
        return False

    def _painted_floor_color(self, x: int, y: int, floor_layer: TileLayer) -> Optional[int]:
        """
        Color of the floor rule whose tiles include the hand-painted tile.

        Lets a tile painted directly on the map's 0_Floor layer act as if its
        color had been painted, once the cell borders painted pixels.
        """
        tile = floor_layer.cell_at(x, y)
        if tile is None or not self._adjacent_to_non_black(x, y):
            return None
        color = None
        for rule in self.rules.floor_rules:
            if tile.name in rule.tile_choices:
                color = rule.color
        return color

    def images_to_tile_names(self, x1: int, y1: int, x2: int, y2: int):
        """Classify the rectangle plus a one-cell halo into rule-layer tile names."""
        self._ensure_grids()

        x1, y1, x2, y2 = self.map.clamp_rect(x1 - 1, y1 - 1, x2 + 1, y2 + 1)

        main = self.map.bmp(MAIN_BITMAP)
        veg = self.map.bmp(VEG_BITMAP)
        floor_layer = self.map.layer(FLOOR_LAYER)
        if not self.rules.floor_rules:
            floor_layer = None
        rule_grids = [
            self._tile_name_grids[name]
            for name in self.rules.layers
            if name in self._tile_name_grids
        ]

        for y in range(y1, y2 + 1):
            for x in range(x1, x2 + 1):
                for grid in rule_grids:
                    grid.replace(x, y, "")

                col_main = main.pixel(x, y)
                col_veg = veg.pixel(x, y)

                col_rules = col_main
                if floor_layer is not None and col_main == BLACK:
                    painted = self._painted_floor_color(x, y, floor_layer)
                    if painted is not None:
                        col_rules = painted

                for rule in self.rules.rules_for_color(col_rules):
                    if rule.bitmap_index != MAIN_BITMAP:
                        continue
                    grid = self._tile_name_grids.get(rule.target_layer)
                    if grid is not None:
                        grid.replace(x, y, rule.choose(main.rand(x, y)))

                if col_veg == BLACK:
                    continue
                for rule in self.rules.rules_for_color(col_veg):
                    if rule.bitmap_index != VEG_BITMAP:
                        continue
                    if rule.condition != col_main and rule.condition != BLACK:
                        continue
                    grid = self._tile_name_grids.get(rule.target_layer)
                    if grid is not None:
                        grid.replace(x, y, rule.choose(veg.rand(x, y)))

    def blend(self, x1: int, y1: int, x2: int, y2: int):
        """Recompute blend-layer tile names from the 0_Floor names."""
        floor = self._tile_name_grids.get(FLOOR_LAYER)
        if floor is None:
            return

        x1, y1, x2, y2 = self.map.clamp_rect(x1, y1, x2, y2)
        blend_grids = [
            (name, self._tile_name_grids[name])
            for name in self.blends.layers
            if name in self._tile_name_grids
        ]

        for y in range(y1, y2 + 1):
            for x in range(x1, x2 + 1):
                tile_name = floor.at(x, y)
                for layer_name, grid in blend_grids:
                    blend = self.get_blend_rule(x, y, tile_name, layer_name)
                    grid.replace(x, y, blend.blend_tile if blend else "")

    def _neighbouring_tile(self, x: int, y: int) -> str:
        floor = self._tile_name_grids.get(FLOOR_LAYER)
        if floor is None:
            return ""
        return floor.at(x, y)

    def get_blend_rule(self, x: int, y: int, tile_name: str, layer: str) -> Optional[Blend]:
        """
        Find the blend to apply at (x, y) on one blend layer.

        A tile never blends with itself or with a tile on the blend's
        exclusion list. When several blends match, the one declared last
        in the blends file wins.
        """
        last_blend = None
        if not tile_name:
            return last_blend

        for blend in self.blends.blends_for_layer(layer):
            if blend.target_layer != layer:
                continue
            if not blend.main_tile or tile_name == blend.main_tile:
                continue
            if tile_name in blend.exclusion_list:
                continue
            if all(
                self._neighbouring_tile(x + dx, y + dy) == blend.main_tile
                for dx, dy in DIRECTION_OFFSETS[blend.direction]
            ):
                last_blend = blend

        return last_blend

    def tile_names_to_layers(self, x1: int, y1: int, x2: int, y2: int):
        """Resolve tile names in the rectangle into tile layer cells."""
        recreated = False
        if not self._tile_layers:
            for name in self._layer_names():
                self._tile_layers[name] = TileLayer(name, self.map.width, self.map.height)
            recreated = bool(self._tile_layers)

        x1, y1, x2, y2 = self.map.clamp_rect(x1, y1, x2, y2)

        missing: Set[str] = set()
        for name, layer in self._tile_layers.items():
            grid = self._tile_name_grids.get(name)
            if grid is None:
                continue
            for y in range(y1, y2 + 1):
                for x in range(x1, x2 + 1):
                    tile_name = grid.at(x, y)
                    if not tile_name:
                        layer.set_cell(x, y, None)
                        continue
                    tile = self._resolve_tile(tile_name)
                    if tile is None:
                        missing.add(tile_name)
                    layer.set_cell(x, y, tile)

        if missing:
            logger.debug("Unresolved tiles left empty: %s", ", ".join(sorted(missing)))

        if recreated:
            self.layers_recreated.emit()

    def _resolve_tile(self, tile_name: str) -> Optional[Tile]:
        parsed = parse_tile_name(tile_name)
        if parsed is None:
            return None
        tileset = self.map.tileset(parsed[0])
        if tileset is None:
            return None
        return tileset.tile_at(parsed[1])

    # Tilesets and warnings

    def _uses_tileset(self, tileset_name: str) -> bool:
        for grid in self._tile_name_grids.values():
            for row in grid.rows():
                for tile_name in row:
                    parsed = parse_tile_name(tile_name) if tile_name else None
                    if parsed is not None and parsed[0] == tileset_name:
                        return True
        return False

    def _rematerialize(self, tileset_name: str):
        if self.map is None:
            return
        if self._tile_layers and self.rules.floor_rules and self.map.layer(FLOOR_LAYER) is not None:
            # Hand-painted floor cells feed the classifier, so names may change too
            self.update(0, 0, self.map.width - 1, self.map.height - 1)
        elif self._tile_layers and self._uses_tileset(tileset_name):
            full = (0, 0, self.map.width - 1, self.map.height - 1)
            self.tile_names_to_layers(*full)
            self.region_altered.emit(full)
        self.update_warnings()

    def tileset_added(self, tileset: Tileset):
        """Call after the map gained a tileset."""
        self._rematerialize(tileset.name)

    def tileset_removed(self, tileset_name: str):
        """Call after the map lost a tileset."""
        self._rematerialize(tileset_name)

    def warnings(self) -> List[str]:
        return sorted(self._warnings)

    def update_warnings(self):
        """Recheck every tile the tables can produce against the map's tilesets."""
        warnings: Set[str] = set()
        if self.map is not None:
            tile_names = self.rules.tile_names() + self.blends.tile_names()
            for tile_name in tile_names:
                parsed = parse_tile_name(tile_name)
                if parsed is None:
                    warnings.add(f"Invalid tile name '{tile_name}'")
                    continue
                tileset = self.map.tileset(parsed[0])
                if tileset is None:
                    warnings.add(f"Tileset '{parsed[0]}' is missing")
                elif tileset.tile_at(parsed[1]) is None:
                    warnings.add(f"Tile '{tile_name}' is missing")

        if warnings != self._warnings:
            self._warnings = warnings
            self.warnings_changed.emit()
