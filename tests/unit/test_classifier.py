"""Unit tests for turning bitmap colors into rule-layer tile names."""

import pytest

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.bmp_map import BmpMap
from bmpblend.core.constants import BLACK, MAIN_BITMAP, VEG_BITMAP
from bmpblend.core.rules import BlendSet, Rule, RuleSet

from tests.helpers import GRASS, SAND, SEEDS, TREE, WATER


def paint(blender, bitmap_index, x, y, color):
    blender.map.paint_bmp(bitmap_index, x, y, x, y, color)
    blender.update(x, y, x, y)


class TestScenarioOne:
    def test_painted_cell_picks_choice_by_cell_rand(self):
        bmp_map = BmpMap(10, 8, SEEDS)
        blender = BmpBlender(bmp_map)
        rule = Rule(MAIN_BITMAP, GRASS, ("grass1", "grass2"), "0_Floor")
        blender.set_tables(RuleSet([rule]), BlendSet())

        paint(blender, MAIN_BITMAP, 3, 3, GRASS)

        expected = ("grass1", "grass2")[bmp_map.rand(MAIN_BITMAP, 3, 3) % 2]
        assert blender.tile_name_at("0_Floor", 3, 3) == expected
        assert blender.tile_name_at("0_Floor", 3, 4) == ""


class TestMainRules:
    """Tests for Main bitmap classification with the fixture rules."""

    def test_unpainted_map_is_empty(self, blender):
        for name in ("0_Floor", "0_Vegetation", "0_FloorOverlay"):
            assert blender.tile_name_grid(name).is_empty()

    def test_choice_comes_from_main_rand(self, blender):
        paint(blender, MAIN_BITMAP, 4, 4, GRASS)
        expected = ("floors_0", "floors_1")[blender.map.rand(MAIN_BITMAP, 4, 4) % 2]
        assert blender.tile_name_at("0_Floor", 4, 4) == expected

    def test_color_fans_out_to_every_matching_layer(self, blender):
        paint(blender, VEG_BITMAP, 4, 4, TREE)
        assert blender.tile_name_at("0_Vegetation", 4, 4) == "trees_0"

        # Water writes floors_3 on the floor and null on the vegetation layer
        paint(blender, MAIN_BITMAP, 4, 4, WATER)
        assert blender.tile_name_at("0_Floor", 4, 4) == "floors_3"
        paint(blender, VEG_BITMAP, 4, 4, BLACK)
        assert blender.tile_name_at("0_Vegetation", 4, 4) == ""

    def test_repainting_black_clears_rule_layers(self, blender):
        paint(blender, MAIN_BITMAP, 2, 2, SAND)
        assert blender.tile_name_at("0_Floor", 2, 2) == "floors_2"
        paint(blender, MAIN_BITMAP, 2, 2, BLACK)
        assert blender.tile_name_at("0_Floor", 2, 2) == ""

    def test_unknown_color_writes_nothing(self, blender):
        paint(blender, MAIN_BITMAP, 2, 2, 0x123456)
        assert blender.tile_name_at("0_Floor", 2, 2) == ""

    def test_last_rule_for_a_layer_wins(self):
        bmp_map = BmpMap(4, 4, SEEDS)
        blender = BmpBlender(bmp_map)
        blender.set_tables(
            RuleSet([
                Rule(MAIN_BITMAP, GRASS, ("first",), "0_Floor"),
                Rule(MAIN_BITMAP, GRASS, ("second",), "0_Floor"),
            ]),
            BlendSet(),
        )
        paint(blender, MAIN_BITMAP, 1, 1, GRASS)
        assert blender.tile_name_at("0_Floor", 1, 1) == "second"


class TestVegetationRules:
    def test_unconditional_rule(self, blender):
        paint(blender, MAIN_BITMAP, 3, 3, GRASS)
        paint(blender, VEG_BITMAP, 3, 3, TREE)
        assert blender.tile_name_at("0_Vegetation", 3, 3) == "trees_0"

    def test_condition_matches_main_color(self, blender):
        paint(blender, MAIN_BITMAP, 3, 3, SAND)
        paint(blender, VEG_BITMAP, 3, 3, TREE)
        assert blender.tile_name_at("0_Vegetation", 3, 3) == "trees_1"

    def test_vegetation_overrides_main_rule_on_same_layer(self, blender):
        paint(blender, MAIN_BITMAP, 3, 3, WATER)
        paint(blender, VEG_BITMAP, 3, 3, TREE)
        assert blender.tile_name_at("0_Vegetation", 3, 3) == "trees_0"

    def test_main_rules_ignore_vegetation_pixels(self, blender):
        paint(blender, VEG_BITMAP, 3, 3, GRASS)
        assert blender.tile_name_at("0_Floor", 3, 3) == ""


class TestFloorOverride:
    """Tests for tiles painted by hand on the map's 0_Floor layer."""

    @pytest.fixture
    def hand_floor(self, blender):
        floor = blender.map.ensure_layer("0_Floor")
        floor.set_cell(5, 5, blender.map.tile_for_name("floors_2"))
        return floor

    def test_no_override_without_painted_neighbors(self, blender, hand_floor):
        blender.update(5, 5, 5, 5)
        assert blender.tile_name_at("0_Floor", 5, 5) == ""

    @pytest.mark.parametrize("bitmap_index", [MAIN_BITMAP, VEG_BITMAP])
    def test_painted_neighbor_applies_floor_rule_color(self, blender, hand_floor, bitmap_index):
        paint(blender, bitmap_index, 6, 6, GRASS if bitmap_index == MAIN_BITMAP else TREE)
        assert blender.tile_name_at("0_Floor", 5, 5) == "floors_2"

    def test_only_black_main_pixels_are_overridden(self, blender, hand_floor):
        paint(blender, MAIN_BITMAP, 6, 5, GRASS)
        paint(blender, MAIN_BITMAP, 5, 5, WATER)
        assert blender.tile_name_at("0_Floor", 5, 5) == "floors_3"

    def test_vegetation_condition_uses_painted_main_color(self, blender, hand_floor):
        paint(blender, MAIN_BITMAP, 4, 5, GRASS)
        paint(blender, VEG_BITMAP, 5, 5, TREE)
        # The override counts as sand for main rules only
        assert blender.tile_name_at("0_Floor", 5, 5) == "floors_2"
        assert blender.tile_name_at("0_Vegetation", 5, 5) == "trees_0"

    def test_tile_outside_floor_rules_is_ignored(self, blender):
        floor = blender.map.ensure_layer("0_Floor")
        floor.set_cell(5, 5, blender.map.tile_for_name("blends_3"))
        paint(blender, MAIN_BITMAP, 6, 5, GRASS)
        assert blender.tile_name_at("0_Floor", 5, 5) == ""
