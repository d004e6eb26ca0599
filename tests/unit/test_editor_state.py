"""Unit tests for EditorState and the color picker's palette."""

from bmpblend.core.constants import BLACK, MAIN_BITMAP, VEG_BITMAP
from bmpblend.core.rules import Rule, RuleSet
from editor.controllers.editor_state import EditorState
from editor.core.constants import BRUSH_SIZES, MAX_CELL_SIZE, MIN_CELL_SIZE
from editor.ui.color_picker import palette_entries

from tests.helpers import GRASS, SAND, TREE


class TestEditorState:
    def test_colors_are_per_bitmap(self):
        state = EditorState()
        state.color = GRASS
        state.toggle_bitmap()
        assert state.bitmap_index == VEG_BITMAP
        assert state.color == BLACK
        state.set_bitmap(MAIN_BITMAP)
        assert state.color == GRASS

    def test_invalid_bitmap_ignored(self):
        state = EditorState()
        state.set_bitmap(7)
        assert state.bitmap_index == MAIN_BITMAP

    def test_brush_cycles(self):
        state = EditorState()
        state.cycle_brush(-1)
        assert state.brush_size == BRUSH_SIZES[-1]
        state.cycle_brush(1)
        assert state.brush_size == BRUSH_SIZES[0]

    def test_zoom_is_clamped(self):
        state = EditorState()
        for _ in range(10):
            state.zoom(2)
        assert state.cell_size == MAX_CELL_SIZE
        for _ in range(10):
            state.zoom(0.5)
        assert state.cell_size == MIN_CELL_SIZE


class TestPaletteEntries:
    def test_black_first_then_rule_colors(self, rules):
        entries = palette_entries(rules, MAIN_BITMAP)
        assert entries[0] == (BLACK, "(erase)")
        assert [color for color, _ in entries[1:3]] == [GRASS, SAND]
        assert entries[1][1] == "floors_0"

    def test_only_selected_bitmap(self, rules):
        assert palette_entries(rules, VEG_BITMAP) == [(BLACK, "(erase)"), (TREE, "trees_0")]

    def test_label_preferred(self):
        rules = RuleSet([
            Rule(MAIN_BITMAP, GRASS, ("g_1",), "0_Floor"),
            Rule(MAIN_BITMAP, GRASS, ("g_2",), "1_Walls", label="Meadow"),
            Rule(MAIN_BITMAP, GRASS, ("g_3",), "2_Top", label="Other"),
            Rule(MAIN_BITMAP, SAND, ("", "s_1"), "0_Floor"),
        ])
        assert palette_entries(rules, MAIN_BITMAP) == [
            (BLACK, "(erase)"),
            (GRASS, "Meadow"),
            (SAND, "s_1"),
        ]
