"""Unit tests for brush painting, the eyedropper and undo through the blender."""

import pytest

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.constants import BLACK, MAIN_BITMAP, VEG_BITMAP
from editor.controllers.editor_state import EditorState
from editor.controllers.paint_controller import PaintController, brush_rect
from editor.controllers.undo_manager import UndoManager

from tests.helpers import GRASS, SAND, TREE


@pytest.fixture
def state():
    return EditorState()


@pytest.fixture
def painter(blender, state):
    return PaintController(blender, state, UndoManager())


class TestBrushRect:
    @pytest.mark.parametrize(
        "size, expected",
        [(1, (4, 4, 4, 4)), (2, (4, 4, 5, 5)), (3, (3, 3, 5, 5)), (5, (2, 2, 6, 6))],
    )
    def test_square_brush(self, size, expected):
        assert brush_rect(4, 4, size) == expected


class TestPainting:
    """Tests for strokes and the recomputed area."""

    def test_paint_updates_tile_layers(self, painter, state, blender):
        state.color = SAND
        painter.begin_stroke()
        assert painter.paint_at(2, 2) == (2, 2, 2, 2)
        assert blender.tile_name_at("0_Floor", 2, 2) == "floors_2"
        assert blender.tile_layer("0_Floor").cell_at(2, 2).name == "floors_2"

    def test_region_altered_covers_halo(self, painter, state, blender):
        rects = []
        blender.region_altered.connect(rects.append)
        state.color = SAND
        state.cycle_brush()
        painter.paint_at(4, 4)
        assert rects == [(3, 3, 6, 6)]

    def test_same_cell_painted_once_per_stroke(self, painter, state):
        state.color = GRASS
        assert painter.paint_at(1, 1) is not None
        assert painter.paint_at(1, 1) is None
        painter.end_stroke()
        assert painter.paint_at(1, 1) is not None

    def test_brush_outside_map(self, painter, state):
        state.color = GRASS
        assert painter.paint_at(40, 40) is None

    def test_vegetation_bitmap(self, painter, state, blender):
        state.set_bitmap(VEG_BITMAP)
        state.color = TREE
        painter.paint_at(3, 3)
        assert blender.map.bmp(VEG_BITMAP).pixel(3, 3) == TREE
        assert blender.map.bmp(MAIN_BITMAP).pixel(3, 3) == BLACK
        assert blender.tile_name_at("0_Vegetation", 3, 3) == "trees_0"


class TestEyedropper:
    def test_pick_color_sets_state(self, painter, state, blender):
        blender.map.paint_bmp(MAIN_BITMAP, 5, 5, 5, 5, GRASS)
        assert painter.pick_color(5, 5) == GRASS
        assert state.color == GRASS

    def test_pick_outside_map(self, painter, state):
        assert painter.pick_color(-1, 0) is None
        assert state.color == BLACK


class TestUndo:
    def test_undo_stroke_restores_tiles(self, painter, state, blender):
        state.color = SAND
        painter.begin_stroke()
        painter.paint_at(2, 2)
        painter.paint_at(3, 2)
        painter.end_stroke()

        assert painter.undo()
        assert blender.map.bmp(MAIN_BITMAP).pixel(2, 2) == BLACK
        assert blender.tile_name_at("0_Floor", 2, 2) == ""
        assert blender.tile_name_at("0_Floor", 3, 2) == ""

        assert painter.redo()
        assert blender.tile_name_at("0_Floor", 3, 2) == "floors_2"

    def test_nothing_to_undo(self, painter):
        assert painter.undo() is False


class TestWithoutMap:
    def test_no_map_is_a_no_op(self, state):
        painter = PaintController(BmpBlender(), state, UndoManager())
        painter.begin_stroke()
        assert painter.paint_at(0, 0) is None
        assert painter.pick_color(0, 0) is None
        assert painter.undo() is False
