"""Unit tests for UndoManager functionality."""

import numpy as np
import pytest

from bmpblend.core.bmp_map import BmpMap
from bmpblend.core.constants import MAIN_BITMAP, VEG_BITMAP
from editor.controllers.undo_manager import UndoManager

from tests.helpers import GRASS, SAND, SEEDS


@pytest.fixture
def undo_manager():
    """Create a fresh UndoManager instance."""
    return UndoManager(max_undo_levels=10)


@pytest.fixture
def bmp_map():
    return BmpMap(6, 4, SEEDS)


class TestUndoManagerInitialization:
    def test_initialize_with_default_max_levels(self):
        manager = UndoManager()
        assert manager.max_undo_levels == 50
        assert manager.can_undo() is False
        assert manager.can_redo() is False


class TestPushState:
    """Tests for pushing states to undo stack."""

    def test_snapshot_is_a_copy(self, undo_manager, bmp_map):
        undo_manager.push_state(bmp_map)
        bmp_map.paint_bmp(MAIN_BITMAP, 0, 0, 0, 0, GRASS)
        assert not undo_manager.undo_stack[0].pixels[MAIN_BITMAP].any()

    def test_push_state_respects_max_levels(self, bmp_map):
        manager = UndoManager(max_undo_levels=3)
        for _ in range(5):
            manager.push_state(bmp_map)
        assert len(manager.undo_stack) == 3

    def test_push_state_clears_redo_stack(self, undo_manager, bmp_map):
        undo_manager.push_state(bmp_map)
        undo_manager.undo(bmp_map)
        assert undo_manager.can_redo()

        undo_manager.push_state(bmp_map)
        assert undo_manager.can_redo() is False


class TestUndoRedo:
    def test_undo_restores_pixels(self, undo_manager, bmp_map):
        undo_manager.push_state(bmp_map)
        bmp_map.paint_bmp(VEG_BITMAP, 1, 1, 2, 2, SAND)

        snapshot = undo_manager.undo(bmp_map)
        rect = undo_manager.restore(bmp_map, snapshot)

        assert rect == (1, 1, 2, 2)
        assert not bmp_map.bmp(VEG_BITMAP).pixels.any()
        assert bmp_map.modified is False

    def test_redo_reapplies(self, undo_manager, bmp_map):
        undo_manager.push_state(bmp_map)
        bmp_map.paint_bmp(MAIN_BITMAP, 4, 3, 5, 3, GRASS)
        painted = bmp_map.bmp(MAIN_BITMAP).copy_pixels()

        undo_manager.restore(bmp_map, undo_manager.undo(bmp_map))
        rect = undo_manager.restore(bmp_map, undo_manager.redo(bmp_map))

        assert rect == (4, 3, 5, 3)
        assert np.array_equal(bmp_map.bmp(MAIN_BITMAP).pixels, painted)
        assert bmp_map.modified is True

    def test_restore_unchanged_returns_none(self, undo_manager, bmp_map):
        undo_manager.push_state(bmp_map)
        assert undo_manager.restore(bmp_map, undo_manager.undo(bmp_map)) is None

    def test_empty_stacks_return_none(self, undo_manager, bmp_map):
        assert undo_manager.undo(bmp_map) is None
        assert undo_manager.redo(bmp_map) is None

    def test_clear(self, undo_manager, bmp_map):
        undo_manager.push_state(bmp_map)
        undo_manager.clear()
        assert not undo_manager.can_undo()
