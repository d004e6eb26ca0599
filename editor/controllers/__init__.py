"""
BMP Blend - Controllers Module

Application state, painting, undo history and event handling.
"""

from .editor_state import EditorState
from .event_handler import EventHandler
from .paint_controller import PaintController
from .undo_manager import UndoManager

__all__ = ['EditorState', 'EventHandler', 'PaintController', 'UndoManager']
