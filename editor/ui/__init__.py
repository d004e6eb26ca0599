"""
BMP Blend - UI Module

Toolbar widgets, the color picker and file dialogs.
"""

from .color_picker import ColorPicker, palette_entries
from .dialogs import open_file_dialog, save_file_dialog
from .widgets import Button

__all__ = [
    "Button",
    "ColorPicker",
    "palette_entries",
    "open_file_dialog",
    "save_file_dialog",
]
