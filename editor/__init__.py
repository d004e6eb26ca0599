"""
BMP Blend - Editor Package

A Pygame-based painter for the Main/Vegetation bitmaps with a live preview
of the generated tile layers.
"""

from .application import EditorApplication
from .main import main

__all__ = ['EditorApplication', 'main']
