"""
BMP Blend - Editor Rendering

Tile layer and grid rendering for the canvas.
"""

from .layer_renderer import LayerRenderer
from .grid_renderer import GridRenderer

__all__ = ['LayerRenderer', 'GridRenderer']
