"""
BMP Blend - Editor Core

Editor constants and pygame surface conversion of tiles.
"""

from .pygame_rendering import SurfaceCache
from . import constants

__all__ = ['SurfaceCache', 'constants']
