"""
BMP Blend - Colors and Dimensions

Shared constants for bitmap colors, layer names and tile dimensions used
across the engine, the editor and the tools.
"""

from typing import Tuple

# Type alias for RGB color
RGBColor = Tuple[int, int, int]

# Packed 0xRRGGBB black; an unpainted bitmap pixel
BLACK = 0x000000

# Bitmap indices
MAIN_BITMAP = 0
VEG_BITMAP = 1
BITMAP_NAMES = ("main", "vegetation")

# Reference layer read by blends and by the hand-painted tile override
FLOOR_LAYER = "0_Floor"

# Default tile dimensions for tileset sheets (pixels)
DEFAULT_TILE_WIDTH = 32
DEFAULT_TILE_HEIGHT = 32

# Default rule/blend file names next to a project file
DEFAULT_RULES_FILE = "Rules.txt"
DEFAULT_BLENDS_FILE = "Blends.txt"

# Upper bound (exclusive) of per-cell random values
RAND_MAX = 0x7FFFFFFF


def rgb_to_int(rgb: RGBColor) -> int:
    """
    Pack an (r, g, b) tuple into a 0xRRGGBB integer.

    Example:
        >>> hex(rgb_to_int((0, 255, 0)))
        '0xff00'
    """
    r, g, b = rgb
    return (r << 16) | (g << 8) | b


def int_to_rgb(color: int) -> RGBColor:
    """Unpack a 0xRRGGBB integer into an (r, g, b) tuple."""
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
