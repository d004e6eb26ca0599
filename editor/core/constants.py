"""
BMP Blend - Editor Constants

Layout, colors and default view settings for the bitmap painter.
"""

# UI Layout
PICKER_WIDTH = 200
TOOLBAR_HEIGHT = 40
STATUS_HEIGHT = 30
CANVAS_OFFSET_X = PICKER_WIDTH
CANVAS_OFFSET_Y = TOOLBAR_HEIGHT

# Color picker
SWATCH_SIZE = 20
SWATCH_ROW_HEIGHT = 26

# Colors
COLOR_BG = (48, 48, 48)
COLOR_TOOLBAR = (32, 32, 32)
COLOR_STATUS = (32, 32, 32)
COLOR_PICKER_BG = (40, 40, 40)
COLOR_GRID = (80, 80, 80)
COLOR_SELECTION = (255, 255, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_BUTTON = (64, 64, 64)
COLOR_BUTTON_HOVER = (80, 80, 80)
COLOR_BUTTON_ACTIVE = (100, 100, 200)

# Canvas
DEFAULT_CELL_SIZE = 32
MIN_CELL_SIZE = 8
MAX_CELL_SIZE = 64
SCROLL_STEP = 32
BITMAP_OVERLAY_ALPHA = 96

# Brush sizes in cells (square brush side)
BRUSH_SIZES = (1, 2, 3, 5, 9)
