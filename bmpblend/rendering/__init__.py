"""
Pillow-based rendering of bitmaps and tile layers.
"""
