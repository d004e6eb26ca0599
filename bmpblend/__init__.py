"""
BMP Blend

Turns painted Main/Vegetation bitmaps into tile layers using color rules
and neighbor-conditioned blends.
"""

from .core import BmpBlender, BmpMap

__all__ = ["BmpBlender", "BmpMap"]
