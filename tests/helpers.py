"""Colors and builders shared by the test modules."""

from PIL import Image

from bmpblend.core.constants import rgb_to_int
from bmpblend.core.tileset import Tileset

GRASS = rgb_to_int((0, 255, 0))
SAND = rgb_to_int((255, 255, 0))
WATER = rgb_to_int((0, 0, 255))
TREE = rgb_to_int((0, 128, 0))

SEEDS = (1234, 5678)


def make_tileset(name: str, columns: int, rows: int, size: int = 8) -> Tileset:
    """In-memory tileset whose tile i is filled with red level i * 10."""
    image = Image.new("RGBA", (columns * size, rows * size))
    for index in range(columns * rows):
        col, row = index % columns, index // columns
        tile = Image.new("RGBA", (size, size), (index * 10 % 256, 0, 0, 255))
        image.paste(tile, (col * size, row * size))
    return Tileset(name, image, size, size)
