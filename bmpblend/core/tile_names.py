"""
BMP Blend - Tile Name Utilities

Tile names have the form "<tilesetName>_<index>", for example
"blends_natural_01_16". The empty string means "no tile".
"""

from typing import Optional, Tuple


def parse_tile_name(tile_name: str) -> Optional[Tuple[str, int]]:
    """
    Split a tile name into its tileset name and tile index.

    Args:
        tile_name: Tile name such as "floors_exterior_natural_01_5"

    Returns:
        (tileset_name, index), or None if the name has no "_<index>" suffix

    Example:
        >>> parse_tile_name("walls_03_12")
        ('walls_03', 12)
    """
    tileset_name, sep, index_str = tile_name.rpartition("_")
    if not sep or not tileset_name or not index_str.isdigit():
        return None
    return tileset_name, int(index_str)


def name_for_tile(tileset_name: str, index: int) -> str:
    """Build the canonical tile name for a tileset index."""
    return f"{tileset_name}_{index}"


def normalize_tile_name(tile_name: str) -> str:
    """
    Strip leading zeros from the index part of a tile name.

    Names that don't parse are returned unchanged, so "" stays "".

    Example:
        >>> normalize_tile_name("floors_007")
        'floors_7'
    """
    parsed = parse_tile_name(tile_name)
    if parsed is None:
        return tile_name
    return name_for_tile(*parsed)
