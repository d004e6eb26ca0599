"""
BMP Blend - Blends File

Reads and writes Blends.txt, a SimpleFile with one "blend" block per rule:

    blend
    {
        layer = 0_FloorOverlay
        mainTile = blends_natural_01_16
        blendTile = blends_natural_01_56
        dir = n
        exclude = blends_street_01_0 blends_street_01_1
    }

Any other block name, attribute or direction is an error for the whole file.
"""

from typing import Iterable, List

from ..core.rules import Blend, BlendSet, Direction
from ..core.tile_names import normalize_tile_name
from .errors import (
    BlendsFileError,
    SimpleFileError,
    UnknownAttributeError,
    UnknownBlockError,
    UnknownDirectionError,
)
from .simple_file import (
    SimpleFileBlock,
    format_simple_file,
    parse_simple_file,
    read_simple_file,
)

BLEND_BLOCK = "blend"
BLEND_KEYS = ("layer", "mainTile", "blendTile", "dir", "exclude")

_DIRECTIONS = {direction.value: direction for direction in Direction}


def blend_from_block(block: SimpleFileBlock, path: str = "<string>") -> Blend:
    """
    Build a blend from a parsed "blend" block.

    Raises:
        UnknownBlockError: If the block isn't a "blend" block
        UnknownAttributeError: If the block has a key other than BLEND_KEYS
        UnknownDirectionError: If "dir" isn't one of n s e w nw sw ne se
    """
    if block.name != BLEND_BLOCK:
        raise UnknownBlockError(
            f"{path}: unknown block name '{block.name}'. "
            f"Probable syntax error in blends file."
        )
    for key in block.keys():
        if key not in BLEND_KEYS:
            raise UnknownAttributeError(f"{path}: unknown blend attribute '{key}'")
    if block.blocks:
        raise UnknownBlockError(
            f"{path}: unknown block name '{block.blocks[0].name}' inside blend"
        )

    dir_name = block.value("dir")
    if dir_name not in _DIRECTIONS:
        raise UnknownDirectionError(f"{path}: unknown blend direction '{dir_name}'")

    excludes = frozenset(
        normalize_tile_name(name) for name in block.value("exclude").split()
    )
    return Blend(
        block.value("layer"),
        normalize_tile_name(block.value("mainTile")),
        normalize_tile_name(block.value("blendTile")),
        _DIRECTIONS[dir_name],
        excludes,
    )


def parse_blends(text: str, path: str = "<string>") -> List[Blend]:
    """Parse Blends.txt text into blends, in file order."""
    root = parse_simple_file(text, path)
    return [blend_from_block(block, path) for block in root.blocks]


def read_blends_file(path: str) -> BlendSet:
    """
    Read a blends file.

    Raises:
        BlendsFileError: If the file can't be read or has an unknown block,
            attribute or direction
    """
    try:
        root = read_simple_file(path)
    except SimpleFileError as e:
        raise BlendsFileError(str(e)) from e
    return BlendSet(blend_from_block(block, path) for block in root.blocks)


def blend_to_block(blend: Blend) -> SimpleFileBlock:
    block = SimpleFileBlock(BLEND_BLOCK)
    block.add_value("layer", blend.target_layer)
    block.add_value("mainTile", blend.main_tile)
    block.add_value("blendTile", blend.blend_tile)
    block.add_value("dir", blend.direction.value)
    if blend.exclusion_list:
        block.add_value("exclude", " ".join(sorted(blend.exclusion_list)))
    return block


def format_blends(blends: Iterable[Blend]) -> str:
    root = SimpleFileBlock()
    root.add_value("version", "1")
    root.blocks.extend(blend_to_block(blend) for blend in blends)
    return format_simple_file(root)


def write_blends_file(path: str, blends: Iterable[Blend]):
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_blends(blends))
