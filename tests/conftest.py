"""Shared pytest fixtures for the rule/blend engine tests."""

from pathlib import Path

import pytest

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.bmp_map import BmpMap
from bmpblend.formats.blends_file import read_blends_file
from bmpblend.formats.rules_file import read_rules_file

from tests.helpers import GRASS, SAND, SEEDS, TREE, make_tileset

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def rules_path():
    return str(FIXTURES / "Rules.txt")


@pytest.fixture
def blends_path():
    return str(FIXTURES / "Blends.txt")


@pytest.fixture
def rules(rules_path):
    return read_rules_file(rules_path)


@pytest.fixture
def blends(blends_path):
    return read_blends_file(blends_path)


@pytest.fixture
def bmp_map():
    """10x8 map with fixed seeds and the fixture tilesets."""
    bmp_map = BmpMap(10, 8, SEEDS)
    bmp_map.add_tileset(make_tileset("floors", 4, 1))
    bmp_map.add_tileset(make_tileset("trees", 2, 1))
    bmp_map.add_tileset(make_tileset("blends", 4, 2))
    bmp_map.modified = False
    return bmp_map


@pytest.fixture
def blender(bmp_map, rules_path, blends_path):
    """Blender over bmp_map with the fixture rules and blends loaded."""
    blender = BmpBlender(bmp_map)
    assert blender.read(rules_path, blends_path), blender.error_string
    return blender


@pytest.fixture
def project_dir(tmp_path, bmp_map, rules_path, blends_path):
    """A saved project with tileset sheets, rule files and painted bitmaps."""
    for tileset in bmp_map.tilesets.values():
        sheet = tmp_path / f"{tileset.name}.png"
        tileset.image.save(sheet)
        tileset.image_source = str(sheet)

    (tmp_path / "Rules.txt").write_text(Path(rules_path).read_text())
    (tmp_path / "Blends.txt").write_text(Path(blends_path).read_text())
    bmp_map.bmp_settings.rules_file = str(tmp_path / "Rules.txt")
    bmp_map.bmp_settings.blends_file = str(tmp_path / "Blends.txt")

    bmp_map.paint_bmp(0, 0, 0, 9, 3, GRASS)
    bmp_map.paint_bmp(0, 0, 4, 9, 7, SAND)
    bmp_map.paint_bmp(1, 2, 2, 3, 5, TREE)
    bmp_map.save(str(tmp_path / "map.json"))
    return tmp_path
