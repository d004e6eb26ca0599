#!/usr/bin/env python3
"""
BMP Blend - Map Renderer

Runs the rule/blend engine over a project and renders the resulting tile
layers (and optionally the painted bitmaps) as PNG images.
"""

import argparse
import logging
import sys
from pathlib import Path

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.bmp_map import BmpMap
from bmpblend.core.constants import BITMAP_NAMES
from bmpblend.rendering.pil_renderer import (
    ordered_layers,
    render_bitmap_to_image,
    render_layers_to_image,
)


def load_blender(project_path: str) -> BmpBlender:
    """Load a project and build its tile layers."""
    bmp_map = BmpMap.load(project_path)
    blender = BmpBlender(bmp_map)

    settings = bmp_map.bmp_settings
    if settings.rules_file and settings.blends_file:
        if not blender.read(settings.rules_file, settings.blends_file):
            print(f"Error: {blender.error_string}")
            sys.exit(1)
    else:
        print("Warning: Project has no rules/blends files, rendering map layers only")
        blender.recreate()

    for warning in blender.warnings():
        print(f"Warning: {warning}")

    return blender


def render_project(
    project_path: str,
    output_path: str,
    layer_names: list[str] | None = None,
    include_map_layers: bool = True,
):
    """Render a project's tile layers to one PNG."""
    blender = load_blender(project_path)
    bmp_map = blender.map

    layers = blender.tile_layers()
    if layer_names:
        layers = [layer for layer in layers if layer.name in layer_names]
        missing = set(layer_names) - {layer.name for layer in layers}
        for name in sorted(missing):
            print(f"Warning: No blender layer named {name}")

    if include_map_layers:
        layers = ordered_layers(bmp_map, layers)

    img = render_layers_to_image(bmp_map, layers)
    img.save(output_path)
    print(f"Saved: {output_path} ({img.width}x{img.height})")


def render_bitmaps(project_path: str, output_dir: str, scale: int):
    """Render the painted Main/Vegetation bitmaps as scaled PNGs."""
    bmp_map = BmpMap.load(project_path)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    for index, key in enumerate(BITMAP_NAMES):
        out_file = out_dir / f"{Path(project_path).stem}_{key}.png"
        img = render_bitmap_to_image(bmp_map.bmp(index), scale)
        img.save(out_file)
        print(f"Saved: {out_file} ({img.width}x{img.height})")


def main():
    parser = argparse.ArgumentParser(
        description="Render a BMP Blend project as PNG images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Render all layers:
    python tools/render.py maps/town.json town.png

  Render only the floor and its overlay:
    python tools/render.py maps/town.json floor.png -l 0_Floor -l 0_FloorOverlay

  Render the painted bitmaps at 8x:
    python tools/render.py maps/town.json renders/ --bitmaps --scale 8
        """,
    )
    parser.add_argument("project", help="Path to project JSON file")
    parser.add_argument("output", help="Output PNG file (or directory with --bitmaps)")
    parser.add_argument(
        "-l",
        "--layer",
        action="append",
        dest="layers",
        help="Only render this blender layer (repeatable)",
    )
    parser.add_argument(
        "--no-map-layers",
        action="store_true",
        help="Skip the map's hand-painted layers",
    )
    parser.add_argument(
        "--bitmaps",
        action="store_true",
        help="Render the Main/Vegetation bitmaps instead of tile layers",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=4,
        help="Bitmap scale factor for --bitmaps (default: 4)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not Path(args.project).exists():
        print(f"Error: Project file not found: {args.project}")
        sys.exit(1)

    if args.bitmaps:
        render_bitmaps(args.project, args.output, args.scale)
    else:
        render_project(
            args.project,
            args.output,
            layer_names=args.layers,
            include_map_layers=not args.no_map_layers,
        )


if __name__ == "__main__":
    main()
