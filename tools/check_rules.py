#!/usr/bin/env python3
"""
BMP Blend - Rules/Blends Checker

Parses a Rules.txt and Blends.txt pair, reports syntax errors, summarizes
the tables and optionally checks tile names against a project's tilesets.
With --normalize, rewrites both files in canonical form.
"""

import argparse
import sys
from collections import Counter

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.bmp_map import BmpMap
from bmpblend.core.constants import int_to_rgb
from bmpblend.core.rules import BlendSet, RuleSet
from bmpblend.formats.blends_file import read_blends_file, write_blends_file
from bmpblend.formats.errors import BmpFileError
from bmpblend.formats.rules_file import read_rules_file, write_rules_file


def summarize_rules(rules: RuleSet):
    print(f"Rules: {len(rules)}")
    per_layer = Counter(rule.target_layer for rule in rules)
    for layer in rules.layers:
        print(f"  {layer}: {per_layer[layer]} rules")

    # Same color, bitmap and layer: only the last one visited has any effect
    seen = Counter((rule.bitmap_index, rule.color, rule.target_layer) for rule in rules)
    for (bitmap_index, color, layer), count in seen.items():
        if count > 1:
            print(
                f"  Note: {count} rules for bitmap {bitmap_index} color "
                f"{int_to_rgb(color)} on {layer}"
            )


def summarize_blends(blends: BlendSet):
    print(f"Blends: {len(blends)}")
    for layer in blends.layers:
        print(f"  {layer}: {len(blends.blends_for_layer(layer))} blends")


def main():
    parser = argparse.ArgumentParser(
        description="Check rule and blend files for errors",
    )
    parser.add_argument("rules", help="Path to Rules.txt")
    parser.add_argument("blends", help="Path to Blends.txt")
    parser.add_argument(
        "--project",
        help="Project JSON whose tilesets the tile names are checked against",
    )
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Rewrite both files in canonical form",
    )

    args = parser.parse_args()

    try:
        rules = read_rules_file(args.rules)
        blends = read_blends_file(args.blends)
    except BmpFileError as e:
        print(f"Error: {e}")
        sys.exit(1)

    summarize_rules(rules)
    summarize_blends(blends)

    if args.project:
        bmp_map = BmpMap.load(args.project)
        blender = BmpBlender(bmp_map)
        blender.set_tables(rules, blends)
        warnings = blender.warnings()
        for warning in warnings:
            print(f"Warning: {warning}")
        if not warnings:
            print("All tile names resolve")

    if args.normalize:
        write_rules_file(args.rules, rules)
        write_blends_file(args.blends, blends)
        print(f"Rewrote {args.rules} and {args.blends}")


if __name__ == "__main__":
    main()
