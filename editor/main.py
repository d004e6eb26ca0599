"""
BMP Blend - Editor Main

Command-line entry point for the editor application.

Usage:
    bmp-editor [project.json] [-v]
"""

import argparse
import logging
import sys
from pathlib import Path

from .application import EditorApplication


def parse_arguments(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bmp-editor",
        description="Paint Main/Vegetation bitmaps and preview the generated tile layers",
    )
    parser.add_argument("project", nargs="?", help="Project JSON file to open on startup")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main():
    """Main entry point for the editor."""
    args = parse_arguments()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate before starting pygame
    if args.project:
        project = Path(args.project)
        if not project.is_file():
            print(f"Error: Project file not found: {args.project}")
            sys.exit(1)

    app = EditorApplication()

    if args.project:
        app.load_project(args.project)

    app.run()


if __name__ == "__main__":
    main()
