"""
BMP Blend - SimpleFile Format

Reads and writes the block-structured key/value text used by Blends.txt:

    version = 1
    blend
    {
        layer = 0_FloorOverlay
        mainTile = blends_natural_01_0
        dir = n
    }

A block name may also share its line with the opening brace ("blend {").
Blank lines and lines starting with '#' are ignored.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .errors import SimpleFileError, read_error

INDENT = "    "


@dataclass
class SimpleFileBlock:
    """A named block holding ordered key/value pairs and child blocks."""

    name: str = ""
    values: List[Tuple[str, str]] = field(default_factory=list)
    blocks: List["SimpleFileBlock"] = field(default_factory=list)

    def value(self, key: str) -> str:
        """First value for key, or "" if the key is absent."""
        for name, value in self.values:
            if name == key:
                return value
        return ""

    def add_value(self, key: str, value: str):
        self.values.append((key, value))

    def keys(self) -> List[str]:
        return [name for name, _ in self.values]


def parse_simple_file(text: str, path: str = "<string>") -> SimpleFileBlock:
    """
    Parse SimpleFile text into a root block.

    Raises:
        SimpleFileError: On unbalanced braces or unrecognized lines
    """
    root = SimpleFileBlock()
    stack = [root]
    pending_name = None
    pending_line = 0

    def fail(line_number: int, reason: str):
        raise SimpleFileError(f"{path}:{line_number}: {reason}")

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line == "{":
            if pending_name is None:
                fail(line_number, "'{' without a block name")
            block = SimpleFileBlock(pending_name)
            stack[-1].blocks.append(block)
            stack.append(block)
            pending_name = None
        elif line == "}":
            if pending_name is not None:
                fail(pending_line, f"block '{pending_name}' has no '{{'")
            if len(stack) == 1:
                fail(line_number, "unmatched '}'")
            stack.pop()
        elif pending_name is not None:
            fail(pending_line, f"block '{pending_name}' has no '{{'")
        elif line.endswith("{"):
            name = line[:-1].strip()
            if not name or "=" in name:
                fail(line_number, f"invalid block header '{line}'")
            block = SimpleFileBlock(name)
            stack[-1].blocks.append(block)
            stack.append(block)
        elif "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            if not key:
                fail(line_number, f"missing key in '{line}'")
            stack[-1].add_value(key, value.strip())
        elif len(line.split()) == 1:
            pending_name = line
            pending_line = line_number
        else:
            fail(line_number, f"unrecognized line '{line}'")

    if pending_name is not None:
        fail(pending_line, f"block '{pending_name}' has no '{{'")
    if len(stack) > 1:
        raise SimpleFileError(f"{path}: unclosed block '{stack[-1].name}'")

    return root


def read_simple_file(path: str) -> SimpleFileBlock:
    """
    Read and parse a SimpleFile.

    Raises:
        SimpleFileError: If the file can't be read or parsed
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise read_error(path, e, SimpleFileError) from e
    return parse_simple_file(text, path)


def format_simple_file(root: SimpleFileBlock) -> str:
    """Format a root block as SimpleFile text."""
    lines: List[str] = []
    for key, value in root.values:
        lines.append(f"{key} = {value}")
    for block in root.blocks:
        if lines:
            lines.append("")
        _format_block(block, 0, lines)
    return "\n".join(lines) + "\n"


def _format_block(block: SimpleFileBlock, depth: int, lines: List[str]):
    indent = INDENT * depth
    lines.append(f"{indent}{block.name}")
    lines.append(f"{indent}{{")
    for key, value in block.values:
        lines.append(f"{indent}{INDENT}{key} = {value}")
    for child in block.blocks:
        _format_block(child, depth + 1, lines)
    lines.append(f"{indent}}}")


def write_simple_file(path: str, root: SimpleFileBlock):
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_simple_file(root))
