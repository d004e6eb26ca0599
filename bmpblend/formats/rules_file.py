"""
BMP Blend - Rules File

Reads and writes Rules.txt, one rule per line:

    bitmapIndex, r, g, b, choice1 choice2 ..., targetLayer [, condR, condG, condB]

'#' starts a comment running to the end of the line and blank lines are
ignored. A choice of "null" stands for the empty tile. The condition triple
only matters for vegetation (bitmap 1) rules; when absent it is black.
"""

from pathlib import Path
from typing import Iterable, List

from ..core.constants import BLACK, int_to_rgb, rgb_to_int
from ..core.rules import Rule, RuleSet
from ..core.tile_names import normalize_tile_name
from .errors import MalformedRuleLine, RulesFileError, read_error

NULL_TILE = "null"

MIN_FIELDS = 6
MAX_FIELDS = 9


def _parse_int(path: str, line_number: int, text: str, what: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise MalformedRuleLine(path, line_number, f"invalid {what} '{text.strip()}'") from None


def _parse_rgb(path: str, line_number: int, fields: List[str], what: str) -> int:
    components = []
    for text in fields:
        value = _parse_int(path, line_number, text, what)
        if not 0 <= value <= 255:
            raise MalformedRuleLine(
                path, line_number, f"{what} component {value} out of range 0-255"
            )
        components.append(value)
    return rgb_to_int((components[0], components[1], components[2]))


def parse_rule_line(line: str, path: str = "<string>", line_number: int = 0) -> Rule:
    """
    Parse one non-blank, comment-free rule line.

    Raises:
        MalformedRuleLine: If the line has the wrong number of fields or a
            field can't be parsed
    """
    fields = line.split(",")
    count = len(fields)
    if count < MIN_FIELDS:
        raise MalformedRuleLine(
            path, line_number, f"expected at least {MIN_FIELDS} fields, found {count}"
        )
    if MIN_FIELDS < count < MAX_FIELDS:
        raise MalformedRuleLine(
            path, line_number, "condition color needs three values"
        )
    if count > MAX_FIELDS:
        raise MalformedRuleLine(
            path, line_number, f"expected at most {MAX_FIELDS} fields, found {count}"
        )

    bitmap_index = _parse_int(path, line_number, fields[0], "bitmap index")
    if bitmap_index not in (0, 1):
        raise MalformedRuleLine(path, line_number, f"bitmap index {bitmap_index} is not 0 or 1")

    color = _parse_rgb(path, line_number, fields[1:4], "color")

    choices = [
        "" if choice == NULL_TILE else normalize_tile_name(choice)
        for choice in fields[4].split()
    ]
    if not choices:
        raise MalformedRuleLine(path, line_number, "rule has no tile choices")

    layer = fields[5].strip()
    if not layer:
        raise MalformedRuleLine(path, line_number, "rule has no target layer")

    condition = BLACK
    if count == MAX_FIELDS:
        condition = _parse_rgb(path, line_number, fields[6:9], "condition")

    return Rule(bitmap_index, color, tuple(choices), layer, condition)


def parse_rules(text: str, path: str = "<string>") -> List[Rule]:
    """Parse Rules.txt text into rules, in file order."""
    rules = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.split("#", 1)[0]
        if not line.strip():
            continue
        rules.append(parse_rule_line(line, path, line_number))
    return rules


def read_rules_file(path: str) -> RuleSet:
    """
    Read a rules file.

    Raises:
        RulesFileError: If the file can't be read or a line is malformed
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise read_error(path, e, RulesFileError) from e
    return RuleSet(parse_rules(text, path))


def format_rule(rule: Rule) -> str:
    r, g, b = int_to_rgb(rule.color)
    choices = " ".join(choice or NULL_TILE for choice in rule.tile_choices)
    fields = [str(rule.bitmap_index), str(r), str(g), str(b), choices, rule.target_layer]
    if rule.condition != BLACK:
        fields.extend(str(c) for c in int_to_rgb(rule.condition))
    return ", ".join(fields)


def format_rules(rules: Iterable[Rule]) -> str:
    lines = ["# bitmap, r, g, b, tiles, layer [, condition r, g, b]"]
    lines.extend(format_rule(rule) for rule in rules)
    return "\n".join(lines) + "\n"


def write_rules_file(path: str, rules: Iterable[Rule]):
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_rules(rules))
