"""
BMP Blend - Rule and Blend Tables

In-memory tables produced by the rule/blend file readers. Tables are built
once and never edited in place; a reload replaces them wholesale.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .constants import BLACK, FLOOR_LAYER, MAIN_BITMAP


class Direction(Enum):
    """Neighbor direction a blend tests, valued by its blend-file token."""

    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"


# Neighbor offsets (dx, dy) that must all hold the blend's main tile
DIRECTION_OFFSETS: Dict[Direction, Tuple[Tuple[int, int], ...]] = {
    Direction.N: ((0, -1),),
    Direction.S: ((0, 1),),
    Direction.E: ((1, 0),),
    Direction.W: ((-1, 0),),
    Direction.NE: ((0, -1), (1, 0)),
    Direction.SE: ((0, 1), (1, 0)),
    Direction.NW: ((0, -1), (-1, 0)),
    Direction.SW: ((0, 1), (-1, 0)),
}


@dataclass(frozen=True)
class Rule:
    """Maps a bitmap color to a choice of tiles on one target layer."""

    bitmap_index: int
    color: int
    tile_choices: Tuple[str, ...]
    target_layer: str
    condition: int = BLACK
    label: Optional[str] = None

    def choose(self, rand_value: int) -> str:
        """Pick a tile choice using a per-cell random value."""
        return self.tile_choices[rand_value % len(self.tile_choices)]


@dataclass(frozen=True)
class Blend:
    """Overlays blend_tile on cells next to main_tile in one direction."""

    target_layer: str
    main_tile: str
    blend_tile: str
    direction: Direction
    exclusion_list: frozenset = field(default_factory=frozenset)


def _unique_in_order(names: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for name in names:
        seen.setdefault(name, None)
    return list(seen)


class RuleSet:
    """
    Ordered rules, grouped by color for constant-time lookup.

    Rules sharing a color keep their file order inside the group, and the
    distinct target layers keep the order in which they first appear.
    """

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: Tuple[Rule, ...] = tuple(rules)
        self._by_color: Dict[int, List[Rule]] = {}
        for rule in self._rules:
            self._by_color.setdefault(rule.color, []).append(rule)
        self._layers = _unique_in_order(rule.target_layer for rule in self._rules)
        self._floor_rules = tuple(
            rule for rule in self._rules
            if rule.target_layer == FLOOR_LAYER and rule.bitmap_index == MAIN_BITMAP
        )

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def layers(self) -> List[str]:
        """Distinct target layers of all rules."""
        return list(self._layers)

    @property
    def floor_rules(self) -> Tuple[Rule, ...]:
        """Main-bitmap rules that target the reference floor layer."""
        return self._floor_rules

    def rules_for_color(self, color: int) -> List[Rule]:
        return self._by_color.get(color, [])

    def tile_names(self) -> List[str]:
        """Every non-empty tile name any rule can produce, in rule order."""
        return _unique_in_order(
            name for rule in self._rules for name in rule.tile_choices if name
        )

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self._rules == other._rules

    def __repr__(self) -> str:
        return f"RuleSet({len(self._rules)} rules, layers={self._layers})"


class BlendSet:
    """Ordered blends, grouped by target layer."""

    def __init__(self, blends: Iterable[Blend] = ()):
        self._blends: Tuple[Blend, ...] = tuple(blends)
        self._by_layer: Dict[str, List[Blend]] = {}
        for blend in self._blends:
            self._by_layer.setdefault(blend.target_layer, []).append(blend)

    @property
    def blends(self) -> Tuple[Blend, ...]:
        return self._blends

    @property
    def layers(self) -> List[str]:
        """Distinct target layers of all blends."""
        return list(self._by_layer)

    def blends_for_layer(self, layer: str) -> List[Blend]:
        return self._by_layer.get(layer, [])

    def tile_names(self) -> List[str]:
        """Every non-empty tile name mentioned by a blend."""
        return _unique_in_order(
            name
            for blend in self._blends
            for name in (blend.main_tile, blend.blend_tile)
            if name
        )

    def __len__(self) -> int:
        return len(self._blends)

    def __iter__(self):
        return iter(self._blends)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BlendSet):
            return NotImplemented
        return self._blends == other._blends

    def __repr__(self) -> str:
        return f"BlendSet({len(self._blends)} blends, layers={self.layers})"
