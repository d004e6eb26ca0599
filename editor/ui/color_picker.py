"""
BMP Blend - Color Picker

Side panel listing the colors the rule table knows for the selected bitmap.
"""

from typing import List, Optional, Tuple

import pygame
from pygame import Surface, Rect

from bmpblend.core.constants import BLACK, int_to_rgb
from bmpblend.core.rules import RuleSet

from editor.core.constants import (
    COLOR_PICKER_BG,
    COLOR_SELECTION,
    COLOR_TEXT,
    SWATCH_ROW_HEIGHT,
    SWATCH_SIZE,
)


def palette_entries(rules: RuleSet, bitmap_index: int) -> List[Tuple[int, str]]:
    """
    (color, label) pairs for one bitmap, black ("erase") first.

    Each color appears once, labelled by the first rule for it that has a
    label, or else by that rule's first tile choice.
    """
    entries: dict[int, str] = {BLACK: "(erase)"}
    labelled = set()
    for rule in rules:
        if rule.bitmap_index != bitmap_index or rule.color == BLACK:
            continue
        if rule.color in labelled:
            continue
        if rule.label:
            entries[rule.color] = rule.label
            labelled.add(rule.color)
        elif rule.color not in entries:
            entries[rule.color] = next((t for t in rule.tile_choices if t), "null")
    return list(entries.items())


class ColorPicker:
    """Color selection panel."""

    def __init__(self, rect: Rect):
        self.rect = rect
        self.scroll_y = 0
        self.entries: List[Tuple[int, str]] = []
        self.selected_color: int = BLACK
        self.hovered_entry: Optional[Tuple[int, str]] = None

    def set_entries(self, entries: List[Tuple[int, str]]):
        self.entries = entries
        self.scroll_y = 0

    def handle_event(self, event: pygame.event.Event) -> Optional[int]:
        """
        Handle input events.

        Returns:
            The clicked color, or None if the event didn't select one
        """
        if event.type == pygame.MOUSEMOTION:
            if self.rect.collidepoint(event.pos):
                self.hovered_entry = self._entry_at_position(event.pos)
            else:
                self.hovered_entry = None

        if event.type == pygame.MOUSEBUTTONDOWN and self.rect.collidepoint(event.pos):
            if event.button == 1:
                entry = self._entry_at_position(event.pos)
                if entry is not None:
                    self.selected_color = entry[0]
                    return entry[0]
            elif event.button == 4:
                self.scroll_y = max(0, self.scroll_y - SWATCH_ROW_HEIGHT)
            elif event.button == 5:
                self.scroll_y += SWATCH_ROW_HEIGHT
        return None

    def _entry_at_position(self, pos: Tuple[int, int]) -> Optional[Tuple[int, str]]:
        row = (pos[1] - self.rect.y - 10 + self.scroll_y) // SWATCH_ROW_HEIGHT
        if 0 <= row < len(self.entries):
            return self.entries[row]
        return None

    def render(self, screen: Surface, font: pygame.font.Font):
        pygame.draw.rect(screen, COLOR_PICKER_BG, self.rect)
        screen.set_clip(self.rect)

        for row, (color, label) in enumerate(self.entries):
            y = self.rect.y + 10 + row * SWATCH_ROW_HEIGHT - self.scroll_y
            if y + SWATCH_ROW_HEIGHT < self.rect.y or y > self.rect.bottom:
                continue

            swatch = Rect(self.rect.x + 10, y, SWATCH_SIZE, SWATCH_SIZE)
            pygame.draw.rect(screen, int_to_rgb(color), swatch)
            if color == self.selected_color:
                pygame.draw.rect(screen, COLOR_SELECTION, swatch.inflate(4, 4), 2)

            text = font.render(label, True, COLOR_TEXT)
            screen.blit(text, (swatch.right + 8, y + 3))

        screen.set_clip(None)
