"""
BMP Blend - UI Widgets

Toolbar button used by the editor.
"""

from typing import Callable, Optional

import pygame
from pygame import Surface, Rect

from editor.core.constants import (
    COLOR_BUTTON,
    COLOR_BUTTON_HOVER,
    COLOR_BUTTON_ACTIVE,
    COLOR_GRID,
    COLOR_TEXT,
)


class Button:
    """Clickable toolbar button with an optional swatch color."""

    def __init__(
        self,
        rect: Rect,
        text: str,
        callback: Callable[[], None],
        swatch: Optional[tuple[int, int, int]] = None,
    ):
        self.rect = rect
        self.text = text
        self.callback = callback
        self.swatch = swatch
        self.hovered = False
        self.active = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Track hover and fire the callback on left click. Returns True if clicked."""
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False

    def render(self, screen: Surface, font: pygame.font.Font):
        if self.active:
            color = COLOR_BUTTON_ACTIVE
        elif self.hovered:
            color = COLOR_BUTTON_HOVER
        else:
            color = COLOR_BUTTON
        pygame.draw.rect(screen, color, self.rect)
        pygame.draw.rect(screen, COLOR_GRID, self.rect, 1)

        text_rect = self.rect
        if self.swatch is not None:
            swatch_rect = Rect(self.rect.x + 4, self.rect.y + 6, self.rect.height - 12, self.rect.height - 12)
            pygame.draw.rect(screen, self.swatch, swatch_rect)
            text_rect = Rect(swatch_rect.right, self.rect.y, self.rect.right - swatch_rect.right, self.rect.height)

        text_surf = font.render(self.text, True, COLOR_TEXT)
        screen.blit(text_surf, text_surf.get_rect(center=text_rect.center))
