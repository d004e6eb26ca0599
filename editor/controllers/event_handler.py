"""
BMP Blend - Event Handler

Handles user input events including mouse, keyboard, and window events.
"""

from typing import Callable, List, Optional, Tuple

import pygame
from pygame import Rect

from .editor_state import EditorState
from .paint_controller import PaintController
from editor.ui.color_picker import ColorPicker
from editor.ui.widgets import Button
from editor.core.constants import (
    CANVAS_OFFSET_X,
    CANVAS_OFFSET_Y,
    SCROLL_STEP,
    STATUS_HEIGHT,
)


class EventHandler:
    """Handles all user input events."""

    def __init__(
        self,
        state: EditorState,
        painter: PaintController,
        color_picker: ColorPicker,
        buttons: List[Button],
        screen_width: int,
        screen_height: int,
        on_load: Callable[[], None],
        on_save: Callable[[], None],
        on_reload_rules: Callable[[], None],
        on_color_change: Callable[[], None],
        on_resize: Callable[[int, int], None],
    ):
        """
        Initialize event handler.

        Args:
            state: Editor state
            painter: Paint controller for brush strokes, eyedropper and undo
            color_picker: Color side panel
            buttons: List of UI buttons
            screen_width: Screen width
            screen_height: Screen height
            on_load: Callback for load action
            on_save: Callback for save action
            on_reload_rules: Callback to reread the rule/blend files
            on_color_change: Callback when the painted bitmap or its color changes
            on_resize: Callback for window resize (width, height)
        """
        self.state = state
        self.painter = painter
        self.color_picker = color_picker
        self.buttons = buttons
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.on_load = on_load
        self.on_save = on_save
        self.on_reload_rules = on_reload_rules
        self.on_color_change = on_color_change
        self.on_resize = on_resize

    def update_screen_size(self, width: int, height: int):
        self.screen_width = width
        self.screen_height = height

    def handle_events(self, events: List[pygame.event.Event]) -> bool:
        """
        Handle all pygame events.

        Returns:
            True if application should continue running, False if quit requested
        """
        for event in events:
            if event.type == pygame.QUIT:
                return False

            if event.type == pygame.KEYDOWN:
                self._handle_key(event)
                continue

            if any(button.handle_event(event) for button in self.buttons):
                continue

            picked = self.color_picker.handle_event(event)
            if picked is not None:
                self.state.color = picked
                self.on_color_change()
                continue

            if event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_down(event)

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1 and self.state.mouse_down:
                    self.state.mouse_down = False
                    self.painter.end_stroke()

            elif event.type == pygame.MOUSEMOTION:
                if self.state.mouse_down:
                    self._paint_at(event.pos)

            elif event.type == pygame.VIDEORESIZE:
                self.on_resize(event.w, event.h)

        return True

    def _handle_mouse_down(self, event):
        cell = self._screen_to_cell(event.pos)
        if event.button == 1 and cell is not None:
            self.state.mouse_down = True
            self.painter.begin_stroke()
            self.painter.paint_at(*cell)
        elif event.button == 3 and cell is not None:
            picked = self.painter.pick_color(*cell)
            if picked is not None:
                self.color_picker.selected_color = picked
                self.on_color_change()
        elif event.button == 4:
            self.state.canvas_offset_y = max(0, self.state.canvas_offset_y - SCROLL_STEP)
        elif event.button == 5:
            self.state.canvas_offset_y += SCROLL_STEP

    def _handle_key(self, event):
        ctrl = pygame.key.get_mods() & pygame.KMOD_CTRL

        if ctrl and event.key == pygame.K_s:
            self.on_save()
        elif ctrl and event.key == pygame.K_o:
            self.on_load()
        elif ctrl and event.key == pygame.K_z:
            self.painter.undo()
        elif ctrl and event.key == pygame.K_y:
            self.painter.redo()

        elif event.key == pygame.K_TAB:
            self.state.toggle_bitmap()
            self.on_color_change()
        elif event.key == pygame.K_g:
            self.state.toggle_grid()
        elif event.key == pygame.K_b:
            self.state.toggle_bitmap_overlay()
        elif event.key == pygame.K_F5:
            self.on_reload_rules()

        elif event.key == pygame.K_LEFTBRACKET:
            self.state.cycle_brush(-1)
        elif event.key == pygame.K_RIGHTBRACKET:
            self.state.cycle_brush(1)
        elif event.key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
            self.state.zoom(2)
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.state.zoom(0.5)

        elif event.key == pygame.K_LEFT:
            self.state.canvas_offset_x = max(0, self.state.canvas_offset_x - SCROLL_STEP)
        elif event.key == pygame.K_RIGHT:
            self.state.canvas_offset_x += SCROLL_STEP
        elif event.key == pygame.K_UP:
            self.state.canvas_offset_y = max(0, self.state.canvas_offset_y - SCROLL_STEP)
        elif event.key == pygame.K_DOWN:
            self.state.canvas_offset_y += SCROLL_STEP

    def get_canvas_rect(self) -> Rect:
        """Get the canvas drawing area."""
        return Rect(
            CANVAS_OFFSET_X,
            CANVAS_OFFSET_Y,
            self.screen_width - CANVAS_OFFSET_X,
            self.screen_height - CANVAS_OFFSET_Y - STATUS_HEIGHT,
        )

    def _screen_to_cell(self, screen_pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Convert screen position to map cell (x, y), or None off the canvas."""
        canvas_rect = self.get_canvas_rect()
        if not canvas_rect.collidepoint(screen_pos):
            return None

        local_x = screen_pos[0] - canvas_rect.x + self.state.canvas_offset_x
        local_y = screen_pos[1] - canvas_rect.y + self.state.canvas_offset_y
        return (local_x // self.state.cell_size, local_y // self.state.cell_size)

    def _paint_at(self, screen_pos: Tuple[int, int]):
        cell = self._screen_to_cell(screen_pos)
        if cell is not None:
            self.painter.paint_at(*cell)
