"""
BMP Blend - Editor Application

Main application class that wires the map, the blender and the UI together.
"""
import logging
from pathlib import Path
from typing import List, Optional

import pygame
from pygame import Rect

from bmpblend.core.bmp_blender import BmpBlender
from bmpblend.core.bmp_map import BmpMap
from bmpblend.core.constants import BITMAP_NAMES, MAIN_BITMAP, VEG_BITMAP, FLOOR_LAYER, int_to_rgb

from .core.constants import *
from .controllers.editor_state import EditorState
from .controllers.event_handler import EventHandler
from .controllers.paint_controller import PaintController, brush_rect
from .controllers.undo_manager import UndoManager
from .rendering.grid_renderer import GridRenderer
from .rendering.layer_renderer import LayerRenderer
from .ui.color_picker import ColorPicker, palette_entries
from .ui.dialogs import PROJECT_FILETYPES, TEXT_FILETYPES, open_file_dialog, save_file_dialog
from .ui.widgets import Button

logger = logging.getLogger(__name__)


class EditorApplication:
    """Main editor application."""

    def __init__(self):
        pygame.init()

        self.screen_width = 1200
        self.screen_height = 800
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height),
            pygame.RESIZABLE
        )
        pygame.display.set_caption("BMP Blend Editor")

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_small = pygame.font.SysFont("monospace", 12)

        self.state = EditorState()
        self.undo_manager = UndoManager()
        self.blender = BmpBlender()
        self.painter = PaintController(self.blender, self.state, self.undo_manager)
        self.layer_renderer: Optional[LayerRenderer] = None
        self.message = ""

        self.blender.warnings_changed.connect(self._on_warnings_changed)

        self.buttons: List[Button] = []
        self.bitmap_buttons: List[Button] = []
        self.color_picker = ColorPicker(self._picker_rect())
        self._create_ui()

        self.event_handler = EventHandler(
            self.state,
            self.painter,
            self.color_picker,
            self.buttons,
            self.screen_width,
            self.screen_height,
            on_load=self._on_load,
            on_save=self._on_save,
            on_reload_rules=self._on_reload_rules,
            on_color_change=self._update_bitmap_buttons,
            on_resize=self._on_resize,
        )

        self.running = True
        self.clock = pygame.time.Clock()

    def _picker_rect(self) -> Rect:
        return Rect(0, TOOLBAR_HEIGHT, PICKER_WIDTH, self.screen_height - TOOLBAR_HEIGHT - STATUS_HEIGHT)

    def _create_ui(self):
        """Create toolbar buttons."""
        self.buttons.clear()
        x = 10

        def add(width: int, text: str, callback, gap: int = 10) -> Button:
            nonlocal x
            button = Button(Rect(x, 5, width, 30), text, callback)
            self.buttons.append(button)
            x += width + gap
            return button

        add(60, "Load", self._on_load)
        add(60, "Save", self._on_save, gap=20)
        self.bitmap_buttons = [
            add(60, "Main", lambda: self._set_bitmap(MAIN_BITMAP)),
            add(60, "Veg", lambda: self._set_bitmap(VEG_BITMAP), gap=20),
        ]
        add(50, "Grid", self.state.toggle_grid)
        add(70, "Bitmap", self.state.toggle_bitmap_overlay, gap=20)
        add(60, "Undo", self.painter.undo)
        add(60, "Redo", self.painter.redo, gap=20)
        add(80, "Reload", self._on_reload_rules)

        self._update_bitmap_buttons()

    def _set_bitmap(self, bitmap_index: int):
        self.state.set_bitmap(bitmap_index)
        self._update_bitmap_buttons()

    def _update_bitmap_buttons(self):
        """Update bitmap button states and the picker's colors."""
        for index, button in enumerate(self.bitmap_buttons):
            button.active = (index == self.state.bitmap_index)
            button.swatch = int_to_rgb(self.state.colors[index])
        self.color_picker.set_entries(palette_entries(self.blender.rules, self.state.bitmap_index))
        self.color_picker.selected_color = self.state.color

    def _on_warnings_changed(self):
        for warning in self.blender.warnings():
            logger.warning(warning)

    def _on_load(self):
        path = open_file_dialog("Load Project", PROJECT_FILETYPES)
        if path:
            self.load_project(path)

    def _on_save(self):
        """Save the current project."""
        bmp_map = self.blender.map
        if bmp_map is None:
            return
        if bmp_map.filepath:
            bmp_map.save()
        else:
            path = save_file_dialog("Save Project", ".json", PROJECT_FILETYPES)
            if path:
                bmp_map.save(path)

    def _on_reload_rules(self):
        """Reread the project's rule and blend files."""
        bmp_map = self.blender.map
        if bmp_map is None:
            return
        settings = bmp_map.bmp_settings
        if not settings.rules_file:
            settings.rules_file = open_file_dialog("Open Rules", TEXT_FILETYPES) or ""
        if not settings.blends_file:
            settings.blends_file = open_file_dialog("Open Blends", TEXT_FILETYPES) or ""
        if not (settings.rules_file and settings.blends_file):
            self.message = "No rules/blends files chosen"
            return
        if self.blender.read(settings.rules_file, settings.blends_file):
            self.message = f"Loaded {len(self.blender.rules)} rules, {len(self.blender.blends)} blends"
        else:
            self.message = self.blender.error_string.splitlines()[0]
        self._update_bitmap_buttons()

    def _on_resize(self, width: int, height: int):
        """Handle window resize."""
        self.screen_width = width
        self.screen_height = height
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.color_picker.rect = self._picker_rect()
        self.event_handler.update_screen_size(width, height)

    def load_project(self, path: str):
        """Load a project and build its tile layers."""
        try:
            bmp_map = BmpMap.load(path)
        except (FileNotFoundError, ValueError) as e:
            self.message = str(e)
            return

        if self.layer_renderer is not None:
            self.layer_renderer.detach()
        self.blender.set_map(bmp_map)
        self.layer_renderer = LayerRenderer(self.blender)
        self.undo_manager.clear()
        self.state.reset_canvas_position()

        settings = bmp_map.bmp_settings
        if settings.rules_file and settings.blends_file:
            self._on_reload_rules()
        else:
            self.blender.recreate()
            self.message = "Project has no rules/blends files"
            self._update_bitmap_buttons()

    def run(self):
        """Main loop."""
        while self.running:
            events = pygame.event.get()
            self.running = self.event_handler.handle_events(events)
            self._render()
            self.clock.tick(60)

        pygame.quit()

    def _render(self):
        self.screen.fill(COLOR_BG)

        pygame.draw.rect(self.screen, COLOR_TOOLBAR, (0, 0, self.screen_width, TOOLBAR_HEIGHT))
        for button in self.buttons:
            button.render(self.screen, self.font)

        self.color_picker.render(self.screen, self.font_small)
        self._render_canvas()
        self._render_status()

        pygame.display.flip()

    def _render_canvas(self):
        canvas_rect = self.event_handler.get_canvas_rect()
        pygame.draw.rect(self.screen, (0, 0, 0), canvas_rect)

        bmp_map = self.blender.map
        if bmp_map is None or self.layer_renderer is None:
            text = self.font.render("No project loaded. Press Ctrl+O to open.", True, COLOR_TEXT)
            self.screen.blit(text, (canvas_rect.centerx - text.get_width() // 2, canvas_rect.centery))
            return

        self.layer_renderer.render(
            self.screen,
            canvas_rect,
            self.state.cell_size,
            self.state.canvas_offset_x,
            self.state.canvas_offset_y,
            self.state.bitmap_index if self.state.show_bitmap else None,
        )

        if self.state.show_grid:
            GridRenderer.render(
                self.screen,
                canvas_rect,
                bmp_map.width,
                bmp_map.height,
                self.state.cell_size,
                self.state.canvas_offset_x,
                self.state.canvas_offset_y,
            )

        cell = self.event_handler._screen_to_cell(pygame.mouse.get_pos())
        if cell is not None and bmp_map.bmp(MAIN_BITMAP).contains(*cell):
            GridRenderer.render_brush(
                self.screen,
                canvas_rect,
                brush_rect(*cell, self.state.brush_size),
                self.state.cell_size,
                self.state.canvas_offset_x,
                self.state.canvas_offset_y,
            )

    def _render_status(self):
        status_rect = Rect(0, self.screen_height - STATUS_HEIGHT, self.screen_width, STATUS_HEIGHT)
        pygame.draw.rect(self.screen, COLOR_STATUS, status_rect)

        status_parts = [
            f"Bitmap: {BITMAP_NAMES[self.state.bitmap_index].title()}",
            f"Color: #{self.state.color:06X}",
            f"Brush: {self.state.brush_size}",
        ]

        bmp_map = self.blender.map
        cell = self.event_handler._screen_to_cell(pygame.mouse.get_pos())
        if bmp_map is not None and cell is not None and bmp_map.bmp(MAIN_BITMAP).contains(*cell):
            x, y = cell
            status_parts.append(f"Cell: ({x}, {y})")
            status_parts.append(
                f"#{bmp_map.bmp(MAIN_BITMAP).pixel(x, y):06X}/#{bmp_map.bmp(VEG_BITMAP).pixel(x, y):06X}"
            )
            floor = self.blender.tile_name_at(FLOOR_LAYER, x, y)
            if floor:
                status_parts.append(f"Floor: {floor}")

        warnings = self.blender.warnings()
        if warnings:
            status_parts.append(f"Warnings: {len(warnings)}")
        if self.message:
            status_parts.append(self.message)

        if bmp_map is not None and bmp_map.filepath:
            modified = "*" if bmp_map.modified else ""
            status_parts.append(f"File: {Path(bmp_map.filepath).name}{modified}")

        status_text = "  |  ".join(status_parts)
        text_surf = self.font.render(status_text, True, COLOR_TEXT)
        self.screen.blit(text_surf, (10, self.screen_height - STATUS_HEIGHT + 8))
