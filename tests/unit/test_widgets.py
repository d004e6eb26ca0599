"""Unit tests for toolbar buttons."""

from unittest.mock import Mock

import pygame
from pygame import Rect

from editor.ui.widgets import Button


class MockEvent:
    def __init__(self, type, **kwargs):
        self.type = type
        for k, v in kwargs.items():
            setattr(self, k, v)


def test_click_inside_fires_callback():
    callback = Mock()
    button = Button(Rect(10, 5, 60, 30), "Main", callback, swatch=(0, 255, 0))

    assert button.handle_event(MockEvent(pygame.MOUSEBUTTONDOWN, button=1, pos=(20, 10)))
    callback.assert_called_once()


def test_click_outside_or_right_click_ignored():
    callback = Mock()
    button = Button(Rect(10, 5, 60, 30), "Main", callback)

    assert not button.handle_event(MockEvent(pygame.MOUSEBUTTONDOWN, button=1, pos=(200, 10)))
    assert not button.handle_event(MockEvent(pygame.MOUSEBUTTONDOWN, button=3, pos=(20, 10)))
    callback.assert_not_called()


def test_hover_tracks_motion():
    button = Button(Rect(10, 5, 60, 30), "Grid", Mock())
    button.handle_event(MockEvent(pygame.MOUSEMOTION, pos=(20, 10)))
    assert button.hovered
    button.handle_event(MockEvent(pygame.MOUSEMOTION, pos=(200, 10)))
    assert not button.hovered
