"""
BMP Blend - Signals

Minimal callback lists used to notify collaborators (renderers, editor)
about engine changes.
"""

from typing import Callable, List


class Signal:
    """A list of callbacks invoked in connection order."""

    def __init__(self):
        self._callbacks: List[Callable] = []

    def connect(self, callback: Callable):
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def disconnect(self, callback: Callable):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def emit(self, *args):
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)
