"""Explicit mouse grab held for the duration of one pointer interaction."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from PySide6.QtWidgets import QWidget


class PointerGrab:
    """
    Routes all mouse events to one widget while an interaction is active.

    Without the grab, a release outside the widget (or after the surrounding
    scroll area moved the widget away from the pointer) could be lost and the
    selection state would stay stuck in Drawing/Relocating.

    acquire()/release() are idempotent. `held()` wraps a handler so the grab is
    dropped if the handler raises; the exception still propagates.
    """

    def __init__(self, widget: QWidget, *, log_events: bool = False) -> None:
        self._w = widget
        self._log_events = bool(log_events)
        self._held = False

    @property
    def is_held(self) -> bool:
        return self._held

    def acquire(self) -> None:
        if self._held:
            return
        # grabMouse() on a hidden widget is rejected by Qt; there is nothing to route then.
        if not self._w.isVisible():
            return
        self._w.grabMouse()
        self._held = True
        if self._log_events:
            print("[viewport]", "reason=", "grab", flush=True)

    def release(self) -> None:
        if not self._held:
            return
        self._held = False
        self._w.releaseMouse()
        if self._log_events:
            print("[viewport]", "reason=", "release", flush=True)

    @contextmanager
    def held(self) -> Iterator[None]:
        try:
            yield
        except BaseException:
            self.release()
            raise
