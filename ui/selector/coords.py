"""Screen → image pixel coordinate mapping.

The viewport is sized 1:1 to the image, so mapping is a plain offset
subtraction. No clamping happens here: callers get out-of-range points when the
pointer is outside the image and must bounds-check them themselves.
"""

from __future__ import annotations

from PySide6.QtCore import QPoint
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QWidget

from ui.selector.models import Point


def map_to_image(screen_x: float, screen_y: float, element_left: float, element_top: float) -> Point:
    """
    Convert a screen position into coordinates relative to an element's top-left.

    Fractional positions (high-DPI pointer devices) are truncated, never rounded.
    """
    return Point(int(screen_x - element_left), int(screen_y - element_top))


def map_event_to_image(event: QMouseEvent, widget: QWidget) -> Point:
    """
    Map a Qt mouse event into the image space of `widget`.

    Uses global coordinates on both sides so the result stays correct while the
    widget scrolls inside a QScrollArea or receives grabbed events from outside
    its own rectangle.

    Precondition: `widget` is already sized to the image's pixel dimensions.
    """
    g = event.globalPosition()
    top_left = widget.mapToGlobal(QPoint(0, 0))
    return map_to_image(g.x(), g.y(), top_left.x(), top_left.y())
