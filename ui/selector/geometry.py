"""Pure rectangle helpers used by the selection state machine.

Everything here is total: rectangles only come out of `normalize`, so there is
no malformed input to reject.
"""

from __future__ import annotations

from ui.selector.models import Point, Rect


def normalize(a: Point, b: Point) -> Rect:
    """
    Build a rectangle from two arbitrary corners.

    The result has origin = componentwise min and end = componentwise max, so
    normalize(a, b) == normalize(b, a).
    """
    return Rect(
        origin=Point(min(a.x, b.x), min(a.y, b.y)),
        end=Point(max(a.x, b.x), max(a.y, b.y)),
    )


def point_in(rect: Rect, p: Point) -> bool:
    """Inclusive point-in-rectangle test on both axes."""
    return rect.origin.x <= p.x <= rect.end.x and rect.origin.y <= p.y <= rect.end.y


def contains(outer: Rect, inner: Rect) -> bool:
    """
    True iff every corner of `inner` lies within `outer` (boundary included).

    Checking the two normalized corners is enough; the other two share their
    coordinates.
    """
    return point_in(outer, inner.origin) and point_in(outer, inner.end)


def image_rect(width: int, height: int) -> Rect:
    """Rectangle covering a whole image: (0, 0) to (width, height)."""
    return normalize(Point(0, 0), Point(int(width), int(height)))


def translate(rect: Rect, dx: int, dy: int) -> Rect:
    return normalize(
        Point(rect.origin.x + dx, rect.origin.y + dy),
        Point(rect.end.x + dx, rect.end.y + dy),
    )
