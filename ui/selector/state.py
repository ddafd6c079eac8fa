# ui/selector/state.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ui.selector.models import Point, Rect


@dataclass(frozen=True)
class Idle:
    """No pointer interaction in progress."""


@dataclass(frozen=True)
class Drawing:
    """
    Pointer went down outside the current selection; a new rectangle is being drawn.

    Fields:
    - origin: image-space position of the pointer-down. The preview is always
      normalize(origin, current pointer) so no earlier move events are needed.
    - preview: last published preview rectangle.
    """
    origin: Point
    preview: Rect


@dataclass(frozen=True)
class Relocating:
    """
    Pointer went down inside the current selection; the selection is being moved.

    Fields:
    - pointer_origin: image-space position of the pointer-down.
    - selection_at_grab: selection snapshot at pointer-down. Every move delta is
      applied to this baseline, not to the previous preview.
    - preview: last translated rectangle that passed the image containment check.
    """
    pointer_origin: Point
    selection_at_grab: Rect
    preview: Rect


# Exactly one of these is active at any time.
InteractionState = Union[Idle, Drawing, Relocating]

IDLE = Idle()
