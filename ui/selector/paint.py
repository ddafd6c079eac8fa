# ui/selector/paint.py
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QColor, QPainter, QPen

from ui.selector.models import Rect


@dataclass(frozen=True)
class PaintConfig:
    """
    Rendering configuration for the default selection overlay.

    - border_px: outline thickness of the selection box.
    - color: outline color.
    - dim_alpha: alpha (0..255) of the black veil drawn over the unselected area; 0 disables it.
    - dashed: dashed instead of solid outline.
    """
    border_px: int = 1
    color: str = "#00FFFF"
    dim_alpha: int = 90
    dashed: bool = True


class SelectionOverlayPainter:
    """
    Default overlay renderer for ImageViewport.

    Callable as overlay(painter, rect): draws a veil over everything outside the
    rectangle and an outline around it. The empty selection draws nothing.

    Selection corners are edge coordinates, so a rect from (x0, y0) to (x1, y1)
    covers pixel columns x0..x1-1; QRect is built from width/height to match.
    """

    def __init__(self, *, cfg: PaintConfig = PaintConfig()) -> None:
        self._cfg = cfg

    def __call__(self, p: QPainter, rect: Rect) -> None:
        if rect.is_empty:
            return

        sel = QRect(rect.origin.x, rect.origin.y, rect.width, rect.height)
        full = p.viewport()

        p.save()
        if self._cfg.dim_alpha > 0:
            veil = QColor(0, 0, 0, int(self._cfg.dim_alpha))
            # Four bands around the selection; avoids composition modes.
            p.fillRect(QRect(full.left(), full.top(), full.width(), max(0, sel.top() - full.top())), veil)
            p.fillRect(QRect(full.left(), sel.top() + sel.height(), full.width(), max(0, full.bottom() + 1 - (sel.top() + sel.height()))), veil)
            p.fillRect(QRect(full.left(), sel.top(), max(0, sel.left() - full.left()), sel.height()), veil)
            p.fillRect(QRect(sel.left() + sel.width(), sel.top(), max(0, full.right() + 1 - (sel.left() + sel.width())), sel.height()), veil)

        pen = QPen(QColor(self._cfg.color))
        pen.setWidth(int(self._cfg.border_px))
        if self._cfg.dashed:
            pen.setStyle(Qt.PenStyle.DashLine)
        p.setPen(pen)
        p.setBrush(Qt.BrushStyle.NoBrush)
        # Outline sits on the last covered pixel row/column.
        p.drawRect(sel.adjusted(0, 0, -1, -1) if sel.width() > 0 and sel.height() > 0 else sel)
        p.restore()
