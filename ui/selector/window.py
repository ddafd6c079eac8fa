"""Top-level viewer window hosting an ImageViewport.

`ViewerWindow` is the owning application for the selection core: it supplies
the overlay renderer, receives committed selections and pointer samples, shows
them in the status bar, and offers cropping to the committed selection.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QLabel, QMainWindow, QScrollArea

from imaging.raster import RasterImage
from ui.selector.models import RGBA, Point, Rect
from ui.selector.paint import PaintConfig, SelectionOverlayPainter
from ui.selector.viewport import ImageViewport


def format_rect(rect: Rect) -> str:
    return f"({rect.origin.x}, {rect.origin.y}) - ({rect.end.x}, {rect.end.y})  [{rect.width}x{rect.height}]"


def format_sample(p: Point, rgba: RGBA) -> str:
    r, g, b, a = rgba
    return f"x={p.x} y={p.y}  rgba=({r}, {g}, {b}, {a})"


class ViewerWindow(QMainWindow):
    """
    Main window: scrollable image viewport + status bar + crop action.

    Composition:
    - QScrollArea: hosts the fixed-size ImageViewport; large images scroll.
    - ImageViewport: selection interaction and image painting.
    - SelectionOverlayPainter: default overlay drawn for the viewport's current rect.
    - Status bar: last pointer sample (left) and last committed selection (right).
    - "Crop to selection": opens the committed region in a new ViewerWindow.

    Callbacks passed in by the caller are forwarded after the window's own
    bookkeeping, so an embedding application sees the same events.
    """

    # Emitted from closeEvent; the parent window uses it to drop crop children.
    closed = Signal()

    def __init__(
        self,
        *,
        image: RasterImage,
        title: str,
        paint_cfg: PaintConfig = PaintConfig(),
        on_selection_committed: Optional[Callable[[Rect], None]] = None,
        log_events: bool = False,
    ) -> None:
        super().__init__()

        self._title = str(title)
        self._paint_cfg = paint_cfg
        self._log_events = bool(log_events)
        self._on_selection_committed = on_selection_committed

        # Last selection reported by the viewport; None until the first commit.
        self._committed: Optional[Rect] = None

        # Child windows opened by "Crop to selection"; kept alive until they close.
        self._children: list[ViewerWindow] = []

        self._viewport = ImageViewport(
            image=image,
            on_selection_committed=self._handle_commit,
            overlay=SelectionOverlayPainter(cfg=paint_cfg),
            on_pointer_sample=self._handle_sample,
            log_events=self._log_events,
        )

        scroll = QScrollArea(self)
        scroll.setWidget(self._viewport)
        scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCentralWidget(scroll)

        self._sample_label = QLabel("")
        self._selection_label = QLabel("no selection")
        self.statusBar().addWidget(self._sample_label, 1)
        self.statusBar().addPermanentWidget(self._selection_label)

        self._crop_action = QAction("Crop to selection", self)
        self._crop_action.setEnabled(False)
        self._crop_action.triggered.connect(self.crop_to_selection)  # type: ignore[arg-type]
        tb = self.addToolBar("Selection")
        tb.addAction(self._crop_action)

        self.setWindowTitle(f"{self._title} ({image.width}x{image.height})")

    @property
    def viewport(self) -> ImageViewport:
        return self._viewport

    @property
    def committed(self) -> Optional[Rect]:
        return self._committed

    @property
    def children_windows(self) -> list["ViewerWindow"]:
        return list(self._children)

    def _handle_commit(self, rect: Rect) -> None:
        self._committed = rect
        self._selection_label.setText(format_rect(rect))
        self._crop_action.setEnabled(rect.width > 0 and rect.height > 0)
        if self._on_selection_committed is not None:
            self._on_selection_committed(rect)

    def _handle_sample(self, p: Point, rgba: RGBA) -> None:
        self._sample_label.setText(format_sample(p, rgba))

    def crop_to_selection(self) -> Optional["ViewerWindow"]:
        """
        Open the committed selection as a new image in its own window.

        Returns the new window, or None when there is nothing to crop. The child
        is deleted when closed and drops out of children_windows at that point.
        """
        rect = self._committed
        if rect is None or rect.width <= 0 or rect.height <= 0:
            return None
        cropped = self._viewport.image.crop(rect)
        w = ViewerWindow(
            image=cropped,
            title=f"{self._title} [crop]",
            paint_cfg=self._paint_cfg,
            log_events=self._log_events,
        )
        w.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)
        w.closed.connect(partial(self._forget_child, w))  # type: ignore[arg-type]
        self._children.append(w)
        w.show()
        return w

    def _forget_child(self, w: "ViewerWindow") -> None:
        if w in self._children:
            self._children.remove(w)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        # Each child removes itself through its closed signal.
        for w in list(self._children):
            w.close()
        self._children.clear()
        event.accept()
        self.closed.emit()
