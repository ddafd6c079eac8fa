"""Qt widget that shows a raster image and hosts the rectangle selection.

`ImageViewport` is the integration shell around `SelectionInteractor`: it owns
the drawing surface, maps pointer events into image space, holds the pointer
grab for the length of an interaction and hands the current rectangle to an
owner-supplied overlay renderer on every paint.
"""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter, QPixmap
from PySide6.QtWidgets import QWidget

from imaging.raster import RasterImage
from ui.selector.coords import map_event_to_image
from ui.selector.interaction import InteractionConfig, SelectionInteractor
from ui.selector.models import RGBA, Point, Rect
from ui.selector.pointer_grab import PointerGrab


# overlay(painter, rect): draws the owner's selection box on top of the image.
Overlay = Callable[[QPainter, Rect], None]


class ImageViewport(QWidget):
    """
    Fixed-size image surface with pointer-driven rectangle selection.

    Composition:
    - RasterImage: pixel source; converted to a QPixmap once, at construction.
    - SelectionInteractor: Idle/Drawing/Relocating state machine in image space.
    - PointerGrab: explicit mouse grab from press to release so the release is
      never lost when the pointer leaves the widget.
    - overlay: caller-provided renderer, invoked with current_rect() on every paint.

    The widget is sized 1:1 to the image, which is what the coordinate mapper
    relies on. Pointer moves are ignored until the widget has been shown once
    (is_loading).
    """

    def __init__(
        self,
        *,
        image: RasterImage,
        on_selection_committed: Callable[[Rect], None],
        overlay: Overlay,
        on_pointer_sample: Optional[Callable[[Point, RGBA], None]] = None,
        log_events: bool = False,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self._image = image
        self._overlay = overlay
        self._on_selection_committed = on_selection_committed
        self._log_events = bool(log_events)

        # Cleared by the first showEvent, once the surface has been painted.
        self._loading = True

        # The only image → surface conversion for this widget's lifetime.
        self._pixmap = QPixmap.fromImage(image.to_qimage())
        self.setFixedSize(image.width, image.height)

        # Hover moves feed the pixel sampler even when no button is pressed.
        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.CrossCursor)

        self._grab = PointerGrab(self, log_events=self._log_events)
        self._interact = SelectionInteractor(
            width=image.width,
            height=image.height,
            on_selection_committed=self._on_selection_committed,
            on_pointer_sample=on_pointer_sample,
            sample_pixel=image.get_pixel,
            is_loading=lambda: self._loading,
            cfg=InteractionConfig(log_events=self._log_events),
        )

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def image(self) -> RasterImage:
        return self._image

    @property
    def interactor(self) -> SelectionInteractor:
        return self._interact

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def grab_held(self) -> bool:
        return self._grab.is_held

    def current_rect(self) -> Rect:
        """Rectangle the overlay is given: live preview while interacting, else the selection."""
        return self._interact.current_rect()

    def abort_interaction(self) -> None:
        """Cancel any in-progress draw/relocation and drop the pointer grab."""
        try:
            if self._interact.abort():
                self.update()
        finally:
            self._grab.release()

    # ----------------------------
    # Qt events
    # ----------------------------

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        if self._loading:
            self._loading = False
            if self._log_events:
                print("[viewport]", "reason=", "mount", "size=", (self._image.width, self._image.height), flush=True)

    def hideEvent(self, event) -> None:  # type: ignore[override]
        self.abort_interaction()
        super().hideEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.abort_interaction()
        super().closeEvent(event)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        """Blit the cached image, then let the owner draw its overlay for current_rect()."""
        _ = event
        p = QPainter(self)
        try:
            p.drawPixmap(0, 0, self._pixmap)
            self._overlay(p, self._interact.current_rect())
        finally:
            p.end()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        """
        Left press starts drawing or relocating and takes the pointer grab.

        Other buttons are left to the parent (e.g. scroll area panning).
        """
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        p = map_event_to_image(event, self)
        with self._grab.held():
            self._interact.on_pointer_down(p)
            self._grab.acquire()
        self.update()
        event.accept()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        p = map_event_to_image(event, self)
        with self._grab.held():
            changed = self._interact.on_pointer_move(p)
        if changed:
            self.update()
        event.accept()

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        """Left release commits the interaction; the grab is released on every path."""
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        p = map_event_to_image(event, self)
        try:
            committed = self._interact.on_pointer_up(p)
        finally:
            self._grab.release()
        if committed:
            self.update()
        event.accept()
