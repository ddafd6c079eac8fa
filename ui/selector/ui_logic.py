# ui/selector/ui_logic.py
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtWidgets import QApplication

from imaging.raster import RasterImage
from ui.selector.models import Rect
from ui.selector.paint import PaintConfig
from ui.selector.window import ViewerWindow


def run_viewer_ui(
    *,
    image: RasterImage,
    title: str,
    paint_cfg: PaintConfig = PaintConfig(),
    on_selection_committed: Optional[Callable[[Rect], None]] = None,
    log_events: bool = False,
) -> int:
    """
    Show a ViewerWindow for `image` and block in the Qt event loop until it closes.

    Responsibilities:
    - Reuse an existing QApplication (embedded/hosted contexts) or create one.
    - Create and show ViewerWindow for `image`.
    - Run the event loop until the last window closes.

    Returns:
        The Qt event loop exit code.

    Threading model:
    - Must be called from the UI thread; the selection core is single-threaded.
    """
    app = QApplication.instance() or QApplication([])

    w = ViewerWindow(
        image=image,
        title=str(title),
        paint_cfg=paint_cfg,
        on_selection_committed=on_selection_committed,
        log_events=bool(log_events),
    )
    w.show()

    return int(app.exec())
