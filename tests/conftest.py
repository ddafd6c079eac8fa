import os

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from imaging.raster import RasterImage  # noqa: E402


@pytest.fixture()
def qapp() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def gradient_rgba(width: int, height: int) -> np.ndarray:
    """(H,W,4) test pattern: r = x, g = y, b = 7, a = 255 (mod 256)."""
    ys, xs = np.mgrid[0:height, 0:width]
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., 0] = xs % 256
    arr[..., 1] = ys % 256
    arr[..., 2] = 7
    arr[..., 3] = 255
    return arr


@pytest.fixture()
def image_100() -> RasterImage:
    return RasterImage(gradient_rgba(100, 100))


@pytest.fixture()
def make_image():
    def _make(width: int, height: int) -> RasterImage:
        return RasterImage(gradient_rgba(width, height))

    return _make
