"""RGBA raster image backed by a numpy array.

`RasterImage` is the read-only pixel source the selection viewer works with:
fixed width/height, per-pixel sampling, and a one-shot conversion to QImage
used to paint the viewport when it is mounted.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PySide6.QtGui import QImage

from ui.selector.models import RGBA, Point, Rect


class RasterImage:
    """
    Immutable RGBA8888 image.

    Storage is a C-contiguous (height, width, 4) uint8 array. The array is copied
    on construction and marked read-only so callers cannot mutate pixels behind
    the viewer's back.
    """

    def __init__(self, rgba: np.ndarray) -> None:
        if rgba.dtype != np.uint8 or rgba.ndim != 3 or rgba.shape[2] != 4:
            raise ValueError("Expected RGBA uint8 (H,W,4)")
        if rgba.shape[0] < 1 or rgba.shape[1] < 1:
            raise ValueError("Image must be at least 1x1 pixels")
        self._px = np.ascontiguousarray(rgba).copy()
        self._px.setflags(write=False)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "RasterImage":
        """
        Build an image from an (H,W,3) RGB or (H,W,4) RGBA uint8 array.

        RGB input gets a fully opaque alpha channel.
        """
        if arr.dtype == np.uint8 and arr.ndim == 3 and arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(arr)

    @classmethod
    def from_file(cls, path: str) -> "RasterImage":
        """
        Decode an image file (any format Qt can read) into RGBA8888.

        Raises:
            OSError: file missing or not decodable.
        """
        p = Path(path)
        if not p.is_file():
            raise OSError(f"Image file not found: {path}")
        img = QImage(str(p))
        if img.isNull():
            raise OSError(f"Unable to decode image: {path}")
        return cls.from_qimage(img)

    @classmethod
    def from_qimage(cls, img: QImage) -> "RasterImage":
        img = img.convertToFormat(QImage.Format.Format_RGBA8888)
        w, h = int(img.width()), int(img.height())
        stride = int(img.bytesPerLine())
        # Rows may be padded; view with the real stride, then drop the padding.
        buf = np.frombuffer(img.constBits(), dtype=np.uint8, count=stride * h)
        rgba = buf.reshape(h, stride)[:, : w * 4].reshape(h, w, 4)
        return cls(rgba)

    @property
    def width(self) -> int:
        return int(self._px.shape[1])

    @property
    def height(self) -> int:
        return int(self._px.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (H,W,4) view of the pixel data."""
        return self._px

    def get_pixel(self, p: Point) -> RGBA:
        """
        Sample the pixel at `p`.

        Raises:
            IndexError: `p` does not address a pixel of this image.
        """
        if not (0 <= p.x < self.width and 0 <= p.y < self.height):
            raise IndexError(f"Pixel ({p.x}, {p.y}) outside {self.width}x{self.height} image")
        r, g, b, a = self._px[p.y, p.x]
        return int(r), int(g), int(b), int(a)

    def crop(self, rect: Rect) -> "RasterImage":
        """
        Cut out the pixels covered by a selection rectangle.

        Selection corners are edge coordinates (the whole image is (0,0)-(w,h)),
        so the crop spans columns origin.x..end.x-1 and rows origin.y..end.y-1.
        The rectangle is intersected with the image first.

        Raises:
            ValueError: the rectangle covers no pixel of the image.
        """
        x0 = max(0, rect.origin.x)
        y0 = max(0, rect.origin.y)
        x1 = min(self.width, rect.end.x)
        y1 = min(self.height, rect.end.y)
        if x1 <= x0 or y1 <= y0:
            raise ValueError(f"Crop rectangle {rect} covers no pixels")
        return RasterImage(self._px[y0:y1, x0:x1])

    def to_qimage(self) -> QImage:
        """
        Drawable buffer for painting.

        The returned QImage owns a deep copy, so it stays valid independently of
        this object.
        """
        h, w = self.height, self.width
        return QImage(self._px.tobytes(order="C"), w, h, 4 * w, QImage.Format.Format_RGBA8888).copy()
