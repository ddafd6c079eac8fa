"""Application entry point for the image selection viewer.

Wires together:
- Config loading
- Image loading
- Qt viewer window (image viewport + rectangle selection)
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from config.config import load_config
from imaging.raster import RasterImage
from ui.selector.models import Rect
from ui.selector.paint import PaintConfig
from ui.selector.ui_logic import run_viewer_ui


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="imageselector")
    p.add_argument("image", nargs="?", default=None, help="Image to open (overrides viewer.image_path).")
    p.add_argument("--config", default="./config/config.json", help="Path to the JSON config file.")
    p.add_argument("--log-events", action="store_true", help="Print selection/viewport diagnostics.")
    return p.parse_args(argv)


def _print_selection(rect: Rect) -> None:
    print(
        "[selection]",
        "committed=",
        (rect.origin.x, rect.origin.y, rect.end.x, rect.end.y),
        flush=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Load config and image, then run the viewer until its window closes.

    Exit codes:
    - 0: normal exit
    - 2: no image given, or the image could not be loaded
    """
    args = _parse_args(argv)
    cfg = load_config(args.config)

    image_path = args.image or cfg.image_path
    if not image_path:
        print("[main]", "error=", "no image given (argument or viewer.image_path)", file=sys.stderr, flush=True)
        return 2

    try:
        image = RasterImage.from_file(image_path)
    except OSError as e:
        print("[main]", "error=", str(e), file=sys.stderr, flush=True)
        return 2

    log_events = bool(cfg.log_events or args.log_events)

    return run_viewer_ui(
        image=image,
        title=cfg.window_title,
        paint_cfg=PaintConfig(
            border_px=cfg.overlay_border_px,
            color=cfg.overlay_color,
            dim_alpha=cfg.overlay_dim_alpha,
            dashed=cfg.overlay_dashed,
        ),
        on_selection_committed=_print_selection if log_events else None,
        log_events=log_events,
    )


if __name__ == "__main__":
    raise SystemExit(main())
