"""Viewer settings: JSON file → frozen AppConfig.

`load_config` reads `config/config.json` (viewer + overlay sections), rejects
wrong types with the dotted key name, and fills in overlay defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AppConfig:
    """
    Viewer and overlay settings, checked once when the app starts.

    Expected JSON structure:

    {
      "viewer": {
        "image_path": "./sample.png",
        "window_title": "imageselector",
        "log_events": false
      },
      "overlay": {
        "border_px": 1,
        "color": "#00FFFF",
        "dim_alpha": 90,
        "dashed": true
      }
    }

    "viewer" is required; "overlay" is optional and falls back to defaults.
    """

    # -----------------------------
    # Viewer settings
    # -----------------------------
    # None when the image is expected on the command line instead.
    image_path: Optional[str]
    window_title: str
    log_events: bool

    # -----------------------------
    # Selection overlay settings
    # -----------------------------
    overlay_border_px: int
    overlay_color: str
    overlay_dim_alpha: int
    overlay_dashed: bool


def _require_obj(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """
    Fetch a required section (`viewer`) and fail with its name if it is not an object.
    """
    v = raw.get(key)
    if not isinstance(v, dict):
        raise ValueError(f"Missing or invalid '{key}' object in config")
    return v


def _opt_obj(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Optional section: missing/None => empty dict, anything but an object => error."""
    v = raw.get(key)
    if v is None:
        return {}
    if isinstance(v, dict):
        return v
    raise ValueError(f"Missing or invalid '{key}' object in config (expected object)")


def _opt_bool(v: Any, key: str, default: bool) -> bool:
    """
    Read a JSON boolean flag, falling back to `default` when the key is absent.

    Only real JSON true/false is accepted; "yes", 1 or "true" are rejected with
    the dotted key name so a typo in viewer.log_events surfaces at startup.
    """
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected boolean)")


def _opt_int(v: Any, key: str, default: int) -> int:
    """
    Read a pixel-sized number (border width, alpha), or `default` when absent.

    JSON numbers are accepted and truncated by int(); booleans are rejected even
    though bool is an int subclass.
    """
    if v is None:
        return default
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return int(v)
    raise ValueError(f"Missing or invalid '{key}' (expected number)")


def _opt_str(v: Any, key: str, default: str) -> str:
    """
    Read a text setting such as a color or window title, or `default` when absent.

    Blank strings are rejected rather than treated as missing.
    """
    if v is None:
        return default
    if isinstance(v, str) and v.strip():
        return v
    raise ValueError(f"Missing or invalid '{key}' (expected non-empty string)")


def load_config(path: str) -> AppConfig:
    """
    Parse `path` and build the `AppConfig` the viewer runs with.

    Constraints:
    - overlay.border_px > 0
    - overlay.dim_alpha in [0, 255]

    Raises:
        ValueError: missing keys, invalid types, or failed constraints.
        OSError: file cannot be opened/read.
        json.JSONDecodeError: invalid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw: Dict[str, Any] = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON object")

    viewer = _require_obj(raw, "viewer")
    overlay = _opt_obj(raw, "overlay")

    # ---- Viewer ----
    image_path_raw = viewer.get("image_path")
    if image_path_raw is None or (isinstance(image_path_raw, str) and not image_path_raw.strip()):
        image_path: Optional[str] = None
    elif isinstance(image_path_raw, str):
        image_path = image_path_raw.strip()
    else:
        raise ValueError("Missing or invalid 'viewer.image_path' (expected string)")

    window_title = _opt_str(viewer.get("window_title"), "viewer.window_title", "imageselector").strip()
    log_events = _opt_bool(viewer.get("log_events"), "viewer.log_events", False)

    # ---- Overlay ----
    overlay_border_px = _opt_int(overlay.get("border_px"), "overlay.border_px", 1)
    overlay_color = _opt_str(overlay.get("color"), "overlay.color", "#00FFFF").strip()
    overlay_dim_alpha = _opt_int(overlay.get("dim_alpha"), "overlay.dim_alpha", 90)
    overlay_dashed = _opt_bool(overlay.get("dashed"), "overlay.dashed", True)

    if overlay_border_px <= 0:
        raise ValueError("overlay.border_px must be > 0")
    if not (0 <= overlay_dim_alpha <= 255):
        raise ValueError("overlay.dim_alpha must be in [0, 255]")

    return AppConfig(
        image_path=image_path,
        window_title=window_title,
        log_events=log_events,
        overlay_border_px=overlay_border_px,
        overlay_color=overlay_color,
        overlay_dim_alpha=overlay_dim_alpha,
        overlay_dashed=overlay_dashed,
    )
