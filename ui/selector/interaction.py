# ui/selector/interaction.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ui.selector.geometry import contains, image_rect, normalize, point_in, translate
from ui.selector.models import EMPTY_RECT, RGBA, Point, Rect, clamp_int
from ui.selector.state import IDLE, Drawing, Idle, InteractionState, Relocating


@dataclass(frozen=True)
class InteractionConfig:
    """
    Tuning knobs for the selection interaction.

    - log_events: print one-line diagnostics for commits, aborts and stale resets.
    """
    log_events: bool = False


class SelectionInteractor:
    """
    Selection state machine driven by image-space pointer events.

    States (see ui.selector.state):
    - Idle: nothing in progress. Moves only feed the pixel sampler.
    - Drawing: pointer went down outside the selection; preview = normalize(origin, pointer).
    - Relocating: pointer went down inside the selection; preview = selection shifted by the
      pointer delta, published only while it stays inside the image.

    Outputs:
    - current_rect(): the single rectangle an overlay should draw right now.
    - on_selection_committed(rect): called exactly once per completed down/up interaction.
    - on_pointer_sample(point, rgba): optional, called for every accepted move over a real pixel.

    Handlers return True when the caller should repaint.

    The machine is toolkit-agnostic; ImageViewport owns the Qt side (mapping, grab, repaint).
    """

    def __init__(
        self,
        *,
        width: int,
        height: int,
        on_selection_committed: Callable[[Rect], None],
        on_pointer_sample: Optional[Callable[[Point, RGBA], None]] = None,
        sample_pixel: Optional[Callable[[Point], RGBA]] = None,
        is_loading: Callable[[], bool] = lambda: False,
        selection: Rect = EMPTY_RECT,
        cfg: InteractionConfig = InteractionConfig(),
    ) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"image bounds must be positive, got {width}x{height}")

        # Image bounds are fixed for the lifetime of the machine.
        self._width = int(width)
        self._height = int(height)
        self._bounds = image_rect(self._width, self._height)

        if not selection.is_empty and not contains(self._bounds, selection):
            raise ValueError(f"initial selection {selection} is outside the image bounds")

        self._on_selection_committed = on_selection_committed
        self._on_pointer_sample = on_pointer_sample
        self._sample_pixel = sample_pixel
        self._is_loading = is_loading
        self._cfg = cfg

        # Retained selection: hit-tested on pointer-down and drawn while idle.
        self._selection: Rect = selection

        # Last rectangle handed to on_selection_committed (None until the first commit).
        self._last_committed: Optional[Rect] = None

        self._state: InteractionState = IDLE

    # ----------------------------
    # Read-only views
    # ----------------------------

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def selection(self) -> Rect:
        return self._selection

    @property
    def last_committed(self) -> Optional[Rect]:
        return self._last_committed

    @property
    def bounds(self) -> Rect:
        return self._bounds

    @property
    def is_active(self) -> bool:
        return not isinstance(self._state, Idle)

    def current_rect(self) -> Rect:
        """
        The rectangle that is relevant right now: the live preview while a pointer
        interaction is in progress, otherwise the retained selection.
        """
        if isinstance(self._state, (Drawing, Relocating)):
            return self._state.preview
        return self._selection

    # ----------------------------
    # Event handlers
    # ----------------------------

    def on_pointer_down(self, p: Point) -> bool:
        """
        Start a new interaction at `p`.

        A press inside the retained selection (inclusive) relocates it, anywhere
        else starts drawing. If an older interaction never saw its release it is
        aborted first.
        """
        if self.is_active:
            self._log("stale_reset", state=type(self._state).__name__, at=(p.x, p.y))
            self.abort()

        if not self._selection.is_empty and point_in(self._selection, p):
            self._state = Relocating(
                pointer_origin=p,
                selection_at_grab=self._selection,
                preview=self._selection,
            )
        else:
            origin = self._clamp(p)
            self._state = Drawing(origin=origin, preview=normalize(origin, origin))
        return True

    def on_pointer_move(self, p: Point) -> bool:
        """
        Update the preview for the active interaction and feed the pixel sampler.

        Ignored entirely while the image is still loading. Returns True when the
        preview changed.
        """
        if self._is_loading():
            return False

        changed = False
        st = self._state
        if isinstance(st, Drawing):
            preview = normalize(st.origin, self._clamp(p))
            if preview != st.preview:
                self._state = Drawing(origin=st.origin, preview=preview)
                changed = True
        elif isinstance(st, Relocating):
            dx = p.x - st.pointer_origin.x
            dy = p.y - st.pointer_origin.y
            moved = translate(st.selection_at_grab, dx, dy)
            # Clamp by rejection: a move that would leave the image is dropped for this frame.
            if contains(self._bounds, moved) and moved != st.preview:
                self._state = Relocating(
                    pointer_origin=st.pointer_origin,
                    selection_at_grab=st.selection_at_grab,
                    preview=moved,
                )
                changed = True

        self._sample(p)
        return changed

    def on_pointer_up(self, p: Point) -> bool:
        """
        Finish the active interaction and commit its rectangle.

        - Drawing released where it started: select the whole image.
        - Drawing released elsewhere: commit normalize(origin, p).
        - Relocating: commit the last bounds-checked preview.
        - Idle: nothing to finish, ignored.
        """
        st = self._state
        if isinstance(st, Idle):
            return False

        if isinstance(st, Drawing):
            end = self._clamp(p)
            if end == st.origin:
                committed = self._bounds
                # The whole image cannot be relocated; keep nothing grabbable so the
                # next press draws again.
                retained = EMPTY_RECT
            else:
                committed = normalize(st.origin, end)
                retained = committed
        else:
            committed = st.preview
            retained = committed

        self._state = IDLE
        self._selection = retained
        self._last_committed = committed
        self._log("commit", origin=(committed.origin.x, committed.origin.y), end=(committed.end.x, committed.end.y))
        self._on_selection_committed(committed)
        return True

    def abort(self) -> bool:
        """
        Drop the active interaction without committing.

        Returns True if something was aborted (the overlay needs a repaint).
        """
        if isinstance(self._state, Idle):
            return False
        self._log("abort", state=type(self._state).__name__)
        self._state = IDLE
        return True

    # ----------------------------
    # Internals
    # ----------------------------

    def _clamp(self, p: Point) -> Point:
        return Point(clamp_int(p.x, 0, self._width), clamp_int(p.y, 0, self._height))

    def _sample(self, p: Point) -> None:
        """Forward (coords, pixel) to the observer when `p` addresses a real pixel."""
        if self._on_pointer_sample is None or self._sample_pixel is None:
            return
        if not (0 <= p.x < self._width and 0 <= p.y < self._height):
            return
        self._on_pointer_sample(p, self._sample_pixel(p))

    def _log(self, reason: str, **fields: object) -> None:
        if not self._cfg.log_events:
            return
        parts: list[object] = ["[selection]", "reason=", reason]
        for k, v in fields.items():
            parts.extend((f"{k}=", v))
        print(*parts, flush=True)
