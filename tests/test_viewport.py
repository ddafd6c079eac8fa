"""Qt tests for ImageViewport and ViewerWindow, driven by synthesized mouse events."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from PySide6.QtCore import QEvent, QPoint, QPointF, Qt
from PySide6.QtGui import QMouseEvent

from ui.selector.models import EMPTY_RECT, Point, Rect
from ui.selector.paint import PaintConfig, SelectionOverlayPainter
from ui.selector.state import Drawing, Idle
from ui.selector.viewport import ImageViewport
from ui.selector.window import ViewerWindow, format_rect, format_sample


def _event(widget, kind: QEvent.Type, x: int, y: int, button=Qt.MouseButton.LeftButton) -> QMouseEvent:
    local = QPointF(x, y)
    glob = QPointF(widget.mapToGlobal(QPoint(x, y)))
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else button
    if kind == QEvent.Type.MouseMove:
        button = Qt.MouseButton.NoButton
    return QMouseEvent(kind, local, glob, button, buttons, Qt.KeyboardModifier.NoModifier)


def press(w, x, y, button=Qt.MouseButton.LeftButton):
    w.mousePressEvent(_event(w, QEvent.Type.MouseButtonPress, x, y, button))


def move(w, x, y):
    w.mouseMoveEvent(_event(w, QEvent.Type.MouseMove, x, y))


def release(w, x, y, button=Qt.MouseButton.LeftButton):
    w.mouseReleaseEvent(_event(w, QEvent.Type.MouseButtonRelease, x, y, button))


@pytest.fixture()
def viewport(qapp, image_100):
    committed = Mock()
    sampler = Mock()
    overlay = Mock()
    vp = ImageViewport(
        image=image_100,
        on_selection_committed=committed,
        overlay=overlay,
        on_pointer_sample=sampler,
    )
    vp.show()
    yield vp, committed, sampler, overlay
    vp.close()


def test_viewport_is_sized_to_image(qapp, make_image):
    vp = ImageViewport(image=make_image(37, 21), on_selection_committed=Mock(), overlay=Mock())
    assert (vp.width(), vp.height()) == (37, 21)
    assert vp.is_loading
    vp.show()
    assert not vp.is_loading
    vp.close()


def test_draw_selection_through_widget(viewport):
    vp, committed, sampler, _ = viewport

    press(vp, 10, 10)
    assert vp.grab_held
    move(vp, 50, 60)
    assert vp.current_rect() == Rect(Point(10, 10), Point(50, 60))
    release(vp, 50, 60)

    committed.assert_called_once_with(Rect(Point(10, 10), Point(50, 60)))
    assert not vp.grab_held
    assert vp.current_rect() == Rect(Point(10, 10), Point(50, 60))
    sampler.assert_called_once_with(Point(50, 60), (50, 60, 7, 255))


def test_relocate_then_release_outside_widget(viewport):
    vp, committed, _, _ = viewport
    press(vp, 10, 10)
    move(vp, 50, 60)
    release(vp, 50, 60)
    committed.reset_mock()

    press(vp, 30, 30)
    move(vp, 35, 35)
    # Release lands outside the widget; the grab still delivers it.
    release(vp, 400, -30)

    committed.assert_called_once_with(Rect(Point(15, 15), Point(55, 65)))
    assert isinstance(vp.interactor.state, Idle)


def test_hover_samples_without_selection_change(viewport):
    vp, committed, sampler, _ = viewport
    move(vp, 3, 4)
    sampler.assert_called_once_with(Point(3, 4), (3, 4, 7, 255))
    committed.assert_not_called()
    assert vp.current_rect() == EMPTY_RECT


def test_moves_ignored_before_mount(qapp, image_100):
    sampler = Mock()
    vp = ImageViewport(image=image_100, on_selection_committed=Mock(), overlay=Mock(), on_pointer_sample=sampler)
    move(vp, 3, 4)
    sampler.assert_not_called()


def test_non_left_buttons_are_ignored(viewport):
    vp, committed, _, _ = viewport
    press(vp, 10, 10, button=Qt.MouseButton.RightButton)
    assert isinstance(vp.interactor.state, Idle)
    assert not vp.grab_held
    release(vp, 10, 10, button=Qt.MouseButton.RightButton)
    committed.assert_not_called()


def test_hide_aborts_interaction_and_releases_grab(viewport):
    vp, committed, _, _ = viewport
    press(vp, 10, 10)
    move(vp, 20, 20)
    assert isinstance(vp.interactor.state, Drawing)

    vp.hide()

    assert isinstance(vp.interactor.state, Idle)
    assert not vp.grab_held
    committed.assert_not_called()


def test_grab_released_when_commit_handler_raises(qapp, image_100):
    vp = ImageViewport(
        image=image_100,
        on_selection_committed=Mock(side_effect=RuntimeError("boom")),
        overlay=Mock(),
    )
    vp.show()
    press(vp, 5, 5)
    assert vp.grab_held
    with pytest.raises(RuntimeError):
        release(vp, 20, 20)
    assert not vp.grab_held
    vp.close()


def test_paint_passes_current_rect_to_overlay(viewport):
    vp, _, _, overlay = viewport
    press(vp, 10, 10)
    move(vp, 30, 40)

    pm = vp.grab()

    rects = [c.args[1] for c in overlay.call_args_list]
    assert rects[-1] == Rect(Point(10, 10), Point(30, 40))
    px = pm.toImage().pixelColor(3, 4)
    assert (px.red(), px.green(), px.blue()) == (3, 4, 7)


def test_default_overlay_dims_outside_selection(qapp, image_100):
    vp = ImageViewport(
        image=image_100,
        on_selection_committed=Mock(),
        overlay=SelectionOverlayPainter(cfg=PaintConfig(dim_alpha=255, color="#FF0000")),
    )
    vp.show()
    press(vp, 20, 20)
    move(vp, 60, 60)
    release(vp, 60, 60)

    img = vp.grab().toImage()
    inside = img.pixelColor(40, 40)
    outside = img.pixelColor(5, 5)
    assert (inside.red(), inside.green(), inside.blue()) == (40, 40, 7)
    assert (outside.red(), outside.green(), outside.blue()) == (0, 0, 0)
    vp.close()


def test_viewer_window_reports_and_crops(qapp, image_100):
    owner = Mock()
    w = ViewerWindow(image=image_100, title="test", on_selection_committed=owner)
    w.show()
    vp = w.viewport

    assert w.crop_to_selection() is None

    press(vp, 10, 10)
    move(vp, 50, 60)
    release(vp, 50, 60)

    owner.assert_called_once_with(Rect(Point(10, 10), Point(50, 60)))
    assert w.committed == Rect(Point(10, 10), Point(50, 60))

    child = w.crop_to_selection()
    assert child is not None
    assert (child.viewport.image.width, child.viewport.image.height) == (40, 50)
    assert child.viewport.image.get_pixel(Point(0, 0)) == (10, 10, 7, 255)
    assert w.children_windows == [child]

    w.close()
    assert w.children_windows == []


def test_status_formatting():
    assert format_rect(Rect(Point(1, 2), Point(11, 22))) == "(1, 2) - (11, 22)  [10x20]"
    assert format_sample(Point(3, 4), (1, 2, 3, 255)) == "x=3 y=4  rgba=(1, 2, 3, 255)"


def test_closed_crop_windows_drop_out_of_children(qapp, image_100):
    w = ViewerWindow(image=image_100, title="test")
    w.show()
    vp = w.viewport
    press(vp, 10, 10)
    move(vp, 50, 60)
    release(vp, 50, 60)

    for _ in range(3):
        child = w.crop_to_selection()
        assert w.children_windows == [child]
        assert child.testAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        child.close()
        assert w.children_windows == []

    w.close()
