"""Unit tests for rectangle geometry and coordinate mapping."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ui.selector.coords import map_to_image
from ui.selector.geometry import contains, image_rect, normalize, point_in, translate
from ui.selector.models import EMPTY_RECT, Point, Rect


coords = st.integers(min_value=-10_000, max_value=10_000)
points = st.builds(Point, x=coords, y=coords)


@given(a=points, b=points)
def test_normalize_is_commutative_and_ordered(a: Point, b: Point) -> None:
    r = normalize(a, b)
    assert r == normalize(b, a)
    assert r.origin.x <= r.end.x
    assert r.origin.y <= r.end.y
    assert r.width >= 0 and r.height >= 0


def test_normalize_mixes_corners():
    r = normalize(Point(50, 10), Point(10, 60))
    assert r == Rect(Point(10, 10), Point(50, 60))
    assert (r.width, r.height) == (40, 50)


@given(a=points, b=points)
def test_contains_is_reflexive(a: Point, b: Point) -> None:
    r = normalize(a, b)
    assert contains(r, r)
    assert point_in(r, r.origin) and point_in(r, r.end)


def test_contains_boundary_and_overflow():
    bounds = image_rect(100, 100)
    assert contains(bounds, normalize(Point(0, 0), Point(100, 100)))
    assert contains(bounds, normalize(Point(90, 90), Point(100, 100)))
    assert not contains(bounds, normalize(Point(-1, 0), Point(10, 10)))
    assert not contains(bounds, normalize(Point(90, 90), Point(101, 100)))


def test_point_in_is_inclusive():
    r = normalize(Point(10, 10), Point(50, 60))
    assert point_in(r, Point(10, 10))
    assert point_in(r, Point(50, 60))
    assert point_in(r, Point(30, 30))
    assert not point_in(r, Point(9, 30))
    assert not point_in(r, Point(30, 61))


def test_translate_keeps_size():
    r = translate(normalize(Point(10, 10), Point(50, 60)), 5, -3)
    assert r == Rect(Point(15, 7), Point(55, 57))


def test_empty_rect_sentinel():
    assert EMPTY_RECT.is_empty
    assert EMPTY_RECT.origin == Point(-1, -1)
    assert not image_rect(1, 1).is_empty


@pytest.mark.parametrize(
    "screen, element, expected",
    [
        ((110.0, 220.0), (100.0, 200.0), Point(10, 20)),
        ((110.9, 220.4), (100.0, 200.0), Point(10, 20)),
        ((90.0, 150.0), (100.0, 200.0), Point(-10, -50)),
        ((5000.0, 5.0), (0.0, 0.0), Point(5000, 5)),
    ],
)
def test_map_to_image_subtracts_offset_without_clamping(screen, element, expected):
    assert map_to_image(screen[0], screen[1], element[0], element[1]) == expected
