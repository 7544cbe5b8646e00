"""Tests for the tapered arrow geometry."""

import dataclasses
import math

import numpy as np
import pytest

from forceplateviz.model.arrow import ArrowShape, InvalidInputError, SHAFT_END_FRACTION, build_arrow
from forceplateviz.model.geometry_primitives import Point, Vector


ORIGINS = [
    Point(0.0, 0.0, 0.0),
    Point(1.0, 1.0, 1.0),
    Point(-3.5, 0.25, 12.0),
]

LONG_VECTORS = [
    Vector(0.0, 0.0, 2.0),
    Vector(3.0, 0.0, 4.0),
    Vector(-0.2, 0.1, 0.05),
    Vector(0.0, -1.4, 0.0),
    Vector(10.0, 20.0, -30.0),
]

SHORT_VECTORS = [
    Vector(0.0, 0.0, 0.0),
    Vector(0.0, 0.0, 0.1),
    Vector(0.1, 0.1, 0.0),
    Vector(-0.149, 0.0, 0.0),
]


def _direction(a: Point, b: Point) -> Vector:
    return b - a


class TestScenarios:
    """Reference arrows with hand-computed geometry."""

    def test_vertical_arrow(self):
        """A 2 m arrow along Z has its head in the last 0.15 m."""
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 2.0), head_length=0.15, head_width=0.1)

        assert shape.visible
        assert shape.length == pytest.approx(2.0)
        assert [p.z for p in shape.control_points] == pytest.approx([0.0, 1.848, 1.85, 2.0])
        assert all(p.x == 0.0 and p.y == 0.0 for p in shape.control_points)
        assert [k.t for k in shape.width_profile] == pytest.approx([0.0, 0.924, 0.925, 1.0])
        assert [k.width for k in shape.width_profile] == pytest.approx([0.025, 0.025, 0.1, 0.0])

    def test_short_arrow_is_hidden(self):
        """0.1 m is shorter than the 0.15 m head."""
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 0.1), head_length=0.15)

        assert not shape.visible
        assert shape.length == pytest.approx(0.1)
        assert shape.control_points == ()
        assert shape.width_profile == ()

    def test_offset_arrow(self):
        """A 3-4-5 arrow from (1, 1, 1) has breakpoint 0.03."""
        shape = build_arrow(Point(1.0, 1.0, 1.0), Vector(3.0, 0.0, 4.0), head_length=0.15, head_width=0.1)

        assert shape.visible
        assert shape.length == pytest.approx(5.0)
        assert [k.t for k in shape.width_profile] == pytest.approx([0.0, 0.969, 0.97, 1.0])

        expected = [
            (1.0, 1.0, 1.0),
            (1.0 + 3.0 * 0.969, 1.0, 1.0 + 4.0 * 0.969),
            (1.0 + 3.0 * 0.97, 1.0, 1.0 + 4.0 * 0.97),
            (4.0, 1.0, 5.0),
        ]
        for point, (x, y, z) in zip(shape.control_points, expected):
            assert (point.x, point.y, point.z) == pytest.approx((x, y, z))

    def test_default_head_size(self):
        """Defaults are a 0.15 m head, 0.1 m wide."""
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 2.0))
        assert [k.width for k in shape.width_profile] == pytest.approx([0.025, 0.025, 0.1, 0.0])
        assert shape.width_profile[2].t == pytest.approx(1.0 - 0.15 / 2.0)


class TestVisibility:
    """An arrow is drawn iff it is at least as long as its head."""

    @pytest.mark.parametrize("origin", ORIGINS)
    @pytest.mark.parametrize("vector", SHORT_VECTORS)
    def test_shorter_than_head_is_hidden(self, origin, vector):
        assert not build_arrow(origin, vector).visible

    @pytest.mark.parametrize("origin", ORIGINS)
    @pytest.mark.parametrize("vector", LONG_VECTORS)
    def test_longer_than_head_is_visible(self, origin, vector):
        assert build_arrow(origin, vector).visible

    def test_zero_vector_is_hidden(self):
        shape = build_arrow(Point(5.0, 5.0, 5.0), Vector(0.0, 0.0, 0.0))
        assert not shape.visible
        assert shape.length == 0.0

    def test_exactly_head_length_is_visible(self):
        """Length equal to the head length is not below the threshold."""
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.5, 0.0), head_length=0.5)
        assert shape.visible

    def test_head_as_long_as_arrow_leaves_shaft_key_before_origin(self):
        """Breakpoint 1.0 is a known degenerate case and is not clamped."""
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.5, 0.0), head_length=0.5)

        assert shape.width_profile[1].t == pytest.approx(SHAFT_END_FRACTION - 1.0)
        assert shape.width_profile[1].t < 0.0
        assert shape.control_points[1].y == pytest.approx(-0.0005)
        assert shape.width_profile[2].t == pytest.approx(0.0)

    def test_larger_head_hides_more(self):
        vector = Vector(0.0, 0.0, 0.3)
        assert build_arrow(Point(0.0, 0.0, 0.0), vector, head_length=0.15).visible
        assert not build_arrow(Point(0.0, 0.0, 0.0), vector, head_length=0.35).visible


class TestGeometryProperties:
    """Invariants of every visible arrow."""

    @pytest.mark.parametrize("origin", ORIGINS)
    @pytest.mark.parametrize("vector", LONG_VECTORS)
    def test_end_points_are_exact(self, origin, vector):
        shape = build_arrow(origin, vector)
        assert shape.control_points[0] == origin
        assert shape.control_points[3] == origin + vector
        assert shape.start == origin
        assert shape.end == origin + vector

    @pytest.mark.parametrize("origin", ORIGINS)
    @pytest.mark.parametrize("vector", LONG_VECTORS)
    def test_four_points_and_keys(self, origin, vector):
        shape = build_arrow(origin, vector)
        assert len(shape.control_points) == 4
        assert len(shape.width_profile) == 4

    @pytest.mark.parametrize("origin", ORIGINS)
    @pytest.mark.parametrize("vector", LONG_VECTORS)
    def test_fractions_strictly_increasing(self, origin, vector):
        ts = [k.t for k in build_arrow(origin, vector).width_profile]
        assert ts[0] == 0.0
        assert ts[-1] == 1.0
        assert all(a < b for a, b in zip(ts, ts[1:]))

    @pytest.mark.parametrize("origin", ORIGINS)
    @pytest.mark.parametrize("vector", LONG_VECTORS)
    def test_points_colinear_and_ordered(self, origin, vector):
        shape = build_arrow(origin, vector)
        direction = vector.to_array() / np.linalg.norm(vector.to_array())

        distances = [origin.distance_to(p) for p in shape.control_points]
        assert all(a < b for a, b in zip(distances, distances[1:]))

        for point in shape.control_points[1:]:
            offset = _direction(origin, point).to_array()
            assert np.linalg.norm(np.cross(offset, direction)) == pytest.approx(0.0, abs=1e-9)
            assert np.dot(offset, direction) > 0.0

    @pytest.mark.parametrize("head_width", [0.0, 0.1, 0.3])
    @pytest.mark.parametrize("vector", LONG_VECTORS)
    def test_width_profile(self, head_width, vector):
        widths = [k.width for k in build_arrow(Point(0.0, 0.0, 0.0), vector, head_width=head_width).width_profile]
        assert widths[0] == head_width / 4.0
        assert widths[1] == head_width / 4.0
        assert widths[2] == head_width
        assert widths[-1] == 0.0
        assert all(w >= 0.0 for w in widths)

    def test_head_occupies_head_length(self):
        """The segment between the last two points is exactly the head."""
        shape = build_arrow(Point(1.0, 2.0, 3.0), Vector(3.0, 0.0, 4.0), head_length=0.4)
        head = shape.control_points[2].distance_to(shape.control_points[3])
        assert head == pytest.approx(0.4)

    def test_shape_is_immutable(self):
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 2.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            shape.visible = False

    def test_each_call_returns_new_shape(self):
        a = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 2.0))
        b = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 2.0))
        assert a == b
        assert a is not b


class TestWidthAt:
    """Width profile evaluation."""

    def test_interpolates_between_keys(self):
        shape = build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 2.0))
        assert shape.width_at(0.0) == pytest.approx(0.025)
        assert shape.width_at(0.5) == pytest.approx(0.025)
        assert shape.width_at(0.925) == pytest.approx(0.1)
        assert shape.width_at((0.925 + 1.0) / 2.0) == pytest.approx(0.05)
        assert shape.width_at(1.0) == pytest.approx(0.0)

    def test_arrays_follow_keys(self):
        shape = build_arrow(Point(1.0, 2.0, 3.0), Vector(3.0, 0.0, 4.0))
        points = shape.points_array()
        widths = shape.widths_array()

        assert points.shape == (4, 3)
        assert points.dtype == np.float64
        assert points[-1].tolist() == [4.0, 2.0, 7.0]
        assert widths.dtype == np.float64
        assert widths.tolist() == [k.width for k in shape.width_profile]

    def test_hidden_arrow_arrays_are_empty(self):
        hidden = ArrowShape.hidden()
        assert hidden.points_array().shape == (0, 3)
        assert hidden.widths_array().shape == (0,)

    def test_hidden_arrow_has_no_width(self):
        with pytest.raises(ValueError):
            ArrowShape.hidden().width_at(0.5)


class TestInvalidInput:
    """Non-finite input is rejected."""

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_origin(self, bad):
        with pytest.raises(InvalidInputError):
            build_arrow(Point(bad, 0.0, 0.0), Vector(0.0, 0.0, 1.0))

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_direction(self, bad):
        with pytest.raises(InvalidInputError):
            build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, bad))

    @pytest.mark.parametrize("head_length", [0.0, -0.15, math.nan, math.inf])
    def test_invalid_head_length(self, head_length):
        with pytest.raises(InvalidInputError):
            build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0), head_length=head_length)

    @pytest.mark.parametrize("head_width", [-0.1, math.nan, math.inf])
    def test_invalid_head_width(self, head_width):
        with pytest.raises(InvalidInputError):
            build_arrow(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0), head_width=head_width)

    def test_is_a_value_error(self):
        assert issubclass(InvalidInputError, ValueError)
