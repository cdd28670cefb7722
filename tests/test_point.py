"""Tests for Point2d and Point3d."""

import math

import numpy as np
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from jax_geometry import (
    Axis2d,
    Axis3d,
    Direction2d,
    Direction3d,
    Frame2d,
    Frame3d,
    Plane3d,
    Point2d,
    Point3d,
    Vector2d,
    Vector3d,
)

coordinates = st.floats(min_value=-100.0, max_value=100.0, allow_nan=False, allow_infinity=False)
angles = st.floats(min_value=-2 * math.pi, max_value=2 * math.pi, allow_nan=False, allow_infinity=False)
points3d = st.builds(Point3d, coordinates, coordinates, coordinates)
points2d = st.builds(Point2d, coordinates, coordinates)


@st.composite
def frames3d(draw):
    axis_vector = draw(st.builds(Vector3d, coordinates, coordinates, coordinates))
    assume(axis_vector.length() > 1e-3)
    axis = Axis3d(draw(points3d), axis_vector.direction())
    return Frame3d.at_point(draw(points3d)).rotate_around(axis, draw(angles))


def test_affine_arithmetic():
    p = Point3d(1.0, 2.0, 3.0)
    q = Point3d(4.0, 6.0, 3.0)
    v = Vector3d(1.0, 1.0, 1.0)

    assert p.plus(v) == Point3d(2.0, 3.0, 4.0)
    assert p.minus(v) == Point3d(0.0, 1.0, 2.0)
    assert q.vector_from(p) == Vector3d(3.0, 4.0, 0.0)

    # Operators: point - point is a vector, point +/- vector is a point
    assert p + v == p.plus(v)
    assert q - p == Vector3d(3.0, 4.0, 0.0)
    assert p - v == p.minus(v)


def test_distance_and_midpoint():
    p = Point3d(1.0, 2.0, 3.0)
    q = Point3d(4.0, 6.0, 3.0)
    np.testing.assert_allclose(p.distance_from(q), 5.0, rtol=1e-15)
    assert p.squared_distance_from(q) == 25.0
    assert p.midpoint(q) == Point3d(2.5, 4.0, 3.0)
    assert Point3d.interpolate_from(p, q, 1.0) == q


def test_component_conversions():
    p = Point3d(0.5, -1.25, 8.0)
    assert Point3d.from_components(p.components()) == p
    assert Point3d.from_record(p.to_record()) == p
    assert Point3d.from_array(p.to_array()) == p


def test_rotate_around_offset_axis():
    axis = Axis3d(Point3d(1.0, 0.0, 0.0), Direction3d.positive_z())
    rotated = Point3d(2.0, 0.0, 0.0).rotate_around(axis, math.pi / 2)
    assert rotated.equal_within(Point3d(1.0, 1.0, 0.0), 1e-12)


def test_point_on_rotation_axis_is_fixed():
    axis = Axis3d(Point3d(1.0, 2.0, 3.0), Vector3d(1.0, 1.0, 1.0).direction())
    on_axis = Point3d(3.0, 4.0, 5.0)
    assert on_axis.rotate_around(axis, 1.234).equal_within(on_axis, 1e-12)


def test_mirror_across_offset_plane():
    plane = Plane3d.xy().offset_by(1.0)
    assert Point3d(0.0, 0.0, 3.0).mirror_across(plane).equal_within(Point3d(0.0, 0.0, -1.0), 1e-12)


def test_project_onto_plane_and_axis():
    p = Point3d(1.0, 2.0, 3.0)
    assert p.project_onto(Plane3d.xy().offset_by(-1.0)).equal_within(Point3d(1.0, 2.0, -1.0), 1e-12)

    axis = Axis3d(Point3d(0.0, 5.0, 0.0), Direction3d.positive_x())
    assert p.project_onto_axis(axis).equal_within(Point3d(1.0, 5.0, 0.0), 1e-12)


def test_signed_distances():
    plane = Plane3d.xy().offset_by(1.0)
    assert Point3d(0.0, 0.0, 3.0).signed_distance_from(plane) == 2.0
    assert Point3d(0.0, 0.0, -3.0).signed_distance_from(plane) == -4.0
    assert Point3d(0.0, 0.0, 3.0).signed_distance_from(plane.flip()) == -2.0

    axis = Axis3d(Point3d(1.0, 0.0, 0.0), Direction3d.negative_x())
    assert Point3d(4.0, 7.0, 7.0).signed_distance_along(axis) == -3.0


def test_project_into_and_on_plane():
    plane = Plane3d.yz().translate_by(Vector3d(5.0, 1.0, 1.0))
    p = Point3d(2.0, 3.0, 4.0)
    assert p.project_into(plane) == Point2d(2.0, 3.0)
    assert Point3d.on(plane, Point2d(2.0, 3.0)) == Point3d(5.0, 3.0, 4.0)


def test_scale_about():
    scaled = Point3d(3.0, 3.0, 3.0).scale_about(Point3d(1.0, 1.0, 1.0), 2.0)
    assert scaled.equal_within(Point3d(5.0, 5.0, 5.0), 1e-12)


def test_to_local_in_translated_frame():
    frame = Frame3d.at_point(Point3d(1.0, 2.0, 3.0))
    assert Point3d(1.0, 2.0, 3.0).to_local_in(frame) == Point3d.origin()
    assert Point3d.origin().from_local_in(frame) == Point3d(1.0, 2.0, 3.0)


@given(points3d, frames3d())
@settings(deadline=None)
def test_local_coordinates_round_trip(point, frame):
    restored = point.to_local_in(frame).from_local_in(frame)
    np.testing.assert_allclose(restored.components(), point.components(), atol=1e-9)


@given(points3d, points3d, frames3d())
@settings(deadline=None)
def test_local_coordinates_preserve_distance(p, q, frame):
    np.testing.assert_allclose(
        p.to_local_in(frame).distance_from(q.to_local_in(frame)), p.distance_from(q), atol=1e-9
    )


@given(points3d, frames3d())
@settings(deadline=None)
def test_projection_onto_plane_lies_in_plane(point, frame):
    plane = frame.xy_plane()
    np.testing.assert_allclose(point.project_onto(plane).signed_distance_from(plane), 0.0, atol=1e-9)


# 2D
def test_point2d_basics():
    p = Point2d(1.0, 1.0)
    q = Point2d(4.0, 5.0)
    assert q - p == Vector2d(3.0, 4.0)
    assert p + Vector2d(1.0, 2.0) == Point2d(2.0, 3.0)
    np.testing.assert_allclose(p.distance_from(q), 5.0, rtol=1e-15)
    assert p.midpoint(q) == Point2d(2.5, 3.0)
    assert Point2d.from_record(q.to_record()) == q


def test_point2d_signed_distance_from_axis():
    axis = Axis2d(Point2d(0.0, 1.0), Direction2d.positive_x())
    assert Point2d(5.0, 3.0).signed_distance_from(axis) == 2.0
    assert Point2d(5.0, -1.0).signed_distance_from(axis) == -2.0
    assert Point2d(5.0, 3.0).signed_distance_along(axis) == 5.0


def test_point2d_transformations():
    rotated = Point2d(2.0, 0.0).rotate_around(Point2d(1.0, 0.0), math.pi / 2)
    assert rotated.equal_within(Point2d(1.0, 1.0), 1e-12)

    axis = Axis2d(Point2d(0.0, 1.0), Direction2d.positive_x())
    assert Point2d(3.0, 4.0).mirror_across(axis).equal_within(Point2d(3.0, -2.0), 1e-12)
    assert Point2d(3.0, 4.0).project_onto(axis).equal_within(Point2d(3.0, 1.0), 1e-12)
    assert Point2d(3.0, 3.0).scale_about(Point2d(1.0, 1.0), 0.5).equal_within(Point2d(2.0, 2.0), 1e-12)


@given(points2d, points2d, angles)
@settings(deadline=None)
def test_point2d_local_coordinates_round_trip(point, origin, angle):
    frame = Frame2d.with_x_direction(Direction2d.from_angle(angle), origin)
    restored = point.to_local_in(frame).from_local_in(frame)
    np.testing.assert_allclose(restored.components(), point.components(), atol=1e-9)
