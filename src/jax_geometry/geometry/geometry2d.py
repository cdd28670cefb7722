"""2D geometric primitives.

Vectors, directions, points, axes and frames in the plane. Every type is an
immutable flax ``struct.dataclass`` compared component-wise. Orientation and
position changes (rotation, mirroring, projection, basis change) go through
a precomputed :class:`~jax_geometry.transforms.Transform2d`, the same one a
caller would build to transform a whole batch of coordinates at once.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional, Tuple

import jax
import jax.numpy as jnp
import numpy as np
from flax import struct

from ..config import DEFAULT_TOLERANCE, DTYPE
from ..transforms import Transform2d

Array = jax.Array


def _components_from_array(array, size: int) -> Tuple[float, ...]:
    values = np.asarray(array, dtype=np.float64)
    if values.shape != (size,):
        raise ValueError(f"expected an array of shape ({size},), got {values.shape}")
    return tuple(values.tolist())


@struct.dataclass
class Vector2d:
    """A displacement in 2D space (x, y)."""
    x: float
    y: float

    # Constructors
    @classmethod
    def zero(cls) -> Vector2d:
        return cls(0.0, 0.0)

    @classmethod
    def from_components(cls, components: Tuple[float, float]) -> Vector2d:
        x, y = components
        return cls(float(x), float(y))

    @classmethod
    def from_record(cls, record: Mapping[str, float]) -> Vector2d:
        return cls(float(record["x"]), float(record["y"]))

    @classmethod
    def from_array(cls, array) -> Vector2d:
        return cls(*_components_from_array(array, 2))

    @classmethod
    def with_length(cls, length: float, direction: Direction2d) -> Vector2d:
        return direction.vector.times(length)

    @classmethod
    def interpolate_from(cls, start: Vector2d, end: Vector2d, t: float) -> Vector2d:
        """Linear interpolation: *start* at t=0, *end* at t=1."""
        return start.plus(end.minus(start).times(t))

    # Conversions
    def components(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_record(self) -> dict:
        return {"x": self.x, "y": self.y}

    def to_array(self) -> Array:
        return jnp.array([self.x, self.y], dtype=DTYPE)

    # Metrics
    def component_in(self, direction: Direction2d) -> float:
        return self.dot_product(direction.vector)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def squared_length(self) -> float:
        return self.x * self.x + self.y * self.y

    def direction(self) -> Optional[Direction2d]:
        """Unit direction of this vector, or None for the zero vector."""
        return Direction2d.from_vector(self)

    def equal_within(self, other: Vector2d, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.minus(other).length() <= tolerance

    # Arithmetic
    def negate(self) -> Vector2d:
        return Vector2d(-self.x, -self.y)

    def plus(self, other: Vector2d) -> Vector2d:
        return Vector2d(self.x + other.x, self.y + other.y)

    def minus(self, other: Vector2d) -> Vector2d:
        return Vector2d(self.x - other.x, self.y - other.y)

    def times(self, scale: float) -> Vector2d:
        return Vector2d(self.x * scale, self.y * scale)

    def dot_product(self, other: Vector2d) -> float:
        return self.x * other.x + self.y * other.y

    def cross_product(self, other: Vector2d) -> float:
        """z component of the 3D cross product of the two vectors."""
        return self.x * other.y - self.y * other.x

    def perpendicular_to(self) -> Vector2d:
        """This vector rotated counterclockwise by 90 degrees."""
        return Vector2d(-self.y, self.x)

    def __add__(self, other: Vector2d) -> Vector2d:
        return self.plus(other)

    def __sub__(self, other: Vector2d) -> Vector2d:
        return self.minus(other)

    def __neg__(self) -> Vector2d:
        return self.negate()

    def __mul__(self, scale: float) -> Vector2d:
        return self.times(scale)

    def __rmul__(self, scale: float) -> Vector2d:
        return self.times(scale)

    # Transformations
    def transform_by(self, transform: Transform2d) -> Vector2d:
        """Apply the linear part of *transform* (translation is ignored)."""
        return Vector2d.from_array(transform.apply_to_vectors(self.to_array()))

    def rotate_by(self, angle: float) -> Vector2d:
        return self.transform_by(Transform2d.rotation((0.0, 0.0), angle))

    def mirror_across(self, axis: Axis2d) -> Vector2d:
        return self.transform_by(axis.mirror())

    def project_onto(self, axis: Axis2d) -> Vector2d:
        return self.transform_by(axis.projection())

    def to_local_in(self, frame: Frame2d) -> Vector2d:
        return self.transform_by(frame.to_local())

    def from_local_in(self, frame: Frame2d) -> Vector2d:
        return self.transform_by(frame.from_local())


@struct.dataclass
class Direction2d:
    """A unit-length 2D vector.

    The unit-length contract is held by construction: :meth:`from_vector`
    normalizes and can fail, :meth:`unsafe` trusts its input as-is.
    """
    vector: Vector2d

    # Constructors
    @classmethod
    def unsafe(cls, vector: Vector2d) -> Direction2d:
        """Wrap a vector the caller guarantees to be unit length."""
        return cls(vector)

    @classmethod
    def from_vector(cls, vector: Vector2d) -> Optional[Direction2d]:
        """Normalize *vector*; None if it is the zero vector."""
        if vector.x == 0.0 and vector.y == 0.0:
            return None
        # Scale by the largest component first so the length cannot overflow
        largest = max(abs(vector.x), abs(vector.y))
        scaled = Vector2d(vector.x / largest, vector.y / largest)
        return cls(scaled.times(1.0 / scaled.length()))

    @classmethod
    def from_components(cls, components: Tuple[float, float]) -> Direction2d:
        return cls(Vector2d.from_components(components))

    @classmethod
    def from_angle(cls, angle: float) -> Direction2d:
        """Direction at *angle* radians counterclockwise from positive X."""
        return cls(Vector2d(math.cos(angle), math.sin(angle)))

    @classmethod
    def positive_x(cls) -> Direction2d:
        return cls(Vector2d(1.0, 0.0))

    @classmethod
    def negative_x(cls) -> Direction2d:
        return cls(Vector2d(-1.0, 0.0))

    @classmethod
    def positive_y(cls) -> Direction2d:
        return cls(Vector2d(0.0, 1.0))

    @classmethod
    def negative_y(cls) -> Direction2d:
        return cls(Vector2d(0.0, -1.0))

    # Accessors
    @property
    def x(self) -> float:
        return self.vector.x

    @property
    def y(self) -> float:
        return self.vector.y

    def components(self) -> Tuple[float, float]:
        return self.vector.components()

    def to_array(self) -> Array:
        return self.vector.to_array()

    def to_angle(self) -> float:
        """Counterclockwise angle from positive X, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    # Metrics
    def component_in(self, direction: Direction2d) -> float:
        return self.vector.component_in(direction)

    def dot_product(self, other: Direction2d) -> float:
        return self.vector.dot_product(other.vector)

    def cross_product(self, other: Direction2d) -> float:
        return self.vector.cross_product(other.vector)

    def angle_from(self, other: Direction2d) -> float:
        """Signed counterclockwise angle from *other* to this direction."""
        return math.atan2(other.cross_product(self), other.dot_product(self))

    def equal_within(self, other: Direction2d, angle_tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return abs(self.angle_from(other)) <= angle_tolerance

    # Derived directions
    def reverse(self) -> Direction2d:
        return Direction2d(self.vector.negate())

    def perpendicular_to(self) -> Direction2d:
        return Direction2d(self.vector.perpendicular_to())

    def rotate_by(self, angle: float) -> Direction2d:
        return Direction2d.unsafe(self.vector.rotate_by(angle))

    def mirror_across(self, axis: Axis2d) -> Direction2d:
        return Direction2d.unsafe(self.vector.mirror_across(axis))

    def to_local_in(self, frame: Frame2d) -> Direction2d:
        return Direction2d.unsafe(self.vector.to_local_in(frame))

    def from_local_in(self, frame: Frame2d) -> Direction2d:
        return Direction2d.unsafe(self.vector.from_local_in(frame))


@struct.dataclass
class Point2d:
    """A position in 2D space (x, y)."""
    x: float
    y: float

    # Constructors
    @classmethod
    def origin(cls) -> Point2d:
        return cls(0.0, 0.0)

    @classmethod
    def from_components(cls, components: Tuple[float, float]) -> Point2d:
        x, y = components
        return cls(float(x), float(y))

    @classmethod
    def from_record(cls, record: Mapping[str, float]) -> Point2d:
        return cls(float(record["x"]), float(record["y"]))

    @classmethod
    def from_array(cls, array) -> Point2d:
        return cls(*_components_from_array(array, 2))

    @classmethod
    def interpolate_from(cls, start: Point2d, end: Point2d, t: float) -> Point2d:
        """Linear interpolation: *start* at t=0, *end* at t=1."""
        return start.plus(end.vector_from(start).times(t))

    # Conversions
    def components(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_record(self) -> dict:
        return {"x": self.x, "y": self.y}

    def to_array(self) -> Array:
        return jnp.array([self.x, self.y], dtype=DTYPE)

    # Affine arithmetic
    def plus(self, vector: Vector2d) -> Point2d:
        return Point2d(self.x + vector.x, self.y + vector.y)

    def minus(self, vector: Vector2d) -> Point2d:
        return Point2d(self.x - vector.x, self.y - vector.y)

    def vector_from(self, other: Point2d) -> Vector2d:
        return Vector2d(self.x - other.x, self.y - other.y)

    def __add__(self, vector: Vector2d) -> Point2d:
        return self.plus(vector)

    def __sub__(self, other):
        if isinstance(other, Point2d):
            return self.vector_from(other)
        return self.minus(other)

    # Metrics
    def distance_from(self, other: Point2d) -> float:
        return self.vector_from(other).length()

    def squared_distance_from(self, other: Point2d) -> float:
        return self.vector_from(other).squared_length()

    def midpoint(self, other: Point2d) -> Point2d:
        return Point2d.interpolate_from(self, other, 0.5)

    def signed_distance_along(self, axis: Axis2d) -> float:
        return self.vector_from(axis.origin_point).component_in(axis.direction)

    def signed_distance_from(self, axis: Axis2d) -> float:
        """Distance from *axis*, positive to its left."""
        return axis.direction.vector.cross_product(self.vector_from(axis.origin_point))

    def equal_within(self, other: Point2d, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.distance_from(other) <= tolerance

    # Transformations
    def transform_by(self, transform: Transform2d) -> Point2d:
        return Point2d.from_array(transform.apply_to_points(self.to_array()))

    def scale_about(self, center: Point2d, factor: float) -> Point2d:
        return self.transform_by(Transform2d.scaling(center.to_array(), factor))

    def rotate_around(self, center: Point2d, angle: float) -> Point2d:
        return self.transform_by(Transform2d.rotation(center.to_array(), angle))

    def mirror_across(self, axis: Axis2d) -> Point2d:
        return self.transform_by(axis.mirror())

    def project_onto(self, axis: Axis2d) -> Point2d:
        return self.transform_by(axis.projection())

    def to_local_in(self, frame: Frame2d) -> Point2d:
        return self.transform_by(frame.to_local())

    def from_local_in(self, frame: Frame2d) -> Point2d:
        return self.transform_by(frame.from_local())


@struct.dataclass
class Axis2d:
    """A directed line in 2D: an origin point and a direction."""
    origin_point: Point2d
    direction: Direction2d

    @classmethod
    def x_axis(cls) -> Axis2d:
        return cls(Point2d.origin(), Direction2d.positive_x())

    @classmethod
    def y_axis(cls) -> Axis2d:
        return cls(Point2d.origin(), Direction2d.positive_y())

    def flip(self) -> Axis2d:
        return self.replace(direction=self.direction.reverse())

    def move_to(self, point: Point2d) -> Axis2d:
        return self.replace(origin_point=point)

    def translate_by(self, vector: Vector2d) -> Axis2d:
        return self.replace(origin_point=self.origin_point.plus(vector))

    def rotate_around(self, center: Point2d, angle: float) -> Axis2d:
        transform = Transform2d.rotation(center.to_array(), angle)
        return Axis2d(
            self.origin_point.transform_by(transform),
            Direction2d.unsafe(self.direction.vector.transform_by(transform)),
        )

    def mirror_across(self, axis: Axis2d) -> Axis2d:
        transform = axis.mirror()
        return Axis2d(
            self.origin_point.transform_by(transform),
            Direction2d.unsafe(self.direction.vector.transform_by(transform)),
        )

    def to_local_in(self, frame: Frame2d) -> Axis2d:
        return Axis2d(self.origin_point.to_local_in(frame), self.direction.to_local_in(frame))

    def from_local_in(self, frame: Frame2d) -> Axis2d:
        return Axis2d(self.origin_point.from_local_in(frame), self.direction.from_local_in(frame))

    # Transform builders
    def mirror(self) -> Transform2d:
        """Reflection across this axis."""
        return Transform2d.reflection(self.origin_point.to_array(), self.direction.to_array())

    def projection(self) -> Transform2d:
        """Orthogonal projection onto this axis."""
        return Transform2d.projection_onto_axis(self.origin_point.to_array(), self.direction.to_array())


@struct.dataclass
class Frame2d:
    """A 2D coordinate system: an origin point and orthonormal basis directions."""
    origin_point: Point2d
    x_direction: Direction2d
    y_direction: Direction2d

    @classmethod
    def at_origin(cls) -> Frame2d:
        return cls.at_point(Point2d.origin())

    @classmethod
    def at_point(cls, point: Point2d) -> Frame2d:
        return cls(point, Direction2d.positive_x(), Direction2d.positive_y())

    @classmethod
    def with_x_direction(cls, x_direction: Direction2d, origin_point: Point2d) -> Frame2d:
        """Right-handed frame whose Y direction is X rotated counterclockwise by 90 degrees."""
        return cls(origin_point, x_direction, x_direction.perpendicular_to())

    def x_axis(self) -> Axis2d:
        return Axis2d(self.origin_point, self.x_direction)

    def y_axis(self) -> Axis2d:
        return Axis2d(self.origin_point, self.y_direction)

    def is_right_handed(self) -> bool:
        return self.x_direction.cross_product(self.y_direction) > 0.0

    def translate_by(self, vector: Vector2d) -> Frame2d:
        return self.replace(origin_point=self.origin_point.plus(vector))

    def move_to(self, point: Point2d) -> Frame2d:
        return self.replace(origin_point=point)

    def rotate_by(self, angle: float) -> Frame2d:
        """Rotate the basis about the frame's own origin."""
        return self.rotate_around(self.origin_point, angle)

    def rotate_around(self, center: Point2d, angle: float) -> Frame2d:
        transform = Transform2d.rotation(center.to_array(), angle)
        return Frame2d(
            self.origin_point.transform_by(transform),
            Direction2d.unsafe(self.x_direction.vector.transform_by(transform)),
            Direction2d.unsafe(self.y_direction.vector.transform_by(transform)),
        )

    # Transform builders
    def to_local(self) -> Transform2d:
        """Global coordinates -> coordinates in this frame."""
        return Transform2d.to_local(
            self.origin_point.to_array(), self.x_direction.to_array(), self.y_direction.to_array()
        )

    def from_local(self) -> Transform2d:
        """Coordinates in this frame -> global coordinates."""
        return Transform2d.from_local(
            self.origin_point.to_array(), self.x_direction.to_array(), self.y_direction.to_array()
        )
