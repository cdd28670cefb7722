"""3D geometric primitives.

Vectors, directions, points, axes, planes and frames in space. Every type is
an immutable flax ``struct.dataclass`` compared component-wise.

Rotation, mirroring, projection and basis change are two-step: an axis,
plane or frame builds a :class:`~jax_geometry.transforms.Transform3d` once
(``Axis3d.rotation``, ``Plane3d.mirror``, ``Frame3d.to_local`` ...), and the
value methods below apply it. Vectors see only the linear part of a
transform, so mirroring a vector ignores the plane's offset while mirroring
a point does not.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional, Tuple

import jax
import jax.numpy as jnp
from flax import struct

from ..config import DEFAULT_TOLERANCE, DTYPE
from ..transforms import Transform3d
from .geometry2d import Axis2d, Direction2d, Point2d, Vector2d, _components_from_array

Array = jax.Array


@struct.dataclass
class Vector3d:
    """A displacement in 3D space (x, y, z)."""
    x: float
    y: float
    z: float

    # Constructors
    @classmethod
    def zero(cls) -> Vector3d:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_components(cls, components: Tuple[float, float, float]) -> Vector3d:
        x, y, z = components
        return cls(float(x), float(y), float(z))

    @classmethod
    def from_record(cls, record: Mapping[str, float]) -> Vector3d:
        return cls(float(record["x"]), float(record["y"]), float(record["z"]))

    @classmethod
    def from_array(cls, array) -> Vector3d:
        return cls(*_components_from_array(array, 3))

    @classmethod
    def with_length(cls, length: float, direction: Direction3d) -> Vector3d:
        return direction.vector.times(length)

    @classmethod
    def along(cls, axis: Axis3d, magnitude: float) -> Vector3d:
        """Vector of the given signed length along *axis*."""
        return axis.direction.vector.times(magnitude)

    @classmethod
    def on(cls, plane: Plane3d, vector: Vector2d) -> Vector3d:
        """Lift a 2D vector in the plane's own basis into 3D."""
        return plane.x_direction.vector.times(vector.x).plus(plane.y_direction.vector.times(vector.y))

    @classmethod
    def interpolate_from(cls, start: Vector3d, end: Vector3d, t: float) -> Vector3d:
        """Linear interpolation: *start* at t=0, *end* at t=1."""
        return start.plus(end.minus(start).times(t))

    # Conversions
    def components(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_record(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    def to_array(self) -> Array:
        return jnp.array([self.x, self.y, self.z], dtype=DTYPE)

    # Metrics
    def component_in(self, direction: Direction3d) -> float:
        return self.dot_product(direction.vector)

    def length(self) -> float:
        return math.hypot(self.x, self.y, self.z)

    def squared_length(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def direction(self) -> Optional[Direction3d]:
        """Unit direction of this vector, or None for the zero vector."""
        return Direction3d.from_vector(self)

    def equal_within(self, other: Vector3d, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.minus(other).length() <= tolerance

    # Arithmetic
    def negate(self) -> Vector3d:
        return Vector3d(-self.x, -self.y, -self.z)

    def plus(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def minus(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def times(self, scale: float) -> Vector3d:
        return Vector3d(self.x * scale, self.y * scale, self.z * scale)

    def dot_product(self, other: Vector3d) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross_product(self, other: Vector3d) -> Vector3d:
        return Vector3d(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def perpendicular_to(self) -> Vector3d:
        """Some vector perpendicular to this one.

        The coordinate axis along which this vector has the smallest
        magnitude component is crossed in, which keeps the result non-zero
        for any non-zero input. Ties go to the first comparison made
        (|x| against |y|, then against |z|).
        """
        abs_x, abs_y, abs_z = abs(self.x), abs(self.y), abs(self.z)
        if abs_x <= abs_y:
            if abs_x <= abs_z:
                return Vector3d(0.0, -self.z, self.y)
            return Vector3d(-self.y, self.x, 0.0)
        if abs_y <= abs_z:
            return Vector3d(self.z, 0.0, -self.x)
        return Vector3d(-self.y, self.x, 0.0)

    def __add__(self, other: Vector3d) -> Vector3d:
        return self.plus(other)

    def __sub__(self, other: Vector3d) -> Vector3d:
        return self.minus(other)

    def __neg__(self) -> Vector3d:
        return self.negate()

    def __mul__(self, scale: float) -> Vector3d:
        return self.times(scale)

    def __rmul__(self, scale: float) -> Vector3d:
        return self.times(scale)

    # Transformations
    def transform_by(self, transform: Transform3d) -> Vector3d:
        """Apply the linear part of *transform* (translation is ignored)."""
        return Vector3d.from_array(transform.apply_to_vectors(self.to_array()))

    def rotate_around(self, axis: Axis3d, angle: float) -> Vector3d:
        return self.transform_by(axis.rotation(angle))

    def mirror_across(self, plane: Plane3d) -> Vector3d:
        return self.transform_by(plane.mirror())

    def project_onto_axis(self, axis: Axis3d) -> Vector3d:
        return self.transform_by(axis.projection())

    def project_onto(self, plane: Plane3d) -> Vector3d:
        """This vector minus its component along the plane's normal."""
        return self.transform_by(plane.projection())

    def to_local_in(self, frame: Frame3d) -> Vector3d:
        return self.transform_by(frame.to_local())

    def from_local_in(self, frame: Frame3d) -> Vector3d:
        return self.transform_by(frame.from_local())

    def project_into(self, plane: Plane3d) -> Vector2d:
        """Components in the plane's X/Y directions; the normal component is dropped."""
        return Vector2d(self.component_in(plane.x_direction), self.component_in(plane.y_direction))


@struct.dataclass
class Direction3d:
    """A unit-length 3D vector.

    The unit-length contract is held by construction: :meth:`from_vector`
    normalizes and can fail, :meth:`unsafe` trusts its input as-is.
    """
    vector: Vector3d

    # Constructors
    @classmethod
    def unsafe(cls, vector: Vector3d) -> Direction3d:
        """Wrap a vector the caller guarantees to be unit length."""
        return cls(vector)

    @classmethod
    def from_vector(cls, vector: Vector3d) -> Optional[Direction3d]:
        """Normalize *vector*; None if it is the zero vector."""
        if vector.x == 0.0 and vector.y == 0.0 and vector.z == 0.0:
            return None
        # Scale by the largest component first so the length cannot overflow
        largest = max(abs(vector.x), abs(vector.y), abs(vector.z))
        scaled = Vector3d(vector.x / largest, vector.y / largest, vector.z / largest)
        return cls(scaled.times(1.0 / scaled.length()))

    @classmethod
    def from_components(cls, components: Tuple[float, float, float]) -> Direction3d:
        return cls(Vector3d.from_components(components))

    @classmethod
    def positive_x(cls) -> Direction3d:
        return cls(Vector3d(1.0, 0.0, 0.0))

    @classmethod
    def negative_x(cls) -> Direction3d:
        return cls(Vector3d(-1.0, 0.0, 0.0))

    @classmethod
    def positive_y(cls) -> Direction3d:
        return cls(Vector3d(0.0, 1.0, 0.0))

    @classmethod
    def negative_y(cls) -> Direction3d:
        return cls(Vector3d(0.0, -1.0, 0.0))

    @classmethod
    def positive_z(cls) -> Direction3d:
        return cls(Vector3d(0.0, 0.0, 1.0))

    @classmethod
    def negative_z(cls) -> Direction3d:
        return cls(Vector3d(0.0, 0.0, -1.0))

    # Accessors
    @property
    def x(self) -> float:
        return self.vector.x

    @property
    def y(self) -> float:
        return self.vector.y

    @property
    def z(self) -> float:
        return self.vector.z

    def components(self) -> Tuple[float, float, float]:
        return self.vector.components()

    def to_array(self) -> Array:
        return self.vector.to_array()

    # Metrics
    def component_in(self, direction: Direction3d) -> float:
        return self.vector.component_in(direction)

    def dot_product(self, other: Direction3d) -> float:
        return self.vector.dot_product(other.vector)

    def cross_product(self, other: Direction3d) -> Vector3d:
        return self.vector.cross_product(other.vector)

    def angle_from(self, other: Direction3d) -> float:
        """Unsigned angle between the two directions, in [0, pi]."""
        return math.atan2(self.cross_product(other).length(), self.dot_product(other))

    def equal_within(self, other: Direction3d, angle_tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.angle_from(other) <= angle_tolerance

    # Derived directions
    def reverse(self) -> Direction3d:
        return Direction3d(self.vector.negate())

    def perpendicular_to(self) -> Direction3d:
        perpendicular = self.vector.perpendicular_to()
        return Direction3d(perpendicular.times(1.0 / perpendicular.length()))

    def perpendicular_basis(self) -> Tuple[Direction3d, Direction3d]:
        """Two directions completing this one into a right-handed basis.

        Returns (x, y) such that x × y equals this direction.
        """
        x_direction = self.perpendicular_to()
        y_direction = Direction3d.unsafe(self.vector.cross_product(x_direction.vector))
        return x_direction, y_direction

    def rotate_around(self, axis: Axis3d, angle: float) -> Direction3d:
        return Direction3d.unsafe(self.vector.rotate_around(axis, angle))

    def mirror_across(self, plane: Plane3d) -> Direction3d:
        return Direction3d.unsafe(self.vector.mirror_across(plane))

    def to_local_in(self, frame: Frame3d) -> Direction3d:
        return Direction3d.unsafe(self.vector.to_local_in(frame))

    def from_local_in(self, frame: Frame3d) -> Direction3d:
        return Direction3d.unsafe(self.vector.from_local_in(frame))

    def project_onto(self, plane: Plane3d) -> Optional[Direction3d]:
        """Direction of the in-plane part; None when this is the plane normal."""
        return self.vector.project_onto(plane).direction()

    def project_into(self, plane: Plane3d) -> Optional[Direction2d]:
        """Direction in the plane's own 2D basis; None when this is the plane normal."""
        return self.vector.project_into(plane).direction()


@struct.dataclass
class Point3d:
    """A position in 3D space (x, y, z)."""
    x: float
    y: float
    z: float

    # Constructors
    @classmethod
    def origin(cls) -> Point3d:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_components(cls, components: Tuple[float, float, float]) -> Point3d:
        x, y, z = components
        return cls(float(x), float(y), float(z))

    @classmethod
    def from_record(cls, record: Mapping[str, float]) -> Point3d:
        return cls(float(record["x"]), float(record["y"]), float(record["z"]))

    @classmethod
    def from_array(cls, array) -> Point3d:
        return cls(*_components_from_array(array, 3))

    @classmethod
    def on(cls, plane: Plane3d, point: Point2d) -> Point3d:
        """Lift a point given in the plane's own 2D coordinates into 3D."""
        return plane.origin_point.plus(Vector3d.on(plane, Vector2d(point.x, point.y)))

    @classmethod
    def interpolate_from(cls, start: Point3d, end: Point3d, t: float) -> Point3d:
        """Linear interpolation: *start* at t=0, *end* at t=1."""
        return start.plus(end.vector_from(start).times(t))

    # Conversions
    def components(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_record(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}

    def to_array(self) -> Array:
        return jnp.array([self.x, self.y, self.z], dtype=DTYPE)

    # Affine arithmetic
    def plus(self, vector: Vector3d) -> Point3d:
        return Point3d(self.x + vector.x, self.y + vector.y, self.z + vector.z)

    def minus(self, vector: Vector3d) -> Point3d:
        return Point3d(self.x - vector.x, self.y - vector.y, self.z - vector.z)

    def vector_from(self, other: Point3d) -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def __add__(self, vector: Vector3d) -> Point3d:
        return self.plus(vector)

    def __sub__(self, other):
        if isinstance(other, Point3d):
            return self.vector_from(other)
        return self.minus(other)

    # Metrics
    def distance_from(self, other: Point3d) -> float:
        return self.vector_from(other).length()

    def squared_distance_from(self, other: Point3d) -> float:
        return self.vector_from(other).squared_length()

    def midpoint(self, other: Point3d) -> Point3d:
        return Point3d.interpolate_from(self, other, 0.5)

    def signed_distance_along(self, axis: Axis3d) -> float:
        return self.vector_from(axis.origin_point).component_in(axis.direction)

    def signed_distance_from(self, plane: Plane3d) -> float:
        """Distance from *plane*, positive on the side its normal points to."""
        return self.vector_from(plane.origin_point).component_in(plane.normal_direction)

    def equal_within(self, other: Point3d, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.distance_from(other) <= tolerance

    # Transformations
    def transform_by(self, transform: Transform3d) -> Point3d:
        return Point3d.from_array(transform.apply_to_points(self.to_array()))

    def scale_about(self, center: Point3d, factor: float) -> Point3d:
        return self.transform_by(Transform3d.scaling(center.to_array(), factor))

    def rotate_around(self, axis: Axis3d, angle: float) -> Point3d:
        return self.transform_by(axis.rotation(angle))

    def mirror_across(self, plane: Plane3d) -> Point3d:
        return self.transform_by(plane.mirror())

    def project_onto_axis(self, axis: Axis3d) -> Point3d:
        return self.transform_by(axis.projection())

    def project_onto(self, plane: Plane3d) -> Point3d:
        return self.transform_by(plane.projection())

    def to_local_in(self, frame: Frame3d) -> Point3d:
        return self.transform_by(frame.to_local())

    def from_local_in(self, frame: Frame3d) -> Point3d:
        return self.transform_by(frame.from_local())

    def project_into(self, plane: Plane3d) -> Point2d:
        """Coordinates in the plane's own 2D system; the normal offset is dropped."""
        displacement = self.vector_from(plane.origin_point)
        return Point2d(
            displacement.component_in(plane.x_direction),
            displacement.component_in(plane.y_direction),
        )


@struct.dataclass
class Axis3d:
    """A directed line in 3D: an origin point and a direction."""
    origin_point: Point3d
    direction: Direction3d

    @classmethod
    def x_axis(cls) -> Axis3d:
        return cls(Point3d.origin(), Direction3d.positive_x())

    @classmethod
    def y_axis(cls) -> Axis3d:
        return cls(Point3d.origin(), Direction3d.positive_y())

    @classmethod
    def z_axis(cls) -> Axis3d:
        return cls(Point3d.origin(), Direction3d.positive_z())

    def flip(self) -> Axis3d:
        return self.replace(direction=self.direction.reverse())

    def move_to(self, point: Point3d) -> Axis3d:
        return self.replace(origin_point=point)

    def translate_by(self, vector: Vector3d) -> Axis3d:
        return self.replace(origin_point=self.origin_point.plus(vector))

    def rotate_around(self, axis: Axis3d, angle: float) -> Axis3d:
        return self._transformed(axis.rotation(angle))

    def mirror_across(self, plane: Plane3d) -> Axis3d:
        return self._transformed(plane.mirror())

    def to_local_in(self, frame: Frame3d) -> Axis3d:
        return self._transformed(frame.to_local())

    def from_local_in(self, frame: Frame3d) -> Axis3d:
        return self._transformed(frame.from_local())

    def project_into(self, plane: Plane3d) -> Optional[Axis2d]:
        """The axis as seen in the plane's 2D system; None if it is normal to the plane."""
        direction = self.direction.project_into(plane)
        if direction is None:
            return None
        return Axis2d(self.origin_point.project_into(plane), direction)

    def _transformed(self, transform: Transform3d) -> Axis3d:
        return Axis3d(
            self.origin_point.transform_by(transform),
            Direction3d.unsafe(self.direction.vector.transform_by(transform)),
        )

    # Transform builders
    def rotation(self, angle: float) -> Transform3d:
        """Right-handed rotation by *angle* radians about this axis."""
        return Transform3d.rotation(self.origin_point.to_array(), self.direction.to_array(), angle)

    def projection(self) -> Transform3d:
        """Orthogonal projection onto this axis."""
        return Transform3d.projection_onto_axis(self.origin_point.to_array(), self.direction.to_array())


@struct.dataclass
class Plane3d:
    """A plane with its own right-handed 2D coordinate system.

    ``x_direction × y_direction`` is expected to equal ``normal_direction``;
    this is a caller contract and is not checked.
    """
    origin_point: Point3d
    x_direction: Direction3d
    y_direction: Direction3d
    normal_direction: Direction3d

    @classmethod
    def xy(cls) -> Plane3d:
        return cls(
            Point3d.origin(),
            Direction3d.positive_x(),
            Direction3d.positive_y(),
            Direction3d.positive_z(),
        )

    @classmethod
    def yz(cls) -> Plane3d:
        return cls(
            Point3d.origin(),
            Direction3d.positive_y(),
            Direction3d.positive_z(),
            Direction3d.positive_x(),
        )

    @classmethod
    def zx(cls) -> Plane3d:
        return cls(
            Point3d.origin(),
            Direction3d.positive_z(),
            Direction3d.positive_x(),
            Direction3d.positive_y(),
        )

    @classmethod
    def through(cls, point: Point3d, normal_direction: Direction3d) -> Plane3d:
        """Plane through *point* with an arbitrary in-plane basis."""
        x_direction, y_direction = normal_direction.perpendicular_basis()
        return cls(point, x_direction, y_direction, normal_direction)

    @classmethod
    def from_axis(cls, axis: Axis3d) -> Plane3d:
        """Plane through the axis origin, normal to the axis."""
        return cls.through(axis.origin_point, axis.direction)

    def normal_axis(self) -> Axis3d:
        return Axis3d(self.origin_point, self.normal_direction)

    def flip(self) -> Plane3d:
        """Reverse the normal, keeping the basis right-handed."""
        return self.replace(
            y_direction=self.y_direction.reverse(),
            normal_direction=self.normal_direction.reverse(),
        )

    def offset_by(self, distance: float) -> Plane3d:
        return self.translate_by(self.normal_direction.vector.times(distance))

    def move_to(self, point: Point3d) -> Plane3d:
        return self.replace(origin_point=point)

    def translate_by(self, vector: Vector3d) -> Plane3d:
        return self.replace(origin_point=self.origin_point.plus(vector))

    def rotate_around(self, axis: Axis3d, angle: float) -> Plane3d:
        return self._transformed(axis.rotation(angle))

    def to_local_in(self, frame: Frame3d) -> Plane3d:
        return self._transformed(frame.to_local())

    def from_local_in(self, frame: Frame3d) -> Plane3d:
        return self._transformed(frame.from_local())

    def _transformed(self, transform: Transform3d) -> Plane3d:
        return Plane3d(
            self.origin_point.transform_by(transform),
            Direction3d.unsafe(self.x_direction.vector.transform_by(transform)),
            Direction3d.unsafe(self.y_direction.vector.transform_by(transform)),
            Direction3d.unsafe(self.normal_direction.vector.transform_by(transform)),
        )

    # Transform builders
    def mirror(self) -> Transform3d:
        """Reflection across this plane."""
        return Transform3d.reflection(self.origin_point.to_array(), self.normal_direction.to_array())

    def projection(self) -> Transform3d:
        """Orthogonal projection onto this plane."""
        return Transform3d.projection_onto_plane(self.origin_point.to_array(), self.normal_direction.to_array())


@struct.dataclass
class Frame3d:
    """A 3D coordinate system: an origin point and orthonormal basis directions."""
    origin_point: Point3d
    x_direction: Direction3d
    y_direction: Direction3d
    z_direction: Direction3d

    @classmethod
    def at_origin(cls) -> Frame3d:
        return cls.at_point(Point3d.origin())

    @classmethod
    def at_point(cls, point: Point3d) -> Frame3d:
        return cls(
            point,
            Direction3d.positive_x(),
            Direction3d.positive_y(),
            Direction3d.positive_z(),
        )

    @classmethod
    def with_z_direction(cls, z_direction: Direction3d, origin_point: Point3d) -> Frame3d:
        """Right-handed frame with the given Z direction and an arbitrary X/Y basis."""
        x_direction, y_direction = z_direction.perpendicular_basis()
        return cls(origin_point, x_direction, y_direction, z_direction)

    def x_axis(self) -> Axis3d:
        return Axis3d(self.origin_point, self.x_direction)

    def y_axis(self) -> Axis3d:
        return Axis3d(self.origin_point, self.y_direction)

    def z_axis(self) -> Axis3d:
        return Axis3d(self.origin_point, self.z_direction)

    def xy_plane(self) -> Plane3d:
        return Plane3d(self.origin_point, self.x_direction, self.y_direction, self.z_direction)

    def yz_plane(self) -> Plane3d:
        return Plane3d(self.origin_point, self.y_direction, self.z_direction, self.x_direction)

    def zx_plane(self) -> Plane3d:
        return Plane3d(self.origin_point, self.z_direction, self.x_direction, self.y_direction)

    def is_right_handed(self) -> bool:
        return self.x_direction.cross_product(self.y_direction).component_in(self.z_direction) > 0.0

    def translate_by(self, vector: Vector3d) -> Frame3d:
        return self.replace(origin_point=self.origin_point.plus(vector))

    def move_to(self, point: Point3d) -> Frame3d:
        return self.replace(origin_point=point)

    def rotate_around(self, axis: Axis3d, angle: float) -> Frame3d:
        transform = axis.rotation(angle)
        return Frame3d(
            self.origin_point.transform_by(transform),
            Direction3d.unsafe(self.x_direction.vector.transform_by(transform)),
            Direction3d.unsafe(self.y_direction.vector.transform_by(transform)),
            Direction3d.unsafe(self.z_direction.vector.transform_by(transform)),
        )

    # Transform builders
    def to_local(self) -> Transform3d:
        """Global coordinates -> coordinates in this frame."""
        return Transform3d.to_local(*self._arrays())

    def from_local(self) -> Transform3d:
        """Coordinates in this frame -> global coordinates."""
        return Transform3d.from_local(*self._arrays())

    def _arrays(self):
        return (
            self.origin_point.to_array(),
            self.x_direction.to_array(),
            self.y_direction.to_array(),
            self.z_direction.to_array(),
        )
