"""Precomputed 2D and 3D affine transforms implemented with JAX.

A transform is built once (rotation, reflection, projection, basis change)
and then applied to any number of vectors or points, one at a time or as a
batch array. Vectors only see the linear block; points see the full affine
map.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import jax
import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from ..config import DTYPE
from . import affine, so2, so3

Array = jax.Array


def _as_array(value) -> Array:
    return jnp.asarray(value, dtype=DTYPE)


class _AffineTransform:
    """Shared behaviour of Transform2d and Transform3d."""
    dimension: ClassVar[int]
    matrix: Array  # shape (d+1, d+1)

    @classmethod
    def from_matrix(cls, matrix):
        matrix = _as_array(matrix)
        size = cls.dimension + 1
        if matrix.shape != (size, size):
            raise ValueError(f"matrix must have shape ({size},{size}), got {matrix.shape}")
        return cls(matrix)

    @classmethod
    def from_linear_and_translation(cls, linear, translation):
        return cls.from_matrix(affine.from_linear_and_translation(_as_array(linear), _as_array(translation)))

    @classmethod
    def identity(cls):
        return cls(jnp.eye(cls.dimension + 1, dtype=DTYPE))

    @classmethod
    def translation(cls, displacement):
        return cls.from_matrix(affine.translation(_as_array(displacement)))

    @classmethod
    def scaling(cls, center, factor: float):
        """Uniform scaling about a center point."""
        linear = factor * jnp.eye(cls.dimension, dtype=DTYPE)
        return cls.from_matrix(affine.about_point(linear, _as_array(center)))

    # PyTree boiler-plate
    def tree_flatten(self):
        return (self.matrix,), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        (matrix,) = children
        return cls(matrix)

    # Basic operations
    def compose(self, other):
        """Self ∘ other (apply *other* first, then self)."""
        return type(self)(affine.multiply(self.matrix, other.matrix))

    def inverse_rigid(self):
        """Inverse of a rotation + translation transform (orthonormal linear block)."""
        return type(self)(affine.inverse_rigid(self.matrix))

    @property
    def linear(self) -> Array:
        return affine.get_linear(self.matrix)

    @property
    def translation_part(self) -> Array:
        return affine.get_translation(self.matrix)

    # Application
    def apply_to_vectors(self, vectors) -> Array:
        """
        Apply the linear block to *vectors*.

        Accepted shapes
        ---------------
        * (d,)          – single vector
        * (..., d)      – any batch of vectors
        """
        vectors = _as_array(vectors)
        self._check_trailing_axis(vectors)
        return affine.apply_to_vectors(self.matrix, vectors)

    def apply_to_points(self, points) -> Array:
        """
        Apply the full affine map to *points*.

        Accepted shapes
        ---------------
        * (d,)          – single point
        * (..., d)      – any batch of points
        """
        points = _as_array(points)
        self._check_trailing_axis(points)
        return affine.apply_to_points(self.matrix, points)

    def _check_trailing_axis(self, values: Array) -> None:
        if values.ndim == 0 or values.shape[-1] != self.dimension:
            raise ValueError(
                f"expected an array of shape (..., {self.dimension}), got {values.shape}"
            )


@register_pytree_node_class  # let Transform2d work with jit / vmap
@dataclass(frozen=True)
class Transform2d(_AffineTransform):
    """Immutable 2D affine transform stored as a 3x3 homogeneous matrix."""
    dimension: ClassVar[int] = 2
    matrix: Array

    @classmethod
    def rotation(cls, center, angle) -> "Transform2d":
        """Counterclockwise rotation by *angle* about *center*."""
        return cls.from_matrix(affine.about_point(so2.from_angle(angle, dtype=DTYPE), _as_array(center)))

    @classmethod
    def reflection(cls, origin, direction) -> "Transform2d":
        """Mirror across the line through *origin* along unit *direction*."""
        return cls.from_matrix(affine.about_point(so2.reflection(_as_array(direction)), _as_array(origin)))

    @classmethod
    def projection_onto_axis(cls, origin, direction) -> "Transform2d":
        """Orthogonal projection onto the line through *origin* along *direction*."""
        return cls.from_matrix(affine.about_point(so2.axis_projection(_as_array(direction)), _as_array(origin)))

    @classmethod
    def from_local(cls, origin, x_direction, y_direction) -> "Transform2d":
        """Local frame coordinates -> global coordinates."""
        basis = so2.from_basis(_as_array(x_direction), _as_array(y_direction))
        return cls.from_linear_and_translation(basis, origin)

    @classmethod
    def to_local(cls, origin, x_direction, y_direction) -> "Transform2d":
        """Global coordinates -> local frame coordinates (orthonormal frames only)."""
        return cls.from_local(origin, x_direction, y_direction).inverse_rigid()


@register_pytree_node_class  # let Transform3d work with jit / vmap
@dataclass(frozen=True)
class Transform3d(_AffineTransform):
    """Immutable 3D affine transform stored as a 4x4 homogeneous matrix."""
    dimension: ClassVar[int] = 3
    matrix: Array

    @classmethod
    def rotation(cls, origin, axis_direction, angle) -> "Transform3d":
        """Right-handed rotation by *angle* about the axis through *origin*."""
        linear = so3.from_axis_angle(_as_array(axis_direction), angle)
        return cls.from_matrix(affine.about_point(linear, _as_array(origin)))

    @classmethod
    def reflection(cls, origin, normal) -> "Transform3d":
        """Mirror across the plane through *origin* with unit *normal*."""
        return cls.from_matrix(affine.about_point(so3.reflection(_as_array(normal)), _as_array(origin)))

    @classmethod
    def projection_onto_axis(cls, origin, direction) -> "Transform3d":
        """Orthogonal projection onto the line through *origin* along *direction*."""
        return cls.from_matrix(affine.about_point(so3.axis_projection(_as_array(direction)), _as_array(origin)))

    @classmethod
    def projection_onto_plane(cls, origin, normal) -> "Transform3d":
        """Orthogonal projection onto the plane through *origin* with unit *normal*."""
        return cls.from_matrix(affine.about_point(so3.plane_projection(_as_array(normal)), _as_array(origin)))

    @classmethod
    def from_local(cls, origin, x_direction, y_direction, z_direction) -> "Transform3d":
        """Local frame coordinates -> global coordinates."""
        basis = so3.from_basis(_as_array(x_direction), _as_array(y_direction), _as_array(z_direction))
        return cls.from_linear_and_translation(basis, origin)

    @classmethod
    def to_local(cls, origin, x_direction, y_direction, z_direction) -> "Transform3d":
        """Global coordinates -> local frame coordinates (orthonormal frames only)."""
        return cls.from_local(origin, x_direction, y_direction, z_direction).inverse_rigid()
