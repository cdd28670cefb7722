"""Linear 3D maps in JAX.

This module builds the 3x3 matrices behind every orientation-only operation
on 3D vectors: rotation about an axis through the origin, reflection across
a plane through the origin, orthogonal projections and basis changes. All
functions are pure, JIT-able, and operate on JAX arrays.
"""

import jax
import jax.numpy as jnp
from typing import Union

from .rotation import axis_angle_to_quaternion, quaternion_to_matrix

Array = jax.Array
Scalar = Union[float, Array]


def from_axis_angle(axis: Array, angle: Scalar) -> Array:
    """
    Rotation matrix for a right-handed rotation about a unit axis.

    The matrix is built through the unit quaternion
    (cos(θ/2), sin(θ/2) * axis), so a zero angle yields the identity exactly.

    Args:
        axis: (..., 3) array of unit-length axis directions
        angle: scalar or (...,) array of angles in radians

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    return quaternion_to_matrix(axis_angle_to_quaternion(axis, angle))


def from_quaternion(quaternions: Array) -> Array:
    """
    Convert quaternions to rotation matrices.

    Args:
        quaternions: (..., 4) array of quaternions in (w, x, y, z) format

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    return quaternion_to_matrix(quaternions)


def reflection(normal: Array) -> Array:
    """
    Householder reflection I - 2 n nᵀ across the plane with unit normal n.

    Args:
        normal: (..., 3) unit normal

    Returns:
        (..., 3, 3) reflection matrix
    """
    eye = jnp.broadcast_to(jnp.eye(3, dtype=normal.dtype), normal.shape[:-1] + (3, 3))
    return eye - 2.0 * _outer(normal, normal)


def axis_projection(direction: Array) -> Array:
    """Orthogonal projection d dᵀ onto the line spanned by a unit direction."""
    return _outer(direction, direction)


def plane_projection(normal: Array) -> Array:
    """Orthogonal projection I - n nᵀ onto the plane with unit normal n."""
    eye = jnp.broadcast_to(jnp.eye(3, dtype=normal.dtype), normal.shape[:-1] + (3, 3))
    return eye - _outer(normal, normal)


def from_basis(x_direction: Array, y_direction: Array, z_direction: Array) -> Array:
    """
    Matrix whose columns are the given basis directions.

    Multiplying local components by this matrix gives global components; its
    transpose (the inverse for an orthonormal basis) maps global to local.

    Args:
        x_direction: (..., 3) first basis direction
        y_direction: (..., 3) second basis direction
        z_direction: (..., 3) third basis direction

    Returns:
        (..., 3, 3) basis matrix
    """
    return jnp.stack([x_direction, y_direction, z_direction], axis=-1)


def multiply(R1: Array, R2: Array) -> Array:
    """
    Multiply two 3x3 matrices.

    Args:
        R1: (..., 3, 3) first matrix
        R2: (..., 3, 3) second matrix

    Returns:
        (..., 3, 3) result of R1 @ R2
    """
    return jnp.matmul(R1, R2)


def inverse(R: Array) -> Array:
    """
    Compute inverse of rotation matrix.

    For rotation (and orthonormal basis) matrices the inverse is the transpose.

    Args:
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 3, 3) inverse rotation matrix
    """
    return jnp.swapaxes(R, -1, -2)


def apply(R: Array, v: Array) -> Array:
    """
    Apply a linear map to vector(s).

    Args:
        R: (..., 3, 3) matrix
        v: (..., 3) or (..., N, 3) vector(s) to transform

    Returns:
        (..., 3) or (..., N, 3) transformed vector(s)
    """
    if v.ndim == R.ndim - 1:  # Single vector case
        return jnp.einsum('...ij,...j->...i', R, v)
    else:  # Multiple vectors case
        return jnp.einsum('...ij,...nj->...ni', R, v)


def _outer(a: Array, b: Array) -> Array:
    return a[..., :, None] * b[..., None, :]
