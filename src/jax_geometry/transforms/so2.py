"""Linear 2D maps in JAX.

The 2D counterpart of :mod:`so3`: rotation by an angle, reflection across a
line through the origin, projection onto a line and basis changes.
"""

import jax
import jax.numpy as jnp
from typing import Union

Array = jax.Array
Scalar = Union[float, Array]


def from_angle(angle: Scalar, dtype=jnp.float64) -> Array:
    """
    Counterclockwise rotation matrix.

    Args:
        angle: scalar or (...,) array of angles in radians

    Returns:
        (..., 2, 2) array of rotation matrices
    """
    angle = jnp.asarray(angle, dtype=dtype)
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    return jnp.stack([
        jnp.stack([c, -s], axis=-1),
        jnp.stack([s, c], axis=-1)
    ], axis=-2)


def reflection(direction: Array) -> Array:
    """
    Reflection 2 d dᵀ - I across the line spanned by a unit direction.

    Args:
        direction: (..., 2) unit direction of the mirror line

    Returns:
        (..., 2, 2) reflection matrix
    """
    eye = jnp.broadcast_to(jnp.eye(2, dtype=direction.dtype), direction.shape[:-1] + (2, 2))
    return 2.0 * axis_projection(direction) - eye


def axis_projection(direction: Array) -> Array:
    """Orthogonal projection d dᵀ onto the line spanned by a unit direction."""
    return direction[..., :, None] * direction[..., None, :]


def from_basis(x_direction: Array, y_direction: Array) -> Array:
    """Matrix whose columns are the given basis directions."""
    return jnp.stack([x_direction, y_direction], axis=-1)


def inverse(R: Array) -> Array:
    """Inverse of a rotation (or orthonormal basis) matrix: its transpose."""
    return jnp.swapaxes(R, -1, -2)


def apply(R: Array, v: Array) -> Array:
    """
    Apply a linear map to vector(s).

    Args:
        R: (..., 2, 2) matrix
        v: (..., 2) or (..., N, 2) vector(s) to transform

    Returns:
        (..., 2) or (..., N, 2) transformed vector(s)
    """
    if v.ndim == R.ndim - 1:
        return jnp.einsum('...ij,...j->...i', R, v)
    else:
        return jnp.einsum('...ij,...nj->...ni', R, v)
