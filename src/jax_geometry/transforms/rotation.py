"""Quaternion utilities in JAX."""

import jax
import jax.numpy as jnp
from typing import Union

# Type aliases
Array = jax.Array
Scalar = Union[float, Array]


def axis_angle_to_quaternion(axis: Array, angle: Scalar) -> Array:
    """
    Build unit quaternions from unit rotation axes and angles.

    Args:
        axis: (..., 3) array of unit-length rotation axes
        angle: scalar or (...,) array of angles in radians (right-hand rule)

    Returns:
        (..., 4) array of quaternions in (w, x, y, z) format
    """
    angle = jnp.asarray(angle, dtype=axis.dtype)
    batch_shape = jnp.broadcast_shapes(axis.shape[:-1], angle.shape)
    axis = jnp.broadcast_to(axis, batch_shape + (3,))
    half_angle = 0.5 * jnp.broadcast_to(angle, batch_shape)

    w = jnp.cos(half_angle)[..., None]
    xyz = axis * jnp.sin(half_angle)[..., None]
    return jnp.concatenate([w, xyz], axis=-1)


def quaternion_to_matrix(quaternions: Array) -> Array:
    """
    Convert quaternions to rotation matrices.

    Args:
        quaternions: (..., 4) array of quaternions in (w, x, y, z) format

    Returns:
        (..., 3, 3) array of rotation matrices
    """
    # Normalize quaternions for numerical stability
    quaternions = normalize_quaternions(quaternions)

    # Unpack quaternion components - preserving batch dimensions
    w, x, y, z = jnp.moveaxis(quaternions, -1, 0)

    xx, yy, zz = x*x, y*y, z*z
    wx, wy, wz = w*x, w*y, w*z
    xy, xz, yz = x*y, x*z, y*z

    matrix = jnp.stack([
        jnp.stack([1 - 2*(yy + zz), 2*(xy - wz), 2*(xz + wy)], axis=-1),
        jnp.stack([2*(xy + wz), 1 - 2*(xx + zz), 2*(yz - wx)], axis=-1),
        jnp.stack([2*(xz - wy), 2*(yz + wx), 1 - 2*(xx + yy)], axis=-1)
    ], axis=-2)

    return matrix


def normalize_quaternions(quaternions: Array) -> Array:
    """Normalize quaternions to unit length."""
    return quaternions / jnp.linalg.norm(quaternions, axis=-1, keepdims=True)
