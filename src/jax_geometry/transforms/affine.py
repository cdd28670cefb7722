"""Affine maps in homogeneous coordinates, in JAX.

This module implements 2D and 3D affine transforms as (d+1)x(d+1)
homogeneous matrices built from a linear block and a translation. The
dimension is taken from the trailing axis of the inputs, so the same
functions serve both the 2D and the 3D geometry types. All functions are
pure, JIT-able, and operate on JAX arrays.
"""


import jax
import jax.numpy as jnp

Array = jax.Array


def from_linear_and_translation(L: Array, t: Array) -> Array:
    """
    Construct an affine transform from a linear block and a translation.

    Args:
        L: (..., d, d) linear block
        t: (..., d) translation

    Returns:
        (..., d+1, d+1) homogeneous matrix
    """
    d = t.shape[-1]
    if L.shape[-2:] != (d, d):
        raise ValueError(f"linear block must have shape (...,{d},{d}), got {L.shape}")

    # Ensure consistent batch shapes
    batch_shape = jnp.broadcast_shapes(t.shape[:-1], L.shape[:-2])
    t = jnp.broadcast_to(t, batch_shape + (d,))
    L = jnp.broadcast_to(L, batch_shape + (d, d))

    T = jnp.zeros(batch_shape + (d + 1, d + 1), dtype=t.dtype)
    T = T.at[..., :d, :d].set(L)
    T = T.at[..., :d, d].set(t)
    T = T.at[..., d, d].set(1.0)

    return T


def about_point(L: Array, point: Array) -> Array:
    """
    Affine transform applying L to positions relative to a fixed point.

    The result maps p to L (p - point) + point, so ``point`` itself is left
    unchanged (the center of a rotation, a point on a mirror plane, ...).

    Args:
        L: (..., d, d) linear block
        point: (..., d) fixed point

    Returns:
        (..., d+1, d+1) homogeneous matrix
    """
    t = point - jnp.einsum("...ij,...j->...i", L, point)
    return from_linear_and_translation(L, t)


def translation(t: Array) -> Array:
    """Pure translation by t."""
    d = t.shape[-1]
    return from_linear_and_translation(jnp.eye(d, dtype=t.dtype), t)


def multiply(T1: Array, T2: Array) -> Array:
    """
    Multiply two homogeneous matrices.

    Args:
        T1: (..., d+1, d+1) first transform
        T2: (..., d+1, d+1) second transform

    Returns:
        (..., d+1, d+1) result of T1 @ T2 (apply T2 first, then T1)
    """
    return jnp.matmul(T1, T2)


def inverse_rigid(T: Array) -> Array:
    """
    Inverse of a rigid (rotation + translation) transform.

    Uses the block structure for efficient computation:
    T^-1 = [[R^T, -R^T @ t], [0, 1]]. Only valid when the linear block is
    orthonormal.

    Args:
        T: (..., d+1, d+1) transform

    Returns:
        (..., d+1, d+1) inverse transform
    """
    R = get_linear(T)
    t = get_translation(T)

    R_inv = jnp.swapaxes(R, -1, -2)
    t_inv = -jnp.einsum("...ij,...j->...i", R_inv, t)

    return from_linear_and_translation(R_inv, t_inv)


def apply_to_points(T: Array, points: Array) -> Array:
    """
    Apply an affine transform to points.

    Args:
        T: (d+1, d+1) transform
        points: (d,) or (..., d) points to transform

    Returns:
        (d,) or (..., d) transformed points
    """
    # Homogeneous coordinates work for both a single point and a batch
    ones = jnp.ones_like(points[..., 0:1])
    points_h = jnp.concatenate([points, ones], axis=-1)

    transformed_h = jnp.einsum("ij,...j->...i", T, points_h)

    # The homogeneous coordinate stays 1 for affine transforms
    return transformed_h[..., :-1]


def apply_to_vectors(T: Array, vectors: Array) -> Array:
    """
    Apply the linear block of an affine transform to vectors.

    Vectors are displacements, so the translation part is ignored.

    Args:
        T: (d+1, d+1) transform
        vectors: (d,) or (..., d) vectors to transform

    Returns:
        (d,) or (..., d) transformed vectors
    """
    return jnp.einsum("ij,...j->...i", get_linear(T), vectors)


def get_translation(T: Array) -> Array:
    """
    Extract the translation from a homogeneous matrix.

    Args:
        T: (..., d+1, d+1) transform

    Returns:
        (..., d) translation
    """
    return T[..., :-1, -1]


def get_linear(T: Array) -> Array:
    """
    Extract the linear block from a homogeneous matrix.

    Args:
        T: (..., d+1, d+1) transform

    Returns:
        (..., d, d) linear block
    """
    return T[..., :-1, :-1]
