"""Tests for the transforms module."""

import hypothesis
import jax
import jax.numpy as jnp
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_geometry.transforms import Transform2d, Transform3d, affine, so2, so3

# Use hypothesis profile for CI
hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)


# Basic tests
def test_quaternion_to_matrix_identity():
    """Test from_quaternion with identity quaternion."""
    identity_quat = jnp.array([1.0, 0.0, 0.0, 0.0])
    matrix = so3.from_quaternion(identity_quat)
    np.testing.assert_allclose(matrix, jnp.eye(3), rtol=1e-12, atol=1e-12)


def test_quaternion_to_matrix_quarter_turn_about_y():
    """Test from_quaternion with a 90° rotation around Y."""
    quat = jnp.array([np.sqrt(0.5), 0.0, np.sqrt(0.5), 0.0])
    matrix = so3.from_quaternion(quat)
    expected = jnp.array([[0.0, 0.0, 1.0], [0.0, 1.0, 0.0], [-1.0, 0.0, 0.0]])
    np.testing.assert_allclose(matrix, expected, rtol=1e-12, atol=1e-12)


def test_from_axis_angle_zero_angle_is_exact_identity():
    """A zero angle must give the identity with no rounding at all."""
    R = so3.from_axis_angle(jnp.array([0.0, 0.6, 0.8]), 0.0)
    np.testing.assert_array_equal(R, jnp.eye(3))


def test_from_axis_angle_quarter_turn_about_z():
    """Test a 90° right-handed rotation about Z."""
    R = so3.from_axis_angle(jnp.array([0.0, 0.0, 1.0]), jnp.pi / 2)
    expected = jnp.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    np.testing.assert_allclose(R, expected, rtol=1e-12, atol=1e-12)


def test_from_axis_angle_batched():
    """Test from_axis_angle broadcasts over batches of axes and angles."""
    axes = jnp.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    angles = jnp.array([0.1, 0.2, 0.3])
    R = so3.from_axis_angle(axes, angles)
    assert R.shape == (3, 3, 3)

    for i in range(3):
        np.testing.assert_allclose(R[i], so3.from_axis_angle(axes[i], angles[i]), rtol=1e-12, atol=1e-12)

    # One axis, many angles
    R_shared_axis = so3.from_axis_angle(jnp.array([0.0, 0.0, 1.0]), angles)
    assert R_shared_axis.shape == (3, 3, 3)


def test_so3_apply():
    """Test apply on a single vector and on a batch."""
    R = so3.from_axis_angle(jnp.array([0.0, 0.0, 1.0]), jnp.pi / 2)

    v_rotated = so3.apply(R, jnp.array([1.0, 0.0, 0.0]))
    np.testing.assert_allclose(v_rotated, jnp.array([0.0, 1.0, 0.0]), rtol=1e-12, atol=1e-12)

    vs = jnp.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    vs_rotated = so3.apply(R, vs)
    expected = jnp.array([[0.0, 1.0, 0.0], [-1.0, 0.0, 0.0]])
    np.testing.assert_allclose(vs_rotated, expected, rtol=1e-12, atol=1e-12)


def test_so3_inverse():
    """R * R^T is the identity for a rotation."""
    R = so3.from_axis_angle(jnp.array([0.0, 0.6, 0.8]), 0.7)
    np.testing.assert_allclose(so3.multiply(R, so3.inverse(R)), jnp.eye(3), rtol=1e-12, atol=1e-12)


def test_so3_reflection():
    """Householder reflection across the XY plane flips Z."""
    H = so3.reflection(jnp.array([0.0, 0.0, 1.0]))
    np.testing.assert_array_equal(H, jnp.diag(jnp.array([1.0, 1.0, -1.0])))

    # Reflections are involutions
    n = jnp.array([1.0, 2.0, 2.0]) / 3.0
    H = so3.reflection(n)
    np.testing.assert_allclose(so3.multiply(H, H), jnp.eye(3), rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(H, H.T, rtol=1e-12, atol=1e-12)


def test_so3_projections():
    """Axis and plane projections split a vector into orthogonal parts."""
    n = jnp.array([0.0, 0.6, 0.8])
    v = jnp.array([1.0, 2.0, 3.0])
    along = so3.apply(so3.axis_projection(n), v)
    across = so3.apply(so3.plane_projection(n), v)

    np.testing.assert_allclose(along + across, v, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(jnp.dot(across, n), 0.0, atol=1e-12)
    np.testing.assert_allclose(along, jnp.dot(v, n) * n, rtol=1e-12, atol=1e-12)


def test_so3_from_basis_columns():
    """Basis directions become the matrix columns."""
    x = jnp.array([0.0, 1.0, 0.0])
    y = jnp.array([-1.0, 0.0, 0.0])
    z = jnp.array([0.0, 0.0, 1.0])
    B = so3.from_basis(x, y, z)
    np.testing.assert_array_equal(B[:, 0], x)
    np.testing.assert_array_equal(B[:, 1], y)
    np.testing.assert_array_equal(B[:, 2], z)


def test_so2_rotation_and_reflection():
    """Test 2D rotation and reflection matrices."""
    R = so2.from_angle(jnp.pi / 2)
    np.testing.assert_allclose(R, jnp.array([[0.0, -1.0], [1.0, 0.0]]), rtol=1e-12, atol=1e-12)

    H = so2.reflection(jnp.array([1.0, 0.0]))
    np.testing.assert_array_equal(H, jnp.array([[1.0, 0.0], [0.0, -1.0]]))

    v = so2.apply(R, jnp.array([1.0, 0.0]))
    np.testing.assert_allclose(v, jnp.array([0.0, 1.0]), rtol=1e-12, atol=1e-12)

    np.testing.assert_allclose(so2.inverse(R) @ R, jnp.eye(2), rtol=1e-12, atol=1e-12)


# Affine tests
def test_affine_from_linear_and_translation():
    """Test homogeneous matrix construction."""
    T = affine.from_linear_and_translation(jnp.eye(3), jnp.array([1.0, 2.0, 3.0]))
    expected = jnp.array([[1.0, 0.0, 0.0, 1.0], [0.0, 1.0, 0.0, 2.0], [0.0, 0.0, 1.0, 3.0], [0.0, 0.0, 0.0, 1.0]])
    np.testing.assert_array_equal(T, expected)

    np.testing.assert_array_equal(affine.get_linear(T), jnp.eye(3))
    np.testing.assert_array_equal(affine.get_translation(T), jnp.array([1.0, 2.0, 3.0]))


def test_affine_shape_mismatch():
    """A linear block that does not match the translation is rejected."""
    with pytest.raises(ValueError):
        affine.from_linear_and_translation(jnp.eye(2), jnp.zeros(3))


def test_affine_about_point_keeps_point_fixed():
    """The center of an affine map about a point does not move."""
    L = so3.from_axis_angle(jnp.array([0.0, 0.0, 1.0]), 1.1)
    center = jnp.array([1.0, -2.0, 0.5])
    T = affine.about_point(L, center)
    np.testing.assert_allclose(affine.apply_to_points(T, center), center, rtol=1e-12, atol=1e-12)


def test_affine_vectors_ignore_translation():
    """Vectors are displacements and do not see the translation."""
    T = affine.translation(jnp.array([5.0, 6.0]))
    v = jnp.array([1.0, 2.0])
    np.testing.assert_array_equal(affine.apply_to_vectors(T, v), v)
    np.testing.assert_array_equal(affine.apply_to_points(T, v), jnp.array([6.0, 8.0]))


# Transform tests
def test_transform3d_rotation_about_offset_axis():
    """Rotation about an axis that does not pass through the origin."""
    T = Transform3d.rotation([1.0, 0.0, 0.0], [0.0, 0.0, 1.0], jnp.pi / 2)

    points = jnp.array([[2.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
    expected_points = jnp.array([[1.0, 1.0, 0.0], [1.0, 0.0, 0.0]])
    np.testing.assert_allclose(T.apply_to_points(points), expected_points, rtol=1e-12, atol=1e-12)

    # Vectors rotate about the direction only
    np.testing.assert_allclose(T.apply_to_vectors([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], rtol=1e-12, atol=1e-12)


def test_transform3d_reflection_through_offset_plane():
    """Points reflect through the plane's offset, vectors do not."""
    T = Transform3d.reflection([0.0, 0.0, 1.0], [0.0, 0.0, 1.0])
    np.testing.assert_array_equal(T.apply_to_points([0.0, 0.0, 3.0]), [0.0, 0.0, -1.0])
    np.testing.assert_array_equal(T.apply_to_vectors([0.0, 0.0, 3.0]), [0.0, 0.0, -3.0])


def test_transform3d_compose():
    """Test composition of transforms."""
    translate = Transform3d.translation([1.0, 0.0, 0.0])
    rotate = Transform3d.rotation([0.0, 0.0, 0.0], [0.0, 0.0, 1.0], jnp.pi / 2)

    # Rotate first, then translate
    result = translate.compose(rotate)
    np.testing.assert_array_equal(result.translation_part, [1.0, 0.0, 0.0])
    transformed = result.apply_to_points([1.0, 0.0, 0.0])
    np.testing.assert_allclose(transformed, [1.0, 1.0, 0.0], rtol=1e-12, atol=1e-12)


def test_transform3d_local_coordinates():
    """Test to_local / from_local for a rotated, offset frame."""
    origin = [1.0, 2.0, 3.0]
    x, y, z = [0.0, 1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 0.0, 1.0]

    local = Transform3d.to_local(origin, x, y, z).apply_to_points([1.0, 3.0, 3.0])
    np.testing.assert_allclose(local, [1.0, 0.0, 0.0], rtol=1e-12, atol=1e-12)

    back = Transform3d.from_local(origin, x, y, z).apply_to_points(local)
    np.testing.assert_allclose(back, [1.0, 3.0, 3.0], rtol=1e-12, atol=1e-12)


def test_transform2d_rotation_and_reflection():
    """Test the 2D transform builders."""
    rotate = Transform2d.rotation([1.0, 1.0], jnp.pi)
    np.testing.assert_allclose(rotate.apply_to_points([2.0, 1.0]), [0.0, 1.0], rtol=1e-12, atol=1e-12)

    mirror = Transform2d.reflection([0.0, 1.0], [1.0, 0.0])
    np.testing.assert_array_equal(mirror.apply_to_points([3.0, 4.0]), [3.0, -2.0])

    project = Transform2d.projection_onto_axis([0.0, 1.0], [1.0, 0.0])
    np.testing.assert_array_equal(project.apply_to_points([3.0, 4.0]), [3.0, 1.0])


def test_transform_from_matrix_rejects_wrong_shape():
    """Transforms validate their matrix shape."""
    with pytest.raises(ValueError):
        Transform3d.from_matrix(jnp.eye(3))
    with pytest.raises(ValueError):
        Transform2d.from_matrix(jnp.eye(4))


def test_transform_rejects_wrong_coordinate_count():
    """Applying a 3D transform to 2D coordinates is an error."""
    with pytest.raises(ValueError):
        Transform3d.identity().apply_to_points(jnp.zeros((5, 2)))


# Batched tests
def test_transform_points_batched():
    """One precomputed transform applied to a batch of points."""
    T = Transform3d.rotation([0.0, 0.0, 0.0], [0.0, 0.0, 1.0], jnp.pi / 2)
    points = jax.random.uniform(jax.random.PRNGKey(0), (4, 10, 3), minval=-5.0, maxval=5.0)

    transformed = T.apply_to_points(points)
    assert transformed.shape == (4, 10, 3)

    expected = jnp.stack([-points[..., 1], points[..., 0], points[..., 2]], axis=-1)
    np.testing.assert_allclose(transformed, expected, rtol=1e-12, atol=1e-12)


# JIT tests
def test_transform_jit_compatibility():
    """Transforms are pytrees and can cross a jit boundary."""
    T = Transform3d.rotation([1.0, 0.0, 0.0], [0.0, 0.0, 1.0], jnp.pi / 2)

    @jax.jit
    def jitted_apply(transform, points):
        return transform.apply_to_points(points)

    points = jnp.array([[2.0, 0.0, 0.0], [1.0, 0.0, 5.0]])
    np.testing.assert_allclose(jitted_apply(T, points), T.apply_to_points(points), rtol=1e-12, atol=1e-12)


def test_transform_vmap_over_angles():
    """Building rotations under vmap gives one transform per angle."""
    angles = jnp.linspace(0.0, jnp.pi, 5)
    point = jnp.array([1.0, 0.0, 0.0])

    def rotate(angle):
        return Transform3d.rotation(jnp.zeros(3), jnp.array([0.0, 0.0, 1.0]), angle).apply_to_points(point)

    rotated = jax.vmap(rotate)(angles)
    expected = jnp.stack([jnp.cos(angles), jnp.sin(angles), jnp.zeros_like(angles)], axis=-1)
    np.testing.assert_allclose(rotated, expected, rtol=1e-12, atol=1e-12)


# Property-based tests with hypothesis - explicit key handling
@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None)
def test_rigid_inverse_property(seed):
    """Test that T * T^-1 = Identity with explicit key generation."""
    key1, key2, key3 = jax.random.split(jax.random.PRNGKey(seed), 3)

    origin = jax.random.uniform(key1, (3,), minval=-5.0, maxval=5.0)
    axis = jax.random.normal(key2, (3,))
    axis = axis / jnp.linalg.norm(axis)
    angle = jax.random.uniform(key3, (), minval=-jnp.pi, maxval=jnp.pi)

    T = Transform3d.rotation(origin, axis, angle)
    identity = T.compose(T.inverse_rigid())
    np.testing.assert_allclose(identity.matrix, jnp.eye(4), rtol=1e-10, atol=1e-10)


@given(st.integers(min_value=0, max_value=100))
@settings(deadline=None)
def test_rotation_matrix_is_orthonormal(seed):
    """Quaternion-built rotations are orthonormal with determinant 1."""
    key1, key2 = jax.random.split(jax.random.PRNGKey(seed))
    axis = jax.random.normal(key1, (3,))
    axis = axis / jnp.linalg.norm(axis)
    angle = jax.random.uniform(key2, (), minval=-10.0, maxval=10.0)

    R = so3.from_axis_angle(axis, angle)
    np.testing.assert_allclose(R @ R.T, jnp.eye(3), rtol=1e-10, atol=1e-10)
    np.testing.assert_allclose(jnp.linalg.det(R), 1.0, rtol=1e-10, atol=1e-10)

    # The axis itself is left unchanged
    np.testing.assert_allclose(so3.apply(R, axis), axis, rtol=1e-10, atol=1e-10)
