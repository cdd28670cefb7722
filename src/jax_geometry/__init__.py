"""
JAX Geometry: immutable 2D/3D geometric primitives for JAX.

This library provides vectors, directions, points, axes, planes and frames,
the closed-form algebra over them (rotation, reflection, projection and
basis change), and a compact JSON representation.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import geometry
from . import io
from .geometry import (
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
from .transforms import Transform2d, Transform3d

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "geometry",
    "io",
    "Vector2d",
    "Vector3d",
    "Direction2d",
    "Direction3d",
    "Point2d",
    "Point3d",
    "Axis2d",
    "Axis3d",
    "Plane3d",
    "Frame2d",
    "Frame3d",
    "Transform2d",
    "Transform3d",
]
