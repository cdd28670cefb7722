"""
JAX-based transform layer for the geometry types.

This module provides pure, JIT-compilable implementations of:
- Linear 2D maps (so2 module)
- Linear 3D maps, including quaternion-based rotation (so3 module)
- Homogeneous affine maps in 2D and 3D (affine module)
- Precomputed, reusable transform values (Transform2d, Transform3d)

All functions are pure, stateless, and designed for batch computation.
"""

from . import affine
from . import rotation
from . import so2
from . import so3
from .transform import Transform2d, Transform3d

__all__ = [
    "affine",
    "rotation",
    "so2",
    "so3",
    "Transform2d",
    "Transform3d",
]
