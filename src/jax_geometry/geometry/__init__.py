"""Immutable geometric value types.

This module provides the 2D and 3D vectors, directions, points, axes,
planes and frames the rest of the library is built around.
"""

from .geometry2d import Axis2d, Direction2d, Frame2d, Point2d, Vector2d
from .geometry3d import Axis3d, Direction3d, Frame3d, Plane3d, Point3d, Vector3d

__all__ = [
    "Vector2d",
    "Direction2d",
    "Point2d",
    "Axis2d",
    "Frame2d",
    "Vector3d",
    "Direction3d",
    "Point3d",
    "Axis3d",
    "Plane3d",
    "Frame3d",
]
