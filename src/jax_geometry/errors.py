"""Typed errors raised by jax_geometry."""


class GeometryError(Exception):
    """Base error of the project."""


class DecodeError(GeometryError, ValueError):
    """A JSON value does not have the shape of the requested geometry type."""
