"""
Global numeric constants shared by the geometry types.

Exports:
    DTYPE: Floating point dtype used for every array built by the library.
    DEFAULT_TOLERANCE (float): Absolute tolerance used by ``equal_within``
        when the caller does not supply one.
"""
import jax.numpy as jnp

DTYPE = jnp.float64
DEFAULT_TOLERANCE: float = 1e-9
