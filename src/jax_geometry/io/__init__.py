"""I/O utilities for exchanging geometry values with other programs.

This module provides the compact JSON representation of every geometry
type.
"""

from .json_codec import decode, dumps, encode, loads

__all__ = ["encode", "decode", "dumps", "loads"]
