"""JSON codec for the geometry types.

Vectors, points and directions are encoded as arrays of their components;
axes, planes and frames as objects keyed by field name. Decoding is the
structural inverse of encoding: any mismatch in array length, key set or
value type raises :class:`~jax_geometry.errors.DecodeError`. Directions are
not re-normalized on the way in.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Type, TypeVar

from jax_geometry.errors import DecodeError
from jax_geometry.geometry import (
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

logger = logging.getLogger(__name__)

T = TypeVar("T")
Decoder = Callable[[Any, str], Any]


def encode(value: Any) -> Any:
    """Convert a geometry value to plain JSON-compatible lists and dicts.

    Args:
        value: Any of the geometry value types.

    Returns:
        A list of floats or a dict of encoded fields.

    Raises:
        TypeError: If *value* is not a geometry type.
    """
    encoder = _ENCODERS.get(type(value))
    if encoder is None:
        raise TypeError(f"cannot encode {type(value).__name__} as geometry JSON")
    return encoder(value)


def decode(cls: Type[T], data: Any) -> T:
    """Rebuild a geometry value of type *cls* from its JSON structure.

    Args:
        cls: The geometry type to decode, e.g. ``Plane3d``.
        data: Parsed JSON (lists, dicts and numbers).

    Returns:
        The decoded value.

    Raises:
        DecodeError: If *data* does not have the shape of *cls*.
        TypeError: If *cls* is not a geometry type.
    """
    return _decoder_for(cls)(data, "$")


def dumps(value: Any, **kwargs) -> str:
    """Serialize a geometry value to a JSON string."""
    return json.dumps(encode(value), **kwargs)


def loads(cls: Type[T], text: str) -> T:
    """Parse a JSON string into a geometry value of type *cls*."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug(f"Rejected malformed JSON for {cls.__name__}: {e}")
        raise DecodeError(
            f"malformed JSON for {cls.__name__}: {e.msg} (line {e.lineno}, column {e.colno})"
        ) from e
    return decode(cls, data)


# Encoders

def _encode_components(value) -> List[float]:
    return list(value.components())


def _encode_axis(axis) -> Dict[str, Any]:
    return {
        "originPoint": encode(axis.origin_point),
        "direction": encode(axis.direction),
    }


def _encode_plane(plane: Plane3d) -> Dict[str, Any]:
    return {
        "originPoint": encode(plane.origin_point),
        "xDirection": encode(plane.x_direction),
        "yDirection": encode(plane.y_direction),
        "normalDirection": encode(plane.normal_direction),
    }


def _encode_frame2d(frame: Frame2d) -> Dict[str, Any]:
    return {
        "originPoint": encode(frame.origin_point),
        "xDirection": encode(frame.x_direction),
        "yDirection": encode(frame.y_direction),
    }


def _encode_frame3d(frame: Frame3d) -> Dict[str, Any]:
    return {
        "originPoint": encode(frame.origin_point),
        "xDirection": encode(frame.x_direction),
        "yDirection": encode(frame.y_direction),
        "zDirection": encode(frame.z_direction),
    }


_ENCODERS: Dict[type, Callable[[Any], Any]] = {
    Vector2d: _encode_components,
    Vector3d: _encode_components,
    Point2d: _encode_components,
    Point3d: _encode_components,
    Direction2d: _encode_components,
    Direction3d: _encode_components,
    Axis2d: _encode_axis,
    Axis3d: _encode_axis,
    Plane3d: _encode_plane,
    Frame2d: _encode_frame2d,
    Frame3d: _encode_frame3d,
}


# Decoders

def _error(type_name: str, path: str, problem: str) -> DecodeError:
    message = f"cannot decode {type_name} at {path}: {problem}"
    logger.debug(message)
    return DecodeError(message)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _components_decoder(cls: type, size: int) -> Decoder:
    def decode_components(data: Any, path: str):
        if not isinstance(data, (list, tuple)):
            raise _error(cls.__name__, path, f"expected an array of {size} numbers, got {type(data).__name__}")
        if len(data) != size:
            raise _error(cls.__name__, path, f"expected {size} components, got {len(data)}")
        for i, component in enumerate(data):
            if not _is_number(component):
                raise _error(cls.__name__, f"{path}[{i}]", f"expected a number, got {type(component).__name__}")
            try:
                float(component)
            except OverflowError as e:
                raise _error(cls.__name__, f"{path}[{i}]", "number is out of float range") from e
        return cls.from_components(tuple(data))
    return decode_components


def _fields_decoder(cls: type, fields: Dict[str, type]) -> Decoder:
    """Decoder for an object whose keys map, in order, onto the constructor arguments."""
    def decode_fields(data: Any, path: str):
        if not isinstance(data, dict):
            raise _error(cls.__name__, path, f"expected an object, got {type(data).__name__}")
        missing = [key for key in fields if key not in data]
        if missing:
            raise _error(cls.__name__, path, f"missing field(s) {', '.join(missing)}")
        unexpected = sorted(key for key in data if key not in fields)
        if unexpected:
            raise _error(cls.__name__, path, f"unexpected field(s) {', '.join(unexpected)}")
        values = [_decoder_for(field_type)(data[key], f"{path}.{key}") for key, field_type in fields.items()]
        return cls(*values)
    return decode_fields


_DECODERS: Dict[type, Decoder] = {
    Vector2d: _components_decoder(Vector2d, 2),
    Vector3d: _components_decoder(Vector3d, 3),
    Point2d: _components_decoder(Point2d, 2),
    Point3d: _components_decoder(Point3d, 3),
    Direction2d: _components_decoder(Direction2d, 2),
    Direction3d: _components_decoder(Direction3d, 3),
    Axis2d: _fields_decoder(Axis2d, {"originPoint": Point2d, "direction": Direction2d}),
    Axis3d: _fields_decoder(Axis3d, {"originPoint": Point3d, "direction": Direction3d}),
    Plane3d: _fields_decoder(Plane3d, {
        "originPoint": Point3d,
        "xDirection": Direction3d,
        "yDirection": Direction3d,
        "normalDirection": Direction3d,
    }),
    Frame2d: _fields_decoder(Frame2d, {
        "originPoint": Point2d,
        "xDirection": Direction2d,
        "yDirection": Direction2d,
    }),
    Frame3d: _fields_decoder(Frame3d, {
        "originPoint": Point3d,
        "xDirection": Direction3d,
        "yDirection": Direction3d,
        "zDirection": Direction3d,
    }),
}


def _decoder_for(cls: type) -> Decoder:
    decoder = _DECODERS.get(cls)
    if decoder is None:
        raise TypeError(f"no geometry JSON decoder for {getattr(cls, '__name__', cls)!r}")
    return decoder
