"""Schema definitions for stored parameters.

A parameter value is one of four scalar types or a homogeneous vector of
one of them. The closed set is modelled as a tagged union: every stored
value carries its ``ParameterType`` so lookups and the YAML emitter can
dispatch on the tag instead of on the runtime type of the payload.
"""

import sys
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from ..errors import UnsupportedTypeError


class ParameterType(Enum):
    """Tag of a stored parameter value."""

    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    STRING = "string"
    INT_VECTOR = "int_vector"
    DOUBLE_VECTOR = "double_vector"
    BOOL_VECTOR = "bool_vector"
    STRING_VECTOR = "string_vector"

    @property
    def is_vector(self) -> bool:
        return self in _ELEMENT_TYPES

    @property
    def element(self) -> "ParameterType":
        """Element type of a vector type."""
        if not self.is_vector:
            raise ValueError(f"{self.value} is not a vector type")
        return _ELEMENT_TYPES[self]

    @property
    def vector(self) -> "ParameterType":
        """Vector type holding elements of this scalar type."""
        if self.is_vector:
            raise ValueError(f"{self.value} is already a vector type")
        return _VECTOR_TYPES[self]


_ELEMENT_TYPES = {
    ParameterType.INT_VECTOR: ParameterType.INT,
    ParameterType.DOUBLE_VECTOR: ParameterType.DOUBLE,
    ParameterType.BOOL_VECTOR: ParameterType.BOOL,
    ParameterType.STRING_VECTOR: ParameterType.STRING,
}

_VECTOR_TYPES = {element: vector for vector, element in _ELEMENT_TYPES.items()}

# Python types accepted as request types by the typed getters
_SCALAR_REQUESTS = {
    int: ParameterType.INT,
    float: ParameterType.DOUBLE,
    bool: ParameterType.BOOL,
    str: ParameterType.STRING,
}

_SEQUENCE_ORIGINS = (list, tuple, Sequence)

# numpy dtype kinds of 1-d arrays accepted by set()
_ARRAY_KINDS = {
    "b": ParameterType.BOOL_VECTOR,
    "i": ParameterType.INT_VECTOR,
    "u": ParameterType.INT_VECTOR,
    "f": ParameterType.DOUBLE_VECTOR,
    "U": ParameterType.STRING_VECTOR,
}

# numpy scalar base classes that cannot be instantiated
_ABSTRACT_NUMBERS = (
    np.number,
    np.integer,
    np.signedinteger,
    np.unsignedinteger,
    np.inexact,
    np.floating,
)


@dataclass(frozen=True)
class Parameter:
    """A stored parameter value together with its type tag.

    Vector payloads are kept as tuples so a value handed out by the store
    can never alias the stored one.
    """

    kind: ParameterType
    value: Any

    @classmethod
    def of(cls, value: Any, kind: ParameterType | None = None) -> "Parameter":
        """Build a parameter, inferring the tag when ``kind`` is not given.

        Raises:
            UnsupportedTypeError: If the value has no matching parameter type
                or cannot be represented as ``kind``.
        """
        if kind is None:
            kind = infer_type(value)
        return cls(kind=kind, value=normalize_value(value, kind))

    def to_python(self) -> Any:
        """Return the payload, with vectors as a fresh list."""
        if self.kind.is_vector:
            return list(self.value)
        return self.value


def infer_type(value: Any) -> ParameterType:
    """Infer the parameter type of a Python (or numpy) value."""
    # bool subclasses int, so it has to be checked first
    if isinstance(value, (bool, np.bool_)):
        return ParameterType.BOOL
    if isinstance(value, (int, np.integer)):
        return ParameterType.INT
    if isinstance(value, (float, np.floating)):
        return ParameterType.DOUBLE
    if isinstance(value, str):
        return ParameterType.STRING

    if isinstance(value, np.ndarray):
        if value.ndim != 1 or value.dtype.kind not in _ARRAY_KINDS:
            raise UnsupportedTypeError(
                f"Cannot store array of shape {value.shape} and dtype {value.dtype}"
            )
        return _ARRAY_KINDS[value.dtype.kind]

    if isinstance(value, (list, tuple)):
        if not value:
            return ParameterType.INT_VECTOR
        element_types = set()
        for element in value:
            if isinstance(element, (list, tuple, np.ndarray)):
                raise UnsupportedTypeError("Nested sequences are not supported")
            element_types.add(infer_type(element))
        if len(element_types) == 1:
            return element_types.pop().vector
        # Mixed int/float sequences are promoted like a YAML sequence would be
        if element_types == {ParameterType.INT, ParameterType.DOUBLE}:
            return ParameterType.DOUBLE_VECTOR
        names = sorted(t.value for t in element_types)
        raise UnsupportedTypeError(f"Mixed-type sequences are not supported: {names}")

    raise UnsupportedTypeError(f"Cannot store value of type {type(value).__name__}")


def normalize_value(value: Any, kind: ParameterType) -> Any:
    """Convert a value to the canonical Python payload for ``kind``."""
    if kind.is_vector:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, np.ndarray)):
            raise UnsupportedTypeError(
                f"Expected a sequence for {kind.value}, got {type(value).__name__}"
            )
        return tuple(normalize_value(element, kind.element) for element in value)

    match kind:
        case ParameterType.BOOL:
            if isinstance(value, (bool, np.bool_)):
                return bool(value)
        case ParameterType.INT:
            if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
                return int(value)
        case ParameterType.DOUBLE:
            if isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(
                value, (bool, np.bool_)
            ):
                return float(value)
        case ParameterType.STRING:
            if isinstance(value, str):
                return str(value)

    raise UnsupportedTypeError(f"Cannot store {value!r} as {kind.value}")


def request_type(type_: Any) -> ParameterType | None:
    """Map a request type to the parameter type it reads without widening.

    Accepts ``ParameterType`` members, ``int``/``float``/``bool``/``str`` and
    ``list[...]``, ``tuple[..., ...]`` or ``Sequence[...]`` of those.
    Returns None for anything else, e.g. a numpy scalar type, which can only
    be read through widening.
    """
    if isinstance(type_, ParameterType):
        return type_
    if isinstance(type_, type) and type_ in _SCALAR_REQUESTS:
        return _SCALAR_REQUESTS[type_]

    origin = typing.get_origin(type_)
    if origin not in _SEQUENCE_ORIGINS:
        return None
    args = typing.get_args(type_)
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        args = args[:1]
    if len(args) != 1 or args[0] not in _SCALAR_REQUESTS:
        return None
    return _SCALAR_REQUESTS[args[0]].vector


def _fits_double(value: int) -> bool:
    return abs(value) <= sys.float_info.max


def widens_from_int(type_: Any, value: int) -> bool:
    """Whether the stored int ``value`` may be read as ``type_``.

    Only numeric scalar targets qualify: ``float``, ``ParameterType.DOUBLE``
    and concrete numpy integer or floating scalar types. Never bool, str or
    vectors. The value must also be representable in the target, e.g. 300
    does not widen to ``np.int8``.
    """
    if type_ is float or type_ is ParameterType.DOUBLE:
        return _fits_double(value)
    if typing.get_origin(type_) is not None or not isinstance(type_, type):
        return False
    if type_ in _ABSTRACT_NUMBERS:
        return False
    if issubclass(type_, np.integer):
        limits = np.iinfo(type_)
        return limits.min <= value <= limits.max
    return issubclass(type_, np.floating) and _fits_double(value)


def widen_int(value: int, type_: Any) -> Any:
    """Convert a stored int to a widening target type."""
    if type_ is ParameterType.DOUBLE:
        return float(value)
    return type_(value)


def describe_type(type_: Any) -> str:
    """Human readable name of a request type, for error messages."""
    if isinstance(type_, ParameterType):
        return type_.value
    if typing.get_origin(type_) is not None:
        return repr(type_).replace("typing.", "")
    return getattr(type_, "__name__", repr(type_))
