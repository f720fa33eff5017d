"""Typed coercion of YAML scalar text, and the canonical text of values.

Scalars are probed in the fixed order int, double, bool, string; the first
type the text coerces to wins. A quoted scalar is only ever a string, and
an unquoted scalar is only a string if it is none of the other three, so a
sequence like ``[1, a]`` has no common type.
"""

import math
import re
from typing import Any

from ..errors import UnsupportedTypeError
from ..parameters import Parameter, ParameterType

SCALAR_PROBE_ORDER = (
    ParameterType.INT,
    ParameterType.DOUBLE,
    ParameterType.BOOL,
    ParameterType.STRING,
)

_INT_PATTERN = re.compile(r"[-+]?[0-9]+")
_HEX_PATTERN = re.compile(r"[-+]?0x[0-9a-fA-F]+")
_OCT_PATTERN = re.compile(r"[-+]?0o[0-7]+")
_FLOAT_PATTERN = re.compile(r"[-+]?(\.[0-9]+|[0-9]+(\.[0-9]*)?)([eE][-+]?[0-9]+)?")


def _spellings(*words: str) -> set[str]:
    return {form for word in words for form in (word, word.capitalize(), word.upper())}


_TRUE_WORDS = _spellings("true", "yes", "on", "y")
_FALSE_WORDS = _spellings("false", "no", "off", "n")
_INF_WORDS = {".inf", ".Inf", ".INF"}
_NAN_WORDS = {".nan", ".NaN", ".NAN"}
NULL_WORDS = {"", "~", "null", "Null", "NULL"}

# Largest magnitude still written in fixed notation with a ".0" suffix
_FIXED_NOTATION_LIMIT = 1e16


def parse_int(text: str) -> int | None:
    """Parse decimal, hex (0x) or octal (0o) integer text.

    Raises:
        UnsupportedTypeError: If a decimal literal exceeds the interpreter's
            integer digit limit
    """
    if _INT_PATTERN.fullmatch(text):
        try:
            return int(text)
        except ValueError as e:
            raise UnsupportedTypeError(f"Integer literal of {len(text)} characters: {e}") from e
    if _HEX_PATTERN.fullmatch(text):
        return int(text, 16)
    if _OCT_PATTERN.fullmatch(text):
        return int(text, 8)
    return None


def parse_double(text: str) -> float | None:
    if _FLOAT_PATTERN.fullmatch(text):
        return float(text)
    sign = -1.0 if text.startswith("-") else 1.0
    unsigned = text[1:] if text[:1] in ("+", "-") else text
    if unsigned in _INF_WORDS:
        return sign * math.inf
    if text in _NAN_WORDS:
        return math.nan
    return None


def parse_bool(text: str) -> bool | None:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return None


def coerce_scalar(text: str, kind: ParameterType, quoted: bool = False) -> Any:
    """Coerce scalar text to a scalar parameter type.

    Args:
        text: The scalar's text
        kind: Scalar parameter type to coerce to
        quoted: Whether the scalar was quoted (or block) in the document

    Returns:
        The coerced value, or None if the text is not valid for ``kind``
    """
    if kind is ParameterType.STRING:
        if quoted:
            return text
        if any(coerce_scalar(text, other) is not None for other in SCALAR_PROBE_ORDER[:-1]):
            return None
        return text

    if quoted:
        return None
    match kind:
        case ParameterType.INT:
            return parse_int(text)
        case ParameterType.DOUBLE:
            return parse_double(text)
        case ParameterType.BOOL:
            return parse_bool(text)
    raise ValueError(f"{kind.value} is not a scalar type")


def probe_scalar(text: str, quoted: bool = False) -> Parameter | None:
    """Parse scalar text as the first type in probe order that accepts it."""
    for kind in SCALAR_PROBE_ORDER:
        value = coerce_scalar(text, kind, quoted)
        if value is not None:
            return Parameter(kind=kind, value=value)
    return None


def is_plain_string(text: str) -> bool:
    """Whether ``text`` written unquoted would be read back as this string."""
    return text not in NULL_WORDS and coerce_scalar(text, ParameterType.STRING) is not None


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_double(value: float) -> str:
    """Canonical text of a double.

    Integral values keep one fractional digit (4.0 stays "4.0" rather than
    "4") so they are read back as doubles; everything else uses the
    shortest text that round-trips exactly.
    """
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    if value.is_integer() and abs(value) < _FIXED_NOTATION_LIMIT:
        return f"{value:.1f}"
    return repr(value)
