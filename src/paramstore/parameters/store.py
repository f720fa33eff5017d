"""Name-keyed store of typed parameters."""

from collections.abc import Iterator
from typing import Any

from ..errors import NotFoundError
from .schema import (
    Parameter,
    ParameterType,
    describe_type,
    request_type,
    widen_int,
    widens_from_int,
)

_MISSING = object()


class ParameterStore:
    """Collection of typed parameters keyed by ``/``-separated names.

    Values are read back by exact type match, with one exception: a value
    stored as int can be read as any numeric type that accepts an int
    (``float``, numpy scalar types). Vectors never widen.

    Example:
        store = ParameterStore()
        store.set("controller/gains/kp", 2)
        store.get("controller/gains/kp", float)  # 2.0
        store.try_get("controller/gains/kp", str)  # None
    """

    def __init__(self):
        self._parameters: dict[str, Parameter] = {}
        self._updated = False

    def __repr__(self) -> str:
        return f"ParameterStore({len(self._parameters)} parameters, updated={self._updated})"

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def set(self, name: str, value: Any, kind: ParameterType | None = None) -> None:
        """Create or overwrite the parameter ``name``.

        The type may differ from the one previously stored under the name.

        Args:
            name: Parameter name (e.g., "category/sub/key")
            value: int, float, bool, str, or a homogeneous list, tuple or
                1-d numpy array of those
            kind: Explicit type tag; inferred from ``value`` when omitted

        Raises:
            UnsupportedTypeError: If the value has no parameter type
        """
        self._parameters[name] = Parameter.of(value, kind)
        self._updated = True

    def try_get(self, name: str, type_: Any, default: Any = None) -> Any:
        """Get a parameter as ``type_``, or ``default`` if that is not possible.

        A stored int is converted when ``type_`` is a numeric type it
        widens to.
        """
        parameter = self._parameters.get(name)
        if parameter is None:
            return default
        if parameter.kind is request_type(type_):
            return parameter.to_python()
        if parameter.kind is ParameterType.INT and widens_from_int(type_, parameter.value):
            return widen_int(parameter.value, type_)
        return default

    def get(self, name: str, type_: Any = None) -> Any:
        """Get a parameter value by name.

        Args:
            name: Parameter name
            type_: Requested type; when omitted the value is returned with
                the type it was stored as

        Returns:
            The (possibly widened) parameter value

        Raises:
            NotFoundError: If the name is absent, or the stored type neither
                matches nor widens to ``type_``
        """
        if type_ is None:
            if name not in self._parameters:
                raise NotFoundError(name)
            return self._parameters[name].to_python()

        value = self.try_get(name, type_, default=_MISSING)
        if value is _MISSING:
            raise NotFoundError(name, describe_type(type_))
        return value

    def has(self, name: str) -> bool:
        """Whether a parameter with the given name exists, whatever its type."""
        return name in self._parameters

    def has_of_type(self, name: str, type_: Any) -> bool:
        """Whether ``name`` can be read as ``type_`` (exact match or int widening)."""
        parameter = self._parameters.get(name)
        if parameter is None:
            return False
        return parameter.kind is request_type(type_) or (
            parameter.kind is ParameterType.INT and widens_from_int(type_, parameter.value)
        )

    def type_of(self, name: str) -> ParameterType:
        """Get the type tag of a stored parameter."""
        if name not in self._parameters:
            raise NotFoundError(name)
        return self._parameters[name].kind

    def names(self) -> list[str]:
        """All parameter names in ascending lexicographic order."""
        return sorted(self._parameters)

    def items(self) -> list[tuple[str, Parameter]]:
        """``(name, Parameter)`` pairs in name order."""
        return [(name, self._parameters[name]) for name in self.names()]

    def was_updated(self) -> bool:
        """Whether set() was called since construction or the last clear_updated()."""
        return self._updated

    def clear_updated(self) -> None:
        """Reset the update flag until the next set()."""
        self._updated = False
