"""Exceptions for paramstore."""


class ParamStoreError(Exception):
    """Base exception for all paramstore errors."""

    pass


class NotFoundError(ParamStoreError, KeyError):
    """No parameter with the requested name (and type) is stored."""

    def __init__(self, name: str, requested: str | None = None):
        self.name = name
        self.requested = requested
        if requested is None:
            message = f'Parameter "{name}" was not found'
        else:
            message = f'Parameter "{name}" of type {requested} was not found'
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class UnsupportedShapeError(ParamStoreError, ValueError):
    """A YAML node has a shape the reader cannot map to parameters."""

    def __init__(self, name_prefix: str, detail: str):
        self.name_prefix = name_prefix
        super().__init__(f"YAML node type is not supported. Name prefix: {name_prefix!r} ({detail})")


class UnsupportedTypeError(ParamStoreError, TypeError):
    """A value cannot be represented by any supported parameter type."""

    pass


class YamlCodecError(ParamStoreError):
    """Reading or writing a YAML parameter document failed."""

    pass
