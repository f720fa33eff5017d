"""Canonical YAML emission of a ParameterStore.

The document is produced as a PyYAML event stream: names are visited in
sorted order, ``PathTracker`` decides which maps to close and open before
each leaf, and every value is written as the scalar or flow sequence of its
type tag. The formatting is fixed (see ``EmitterOptions``) so that the same
store always produces the same text.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

import yaml
from yaml.events import (
    DocumentEndEvent,
    DocumentStartEvent,
    Event,
    MappingEndEvent,
    MappingStartEvent,
    ScalarEvent,
    SequenceEndEvent,
    SequenceStartEvent,
    StreamEndEvent,
    StreamStartEvent,
)

from ..errors import UnsupportedTypeError
from ..parameters import Parameter, ParameterStore, ParameterType
from .options import CANONICAL, EmitterOptions
from .paths import PathTracker
from .scalars import format_bool, format_double, is_plain_string

logger = logging.getLogger(__name__)


def _key(segment: str) -> ScalarEvent:
    # Keys are always read back as strings, so plain style is safe
    return ScalarEvent(None, None, (True, True), segment)


def _format_int(value: int) -> str:
    try:
        return str(value)
    except ValueError as e:
        raise UnsupportedTypeError(f"Cannot write integer: {e}") from e


def _scalar(kind: ParameterType, value) -> ScalarEvent:
    match kind:
        case ParameterType.INT:
            text = _format_int(value)
        case ParameterType.DOUBLE:
            text = format_double(value)
        case ParameterType.BOOL:
            text = format_bool(value)
        case ParameterType.STRING:
            # implicit[0] False forces quotes when the plain text would be
            # read back as another type ('42', 'true', '')
            return ScalarEvent(None, None, (is_plain_string(value), True), value)
        case _:
            raise UnsupportedTypeError(f"No writer for parameter type {kind.value}")
    return ScalarEvent(None, None, (True, True), text)


def _file_mode(target: Path) -> int:
    """Permission bits for ``target``: its current ones, or 0o666 minus the umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        # The umask can only be read by setting it
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _open_map() -> MappingStartEvent:
    return MappingStartEvent(None, None, True, flow_style=False)


class ParameterEmitter:
    """Writes the parameters of a store as a nested YAML document."""

    def __init__(self, options: EmitterOptions = CANONICAL):
        self.options = options

    def emit(self, store: ParameterStore) -> str:
        """Render the whole store as YAML text."""
        events = list(self.events(store))
        text = yaml.emit(
            events,
            Dumper=yaml.SafeDumper,
            indent=self.options.indent,
            width=self.options.width,
            allow_unicode=self.options.allow_unicode,
        )
        logger.debug("Emitted %d parameters", len(store))
        return text

    def write(self, store: ParameterStore, path: Union[str, Path]) -> None:
        """Write the store to ``path``.

        The text is rendered before the file is touched and then written to
        a temporary file next to the target, which replaces the target. On
        any error the target keeps its previous contents. An existing
        target keeps its permission bits; a new one gets the umask default.
        """
        text = self.emit(store)
        target = Path(path)
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_path = handle.name
                handle.write(text)
            os.chmod(temp_path, _file_mode(target))
            os.replace(temp_path, target)
        except Exception:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def events(self, store: ParameterStore):
        """Yield the PyYAML events of the document for ``store``."""
        yield StreamStartEvent()
        yield DocumentStartEvent(explicit=False)
        yield _open_map()

        tracker = PathTracker()
        for name, parameter in store.items():
            step = tracker.advance(name)
            for _ in range(step.close):
                yield MappingEndEvent()
            for segment in step.open:
                yield _key(segment)
                yield _open_map()
            yield _key(step.key)
            yield from self._value_events(parameter)

        for _ in range(tracker.finish()):
            yield MappingEndEvent()
        yield MappingEndEvent()
        yield DocumentEndEvent(explicit=False)
        yield StreamEndEvent()

    def _value_events(self, parameter: Parameter) -> list[Event]:
        if not parameter.kind.is_vector:
            return [_scalar(parameter.kind, parameter.value)]

        element = parameter.kind.element
        return [
            SequenceStartEvent(None, None, True, flow_style=self.options.flow_sequences),
            *(_scalar(element, value) for value in parameter.value),
            SequenceEndEvent(),
        ]
