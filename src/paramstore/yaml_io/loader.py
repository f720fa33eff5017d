"""Parameter loader for YAML documents.

Nested maps become ``/``-separated parameter names:

    controller:
        gains:
            kp: 2.5          -> controller/gains/kp  (double)
        topics: [a, b]       -> controller/topics    (string vector)

Every document of a multi-document stream is added to the same store, in
document order. Loading is not atomic: parameters set before an error
stay in the store.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import UnsupportedShapeError, UnsupportedTypeError
from ..parameters import ParameterStore, ParameterType
from .paths import SEPARATOR
from .scalars import SCALAR_PROBE_ORDER, coerce_scalar, probe_scalar

logger = logging.getLogger(__name__)

NULL_TAG = "tag:yaml.org,2002:null"


def _is_null(node: yaml.Node) -> bool:
    return isinstance(node, yaml.ScalarNode) and node.style is None and node.tag == NULL_TAG


def _is_quoted(node: yaml.ScalarNode) -> bool:
    return node.style is not None


class ParameterLoader:
    """Adds the parameters of YAML documents to a ParameterStore.

    Raises UnsupportedShapeError / UnsupportedTypeError on content that has
    no parameter representation, and lets yaml.YAMLError and OSError
    through. The functions in ``paramstore.yaml_io.handler`` wrap these
    methods and report failures as a boolean instead.
    """

    def __init__(self, store: ParameterStore | None = None):
        """Initialize loader.

        Args:
            store: Store to add parameters to; a new one if omitted.
        """
        self.store = store if store is not None else ParameterStore()

    def load_file(self, path: Union[str, Path]) -> ParameterStore:
        """Load all documents of a YAML file."""
        text = Path(path).read_text(encoding="utf-8")
        return self.load_string(text)

    def load_string(self, text: str) -> ParameterStore:
        """Load all documents of a YAML string."""
        for node in yaml.compose_all(text, Loader=yaml.SafeLoader):
            self.load_node(node)
        return self.store

    def load_node(self, node: Union[yaml.Node, Mapping, None]) -> ParameterStore:
        """Load a composed YAML node tree.

        Plain Python mappings are accepted too; they are dumped and composed
        again so their scalars are typed exactly as if read from text.
        """
        if node is not None and not isinstance(node, yaml.Node):
            node = self._compose_data(node)
        count = len(self.store)
        self._evaluate_node(node, "")
        logger.debug("Loaded parameter document (%d -> %d parameters)", count, len(self.store))
        return self.store

    @staticmethod
    def _compose_data(data: Any) -> yaml.Node | None:
        if not isinstance(data, Mapping):
            raise UnsupportedShapeError("", f"cannot load {type(data).__name__}, expected a mapping")
        return yaml.compose(yaml.safe_dump(dict(data)), Loader=yaml.SafeLoader)

    def _evaluate_node(self, node: yaml.Node | None, name_prefix: str) -> None:
        """Walk a map node, adding its leaves under ``name_prefix``."""
        # Documents whose root is not a map hold no named parameters
        if not isinstance(node, yaml.MappingNode):
            return

        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise UnsupportedShapeError(name_prefix, "map keys must be scalars")
            name = name_prefix + key_node.value

            if _is_null(value_node):
                raise UnsupportedShapeError(name_prefix, f"{name} has no value")
            elif isinstance(value_node, yaml.ScalarNode):
                self._add_scalar(name, value_node)
            elif isinstance(value_node, yaml.SequenceNode):
                self._add_sequence(name, value_node)
            elif isinstance(value_node, yaml.MappingNode):
                self._evaluate_node(value_node, name + SEPARATOR)
            else:
                raise UnsupportedShapeError(name_prefix, f"unexpected {type(value_node).__name__}")

    def _add_scalar(self, name: str, node: yaml.ScalarNode) -> None:
        parameter = probe_scalar(node.value, quoted=_is_quoted(node))
        if parameter is None:
            raise UnsupportedTypeError(f"Parameter type of {name} is not supported.")
        self.store.set(name, parameter.value, kind=parameter.kind)

    def _add_sequence(self, name: str, node: yaml.SequenceNode) -> None:
        """Add a sequence as the first vector type all of its elements parse as."""
        for kind in SCALAR_PROBE_ORDER:
            values = [self._coerce_element(element, kind) for element in node.value]
            if all(value is not None for value in values):
                self.store.set(name, values, kind=kind.vector)
                return
        raise UnsupportedTypeError(f"Parameter sequence type of {name} is not supported.")

    @staticmethod
    def _coerce_element(node: yaml.Node, kind: ParameterType) -> Any:
        # Nested collections and nulls are not valid elements of any type
        if not isinstance(node, yaml.ScalarNode) or _is_null(node):
            return None
        return coerce_scalar(node.value, kind, quoted=_is_quoted(node))
