"""Hierarchical YAML serialization of parameter stores.

Nested YAML maps correspond to ``/``-separated parameter names:

    category:
        sub:
            key: 1      <->  store.get("category/sub/key") == 1

Reading probes each scalar as int, double, bool, then string; writing
produces a canonical document that reads back to the same parameters.
"""

from .emitter import ParameterEmitter
from .handler import (
    load_parameters,
    read_parameters_from_file,
    read_parameters_from_node,
    read_parameters_from_string,
    write_parameters_to_file,
    write_parameters_to_string,
)
from .loader import ParameterLoader
from .options import EmitterOptions
from .paths import PathStep, PathTracker, split_name

__all__ = [
    # Read
    "read_parameters_from_file",
    "read_parameters_from_string",
    "read_parameters_from_node",
    "load_parameters",
    "ParameterLoader",
    # Write
    "write_parameters_to_file",
    "write_parameters_to_string",
    "ParameterEmitter",
    "EmitterOptions",
    # Paths
    "split_name",
    "PathTracker",
    "PathStep",
]
