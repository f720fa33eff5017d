"""paramstore: typed parameters with hierarchical YAML files.

Example usage:
    from paramstore import ParameterStore, read_parameters_from_file

    store = ParameterStore()
    if not read_parameters_from_file("robot.yaml", store):
        raise SystemExit("could not read robot.yaml")

    kp = store.get("controller/gains/kp", float)
    for name in store.names():
        print(name, store.get(name))
"""

__version__ = "0.1.0"

from .errors import (
    NotFoundError,
    ParamStoreError,
    UnsupportedShapeError,
    UnsupportedTypeError,
    YamlCodecError,
)

from .parameters import (
    Parameter,
    ParameterStore,
    ParameterType,
)

from .yaml_io import (
    EmitterOptions,
    ParameterEmitter,
    ParameterLoader,
    load_parameters,
    read_parameters_from_file,
    read_parameters_from_node,
    read_parameters_from_string,
    write_parameters_to_file,
    write_parameters_to_string,
)

__all__ = [
    # Store
    "ParameterStore",
    "Parameter",
    "ParameterType",
    # YAML
    "read_parameters_from_file",
    "read_parameters_from_string",
    "read_parameters_from_node",
    "write_parameters_to_file",
    "write_parameters_to_string",
    "load_parameters",
    "ParameterLoader",
    "ParameterEmitter",
    "EmitterOptions",
    # Errors
    "ParamStoreError",
    "NotFoundError",
    "UnsupportedShapeError",
    "UnsupportedTypeError",
    "YamlCodecError",
]
