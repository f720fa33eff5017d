"""Read and write parameter files without raising.

Each function reports failure through its return value and logs the
reason at WARNING level. A failed read may still have added the
parameters that preceded the error.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Union

import yaml

from ..errors import ParamStoreError, YamlCodecError
from ..parameters import ParameterStore
from .emitter import ParameterEmitter
from .loader import ParameterLoader
from .options import CANONICAL, EmitterOptions

logger = logging.getLogger(__name__)

# Everything the loader and emitter raise for bad input or failed I/O
CODEC_ERRORS = (ParamStoreError, yaml.YAMLError, OSError, UnicodeError)


def read_parameters_from_file(path: Union[str, Path], store: ParameterStore) -> bool:
    """Read the parameters of a YAML file into ``store``.

    Returns:
        True if every document was read completely
    """
    try:
        ParameterLoader(store).load_file(path)
        return True
    except CODEC_ERRORS as e:
        logger.warning("Failed to read parameters from %s: %s", path, e)
        return False


def read_parameters_from_string(text: str, store: ParameterStore) -> bool:
    """Read the parameters of a YAML string into ``store``."""
    try:
        ParameterLoader(store).load_string(text)
        return True
    except CODEC_ERRORS as e:
        logger.warning("Failed to read parameters from string: %s", e)
        return False


def read_parameters_from_node(
    node: Union[yaml.Node, Mapping], store: ParameterStore
) -> bool:
    """Read the parameters of a composed YAML node (or plain mapping) into ``store``."""
    try:
        ParameterLoader(store).load_node(node)
        return True
    except CODEC_ERRORS as e:
        logger.warning("Failed to read parameters from node: %s", e)
        return False


def write_parameters_to_file(
    path: Union[str, Path],
    store: ParameterStore,
    options: EmitterOptions = CANONICAL,
) -> bool:
    """Write all parameters of ``store`` to a YAML file.

    Returns:
        True if the file was written; on failure the file is unchanged
    """
    try:
        ParameterEmitter(options).write(store, path)
        return True
    except CODEC_ERRORS as e:
        logger.warning("Failed to write parameters to %s: %s", path, e)
        return False


def write_parameters_to_string(
    store: ParameterStore, options: EmitterOptions = CANONICAL
) -> str | None:
    """Render all parameters of ``store`` as YAML text, or None on failure."""
    try:
        return ParameterEmitter(options).emit(store)
    except CODEC_ERRORS as e:
        logger.warning("Failed to write parameters: %s", e)
        return None


def load_parameters(path: Union[str, Path]) -> ParameterStore:
    """Convenience function to load a parameter file into a new store.

    Raises:
        YamlCodecError: If the file cannot be read or holds unsupported content
    """
    try:
        return ParameterLoader().load_file(path)
    except CODEC_ERRORS as e:
        raise YamlCodecError(f"Failed to load {path}: {e}") from e
