"""Typed parameter storage.

Parameters are stored under hierarchical names:
  controller/gains/kp

and read back with a type check:
  store.get("controller/gains/kp", float)
"""

from .schema import Parameter, ParameterType, infer_type
from .store import ParameterStore

__all__ = [
    "ParameterStore",
    "Parameter",
    "ParameterType",
    "infer_type",
]
