#!/usr/bin/env python3
"""
Round-trip a parameter file through paramstore

This example shows how to:
1. Build a store in code
2. Write it as canonical YAML
3. Read it back and query values with type checks
"""

import sys
import tempfile
from pathlib import Path

import numpy as np

from paramstore import (
    ParameterStore,
    read_parameters_from_file,
    write_parameters_to_file,
    write_parameters_to_string,
)


# =============================================================================
# BUILD A STORE
# =============================================================================

store = ParameterStore()
store.set("controller/gains/kp", 2)
store.set("controller/gains/ki", 0.05)
store.set("controller/enabled", True)
store.set("controller/joints", ["shoulder", "elbow", "wrist"])
store.set("limits/velocity", np.array([1.5, 1.5, 2.0]))
store.set("name", "arm")

print(write_parameters_to_string(store))


# =============================================================================
# WRITE AND READ BACK
# =============================================================================

with tempfile.TemporaryDirectory() as tmp:
    path = Path(tmp) / "params.yaml"
    if not write_parameters_to_file(path, store):
        sys.exit(f"could not write {path}")

    loaded = ParameterStore()
    if not read_parameters_from_file(path, loaded):
        sys.exit(f"could not read {path}")


# =============================================================================
# QUERY
# =============================================================================

# kp was stored as an int; it may be read as a float
print(f"kp as float: {loaded.get('controller/gains/kp', float)}")
print(f"ki as int:   {loaded.try_get('controller/gains/ki', int, default='not an int')}")
print(f"velocity:    {loaded.get('limits/velocity', list[float])}")

for name in loaded.names():
    print(f"{name:28} {loaded.type_of(name).value:14} {loaded.get(name)}")
