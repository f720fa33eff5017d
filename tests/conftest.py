"""Shared fixtures for paramstore tests."""

from pathlib import Path

import pytest

from paramstore import ParameterStore

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def store() -> ParameterStore:
    return ParameterStore()


@pytest.fixture
def mixed_store() -> ParameterStore:
    """A store holding one parameter of every supported type."""
    store = ParameterStore()
    store.set("scalars/int", -7)
    store.set("scalars/double", 0.1)
    store.set("scalars/integral_double", 4.0)
    store.set("scalars/bool", True)
    store.set("scalars/string", "apple")
    store.set("scalars/numeric_string", "42")
    store.set("vectors/ints", [3, 2, 1])
    store.set("vectors/doubles", [1.3, 4.0, -0.5])
    store.set("vectors/bools", [True, False])
    store.set("vectors/strings", ["apple", "true", "7"])
    store.set("top_level", "x")
    return store
