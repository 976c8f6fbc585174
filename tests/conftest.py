"""
Shared test fixtures.
"""

import random
from pathlib import Path

import pytest

from ps_catalog import default_catalog
from ps_fragments import Context


@pytest.fixture
def catalog():
    """Return the built-in template catalog."""
    return default_catalog()


@pytest.fixture
def rng() -> random.Random:
    """Return a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def ctx(catalog, rng) -> Context:
    """Return a generation context over the default catalog."""
    return Context(catalog=catalog, rng=rng)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Return a not-yet-existing nested output directory."""
    return tmp_path / "nested" / "out"
