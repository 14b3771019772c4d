from __future__ import annotations

import random
from pathlib import Path

import pytest
from hypothesis import settings

# ---- Deterministic Testing Configuration ---------------------

# Global deterministic seed
DETERMINISTIC_SEED = 42


@pytest.fixture(autouse=True)
def set_deterministic_seed():
    """Set deterministic seed for all tests"""
    random.seed(DETERMINISTIC_SEED)
    yield
    # Reset after test
    random.seed()


# Hypothesis settings for all property-based tests
settings.register_profile("deterministic",
    deadline=None,
    max_examples=200,
    derandomize=False,
    database=None
)
settings.load_profile("deterministic")


# ---- Shared fixtures -------------------------------------------


@pytest.fixture
def fruit_csv(tmp_path: Path) -> Path:
    """Small CSV with near-duplicate names in the first column."""
    path = tmp_path / "fruit.csv"
    path.write_text(
        "name,city\n"
        "apple,Oslo\n"
        "aple,Bergen\n"
        "banana,Oslo\n",
        encoding="utf-8",
    )
    return path
