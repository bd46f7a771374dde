"""Pytest configuration for procedural noise tests."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure the repository root is available on the Python path for package imports.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def random_positions():
    """Deterministic pseudo-random positions, shape (64, 3)."""
    rng = np.random.default_rng(20240611)
    return rng.uniform(-2.0, 2.0, size=(64, 3))
