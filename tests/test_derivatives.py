"""Central-difference checks of the analytic derivatives of every noise family."""
from __future__ import annotations

import numpy as np
import pytest

from procedural_noise import registry
from procedural_noise.noise_config import NoiseCategory, NoiseKey, VoronoiDistance, VoronoiFunction
from procedural_noise.settings import Settings

EPSILON = 1e-5
SETTINGS = Settings(seed=17, frequency=3, octaves=2, lacunarity=2, persistence=0.5)


def _numeric_gradient(job, positions, settings):
    columns = []
    for axis in range(3):
        step = np.zeros(3)
        step[axis] = EPSILON
        ahead = job(positions + step, settings).v
        behind = job(positions - step, settings).v
        columns.append((ahead - behind) / (2.0 * EPSILON))
    return np.column_stack(columns)


def _agreement(key, positions, settings=SETTINGS):
    job = registry.get(key)
    analytic = job(positions, settings).gradient
    numeric = _numeric_gradient(job, positions, settings)
    scale = max(1.0, float(np.max(np.abs(numeric))))
    close = np.isclose(analytic, numeric, rtol=1e-2, atol=1e-3 * scale)
    return np.all(close, axis=1)


SMOOTH_KEYS = [
    NoiseKey(category, dimensions, tiling)
    for category in (NoiseCategory.PERLIN, NoiseCategory.VALUE)
    for dimensions in (1, 2, 3)
    for tiling in (False, True)
] + [
    NoiseKey(category, dimensions)
    for category in (NoiseCategory.SIMPLEX, NoiseCategory.SIMPLEX_VALUE)
    for dimensions in (1, 2, 3)
]

VORONOI_KEYS = [
    NoiseKey(NoiseCategory.VORONOI, dimensions, False, False, distance, function)
    for dimensions in (1, 2, 3)
    for distance in VoronoiDistance
    for function in VoronoiFunction
]


@pytest.mark.parametrize("key", SMOOTH_KEYS, ids=lambda key: key.describe())
def test_gradient_noise_derivatives_match_central_differences(key, random_positions):
    assert np.all(_agreement(key, random_positions))


@pytest.mark.parametrize("key", VORONOI_KEYS, ids=lambda key: key.describe())
def test_voronoi_derivatives_match_away_from_cell_edges(key, random_positions):
    # Points within EPSILON of a cell edge see a crease; those are rare.
    agreement = _agreement(key, random_positions)
    assert np.mean(agreement) >= 0.9


@pytest.mark.parametrize("dimensions", [1, 2, 3])
def test_shaped_variants_match_away_from_zero_crossings(dimensions, random_positions):
    key = NoiseKey(NoiseCategory.PERLIN, dimensions, False, True, smoothstep=True)
    agreement = _agreement(key, random_positions)
    assert np.mean(agreement) >= 0.9


def test_lower_dimensions_have_no_derivative_on_unused_axes(random_positions):
    one = registry.get(NoiseKey(NoiseCategory.PERLIN, 1))(random_positions, SETTINGS)
    two = registry.get(NoiseKey(NoiseCategory.SIMPLEX, 2))(random_positions, SETTINGS)
    assert np.all(one.dy == 0.0) and np.all(one.dz == 0.0)
    assert np.all(two.dy == 0.0)
