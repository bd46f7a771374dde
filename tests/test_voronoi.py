"""Tests for Voronoi distance metrics, ranking functions and traversals."""
from __future__ import annotations

import numpy as np
import pytest

from procedural_noise import voronoi
from procedural_noise.hashing import SmallXXHash4
from procedural_noise.lattice import LatticeNormal, LatticeTiling
from procedural_noise.sample import Sample4

VORONOI = {1: voronoi.Voronoi1D, 2: voronoi.Voronoi2D, 3: voronoi.Voronoi3D}
DISTANCES = [voronoi.Worley, voronoi.SmoothWorley, voronoi.Chebyshev]


def _split(positions):
    positions = np.asarray(positions, dtype=np.float64)
    return positions[:, 0], positions[:, 1], positions[:, 2]


def _evaluate(dimensions, distance, function, positions, lattice=None, seed=9, frequency=4):
    noise = VORONOI[dimensions](lattice or LatticeNormal(), distance(), function())
    return noise.get_noise4(_split(positions), SmallXXHash4.seed(seed), frequency)


@pytest.mark.parametrize("dimensions", [1, 2, 3])
@pytest.mark.parametrize("distance", DISTANCES)
def test_second_nearest_is_never_closer(dimensions, distance, random_positions):
    f1 = _evaluate(dimensions, distance, voronoi.F1, random_positions)
    f2 = _evaluate(dimensions, distance, voronoi.F2, random_positions)
    assert np.all(f2.v >= f1.v)
    assert np.all(f1.v >= 0.0)


@pytest.mark.parametrize("dimensions", [1, 2, 3])
@pytest.mark.parametrize("distance", DISTANCES)
def test_f2_minus_f1_is_the_difference(dimensions, distance, random_positions):
    f1 = _evaluate(dimensions, distance, voronoi.F1, random_positions)
    f2 = _evaluate(dimensions, distance, voronoi.F2, random_positions)
    diff = _evaluate(dimensions, distance, voronoi.F2MinusF1, random_positions)
    assert np.array_equal(diff.v, f2.v - f1.v)
    assert np.array_equal(diff.dx, f2.dx - f1.dx)
    assert np.all(diff.v >= 0.0)


@pytest.mark.parametrize("dimensions", [1, 2, 3])
@pytest.mark.parametrize("distance", DISTANCES)
def test_cell_as_islands_inverts_f1(dimensions, distance, random_positions):
    f1 = _evaluate(dimensions, distance, voronoi.F1, random_positions)
    islands = _evaluate(dimensions, distance, voronoi.CellAsIslands, random_positions)
    assert np.array_equal(islands.v, 1.0 - f1.v)
    assert np.array_equal(islands.dx, -f1.dx)
    assert np.array_equal(islands.dz, -f1.dz)


@pytest.mark.parametrize("dimensions", [2, 3])
def test_distances_are_clamped(dimensions, random_positions):
    f2 = _evaluate(dimensions, voronoi.Worley, voronoi.F2, random_positions)
    assert np.all(f2.v <= 1.0)
    clamped = f2.v == 1.0
    assert np.all(f2.dx[clamped] == 0.0)


def test_sample_on_feature_point_has_finite_gradient():
    # With frequency 1 the first feature point of cell (0, 0) sits at the hash floats.
    h = SmallXXHash4.seed(9).eat(0).eat(0)
    x, z = float(h.floats01_a[0]), float(h.floats01_b[0])
    s = _evaluate(2, voronoi.Worley, voronoi.F1, [[x, 0.0, z]] * 4, frequency=1)
    assert np.all(s.v == 0.0)
    assert np.all(np.isfinite(s.dx)) and np.all(np.isfinite(s.dz))


def test_one_dimensional_chebyshev_matches_worley(random_positions):
    a = _evaluate(1, voronoi.Worley, voronoi.F2MinusF1, random_positions)
    b = _evaluate(1, voronoi.Chebyshev, voronoi.F2MinusF1, random_positions)
    assert np.array_equal(a.v, b.v)


def test_smooth_worley_never_exceeds_hard_f1(random_positions):
    hard = _evaluate(3, voronoi.Worley, voronoi.F1, random_positions)
    smooth = _evaluate(3, voronoi.SmoothWorley, voronoi.F1, random_positions)
    assert np.all(smooth.v <= hard.v + 1e-12)


def test_worley_update_breaks_ties_toward_first_candidate():
    worley = voronoi.Worley()
    data = worley.initial_data((1,))
    first = Sample4.of(np.array([0.5]), 1.0, 0.0, 0.0)
    second = Sample4.of(np.array([0.5]), -1.0, 0.0, 0.0)
    data = worley.update(worley.update(data, first), second)
    assert data.a.dx[0] == 1.0
    assert data.b.dx[0] == -1.0


@pytest.mark.parametrize("dimensions", [1, 2, 3])
def test_tiling_voronoi_repeats(dimensions):
    base = np.array([[0.375, 0.125, 0.625], [0.5, 0.875, 0.0625], [0.0, 0.25, 0.75], [0.9375, 0.5, 0.3125]])
    a = _evaluate(dimensions, voronoi.Worley, voronoi.F1, base, lattice=LatticeTiling())
    b = _evaluate(dimensions, voronoi.Worley, voronoi.F1, base + 2.0, lattice=LatticeTiling())
    assert np.array_equal(a.v, b.v)
    assert np.array_equal(a.dx, b.dx)
