"""Tests for gradient kernels and their post-processing wrappers."""
from __future__ import annotations

import numpy as np
import pytest

from procedural_noise import gradients
from procedural_noise.hashing import SmallXXHash4
from procedural_noise.sample import Sample4


def _hashes():
    return SmallXXHash4.seed(3).eat(np.arange(64))


def test_line_slope_magnitude():
    s = gradients.line(_hashes(), np.ones(64))
    assert np.all((np.abs(s.dx) >= 1.0) & (np.abs(s.dx) <= 2.0))
    assert np.array_equal(s.v, s.dx)


def test_circle_and_sphere_are_unit_length():
    h = _hashes()
    c = gradients.circle(h, np.zeros(64), np.zeros(64))
    length = np.hypot(c.dx, c.dz)
    assert np.allclose(length[length > 0.0], 1.0)
    assert np.all(c.dy == 0.0)

    s = gradients.sphere(h, np.zeros(64), np.zeros(64), np.zeros(64))
    length = np.sqrt(s.dx ** 2 + s.dy ** 2 + s.dz ** 2)
    assert np.allclose(length[length > 0.0], 1.0)


def test_normalizing_zero_gradient_gives_zero():
    g = Sample4.of(np.zeros(4), np.zeros(4), np.zeros(4), np.zeros(4))
    out = gradients._normalized(g, np.zeros(4))
    assert np.all(np.isfinite(out.v))
    assert np.all(out.dx == 0.0)


def test_value_kernel_has_no_derivative():
    s = gradients.Value().evaluate_3d(_hashes(), 0.3, 0.2, 0.1)
    assert np.all((s.v >= -1.0) & (s.v <= 1.0))
    assert np.all(s.dx == 0.0) and np.all(s.dy == 0.0) and np.all(s.dz == 0.0)


def test_perlin_2d_lives_on_xz_plane():
    s = gradients.Perlin().evaluate_2d(_hashes(), np.full(64, 0.25), np.full(64, -0.5))
    assert np.all(s.dy == 0.0)


def test_turbulence_folds_value_and_flips_gradient():
    turbulence = gradients.Turbulence(gradients.Perlin())
    s = Sample4.of(np.array([-0.5, 0.25, 0.0, -1.0]), np.array([2.0, 2.0, 2.0, -3.0]), 1.0, -1.0)
    out = turbulence.evaluate_combined(s)
    assert np.array_equal(out.v, [0.5, 0.25, 0.0, 1.0])
    assert np.array_equal(out.dx, [-2.0, 2.0, 2.0, 3.0])
    assert np.array_equal(out.dy, [-1.0, 1.0, 1.0, -1.0])
    assert np.array_equal(out.dz, [1.0, -1.0, -1.0, 1.0])


def test_smoothstep_remaps_value_and_derivative():
    smooth = gradients.Smoothstep(gradients.Turbulence(gradients.Perlin()))
    out = smooth.evaluate_combined(Sample4.of(np.array([0.5, -0.5, 0.0, 1.0]), 1.0))
    assert out.v == pytest.approx([0.5, 0.5, 0.0, 1.0])
    assert out.dx == pytest.approx([1.5, -1.5, 0.0, 0.0])


def test_wrappers_delegate_corner_evaluation():
    h = _hashes()
    inner = gradients.Perlin()
    wrapped = gradients.Smoothstep(gradients.Turbulence(inner))
    a = wrapped.evaluate_3d(h, 0.1, 0.2, 0.3)
    b = inner.evaluate_3d(h, 0.1, 0.2, 0.3)
    assert np.array_equal(a.v, b.v)
    assert repr(wrapped) == "Smoothstep(Turbulence(Perlin()))"
