# procedural_noise/lattice.py

"""
================================================================================
LATTICE NOISE
================================================================================
Value and gradient ("Perlin") noise defined by blending the contributions of
the 2^d integer lattice corners surrounding each sample point.

Data Contract:
---------------
- Inputs:
    - positions: a tuple of three float64 arrays (x, y, z), lane shaped.
    - hash: the octave's seeded SmallXXHash4.
    - frequency: integer number of lattice cells per unit of input.
- Outputs:
    - A Sample4 whose derivatives are taken with respect to the unscaled
      input position (the frequency factor is already applied).
- Side Effects: None.
- Invariants: The blend weight is the quintic 6t^5 - 15t^4 + 10t^3, so value,
  first and second derivatives are continuous across cell boundaries. In
  tiling mode the noise repeats every 1.0 input units on every axis.
================================================================================
"""
from dataclasses import dataclass

import numpy as np
from numba import njit

from .sample import Sample4

# Component indices into a Sample4 (v, dx, dy, dz).
DX, DY, DZ = 1, 2, 3


@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _fade_derivative(t):
    "30t^4 - 60t^3 + 30t^2"
    return t * t * (t * (t * 30 - 60) + 30)


@dataclass(frozen=True)
class LatticeSpan:
    """The two lattice points bracketing a coordinate along one axis."""
    p0: np.ndarray
    p1: np.ndarray
    g0: np.ndarray  # offset from p0 to the sample
    g1: np.ndarray  # offset from p1 to the sample
    t: np.ndarray   # smoothed blend weight
    dt: np.ndarray  # d(t)/d(coordinate)


def _span(coordinates: np.ndarray, frequency: int):
    coordinates = np.asarray(coordinates, dtype=np.float64) * frequency
    points = np.floor(coordinates)
    g0 = coordinates - points
    return points.astype(np.int64), g0


class LatticeNormal:
    """Unbounded lattice addressing."""

    def get_span(self, coordinates, frequency: int) -> LatticeSpan:
        p0, g0 = _span(coordinates, frequency)
        return LatticeSpan(p0, p0 + 1, g0, g0 - 1.0, _fade(g0), _fade_derivative(g0))

    def validate_single_step(self, points: np.ndarray, frequency: int) -> np.ndarray:
        return points

    def __repr__(self):
        return "LatticeNormal"


class LatticeTiling:
    """Lattice points wrap modulo the frequency, giving a period of one unit."""

    def get_span(self, coordinates, frequency: int) -> LatticeSpan:
        p0, g0 = _span(coordinates, frequency)
        p0 = np.mod(p0, frequency)
        p1 = np.mod(p0 + 1, frequency)
        return LatticeSpan(p0, p1, g0, g0 - 1.0, _fade(g0), _fade_derivative(g0))

    def validate_single_step(self, points: np.ndarray, frequency: int) -> np.ndarray:
        return np.mod(points, frequency)

    def __repr__(self):
        return "LatticeTiling"


def _blend(a: Sample4, b: Sample4, span: LatticeSpan, axis: int) -> Sample4:
    """Interpolates two corner samples along one axis, product rule included."""
    parts = list(Sample4.lerp(a, b, span.t))
    parts[axis] = parts[axis] + (b.v - a.v) * span.dt
    return Sample4.of(*parts)


class _LatticeNoise:

    def __init__(self, lattice, gradient):
        self.lattice = lattice
        self.gradient = gradient

    def __repr__(self):
        return f"{type(self).__name__}({self.lattice!r}, {self.gradient!r})"


class Lattice1D(_LatticeNoise):

    def get_noise4(self, positions, hash, frequency: int) -> Sample4:
        g = self.gradient
        x = self.lattice.get_span(positions[0], frequency)
        a = g.evaluate_1d(hash.eat(x.p0), x.g0)
        b = g.evaluate_1d(hash.eat(x.p1), x.g1)
        return g.evaluate_combined(_blend(a, b, x, DX).scale_derivatives(frequency))


class Lattice2D(_LatticeNoise):

    def get_noise4(self, positions, hash, frequency: int) -> Sample4:
        g = self.gradient
        x = self.lattice.get_span(positions[0], frequency)
        z = self.lattice.get_span(positions[2], frequency)
        h0, h1 = hash.eat(x.p0), hash.eat(x.p1)

        a = g.evaluate_2d(h0.eat(z.p0), x.g0, z.g0)
        b = g.evaluate_2d(h0.eat(z.p1), x.g0, z.g1)
        c = g.evaluate_2d(h1.eat(z.p0), x.g1, z.g0)
        d = g.evaluate_2d(h1.eat(z.p1), x.g1, z.g1)

        s = _blend(_blend(a, b, z, DZ), _blend(c, d, z, DZ), x, DX)
        return g.evaluate_combined(s.scale_derivatives(frequency))


class Lattice3D(_LatticeNoise):

    def get_noise4(self, positions, hash, frequency: int) -> Sample4:
        g = self.gradient
        x = self.lattice.get_span(positions[0], frequency)
        y = self.lattice.get_span(positions[1], frequency)
        z = self.lattice.get_span(positions[2], frequency)
        h0, h1 = hash.eat(x.p0), hash.eat(x.p1)
        h00, h01 = h0.eat(y.p0), h0.eat(y.p1)
        h10, h11 = h1.eat(y.p0), h1.eat(y.p1)

        a = g.evaluate_3d(h00.eat(z.p0), x.g0, y.g0, z.g0)
        b = g.evaluate_3d(h00.eat(z.p1), x.g0, y.g0, z.g1)
        c = g.evaluate_3d(h01.eat(z.p0), x.g0, y.g1, z.g0)
        d = g.evaluate_3d(h01.eat(z.p1), x.g0, y.g1, z.g1)
        e = g.evaluate_3d(h10.eat(z.p0), x.g1, y.g0, z.g0)
        f = g.evaluate_3d(h10.eat(z.p1), x.g1, y.g0, z.g1)
        gg = g.evaluate_3d(h11.eat(z.p0), x.g1, y.g1, z.g0)
        h = g.evaluate_3d(h11.eat(z.p1), x.g1, y.g1, z.g1)

        s = _blend(
            _blend(_blend(a, b, z, DZ), _blend(c, d, z, DZ), y, DY),
            _blend(_blend(e, f, z, DZ), _blend(gg, h, z, DZ), y, DY),
            x, DX
        )
        return g.evaluate_combined(s.scale_derivatives(frequency))
