# procedural_noise/simplex.py

"""
================================================================================
SIMPLEX NOISE
================================================================================
Noise defined on a skewed simplex tiling (segments, triangles, tetrahedra)
instead of a square grid, which reduces axis-aligned artifacts.

Each corner contributes (r^2 - |offset|^2)^3 times the gradient kernel's value.
The falloff is clipped to exactly zero outside the kernel radius, which keeps
the support of every corner bounded.

Data Contract:
---------------
- Inputs: positions (x, y, z) arrays, a seeded SmallXXHash4, the frequency.
- Outputs: a Sample4 with derivatives relative to the unscaled input position.
- Side Effects: None.
- Invariants: Corner selection is a pure function of the sample position.
  Simplex noise is never tiled.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS
from .hashing import SmallXXHash4
from .sample import Sample4


def _kernel_1d(gradient, hash, lx, x) -> Sample4:
    o = x - lx
    f = DEFAULTS.SIMPLEX_1D_RADIUS_SQ - o * o
    g = gradient.evaluate_1d(hash, o)
    s = Sample4.of(f * g.v, f * g.dx - 6.0 * o * g.v)
    return s * (f * f * np.where(f >= 0.0, 1.0, 0.0))


def _kernel_2d(gradient, hash, lx, lz, x, z) -> Sample4:
    unskew = (lx + lz) * DEFAULTS.SIMPLEX_2D_UNSKEW
    ox = x - lx + unskew
    oz = z - lz + unskew
    f = DEFAULTS.SIMPLEX_RADIUS_SQ - ox * ox - oz * oz
    g = gradient.evaluate_2d(hash, ox, oz)
    s = Sample4.of(
        f * g.v,
        f * g.dx - 6.0 * ox * g.v,
        f * g.dy,
        f * g.dz - 6.0 * oz * g.v,
    )
    return s * (f * f * np.where(f >= 0.0, DEFAULTS.SIMPLEX_KERNEL_GAIN, 0.0))


def _kernel_3d(gradient, hash, lx, ly, lz, x, y, z) -> Sample4:
    # Un-skew the corner back into real space.
    unskew = (lx + ly + lz) * DEFAULTS.SIMPLEX_3D_UNSKEW
    ox = x - lx + unskew
    oy = y - ly + unskew
    oz = z - lz + unskew
    f = DEFAULTS.SIMPLEX_RADIUS_SQ - ox * ox - oy * oy - oz * oz
    g = gradient.evaluate_3d(hash, ox, oy, oz)
    s = Sample4.of(
        f * g.v,
        f * g.dx - 6.0 * ox * g.v,
        f * g.dy - 6.0 * oy * g.v,
        f * g.dz - 6.0 * oz * g.v,
    )
    return s * (f * f * np.where(f >= 0.0, DEFAULTS.SIMPLEX_KERNEL_GAIN, 0.0))


class _SimplexNoise:

    def __init__(self, gradient):
        self.gradient = gradient

    def __repr__(self):
        return f"{type(self).__name__}({self.gradient!r})"


class Simplex1D(_SimplexNoise):

    def get_noise4(self, positions, hash: SmallXXHash4, frequency: int) -> Sample4:
        g = self.gradient
        x = np.asarray(positions[0], dtype=np.float64) * frequency
        x0 = np.floor(x).astype(np.int64)
        x1 = x0 + 1

        s = g.evaluate_combined(
            _kernel_1d(g, hash.eat(x0), x0, x) + _kernel_1d(g, hash.eat(x1), x1, x)
        )
        return s.scale_derivatives(frequency)


class Simplex2D(_SimplexNoise):

    def get_noise4(self, positions, hash: SmallXXHash4, frequency: int) -> Sample4:
        g = self.gradient
        scale = frequency * DEFAULTS.SIMPLEX_2D_FREQUENCY_FACTOR
        x = np.asarray(positions[0], dtype=np.float64) * scale
        z = np.asarray(positions[2], dtype=np.float64) * scale

        skew = (x + z) * DEFAULTS.SIMPLEX_2D_SKEW
        sx, sz = x + skew, z + skew
        x0 = np.floor(sx).astype(np.int64)
        z0 = np.floor(sz).astype(np.int64)
        x1, z1 = x0 + 1, z0 + 1

        # Which triangle of the rhombus holds the point.
        x_gz = sx - x0 > sz - z0
        xc = np.where(x_gz, x1, x0)
        zc = np.where(x_gz, z0, z1)

        h0, h1 = hash.eat(x0), hash.eat(x1)
        hc = SmallXXHash4.select(h0, h1, x_gz)

        s = g.evaluate_combined(
            _kernel_2d(g, h0.eat(z0), x0, z0, x, z) +
            _kernel_2d(g, h1.eat(z1), x1, z1, x, z) +
            _kernel_2d(g, hc.eat(zc), xc, zc, x, z)
        )
        return s.scale_derivatives(scale)


class Simplex3D(_SimplexNoise):

    def get_noise4(self, positions, hash: SmallXXHash4, frequency: int) -> Sample4:
        g = self.gradient
        scale = frequency * DEFAULTS.SIMPLEX_3D_FREQUENCY_FACTOR
        x = np.asarray(positions[0], dtype=np.float64) * scale
        y = np.asarray(positions[1], dtype=np.float64) * scale
        z = np.asarray(positions[2], dtype=np.float64) * scale

        skew = (x + y + z) * DEFAULTS.SIMPLEX_3D_SKEW
        sx, sy, sz = x + skew, y + skew, z + skew
        x0 = np.floor(sx).astype(np.int64)
        y0 = np.floor(sy).astype(np.int64)
        z0 = np.floor(sz).astype(np.int64)
        x1, y1, z1 = x0 + 1, y0 + 1, z0 + 1

        # Which of the six tetrahedra inside the cube holds the point.
        x_gy = sx - x0 > sy - y0
        x_gz = sx - x0 > sz - z0
        y_gz = sy - y0 > sz - z0

        # Corner A steps along the largest axis, corner B along the two largest.
        x_a = x_gy & x_gz
        x_b = x_gy | (x_gz & y_gz)
        y_a = ~x_gy & y_gz
        y_b = ~x_gy | (x_gz & y_gz)
        z_a = (x_gy & ~x_gz) | (~x_gy & ~y_gz)
        z_b = ~(x_gz & y_gz)

        xca, xcb = np.where(x_a, x1, x0), np.where(x_b, x1, x0)
        yca, ycb = np.where(y_a, y1, y0), np.where(y_b, y1, y0)
        zca, zcb = np.where(z_a, z1, z0), np.where(z_b, z1, z0)

        h0, h1 = hash.eat(x0), hash.eat(x1)
        ha = SmallXXHash4.select(h0, h1, x_a)
        hb = SmallXXHash4.select(h0, h1, x_b)

        s = g.evaluate_combined(
            _kernel_3d(g, h0.eat(y0).eat(z0), x0, y0, z0, x, y, z) +
            _kernel_3d(g, h1.eat(y1).eat(z1), x1, y1, z1, x, y, z) +
            _kernel_3d(g, ha.eat(yca).eat(zca), xca, yca, zca, x, y, z) +
            _kernel_3d(g, hb.eat(ycb).eat(zcb), xcb, ycb, zcb, x, y, z)
        )
        return s.scale_derivatives(scale)
