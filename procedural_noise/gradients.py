# procedural_noise/gradients.py

"""
================================================================================
GRADIENT KERNELS
================================================================================
Per-family strategies answering one question: what does a single lattice or
simplex corner contribute at a given offset from the sample point?

Every kernel exposes the same interface:
    evaluate_1d(hash, x)
    evaluate_2d(hash, x, z)          # 2D noise lives on the XZ plane
    evaluate_3d(hash, x, y, z)
    evaluate_combined(sample)        # post-processing after corners are summed

The offsets are measured from the corner to the sample point, so the
derivative a kernel reports is already the derivative with respect to the
sample position.

Data Contract:
---------------
- Inputs: a SmallXXHash4 per corner and float64 offset arrays (lane shaped).
- Outputs: Sample4 instances.
- Side Effects: None.
- Invariants: Normalizing a zero-length gradient yields a zero sample.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS
from .hashing import SmallXXHash4
from .sample import Sample4


def _normalized(g: Sample4, length_sq: np.ndarray) -> Sample4:
    length = np.sqrt(length_sq)
    inverse = np.divide(1.0, length, out=np.zeros_like(length), where=length > 0.0)
    return g * inverse


# --- Base gradient shapes ---

def line(hash: SmallXXHash4, x) -> Sample4:
    """1D gradient with magnitude in [1, 2] and a random sign."""
    sign = np.where((hash.avalanche & np.uint32(1 << 8)) == 0, 1.0, -1.0)
    slope = (1.0 + hash.floats01_a) * sign
    return Sample4.of(slope * x, dx=slope)


def square(hash: SmallXXHash4, x, z) -> Sample4:
    """2D gradient picked from the perimeter of a diamond."""
    gx = hash.floats01_a * 2.0 - 1.0
    gz = 0.5 - np.abs(gx)
    gx = gx - np.floor(gx + 0.5)
    return Sample4.of(gx * x + gz * z, dx=gx, dz=gz)


def circle(hash: SmallXXHash4, x, z) -> Sample4:
    g = square(hash, x, z)
    return _normalized(g, g.dx * g.dx + g.dz * g.dz)


def octahedron(hash: SmallXXHash4, x, y, z) -> Sample4:
    """3D gradient picked from the surface of an octahedron."""
    gx = hash.floats01_a * 2.0 - 1.0
    gy = hash.floats01_d * 2.0 - 1.0
    gz = 1.0 - np.abs(gx) - np.abs(gy)
    offset = np.maximum(-gz, 0.0)
    gx = gx + np.where(gx < 0.0, offset, -offset)
    gy = gy + np.where(gy < 0.0, offset, -offset)
    return Sample4.of(gx * x + gy * y + gz * z, dx=gx, dy=gy, dz=gz)


def sphere(hash: SmallXXHash4, x, y, z) -> Sample4:
    g = octahedron(hash, x, y, z)
    return _normalized(g, g.dx * g.dx + g.dy * g.dy + g.dz * g.dz)


# --- Kernels ---

class Value:
    """Hash mapped to a constant in [-1, 1]; no direction, zero derivative."""

    def evaluate_1d(self, hash, x):
        return Sample4.of(hash.floats01_a * 2.0 - 1.0)

    def evaluate_2d(self, hash, x, z):
        return self.evaluate_1d(hash, x)

    def evaluate_3d(self, hash, x, y, z):
        return self.evaluate_1d(hash, x)

    def evaluate_combined(self, value: Sample4) -> Sample4:
        return value

    def __repr__(self):
        return "Value()"


class Perlin:
    """Classic gradient noise: dot product of a hashed direction and the offset."""

    def evaluate_1d(self, hash, x):
        return line(hash, x)

    def evaluate_2d(self, hash, x, z):
        return square(hash, x, z) * DEFAULTS.PERLIN_2D_SCALE

    def evaluate_3d(self, hash, x, y, z):
        return octahedron(hash, x, y, z) * DEFAULTS.PERLIN_3D_SCALE

    def evaluate_combined(self, value: Sample4) -> Sample4:
        return value

    def __repr__(self):
        return "Perlin()"


class Simplex:
    """Unit-length gradients, scaled so the simplex kernels peak near 1."""

    def evaluate_1d(self, hash, x):
        return line(hash, x) * DEFAULTS.SIMPLEX_1D_SCALE

    def evaluate_2d(self, hash, x, z):
        return circle(hash, x, z) * DEFAULTS.SIMPLEX_2D_SCALE

    def evaluate_3d(self, hash, x, y, z):
        return sphere(hash, x, y, z) * DEFAULTS.SIMPLEX_3D_SCALE

    def evaluate_combined(self, value: Sample4) -> Sample4:
        return value

    def __repr__(self):
        return "Simplex()"


class _GradientWrapper:
    """Delegates corner evaluation to an inner kernel."""

    def __init__(self, inner):
        self.inner = inner

    def evaluate_1d(self, hash, x):
        return self.inner.evaluate_1d(hash, x)

    def evaluate_2d(self, hash, x, z):
        return self.inner.evaluate_2d(hash, x, z)

    def evaluate_3d(self, hash, x, y, z):
        return self.inner.evaluate_3d(hash, x, y, z)

    def __repr__(self):
        return f"{type(self).__name__}({self.inner!r})"


class Turbulence(_GradientWrapper):
    """Folds the combined value to |v|, flipping the gradient where v < 0."""

    def evaluate_combined(self, value: Sample4) -> Sample4:
        s = self.inner.evaluate_combined(value)
        sign = np.where(s.v >= 0.0, 1.0, -1.0)
        return Sample4.of(np.abs(s.v), s.dx * sign, s.dy * sign, s.dz * sign)


class Smoothstep(_GradientWrapper):
    """Remaps v through 3v^2 - 2v^3, scaling the gradient by 6v(1 - v)."""

    def evaluate_combined(self, value: Sample4) -> Sample4:
        s = self.inner.evaluate_combined(value)
        d = 6.0 * s.v * (1.0 - s.v)
        return Sample4.of(s.v * s.v * (3.0 - 2.0 * s.v), s.dx * d, s.dy * d, s.dz * d)
