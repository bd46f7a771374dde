# procedural_noise/sample.py

"""
================================================================================
NOISE SAMPLES
================================================================================
Value types returned by every noise evaluator: a noise value together with its
partial derivatives along x, y and z.

Data Contract:
---------------
- Sample4 holds one float64 NumPy array per component, all of the same shape.
  The last axis is the lane axis (4 lanes per batch).
- Sample is the plain per-lane view handed to callers.
- Side Effects: None. Every operation returns a new Sample4.
================================================================================
"""
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numba import njit


@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)


def _filled(values, shape) -> np.ndarray:
    return np.array(np.broadcast_to(np.asarray(values, dtype=np.float64), shape))


class Sample(NamedTuple):
    """A single lane: value and gradient."""
    value: float
    dx: float
    dy: float
    dz: float


@dataclass(frozen=True)
class Sample4:
    v: np.ndarray
    dx: np.ndarray
    dy: np.ndarray
    dz: np.ndarray

    @classmethod
    def of(cls, v, dx=0.0, dy=0.0, dz=0.0) -> "Sample4":
        """Builds a sample, broadcasting all components to a common shape."""
        shape = np.broadcast_shapes(*(np.shape(part) for part in (v, dx, dy, dz)))
        return cls(*(_filled(part, shape) for part in (v, dx, dy, dz)))

    @classmethod
    def zeros(cls, shape) -> "Sample4":
        return cls.of(np.zeros(shape))

    @property
    def shape(self) -> tuple:
        return self.v.shape

    def __add__(self, other: "Sample4") -> "Sample4":
        return Sample4.of(self.v + other.v, self.dx + other.dx, self.dy + other.dy, self.dz + other.dz)

    def __sub__(self, other: "Sample4") -> "Sample4":
        return Sample4.of(self.v - other.v, self.dx - other.dx, self.dy - other.dy, self.dz - other.dz)

    def __mul__(self, factor) -> "Sample4":
        return Sample4.of(self.v * factor, self.dx * factor, self.dy * factor, self.dz * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor) -> "Sample4":
        return Sample4.of(self.v / divisor, self.dx / divisor, self.dy / divisor, self.dz / divisor)

    def __neg__(self) -> "Sample4":
        return Sample4.of(-self.v, -self.dx, -self.dy, -self.dz)

    def scale_derivatives(self, factor) -> "Sample4":
        """Multiplies only the gradient, e.g. to undo a frequency scaling."""
        return Sample4.of(self.v, self.dx * factor, self.dy * factor, self.dz * factor)

    @property
    def gradient(self) -> np.ndarray:
        """The derivatives stacked on a trailing axis of length 3."""
        return np.stack([self.dx, self.dy, self.dz], axis=-1)

    @staticmethod
    def select(a: "Sample4", b: "Sample4", mask) -> "Sample4":
        """Picks b where mask is set, a elsewhere."""
        return Sample4.of(
            np.where(mask, b.v, a.v),
            np.where(mask, b.dx, a.dx),
            np.where(mask, b.dy, a.dy),
            np.where(mask, b.dz, a.dz),
        )

    @staticmethod
    def lerp(a: "Sample4", b: "Sample4", t: np.ndarray) -> "Sample4":
        """Componentwise interpolation. Does not add the d(t) term."""
        shape = np.broadcast_shapes(a.shape, b.shape, np.shape(t))
        t = _filled(t, shape)
        return Sample4(*(_lerp(_filled(lo, shape), _filled(hi, shape), t) for lo, hi in zip(a, b)))

    def __iter__(self):
        return iter((self.v, self.dx, self.dy, self.dz))

    def lanes(self) -> list:
        """Splits a flat batch into per-lane Sample tuples."""
        return [
            Sample(float(v), float(dx), float(dy), float(dz))
            for v, dx, dy, dz in zip(self.v.ravel(), self.dx.ravel(), self.dy.ravel(), self.dz.ravel())
        ]
