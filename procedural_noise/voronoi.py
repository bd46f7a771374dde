# procedural_noise/voronoi.py

"""
================================================================================
VORONOI (CELLULAR) NOISE
================================================================================
Noise derived from distances to pseudorandom feature points scattered through
the integer cells around each sample. The traversal tracks the nearest (F1)
and second-nearest (F2) distances; a ranking function turns them into the
final sample.

Data Contract:
---------------
- Inputs: positions (x, y, z) arrays, a seeded SmallXXHash4, the frequency.
- Outputs: a Sample4 with derivatives relative to the unscaled input position.
- Side Effects: None.
- Invariants:
    - Neighbor cells are scanned in a fixed order (x outer, then y, then z,
      each from -1 to +1), and the minima update uses a strict comparison, so
      ties resolve to the first candidate in scan order.
    - F2 >= F1 for every distance metric and every position.
    - Zero-length offsets produce a zero gradient, never NaN.
================================================================================
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import config as DEFAULTS
from .sample import Sample4

_NEIGHBOR_OFFSETS = (-1, 0, 1)


@dataclass(frozen=True)
class VoronoiData:
    """Running minima of a Voronoi scan. `weights` is only used by smooth metrics."""
    a: Sample4
    b: Sample4
    weights: Optional[Sample4] = None


def _away_sign(x: np.ndarray) -> np.ndarray:
    # Derivative of |x| w.r.t. the sample, where x = point - sample.
    return np.where(x < 0.0, 1.0, -1.0)


def _safe_divide(numerator, denominator):
    return np.divide(numerator, denominator, out=np.zeros_like(numerator), where=denominator > 0.0)


def _clamp_distance(s: Sample4) -> Sample4:
    """Clamps to the maximum distance; clamped lanes get a zero gradient."""
    keep = s.v < DEFAULTS.VORONOI_MAX_DISTANCE
    return Sample4.of(
        np.where(keep, s.v, DEFAULTS.VORONOI_MAX_DISTANCE),
        np.where(keep, s.dx, 0.0),
        np.where(keep, s.dy, 0.0),
        np.where(keep, s.dz, 0.0),
    )


# --- Distance metrics ---

class Worley:
    """Euclidean distance. 2D/3D distances stay squared until finalize."""

    def initial_data(self, shape) -> VoronoiData:
        far = Sample4.of(np.full(shape, DEFAULTS.VORONOI_INITIAL_DISTANCE))
        return VoronoiData(far, far)

    def get_distance_1d(self, x) -> Sample4:
        return Sample4.of(np.abs(x), dx=_away_sign(x))

    def get_distance_2d(self, x, z) -> Sample4:
        return self.get_distance_3d(x, 0.0, z)

    def get_distance_3d(self, x, y, z) -> Sample4:
        # The offsets are kept as a placeholder gradient until finalize.
        return Sample4.of(x * x + y * y + z * z, x, y, z)

    def update(self, data: VoronoiData, sample: Sample4) -> VoronoiData:
        new_minimum = sample.v < data.a.v
        b = Sample4.select(data.b, sample, sample.v < data.b.v)
        return VoronoiData(
            Sample4.select(data.a, sample, new_minimum),
            Sample4.select(b, data.a, new_minimum),
        )

    def finalize_1d(self, data: VoronoiData) -> VoronoiData:
        return data

    def finalize_2d(self, data: VoronoiData) -> VoronoiData:
        return self.finalize_3d(data)

    def finalize_3d(self, data: VoronoiData) -> VoronoiData:
        return VoronoiData(self._root(data.a), self._root(data.b))

    @staticmethod
    def _root(s: Sample4) -> Sample4:
        distance = np.sqrt(s.v)
        return _clamp_distance(Sample4.of(
            distance,
            _safe_divide(-s.dx, distance),
            _safe_divide(-s.dy, distance),
            _safe_divide(-s.dz, distance),
        ))

    def __repr__(self):
        return type(self).__name__


class SmoothWorley(Worley):
    """
    Euclidean distance with F1 replaced by a log-sum-exp smooth minimum,
        F1 = -ln(sum(exp(-k * d_i))) / k,
    whose gradient is the softmax-weighted average of the candidates'
    gradients. This removes the creases of F1 at cell boundaries. F2 stays the
    hard second minimum; since the smooth minimum never exceeds the hard one,
    F2 >= F1 still holds.
    """
    sharpness = DEFAULTS.SMOOTH_WORLEY_SHARPNESS

    def initial_data(self, shape) -> VoronoiData:
        data = super().initial_data(shape)
        return VoronoiData(data.a, data.b, Sample4.zeros(shape))

    def get_distance_2d(self, x, z) -> Sample4:
        return self.get_distance_3d(x, 0.0, z)

    def get_distance_3d(self, x, y, z) -> Sample4:
        x, y, z = np.broadcast_arrays(*(np.asarray(c, dtype=np.float64) for c in (x, y, z)))
        distance = np.sqrt(x * x + y * y + z * z)
        return Sample4.of(
            distance,
            _safe_divide(-x, distance),
            _safe_divide(-y, distance),
            _safe_divide(-z, distance),
        )

    def update(self, data: VoronoiData, sample: Sample4) -> VoronoiData:
        hard = super().update(data, sample)
        e = np.exp(-self.sharpness * sample.v)
        w = data.weights
        weights = Sample4.of(w.v + e, w.dx + e * sample.dx, w.dy + e * sample.dy, w.dz + e * sample.dz)
        return VoronoiData(hard.a, hard.b, weights)

    def finalize_1d(self, data: VoronoiData) -> VoronoiData:
        return self._finalize(data)

    def finalize_2d(self, data: VoronoiData) -> VoronoiData:
        return self._finalize(data)

    def finalize_3d(self, data: VoronoiData) -> VoronoiData:
        return self._finalize(data)

    def _finalize(self, data: VoronoiData) -> VoronoiData:
        w = data.weights
        smooth = Sample4.of(np.log(w.v) / -self.sharpness, w.dx / w.v, w.dy / w.v, w.dz / w.v)
        keep = smooth.v > 0.0
        smooth = Sample4.select(Sample4.zeros(smooth.shape), smooth, keep)
        return VoronoiData(_clamp_distance(smooth), _clamp_distance(data.b))


class Chebyshev(Worley):
    """Largest per-axis offset. In 1D this is the same as Worley."""

    def get_distance_2d(self, x, z) -> Sample4:
        ax, az = np.abs(x), np.abs(z)
        keep_x = ax > az
        return Sample4.of(
            np.where(keep_x, ax, az),
            dx=np.where(keep_x, _away_sign(x), 0.0),
            dz=np.where(keep_x, 0.0, _away_sign(z)),
        )

    def get_distance_3d(self, x, y, z) -> Sample4:
        ax, ay, az = np.abs(x), np.abs(y), np.abs(z)
        keep_x = (ax > ay) & (ax > az)
        keep_y = ay > az
        return Sample4.of(
            np.where(keep_x, ax, np.where(keep_y, ay, az)),
            np.where(keep_x, _away_sign(x), 0.0),
            np.where(keep_x, 0.0, np.where(keep_y, _away_sign(y), 0.0)),
            np.where(keep_x | keep_y, 0.0, _away_sign(z)),
        )

    def finalize_3d(self, data: VoronoiData) -> VoronoiData:
        return VoronoiData(_clamp_distance(data.a), _clamp_distance(data.b))


# --- Ranking functions ---

class F1:
    def evaluate(self, data: VoronoiData) -> Sample4:
        return data.a

    def __repr__(self):
        return "F1"


class F2:
    def evaluate(self, data: VoronoiData) -> Sample4:
        return data.b

    def __repr__(self):
        return "F2"


class F2MinusF1:
    """Emphasizes cell boundaries; never negative."""

    def evaluate(self, data: VoronoiData) -> Sample4:
        return data.b - data.a

    def __repr__(self):
        return "F2MinusF1"


class CellAsIslands:
    """Turns (smooth) F1 into a plateau height field peaking at cell centers."""

    def evaluate(self, data: VoronoiData) -> Sample4:
        s = data.a
        return Sample4.of(1.0 - s.v, -s.dx, -s.dy, -s.dz)

    def __repr__(self):
        return "CellAsIslands"


# --- Traversals ---

class _VoronoiNoise:

    def __init__(self, lattice, distance, function):
        self.lattice = lattice
        self.distance = distance
        self.function = function

    def __repr__(self):
        return f"{type(self).__name__}({self.lattice!r}, {self.distance!r}, {self.function!r})"


class Voronoi1D(_VoronoiNoise):

    def get_noise4(self, positions, hash, frequency: int):
        l, d = self.lattice, self.distance
        x = l.get_span(positions[0], frequency)
        data = d.initial_data(x.g0.shape)
        for u in _NEIGHBOR_OFFSETS:
            h = hash.eat(l.validate_single_step(x.p0 + u, frequency))
            data = d.update(data, d.get_distance_1d(h.floats01_a + u - x.g0))
        s = self.function.evaluate(d.finalize_1d(data))
        return s.scale_derivatives(frequency)


class Voronoi2D(_VoronoiNoise):

    def get_noise4(self, positions, hash, frequency: int):
        l, d = self.lattice, self.distance
        x = l.get_span(positions[0], frequency)
        z = l.get_span(positions[2], frequency)
        data = d.initial_data(x.g0.shape)
        for u in _NEIGHBOR_OFFSETS:
            hx = hash.eat(l.validate_single_step(x.p0 + u, frequency))
            x_offset = u - x.g0
            for v in _NEIGHBOR_OFFSETS:
                h = hx.eat(l.validate_single_step(z.p0 + v, frequency))
                z_offset = v - z.g0
                # Two feature points per cell.
                data = d.update(data, d.get_distance_2d(h.floats01_a + x_offset, h.floats01_b + z_offset))
                data = d.update(data, d.get_distance_2d(h.floats01_c + x_offset, h.floats01_d + z_offset))
        s = self.function.evaluate(d.finalize_2d(data))
        return s.scale_derivatives(frequency)


class Voronoi3D(_VoronoiNoise):

    def get_noise4(self, positions, hash, frequency: int):
        l, d = self.lattice, self.distance
        bits = DEFAULTS.VORONOI_3D_BITS
        x = l.get_span(positions[0], frequency)
        y = l.get_span(positions[1], frequency)
        z = l.get_span(positions[2], frequency)
        data = d.initial_data(x.g0.shape)
        for u in _NEIGHBOR_OFFSETS:
            hx = hash.eat(l.validate_single_step(x.p0 + u, frequency))
            x_offset = u - x.g0
            for v in _NEIGHBOR_OFFSETS:
                hy = hx.eat(l.validate_single_step(y.p0 + v, frequency))
                y_offset = v - y.g0
                for w in _NEIGHBOR_OFFSETS:
                    h = hy.eat(l.validate_single_step(z.p0 + w, frequency))
                    z_offset = w - z.g0
                    data = d.update(data, d.get_distance_3d(
                        h.get_bits_as_floats01(bits, 0) + x_offset,
                        h.get_bits_as_floats01(bits, bits) + y_offset,
                        h.get_bits_as_floats01(bits, bits * 2) + z_offset,
                    ))
                    data = d.update(data, d.get_distance_3d(
                        h.get_bits_as_floats01(bits, bits * 3) + x_offset,
                        h.get_bits_as_floats01(bits, bits * 4) + y_offset,
                        h.get_bits_as_floats01(bits, bits * 5) + z_offset,
                    ))
        s = self.function.evaluate(d.finalize_3d(data))
        return s.scale_derivatives(frequency)
