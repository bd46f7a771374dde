# procedural_noise/hashing.py

"""
================================================================================
SMALL XXHASH (4 LANES)
================================================================================
A small xxHash-style avalanche hash over integer lattice coordinates. The hash
is built one coordinate at a time ("eating"), and every lane is computed
independently, so a batch of positions can be hashed with plain NumPy
elementwise operations.

Data Contract:
---------------
- Inputs:
    - seed (int): Any Python int; reduced modulo 2**32.
    - data: Integer NumPy arrays (or ints) of lattice coordinates.
- Outputs:
    - New SmallXXHash4 values. A hash is never mutated in place.
- Side Effects: None.
- Invariants: The same seed and coordinate sequence always produce the same
  avalanche, bit for bit. All arithmetic is modulo 2**32.
================================================================================
"""
from dataclasses import dataclass

import numpy as np

from . import config as DEFAULTS

_MASK_32 = 0xFFFFFFFF

PRIME_A = np.uint32(DEFAULTS.PRIME_A)
PRIME_B = np.uint32(DEFAULTS.PRIME_B)
PRIME_C = np.uint32(DEFAULTS.PRIME_C)
PRIME_D = np.uint32(DEFAULTS.PRIME_D)
PRIME_E = np.uint32(DEFAULTS.PRIME_E)


def _to_uint32(data) -> np.ndarray:
    """Reinterprets signed integers as uint32 lanes (two's complement)."""
    return np.atleast_1d(np.bitwise_and(np.asarray(data, dtype=np.int64), _MASK_32)).astype(np.uint32)


def _rotate_left(data: np.ndarray, steps: int) -> np.ndarray:
    return (data << np.uint32(steps)) | (data >> np.uint32(32 - steps))


@dataclass(frozen=True)
class SmallXXHash4:
    """An immutable per-lane hash accumulator."""
    accumulator: np.ndarray

    @classmethod
    def seed(cls, seed: int) -> "SmallXXHash4":
        return cls(_to_uint32(seed) + PRIME_E)

    def eat(self, data) -> "SmallXXHash4":
        """Returns a new hash that has consumed one integer per lane."""
        return SmallXXHash4(_rotate_left(self.accumulator + _to_uint32(data) * PRIME_C, 17) * PRIME_D)

    def __add__(self, value: int) -> "SmallXXHash4":
        # Used to derive per-octave seeds without re-eating.
        return SmallXXHash4(self.accumulator + _to_uint32(value))

    @staticmethod
    def select(a: "SmallXXHash4", b: "SmallXXHash4", mask) -> "SmallXXHash4":
        """Picks b where mask is set, a elsewhere."""
        return SmallXXHash4(np.where(mask, b.accumulator, a.accumulator).astype(np.uint32))

    @property
    def avalanche(self) -> np.ndarray:
        value = self.accumulator
        value = value ^ (value >> np.uint32(15))
        value = value * PRIME_B
        value = value ^ (value >> np.uint32(13))
        value = value * PRIME_C
        value = value ^ (value >> np.uint32(16))
        return value

    # --- Derived views of the final avalanche ---

    @property
    def bytes_a(self) -> np.ndarray:
        return self.avalanche & np.uint32(255)

    @property
    def bytes_b(self) -> np.ndarray:
        return (self.avalanche >> np.uint32(8)) & np.uint32(255)

    @property
    def bytes_c(self) -> np.ndarray:
        return (self.avalanche >> np.uint32(16)) & np.uint32(255)

    @property
    def bytes_d(self) -> np.ndarray:
        return self.avalanche >> np.uint32(24)

    @property
    def floats01_a(self) -> np.ndarray:
        return self.bytes_a * (1.0 / 255.0)

    @property
    def floats01_b(self) -> np.ndarray:
        return self.bytes_b * (1.0 / 255.0)

    @property
    def floats01_c(self) -> np.ndarray:
        return self.bytes_c * (1.0 / 255.0)

    @property
    def floats01_d(self) -> np.ndarray:
        return self.bytes_d * (1.0 / 255.0)

    def get_bits(self, count: int, shift: int) -> np.ndarray:
        return (self.avalanche >> np.uint32(shift)) & np.uint32((1 << count) - 1)

    def get_bits_as_floats01(self, count: int, shift: int) -> np.ndarray:
        return self.get_bits(count, shift) * (1.0 / ((1 << count) - 1))
