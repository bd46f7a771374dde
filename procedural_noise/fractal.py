# procedural_noise/fractal.py

"""
================================================================================
FRACTAL COMBINER
================================================================================
Sums successive octaves of a base noise at increasing frequency and
decreasing amplitude, then normalizes by the total amplitude so the output
range does not depend on the octave count or persistence.

Data Contract:
---------------
- Inputs:
    - noise: any evaluator exposing get_noise4(positions, hash, frequency).
    - positions: a tuple (x, y, z) of lane-shaped float64 arrays, already in
      the noise domain (after the domain transform).
    - settings: a validated Settings instance.
- Outputs: a Sample4 with derivatives relative to `positions`.
- Side Effects: None.
- Invariants: With octaves == 1 the result is exactly the base evaluator's
  sample. Octave o is hashed with seed + o.
================================================================================
"""
from .hashing import SmallXXHash4
from .sample import Sample4
from .settings import Settings


def get_fractal_noise(noise, positions, settings: Settings) -> Sample4:
    hash = SmallXXHash4.seed(settings.seed)
    frequency = settings.frequency
    amplitude = 1.0
    amplitude_sum = 0.0
    total = None

    for o in range(settings.octaves):
        # Each octave already reports derivatives for its own frequency.
        octave = noise.get_noise4(positions, hash + o, frequency)
        total = octave * amplitude if total is None else total + octave * amplitude
        amplitude_sum += amplitude
        frequency *= settings.lacunarity
        amplitude *= settings.persistence

    return total / amplitude_sum
