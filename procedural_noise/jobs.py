# procedural_noise/jobs.py

"""
================================================================================
BATCH EVALUATOR
================================================================================
Evaluates noise for batches of four independent sample points ("lanes").

A NoiseJob is what the dispatch registry hands out: it owns one specialized
traversal/kernel combination and runs the domain transform and the fractal
combiner around it. Several batches can be evaluated in one vectorized call
by stacking them on a leading axis, shape (batches, 4, 3).

Data Contract:
---------------
- evaluate(positions (4, 3), settings, key, domain_transform) -> Sample4 with
  arrays of shape (4,).
- evaluate_positions(positions (N, 3), ...) -> Sample4 with arrays of shape (N,).
- Both validate their Settings once per call and raise SettingsRangeError
  before any sample is evaluated.
- Side Effects: None. Batches never share mutable state, so they can run on
  any number of threads in any order.
- Invariants: Lanes are evaluated independently; padding lanes added to
  complete the last batch are discarded.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS
from .domain import transform_positions
from .fractal import get_fractal_noise
from .sample import Sample4
from .settings import Settings


class NoiseJob:
    """A registered evaluator: domain transform + fractal sum of one noise."""

    def __init__(self, noise):
        self.noise = noise

    def __call__(self, positions, settings: Settings, domain_transform=None) -> Sample4:
        return get_fractal_noise(self.noise, transform_positions(domain_transform, positions), settings)

    def __repr__(self):
        return f"NoiseJob({self.noise!r})"


def _as_position_array(positions) -> np.ndarray:
    positions = np.asarray(positions, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ValueError(f"Positions must have shape (N, 3), got {positions.shape}.")
    return positions


def evaluate(positions, settings: Settings, key, domain_transform=None) -> Sample4:
    """Evaluates exactly one batch of four positions."""
    from . import registry

    settings.validate()
    positions = _as_position_array(positions)
    if positions.shape[0] != DEFAULTS.LANES:
        raise ValueError(f"A batch holds exactly {DEFAULTS.LANES} positions, got {positions.shape[0]}.")
    return registry.get(key)(positions, settings, domain_transform)


def evaluate_positions(positions, settings: Settings, key, domain_transform=None, job: NoiseJob = None) -> Sample4:
    """
    Evaluates any number of positions by grouping them into 4-wide batches.
    The last batch is padded by repeating the final position.
    """
    from . import registry

    settings.validate()
    positions = _as_position_array(positions)
    count = positions.shape[0]
    if count == 0:
        return Sample4.zeros((0,))
    job = job or registry.get(key)

    padding = (-count) % DEFAULTS.LANES
    if padding:
        positions = np.concatenate([positions, np.repeat(positions[-1:], padding, axis=0)])
    batches = positions.reshape(-1, DEFAULTS.LANES, 3)

    s = job(batches, settings, domain_transform)
    return Sample4(*(component.reshape(-1)[:count] for component in s))
