# procedural_noise/registry.py

"""
================================================================================
DISPATCH REGISTRY
================================================================================
A precomputed mapping from every supported NoiseKey to its fully specialized
evaluator (a NoiseJob wrapping one traversal/kernel combination).

The map is built once, while this module is imported. The import lock is the
initialization barrier: by the time any caller can reach try_get(), the map
is complete, and it is never modified afterwards. Concurrent lookups from any
number of threads therefore need no locking.

Data Contract:
---------------
- try_get(key) -> NoiseJob or None
- get(key) -> NoiseJob, raising UnsupportedNoiseConfiguration when missing.
- NOISE_JOBS is a read-only view of the whole map.

Unsupported combinations are simply absent from the map:
    - turbulence or smoothstep with Voronoi,
    - smoothstep without turbulence,
    - tiling with Simplex / SimplexValue,
    - any dimension outside 1-3.
================================================================================
"""
import logging
from types import MappingProxyType

from . import gradients
from . import voronoi
from .jobs import NoiseJob
from .lattice import Lattice1D, Lattice2D, Lattice3D, LatticeNormal, LatticeTiling
from .noise_config import NoiseCategory, NoiseKey, VoronoiDistance, VoronoiFunction
from .simplex import Simplex1D, Simplex2D, Simplex3D

logger = logging.getLogger(__name__)

DIMENSIONS = (1, 2, 3)

_LATTICE_TYPES = {1: Lattice1D, 2: Lattice2D, 3: Lattice3D}
_SIMPLEX_TYPES = {1: Simplex1D, 2: Simplex2D, 3: Simplex3D}
_VORONOI_TYPES = {1: voronoi.Voronoi1D, 2: voronoi.Voronoi2D, 3: voronoi.Voronoi3D}

# Gradient kernel behind each non-Voronoi category.
_LATTICE_GRADIENTS = {
    NoiseCategory.PERLIN: gradients.Perlin,
    NoiseCategory.VALUE: gradients.Value,
}
_SIMPLEX_GRADIENTS = {
    NoiseCategory.SIMPLEX: gradients.Simplex,
    NoiseCategory.SIMPLEX_VALUE: gradients.Value,
}

_VORONOI_DISTANCES = {
    VoronoiDistance.WORLEY: voronoi.Worley,
    VoronoiDistance.SMOOTH_WORLEY: voronoi.SmoothWorley,
    VoronoiDistance.CHEBYSHEV: voronoi.Chebyshev,
}
_VORONOI_FUNCTIONS = {
    VoronoiFunction.F1: voronoi.F1,
    VoronoiFunction.F2: voronoi.F2,
    VoronoiFunction.F2_MINUS_F1: voronoi.F2MinusF1,
    VoronoiFunction.CELL_AS_ISLANDS: voronoi.CellAsIslands,
}

# (turbulence, smoothstep) variants offered for every gradient noise.
_SHAPING_VARIANTS = ((False, False), (True, False), (True, True))


class UnsupportedNoiseConfiguration(KeyError):
    """No evaluator is registered for the requested NoiseKey."""

    def __init__(self, key):
        self.key = key
        described = key.describe() if isinstance(key, NoiseKey) else repr(key)
        super().__init__(f"No noise evaluator registered for '{described}' ({key!r})")

    def __str__(self):
        return self.args[0]


def _shaped(gradient, turbulence: bool, smoothstep: bool):
    if turbulence:
        gradient = gradients.Turbulence(gradient)
    if smoothstep:
        gradient = gradients.Smoothstep(gradient)
    return gradient


def _build_registry() -> dict:
    jobs = {}

    # Phase 1: lattice and simplex noises.
    for category, gradient_type in _LATTICE_GRADIENTS.items():
        for dim in DIMENSIONS:
            for tiling in (False, True):
                lattice = LatticeTiling() if tiling else LatticeNormal()
                for turbulence, smoothstep in _SHAPING_VARIANTS:
                    key = NoiseKey(category, dim, tiling, turbulence, smoothstep=smoothstep)
                    noise = _LATTICE_TYPES[dim](lattice, _shaped(gradient_type(), turbulence, smoothstep))
                    jobs[key] = NoiseJob(noise)

    for category, gradient_type in _SIMPLEX_GRADIENTS.items():
        for dim in DIMENSIONS:
            for turbulence, smoothstep in _SHAPING_VARIANTS:
                key = NoiseKey(category, dim, False, turbulence, smoothstep=smoothstep)
                noise = _SIMPLEX_TYPES[dim](_shaped(gradient_type(), turbulence, smoothstep))
                jobs[key] = NoiseJob(noise)

    # Phase 2: Voronoi noises. In 1D every metric that is not smooth reduces
    # to Worley, which Chebyshev inherits.
    for dim in DIMENSIONS:
        for tiling in (False, True):
            lattice = LatticeTiling() if tiling else LatticeNormal()
            for distance, distance_type in _VORONOI_DISTANCES.items():
                for function, function_type in _VORONOI_FUNCTIONS.items():
                    key = NoiseKey(NoiseCategory.VORONOI, dim, tiling, False, distance, function)
                    noise = _VORONOI_TYPES[dim](lattice, distance_type(), function_type())
                    jobs[key] = NoiseJob(noise)

    logger.debug(f"Noise registry built with {len(jobs)} evaluators.")
    return jobs


NOISE_JOBS = MappingProxyType(_build_registry())


def try_get(key: NoiseKey):
    """Returns the evaluator for `key`, or None if the combination is unsupported."""
    return NOISE_JOBS.get(key)


def get(key: NoiseKey) -> NoiseJob:
    job = NOISE_JOBS.get(key)
    if job is None:
        raise UnsupportedNoiseConfiguration(key)
    return job
