# procedural_noise/__init__.py

# This file makes the 'procedural_noise' directory a Python package.
# We also use it to define the public API of the package.

from .engine import NoiseEngine
from .domain import SpaceTRS
from .hashing import SmallXXHash4
from .jobs import NoiseJob, evaluate, evaluate_positions
from .noise_config import NoiseCategory, NoiseConfig, NoiseKey, VoronoiDistance, VoronoiFunction
from .registry import UnsupportedNoiseConfiguration, get, try_get
from .sample import Sample, Sample4
from .settings import Settings, SettingsRangeError

__all__ = [
    "NoiseEngine", "SpaceTRS", "SmallXXHash4", "NoiseJob", "evaluate", "evaluate_positions",
    "NoiseCategory", "NoiseConfig", "NoiseKey", "VoronoiDistance", "VoronoiFunction",
    "UnsupportedNoiseConfiguration", "get", "try_get", "Sample", "Sample4",
    "Settings", "SettingsRangeError",
]
