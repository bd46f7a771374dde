# procedural_noise/noise_config.py

"""
================================================================================
NOISE SELECTION
================================================================================
The enumerations that describe which noise to evaluate, the structural
lookup key used by the dispatch registry, and the user-facing NoiseConfig
that produces such keys.

Data Contract:
---------------
- NoiseKey is an immutable, hashable value object compared structurally.
- NoiseConfig.from_dict() accepts enum members, their values ("perlin") or
  their names ("PERLIN", case-insensitive). On/off options accept bools,
  0/1 and the words true/false, yes/no, on/off; anything else raises
  ValueError.
- Side Effects: None.
================================================================================
"""
from dataclasses import dataclass, field
from enum import Enum

from . import config as DEFAULTS
from .settings import Settings


class NoiseCategory(Enum):
    VALUE = "value"
    PERLIN = "perlin"
    VORONOI = "voronoi"
    SIMPLEX = "simplex"
    SIMPLEX_VALUE = "simplex_value"


class VoronoiDistance(Enum):
    WORLEY = "worley"
    SMOOTH_WORLEY = "smooth_worley"
    CHEBYSHEV = "chebyshev"


class VoronoiFunction(Enum):
    F1 = "f1"
    F2 = "f2"
    F2_MINUS_F1 = "f2_minus_f1"
    CELL_AS_ISLANDS = "cell_as_islands"


def parse_enum(enum_type, value):
    """Resolves an enum member from a member, its value or its name."""
    if isinstance(value, enum_type):
        return value
    text = str(value).strip().lower()
    for member in enum_type:
        if text in (member.value, member.name.lower()):
            return member
    choices = ", ".join(member.value for member in enum_type)
    raise ValueError(f"Unknown {enum_type.__name__} '{value}'. Expected one of: {choices}")


_TRUE_WORDS = ("true", "yes", "on", "1")
_FALSE_WORDS = ("false", "no", "off", "0")


def parse_flag(name: str, value) -> bool:
    """Resolves an on/off option from a bool, 0/1 or a word such as "false"."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"Option '{name}' must be true or false, got '{value}'.")


@dataclass(frozen=True)
class NoiseKey:
    """Structural lookup key into the dispatch registry."""
    category: NoiseCategory
    dimensions: int
    tiling: bool = False
    turbulence: bool = False
    voronoi_distance: VoronoiDistance = VoronoiDistance.WORLEY
    voronoi_function: VoronoiFunction = VoronoiFunction.F1
    smoothstep: bool = False

    def describe(self) -> str:
        text = f"{self.category.value} {self.dimensions}D"
        if self.tiling:
            text += " tiling"
        if self.turbulence:
            text += " turbulence"
        if self.smoothstep:
            text += " smoothstep"
        if self.category is NoiseCategory.VORONOI:
            text += f" {self.voronoi_distance.value}/{self.voronoi_function.value}"
        return text


@dataclass
class NoiseConfig:
    """User-facing description of a noise; turned into a NoiseKey for lookup."""
    category: NoiseCategory = NoiseCategory(DEFAULTS.DEFAULT_CATEGORY)
    dimensions: int = DEFAULTS.DEFAULT_DIMENSIONS
    tiling: bool = DEFAULTS.DEFAULT_TILING
    turbulence: bool = DEFAULTS.DEFAULT_TURBULENCE
    smoothstep: bool = DEFAULTS.DEFAULT_SMOOTHSTEP
    voronoi_distance: VoronoiDistance = VoronoiDistance(DEFAULTS.DEFAULT_VORONOI_DISTANCE)
    voronoi_function: VoronoiFunction = VoronoiFunction(DEFAULTS.DEFAULT_VORONOI_FUNCTION)
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_dict(cls, config: dict) -> "NoiseConfig":
        return cls(
            category=parse_enum(NoiseCategory, config.get('category', DEFAULTS.DEFAULT_CATEGORY)),
            dimensions=int(config.get('dimensions', DEFAULTS.DEFAULT_DIMENSIONS)),
            tiling=parse_flag('tiling', config.get('tiling', DEFAULTS.DEFAULT_TILING)),
            turbulence=parse_flag('turbulence', config.get('turbulence', DEFAULTS.DEFAULT_TURBULENCE)),
            smoothstep=parse_flag('smoothstep', config.get('smoothstep', DEFAULTS.DEFAULT_SMOOTHSTEP)),
            voronoi_distance=parse_enum(
                VoronoiDistance, config.get('voronoi_distance', DEFAULTS.DEFAULT_VORONOI_DISTANCE)),
            voronoi_function=parse_enum(
                VoronoiFunction, config.get('voronoi_function', DEFAULTS.DEFAULT_VORONOI_FUNCTION)),
            settings=Settings.from_config(config),
        )

    @property
    def needs_voronoi_extras(self) -> bool:
        return self.category is NoiseCategory.VORONOI

    def key(self) -> NoiseKey:
        """
        Builds the registry key. The Voronoi knobs only take part in the key of
        a Voronoi noise. Turbulence is passed through untouched so that an
        unsupported request is rejected by the registry instead of dropped.
        """
        if self.needs_voronoi_extras:
            return NoiseKey(
                self.category, self.dimensions, self.tiling, self.turbulence,
                self.voronoi_distance, self.voronoi_function, self.smoothstep
            )
        return NoiseKey(
            self.category, self.dimensions, self.tiling, self.turbulence,
            smoothstep=self.smoothstep
        )
