# procedural_noise/settings.py

"""
================================================================================
FRACTAL SETTINGS
================================================================================
The numeric parameters of a fractal noise evaluation, and the range checks
that guard the boundary of the numeric core.

Data Contract:
---------------
- Inputs: seed, frequency, octaves, lacunarity, persistence; or a user
  configuration dictionary whose missing keys fall back to config.py.
- Outputs: an immutable Settings instance.
- Side Effects: Logs a warning for every clamped field (when clamping).
- Invariants: A Settings instance that passed validate() or clamped() is in
  range; the noise evaluators never re-check.
================================================================================
"""
import logging
from dataclasses import dataclass, replace

from . import config as DEFAULTS


class SettingsRangeError(ValueError):
    """A settings field lies outside its documented range."""


@dataclass(frozen=True)
class Settings:
    seed: int = DEFAULTS.DEFAULT_SEED
    frequency: int = DEFAULTS.DEFAULT_FREQUENCY
    octaves: int = DEFAULTS.DEFAULT_OCTAVES
    lacunarity: int = DEFAULTS.DEFAULT_LACUNARITY
    persistence: float = DEFAULTS.DEFAULT_PERSISTENCE

    @classmethod
    def from_config(cls, config: dict) -> "Settings":
        """Consolidates a user dictionary over the internal defaults."""
        return cls(
            seed=int(config.get('seed', DEFAULTS.DEFAULT_SEED)),
            frequency=int(config.get('frequency', DEFAULTS.DEFAULT_FREQUENCY)),
            octaves=int(config.get('octaves', DEFAULTS.DEFAULT_OCTAVES)),
            lacunarity=int(config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY)),
            persistence=float(config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE)),
        )

    def range_violations(self) -> list[str]:
        """Returns a human-readable description of every out-of-range field."""
        problems = []
        if not DEFAULTS.SEED_RANGE[0] <= self.seed <= DEFAULTS.SEED_RANGE[1]:
            problems.append(f"seed={self.seed} is not a 32-bit signed integer")
        if not DEFAULTS.MIN_FREQUENCY <= self.frequency <= DEFAULTS.MAX_FREQUENCY:
            problems.append(f"frequency={self.frequency} must be >= {DEFAULTS.MIN_FREQUENCY}")
        if not DEFAULTS.OCTAVES_RANGE[0] <= self.octaves <= DEFAULTS.OCTAVES_RANGE[1]:
            problems.append(f"octaves={self.octaves} must be in {list(DEFAULTS.OCTAVES_RANGE)}")
        if not DEFAULTS.LACUNARITY_RANGE[0] <= self.lacunarity <= DEFAULTS.LACUNARITY_RANGE[1]:
            problems.append(f"lacunarity={self.lacunarity} must be in {list(DEFAULTS.LACUNARITY_RANGE)}")
        # Written so that NaN is also rejected.
        if not DEFAULTS.PERSISTENCE_RANGE[0] <= self.persistence <= DEFAULTS.PERSISTENCE_RANGE[1]:
            problems.append(f"persistence={self.persistence} must be in {list(DEFAULTS.PERSISTENCE_RANGE)}")
        return problems

    def validate(self) -> "Settings":
        problems = self.range_violations()
        if problems:
            raise SettingsRangeError("Invalid noise settings: " + "; ".join(problems))
        return self

    def clamped(self, logger: logging.Logger = None) -> "Settings":
        """Returns a copy with every field forced into range."""
        logger = logger or logging.getLogger(__name__)
        persistence = self.persistence
        if persistence != persistence:
            persistence = DEFAULTS.DEFAULT_PERSISTENCE
        fixed = replace(
            self,
            seed=_wrap_int32(self.seed),
            frequency=min(max(self.frequency, DEFAULTS.MIN_FREQUENCY), DEFAULTS.MAX_FREQUENCY),
            octaves=min(max(self.octaves, DEFAULTS.OCTAVES_RANGE[0]), DEFAULTS.OCTAVES_RANGE[1]),
            lacunarity=min(max(self.lacunarity, DEFAULTS.LACUNARITY_RANGE[0]), DEFAULTS.LACUNARITY_RANGE[1]),
            persistence=min(max(persistence, DEFAULTS.PERSISTENCE_RANGE[0]), DEFAULTS.PERSISTENCE_RANGE[1]),
        )
        for field in ('seed', 'frequency', 'octaves', 'lacunarity', 'persistence'):
            before, after = getattr(self, field), getattr(fixed, field)
            if before != after:
                logger.warning(f"Noise setting '{field}' clamped from {before} to {after}.")
        return fixed


def _wrap_int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31
