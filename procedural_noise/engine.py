# procedural_noise/engine.py

"""
================================================================================
CORE NOISE ENGINE
================================================================================
This module contains the main NoiseEngine class, responsible for resolving a
noise configuration into a registered evaluator and sampling it.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of parameters which can override the
      internal defaults. Expected keys include 'seed', 'frequency',
      'category', 'dimensions', etc.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - Sample4 batches holding the noise value and its derivatives.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same configuration, the output is deterministic.
================================================================================
"""
import logging

import numpy as np

from . import config as DEFAULTS
from . import jobs
from . import registry
from .domain import SpaceTRS
from .noise_config import NoiseConfig
from .sample import Sample4
from .settings import SettingsRangeError


class NoiseEngine:
    """
    Evaluates one configured noise. This class is backend-only and does not
    handle scheduling, persistence or visualization.
    """
    def __init__(self, config: dict, logger: logging.Logger):
        """
        Initializes the noise engine.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.

        Raises:
            SettingsRangeError: If a setting is out of range and clamping is off.
            UnsupportedNoiseConfiguration: If no evaluator matches the config.
        """
        self.logger = logger
        self.user_config = config
        self.logger.info("NoiseEngine initializing...")

        # --- Consolidate Configuration ---
        self.noise_config = NoiseConfig.from_dict(self.user_config)
        self.domain = SpaceTRS.from_config(self.user_config)
        clamp = self.user_config.get('clamp_settings', DEFAULTS.DEFAULT_CLAMP_SETTINGS)

        # --- Validate Settings at the boundary ---
        settings = self.noise_config.settings
        if clamp:
            settings = settings.clamped(self.logger)
        else:
            problems = settings.range_violations()
            if problems:
                for problem in problems:
                    self.logger.error(f"Invalid noise setting: {problem}")
                raise SettingsRangeError("Invalid noise settings: " + "; ".join(problems))
        self.settings = settings
        self.logger.debug(f"Consolidated settings: {self.settings}")

        # --- Resolve the evaluator once ---
        self.key = self.noise_config.key()
        self.job = registry.try_get(self.key)
        if self.job is None:
            self.logger.error(f"Unsupported noise configuration: {self.key.describe()}")
            raise registry.UnsupportedNoiseConfiguration(self.key)

        # --- Public Properties for easy access ---
        self.seed = self.settings.seed
        self.domain_matrix = self.domain.matrix

        self.logger.info(f"NoiseEngine initialized with seed: {self.seed}")
        self.logger.info(
            f"Noise: {self.key.describe()} | frequency {self.settings.frequency}, "
            f"{self.settings.octaves} octave(s), lacunarity {self.settings.lacunarity}, "
            f"persistence {self.settings.persistence}"
        )
        self.logger.debug(f"Evaluator: {self.job!r}")

    def evaluate_batch(self, positions) -> Sample4:
        """Evaluates exactly four positions, shape (4, 3)."""
        return jobs.evaluate(positions, self.settings, self.key, self.domain_matrix)

    def evaluate(self, positions) -> Sample4:
        """Evaluates any number of positions, shape (N, 3)."""
        return jobs.evaluate_positions(positions, self.settings, self.key, self.domain_matrix, job=self.job)

    def project_derivatives(self, sample: Sample4) -> Sample4:
        """
        Maps derivatives from the transformed noise domain back onto the
        caller's positions. Not applied by evaluate(); see SpaceTRS.
        """
        return self.domain.project_derivatives(sample)

    def get_coordinate_grid(self, width: float, depth: float, resolution_w: int, resolution_d: int) -> np.ndarray:
        """
        Generates an (N, 3) grid of positions on the XZ plane (y = 0), centered
        on the origin. Useful for sampling 1D/2D noise over a surface.
        """
        x_coords = np.linspace(-width / 2.0, width / 2.0, resolution_w)
        z_coords = np.linspace(-depth / 2.0, depth / 2.0, resolution_d)
        xv, zv = np.meshgrid(x_coords, z_coords)
        return np.column_stack([xv.ravel(), np.zeros(xv.size), zv.ravel()])
