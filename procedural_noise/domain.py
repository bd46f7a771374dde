# procedural_noise/domain.py

"""
================================================================================
DOMAIN TRANSFORM
================================================================================
Scale, rotation and translation applied to sample positions before they
enter the noise. The transform is stored as a 3x4 affine matrix.

Data Contract:
---------------
- Inputs: translation (xyz), rotation in degrees (xyz Euler angles), scale.
- Outputs:
    - matrix: 3x4 [Scale * EulerZXY(rotation) | translation]. The rotation is
      applied about Z first, then X, then Y.
    - derivative_matrix: 3x3 EulerYXZ(-rotation) * Scale, which maps a noise
      gradient back onto the untransformed positions.
- Side Effects: None.
- Invariants: The noise evaluators never apply derivative_matrix themselves;
  projecting derivatives is the caller's choice.
================================================================================
"""
from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation

from . import config as DEFAULTS
from .sample import Sample4


@dataclass(frozen=True)
class SpaceTRS:
    translation: tuple = DEFAULTS.DEFAULT_TRANSLATION
    rotation: tuple = DEFAULTS.DEFAULT_ROTATION_DEGREES
    scale: tuple = DEFAULTS.DEFAULT_SCALE

    @classmethod
    def from_config(cls, config: dict) -> "SpaceTRS":
        return cls(
            translation=tuple(float(c) for c in config.get('translation', DEFAULTS.DEFAULT_TRANSLATION)),
            rotation=tuple(float(c) for c in config.get('rotation', DEFAULTS.DEFAULT_ROTATION_DEGREES)),
            scale=tuple(float(c) for c in config.get('scale', DEFAULTS.DEFAULT_SCALE)),
        )

    @property
    def matrix(self) -> np.ndarray:
        rx, ry, rz = self.rotation
        rotation = Rotation.from_euler('zxy', [rz, rx, ry], degrees=True).as_matrix()
        linear = np.diag(self.scale) @ rotation
        return np.column_stack([linear, np.asarray(self.translation, dtype=np.float64)])

    @property
    def derivative_matrix(self) -> np.ndarray:
        rx, ry, rz = self.rotation
        inverse_rotation = Rotation.from_euler('yxz', [-ry, -rx, -rz], degrees=True).as_matrix()
        return inverse_rotation @ np.diag(self.scale)

    def project_derivatives(self, sample: Sample4) -> Sample4:
        """Re-expresses a sample's gradient relative to the untransformed positions."""
        projected = sample.gradient @ self.derivative_matrix.T
        return Sample4.of(sample.v, projected[..., 0], projected[..., 1], projected[..., 2])


def transform_positions(domain_transform, positions) -> tuple:
    """
    Applies a 3x4 affine matrix (or a SpaceTRS) to an (..., 3) position array
    and splits the result into per-axis lane arrays.
    """
    positions = np.asarray(positions, dtype=np.float64)
    if domain_transform is not None:
        matrix = domain_transform.matrix if isinstance(domain_transform, SpaceTRS) else np.asarray(domain_transform, dtype=np.float64)
        if matrix.shape != (3, 4):
            raise ValueError(f"Domain transform must be a 3x4 matrix, got shape {matrix.shape}.")
        positions = positions @ matrix[:, :3].T + matrix[:, 3]
    return positions[..., 0], positions[..., 1], positions[..., 2]
