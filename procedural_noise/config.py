# procedural_noise/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the noise
engine. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SURFACE.
Instead, pass a configuration dictionary to the NoiseEngine instance.
================================================================================
"""
import math

# --- Fractal Settings ---
DEFAULT_SEED = 0
DEFAULT_FREQUENCY = 4
DEFAULT_OCTAVES = 1
DEFAULT_LACUNARITY = 2
DEFAULT_PERSISTENCE = 0.5

# Allowed ranges, inclusive. Settings outside these are rejected or clamped
# at the engine boundary; the numeric core assumes they hold.
SEED_RANGE = (-2**31, 2**31 - 1)
MIN_FREQUENCY = 1
MAX_FREQUENCY = 2**31 - 1
OCTAVES_RANGE = (1, 6)
LACUNARITY_RANGE = (2, 4)
PERSISTENCE_RANGE = (0.0, 1.0)

# --- Noise Selection ---
DEFAULT_CATEGORY = "perlin"
DEFAULT_DIMENSIONS = 3
DEFAULT_TILING = False
DEFAULT_TURBULENCE = False
DEFAULT_SMOOTHSTEP = False
DEFAULT_VORONOI_DISTANCE = "worley"
DEFAULT_VORONOI_FUNCTION = "f1"

# If True, out-of-range settings are clamped (with a warning) instead of
# raising SettingsRangeError.
DEFAULT_CLAMP_SETTINGS = False

# --- Domain Transform ---
DEFAULT_TRANSLATION = (0.0, 0.0, 0.0)
DEFAULT_ROTATION_DEGREES = (0.0, 0.0, 0.0)
DEFAULT_SCALE = (1.0, 1.0, 1.0)

# --- Batch Layout ---
# Number of independent sample points evaluated together.
LANES = 4

# --- SmallXXHash Primes ---
# Fixed so that any reimplementation is bit-reproducible for a given seed.
PRIME_A = 0b10011110001101110111100110110001
PRIME_B = 0b10000101111010111100101001110111
PRIME_C = 0b11000010101100101010111000111101
PRIME_D = 0b00100111110101001110101100101111
PRIME_E = 0b00010110010101100110011110110001

# --- Gradient Normalization ---
# Scale factors that bring each gradient family's output to roughly [-1, 1].
PERLIN_2D_SCALE = 2.0 / 0.53528
PERLIN_3D_SCALE = 1.0 / 0.56290
SIMPLEX_1D_SCALE = 32.0 / 27.0
SIMPLEX_2D_SCALE = 5.832 / math.sqrt(2.0)
SIMPLEX_3D_SCALE = 1024.0 / (125.0 * math.sqrt(3.0))

# --- Simplex Geometry ---
# Frequency multipliers so simplex features roughly match the lattice ones.
SIMPLEX_2D_FREQUENCY_FACTOR = 1.0 / math.sqrt(3.0)
SIMPLEX_3D_FREQUENCY_FACTOR = 0.6
SIMPLEX_2D_SKEW = (math.sqrt(3.0) - 1.0) / 2.0
SIMPLEX_2D_UNSKEW = (3.0 - math.sqrt(3.0)) / 6.0
SIMPLEX_3D_SKEW = 1.0 / 3.0
SIMPLEX_3D_UNSKEW = 1.0 / 6.0
# Squared kernel radius per dimension, and the factor that restores the
# (r^2 - |x|^2)^3 kernel peak to 1 where r^2 = 0.5.
SIMPLEX_1D_RADIUS_SQ = 1.0
SIMPLEX_RADIUS_SQ = 0.5
SIMPLEX_KERNEL_GAIN = 8.0

# --- Voronoi ---
# Starting distance for the minima search; larger than any reachable F2.
VORONOI_INITIAL_DISTANCE = 2.0
# 2D/3D distances are clamped to this value.
VORONOI_MAX_DISTANCE = 1.0
# Sharpness of the log-sum-exp smooth minimum used by SmoothWorley.
SMOOTH_WORLEY_SHARPNESS = 10.0
# 3D Voronoi jitter uses 5-bit fields of the hash.
VORONOI_3D_BITS = 5
