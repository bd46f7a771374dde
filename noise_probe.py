# FOLDER: /

# noise_probe.py

import logging
import numpy as np

from procedural_noise.engine import NoiseEngine
from procedural_noise import registry
from procedural_noise.jobs import evaluate_positions
from procedural_noise.settings import Settings

PROBE_RESOLUTION = 9
PROBE_SETTINGS = Settings(seed=1234, frequency=4, octaves=3, lacunarity=2, persistence=0.5)


def build_probe_positions():
    """A small 3D grid spanning a little more than one tile, plus the origin."""
    coords = np.linspace(-0.6, 1.4, PROBE_RESOLUTION)
    gx, gy, gz = np.meshgrid(coords, coords * 0.5, coords, indexing='ij')
    grid = np.column_stack([gx.ravel(), gy.ravel(), gz.ravel()])
    return np.vstack([grid, np.zeros((1, 3))])


def run_probe_on_key(logger, key, job, positions):
    """Evaluates one registered noise twice and checks the result is sane."""
    first = evaluate_positions(positions, PROBE_SETTINGS, key, job=job)
    second = evaluate_positions(positions, PROBE_SETTINGS, key, job=job)

    deterministic = all(np.array_equal(a, b) for a, b in zip(first, second))
    finite = all(np.all(np.isfinite(component)) for component in first)
    shaped = first.shape == (positions.shape[0],)

    passed = deterministic and finite and shaped
    if not passed:
        logger.error(
            f"  - {key.describe()}: deterministic={deterministic}, finite={finite}, "
            f"shape={first.shape} -> FAIL"
        )
    else:
        logger.debug(f"  - {key.describe()}: range [{first.v.min():.3f}, {first.v.max():.3f}] -> PASS")
    return passed


def run_engine_smoke_test(logger, positions):
    """Runs one configuration end to end through the facade, domain transform included."""
    engine = NoiseEngine(config={
        'seed': PROBE_SETTINGS.seed,
        'category': 'voronoi',
        'dimensions': 3,
        'voronoi_distance': 'smooth_worley',
        'voronoi_function': 'cell_as_islands',
        'rotation': (15.0, 30.0, 45.0),
        'scale': (2.0, 1.0, 0.5),
    }, logger=logger)
    sample = engine.project_derivatives(engine.evaluate(positions))
    return all(np.all(np.isfinite(component)) for component in sample)


def run_full_probe():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("NoiseProbe")

    positions = build_probe_positions()
    logger.info(f"Probing {len(registry.NOISE_JOBS)} registered evaluators on {positions.shape[0]} positions...")

    failures = []
    for key, job in registry.NOISE_JOBS.items():
        if not run_probe_on_key(logger, key, job, positions):
            failures.append(key)

    logger.info("\n--- Engine Smoke Test ---")
    engine_passed = run_engine_smoke_test(logger, positions)
    if not engine_passed:
        logger.error("❌ FAILURE: The engine produced non-finite output.")

    logger.info("\n--- Full Probe Complete ---")
    if not failures and engine_passed:
        logger.info("✅ SUCCESS: Every evaluator is deterministic and finite.")
    else:
        logger.error(f"❌ FAILURE: {len(failures)} evaluator(s) failed the probe.")


if __name__ == '__main__':
    run_full_probe()
