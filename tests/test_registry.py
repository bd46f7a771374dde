"""Tests for the dispatch registry and noise selection keys."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from procedural_noise import registry
from procedural_noise.noise_config import (
    NoiseCategory,
    NoiseConfig,
    NoiseKey,
    VoronoiDistance,
    VoronoiFunction,
    parse_enum,
    parse_flag,
)

UNSUPPORTED = [
    NoiseKey(NoiseCategory.VORONOI, 3, turbulence=True),
    NoiseKey(NoiseCategory.VORONOI, 2, smoothstep=True),
    NoiseKey(NoiseCategory.SIMPLEX, 2, tiling=True),
    NoiseKey(NoiseCategory.SIMPLEX_VALUE, 1, tiling=True),
    NoiseKey(NoiseCategory.PERLIN, 0),
    NoiseKey(NoiseCategory.PERLIN, 4),
    NoiseKey(NoiseCategory.VALUE, 2, smoothstep=True),
]


def test_registry_covers_every_supported_combination():
    assert len(registry.NOISE_JOBS) == 126
    assert registry.try_get(NoiseKey(NoiseCategory.PERLIN, 3)) is not None
    assert registry.try_get(NoiseKey(NoiseCategory.SIMPLEX, 1, turbulence=True, smoothstep=True)) is not None
    assert registry.try_get(NoiseKey(
        NoiseCategory.VORONOI, 2, True, False, VoronoiDistance.SMOOTH_WORLEY, VoronoiFunction.CELL_AS_ISLANDS
    )) is not None


def test_every_registered_key_resolves():
    for key, job in registry.NOISE_JOBS.items():
        assert registry.get(key) is job
        assert registry.try_get(key) is job


@pytest.mark.parametrize("key", UNSUPPORTED, ids=lambda key: key.describe())
def test_unsupported_keys_are_rejected(key):
    assert registry.try_get(key) is None
    with pytest.raises(registry.UnsupportedNoiseConfiguration) as excinfo:
        registry.get(key)
    assert excinfo.value.key == key
    assert key.describe() in str(excinfo.value)


def test_unsupported_configuration_is_a_key_error():
    with pytest.raises(KeyError):
        registry.get(UNSUPPORTED[0])


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        registry.NOISE_JOBS[NoiseKey(NoiseCategory.PERLIN, 4)] = None


def test_concurrent_lookups_agree():
    keys = list(registry.NOISE_JOBS) + UNSUPPORTED
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(registry.try_get, keys * 4))
    assert results == [registry.try_get(key) for key in keys * 4]


def test_keys_compare_structurally():
    a = NoiseKey(NoiseCategory.VORONOI, 2, voronoi_function=VoronoiFunction.F2)
    b = NoiseKey(NoiseCategory.VORONOI, 2, voronoi_function=VoronoiFunction.F2)
    assert a == b and hash(a) == hash(b)
    assert a != NoiseKey(NoiseCategory.VORONOI, 2)


def test_non_voronoi_keys_ignore_voronoi_knobs():
    config = NoiseConfig.from_dict({
        'category': 'perlin', 'dimensions': 2,
        'voronoi_distance': 'chebyshev', 'voronoi_function': 'f2',
    })
    assert config.key() == NoiseKey(NoiseCategory.PERLIN, 2)


def test_turbulence_request_reaches_the_registry():
    config = NoiseConfig.from_dict({'category': 'voronoi', 'turbulence': True})
    assert config.key().turbulence
    assert registry.try_get(config.key()) is None


def test_parse_enum_accepts_values_names_and_members():
    assert parse_enum(NoiseCategory, "simplex_value") is NoiseCategory.SIMPLEX_VALUE
    assert parse_enum(NoiseCategory, "SIMPLEX_VALUE") is NoiseCategory.SIMPLEX_VALUE
    assert parse_enum(VoronoiFunction, VoronoiFunction.F2) is VoronoiFunction.F2
    with pytest.raises(ValueError, match="Unknown NoiseCategory"):
        parse_enum(NoiseCategory, "gabor")


@pytest.mark.parametrize("text, expected", [("false", False), ("False", False), ("0", False), ("off", False),
                                            ("true", True), (" Yes ", True), (1, True), (False, False)])
def test_parse_flag_reads_words_and_numbers(text, expected):
    assert parse_flag('tiling', text) is expected


def test_string_flags_in_config_are_parsed():
    config = NoiseConfig.from_dict({'category': 'value', 'tiling': 'false', 'turbulence': 'true', 'smoothstep': 'no'})
    assert config.key() == NoiseKey(NoiseCategory.VALUE, 3, tiling=False, turbulence=True)


def test_unrecognized_flag_is_rejected():
    with pytest.raises(ValueError, match="smoothstep"):
        NoiseConfig.from_dict({'smoothstep': 'maybe'})
