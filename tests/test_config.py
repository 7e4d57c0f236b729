# File: tests/test_config.py
"""
Test BonsaiConfig validation and JSON loading/saving.
"""

import json
import math

import pytest

from bonsai.config import MAX_SEED, BonsaiConfig, load_config, save_config


def test_defaults_are_valid():
    config = BonsaiConfig()
    assert config.bounds == (50, 50)
    assert config.strategy == 'recursive'
    assert config.reserved_fraction == 0.0
    assert BonsaiConfig(container=True).reserved_fraction == pytest.approx(0.2)


@pytest.mark.parametrize("kwargs, message", [
    ({'width': 0}, "Bounds must be positive"),
    ({'height': -5}, "Bounds must be positive"),
    ({'seed': -1}, "64-bit"),
    ({'seed': MAX_SEED}, "64-bit"),
    ({'strategy': 'spiral'}, "Unknown strategy"),
    ({'leaf_style': 'cloud'}, "Unknown leaf style"),
    ({'tiers': -1}, "tiers must be >= 0"),
    ({'branch_cooldown': 0}, "branch_cooldown"),
    ({'min_dist': 5.0, 'max_dist': 2.0}, "min_dist"),
    ({'bow_angles': (0.2, math.pi / 2)}, "Bow angles"),
    ({'bow_angles': ()}, "at least one"),
    ({'container_fraction': 1.0}, "container_fraction"),
    ({'samples_per_tick': 0}, "must be positive"),
])
def test_invalid_values_rejected(kwargs, message):
    with pytest.raises(ValueError, match=message):
        BonsaiConfig(**kwargs)


def test_resolve_seed():
    assert BonsaiConfig(seed=1234).resolve_seed() == 1234

    fresh = BonsaiConfig().resolve_seed()
    assert isinstance(fresh, int)
    assert 0 <= fresh < MAX_SEED


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(str(tmp_path / 'absent.json'))
    assert config == BonsaiConfig()


def test_overrides_and_file_values(tmp_path):
    """
    File values replace defaults; non-None overrides replace file values.
    """
    path = tmp_path / 'bonsai.json'
    path.write_text(json.dumps({'width': 80, 'tiers': 2, 'bow_angles': [0.1, -0.1]}))

    config = load_config(str(path), width=None, seed=9, strategy='curved')
    assert config.width == 80
    assert config.tiers == 2
    assert config.seed == 9
    assert config.strategy == 'curved'
    assert config.bow_angles == (0.1, -0.1)


def test_unknown_keys_rejected(tmp_path):
    path = tmp_path / 'bonsai.json'
    path.write_text(json.dumps({'width': 10, 'colour': 'green'}))
    with pytest.raises(ValueError, match="Unknown config keys"):
        load_config(str(path))


def test_save_then_load(tmp_path):
    config = BonsaiConfig(width=30, height=40, seed=77, strategy='curved',
                          leaf_style='band', container=True)
    path = tmp_path / 'nested' / 'bonsai.json'
    save_config(config, str(path))

    assert path.exists()
    assert load_config(str(path)) == config
