import pytest

from scroll_world import config as DEFAULTS
from scroll_world.config import build_settings


def test_defaults_fill_missing_keys():
    settings = build_settings({})
    assert settings['seed'] == DEFAULTS.DEFAULT_SEED
    assert settings['grid_unit'] == DEFAULTS.GRID_UNIT
    assert settings['baseline'] == pytest.approx(DEFAULTS.DEFAULT_SCREEN_HEIGHT * 2 / 3)
    assert settings['retention_radius'] == DEFAULTS.DEFAULT_SCREEN_WIDTH / 2 + DEFAULTS.RETENTION_OFFSET
    assert settings['noise_amplitude'] == DEFAULTS.NOISE_AMPLITUDE_UNITS * DEFAULTS.GRID_UNIT


def test_none_config_is_accepted():
    assert build_settings(None)['seed'] == DEFAULTS.DEFAULT_SEED


def test_overrides_win(settings):
    assert settings['seed'] == 42
    assert settings['baseline'] == 400


def test_fruit_respawn_follows_day_cycle():
    settings = build_settings({'day_cycle_seconds': 12.0})
    assert settings['fruit_respawn_seconds'] == 12.0
    settings = build_settings({'day_cycle_seconds': 12.0, 'fruit_respawn_seconds': 3.0})
    assert settings['fruit_respawn_seconds'] == 3.0


def test_float_grid_unit_is_coerced():
    settings = build_settings({'grid_unit': 30.0})
    assert settings['grid_unit'] == 30
    assert isinstance(settings['grid_unit'], int)


@pytest.mark.parametrize("override", [
    {'grid_unit': 0},
    {'grid_unit': 12.5},
    {'terrain_depth': 0},
    {'baseline': 0.5},
    {'tree_planting_probability': 1.5},
    {'rain_probability': -0.1},
    {'min_tree_height': 8, 'max_tree_height': 4},
    {'foliage_width': 0},
    {'fruit_respawn_seconds': 0},
    {'raindrop_fade_seconds': 0},
    {'screen_width': 0},
])
def test_invalid_settings_raise(override):
    with pytest.raises(ValueError):
        build_settings(override)
