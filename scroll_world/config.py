# scroll_world/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the world
streamer and its generators. These values are used if they are not explicitly
provided by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary to build_settings() and hand the
result to the WorldStreamer / generators.
================================================================================
"""

# --- Randomness ---
DEFAULT_SEED = 1337

# --- Grid ---
# Edge length of one tile in pixels. Every placed object sits on a multiple of it.
GRID_UNIT = 30

# --- Viewport ---
DEFAULT_SCREEN_WIDTH = 1280
DEFAULT_SCREEN_HEIGHT = 720
# The ground baseline sits 2/3 of the way down the viewport.
BASELINE_SCREEN_FACTOR = 2 / 3

# --- Terrain ---
TERRAIN_DEPTH = 20 # Tiles per column, counted downward from the surface
# Noise amplitude expressed in grid units.
NOISE_AMPLITUDE_UNITS = 7
GROUND_COLOR = (212, 123, 74)

# --- Flora ---
TREE_PLANTING_PROBABILITY = 0.075
LEAF_PLACEMENT_PROBABILITY = 0.65
FRUIT_PLACEMENT_PROBABILITY = 0.05
FOLIAGE_WIDTH = 8 # Cells
FOLIAGE_HEIGHT = 8 # Cells
MIN_TREE_HEIGHT = 4 # Blocks, inclusive
MAX_TREE_HEIGHT = 10 # Blocks, inclusive
TRUNK_COLOR = (100, 50, 20)
TRUNK_COLOR_DELTA = 15
LEAF_COLOR = (50, 200, 30)
FRUIT_COLOR = (67, 45, 159)
FRUIT_ENERGY = 10.0

# Leaf sway animation.
LEAF_SWAY_MIN_ANGLE = -10.0
LEAF_SWAY_MAX_ANGLE = 10.0
LEAF_SWAY_PERIOD_SECONDS = 2.0
LEAF_SWAY_GROWTH_PIXELS = 3.0
LEAF_SWAY_MAX_DELAY_SECONDS = 2.0

# --- Time ---
DAY_CYCLE_SECONDS = 30.0
INITIAL_TIME_SCALE = 1.0

# --- Streaming ---
# Extra distance beyond half the viewport width that stays materialized.
RETENTION_OFFSET = 150

# --- Clouds & Rain ---
CLOUD_BASE_HEIGHT = 100
CLOUD_STEP_PIXELS = 3 # Horizontal advance per tick
CLOUD_COLOR = (255, 255, 255)
RAIN_PROBABILITY = 0.3
RAINDROP_GRAVITY = 300.0 # px/s^2
RAINDROP_FADE_SECONDS = 2.0
RAIN_COLOR = (4, 137, 241)

# The cloud shapes a cloud is picked from. 1 = cloud tile, 0 = empty.
CLOUD_SHAPES = (
    (
        (0, 1, 1, 0, 0, 0, 1, 1, 1, 1, 0),
        (1, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1),
        (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
        (0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0),
    ),
    (
        (0, 0, 0, 1, 1, 1, 0, 0),
        (0, 1, 1, 1, 1, 1, 1, 0),
        (1, 1, 1, 1, 1, 1, 1, 1),
    ),
)

# --- Color Variation ---
DEFAULT_COLOR_DELTA = 10

# --- Day / Night ---
SUN_SIZE = 90
SUN_HALO_FACTOR = 2
SUN_COLOR = (255, 255, 0)
SUN_HALO_COLOR = (255, 255, 0, 20)
SKY_COLOR = (128, 198, 229)
DAY_OPACITY = 0.0
MIDNIGHT_OPACITY = 0.5

# --- Render Layers (lower is drawn first) ---
LAYER_BY_KIND = {
    "cloud": -125,
    "raindrop": -110,
    "leaf": -50,
    "ground": 0,
    "trunk": 0,
    "fruit": 10,
}


def build_settings(user_config: dict) -> dict:
    """
    Consolidates user overrides over the internal defaults and checks the
    construction-time invariants.

    Args:
        user_config (dict): Lower-case keys overriding the defaults above.

    Returns:
        dict: The complete settings dictionary used by every component.

    Raises:
        ValueError: If a setting violates an invariant the generators rely on.
    """
    user_config = user_config or {}
    settings = {
        'seed': user_config.get('seed', DEFAULT_SEED),
        'grid_unit': user_config.get('grid_unit', GRID_UNIT),
        'screen_width': user_config.get('screen_width', DEFAULT_SCREEN_WIDTH),
        'screen_height': user_config.get('screen_height', DEFAULT_SCREEN_HEIGHT),

        'terrain_depth': user_config.get('terrain_depth', TERRAIN_DEPTH),
        'noise_amplitude_units': user_config.get('noise_amplitude_units', NOISE_AMPLITUDE_UNITS),

        'tree_planting_probability': user_config.get('tree_planting_probability', TREE_PLANTING_PROBABILITY),
        'leaf_placement_probability': user_config.get('leaf_placement_probability', LEAF_PLACEMENT_PROBABILITY),
        'fruit_placement_probability': user_config.get('fruit_placement_probability', FRUIT_PLACEMENT_PROBABILITY),
        'foliage_width': user_config.get('foliage_width', FOLIAGE_WIDTH),
        'foliage_height': user_config.get('foliage_height', FOLIAGE_HEIGHT),
        'min_tree_height': user_config.get('min_tree_height', MIN_TREE_HEIGHT),
        'max_tree_height': user_config.get('max_tree_height', MAX_TREE_HEIGHT),
        'fruit_energy': user_config.get('fruit_energy', FRUIT_ENERGY),

        'day_cycle_seconds': user_config.get('day_cycle_seconds', DAY_CYCLE_SECONDS),
        'initial_time_scale': user_config.get('initial_time_scale', INITIAL_TIME_SCALE),

        'retention_offset': user_config.get('retention_offset', RETENTION_OFFSET),

        'cloud_base_height': user_config.get('cloud_base_height', CLOUD_BASE_HEIGHT),
        'cloud_step_pixels': user_config.get('cloud_step_pixels', CLOUD_STEP_PIXELS),
        'rain_probability': user_config.get('rain_probability', RAIN_PROBABILITY),
        'raindrop_gravity': user_config.get('raindrop_gravity', RAINDROP_GRAVITY),
        'raindrop_fade_seconds': user_config.get('raindrop_fade_seconds', RAINDROP_FADE_SECONDS),
    }

    # --- Derived values ---
    # The baseline doubles as the noise field's reference wavelength.
    settings['baseline'] = user_config.get(
        'baseline', settings['screen_height'] * BASELINE_SCREEN_FACTOR
    )
    # A consumed fruit grows back after one full day unless told otherwise.
    settings['fruit_respawn_seconds'] = user_config.get(
        'fruit_respawn_seconds', settings['day_cycle_seconds']
    )
    settings['noise_amplitude'] = settings['noise_amplitude_units'] * settings['grid_unit']
    settings['retention_radius'] = user_config.get(
        'retention_radius', settings['screen_width'] / 2 + settings['retention_offset']
    )

    _validate(settings)
    # JSON configs may carry 30.0; snapping arithmetic wants a real int.
    settings['grid_unit'] = int(settings['grid_unit'])
    return settings


def _validate(settings: dict):
    """Fails fast on settings the generators cannot work with."""
    if settings['grid_unit'] <= 0 or int(settings['grid_unit']) != settings['grid_unit']:
        raise ValueError(f"grid_unit must be a positive integer, got {settings['grid_unit']!r}")
    if settings['terrain_depth'] <= 0:
        raise ValueError(f"terrain_depth must be positive, got {settings['terrain_depth']!r}")
    if settings['screen_width'] <= 0 or settings['screen_height'] <= 0:
        raise ValueError("screen dimensions must be positive")
    if settings['baseline'] < 1:
        raise ValueError(f"baseline must be at least 1, got {settings['baseline']!r}")

    for key in ('tree_planting_probability', 'leaf_placement_probability',
                'fruit_placement_probability', 'rain_probability'):
        if not 0.0 <= settings[key] <= 1.0:
            raise ValueError(f"{key} must lie in [0, 1], got {settings[key]!r}")

    if settings['min_tree_height'] <= 0 or settings['min_tree_height'] > settings['max_tree_height']:
        raise ValueError(
            f"tree heights must satisfy 0 < min <= max, got "
            f"{settings['min_tree_height']}..{settings['max_tree_height']}"
        )
    if settings['foliage_width'] <= 0 or settings['foliage_height'] <= 0:
        raise ValueError("foliage dimensions must be positive")
    if settings['fruit_respawn_seconds'] <= 0 or settings['day_cycle_seconds'] <= 0:
        raise ValueError("fruit_respawn_seconds and day_cycle_seconds must be positive")
    if settings['raindrop_fade_seconds'] <= 0:
        raise ValueError("raindrop_fade_seconds must be positive")
    if settings['retention_radius'] <= 0:
        raise ValueError("retention_radius must be positive")
