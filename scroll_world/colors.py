# scroll_world/colors.py

"""
================================================================================
COLOR VARIATION UTILITIES
================================================================================
Per-instance color jitter around a base color. Purely perceptual: no
gameplay logic may depend on these values, so they are drawn from an
unseeded generator unless one is supplied.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS

_rng = np.random.default_rng()


def _channel_in_range(low: int, high: int, rng: np.random.Generator) -> int:
    """A random channel value in [low, high], clipped to [0, 255]."""
    return int(np.clip(rng.integers(low, high, endpoint=True), 0, 255))


def approximate_color(base_color: tuple, color_delta: int = DEFAULTS.DEFAULT_COLOR_DELTA,
                      rng: np.random.Generator = None) -> tuple:
    """Returns a color within color_delta of base_color on every channel."""
    rng = rng if rng is not None else _rng
    return tuple(
        _channel_in_range(channel - color_delta, channel + color_delta, rng)
        for channel in base_color[:3]
    )


def approximate_mono_color(base_color: tuple, color_delta: int = DEFAULTS.DEFAULT_COLOR_DELTA,
                           rng: np.random.Generator = None) -> tuple:
    """Like approximate_color, but the same offset is applied to all channels (greys)."""
    rng = rng if rng is not None else _rng
    red = base_color[0]
    channel = _channel_in_range(red - color_delta, red + color_delta, rng)
    return (channel, channel, channel)
