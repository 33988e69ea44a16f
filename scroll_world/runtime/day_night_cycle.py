# scroll_world/runtime/day_night_cycle.py

"""
================================================================================
DAY/NIGHT CYCLE
================================================================================
This module provides a class to manage the day/night cycle, calculating the
sun's screen position and the opacity of the night overlay from the time on a
SimulationClock.

Data Contract:
---------------
- Inputs (on initialization):
    - clock (SimulationClock): An instance of the SimulationClock.
    - settings (dict): Provides the viewport size.
    - height_at (callable): Ground elevation function; the sun orbits a point
      on the ground in the middle of the viewport.
- Public Methods:
    - update(): Recalculates sun position and night opacity from the clock.
- Public Properties:
    - sun_center (tuple): Screen-space (x, y) of the sun.
    - night_opacity (float): Opacity of the night overlay in [0, MIDNIGHT_OPACITY].
- Side Effects: None.
- Invariants: The output is a deterministic function of the clock's time.
================================================================================
"""
import math
from typing import TYPE_CHECKING, Callable

import numpy as np

from .. import config as DEFAULTS

# Use a forward reference for the type hint to avoid circular imports.
if TYPE_CHECKING:
    from .clock import SimulationClock

def _lerp_float(val1: float, val2: float, t: float) -> float:
    """Linearly interpolates between two float values."""
    t = np.clip(t, 0.0, 1.0)
    return float(val1 * (1 - t) + val2 * t)

def _cubic_float(val1: float, val2: float, t: float) -> float:
    """Cubic ease-in between two float values."""
    t = np.clip(t, 0.0, 1.0)
    return _lerp_float(val1, val2, t * t * t)

class DayNightCycle:
    """
    Moves the sun around its orbit and darkens the screen towards midnight.
    """
    def __init__(self, clock: 'SimulationClock', settings: dict, height_at: Callable[[float], float]):
        self.clock = clock

        # --- 1. Load Configuration (Rule 1) ---
        screen_width = settings['screen_width']
        screen_height = settings['screen_height']
        self.day_opacity = DEFAULTS.DAY_OPACITY
        self.midnight_opacity = DEFAULTS.MIDNIGHT_OPACITY
        self.sun_size = DEFAULTS.SUN_SIZE
        self.halo_size = DEFAULTS.SUN_SIZE * DEFAULTS.SUN_HALO_FACTOR

        # --- 2. Orbit geometry ---
        # At noon the sun sits in the middle of the screen; it circles a point
        # on the ground below it.
        self.initial_sun_center = (screen_width / 2, screen_height / 2)
        self.orbit_center = (screen_width / 2, height_at(screen_width / 2))

        # --- 3. Public State Variables ---
        self.sun_center = self.initial_sun_center
        self.night_opacity = self.day_opacity

        self.update()

    def update(self):
        """
        Recalculates the sun's position (one full turn per day) and the night
        overlay: transparent at noon, darkest at midnight, back again by noon.
        """
        phase = self.clock.day_phase()

        # --- Sun ---
        angle = math.radians(360.0 * phase)
        dx = self.initial_sun_center[0] - self.orbit_center[0]
        dy = self.initial_sun_center[1] - self.orbit_center[1]
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.sun_center = (
            self.orbit_center[0] + dx * cos_a - dy * sin_a,
            self.orbit_center[1] + dx * sin_a + dy * cos_a,
        )

        # --- Night ---
        # 0 at noon, 1 at midnight.
        darkness = 1.0 - abs(2.0 * phase - 1.0)
        self.night_opacity = _cubic_float(self.day_opacity, self.midnight_opacity, darkness)
