# scroll_world/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# The pygame-backed World lives in runtime.world and is imported explicitly,
# so the streaming core can use the clock without pulling in pygame.

from .clock import SimulationClock
from .day_night_cycle import DayNightCycle

__all__ = ["SimulationClock", "DayNightCycle"]
