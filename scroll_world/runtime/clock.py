# scroll_world/runtime/clock.py

"""
================================================================================
SIMULATION CLOCK
================================================================================
This module provides a self-contained, data-only class for tracking simulation
time. Every time-driven state in the world (fruit respawn deadlines, leaf
sway, the day/night cycle) reads this clock instead of keeping its own timer.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): Provides 'day_cycle_seconds' and 'initial_time_scale'.
- Public Methods:
    - update(real_delta_time): Advances the clock by one tick.
    - set_speed(new_scale): Changes the speed of time.
    - day_phase(): Position within the current day, in [0, 1).
    - get_time_string(): Returns a formatted string of the current time.
- Public Properties:
    - now (float): Total simulation seconds elapsed.
    - tick (int): Number of updates so far.
    - day (int), hour, minute (ints, derived from a 24h day).
- Side Effects: None.
- Invariants: The clock's state is deterministic based on the total elapsed
  real time and the time scale. It does not depend on the frequency of updates.
================================================================================
"""

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60


class SimulationClock:
    """Manages the passage of simulation time."""

    def __init__(self, settings: dict):
        # --- 1. Load Configuration ---
        self.day_cycle_seconds = settings['day_cycle_seconds']
        self.time_scale = settings['initial_time_scale']

        # --- 2. Initialize State Variables ---
        self._total_seconds_elapsed = 0.0
        self.tick = 0

        # --- 3. Public, Human-Readable Time Components ---
        self.day = 1
        self.hour = 0
        self.minute = 0

        self._recalculate_time()

    @property
    def now(self) -> float:
        return self._total_seconds_elapsed

    def update(self, real_delta_time: float) -> float:
        """
        Advances the clock by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.

        Returns:
            float: The simulation time that passed during this tick.
        """
        self.tick += 1
        if self.time_scale <= 0:
            return 0.0 # Time is paused, nothing elapses.

        game_delta_time = real_delta_time * self.time_scale
        self._total_seconds_elapsed += game_delta_time
        self._recalculate_time()
        return game_delta_time

    def day_phase(self) -> float:
        """Fraction of the current day that has passed; 0.0 is noon."""
        return (self._total_seconds_elapsed % self.day_cycle_seconds) / self.day_cycle_seconds

    def _recalculate_time(self):
        """
        Derives the readable day and time from the total elapsed seconds.
        Recomputed from the accumulator each time to avoid floating-point drift.
        """
        self.day = int(self._total_seconds_elapsed // self.day_cycle_seconds) + 1
        # Phase 0 is noon, so shift by half a day for the wall clock.
        minutes_into_day = ((self.day_phase() + 0.5) % 1.0) * HOURS_PER_DAY * MINUTES_PER_HOUR
        self.hour = int(minutes_into_day // MINUTES_PER_HOUR)
        self.minute = int(minutes_into_day % MINUTES_PER_HOUR)

    def set_speed(self, new_scale: float):
        """
        Sets the speed of simulation time.
        0 = paused, 1 = real-time, > 1 = fast-forward.
        """
        self.time_scale = max(0.0, new_scale)

    def get_time_string(self) -> str:
        """Returns a formatted string of the current day and time."""
        return f"Day {self.day} - {self.hour:02d}:{self.minute:02d}"
