# scroll_world/streaming.py

"""
================================================================================
WORLD STREAMING CONTROLLER
================================================================================
This module contains the WorldStreamer, which keeps the world materialized
around a moving viewport. Each tick it evicts objects that left the
retention window, asks the generators for the part of the window that has not
been materialized yet, and activates the candidates that do not duplicate an
active object.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): As produced by config.build_settings().
    - logger: A configured Python logging object for runtime messages.
    - clock (SimulationClock, optional): The tick clock; one is created if None.
    - on_fruit_consumed (callable, optional): Called with the energy amount of
      each consumption, in addition to the FruitConsumed event.
- Public Methods:
    - tick(viewport_x, delta_time): One simulation step. Returns the events
      raised since the previous tick (e.g. FruitConsumed).
    - materialize(min_x, max_x): Generates and activates everything anchored
      in a range, discarding duplicates.
    - consume_fruit(fruit): Reports avatar contact with a fruit.
    - height_at(x), create_columns_in_range(...), create_flora_in_range(...):
      Pull-based generation entry points for hosts.
    - add_enter_view_hook(fn) / add_leave_view_hook(fn): Lifecycle hooks.
- Side Effects: Invokes the lifecycle hooks; logs via the provided logger.
- Invariants:
    - The active set holds at most one object per (kind, x, y).
    - Eviction and creation within a tick use the same viewport position.
    - An object is active exactly while |anchor x - viewport x| <= retention_radius.
    - Evicted objects are forgotten entirely, including fruit respawn deadlines.
================================================================================
"""

import logging
from typing import Callable

from .entities import KIND_FRUIT, Fruit
from .flora import Flora
from .grid import snap_down, snap_up
from .height_profile import HeightProfile
from .runtime.clock import SimulationClock
from .terrain import Terrain


class FruitConsumed:
    """Event: the avatar ate a fruit and should gain `amount` energy."""

    def __init__(self, amount: float, position: tuple):
        self.amount = amount
        self.position = position

    def __eq__(self, other):
        return (isinstance(other, FruitConsumed) and
                self.amount == other.amount and self.position == other.position)

    def __repr__(self):
        return f"FruitConsumed(amount={self.amount}, position={self.position})"


class WorldStreamer:
    """
    Owns the seed, the generators and the set of active objects, and is the
    only writer of that set.
    """
    def __init__(self, settings: dict, logger: logging.Logger, clock: SimulationClock = None,
                 on_fruit_consumed: Callable[[float], None] = None):
        self.logger = logger
        self.settings = settings
        self.logger.info("WorldStreamer initializing...")

        self.seed = settings['seed']
        self.unit = settings['grid_unit']
        self.retention_radius = settings['retention_radius']

        # --- Generators (composition) ---
        self.height_profile = HeightProfile.from_settings(settings)
        self.terrain = Terrain(settings, self.height_profile, logger)
        self.flora = Flora(settings, self.terrain, logger)

        self.clock = clock if clock is not None else SimulationClock(settings)
        self.on_fruit_consumed = on_fruit_consumed

        # --- Streaming state ---
        self._active = {}     # (kind, x, y) -> WorldObject
        self._span = None     # Materialized [lo, hi), grid aligned
        self._events = []
        self._enter_hooks = []
        self._leave_hooks = []
        self.viewport_x = None

        self.logger.info(
            f"WorldStreamer initialized with seed: {self.seed} "
            f"(unit={self.unit}, retention radius={self.retention_radius})"
        )

    # --- Pull-based generation entry points ---
    def height_at(self, x: float) -> float:
        return self.height_profile.height_at(x)

    def create_columns_in_range(self, min_x: float, max_x: float) -> list:
        return self.terrain.create_columns_in_range(min_x, max_x)

    def create_flora_in_range(self, min_x: float, max_x: float) -> dict:
        return self.flora.create_in_range(min_x, max_x)

    # --- Lifecycle hooks ---
    def add_enter_view_hook(self, hook: Callable):
        """hook(obj) runs whenever an object becomes active."""
        self._enter_hooks.append(hook)

    def add_leave_view_hook(self, hook: Callable):
        """hook(obj) runs whenever an active object is evicted."""
        self._leave_hooks.append(hook)

    # --- Active set ---
    @property
    def active_objects(self) -> list:
        return list(self._active.values())

    @property
    def materialized_span(self):
        return self._span

    def object_at(self, kind: str, position: tuple):
        return self._active.get((kind, position[0], position[1]))

    def is_active(self, obj) -> bool:
        return self._active.get(obj.key) is obj

    def activate(self, obj) -> bool:
        """Activates obj unless an active object already holds its place."""
        if obj.key in self._active:
            return False
        self._active[obj.key] = obj
        for hook in self._enter_hooks:
            hook(obj)
        return True

    def deactivate(self, obj) -> bool:
        if not self.is_active(obj):
            return False
        del self._active[obj.key]
        for hook in self._leave_hooks:
            hook(obj)
        return True

    # --- Streaming ---
    def retention_window(self, viewport_x: float) -> tuple:
        """
        Half-open, grid-aligned [lo, hi) holding exactly the grid x within
        retention_radius of the viewport (both ends inclusive).
        """
        lo = snap_up(viewport_x - self.retention_radius, self.unit)
        hi = snap_down(viewport_x + self.retention_radius, self.unit) + self.unit
        # Agree with is_retained() at the edges under float rounding.
        if abs(lo - viewport_x) > self.retention_radius:
            lo += self.unit
        if abs(hi - self.unit - viewport_x) > self.retention_radius:
            hi -= self.unit
        return (lo, hi)

    def is_retained(self, obj, viewport_x: float) -> bool:
        return abs(obj.x - viewport_x) <= self.retention_radius

    def materialize(self, min_x: float, max_x: float) -> list:
        """
        Generates terrain and flora anchored in [snap(min_x), snap(max_x)) and
        activates every candidate that is not a duplicate.

        Foliage can hang over the range boundary from a trunk outside it, so
        flora is requested with the foliage reach as padding and filtered back
        down to the range.

        Returns:
            list: The objects that were actually activated.
        """
        lo = snap_down(min_x, self.unit)
        hi = snap_down(max_x, self.unit)
        if lo >= hi:
            return []

        candidates = self.terrain.create_in_range(lo, hi)
        reach = self.flora.reach
        for trunk, foliage in self.flora.create_in_range(lo - reach, hi + reach).items():
            candidates.append(trunk)
            candidates.extend(foliage)

        activated = []
        duplicates = 0
        for obj in candidates:
            if not lo <= obj.x < hi:
                continue
            if self.activate(obj):
                activated.append(obj)
            else:
                duplicates += 1

        self.logger.debug(
            f"Materialized [{lo}, {hi}): {len(activated)} activated, "
            f"{duplicates} duplicates discarded."
        )
        return activated

    def evict_beyond(self, viewport_x: float) -> list:
        """Deactivates every object anchored farther than retention_radius from viewport_x."""
        evicted = [obj for obj in self._active.values() if not self.is_retained(obj, viewport_x)]
        for obj in evicted:
            self.deactivate(obj)
        if evicted:
            self.logger.debug(f"Evicted {len(evicted)} objects beyond {self.retention_radius} of x={viewport_x}.")
        return evicted

    def _uncovered(self, lo: int, hi: int) -> list:
        """The parts of [lo, hi) not covered by the materialized span."""
        if self._span is None:
            return [(lo, hi)]
        span_lo, span_hi = max(self._span[0], lo), min(self._span[1], hi)
        if span_lo >= span_hi:
            return [(lo, hi)]
        gaps = []
        if lo < span_lo:
            gaps.append((lo, span_lo))
        if span_hi < hi:
            gaps.append((span_hi, hi))
        return gaps

    def tick(self, viewport_x: float, delta_time: float) -> list:
        """
        One simulation step around viewport_x.

        Returns:
            list: Events raised since the previous tick, oldest first.
        """
        self.clock.update(delta_time)
        self.viewport_x = viewport_x

        # Eviction and creation share this tick's window.
        self.evict_beyond(viewport_x)
        lo, hi = self.retention_window(viewport_x)
        for gap_lo, gap_hi in self._uncovered(lo, hi):
            self.materialize(gap_lo, gap_hi)
        self._span = (lo, hi)

        self._refresh_fruit()
        return self.drain_events()

    def _refresh_fruit(self):
        now = self.clock.now
        for obj in self._active.values():
            if obj.kind == KIND_FRUIT and obj.refresh(now):
                self.logger.debug(f"Fruit at {obj.position} grew back.")

    # --- Fruit & events ---
    def consume_fruit(self, fruit: Fruit):
        """
        Handles avatar contact with a fruit. Only an active, present fruit
        grants energy; anything else (already eaten, evicted) is ignored.

        Returns:
            The energy granted, or None.
        """
        if not self.is_active(fruit):
            return None
        amount = fruit.consume(self.clock.now)
        if amount is None:
            return None
        self._events.append(FruitConsumed(amount, fruit.position))
        if self.on_fruit_consumed is not None:
            self.on_fruit_consumed(amount)
        return amount

    def fruits_touching(self, x: float, y: float, width: float, height: float) -> list:
        """Active, present fruits overlapping the given rectangle."""
        return [
            obj for obj in self._active.values()
            if obj.kind == KIND_FRUIT and obj.is_present and obj.overlaps(x, y, width, height)
        ]

    def drain_events(self) -> list:
        events, self._events = self._events, []
        return events
