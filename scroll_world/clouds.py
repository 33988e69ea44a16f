# scroll_world/clouds.py

"""
================================================================================
CLOUD & PRECIPITATION GENERATOR
================================================================================
Builds a cloud from one of a few fixed masks, drifts it rightward across a
screen-space band forever, and lets it shed raindrops on request.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): As produced by config.build_settings().
    - logger: A configured Python logging object.
    - rng (np.random.Generator, optional): Source of the cosmetic randomness.
      Clouds are not reproducible, so it defaults to an unseeded generator.
- Public Methods:
    - create_in_range(min_x, max_x): Instantiates the cloud tiles.
    - update(delta_time): Moves the cloud one tick and ages the raindrops.
    - pour_rain(delta_time): One Bernoulli trial per cloud tile, spawning
      raindrops under the successful ones.
- Side Effects: Debug logging only.
- Invariants: The cloud moves rigidly (all tiles share one origin) and wraps
  from the right bound back to the left bound without ever despawning.
  Raindrops remove themselves once faded and are never streamed.
================================================================================
"""

import logging

import numpy as np

from . import colors
from . import config as DEFAULTS
from .entities import CloudTile, Raindrop
from .grid import snap_down


class Cloud:
    """A single looping cloud and the rain it produces."""

    def __init__(self, settings: dict, logger: logging.Logger, rng: np.random.Generator = None,
                 shapes: tuple = DEFAULTS.CLOUD_SHAPES):
        self.logger = logger
        self.rng = rng if rng is not None else np.random.default_rng()
        self.shapes = shapes
        self.unit = settings['grid_unit']
        self.base_height = settings['cloud_base_height']
        self.step = settings['cloud_step_pixels']
        self.rain_probability = settings['rain_probability']
        self.raindrop_gravity = settings['raindrop_gravity']
        self.raindrop_fade_seconds = settings['raindrop_fade_seconds']

        self.tiles = []
        self.raindrops = []
        self.shape = None
        self.start_x = 0
        self.end_x = 0
        self.origin_x = 0

    @property
    def leftmost_x(self) -> float:
        return self.origin_x

    def create_in_range(self, min_x: float, max_x: float) -> list:
        """
        Picks a mask at random and lays it out at the left edge of a band that
        covers [min_x, max_x] padded by one mask width on each side.
        """
        self.shape = self.shapes[int(self.rng.integers(len(self.shapes)))]
        mask_width = len(self.shape[0]) * self.unit
        self.start_x = snap_down(min_x, self.unit) - mask_width
        self.end_x = snap_down(max_x, self.unit) + mask_width
        self.origin_x = self.start_x

        self.tiles = []
        for row, mask_row in enumerate(self.shape):
            for col, filled in enumerate(mask_row):
                if filled:
                    self.tiles.append(CloudTile(
                        self.origin_x + col * self.unit,
                        self.base_height + row * self.unit,
                        self.unit,
                        colors.approximate_mono_color(DEFAULTS.CLOUD_COLOR, rng=self.rng),
                        column=col,
                        row=row,
                    ))
        self.logger.info(
            f"Cloud created with a {len(self.shape[0])}x{len(self.shape)} mask "
            f"({len(self.tiles)} tiles), band [{self.start_x}, {self.end_x})."
        )
        return self.tiles

    def _place_tiles(self):
        for tile in self.tiles:
            tile.x = self.origin_x + tile.column * self.unit

    def update(self, delta_time: float):
        """Advances the cloud by one step and ages every raindrop."""
        if self.tiles:
            self.origin_x += self.step
            if self.origin_x >= self.end_x:
                self.origin_x = self.start_x
            self._place_tiles()
        self.raindrops = [drop for drop in self.raindrops if drop.update(delta_time)]

    def pour_rain(self, delta_time: float) -> list:
        """
        Spawns raindrops under cloud tiles. Returns the new drops so the host
        can hand them to its renderer; they are also aged by update().
        """
        size = self.unit / 3
        spawned = []
        for tile in self.tiles:
            if self.rng.random() < self.rain_probability:
                center_x, center_y = tile.center
                spawned.append(Raindrop(
                    center_x, center_y, size, DEFAULTS.RAIN_COLOR,
                    self.raindrop_gravity, self.raindrop_fade_seconds
                ))
        self.raindrops.extend(spawned)
        self.logger.debug(f"Poured {len(spawned)} raindrops (dt={delta_time:.3f}).")
        return spawned
