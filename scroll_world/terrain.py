# scroll_world/terrain.py

"""
================================================================================
TERRAIN GENERATOR
================================================================================
Emits vertical columns of ground tiles for any horizontal range.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): As produced by config.build_settings().
    - height_profile (HeightProfile): The ground elevation function.
    - logger: A configured Python logging object.
- Public Methods:
    - create_columns_in_range(min_x, max_x): One TerrainColumn per grid x in
      [snap(min_x), snap(max_x)), each holding `terrain_depth` tiles.
    - create_in_range(min_x, max_x): The same tiles, flattened.
- Side Effects: Debug logging only.
- Invariants: Overlapping calls produce geometrically identical columns
  (same x, same top y) as distinct instances. The generator keeps no
  state between calls besides the height profile.
================================================================================
"""

import logging

from . import colors
from . import config as DEFAULTS
from .entities import TerrainColumn, Tile
from .grid import grid_range, snap_down
from .height_profile import HeightProfile


class Terrain:
    """Ground columns built from the height profile and the tile grid."""

    def __init__(self, settings: dict, height_profile: HeightProfile, logger: logging.Logger):
        self.logger = logger
        self.height_profile = height_profile
        self.unit = settings['grid_unit']
        self.depth = settings['terrain_depth']
        self.ground_color = DEFAULTS.GROUND_COLOR
        self.logger.debug(f"Terrain ready (unit={self.unit}, depth={self.depth}).")

    def height_at(self, x: float) -> float:
        """Ground surface elevation at x."""
        return self.height_profile.height_at(x)

    def top_at(self, x: float) -> int:
        """Grid-aligned y of the top tile of the column at x."""
        return snap_down(self.height_at(x), self.unit)

    def create_column(self, x: int) -> TerrainColumn:
        top_y = self.top_at(x)
        tiles = [
            Tile(x, top_y + i * self.unit, self.unit, colors.approximate_color(self.ground_color))
            for i in range(self.depth)
        ]
        return TerrainColumn(x, top_y, tiles)

    def create_columns_in_range(self, min_x: float, max_x: float) -> list:
        columns = [self.create_column(x) for x in grid_range(min_x, max_x, self.unit)]
        self.logger.debug(f"Created {len(columns)} terrain columns for [{min_x}, {max_x}).")
        return columns

    def create_in_range(self, min_x: float, max_x: float) -> list:
        """Flat list of every tile in the range."""
        return [tile for column in self.create_columns_in_range(min_x, max_x) for tile in column]
