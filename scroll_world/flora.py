# scroll_world/flora.py

"""
================================================================================
FLORA GENERATOR
================================================================================
Plants trees on top of the terrain: per grid column a seeded trial decides
whether a trunk grows there, and per trunk a fixed rectangle of foliage cells
each resolve to a leaf, a fruit or nothing.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): As produced by config.build_settings().
    - terrain (Terrain): Supplies the grid-aligned ground top for trunks.
    - logger: A configured Python logging object.
- Public Methods:
    - create_in_range(min_x, max_x): {Trunk: [Leaf | Fruit, ...]} for every
      planted grid x in [snap(min_x), snap(max_x)).
    - resolve_cell(fx, fy, trunk_x): The content of one foliage cell.
- Side Effects: Debug logging only.
- Invariants:
    - Every random decision uses its own generator seeded from the
      coordinates it concerns (plus the world seed). Nothing is shared
      between decisions, so results never depend on scan order, on the
      range that was requested or on previous calls.
    - A foliage cell's content depends only on (fx, fy, seed).
    - A fruit never grows in its own trunk's column.
================================================================================
"""

import logging

import numpy as np

from . import colors
from . import config as DEFAULTS
from .entities import Fruit, Leaf, Trunk
from .grid import grid_range
from .terrain import Terrain

# Stream tags keep the entropy of unrelated decisions apart even when their
# coordinates coincide.
PLANTING_STREAM = 1
TRUNK_HEIGHT_STREAM = 2
FOLIAGE_STREAM = 3

CELL_EMPTY = "empty"
CELL_LEAF = "leaf"
CELL_FRUIT = "fruit"

_UINT64_MASK = (1 << 64) - 1

# Cosmetic draws (colors, sway delays) are not reproducible.
_cosmetic_rng = np.random.default_rng()


def seeded_rng(stream: int, *coords: int) -> np.random.Generator:
    """
    A fresh generator determined only by the stream tag and the given integers.
    Negative coordinates are folded into uint64 since SeedSequence rejects them.
    """
    entropy = [stream] + [int(c) & _UINT64_MASK for c in coords]
    return np.random.default_rng(entropy)


class Flora:
    """Seeded, order-independent tree placement."""

    def __init__(self, settings: dict, terrain: Terrain, logger: logging.Logger):
        self.logger = logger
        self.terrain = terrain
        self.seed = settings['seed']
        self.unit = settings['grid_unit']

        self.tree_probability = settings['tree_planting_probability']
        self.leaf_probability = settings['leaf_placement_probability']
        self.fruit_probability = settings['fruit_placement_probability']
        self.foliage_width = settings['foliage_width']
        self.foliage_height = settings['foliage_height']
        self.min_tree_height = settings['min_tree_height']
        self.max_tree_height = settings['max_tree_height']
        self.fruit_energy = settings['fruit_energy']
        self.fruit_respawn_seconds = settings['fruit_respawn_seconds']

    @property
    def reach(self) -> int:
        """How far foliage can extend horizontally from its trunk, in pixels."""
        left = self.foliage_width // 2
        right = self.foliage_width - left - 1
        return max(left, right) * self.unit

    def should_plant_tree(self, x: int) -> bool:
        return seeded_rng(PLANTING_STREAM, x, self.seed).random() < self.tree_probability

    def trunk_height_blocks(self, x: int) -> int:
        # Seeded from x alone so tuning the planting probability never changes heights.
        rng = seeded_rng(TRUNK_HEIGHT_STREAM, x)
        return int(rng.integers(self.min_tree_height, self.max_tree_height, endpoint=True))

    def resolve_cell(self, fx: int, fy: int, trunk_x: int) -> str:
        """Leaf first; only a non-leaf cell outside the trunk column may hold a fruit."""
        rng = seeded_rng(FOLIAGE_STREAM, fx, fy, self.seed)
        if rng.random() < self.leaf_probability:
            return CELL_LEAF
        if fx != trunk_x and rng.random() < self.fruit_probability:
            return CELL_FRUIT
        return CELL_EMPTY

    def create_trunk(self, x: int) -> Trunk:
        return Trunk(
            x, self.terrain.top_at(x), self.trunk_height_blocks(x), self.unit,
            colors.approximate_color(DEFAULTS.TRUNK_COLOR, DEFAULTS.TRUNK_COLOR_DELTA)
        )

    def _create_leaf(self, fx: int, fy: int) -> Leaf:
        return Leaf(
            fx, fy, self.unit,
            colors.approximate_color(DEFAULTS.LEAF_COLOR),
            sway_delay=float(_cosmetic_rng.uniform(0, DEFAULTS.LEAF_SWAY_MAX_DELAY_SECONDS)),
            sway_period=DEFAULTS.LEAF_SWAY_PERIOD_SECONDS,
            min_angle=DEFAULTS.LEAF_SWAY_MIN_ANGLE,
            max_angle=DEFAULTS.LEAF_SWAY_MAX_ANGLE,
            growth=DEFAULTS.LEAF_SWAY_GROWTH_PIXELS,
        )

    def _create_fruit(self, fx: int, fy: int) -> Fruit:
        return Fruit(fx, fy, self.unit, DEFAULTS.FRUIT_COLOR, self.fruit_energy, self.fruit_respawn_seconds)

    def create_foliage(self, trunk: Trunk) -> list:
        """Leaves and fruits of the foliage rectangle centred above the trunk top."""
        foliage = []
        start_x = trunk.x - (self.foliage_width // 2) * self.unit
        start_y = trunk.top_y - (self.foliage_height // 2) * self.unit
        for row in range(self.foliage_height):
            fy = start_y + row * self.unit
            for col in range(self.foliage_width):
                fx = start_x + col * self.unit
                content = self.resolve_cell(fx, fy, trunk.x)
                if content == CELL_LEAF:
                    foliage.append(self._create_leaf(fx, fy))
                elif content == CELL_FRUIT:
                    foliage.append(self._create_fruit(fx, fy))
        return foliage

    def create_in_range(self, min_x: float, max_x: float) -> dict:
        trees = {}
        for x in grid_range(min_x, max_x, self.unit):
            if self.should_plant_tree(x):
                trunk = self.create_trunk(x)
                trees[trunk] = self.create_foliage(trunk)
        self.logger.debug(f"Planted {len(trees)} trees in [{min_x}, {max_x}).")
        return trees
