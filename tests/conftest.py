import logging
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from scroll_world.config import build_settings


@pytest.fixture
def logger():
    return logging.getLogger("scroll_world.tests")


@pytest.fixture
def settings():
    """The reference world: seed 42, 30px grid, ground baseline at 400."""
    return build_settings({'seed': 42, 'grid_unit': 30, 'baseline': 400})


@pytest.fixture
def forest_settings():
    """Dense trees so every range of a few hundred pixels has some."""
    return build_settings({
        'seed': 42, 'grid_unit': 30, 'baseline': 400,
        'tree_planting_probability': 0.5,
        'screen_width': 600, 'screen_height': 600,
    })


@pytest.fixture
def orchard_settings():
    """Dense trees whose foliage cells are all fruit (except trunk columns)."""
    return build_settings({
        'seed': 7, 'grid_unit': 30, 'baseline': 400,
        'tree_planting_probability': 0.5,
        'leaf_placement_probability': 0.0,
        'fruit_placement_probability': 1.0,
        'fruit_respawn_seconds': 5.0,
        'screen_width': 600, 'screen_height': 600,
    })
