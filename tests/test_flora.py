import pytest

from scroll_world.config import build_settings
from scroll_world.entities import KIND_FRUIT, KIND_LEAF
from scroll_world.flora import CELL_EMPTY, CELL_FRUIT, Flora, seeded_rng
from scroll_world.height_profile import HeightProfile
from scroll_world.terrain import Terrain


def _flora(settings, logger):
    terrain = Terrain(settings, HeightProfile.from_settings(settings), logger)
    return Flora(settings, terrain, logger)


def _summary(trees):
    """Everything reproducible about a generated forest, keyed by trunk x."""
    return {
        trunk.x: (
            trunk.y,
            trunk.height_blocks,
            sorted((obj.kind, obj.x, obj.y) for obj in foliage),
        )
        for trunk, foliage in trees.items()
    }


@pytest.fixture
def forest(forest_settings, logger):
    return _flora(forest_settings, logger)


def test_split_range_matches_whole_range(forest):
    whole = _summary(forest.create_in_range(0, 300))
    halves = _summary(forest.create_in_range(0, 150))
    halves.update(_summary(forest.create_in_range(150, 300)))
    assert whole == halves


def test_overlapping_ranges_agree_on_overlap(forest):
    left = _summary(forest.create_in_range(0, 1000))
    right = _summary(forest.create_in_range(500, 1500))
    whole = _summary(forest.create_in_range(0, 1500))
    assert whole, "dense settings should plant trees"
    for x, tree in whole.items():
        if 500 <= x < 1000:
            assert left[x] == tree
            assert right[x] == tree
    assert {x for x in whole if x < 1000} == {x for x in left}


def test_generation_is_repeatable_across_instances(forest_settings, logger):
    a = _summary(_flora(forest_settings, logger).create_in_range(-900, 900))
    b = _summary(_flora(forest_settings, logger).create_in_range(-900, 900))
    assert a == b


def test_seed_changes_the_forest(logger):
    a = _flora(build_settings({'seed': 1, 'tree_planting_probability': 0.5}), logger)
    b = _flora(build_settings({'seed': 2, 'tree_planting_probability': 0.5}), logger)
    assert set(_summary(a.create_in_range(0, 3000))) != set(_summary(b.create_in_range(0, 3000)))


def test_trees_are_grid_aligned_and_rooted(forest):
    for trunk, foliage in forest.create_in_range(-900, 900).items():
        assert trunk.x % 30 == 0
        assert trunk.base_y == forest.terrain.top_at(trunk.x)
        assert trunk.y + trunk.height == trunk.base_y
        for obj in foliage:
            assert obj.x % 30 == 0
            assert obj.y % 30 == 0


def test_trunk_heights_stay_in_range(forest):
    heights = {forest.trunk_height_blocks(x) for x in range(-3000, 3000, 30)}
    assert min(heights) >= 4
    assert max(heights) <= 10
    assert heights == set(range(4, 11))


def test_trunk_height_ignores_planting_probability(logger):
    sparse = _flora(build_settings({'tree_planting_probability': 0.1}), logger)
    dense = _flora(build_settings({'tree_planting_probability': 0.9}), logger)
    for x in range(0, 900, 30):
        assert sparse.trunk_height_blocks(x) == dense.trunk_height_blocks(x)


def test_foliage_cells_are_exclusive(forest):
    for trunk, foliage in forest.create_in_range(-900, 900).items():
        positions = [obj.position for obj in foliage]
        assert len(positions) == len(set(positions))
        assert len(foliage) <= 8 * 8


def test_fruit_never_grows_in_trunk_column(orchard_settings, logger):
    flora = _flora(orchard_settings, logger)
    trees = flora.create_in_range(-900, 900)
    assert trees
    for trunk, foliage in trees.items():
        fruits = [obj for obj in foliage if obj.kind == KIND_FRUIT]
        assert all(fruit.x != trunk.x for fruit in fruits)
        # Every other cell of the 8x8 rectangle holds a fruit.
        assert len(fruits) == 7 * 8
        assert not any(obj.kind == KIND_LEAF for obj in foliage)


def test_cell_content_depends_only_on_its_coordinates(forest, orchard_settings, logger):
    assert forest.resolve_cell(60, 90, 0) == forest.resolve_cell(60, 90, 0)
    orchard = _flora(orchard_settings, logger)
    assert orchard.resolve_cell(60, 90, 60) == CELL_EMPTY
    assert orchard.resolve_cell(60, 90, 0) == CELL_FRUIT


def test_foliage_rectangle_is_centred_over_trunk_top(forest):
    trunk = forest.create_trunk(300)
    cells = {(obj.x, obj.y) for obj in forest.create_foliage(trunk)}
    xs = range(300 - 4 * 30, 300 + 4 * 30, 30)
    ys = range(trunk.top_y - 4 * 30, trunk.top_y + 4 * 30, 30)
    assert all(x in xs and y in ys for x, y in cells)


def test_reach_covers_foliage_overhang(forest):
    assert forest.reach == 4 * 30


def test_seeded_rng_accepts_negative_coordinates():
    a = seeded_rng(1, -30, 42).random()
    b = seeded_rng(1, -30, 42).random()
    c = seeded_rng(1, 30, 42).random()
    assert a == b
    assert a != c
