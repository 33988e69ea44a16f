import pytest

from scroll_world.height_profile import HeightProfile
from scroll_world.terrain import Terrain


@pytest.fixture
def terrain(settings, logger):
    return Terrain(settings, HeightProfile.from_settings(settings), logger)


def test_reference_range_produces_ten_full_columns(terrain):
    columns = terrain.create_columns_in_range(0, 300)
    assert [c.x for c in columns] == list(range(0, 300, 30))
    for column in columns:
        assert len(column) == 20


def test_columns_are_contiguous_and_aligned(terrain):
    for column in terrain.create_columns_in_range(-450, 450):
        assert column.x % 30 == 0
        assert column.top_y % 30 == 0
        for i, tile in enumerate(column):
            assert tile.x == column.x
            assert tile.y == column.top_y + i * 30
            assert tile.width == tile.height == 30


def test_top_tile_sits_on_snapped_height(terrain):
    for column in terrain.create_columns_in_range(0, 300):
        height = terrain.height_at(column.x)
        assert column.top_y <= height < column.top_y + 30


def test_height_at_is_stable(terrain):
    assert terrain.height_at(120) == terrain.height_at(120)


def test_overlapping_calls_agree_but_are_distinct(terrain):
    first = {c.x: c for c in terrain.create_columns_in_range(0, 600)}
    second = {c.x: c for c in terrain.create_columns_in_range(300, 900)}
    shared = sorted(set(first) & set(second))
    assert shared == list(range(300, 600, 30))
    for x in shared:
        assert first[x].top_y == second[x].top_y
        assert [t.position for t in first[x]] == [t.position for t in second[x]]
        assert first[x].tiles[0] is not second[x].tiles[0]


def test_inverted_range_is_empty(terrain):
    assert terrain.create_columns_in_range(300, 0) == []
    assert terrain.create_in_range(300, 0) == []


def test_flat_list_holds_every_tile(terrain):
    tiles = terrain.create_in_range(0, 90)
    assert len(tiles) == 3 * 20
    assert all(tile.kind == "ground" for tile in tiles)
