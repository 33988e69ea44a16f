import pytest

from scroll_world.entities import KIND_FRUIT, KIND_TRUNK
from scroll_world.height_profile import HeightProfile
from scroll_world.runtime.clock import SimulationClock
from scroll_world.streaming import FruitConsumed, WorldStreamer


@pytest.fixture
def streamer(forest_settings, logger):
    return WorldStreamer(forest_settings, logger)


@pytest.fixture
def orchard(orchard_settings, logger):
    return WorldStreamer(orchard_settings, logger)


def _keys(streamer):
    return {obj.key for obj in streamer.active_objects}


def _any_fruit(streamer):
    fruits = [obj for obj in streamer.active_objects if obj.kind == KIND_FRUIT]
    assert fruits, "orchard settings should always grow fruit"
    return fruits[0]


def test_retention_window_covers_grid_within_radius(streamer):
    assert streamer.retention_radius == 450
    # Both edges are inclusive: x = -450 and x = 450 are exactly R away.
    assert streamer.retention_window(0) == (-450, 480)
    assert streamer.retention_window(10) == (-420, 480)
    assert streamer.retention_window(-10) == (-450, 450)
    assert streamer.retention_window(29.5) == (-420, 480)


def test_window_matches_distance_rule(streamer):
    for viewport_x in (-1000, -17.25, 0, 1, 29, 31.5, 455, 1000.75):
        lo, hi = streamer.retention_window(viewport_x)
        for x in range(lo - 90, hi + 90, 30):
            within = abs(x - viewport_x) <= 450
            assert (lo <= x < hi) == within


def test_tick_reaches_right_edge(streamer):
    streamer.tick(29, 0.016)
    ground_xs = {obj.x for obj in streamer.active_objects if obj.kind == "ground"}
    # |450 - 29| = 421 is inside the radius.
    assert 450 in ground_xs
    # |480 - 29| = 451 is not.
    assert 480 not in ground_xs


def test_tick_evicts_beyond_left_edge(streamer):
    streamer.tick(0, 0.016)
    ground_xs = {obj.x for obj in streamer.active_objects if obj.kind == "ground"}
    assert -450 in ground_xs
    streamer.tick(1, 0.016)
    # |-450 - 1| = 451 is outside the radius.
    ground_xs = {obj.x for obj in streamer.active_objects if obj.kind == "ground"}
    assert -450 not in ground_xs
    assert -420 in ground_xs
    assert all(abs(obj.x - 1) <= 450 for obj in streamer.active_objects)


def test_active_set_follows_distance_rule_while_moving(streamer):
    for viewport_x in (0, 7.5, 44, 100.25, 61, -300, -299.5):
        streamer.tick(viewport_x, 0.016)
        ground_xs = {obj.x for obj in streamer.active_objects if obj.kind == "ground"}
        expected = {x for x in range(-1200, 1200, 30) if abs(x - viewport_x) <= 450}
        assert ground_xs == expected


def test_tick_materializes_the_window(streamer):
    streamer.tick(0, 0.016)
    lo, hi = streamer.retention_window(0)
    assert streamer.materialized_span == (lo, hi)
    objects = streamer.active_objects
    assert objects
    assert all(lo <= obj.x < hi for obj in objects)
    ground_xs = {obj.x for obj in objects if obj.kind == "ground"}
    assert ground_xs == set(range(lo, hi, 30))
    assert any(obj.kind == KIND_TRUNK for obj in objects)


def test_overlapping_materialization_never_duplicates(forest_settings, logger):
    piecewise = WorldStreamer(forest_settings, logger)
    entered = []
    piecewise.add_enter_view_hook(entered.append)
    piecewise.materialize(0, 600)
    piecewise.materialize(300, 900)
    piecewise.materialize(0, 900)

    whole = WorldStreamer(forest_settings, logger)
    whole.materialize(0, 900)

    assert _keys(piecewise) == _keys(whole)
    assert len(entered) == len(piecewise.active_objects)


def test_rematerializing_active_range_activates_nothing(streamer):
    streamer.tick(0, 0.016)
    before = len(streamer.active_objects)
    assert streamer.materialize(0, 300) == []
    assert len(streamer.active_objects) == before


def test_inverted_range_materializes_nothing(streamer):
    assert streamer.materialize(300, 0) == []
    assert streamer.active_objects == []


def test_activate_rejects_same_key(streamer):
    streamer.tick(0, 0.016)
    existing = streamer.active_objects[0]
    twin = type(existing).__new__(type(existing))
    twin.__dict__.update(existing.__dict__)
    assert not streamer.activate(twin)
    assert streamer.object_at(existing.kind, existing.position) is existing


def test_eviction_and_reentry_regenerate_same_world(streamer):
    left = []
    streamer.add_leave_view_hook(left.append)
    streamer.tick(0, 0.016)
    first_visit = _keys(streamer)

    streamer.tick(10000, 0.016)
    assert not first_visit & _keys(streamer)
    assert {obj.key for obj in left} == first_visit

    streamer.tick(0, 0.016)
    assert _keys(streamer) == first_visit


def test_sub_unit_movement_changes_nothing(streamer):
    entered = []
    left = []
    streamer.tick(15, 0.016)
    streamer.add_enter_view_hook(entered.append)
    streamer.add_leave_view_hook(left.append)
    streamer.tick(20, 0.016)
    assert entered == []
    assert left == []


def test_one_unit_step_only_touches_the_edges(streamer):
    entered, left = [], []
    streamer.tick(0, 0.016)
    streamer.add_enter_view_hook(entered.append)
    streamer.add_leave_view_hook(left.append)
    streamer.tick(30, 0.016)
    assert entered
    assert all(obj.x == 480 for obj in entered)
    assert left
    assert all(obj.x == -450 for obj in left)
    lo, hi = streamer.retention_window(30)
    assert all(lo <= obj.x < hi for obj in streamer.active_objects)


def test_hooks_see_every_activation(streamer):
    entered = []
    streamer.add_enter_view_hook(entered.append)
    streamer.tick(0, 0.016)
    assert len(entered) == len(streamer.active_objects)


def test_height_at_matches_profile(forest_settings, streamer):
    profile = HeightProfile.from_settings(forest_settings)
    for x in (-500.0, 0.0, 123.4):
        assert streamer.height_at(x) == profile.height_at(x)


def test_uses_injected_clock(forest_settings, logger):
    clock = SimulationClock(forest_settings)
    streamer = WorldStreamer(forest_settings, logger, clock=clock)
    streamer.tick(0, 0.5)
    assert streamer.clock is clock
    assert clock.now == 0.5


def test_consuming_fruit_raises_one_event(orchard):
    granted = []
    orchard.on_fruit_consumed = granted.append
    orchard.tick(0, 1.0)
    fruit = _any_fruit(orchard)

    assert orchard.consume_fruit(fruit) == 10.0
    assert not fruit.is_present
    assert orchard.consume_fruit(fruit) is None

    events = orchard.tick(0, 0.0)
    assert events == [FruitConsumed(10.0, fruit.position)]
    assert granted == [10.0]
    assert orchard.tick(0, 0.0) == []


def test_consumed_fruit_is_not_touchable(orchard):
    orchard.tick(0, 1.0)
    fruit = _any_fruit(orchard)
    assert fruit in orchard.fruits_touching(fruit.x, fruit.y, 1, 1)
    orchard.consume_fruit(fruit)
    assert fruit not in orchard.fruits_touching(fruit.x, fruit.y, 1, 1)


def test_fruit_respawns_after_deadline(orchard):
    orchard.tick(0, 1.0)
    fruit = _any_fruit(orchard)
    orchard.consume_fruit(fruit)
    assert fruit.respawn_deadline == 6.0

    orchard.tick(0, 4.0)
    assert not fruit.is_present
    orchard.tick(0, 1.0)
    assert fruit.is_present
    assert orchard.consume_fruit(fruit) == 10.0


def test_evicted_fruit_comes_back_present(orchard):
    orchard.tick(0, 1.0)
    fruit = _any_fruit(orchard)
    orchard.consume_fruit(fruit)

    orchard.tick(10000, 0.1)
    assert not orchard.is_active(fruit)
    assert orchard.consume_fruit(fruit) is None

    orchard.tick(0, 0.1)
    reborn = orchard.object_at(KIND_FRUIT, fruit.position)
    assert reborn is not None
    assert reborn is not fruit
    assert reborn.is_present
    assert reborn.respawn_deadline is None
