import math

import pytest

from gravity_core import (
    PLANET,
    SATELLITE,
    InvalidBodyParameters,
    InvalidBodyReference,
    World,
    WorldConfig,
)

PLAYGROUND_MASS = 1.49835181e16


def test_ids_are_stable_insertion_indices() -> None:
    world = World(WorldConfig(seed=11))
    ids = [
        world.create_planet(0.0, 0.0, PLAYGROUND_MASS),
        world.create_satellite(0.0, 200.0, 70.0, 0.0),
        world.create_satellite(-150.0, 0.0, 0.0, 100.0),
    ]
    assert ids == [0, 1, 2]
    assert [b.kind for b in world.bodies] == [PLANET, SATELLITE, SATELLITE]
    assert [s.id for s in world.observed_satellites()] == [1, 2]


def test_default_radii_come_from_configured_ranges() -> None:
    world = World(WorldConfig(seed=11))
    for _ in range(20):
        world.create_planet(0.0, 0.0, 1.0)
        world.create_satellite(0.0, 0.0, 0.0, 0.0)
    for b in world.bodies:
        low, high = (36.0, 52.0) if b.is_planet else (13.0, 22.0)
        assert low <= b.radius <= high


def test_seeded_worlds_draw_identical_radii() -> None:
    a = World(WorldConfig(seed=99))
    b = World(WorldConfig(seed=99))
    for w in (a, b):
        w.create_planet(0.0, 0.0, 1.0)
        w.create_satellite(0.0, 0.0, 0.0, 0.0)
    assert [x.radius for x in a.bodies] == [x.radius for x in b.bodies]


def test_explicit_radius_is_kept() -> None:
    world = World()
    body_id = world.create_satellite(0.0, 0.0, 0.0, 0.0, radius=17.5)
    assert world.get_body(body_id).radius == 17.5


@pytest.mark.parametrize("mass", [-1.0, math.nan, math.inf])
def test_bad_planet_mass_is_rejected(mass) -> None:
    world = World()
    with pytest.raises(InvalidBodyParameters):
        world.create_planet(0.0, 0.0, mass)
    assert world.bodies == []


@pytest.mark.parametrize("radius", [0.0, -5.0, math.nan])
def test_bad_radius_is_rejected(radius) -> None:
    world = World()
    with pytest.raises(InvalidBodyParameters):
        world.create_satellite(0.0, 0.0, 0.0, 0.0, radius=radius)


def test_non_finite_coordinates_are_rejected() -> None:
    world = World()
    with pytest.raises(InvalidBodyParameters):
        world.create_satellite(math.inf, 0.0, 0.0, 0.0)
    with pytest.raises(InvalidBodyParameters):
        world.create_satellite(0.0, 0.0, math.nan, 0.0)
    assert isinstance(InvalidBodyParameters("x"), ValueError)


def test_unknown_body_id_is_a_recoverable_lookup_failure() -> None:
    world = World()
    world.create_satellite(0.0, 0.0, 1.0, 0.0)
    for bad in (1, -1, "0", None):
        with pytest.raises(InvalidBodyReference):
            world.current_speed(bad)
    with pytest.raises(KeyError):
        world.get_body(42)
    with pytest.raises(InvalidBodyReference):
        world.pointer_down(7, (0.0, 0.0))


def test_current_speed_is_in_input_units() -> None:
    world = World()
    body_id = world.create_satellite(0.0, 0.0, 3.0, 4.0)
    assert world.current_speed(body_id) == pytest.approx(5.0)


def test_list_planets_and_satellites_are_snapshots() -> None:
    world = World(WorldConfig(seed=4))
    world.create_planet(1.0, 2.0, PLAYGROUND_MASS, radius=40.0)
    world.create_satellite(0.0, 200.0, 3.0, 4.0, radius=15.0)

    planets = world.list_planets()
    satellites = world.list_satellites()
    assert [p.id for p in planets] == [0]
    assert planets[0].position == (1.0, 2.0)
    assert planets[0].velocity == (0.0, 0.0)
    assert satellites[0].speed == pytest.approx(5.0)

    world.tick(1 / 60)
    # Snapshots are copies and do not follow the live body
    assert satellites[0].position == (0.0, 200.0)


def test_telemetry_is_throttled_to_interval() -> None:
    world = World(WorldConfig(seed=4, telemetry_interval=6))
    world.create_planet(0.0, 0.0, PLAYGROUND_MASS, radius=40.0)
    world.create_satellite(0.0, 200.0, 70.0, 0.0, radius=15.0)
    seen = []
    world.on_telemetry_tick(seen.append)

    world.run(13, 1 / 60)
    assert [s.tick for s in seen] == [6, 12]
    assert seen[0].time == pytest.approx(6 / 60)
    assert seen[1].satellites[0].speed > 0.0
    assert seen[1].body(0).kind == PLANET


def test_every_telemetry_observer_is_called() -> None:
    world = World(WorldConfig(telemetry_interval=2))
    first, second = [], []
    world.on_telemetry_tick(first.append)
    world.on_telemetry_tick(second.append)
    world.run(4, 0.1)
    assert len(first) == len(second) == 2


def test_telemetry_does_not_change_physics() -> None:
    quiet = World(WorldConfig(seed=8, telemetry_interval=1))
    noisy = World(WorldConfig(seed=8, telemetry_interval=1))
    for w in (quiet, noisy):
        w.create_planet(0.0, 0.0, PLAYGROUND_MASS)
        w.create_satellite(0.0, 200.0, 70.0, 0.0)
    noisy.on_telemetry_tick(lambda snap: None)
    quiet.run(100, 1 / 60)
    noisy.run(100, 1 / 60)
    assert quiet.get_body(1).position == noisy.get_body(1).position


def test_non_positive_dt_does_not_advance() -> None:
    world = World()
    body_id = world.create_satellite(0.0, 0.0, 1.0, 0.0)
    world.tick(0.0)
    world.tick(-1.0)
    assert world.tick_count == 0
    assert world.get_body(body_id).position == (0.0, 0.0)


def test_held_body_is_drag_controlled_not_integrated() -> None:
    world = World(WorldConfig(seed=4))
    world.create_planet(0.0, 0.0, PLAYGROUND_MASS, radius=40.0)
    sat_id = world.create_satellite(0.0, 200.0, 70.0, 0.0, radius=15.0)
    world.pointer_down(sat_id, (0.0, 200.0))

    world.run(30, 1 / 60)
    body = world.get_body(sat_id)
    # Target equals start position, so the body has not moved at all
    assert body.position == (0.0, 200.0)
    assert body.velocity == (70.0, 0.0)
    assert world.snapshot().body(sat_id).held
