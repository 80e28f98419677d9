import threading

from gravity_core import SimulationController, WorldConfig
from gravity_core.controller import MAX_TICKS_PER_FRAME
from gravity_core.presets_loader import default_scene, parse_scene

PLAYGROUND_MASS = 1.49835181e16


def test_step_frame_carries_leftover_time() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    sim.base_dt = 0.25
    assert sim.step_frame(0.625) == 2
    assert sim.step_frame(0.125) == 1
    assert sim.world.tick_count == 3


def test_step_frame_caps_long_stalls() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    assert sim.step_frame(10.0) == MAX_TICKS_PER_FRAME
    assert sim.world.tick_count == MAX_TICKS_PER_FRAME


def test_paused_controller_does_not_tick() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    assert sim.toggle_play() is False
    assert sim.step_frame(1.0) == 0
    assert sim.world.tick_count == 0


def test_body_at_picks_nearest_covering_body() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    planet = sim.create_planet(0.0, 0.0, PLAYGROUND_MASS, radius=40.0)
    sat = sim.create_satellite(0.0, 60.0, 0.0, 0.0, radius=15.0)
    assert sim.body_at((0.0, 10.0)) == planet
    assert sim.body_at((0.0, 58.0)) == sat
    assert sim.body_at((500.0, 500.0)) is None
    assert sim.body_at((0.0, 90.0), pick_radius=40.0) == sat


def test_load_scene_replaces_world_and_keeps_telemetry() -> None:
    sim = SimulationController(WorldConfig(seed=1, telemetry_interval=1))
    seen = []
    sim.on_telemetry_tick(seen.append)
    sim.create_satellite(0.0, 0.0, 0.0, 0.0)

    ids = sim.load_scene(default_scene())
    assert ids == [0, 1, 2]
    assert len(sim.snapshot().bodies) == 3

    sim.base_dt = 0.5
    sim.step_frame(0.5)
    assert len(seen) == 1
    assert len(seen[0].satellites) == 2


def test_load_scene_with_a_bad_planet_still_builds_the_rest() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    scene = parse_scene({
        "planets": [
            {"position": [0.0, 0.0], "mass": PLAYGROUND_MASS},
            {"position": [300.0, 0.0], "mass": -5.0},
        ],
        "satellites": [{"position": [0.0, 200.0], "velocity": [70.0, 0.0]}],
    })
    assert sim.load_scene(scene) == [0, 1]
    snap = sim.snapshot()
    assert [b.kind for b in snap.bodies] == ["planet", "satellite"]


def test_drag_through_controller() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    sat = sim.create_satellite(0.0, 0.0, 0.0, 0.0, radius=15.0)
    assert sim.pointer_down(sim.body_at((1.0, 1.0)), (1.0, 1.0))
    sim.pointer_moved((10.0, 0.0))
    assert sim.pointer_up() == sat
    assert sim.current_speed(sat) > 0.0


def test_collision_message_is_popped_once() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    sim.create_planet(0.0, 0.0, PLAYGROUND_MASS, radius=40.0)
    sim.create_satellite(50.0, 0.0, 0.0, 5.0, radius=15.0)
    sim.base_dt = 0.5
    sim.step_frame(0.5)
    assert sim.last_collision_message() is not None
    assert sim.last_collision_message() is None


def test_input_and_ticks_from_separate_threads() -> None:
    sim = SimulationController(WorldConfig(seed=1))
    sim.create_planet(0.0, 0.0, PLAYGROUND_MASS, radius=40.0)
    sat = sim.create_satellite(0.0, 200.0, 70.0, 0.0, radius=15.0)
    sim.base_dt = 1 / 60

    def ticker():
        for _ in range(200):
            sim.step_frame(1 / 60)

    def pointer():
        for i in range(50):
            sim.pointer_down(sat, (0.0, 200.0))
            sim.pointer_moved((float(i), 200.0))
            sim.pointer_up()

    threads = [threading.Thread(target=ticker), threading.Thread(target=pointer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    snap = sim.snapshot()
    assert snap.tick >= 150
    assert not snap.body(sat).held
