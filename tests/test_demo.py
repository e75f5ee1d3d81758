import random

import pytest

from sphfluid.demo import build_demo, main
from sphfluid.vector import Vector2f

WIDTH = 800.0
HEIGHT = 600.0


@pytest.fixture(scope="module")
def scene():
    return build_demo(WIDTH, HEIGHT, 51, random.Random(7))


def test_fluid_is_split_into_two_blocks(scene):
    sim, _ = scene
    assert sim.num_particles == 2 * (51 // 2)
    xs = [p.x for p in sim.positions]
    assert sum(x < WIDTH / 2 for x in xs) == 51 // 2


def test_three_activated_boundaries_are_registered(scene):
    sim, boundaries = scene
    assert len(boundaries) == 3
    assert sim.boundaries == tuple(boundaries)
    for boundary in boundaries:
        assert boundary.num_particles > 0
        assert len(boundary.volumes) == boundary.num_particles
        assert all(v > 0 for v in boundary.volumes)
        assert boundary.is_static


def test_boundary_centres_follow_the_layout(scene):
    _, (box, triangle, circle) = scene
    assert circle.center == Vector2f(WIDTH / 2.0, HEIGHT - 200.0)
    assert box.center.x == pytest.approx((0.25 * WIDTH + 0.33 * WIDTH) / 2.0)
    assert box.center.y == pytest.approx((0.6 * HEIGHT + 0.8 * HEIGHT) / 2.0)
    assert triangle.center.x == pytest.approx((200.0 + 400.0 + 300.0) / 3.0)
    assert triangle.center.y == pytest.approx((800.0 + 800.0 + 1000.0) / 3.0)


def test_demo_uses_adaptive_timestep(scene):
    sim, _ = scene
    assert sim.fixed_timestep < 0


def test_same_seed_gives_same_scene():
    first, _ = build_demo(WIDTH, HEIGHT, 20, random.Random(3))
    second, _ = build_demo(WIDTH, HEIGHT, 20, random.Random(3))
    assert first.positions == second.positions


def test_too_few_particles_is_rejected():
    with pytest.raises(ValueError):
        build_demo(WIDTH, HEIGHT, 1, random.Random(0))


def test_main_runs_a_frame_headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    result = main(
        ["--width", "640", "--height", "480", "--particles", "8", "--seed", "1", "--frames", "1"]
    )
    assert result == 0