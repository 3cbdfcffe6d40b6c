import pytest

from flappy_fish.constants import FISH_JUMP, FISH_GRAVITY, FISH_X, MAX_FALL_VELOCITY


def test_flap_sets_velocity_then_gravity_applies(fish):
    agent = fish.spawn_agent()
    agent.y = 0.01
    agent.velocity = -20.0

    fish.integrate(agent, flap=True, dt=0.016)

    assert agent.velocity == pytest.approx(FISH_JUMP + FISH_GRAVITY * 0.016)
    assert agent.y == pytest.approx(0.01 + agent.velocity * 0.016)


def test_gravity_accumulates_without_flap(fish):
    agent = fish.spawn_agent()
    for _ in range(10):
        fish.integrate(agent, flap=False, dt=0.1)

    assert agent.velocity == pytest.approx(FISH_GRAVITY * 1.0)
    assert agent.y < 4.0


def test_flap_overrides_rather_than_adds(fish):
    agent = fish.spawn_agent()
    agent.velocity = 5.0
    fish.integrate(agent, flap=True, dt=0.0)
    assert agent.velocity == FISH_JUMP


def test_tilt_is_clamped(fish):
    assert fish.tilt_for(FISH_JUMP) == pytest.approx(-39.0)
    assert fish.tilt_for(100.0) == -40.0
    assert fish.tilt_for(-100.0) == 40.0
    assert fish.tilt_for(0.0) == 0.0


def test_fish_stays_pinned_horizontally(fish):
    agent = fish.spawn_agent()
    agent.x = 3.0
    fish.integrate(agent, flap=False, dt=0.016)
    assert agent.x == FISH_X


def test_fish_vertical_position_is_not_clamped(fish):
    agent = fish.spawn_agent()
    agent.y = 0.05
    agent.velocity = -10.0
    fish.integrate(agent, flap=False, dt=0.1)
    assert agent.y < 0.0


def test_bird_fall_speed_is_capped(bird):
    agent = bird.spawn_agent()
    agent.velocity = MAX_FALL_VELOCITY - 10.0
    bird.integrate(agent, flap=False, dt=0.1)
    assert agent.velocity == MAX_FALL_VELOCITY


def test_bird_is_clamped_to_screen(bird):
    agent = bird.spawn_agent()
    agent.y = 5.0
    bird.integrate(agent, flap=True, dt=0.1)
    assert agent.y == bird.floor

    agent.y = bird.ceiling - 1.0
    agent.velocity = 500.0
    bird.integrate(agent, flap=False, dt=0.1)
    assert agent.y == bird.ceiling


def test_bird_tilts_nose_up_when_rising(bird):
    agent = bird.spawn_agent()
    bird.integrate(agent, flap=True, dt=0.016)
    assert 0 < agent.tilt <= 40.0


def test_idle_bob_follows_clock(fish):
    agent = fish.spawn_agent()
    fish.idle(agent, 0.0)
    assert agent.y == pytest.approx(4.0)
    fish.idle(agent, 0.785398)
    assert agent.y == pytest.approx(4.3, abs=1e-4)
