import pytest

from flappy_fish.constants import FISH_X, BIRD_X, BIRD_SIZE, SCREEN_HEIGHT
from flappy_fish.data_models import Obstacle
from flappy_fish.physics_fish import FishEngine

from conftest import park_obstacles


def fish_at(fish, y):
    agent = fish.spawn_agent()
    agent.y = y
    return agent


@pytest.mark.parametrize("y", [0.0, 15.5, -1.0, 20.0])
def test_fish_touching_bounds_collides(fish, y):
    session = fish.create_session()
    park_obstacles(session)
    assert fish.check_collision(fish_at(fish, y), session.obstacles, session.difficulty.gap_size)


def test_fish_in_open_water_is_safe(fish):
    session = fish.create_session()
    park_obstacles(session)
    assert not fish.check_collision(fish_at(fish, 7.0), session.obstacles, 6.5)


def test_fish_passes_through_gap_midpoint(fish):
    obstacle = Obstacle(x=FISH_X, gap_y=1.5)
    bottom, top = fish.gap_band(obstacle, 6.5)
    assert bottom == pytest.approx(1.5 + 0.4 + 0.15)
    assert top == pytest.approx(1.5 + 6.5 - 0.4 - 0.15)

    assert not fish.check_collision(fish_at(fish, (bottom + top) / 2), [obstacle], 6.5)
    assert fish.check_collision(fish_at(fish, 0.0), [obstacle], 6.5)
    assert fish.check_collision(fish_at(fish, 15.5), [obstacle], 6.5)


def test_fish_outside_gap_band_collides(fish):
    obstacle = Obstacle(x=FISH_X, gap_y=1.5)
    assert fish.hits_obstacle(fish_at(fish, 2.0), obstacle, 6.5)
    assert fish.hits_obstacle(fish_at(fish, 7.6), obstacle, 6.5)
    assert not fish.hits_obstacle(fish_at(fish, 2.1), obstacle, 6.5)


def test_fish_collision_slop_forgives_near_miss(fish):
    assert fish.collision_threshold() == pytest.approx(0.2)

    near = Obstacle(x=FISH_X + 0.25, gap_y=1.5)
    close = Obstacle(x=FISH_X + 0.15, gap_y=1.5)
    agent = fish_at(fish, 1.0)

    assert not fish.hits_obstacle(agent, near, 6.5)
    assert fish.hits_obstacle(agent, close, 6.5)


def test_fish_threshold_falls_back_when_slop_too_large():
    fish = FishEngine(collision_slop=1.19)
    assert fish.collision_threshold() == pytest.approx(1.2 * 0.2)


def test_fish_collision_uses_current_gap_size(fish):
    obstacle = Obstacle(x=FISH_X, gap_y=1.5)
    agent = fish_at(fish, 6.0)
    assert not fish.hits_obstacle(agent, obstacle, 6.5)
    assert fish.hits_obstacle(agent, obstacle, 4.0)


def test_inactive_obstacles_are_ignored(bird):
    agent = bird.spawn_agent()
    pipe = Obstacle(x=BIRD_X, gap_y=0.0, active=False)
    assert not bird.check_collision(agent, [pipe], 200)


@pytest.mark.parametrize("y", [0.0, SCREEN_HEIGHT - BIRD_SIZE])
def test_bird_touching_bounds_collides(bird, y):
    agent = bird.spawn_agent()
    agent.y = y
    assert bird.check_collision(agent, [], 200)


def test_bird_passes_through_gap_midpoint(bird):
    pipe = Obstacle(x=90, gap_y=300)
    agent = bird.spawn_agent()

    agent.y = 400 - BIRD_SIZE / 2
    assert not bird.check_collision(agent, [pipe], 200)

    agent.y = 290
    assert bird.check_collision(agent, [pipe], 200)

    agent.y = 480
    assert bird.check_collision(agent, [pipe], 200)


def test_bird_misses_pipe_horizontally(bird):
    agent = bird.spawn_agent()
    agent.y = 100

    assert not bird.hits_obstacle(agent, Obstacle(x=200, gap_y=300), 200)
    assert not bird.hits_obstacle(agent, Obstacle(x=BIRD_X - 80 - 4, gap_y=300), 200)


def test_bird_hitbox_inset_forgives_grazes(bird):
    agent = bird.spawn_agent()
    agent.y = 100
    right_edge = BIRD_X + BIRD_SIZE - bird.hitbox_inset

    assert not bird.hits_obstacle(agent, Obstacle(x=right_edge + 1, gap_y=300), 200)
    assert bird.hits_obstacle(agent, Obstacle(x=right_edge - 1, gap_y=300), 200)
