"""
physics_bird.py: Rules for the 2D Flappy Bird variant (pixels, y down).
"""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    GRAVITY_ACCEL, JUMP_IMPULSE, MAX_FALL_VELOCITY, BIRD_TILT_FACTOR,
    SCREEN_WIDTH, SCREEN_HEIGHT, BIRD_X, BIRD_SIZE, BIRD_SPAWN_Y, BIRD_HITBOX_INSET,
    BIRD_BOB_AMPLITUDE, BIRD_BOB_RATE,
    MAX_PIPES, START_PIPES, PIPE_WIDTH, PIPE_GAP, MIN_PIPE_GAP, PIPE_SPACING,
    PIPE_MARGIN, PIPE_TOLERANCE, PIPE_SPEED_PPS,
    PIPE_DIFFICULTY_INTERVAL, PIPE_SPEED_INCREMENT, PIPE_GAP_DECREMENT,
    SCORE_MULTIPLIER_INTERVAL, MAX_SCORE_MULTIPLIER,
)
from .data_models import Agent, Obstacle, GameSession
from .physics_core import PhysicsCore


@dataclass
class BirdEngine(PhysicsCore):
    """
    Flappy Bird: rectangle collision, pipes respawned off the right edge,
    more pipes in flight as difficulty rises, and a score multiplier that
    grows with time survived.
    """

    gravity: float = GRAVITY_ACCEL
    jump: float = JUMP_IMPULSE
    tilt_factor: float = BIRD_TILT_FACTOR
    terminal_velocity: Optional[float] = MAX_FALL_VELOCITY
    spawn_x: float = BIRD_X
    spawn_y: float = BIRD_SPAWN_Y
    floor: float = 0.0
    ceiling: float = SCREEN_HEIGHT - BIRD_SIZE
    bob_amplitude: float = BIRD_BOB_AMPLITUDE
    bob_rate: float = BIRD_BOB_RATE

    capacity: int = MAX_PIPES
    start_count: int = START_PIPES
    spacing: float = PIPE_SPACING
    gap_low: float = 0.0
    gap_high: float = SCREEN_HEIGHT
    agent_margin: float = PIPE_MARGIN

    base_speed: float = PIPE_SPEED_PPS
    base_gap: float = PIPE_GAP
    gap_floor: float = MIN_PIPE_GAP
    difficulty_interval: float = PIPE_DIFFICULTY_INTERVAL
    speed_increment: float = PIPE_SPEED_INCREMENT
    gap_decrement: float = PIPE_GAP_DECREMENT
    active_growth: int = 1

    screen_width: float = SCREEN_WIDTH
    bird_size: float = BIRD_SIZE
    hitbox_inset: float = BIRD_HITBOX_INSET
    pipe_width: float = PIPE_WIDTH
    pipe_tolerance: float = PIPE_TOLERANCE
    multiplier_interval: float = SCORE_MULTIPLIER_INTERVAL
    max_multiplier: int = MAX_SCORE_MULTIPLIER

    def constrain(self, agent: Agent):
        agent.x = self.spawn_x
        agent.y = max(self.floor, min(self.ceiling, agent.y))

    def first_x(self, index: int) -> float:
        return self.screen_width + index * self.spacing

    def respawn_x(self, farthest_x: float) -> float:
        # Never pop in on screen, never closer than the spacing.
        return max(farthest_x + self.spacing, self.screen_width)

    def has_passed(self, agent: Agent, obstacle: Obstacle) -> bool:
        return obstacle.x + self.pipe_width < agent.x

    def is_despawned(self, obstacle: Obstacle) -> bool:
        return obstacle.x + self.pipe_width < 0

    def multiplier(self, play_time: float) -> int:
        return min(self.max_multiplier, 1 + int(play_time // self.multiplier_interval))

    def points_for(self, session: GameSession) -> int:
        return self.multiplier(session.play_time)

    def gap_band(self, obstacle: Obstacle, gap_size: float):
        return obstacle.gap_y + self.pipe_tolerance, obstacle.gap_y + gap_size - self.pipe_tolerance

    def hitbox(self, agent: Agent):
        """Returns (left, top, right, bottom) of the bird's forgiving hitbox."""
        inset = self.hitbox_inset
        return (agent.x + inset, agent.y + inset,
                agent.x + self.bird_size - inset, agent.y + self.bird_size - inset)

    def hits_obstacle(self, agent: Agent, obstacle: Obstacle, gap_size: float) -> bool:
        left, top, right, bottom = self.hitbox(agent)
        if not (obstacle.x < right and left < obstacle.x + self.pipe_width):
            return False

        band_top, band_bottom = self.gap_band(obstacle, gap_size)
        return top < band_top or bottom > band_bottom
