"""
physics_fish.py: Rules for the 3D Flappy Fish variant.

The fish swims in the x/y plane at z = 0 and only moves vertically; coral
columns scroll toward it along x. World units, y up.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    FISH_GRAVITY, FISH_JUMP, FISH_TILT_FACTOR, FISH_X, FISH_SPAWN_Y, FISH_RADIUS,
    FISH_FLOOR, FISH_CEILING, FISH_BOB_AMPLITUDE, FISH_BOB_RATE,
    MAX_OBSTACLES, OBSTACLE_RADIUS, OBSTACLE_SPACING, OBSTACLE_FIRST_OFFSET,
    OBSTACLE_DESPAWN_OFFSET, GAP_FLOOR_Y, GAP_CEILING_Y,
    COLLISION_SLOP, MIN_COLLISION_THRESHOLD, FALLBACK_THRESHOLD_SCALE, VERTICAL_TOLERANCE,
    GAP_SIZE, MIN_GAP_SIZE, FISH_SPEED, DIFFICULTY_INTERVAL, SPEED_INCREMENT, GAP_DECREMENT,
)
from .data_models import Agent, Obstacle, GameSession
from .physics_core import PhysicsCore


@dataclass
class FishEngine(PhysicsCore):
    """
    Flappy Fish: sphere-distance collision with a forgiving slop, obstacles
    recycled behind the farthest column, one point per column passed.
    """

    gravity: float = FISH_GRAVITY
    jump: float = FISH_JUMP
    tilt_factor: float = FISH_TILT_FACTOR
    terminal_velocity: Optional[float] = None
    spawn_x: float = FISH_X
    spawn_y: float = FISH_SPAWN_Y
    floor: float = FISH_FLOOR
    ceiling: float = FISH_CEILING
    bob_amplitude: float = FISH_BOB_AMPLITUDE
    bob_rate: float = FISH_BOB_RATE

    capacity: int = MAX_OBSTACLES
    start_count: int = MAX_OBSTACLES
    spacing: float = OBSTACLE_SPACING
    gap_low: float = GAP_FLOOR_Y
    gap_high: float = GAP_CEILING_Y
    agent_margin: float = FISH_RADIUS

    base_speed: float = FISH_SPEED
    base_gap: float = GAP_SIZE
    gap_floor: float = MIN_GAP_SIZE
    difficulty_interval: float = DIFFICULTY_INTERVAL
    speed_increment: float = SPEED_INCREMENT
    gap_decrement: float = GAP_DECREMENT
    active_growth: int = 0

    fish_radius: float = FISH_RADIUS
    obstacle_radius: float = OBSTACLE_RADIUS
    first_offset: float = OBSTACLE_FIRST_OFFSET
    despawn_offset: float = OBSTACLE_DESPAWN_OFFSET
    collision_slop: float = COLLISION_SLOP
    vertical_tolerance: float = VERTICAL_TOLERANCE

    def first_x(self, index: int) -> float:
        return self.spawn_x + self.first_offset + index * self.spacing

    def respawn_x(self, farthest_x: float) -> float:
        return farthest_x + self.spacing

    def has_passed(self, agent: Agent, obstacle: Obstacle) -> bool:
        return obstacle.x < agent.x

    def is_despawned(self, obstacle: Obstacle) -> bool:
        return obstacle.x < self.spawn_x - self.despawn_offset

    def points_for(self, session: GameSession) -> int:
        return 1

    def collision_threshold(self) -> float:
        combined = self.obstacle_radius + self.fish_radius
        threshold = combined - self.collision_slop
        if threshold < MIN_COLLISION_THRESHOLD:
            threshold = combined * FALLBACK_THRESHOLD_SCALE
        return threshold

    def gap_band(self, obstacle: Obstacle, gap_size: float):
        """Vertical interval the fish centre must stay inside while in a column."""
        inset = self.fish_radius + self.vertical_tolerance
        return obstacle.gap_y + inset, obstacle.gap_y + gap_size - inset

    def hits_obstacle(self, agent: Agent, obstacle: Obstacle, gap_size: float) -> bool:
        # Fish and columns share z = 0, so the horizontal distance is along x only.
        dx = agent.x - obstacle.x
        threshold = self.collision_threshold()
        if dx * dx > threshold * threshold:
            return False

        bottom, top = self.gap_band(obstacle, gap_size)
        return agent.y < bottom or agent.y > top
