"""
physics_core.py: The shared, deterministic kinematic functions, difficulty ramp,
obstacle scheduling and bounds collision used by both game variants.
"""

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import MAX_TILT
from .data_models import Agent, Obstacle, DifficultyState, GameSession


@dataclass
class PhysicsCore:
    """
    Shared physics core. Variant engines supply the tuning values and the
    obstacle geometry hooks (spawn/pass/despawn/respawn, collision, scoring).
    """

    # Agent
    gravity: float
    jump: float
    tilt_factor: float
    terminal_velocity: Optional[float]
    spawn_x: float
    spawn_y: float
    floor: float
    ceiling: float
    bob_amplitude: float
    bob_rate: float

    # Obstacles
    capacity: int
    start_count: int
    spacing: float
    gap_low: float
    gap_high: float
    agent_margin: float

    # Difficulty
    base_speed: float
    base_gap: float
    gap_floor: float
    difficulty_interval: float
    speed_increment: float
    gap_decrement: float
    active_growth: int

    # Anything with uniform(a, b); tests pass a seeded or stubbed source.
    rng: random.Random = field(default_factory=random.Random)

    # ---------- Physics Integrator ----------

    def flap(self) -> float:
        """Returns the instantaneous velocity after a flap."""
        return self.jump

    def tilt_for(self, velocity: float) -> float:
        tilt = -velocity * self.tilt_factor
        return max(-MAX_TILT, min(MAX_TILT, tilt))

    def apply_gravity(self, velocity: float, dt: float) -> float:
        velocity += self.gravity * dt
        if self.terminal_velocity is not None:
            if self.gravity > 0:
                velocity = min(velocity, self.terminal_velocity)
            else:
                velocity = max(velocity, -self.terminal_velocity)
        return velocity

    def integrate(self, agent: Agent, flap: bool, dt: float):
        """
        Advances the agent by one frame. A flap replaces the current velocity,
        gravity is applied afterwards in the same frame.
        """
        if flap:
            agent.velocity = self.flap()

        # Tilt follows the velocity the player just chose, before gravity pulls it back.
        agent.tilt = self.tilt_for(agent.velocity)

        agent.velocity = self.apply_gravity(agent.velocity, dt)
        agent.y += agent.velocity * dt
        self.constrain(agent)

    def constrain(self, agent: Agent):
        """Pins the agent horizontally. The vertical bounds are left to collision."""
        agent.x = self.spawn_x

    def animate(self, agent: Agent, clock: float):
        agent.tail_angle = math.sin(clock * 8.0) * 0.3
        agent.fin_angle = math.sin(clock * 6.0) * 0.2

    def idle(self, agent: Agent, clock: float):
        """Hover animation while waiting on the start screen."""
        agent.y = self.spawn_y + math.sin(clock * self.bob_rate) * self.bob_amplitude

    def spawn_agent(self) -> Agent:
        return Agent(x=self.spawn_x, y=self.spawn_y)

    def reset_agent(self, agent: Agent):
        agent.x = self.spawn_x
        agent.y = self.spawn_y
        agent.velocity = 0.0
        agent.tilt = 0.0

    # ---------- Difficulty Controller ----------

    def baseline_difficulty(self) -> DifficultyState:
        return DifficultyState(
            speed=self.base_speed,
            gap_size=self.base_gap,
            active_count=min(self.start_count, self.capacity),
        )

    def reset_difficulty(self, difficulty: DifficultyState):
        baseline = self.baseline_difficulty()
        difficulty.speed = baseline.speed
        difficulty.gap_size = baseline.gap_size
        difficulty.timer = 0.0
        difficulty.level = 0
        difficulty.active_count = baseline.active_count

    def advance_difficulty(self, difficulty: DifficultyState, dt: float) -> bool:
        """
        Accumulates play time and applies one difficulty step each time the
        interval elapses. Returns True when a step fired this frame.
        """
        difficulty.timer += dt
        if difficulty.timer < self.difficulty_interval:
            return False

        difficulty.timer = 0.0
        difficulty.level += 1
        difficulty.speed += self.speed_increment
        if difficulty.gap_size > self.gap_floor:
            difficulty.gap_size = max(self.gap_floor, difficulty.gap_size - self.gap_decrement)
        difficulty.active_count = min(self.capacity, difficulty.active_count + self.active_growth)
        return True

    # ---------- Obstacle Scheduler ----------

    def gap_range(self, gap_size: float) -> Tuple[float, float]:
        """Returns (min_gap, max_gap) for the gap offset at the given gap size."""
        min_gap = self.gap_low + self.agent_margin
        max_gap = self.gap_high - gap_size - self.agent_margin
        return min_gap, max_gap

    def roll_gap(self, gap_size: float) -> float:
        min_gap, max_gap = self.gap_range(gap_size)
        if max_gap <= min_gap:
            return min_gap
        return self.rng.uniform(min_gap, max_gap)

    def build_obstacles(self, difficulty: DifficultyState) -> List[Obstacle]:
        obstacles = [Obstacle(x=0.0, gap_y=0.0) for _ in range(self.capacity)]
        self.reset_obstacles(obstacles, difficulty)
        return obstacles

    def reset_obstacles(self, obstacles: List[Obstacle], difficulty: DifficultyState):
        for i, obstacle in enumerate(obstacles):
            obstacle.x = self.first_x(i)
            obstacle.gap_y = self.roll_gap(difficulty.gap_size)
            obstacle.passed = False
            obstacle.active = i < difficulty.active_count

    def farthest(self, obstacles: List[Obstacle]) -> float:
        return max(o.x for o in obstacles if o.active)

    def recycle(self, obstacle: Obstacle, obstacles: List[Obstacle], gap_size: float):
        """Moves an obstacle ahead of the farthest one with a fresh gap."""
        obstacle.x = self.respawn_x(self.farthest(obstacles))
        obstacle.gap_y = self.roll_gap(gap_size)
        obstacle.passed = False

    def activate_obstacles(self, obstacles: List[Obstacle], difficulty: DifficultyState) -> int:
        """Brings parked arena slots into play up to the active count."""
        activated = 0
        for obstacle in obstacles[:difficulty.active_count]:
            if obstacle.active:
                continue
            self.recycle(obstacle, obstacles, difficulty.gap_size)
            obstacle.active = True
            activated += 1
        return activated

    def step_obstacles(self, session: GameSession, dt: float) -> int:
        """
        Scrolls every active obstacle, awards points for each first pass and
        recycles obstacles that left the play field. Returns the number of passes.
        """
        difficulty = session.difficulty
        active = session.active_obstacles()
        delta_x = difficulty.speed * dt

        for obstacle in active:
            obstacle.x -= delta_x

        passes = 0
        for obstacle in active:
            if not obstacle.passed and self.has_passed(session.agent, obstacle):
                obstacle.passed = True
                session.score += self.points_for(session)
                passes += 1

            if self.is_despawned(obstacle):
                self.recycle(obstacle, active, difficulty.gap_size)

        return passes

    # ---------- Collision Detector ----------

    def out_of_bounds(self, y: float) -> bool:
        return y <= self.floor or y >= self.ceiling

    def check_collision(self, agent: Agent, obstacles: List[Obstacle], gap_size: float) -> bool:
        """Checks for collisions with floor, ceiling, or any active obstacle."""
        if self.out_of_bounds(agent.y):
            return True

        for obstacle in obstacles:
            if obstacle.active and self.hits_obstacle(agent, obstacle, gap_size):
                return True

        return False

    # ---------- Session ----------

    def create_session(self, high_score: int = 0) -> GameSession:
        difficulty = self.baseline_difficulty()
        return GameSession(
            agent=self.spawn_agent(),
            obstacles=self.build_obstacles(difficulty),
            difficulty=difficulty,
            high_score=high_score,
        )

    def reset_session(self, session: GameSession):
        """Returns agent, obstacles, difficulty and score to their baseline."""
        self.reset_agent(session.agent)
        self.reset_difficulty(session.difficulty)
        self.reset_obstacles(session.obstacles, session.difficulty)
        session.score = 0
        session.clock = 0.0
        session.play_time = 0.0

    # ---------- Variant hooks ----------

    def first_x(self, index: int) -> float:
        raise NotImplementedError

    def respawn_x(self, farthest_x: float) -> float:
        raise NotImplementedError

    def has_passed(self, agent: Agent, obstacle: Obstacle) -> bool:
        raise NotImplementedError

    def is_despawned(self, obstacle: Obstacle) -> bool:
        raise NotImplementedError

    def points_for(self, session: GameSession) -> int:
        raise NotImplementedError

    def hits_obstacle(self, agent: Agent, obstacle: Obstacle, gap_size: float) -> bool:
        raise NotImplementedError
