"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List


class GameState(Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    """Discrete signals emitted by the engine for audio and UI layers."""
    FLAP = "flap"
    SCORED = "scored"
    COLLISION = "collision"
    NEW_HIGH_SCORE = "new_high_score"
    STATE_CHANGED = "state_changed"


@dataclass
class InputSnapshot:
    """Edge-triggered inputs for a single frame (pressed, not held)."""
    flap: bool = False
    pause: bool = False
    start: bool = False
    restart: bool = False


@dataclass
class Agent:
    """The player-controlled fish or bird."""
    x: float
    y: float
    velocity: float = 0.0
    tilt: float = 0.0           # Cosmetic, degrees
    tail_angle: float = 0.0     # Cosmetic, radians
    fin_angle: float = 0.0      # Cosmetic, radians


@dataclass
class Obstacle:
    """A top/bottom barrier pair with a vertical gap."""
    x: float
    gap_y: float
    passed: bool = False
    active: bool = True


@dataclass
class DifficultyState:
    speed: float
    gap_size: float
    timer: float = 0.0
    level: int = 0
    active_count: int = 0


@dataclass
class GameSession:
    """Everything that changes while a game runs, owned by the GameEngine."""
    agent: Agent
    obstacles: List[Obstacle]
    difficulty: DifficultyState
    state: GameState = GameState.START
    score: int = 0
    high_score: int = 0
    clock: float = 0.0          # Animation time, runs in every state
    play_time: float = 0.0      # Time spent playing since the last reset

    def active_obstacles(self) -> List[Obstacle]:
        return [o for o in self.obstacles if o.active]

    def to_render_state(self) -> dict:
        """Prepares a plain snapshot of the session for a renderer."""
        gap = self.difficulty.gap_size
        return {
            "state": self.state.value,
            "score": self.score,
            "high_score": self.high_score,
            "clock": round(self.clock, 4),
            "agent": {
                "x": round(self.agent.x, 4),
                "y": round(self.agent.y, 4),
                "tilt": round(self.agent.tilt, 2),
                "tail": round(self.agent.tail_angle, 4),
                "fin": round(self.agent.fin_angle, 4),
            },
            "gap_size": round(gap, 4),
            "obstacles": [
                {"x": round(o.x, 4), "gap_y": round(o.gap_y, 4), "gap_end": round(o.gap_y + gap, 4)}
                for o in self.obstacles if o.active
            ],
        }
