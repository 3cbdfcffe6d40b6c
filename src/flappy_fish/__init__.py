"""
Flappy Fish: a 3D-world and a 2D take on the flap-through-the-gaps arcade game.
"""

from .data_models import Agent, Obstacle, DifficultyState, GameSession, GameState, GameEvent, InputSnapshot
from .physics_core import PhysicsCore
from .physics_fish import FishEngine
from .physics_bird import BirdEngine
from .game_engine import GameEngine
from .score_store import HighScoreStore

__version__ = "0.1.0"
