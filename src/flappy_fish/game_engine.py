"""
game_engine.py: The game state machine. Owns the GameSession and runs the
simulation step for whichever variant core it was built with.
"""

import logging
from typing import Callable, Dict, List, Optional

from .data_models import GameEvent, GameSession, GameState, InputSnapshot
from .physics_core import PhysicsCore
from .score_store import HighScoreStore

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Start -> Playing <-> Paused, Playing -> GameOver -> Playing.
    Call step() once per frame with that frame's inputs and elapsed seconds.
    """

    def __init__(self, core: PhysicsCore, store: Optional[HighScoreStore] = None):
        self.core = core
        self.store = store
        high_score = store.load() if store else 0
        self.session: GameSession = core.create_session(high_score)

        self._handlers: Dict[GameState, Callable[[InputSnapshot, float, List[GameEvent]], None]] = {
            GameState.START: self._update_start,
            GameState.PLAYING: self._update_playing,
            GameState.PAUSED: self._update_paused,
            GameState.GAME_OVER: self._update_game_over,
        }

    @property
    def state(self) -> GameState:
        return self.session.state

    def step(self, inputs: InputSnapshot, dt: float) -> List[GameEvent]:
        """Advances one frame. Returns the events raised during it."""
        events: List[GameEvent] = []
        session = self.session

        session.clock += dt
        self.core.animate(session.agent, session.clock)
        self._handlers[session.state](inputs, dt, events)
        return events

    def reset(self, events: Optional[List[GameEvent]] = None):
        """Full game reset; play resumes immediately."""
        self.core.reset_session(self.session)
        logger.debug("Session reset")
        self._set_state(GameState.PLAYING, events)

    def _set_state(self, state: GameState, events: Optional[List[GameEvent]] = None):
        if state is self.session.state:
            return
        logger.debug("State %s -> %s", self.session.state.value, state.value)
        self.session.state = state
        if events is not None:
            events.append(GameEvent.STATE_CHANGED)

    # ---------- State handlers ----------

    def _update_start(self, inputs: InputSnapshot, dt: float, events: List[GameEvent]):
        self.core.idle(self.session.agent, self.session.clock)
        if inputs.start:
            self._set_state(GameState.PLAYING, events)

    def _update_playing(self, inputs: InputSnapshot, dt: float, events: List[GameEvent]):
        session = self.session
        core = self.core

        # Paused frames are frozen, nothing else runs.
        if inputs.pause:
            self._set_state(GameState.PAUSED, events)
            return

        if inputs.flap:
            events.append(GameEvent.FLAP)

        session.play_time += dt

        # 1. Agent physics
        core.integrate(session.agent, inputs.flap, dt)

        # 2. Difficulty ramp
        if core.advance_difficulty(session.difficulty, dt):
            core.activate_obstacles(session.obstacles, session.difficulty)
            logger.info(
                "Difficulty level %d: speed=%.2f gap=%.2f obstacles=%d",
                session.difficulty.level, session.difficulty.speed,
                session.difficulty.gap_size, session.difficulty.active_count)

        # 3. Obstacles and score
        passes = core.step_obstacles(session, dt)
        events.extend([GameEvent.SCORED] * passes)

        # 4. Collision check
        if core.check_collision(session.agent, session.obstacles, session.difficulty.gap_size):
            self._game_over(events)

    def _update_paused(self, inputs: InputSnapshot, dt: float, events: List[GameEvent]):
        if inputs.pause:
            self._set_state(GameState.PLAYING, events)
        elif inputs.restart:
            self.reset(events)

    def _update_game_over(self, inputs: InputSnapshot, dt: float, events: List[GameEvent]):
        if inputs.restart:
            self.reset(events)

    def _game_over(self, events: List[GameEvent]):
        session = self.session
        self._set_state(GameState.GAME_OVER, events)
        events.append(GameEvent.COLLISION)
        logger.info("Game over with score %d", session.score)

        if session.score > session.high_score:
            session.high_score = session.score
            if self.store:
                self.store.save(session.score)
            events.append(GameEvent.NEW_HIGH_SCORE)
