#!/usr/bin/env python3
"""
flappy_client.py

pygame frontend: input mapping, buttons, rendering and audio around the
GameEngine. The engine never touches pygame; this module only reads
GameSession.to_render_state() and the events returned by each step.
"""

import argparse
import logging
import math
import os
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pygame

from .constants import (
    WINDOW_WIDTH, WINDOW_HEIGHT, RENDER_FPS, MAX_FRAME_TIME,
    FISH_HIGH_SCORE_FILE, BIRD_HIGH_SCORE_FILE, MUSIC_FILE, HIT_SOUND_FILE,
    FISH_SPAWN_Y, OBSTACLE_RADIUS, OBSTACLE_HEIGHT, CAMERA_DISTANCE, CAMERA_FOVY, BUBBLE_COUNT,
    SCREEN_WIDTH, SCREEN_HEIGHT, BIRD_SIZE, PIPE_WIDTH,
)
from .data_models import GameEvent, GameState, InputSnapshot
from .game_engine import GameEngine
from .physics_bird import BirdEngine
from .physics_fish import FishEngine
from .score_store import HighScoreStore

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
LIGHTGRAY = (200, 200, 200)
GOLD = (255, 203, 0)
RED = (230, 41, 55)

START_KEYS = (pygame.K_UP, pygame.K_DOWN, pygame.K_LEFT, pygame.K_RIGHT, pygame.K_SPACE)
FLAP_KEYS = (pygame.K_UP, pygame.K_SPACE)


# ----------------- Buttons -----------------

@dataclass
class Button:
    text: str
    color: Tuple[int, int, int]
    rect: pygame.Rect = None

    def hit(self, pos) -> bool:
        return self.rect is not None and self.rect.collidepoint(pos)


class ButtonLayout:
    """Start/pause/resume/play-again buttons placed for the current window size."""

    def __init__(self):
        self.start = Button("START GAME", (0, 121, 241))
        self.pause = Button("PAUSE", (80, 80, 80))
        self.resume = Button("RESUME", (0, 121, 241))
        self.play_again = Button("PLAY AGAIN", (211, 176, 131))

    def update(self, width: int, height: int):
        bw = max(220, min(500, width * 0.45))
        bh = 80
        x = (width - bw) / 2
        y = (height - bh) / 2
        self.start.rect = pygame.Rect(x, y, bw, bh)
        self.resume.rect = pygame.Rect(x, y, bw, bh)
        self.play_again.rect = pygame.Rect(x, y + 80, bw, bh)

        pw, ph = 110, 36
        self.pause.rect = pygame.Rect(width - pw - 12, 12, pw, ph)


# ----------------- Input -----------------

def read_input(events: List[pygame.event.Event], state: GameState,
               buttons: ButtonLayout) -> Tuple[InputSnapshot, bool]:
    """
    Turns this frame's pygame events into an edge-triggered InputSnapshot.
    Returns the snapshot and whether the player asked to quit.
    """
    snap = InputSnapshot()
    quit_requested = False

    for event in events:
        if event.type == pygame.QUIT:
            quit_requested = True

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                quit_requested = True
            if event.key in START_KEYS:
                snap.start = True
            if event.key in FLAP_KEYS:
                snap.flap = True
                snap.restart = True
            if event.key == pygame.K_p:
                snap.pause = True

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            pos = event.pos
            if state is GameState.START:
                snap.start = True
            elif state is GameState.PLAYING:
                if buttons.pause.hit(pos):
                    snap.pause = True
                else:
                    snap.flap = True
            elif state is GameState.PAUSED:
                if buttons.resume.hit(pos):
                    snap.pause = True
                elif buttons.play_again.hit(pos):
                    snap.restart = True
            elif state is GameState.GAME_OVER:
                snap.restart = True

    return snap, quit_requested


# ----------------- Audio -----------------

class SoundBoard:
    """Optional background music and hit sound. Missing files just stay silent."""

    def __init__(self, music_file: str = MUSIC_FILE, hit_file: str = HIT_SOUND_FILE):
        self.enabled = False
        self.has_music = False
        self.music_paused = False
        self.hit_sound: Optional[pygame.mixer.Sound] = None

        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            return
        self.enabled = True

        if os.path.exists(music_file):
            try:
                pygame.mixer.music.load(music_file)
                self.has_music = True
            except pygame.error as e:
                logger.warning("Could not load music %s: %s", music_file, e)

        if os.path.exists(hit_file):
            try:
                self.hit_sound = pygame.mixer.Sound(hit_file)
            except pygame.error as e:
                logger.warning("Could not load sound %s: %s", hit_file, e)

    def handle(self, events: List[GameEvent], state: GameState):
        if not self.enabled:
            return

        if GameEvent.COLLISION in events:
            if self.has_music:
                pygame.mixer.music.stop()
            if self.hit_sound:
                self.hit_sound.play()
            return

        if GameEvent.STATE_CHANGED in events and self.has_music:
            if state is GameState.PLAYING:
                if self.music_paused:
                    pygame.mixer.music.unpause()
                else:
                    pygame.mixer.music.play(-1)
                self.music_paused = False
            elif state is GameState.PAUSED:
                pygame.mixer.music.pause()
                self.music_paused = True


# ----------------- HUD -----------------

class Hud:
    """State overlays, score text and buttons shared by both renderers."""

    def __init__(self, buttons: ButtonLayout):
        self.buttons = buttons
        self.fonts: Dict[int, pygame.font.Font] = {}

    def font(self, size: int) -> pygame.font.Font:
        if size not in self.fonts:
            self.fonts[size] = pygame.font.Font(None, size)
        return self.fonts[size]

    def text(self, screen, message: str, size: int, color, pos, centered: bool = False):
        surf = self.font(size).render(message, True, color)
        x, y = pos
        if centered:
            x -= surf.get_width() // 2
        screen.blit(surf, (x, y))

    def overlay(self, screen, color, alpha: int):
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill((*color, alpha))
        screen.blit(shade, (0, 0))

    def button(self, screen, button: Button, size: int):
        pygame.draw.rect(screen, button.color, button.rect)
        surf = self.font(size).render(button.text, True, WHITE)
        screen.blit(surf, surf.get_rect(center=button.rect.center))

    def draw(self, screen, view: dict, fps: float):
        w, h = screen.get_size()
        cx, cy = w // 2, h // 2
        state = view["state"]

        if state == GameState.START.value:
            self.overlay(screen, (0, 0, 0), 128)
            if view["high_score"] > 0:
                self.text(screen, f"High Score: {view['high_score']}", 32, GOLD, (cx, cy + 90), True)
            self.button(screen, self.buttons.start, 40)

        elif state == GameState.PLAYING.value:
            self.text(screen, f"Score: {view['score']}", 64, WHITE, (30, 30))
            self.text(screen, f"High: {view['high_score']}", 40, LIGHTGRAY, (30, 90))
            self.button(screen, self.buttons.pause, 24)

        elif state == GameState.PAUSED.value:
            self.overlay(screen, (0, 0, 0), 102)
            self.text(screen, "PAUSED", 100, WHITE, (cx, cy - 220), True)
            self.button(screen, self.buttons.resume, 40)
            self.button(screen, self.buttons.play_again, 34)

        elif state == GameState.GAME_OVER.value:
            self.overlay(screen, (230, 41, 55), 77)
            self.text(screen, "GAME OVER!", 80, RED, (cx, cy - 120), True)
            self.text(screen, f"Score: {view['score']}", 52, WHITE, (cx, cy), True)
            self.text(screen, "Press ARROW key to restart", 40, LIGHTGRAY, (cx, cy + 180), True)
            self.button(screen, self.buttons.play_again, 40)

        self.text(screen, f"{fps:.0f} FPS", 24, (0, 228, 48), (w - 120, 10))


# ----------------- Fish Renderer -----------------

@dataclass
class Bubble:
    x: float
    y: float
    z: float
    speed: float
    size: float
    wobble: float
    alpha: float


class FishRenderer:
    """
    Side view of the fish world, as seen from a camera at z = -CAMERA_DISTANCE.
    Bubbles and seaweed are purely decorative and live only here.
    """

    OCEAN = (0, 40, 80)
    SAND = (101, 67, 33)
    CORAL = (255, 127, 80)
    CORAL_DARK = (200, 90, 60)
    ORANGE = (255, 161, 0)
    DARKORANGE = (255, 140, 0)

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.bubbles = [self._new_bubble(self.rng.uniform(0, 10)) for _ in range(BUBBLE_COUNT)]
        self.camera_y = FISH_SPAWN_Y
        self.ppu = 1.0
        self.size = (0, 0)

    def _new_bubble(self, y: float) -> Bubble:
        rng = self.rng
        return Bubble(
            x=rng.randrange(60) - 30.0,
            y=y,
            z=rng.randrange(40) - 20.0,
            speed=0.3 + rng.randrange(100) / 100.0,
            size=0.08 + rng.randrange(100) / 400.0,
            wobble=float(rng.randrange(360)),
            alpha=0.4 + rng.randrange(60) / 100.0,
        )

    def update(self, view: dict, dt: float):
        if view["state"] != GameState.PLAYING.value:
            if view["state"] == GameState.START.value:
                self.camera_y = FISH_SPAWN_Y
            return

        self.camera_y = view["agent"]["y"]
        for b in self.bubbles:
            b.y += b.speed * dt
            b.wobble += dt * 2
            b.x += math.sin(b.wobble) * 0.2 * dt
            if b.y > 10:
                b.y = 0.0
                b.x = self.rng.randrange(60) - 30.0
                b.z = self.rng.randrange(40) - 20.0

    def to_screen(self, x: float, y: float, z: float = 0.0) -> Tuple[float, float]:
        w, h = self.size
        scale = CAMERA_DISTANCE / max(CAMERA_DISTANCE + z, 1.0)
        return (w / 2 + x * self.ppu * scale,
                h / 2 - (y - self.camera_y) * self.ppu * scale)

    def draw(self, screen, view: dict):
        self.size = screen.get_size()
        half_view = CAMERA_DISTANCE * math.tan(math.radians(CAMERA_FOVY / 2))
        self.ppu = (self.size[1] / 2) / half_view

        screen.fill(self.OCEAN)
        self._draw_ocean(screen, view["clock"])
        self._draw_bubbles(screen)
        for obstacle in view["obstacles"]:
            self._draw_obstacle(screen, obstacle)
        self._draw_fish(screen, view["agent"])

    def _draw_ocean(self, screen, clock: float):
        w, h = self.size
        _, sand_top = self.to_screen(0, 0)
        if sand_top < h:
            pygame.draw.rect(screen, self.SAND, (0, sand_top, w, h - sand_top))

        for i in range(40):
            x = i * 5 - 45.0
            sway = math.sin(clock * 2 + i) * 0.3
            base = self.to_screen(x, 0)
            tip = self.to_screen(x + sway, 1.5)
            pygame.draw.line(screen, (0, 117, 44), base, tip, max(2, int(0.2 * self.ppu)))
            pygame.draw.circle(screen, (0, 228, 48), tip, max(2, int(0.15 * self.ppu)))

    def _draw_bubbles(self, screen):
        for b in self.bubbles:
            if b.z <= -CAMERA_DISTANCE + 1:
                continue
            pos = self.to_screen(b.x, b.y, b.z)
            radius = max(1, int(b.size * self.ppu * CAMERA_DISTANCE / (CAMERA_DISTANCE + b.z)))
            surf = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(surf, (200, 220, 255, int(b.alpha * 180)), (radius, radius), radius)
            screen.blit(surf, (pos[0] - radius, pos[1] - radius))

    def _draw_obstacle(self, screen, obstacle: dict):
        width = OBSTACLE_RADIUS * 2 * self.ppu
        left = self.to_screen(obstacle["x"], 0)[0] - width / 2

        for low, high in ((0.0, obstacle["gap_y"]), (obstacle["gap_end"], OBSTACLE_HEIGHT)):
            if high <= low:
                continue
            top = self.to_screen(0, high)[1]
            bottom = self.to_screen(0, low)[1]
            rect = pygame.Rect(left, top, width, bottom - top)
            pygame.draw.rect(screen, self.CORAL, rect)
            pygame.draw.rect(screen, self.CORAL_DARK, rect, 2)

    def _draw_fish(self, screen, agent: dict):
        ppu = self.ppu
        size = int(3 * ppu)
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        c = size / 2

        # Tail swings around its hinge behind the body.
        swing = math.cos(agent["tail"]) * 0.5 * ppu
        tail = [(c - 0.7 * ppu, c), (c - 0.7 * ppu - swing, c - 0.3 * ppu),
                (c - 0.7 * ppu - swing, c + 0.3 * ppu)]
        pygame.draw.polygon(sprite, self.DARKORANGE, tail)
        fin_h = (0.4 + agent["fin"]) * ppu
        pygame.draw.polygon(sprite, self.ORANGE, [(c - 0.2 * ppu, c - 0.4 * ppu),
                                                  (c + 0.2 * ppu, c - 0.4 * ppu),
                                                  (c, c - 0.4 * ppu - fin_h)])
        pygame.draw.circle(sprite, self.ORANGE, (c, c), 0.6 * ppu)
        pygame.draw.circle(sprite, self.ORANGE, (c + 0.3 * ppu, c), 0.4 * ppu)
        pygame.draw.circle(sprite, WHITE, (c + 0.5 * ppu, c - 0.2 * ppu), 0.12 * ppu)
        pygame.draw.circle(sprite, (0, 0, 0), (c + 0.55 * ppu, c - 0.2 * ppu), 0.06 * ppu)

        # Fish tilt is negative while rising; rotate nose-up for that.
        rotated = pygame.transform.rotate(sprite, -agent["tilt"])
        center = self.to_screen(agent["x"], agent["y"])
        screen.blit(rotated, rotated.get_rect(center=center))


# ----------------- Bird Renderer -----------------

class BirdRenderer:
    """Flat 2D view; the simulation already runs in screen pixels."""

    SKY = (0, 191, 255)
    PIPE = (0, 150, 0)
    PIPE_EDGE = (0, 100, 0)
    BIRD = (255, 215, 0)

    def update(self, view: dict, dt: float):
        pass

    def draw(self, screen, view: dict):
        screen.fill(self.SKY)
        h = screen.get_height()

        for pipe in view["obstacles"]:
            top = pygame.Rect(pipe["x"], 0, PIPE_WIDTH, pipe["gap_y"])
            bottom = pygame.Rect(pipe["x"], pipe["gap_end"], PIPE_WIDTH, h - pipe["gap_end"])
            for rect in (top, bottom):
                pygame.draw.rect(screen, self.PIPE, rect)
                pygame.draw.rect(screen, self.PIPE_EDGE, rect, 3)

        agent = view["agent"]
        sprite = pygame.Surface((BIRD_SIZE, BIRD_SIZE), pygame.SRCALPHA)
        pygame.draw.ellipse(sprite, self.BIRD, (0, 4, BIRD_SIZE, BIRD_SIZE - 8))
        pygame.draw.circle(sprite, WHITE, (BIRD_SIZE * 3 // 4, BIRD_SIZE // 3), 5)
        pygame.draw.circle(sprite, (0, 0, 0), (BIRD_SIZE * 3 // 4 + 2, BIRD_SIZE // 3), 2)
        pygame.draw.polygon(sprite, (255, 120, 0), [(BIRD_SIZE - 4, BIRD_SIZE // 2 - 3),
                                                     (BIRD_SIZE, BIRD_SIZE // 2),
                                                     (BIRD_SIZE - 4, BIRD_SIZE // 2 + 3)])
        rotated = pygame.transform.rotate(sprite, agent["tilt"])
        center = (agent["x"] + BIRD_SIZE / 2, agent["y"] + BIRD_SIZE / 2)
        screen.blit(rotated, rotated.get_rect(center=center))


# ----------------- Game Client -----------------

class FlappyClient:
    def __init__(self, variant: str = "fish", highscore_file: Optional[str] = None,
                 fps: int = RENDER_FPS, fullscreen: bool = True):
        pygame.init()
        self.variant = variant
        self.fps = fps

        if variant == "fish":
            core = FishEngine()
            store = HighScoreStore(highscore_file or FISH_HIGH_SCORE_FILE)
            if fullscreen:
                self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            else:
                self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
            self.renderer = FishRenderer()
            pygame.display.set_caption("3D Flappy Fish")
        else:
            core = BirdEngine()
            store = HighScoreStore(highscore_file or BIRD_HIGH_SCORE_FILE)
            self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
            self.renderer = BirdRenderer()
            pygame.display.set_caption("Flappy Bird")

        self.engine = GameEngine(core, store)
        self.buttons = ButtonLayout()
        self.hud = Hud(self.buttons)
        self.sound = SoundBoard()
        self.clock = pygame.time.Clock()

    def run(self):
        """The main client execution loop."""
        running = True
        while running:
            dt = min(self.clock.tick(self.fps) / 1000.0, MAX_FRAME_TIME)
            self.buttons.update(*self.screen.get_size())

            inputs, quit_requested = read_input(pygame.event.get(), self.engine.state, self.buttons)
            if quit_requested:
                running = False

            events = self.engine.step(inputs, dt)
            self.sound.handle(events, self.engine.state)
            if GameEvent.NEW_HIGH_SCORE in events:
                logger.info("New high score: %d", self.engine.session.high_score)

            view = self.engine.session.to_render_state()
            self.renderer.update(view, dt)
            self.renderer.draw(self.screen, view)
            self.hud.draw(self.screen, view, self.clock.get_fps())
            pygame.display.flip()

        pygame.quit()


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Flappy Fish / Flappy Bird")
    parser.add_argument("--variant", choices=("fish", "bird"), default="fish",
                        help="3D-world fish game or flat 2D bird game")
    parser.add_argument("--highscore-file", default=None,
                        help="where the best score is kept")
    parser.add_argument("--fps", type=int, default=RENDER_FPS)
    parser.add_argument("--windowed", action="store_true",
                        help="run the fish variant in a window instead of fullscreen")
    parser.add_argument("--log-level", default="warning")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(f"Starting Flappy {args.variant.capitalize()} at {args.fps} FPS.")
    client = FlappyClient(args.variant, args.highscore_file, args.fps, fullscreen=not args.windowed)
    client.run()


if __name__ == "__main__":
    main()
