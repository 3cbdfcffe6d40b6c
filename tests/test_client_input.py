import pygame
import pytest

from flappy_fish.data_models import GameState, InputSnapshot
from flappy_fish.flappy_client import ButtonLayout, read_input


@pytest.fixture
def buttons():
    layout = ButtonLayout()
    layout.update(1280, 720)
    return layout


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def test_no_events_no_input(buttons):
    snap, quit_requested = read_input([], GameState.PLAYING, buttons)
    assert snap == InputSnapshot()
    assert not quit_requested


def test_arrow_keys_start(buttons):
    snap, _ = read_input([key(pygame.K_LEFT)], GameState.START, buttons)
    assert snap.start
    assert not snap.flap


def test_space_flaps_and_restarts(buttons):
    snap, _ = read_input([key(pygame.K_SPACE)], GameState.PLAYING, buttons)
    assert snap.flap and snap.restart and snap.start


def test_p_toggles_pause(buttons):
    snap, _ = read_input([key(pygame.K_p)], GameState.PAUSED, buttons)
    assert snap.pause


def test_click_flaps_unless_on_pause_button(buttons):
    snap, _ = read_input([click((300, 300))], GameState.PLAYING, buttons)
    assert snap.flap and not snap.pause

    snap, _ = read_input([click(buttons.pause.rect.center)], GameState.PLAYING, buttons)
    assert snap.pause and not snap.flap


def test_paused_clicks_need_a_button(buttons):
    snap, _ = read_input([click((5, 700))], GameState.PAUSED, buttons)
    assert snap == InputSnapshot()

    snap, _ = read_input([click(buttons.resume.rect.center)], GameState.PAUSED, buttons)
    assert snap.pause

    snap, _ = read_input([click(buttons.play_again.rect.center)], GameState.PAUSED, buttons)
    assert snap.restart and not snap.pause


def test_any_click_restarts_after_game_over(buttons):
    snap, _ = read_input([click((5, 5))], GameState.GAME_OVER, buttons)
    assert snap.restart


def test_quit_and_escape(buttons):
    _, quit_requested = read_input([pygame.event.Event(pygame.QUIT)], GameState.START, buttons)
    assert quit_requested
    _, quit_requested = read_input([key(pygame.K_ESCAPE)], GameState.PLAYING, buttons)
    assert quit_requested


def test_buttons_follow_window_size():
    layout = ButtonLayout()
    layout.update(480, 800)
    assert layout.start.rect.width == 220
    assert layout.pause.rect.right == 480 - 12
    assert layout.play_again.rect.top == layout.resume.rect.bottom
