import pygame
import pytest

from falling_blocks.game import FallingBlocksGame, GameConfig, Phase
from falling_blocks.visualization.human_play import apply_focus_change
from falling_blocks.visualization.renderer import Renderer
from falling_blocks.visualization.timer import GRAVITY_EVENT, PygameScheduler


@pytest.fixture
def timer_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(pygame.time, "set_timer", lambda event, ms: calls.append((event, ms)))
    return calls


def test_pygame_scheduler_rearms_single_timer(timer_calls):
    scheduler = PygameScheduler()
    game = FallingBlocksGame(GameConfig(random_seed=0), scheduler=scheduler)
    game.start()
    assert timer_calls == [(GRAVITY_EVENT, 1000)]

    scheduler.rearm(900)
    assert timer_calls[-2:] == [(GRAVITY_EVENT, 0), (GRAVITY_EVENT, 900)]

    game.set_paused(True)
    assert timer_calls[-1] == (GRAVITY_EVENT, 0)
    assert not scheduler.active


def test_pygame_scheduler_turns_event_into_tick(timer_calls):
    scheduler = PygameScheduler()
    game = FallingBlocksGame(GameConfig(random_seed=0), scheduler=scheduler)
    game.start()
    y0 = game.state.current.y
    assert scheduler.handle_event(pygame.event.Event(GRAVITY_EVENT))
    assert game.state.current.y == y0 + 1
    assert not scheduler.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT))


def test_renderer_draws_snapshot(timer_calls):
    pygame.init()
    try:
        game = FallingBlocksGame(GameConfig(random_seed=0))
        game.start()
        renderer = Renderer(cell_size=10)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        renderer.draw(screen, game.snapshot())
        assert game.phase is Phase.RUNNING
        assert screen.get_size() == (10 * 10 + 60 + 60, 20 * 10 + 40)
    finally:
        pygame.quit()


def test_rearm_discards_queued_timer_events(timer_calls):
    pygame.init()
    try:
        pygame.display.set_mode((10, 10))
        scheduler = PygameScheduler()
        game = FallingBlocksGame(GameConfig(random_seed=0), scheduler=scheduler)
        game.start()
        y0 = game.state.current.y
        pygame.event.post(pygame.event.Event(GRAVITY_EVENT))

        scheduler.rearm(950)
        for event in pygame.event.get():
            scheduler.handle_event(event)
        assert game.state.current.y == y0

        pygame.event.post(pygame.event.Event(GRAVITY_EVENT))
        for event in pygame.event.get():
            scheduler.handle_event(event)
        assert game.state.current.y == y0 + 1
    finally:
        pygame.quit()


def test_focus_loss_pauses_and_regain_resumes(timer_calls):
    game = FallingBlocksGame(GameConfig(random_seed=0), scheduler=PygameScheduler())
    game.start()
    focus_paused = apply_focus_change(game, False, False)
    assert focus_paused
    assert game.phase is Phase.PAUSED

    focus_paused = apply_focus_change(game, True, focus_paused)
    assert not focus_paused
    assert game.phase is Phase.RUNNING
    assert timer_calls[-1] == (GRAVITY_EVENT, 1000)


def test_focus_regain_keeps_manual_pause(timer_calls):
    game = FallingBlocksGame(GameConfig(random_seed=0), scheduler=PygameScheduler())
    game.start()
    game.set_paused(True)
    focus_paused = apply_focus_change(game, False, False)
    assert not focus_paused
    apply_focus_change(game, True, focus_paused)
    assert game.phase is Phase.PAUSED
