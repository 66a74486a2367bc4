from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from falling_blocks.game import Action, FallingBlocksGame, GameConfig, GameOver, Phase
from .renderer import Renderer
from .timer import PygameScheduler


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def apply_focus_change(game: FallingBlocksGame, focused: bool, focus_paused: bool) -> bool:
    """Pause on focus loss; on regain, resume only a pause that focus loss caused."""
    if not focused:
        if game.phase is Phase.RUNNING:
            game.set_paused(True)
            return True
        return focus_paused
    if focus_paused:
        game.set_paused(False)
    return False


def _announce_game_over(event) -> None:
    if isinstance(event, GameOver):
        print(f"Game Over! Score: {event.score}")


def run(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    scheduler = PygameScheduler()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlocksGame(GameConfig(random_seed=args.seed), scheduler=scheduler)
        game.add_listener(_announce_game_over)
        renderer = Renderer(cell_size=args.cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Falling Blocks")

        running = True
        focus_paused = False
        while running:
            for event in pygame.event.get():
                if scheduler.handle_event(event):
                    continue
                if event.type == pygame.QUIT:
                    running = False
                elif event.type in (pygame.WINDOWFOCUSLOST, pygame.WINDOWFOCUSGAINED):
                    focus_paused = apply_focus_change(game, event.type == pygame.WINDOWFOCUSGAINED, focus_paused)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_r, pygame.K_RETURN):
                        game.start()
                    elif event.key == pygame.K_p:
                        game.set_paused(game.phase is Phase.RUNNING)
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        scheduler.cancel()
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
