from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from cubes.game import BOARD_HEIGHT, BOARD_WIDTH, Action, GameConfig, Phase, TetrisGame, TickResult
from .renderer import Renderer

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 750
WINDOW_HEIGHT = 800


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_LCTRL: Action.ROTATE_CCW,
    pygame.K_RCTRL: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
}


def translate_key(key: int) -> Action:
    return KEY_TO_ACTION.get(key, Action.NONE)


def step_frame(game: TetrisGame, action: Action, key_pressed: bool, dt: float) -> TickResult:
    # the title and game-over screens accept any key, mapped or not
    if key_pressed and action is Action.NONE and game.phase in (Phase.START, Phase.GAME_OVER):
        return game.advance()
    return game.tick(action, dt)


def run(seed: Optional[int] = None, fps: int = 60, cell_size: int = 25) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed))

        width = max(WINDOW_WIDTH, cell_size * (BOARD_WIDTH + 12))
        height = max(WINDOW_HEIGHT, cell_size * BOARD_HEIGHT + 200)
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Cubes")
        renderer = Renderer(screen, cell_size=cell_size, board_size=(BOARD_WIDTH, BOARD_HEIGHT))

        running = True
        dt = 0.0
        while running:
            # Input handling: the last key of the frame wins
            action = Action.NONE
            key_pressed = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logger.info("window closed")
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        key_pressed = True
                        action = translate_key(event.key)
            if not running:
                break

            result = step_frame(game, action, key_pressed, dt)
            if not result.ok:
                logger.error("tick failed: %s", result.error)

            game.render(renderer)
            pygame.display.flip()

            dt = clock.tick(fps) / 1000.0
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Cubes, a falling-block puzzle game.")
    p.add_argument("--seed", type=int, default=None, help="Fixed seed for the piece generator")
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--cell-size", type=int, default=25)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(seed=args.seed, fps=args.fps, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
