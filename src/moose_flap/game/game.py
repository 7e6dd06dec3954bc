# src/moose_flap/game/game.py
import sys, argparse, logging
from pathlib import Path

import pygame
from pygame import K_SPACE, K_ESCAPE

from .config import FPS, GameConfig, ConfigError
from .render import Renderer
from .state import GameState

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Moose Flap")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe layout seed. Omit for a random layout each launch.")
    p.add_argument("--assets", type=Path, default=None,
                   help="Directory with moose.png, door.png, background.jpg (optional).")
    p.add_argument("--fps", type=int, default=FPS, help="Ticks per second.")
    p.add_argument("--debug", action="store_true", help="Verbose logging.")
    return p.parse_args(argv)


def is_action_event(event) -> bool:
    """SPACE key-down or left click: the single flap/restart action."""
    if event.type == pygame.KEYDOWN and event.key == K_SPACE:
        return True
    return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1


def run(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        cfg = GameConfig()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(2)

    pygame.init()
    pygame.display.set_caption("Moose Flap")
    screen = pygame.display.set_mode((cfg.width, cfg.height))
    clock = pygame.time.Clock()

    state = GameState(cfg, seed=args.seed)
    renderer = Renderer(screen, args.assets)
    if renderer.background_width:
        state.background_width = float(renderer.background_width)
    logger.info("Moose Flap started (seed=%s, fps=%d)", state.seed, args.fps)

    try:
        while True:
            clock.tick(args.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key == K_ESCAPE:
                    return
                if is_action_event(event):
                    state.handle_action()

            state.update()
            renderer.draw(state.snapshot())
            pygame.display.flip()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        logger.info("Moose Flap stopped (best score %d)", state.best_score)
        pygame.quit()


if __name__ == "__main__":
    run()
