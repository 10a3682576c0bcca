import argparse
import logging
import random
import sys

import pygame

from asteroid_field.config import MODE_SCROLL, MODE_WRAP, ConfigError, GameConfig
from asteroid_field.render import Renderer, open_window
from asteroid_field.simulation import step
from asteroid_field.world import InputState, new_world

logger = logging.getLogger(__name__)


class KeyboardInput:
    """Turns pygame key state into an InputState once per frame."""

    LEFT = (pygame.K_LEFT, pygame.K_a)
    RIGHT = (pygame.K_RIGHT, pygame.K_d)
    THRUST = (pygame.K_UP, pygame.K_w)
    FIRE = (pygame.K_SPACE,)

    def poll(self):
        """Return the current InputState, or None once the player quits"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                return None

        keys = pygame.key.get_pressed()

        def down(codes):
            return any(keys[code] for code in codes)

        return InputState(
            left=down(self.LEFT),
            right=down(self.RIGHT),
            thrust=down(self.THRUST),
            fire=down(self.FIRE),
        )


class FrameDriver:
    """Read input, simulate, present. Pacing belongs to the presenter's host clock."""

    def __init__(self, world, config, input_source, presenter, rng=random):
        self.world = world
        self.config = config
        self.input_source = input_source
        self.presenter = presenter
        self.rng = rng

    def tick(self) -> bool:
        inputs = self.input_source.poll()
        if inputs is None:
            return False
        events = step(self.world, inputs, self.config, self.rng)
        self.presenter.present(self.world.snapshot(self.config), events)
        return True

    def run(self) -> int:
        """Tick until the input source says stop. Returns the number of frames run."""
        frames = 0
        while self.tick():
            frames += 1
        logger.info("Stopped after %d frames, score %d", frames, self.world.score)
        return frames


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Asteroids")
    parser.add_argument("--mode", choices=(MODE_WRAP, MODE_SCROLL), default=MODE_WRAP,
                        help="wrap: single screen with wrap-around edges; scroll: large world with camera and objective")
    parser.add_argument("--seed", type=int, default=None, help="random seed for a reproducible asteroid field")
    parser.add_argument("--asteroids", type=int, default=None, help="asteroids per wave")
    parser.add_argument("--lives", type=int, default=None, help="lives per game")
    parser.add_argument("--log-level", default="INFO", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return parser.parse_args(argv)


def build_config(args) -> GameConfig:
    overrides = {}
    if args.asteroids is not None:
        overrides["asteroid_count"] = args.asteroids
    if args.lives is not None:
        overrides["start_lives"] = args.lives
    return GameConfig.for_mode(args.mode, **overrides)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        config = build_config(args)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    rng = random.Random(args.seed)
    world = new_world(config, rng)
    renderer = Renderer(open_window(), (config.world_width, config.world_height), args.seed)
    logger.info("Starting %s mode, world %dx%d", config.mode, config.world_width, config.world_height)
    try:
        FrameDriver(world, config, KeyboardInput(), renderer, rng).run()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
