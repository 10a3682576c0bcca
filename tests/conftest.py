import os
import random

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest
from pygame import Vector2

from asteroid_field.config import GameConfig
from asteroid_field.game import Asteroid, Bullet, Ship
from asteroid_field.world import InputState, WorldState


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def scroll_config():
    return GameConfig.for_mode("scroll")


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def idle():
    return InputState()


@pytest.fixture
def make_asteroid():
    def _make(x, y, radius=20, vx=0.0, vy=0.0):
        return Asteroid(Vector2(x, y), radius, Vector2(vx, vy))
    return _make


@pytest.fixture
def make_bullet():
    def _make(x, y, life=60, vx=0.0, vy=0.0):
        return Bullet(Vector2(x, y), Vector2(vx, vy), life)
    return _make


@pytest.fixture
def make_world(config):
    """World with hand-placed entities and a ship at rest in the centre."""
    def _make(asteroids=(), bullets=(), ship_pos=None, cfg=None, lives=None):
        cfg = cfg or config
        ship = Ship(Vector2(ship_pos if ship_pos is not None else cfg.center), cfg)
        return WorldState(
            ship=ship,
            asteroids=list(asteroids),
            bullets=list(bullets),
            lives=cfg.start_lives if lives is None else lives,
        )
    return _make
