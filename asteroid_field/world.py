"""World state owned by the simulation and the read-only views handed to renderers."""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pygame import Vector2

from asteroid_field.config import GameConfig
from asteroid_field.game import Asteroid, Bullet, Objective, Ship, create_objective, init_asteroids

Point = Tuple[float, float]


@dataclass
class InputState:
    """Current key states, written by the input source between ticks."""

    left: bool = False
    right: bool = False
    thrust: bool = False
    fire: bool = False


@dataclass(frozen=True)
class ShipView:
    pos: Point
    angle: float
    thrusting: bool
    radius: float
    invulnerable: bool


@dataclass(frozen=True)
class AsteroidView:
    pos: Point
    radius: float
    angle: float
    shape: int = 0


@dataclass(frozen=True)
class BulletView:
    pos: Point


@dataclass(frozen=True)
class ObjectiveView:
    pos: Point
    radius: float
    reached: bool


@dataclass(frozen=True)
class Snapshot:
    ship: ShipView
    asteroids: Tuple[AsteroidView, ...]
    bullets: Tuple[BulletView, ...]
    score: int
    lives: int
    objective: Optional[ObjectiveView]
    camera_target: Point
    world_size: Point
    mode: str
    wave: int
    tick: int


@dataclass
class WorldState:
    ship: Ship
    asteroids: List[Asteroid] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    score: int = 0
    lives: int = 3
    objective: Optional[Objective] = None
    # Fire key state seen on the previous tick, for edge triggering
    fire_was_down: bool = False
    wave: int = 1
    tick: int = 0

    def snapshot(self, config: GameConfig) -> Snapshot:
        ship = self.ship
        objective = None
        if self.objective is not None:
            objective = ObjectiveView(
                (self.objective.pos.x, self.objective.pos.y), self.objective.radius, self.objective.reached
            )
        return Snapshot(
            ship=ShipView((ship.pos.x, ship.pos.y), ship.angle, ship.thrusting, ship.radius, ship.invulnerable),
            asteroids=tuple(AsteroidView((a.pos.x, a.pos.y), a.radius, a.angle, a.shape) for a in self.asteroids),
            bullets=tuple(BulletView((b.pos.x, b.pos.y)) for b in self.bullets),
            score=self.score,
            lives=self.lives,
            objective=objective,
            camera_target=(ship.pos.x, ship.pos.y),
            world_size=(config.world_width, config.world_height),
            mode=config.mode,
            wave=self.wave,
            tick=self.tick,
        )


def spawn_wave(world: WorldState, config: GameConfig, rng=random) -> None:
    world.asteroids = init_asteroids(
        config.asteroid_count, config.asteroid_size, config, world.ship.pos, config.min_spawn_distance, rng
    )


def reset_game(world: WorldState, config: GameConfig, rng=random) -> None:
    """Full reset after the last life is lost."""
    world.lives = config.start_lives
    world.score = 0
    world.wave = 1
    world.bullets = []
    spawn_wave(world, config, rng)
    if config.objective_enabled:
        world.objective = create_objective(config, rng)


def new_world(config: GameConfig, rng=random) -> WorldState:
    ship = Ship(Vector2(config.center), config)
    world = WorldState(ship=ship, lives=config.start_lives)
    reset_game(world, config, rng)
    return world
