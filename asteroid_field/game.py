import logging
import math
import random
from typing import List, Optional

from pygame import Vector2

from asteroid_field.config import GameConfig
from asteroid_field.geometry import clamp, distance, random_range, wrap_plain, wrap_with_margin

logger = logging.getLogger(__name__)


class Ship:
    def __init__(self, pos: Vector2, config: GameConfig, angle: Optional[float] = None):
        self.pos: Vector2 = Vector2(pos)
        self.radius: float = config.ship_radius
        self.angle: float = config.ship_reset_angle if angle is None else angle
        self.rotation_speed: float = config.ship_rotation_speed
        self.thrusting: bool = False
        self.velocity: Vector2 = Vector2(0, 0)
        self.thrust_power: float = config.ship_thrust_power
        self.friction: float = config.ship_friction
        self.invulnerable_timer: int = 0

    @property
    def invulnerable(self) -> bool:
        return self.invulnerable_timer > 0

    def get_nose_position(self) -> Vector2:
        """Position of the ship's nose, where bullets are spawned"""
        return self.pos + Vector2(math.cos(self.angle), math.sin(self.angle)) * self.radius

    def rotate(self, direction: int) -> None:
        self.angle += direction * self.rotation_speed

    def update(self, config: GameConfig) -> None:
        """Apply thrust or friction, move, then keep the ship inside the world"""
        if self.thrusting:
            # No max speed: thrust accumulates until friction takes over
            self.velocity += Vector2(math.cos(self.angle), math.sin(self.angle)) * self.thrust_power
        else:
            self.velocity *= self.friction

        self.pos += self.velocity

        if config.wraps:
            self.pos.x = wrap_with_margin(self.pos.x, config.world_width, self.radius)
            self.pos.y = wrap_with_margin(self.pos.y, config.world_height, self.radius)
        else:
            self.pos.x = clamp(self.pos.x, self.radius, config.world_width - self.radius)
            self.pos.y = clamp(self.pos.y, self.radius, config.world_height - self.radius)

    def reset(self, config: GameConfig) -> None:
        """Recenter after losing a life"""
        self.pos = Vector2(config.center)
        self.angle = config.ship_reset_angle
        self.velocity = Vector2(0, 0)
        self.thrusting = False
        self.invulnerable_timer = config.respawn_invulnerability


class Asteroid:
    def __init__(
        self, pos: Vector2, radius: float, velocity: Vector2, angle: float = 0.0, spin: float = 0.0, shape: int = 0
    ):
        if radius <= 0:
            raise ValueError(f"asteroid radius must be positive, got {radius}")
        self.pos: Vector2 = Vector2(pos)
        self.radius: float = radius
        self.velocity: Vector2 = Vector2(velocity)
        self.angle: float = angle
        self.spin: float = spin
        # Seed for the drawn outline, the rock keeps its look for life
        self.shape: int = shape

    def update(self, config: GameConfig) -> None:
        self.pos += self.velocity
        self.angle += self.spin
        self.wrap(config)

    def wrap(self, config: GameConfig) -> None:
        if config.wraps:
            self.pos.x = wrap_with_margin(self.pos.x, config.world_width, self.radius)
            self.pos.y = wrap_with_margin(self.pos.y, config.world_height, self.radius)
        else:
            self.pos.x = wrap_plain(self.pos.x, config.world_width)
            self.pos.y = wrap_plain(self.pos.y, config.world_height)

    def can_split(self, config: GameConfig) -> bool:
        return self.radius > config.fragment_threshold

    def __repr__(self):
        return f"Asteroid(pos=({self.pos.x:.1f}, {self.pos.y:.1f}), radius={self.radius})"


class Bullet:
    def __init__(self, pos: Vector2, velocity: Vector2, life: int):
        self.pos: Vector2 = Vector2(pos)
        self.velocity: Vector2 = Vector2(velocity)
        self.life: int = life

    @property
    def expired(self) -> bool:
        return self.life <= 0

    def update(self, config: GameConfig) -> None:
        self.pos += self.velocity
        self.life -= 1
        # Scrolling worlds leave bullets unbounded, they expire on their own
        if config.wraps:
            self.pos.x = wrap_plain(self.pos.x, config.world_width)
            self.pos.y = wrap_plain(self.pos.y, config.world_height)


class Objective:
    def __init__(self, pos: Vector2, radius: float):
        self.pos: Vector2 = Vector2(pos)
        self.radius: float = radius
        self.reached: bool = False

    def try_capture(self, ship_pos: Vector2, capture_radius: float) -> bool:
        """Mark reached when the ship is close enough. Only ever succeeds once."""
        if self.reached:
            return False
        if distance(ship_pos.x, ship_pos.y, self.pos.x, self.pos.y) < capture_radius:
            self.reached = True
            return True
        return False


def create_asteroid(x: float, y: float, size: float, config: GameConfig, rng=random) -> Asteroid:
    heading = rng.random() * math.pi * 2
    speed = random_range(config.asteroid_min_speed, config.asteroid_speed, rng)
    return Asteroid(
        Vector2(x, y),
        size,
        Vector2(math.cos(heading), math.sin(heading)) * speed,
        angle=rng.random() * math.pi * 2,
        spin=random_range(-config.asteroid_max_spin, config.asteroid_max_spin, rng),
        shape=rng.randrange(1 << 16),
    )


def init_asteroids(
    count: int,
    size: float,
    config: GameConfig,
    ship_pos: Vector2,
    min_spawn_distance: float,
    rng=random,
) -> List[Asteroid]:
    """Place ``count`` asteroids away from the ship.

    Each placement samples at most ``config.max_spawn_attempts`` positions. A
    world too small to honour ``min_spawn_distance`` gets the last sample
    anyway, with a warning, instead of looping forever.
    """
    asteroids = []
    for _ in range(count):
        for _ in range(config.max_spawn_attempts):
            x = random_range(0, config.world_width, rng)
            y = random_range(0, config.world_height, rng)
            if distance(x, y, ship_pos.x, ship_pos.y) >= min_spawn_distance:
                break
        else:
            logger.warning(
                "No spawn point %.1f away from ship at (%.1f, %.1f) after %d attempts, placing at (%.1f, %.1f)",
                min_spawn_distance, ship_pos.x, ship_pos.y, config.max_spawn_attempts, x, y,
            )
        asteroids.append(create_asteroid(x, y, size, config, rng))
    return asteroids


def create_bullet(ship: Ship, config: GameConfig) -> Bullet:
    direction = Vector2(math.cos(ship.angle), math.sin(ship.angle))
    return Bullet(ship.get_nose_position(), direction * config.bullet_speed, config.bullet_lifetime)


def create_objective(config: GameConfig, rng=random) -> Objective:
    r = config.objective_radius
    x = random_range(r, config.world_width - r, rng)
    y = random_range(r, config.world_height - r, rng)
    return Objective(Vector2(x, y), r)
