"""Game configuration constants and settings."""

import math
from dataclasses import dataclass, replace

# World modes
MODE_WRAP = "wrap"
MODE_SCROLL = "scroll"
WORLD_MODES = (MODE_WRAP, MODE_SCROLL)

# Screen / world settings
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
SCROLL_WORLD_WIDTH = 3000
SCROLL_WORLD_HEIGHT = 3000
FPS = 60

# Ship settings
SHIP_RADIUS = 15
SHIP_ROTATION_SPEED = 0.08  # radians per frame
SHIP_THRUST_POWER = 0.12
SHIP_FRICTION = 0.99
SHIP_RESET_ANGLE = -math.pi / 2  # nose up
RESPAWN_INVULNERABILITY = 0  # frames

# Asteroid settings
ASTEROID_NUM = 6
ASTEROID_SIZE = 50
ASTEROID_MIN_SPEED = 0.5
ASTEROID_SPEED = 1.5
ASTEROID_MAX_SPIN = 0.02
FRAGMENT_THRESHOLD = 20
MIN_SPAWN_DISTANCE = 100
MAX_SPAWN_ATTEMPTS = 1000

# Bullet settings
BULLET_SPEED = 6
BULLET_LIFETIME = 60  # frames

# Scoring
START_LIVES = 3
HIT_SCORE = 10
OBJECTIVE_BONUS = 100
OBJECTIVE_RADIUS = 20
OBJECTIVE_CAPTURE_RADIUS = 40


class ConfigError(ValueError):
    """Raised when a game configuration can't produce a playable world."""


@dataclass(frozen=True)
class GameConfig:
    """Tunable inputs of the simulation. Nothing in the step is hardwired."""

    mode: str = MODE_WRAP
    world_width: float = SCREEN_WIDTH
    world_height: float = SCREEN_HEIGHT

    ship_radius: float = SHIP_RADIUS
    ship_rotation_speed: float = SHIP_ROTATION_SPEED
    ship_thrust_power: float = SHIP_THRUST_POWER
    ship_friction: float = SHIP_FRICTION
    ship_reset_angle: float = SHIP_RESET_ANGLE
    respawn_invulnerability: int = RESPAWN_INVULNERABILITY

    asteroid_count: int = ASTEROID_NUM
    asteroid_size: float = ASTEROID_SIZE
    asteroid_min_speed: float = ASTEROID_MIN_SPEED
    asteroid_speed: float = ASTEROID_SPEED
    asteroid_max_spin: float = ASTEROID_MAX_SPIN
    fragment_threshold: float = FRAGMENT_THRESHOLD
    min_spawn_distance: float = MIN_SPAWN_DISTANCE
    max_spawn_attempts: int = MAX_SPAWN_ATTEMPTS

    bullet_speed: float = BULLET_SPEED
    bullet_lifetime: int = BULLET_LIFETIME

    start_lives: int = START_LIVES
    hit_score: int = HIT_SCORE
    objective_enabled: bool = False
    objective_bonus: int = OBJECTIVE_BONUS
    objective_radius: float = OBJECTIVE_RADIUS
    objective_capture_radius: float = OBJECTIVE_CAPTURE_RADIUS

    def __post_init__(self):
        self.validate()

    @classmethod
    def for_mode(cls, mode: str, **overrides) -> "GameConfig":
        """Build the wrap (single screen) or scroll (large world) variant."""
        if mode == MODE_SCROLL:
            defaults = dict(
                world_width=SCROLL_WORLD_WIDTH,
                world_height=SCROLL_WORLD_HEIGHT,
                objective_enabled=True,
            )
        elif mode == MODE_WRAP:
            defaults = {}
        else:
            raise ConfigError(f"unknown world mode {mode!r}, expected one of {WORLD_MODES}")
        defaults.update(overrides)
        return cls(mode=mode, **defaults)

    @property
    def wraps(self) -> bool:
        return self.mode == MODE_WRAP

    @property
    def center(self):
        return self.world_width / 2, self.world_height / 2

    def with_overrides(self, **changes) -> "GameConfig":
        return replace(self, **changes)

    def validate(self) -> None:
        if self.mode not in WORLD_MODES:
            raise ConfigError(f"unknown world mode {self.mode!r}, expected one of {WORLD_MODES}")
        if self.world_width <= 0 or self.world_height <= 0:
            raise ConfigError("world dimensions must be positive")
        for name in ("ship_radius", "asteroid_size", "objective_radius", "bullet_speed"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.asteroid_count < 1:
            raise ConfigError("asteroid_count must be at least 1")
        if self.bullet_lifetime < 1:
            raise ConfigError("bullet_lifetime must be at least one frame")
        if self.start_lives < 1:
            raise ConfigError("start_lives must be at least 1")
        if not 0 < self.ship_friction < 1:
            raise ConfigError("ship_friction must be in (0, 1)")
        if self.asteroid_speed < self.asteroid_min_speed:
            raise ConfigError("asteroid_speed must not be below asteroid_min_speed")
        if self.max_spawn_attempts < 1:
            raise ConfigError("max_spawn_attempts must be at least 1")
        if self.respawn_invulnerability < 0:
            raise ConfigError("respawn_invulnerability can't be negative")
