"""pygame presentation adapter. Reads snapshots only, never touches the world."""

import math
import random
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np
import pygame
from pygame import Surface, Vector2

from asteroid_field.config import FPS, SCREEN_HEIGHT, SCREEN_WIDTH
from asteroid_field.geometry import clamp
from asteroid_field.world import Snapshot

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
SHIP_BLUE = (75, 159, 255)
FLAME = (255, 204, 102)
ROCK = (176, 176, 255)
GOLD = (255, 215, 0)
GREY = (90, 90, 90)

MINIMAP_SIZE = 150
STAR_COUNT = 400
ASTEROID_POINTS = 10


class Camera:
    """Maps world coordinates to screen coordinates.

    Wrap worlds are drawn 1:1. Scroll worlds follow the ship and stop at the
    world edges so nothing outside the world is ever shown.
    """

    def __init__(self, view_width: float, view_height: float):
        self.view_width = view_width
        self.view_height = view_height
        self.offset = Vector2(0, 0)

    def follow(self, target: Tuple[float, float], world_size: Tuple[float, float], scrolling: bool) -> None:
        if not scrolling:
            self.offset = Vector2(0, 0)
            return
        world_w, world_h = world_size
        x = target[0] - self.view_width / 2
        y = target[1] - self.view_height / 2
        self.offset = Vector2(
            clamp(x, 0, max(0.0, world_w - self.view_width)),
            clamp(y, 0, max(0.0, world_h - self.view_height)),
        )

    def to_screen(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        return pos[0] - self.offset.x, pos[1] - self.offset.y

    def visible(self, pos: Tuple[float, float], margin: float = 0) -> bool:
        x, y = self.to_screen(pos)
        return -margin <= x <= self.view_width + margin and -margin <= y <= self.view_height + margin


@dataclass
class Particle:
    pos: Vector2
    velocity: Vector2
    color: Tuple[int, int, int]
    life: int
    max_life: int
    size: float

    def update(self) -> bool:
        self.pos += self.velocity
        self.life -= 1
        return self.life > 0

    def draw(self, surface: Surface, camera: Camera) -> None:
        fade = self.life / self.max_life
        color = tuple(int(c * fade) for c in self.color)
        x, y = camera.to_screen((self.pos.x, self.pos.y))
        pygame.draw.circle(surface, color, (int(x), int(y)), max(1, int(self.size)))


def create_explosion_particles(
    pos: Tuple[float, float],
    num_particles: int = 20,
    speed_range: Tuple[float, float] = (1, 4),
    colors: Tuple[Tuple[int, int, int], ...] = ((255, 200, 50), (255, 100, 0), (176, 176, 255)),
) -> List[Particle]:
    particles = []
    for _ in range(num_particles):
        angle = random.uniform(0, 2 * math.pi)
        speed = random.uniform(*speed_range)
        velocity = Vector2(math.cos(angle), math.sin(angle)) * speed
        life = random.randint(20, 40)
        particles.append(Particle(Vector2(pos), velocity, random.choice(colors), life, life, random.uniform(1, 3)))
    return particles


def create_thruster_particles(pos: Tuple[float, float], angle: float, radius: float) -> List[Particle]:
    particles = []
    rear = Vector2(pos) - Vector2(math.cos(angle), math.sin(angle)) * radius
    for _ in range(2):
        spread = angle + math.pi + random.uniform(-0.3, 0.3)
        velocity = Vector2(math.cos(spread), math.sin(spread)) * random.uniform(2, 4)
        life = random.randint(8, 15)
        particles.append(Particle(Vector2(rear), velocity, FLAME, life, life, random.uniform(1, 2)))
    return particles


@lru_cache(maxsize=1024)
def asteroid_outline(shape: int) -> Tuple[float, ...]:
    """Radius multipliers for each outline point, fixed per shape seed."""
    gen = np.random.default_rng(shape)
    return tuple(float(j) for j in gen.uniform(0.75, 1.0, size=ASTEROID_POINTS))


class Renderer:
    def __init__(self, screen: Surface, world_size: Tuple[float, float], seed: Optional[int] = None):
        self.screen = screen
        self.camera = Camera(screen.get_width(), screen.get_height())
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 24)
        self.particles: List[Particle] = []

        gen = np.random.default_rng(seed)
        self.stars = gen.uniform((0, 0), world_size, size=(STAR_COUNT, 2))
        self.star_brightness = gen.integers(80, 256, size=STAR_COUNT)

    def present(self, snapshot: Snapshot, events=None) -> None:
        if events is not None:
            for pos, radius in events.destroyed:
                self.particles.extend(create_explosion_particles(pos, int(radius // 2) + 5))
            if events.ship_hit:
                self.particles.extend(create_explosion_particles(snapshot.camera_target, 30))
        ship = snapshot.ship
        if ship.thrusting:
            self.particles.extend(create_thruster_particles(ship.pos, ship.angle, ship.radius))
        self.particles = [p for p in self.particles if p.update()]

        scrolling = snapshot.mode == "scroll"
        self.camera.follow(snapshot.camera_target, snapshot.world_size, scrolling)

        self.screen.fill(BLACK)
        if scrolling:
            self.draw_starfield()
        self.draw_objective(snapshot)
        self.draw_asteroids(snapshot)
        self.draw_bullets(snapshot)
        for particle in self.particles:
            particle.draw(self.screen, self.camera)
        self.draw_ship(snapshot)
        self.draw_hud(snapshot)
        if scrolling:
            self.draw_minimap(snapshot)

        pygame.display.flip()
        self.clock.tick(FPS)

    def draw_starfield(self) -> None:
        # Half-speed parallax
        shifted = self.stars - np.array([self.camera.offset.x, self.camera.offset.y]) * 0.5
        for (x, y), b in zip(shifted, self.star_brightness):
            if 0 <= x < self.camera.view_width and 0 <= y < self.camera.view_height:
                self.screen.set_at((int(x), int(y)), (int(b), int(b), int(b)))

    def draw_ship(self, snapshot: Snapshot) -> None:
        ship = snapshot.ship
        if ship.invulnerable and snapshot.tick % 2:
            return
        r = ship.radius
        cos_a, sin_a = math.cos(ship.angle), math.sin(ship.angle)
        cx, cy = self.camera.to_screen(ship.pos)

        def transform(x, y):
            return cx + x * cos_a - y * sin_a, cy + x * sin_a + y * cos_a

        points = [transform(r, 0), transform(-r, r * 0.6), transform(-r, -r * 0.6)]
        pygame.draw.polygon(self.screen, SHIP_BLUE, points, 2)
        if ship.thrusting:
            pygame.draw.line(self.screen, FLAME, transform(-r, 0), transform(-r - 10, 0), 2)

    def draw_asteroids(self, snapshot: Snapshot) -> None:
        for asteroid in snapshot.asteroids:
            if not self.camera.visible(asteroid.pos, asteroid.radius):
                continue
            cx, cy = self.camera.to_screen(asteroid.pos)
            points = []
            for i, jag in enumerate(asteroid_outline(asteroid.shape)):
                angle = asteroid.angle + (2 * math.pi * i) / ASTEROID_POINTS
                points.append((cx + math.cos(angle) * asteroid.radius * jag,
                               cy + math.sin(angle) * asteroid.radius * jag))
            pygame.draw.polygon(self.screen, ROCK, points, 2)

    def draw_bullets(self, snapshot: Snapshot) -> None:
        for bullet in snapshot.bullets:
            x, y = self.camera.to_screen(bullet.pos)
            pygame.draw.circle(self.screen, WHITE, (int(x), int(y)), 2)

    def draw_objective(self, snapshot: Snapshot) -> None:
        objective = snapshot.objective
        if objective is None or not self.camera.visible(objective.pos, objective.radius):
            return
        x, y = self.camera.to_screen(objective.pos)
        color = GREY if objective.reached else GOLD
        pygame.draw.circle(self.screen, color, (int(x), int(y)), int(objective.radius), 2)

    def draw_hud(self, snapshot: Snapshot) -> None:
        score_text = self.font.render(f"Score: {snapshot.score}", True, WHITE)
        self.screen.blit(score_text, (10, 10))
        lives_text = self.font.render(f"Lives: {snapshot.lives}", True, WHITE)
        self.screen.blit(lives_text, lives_text.get_rect(topright=(self.screen.get_width() - 10, 10)))
        wave_text = self.font.render(f"Wave {snapshot.wave}", True, WHITE)
        self.screen.blit(wave_text, wave_text.get_rect(midtop=(self.screen.get_width() / 2, 10)))

    def draw_minimap(self, snapshot: Snapshot) -> None:
        world_w, world_h = snapshot.world_size
        scale = MINIMAP_SIZE / max(world_w, world_h)
        left = self.screen.get_width() - MINIMAP_SIZE - 10
        top = self.screen.get_height() - MINIMAP_SIZE - 10
        frame = pygame.Rect(left, top, world_w * scale, world_h * scale)
        pygame.draw.rect(self.screen, GREY, frame, 1)

        def dot(pos, color, size=1):
            pygame.draw.circle(self.screen, color, (int(left + pos[0] * scale), int(top + pos[1] * scale)), size)

        for asteroid in snapshot.asteroids:
            dot(asteroid.pos, ROCK)
        if snapshot.objective is not None and not snapshot.objective.reached:
            dot(snapshot.objective.pos, GOLD, 3)
        dot(snapshot.ship.pos, SHIP_BLUE, 2)
        view = pygame.Rect(left + self.camera.offset.x * scale, top + self.camera.offset.y * scale,
                           self.camera.view_width * scale, self.camera.view_height * scale)
        pygame.draw.rect(self.screen, WHITE, view, 1)


def open_window(caption: str = "Asteroids") -> Surface:
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption(caption)
    return screen
