"""Per-frame simulation step.

``step`` advances a :class:`~world.WorldState` by exactly one frame. The order
below matters, each stage reads what the previous one wrote:

1. input resolution (rotation, thrust flag, edge-triggered fire)
2. ship propulsion, integration and boundary policy
3. asteroid and bullet integration
4. bullet expiry marking
5. bullet/asteroid hits, splitting
6. ship/asteroid hit, life loss, full reset on the last life
7. objective capture
8. wave clear

Collections are never mutated while they are scanned. Hits are collected as
index sets first and the live lists rebuilt afterwards.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from asteroid_field.config import GameConfig
from asteroid_field.game import create_asteroid, create_bullet
from asteroid_field.geometry import distance, pairwise_distances
from asteroid_field.world import InputState, WorldState, reset_game, spawn_wave

logger = logging.getLogger(__name__)


@dataclass
class StepEvents:
    """What happened during one step, for effects and HUD. Never fed back into state."""

    bullets_fired: int = 0
    destroyed: List[Tuple[Tuple[float, float], float]] = field(default_factory=list)
    fragments_spawned: int = 0
    ship_hit: bool = False
    game_reset: bool = False
    objective_reached: bool = False
    wave_cleared: bool = False
    score_gained: int = 0


def resolve_input(world: WorldState, inputs: InputState, config: GameConfig, events: StepEvents) -> None:
    ship = world.ship
    if inputs.left:
        ship.rotate(-1)
    if inputs.right:
        ship.rotate(1)
    ship.thrusting = inputs.thrust

    # One bullet per press, holding fire does not repeat
    if inputs.fire and not world.fire_was_down:
        world.bullets.append(create_bullet(ship, config))
        events.bullets_fired += 1
    world.fire_was_down = inputs.fire


def integrate(world: WorldState, config: GameConfig) -> None:
    world.ship.update(config)
    for asteroid in world.asteroids:
        asteroid.update(config)
    for bullet in world.bullets:
        bullet.update(config)


def resolve_bullet_hits(
    world: WorldState, config: GameConfig, events: StepEvents, rng=random
) -> Set[int]:
    """Match bullets to asteroids and rebuild the asteroid list.

    Asteroids are scanned in list order and each takes the first unconsumed
    bullet inside its radius, so a bullet overlapping two asteroids is spent
    on the earlier one. Returns the indices of consumed bullets.
    """
    consumed: Set[int] = set()
    if not world.asteroids or not world.bullets:
        return consumed

    dists = pairwise_distances(
        [(a.pos.x, a.pos.y) for a in world.asteroids],
        [(b.pos.x, b.pos.y) for b in world.bullets],
    )

    destroyed: Set[int] = set()
    fragments = []
    for i, asteroid in enumerate(world.asteroids):
        for j in range(len(world.bullets)):
            if j in consumed or dists[i, j] >= asteroid.radius:
                continue
            consumed.add(j)
            destroyed.add(i)
            world.score += config.hit_score
            events.score_gained += config.hit_score
            events.destroyed.append(((asteroid.pos.x, asteroid.pos.y), asteroid.radius))
            if asteroid.can_split(config):
                child_size = asteroid.radius / 2
                for _ in range(2):
                    fragments.append(create_asteroid(asteroid.pos.x, asteroid.pos.y, child_size, config, rng))
            break

    if destroyed:
        world.asteroids = [a for i, a in enumerate(world.asteroids) if i not in destroyed] + fragments
        events.fragments_spawned += len(fragments)
    return consumed


def resolve_ship_hit(world: WorldState, config: GameConfig, events: StepEvents, rng=random) -> None:
    ship = world.ship
    if ship.invulnerable:
        # One guarded frame used up per step
        ship.invulnerable_timer -= 1
        return
    for asteroid in world.asteroids:
        if distance(ship.pos.x, ship.pos.y, asteroid.pos.x, asteroid.pos.y) < ship.radius + asteroid.radius:
            world.lives -= 1
            events.ship_hit = True
            logger.debug("Ship hit by %r, %d lives left", asteroid, world.lives)
            ship.reset(config)
            if world.lives <= 0:
                logger.info("Out of lives at score %d, resetting game", world.score)
                reset_game(world, config, rng)
                events.game_reset = True
            break


def resolve_objective(world: WorldState, config: GameConfig, events: StepEvents) -> None:
    if world.objective is None:
        return
    if world.objective.try_capture(world.ship.pos, config.objective_capture_radius):
        world.score += config.objective_bonus
        events.score_gained += config.objective_bonus
        events.objective_reached = True
        logger.info("Objective reached, +%d", config.objective_bonus)


def step(world: WorldState, inputs: InputState, config: GameConfig, rng=random) -> StepEvents:
    """Advance the world by one frame."""
    events = StepEvents()

    resolve_input(world, inputs, config, events)
    integrate(world, config)

    # Bullets on their last tick still collide this frame, then go. A
    # one-frame bullet fired into an asteroid must still score.
    expired = {j for j, bullet in enumerate(world.bullets) if bullet.expired}
    consumed = resolve_bullet_hits(world, config, events, rng)
    gone = expired | consumed
    if gone:
        world.bullets = [b for j, b in enumerate(world.bullets) if j not in gone]

    resolve_ship_hit(world, config, events, rng)
    resolve_objective(world, config, events)

    if not world.asteroids:
        world.wave += 1
        logger.info("Wave cleared at score %d, spawning wave %d", world.score, world.wave)
        spawn_wave(world, config, rng)
        events.wave_cleared = True

    world.tick += 1
    return events
