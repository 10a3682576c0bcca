import logging
import math

import pytest
from pygame import Vector2

from asteroid_field.config import GameConfig
from asteroid_field.game import Asteroid, Objective, Ship, create_asteroid, create_bullet, create_objective, init_asteroids
from asteroid_field.geometry import distance


def test_create_asteroid_kinematics(config, rng):
    for _ in range(200):
        asteroid = create_asteroid(10, 20, 35, config, rng)
        assert (asteroid.pos.x, asteroid.pos.y) == (10, 20)
        assert asteroid.radius == 35
        assert config.asteroid_min_speed <= asteroid.velocity.length() <= config.asteroid_speed + 1e-9
        assert 0 <= asteroid.angle < 2 * math.pi
        assert -config.asteroid_max_spin <= asteroid.spin <= config.asteroid_max_spin


def test_asteroid_radius_must_be_positive():
    with pytest.raises(ValueError):
        Asteroid(Vector2(0, 0), 0, Vector2(0, 0))


def test_init_asteroids_keeps_clear_of_ship(config, rng):
    ship_pos = Vector2(config.center)
    asteroids = init_asteroids(25, 50, config, ship_pos, 100, rng)
    assert len(asteroids) == 25
    for asteroid in asteroids:
        assert distance(asteroid.pos.x, asteroid.pos.y, ship_pos.x, ship_pos.y) >= 100
        assert 0 <= asteroid.pos.x <= config.world_width
        assert 0 <= asteroid.pos.y <= config.world_height


def test_init_asteroids_falls_back_when_no_room(rng, caplog):
    config = GameConfig(world_width=50, world_height=50, max_spawn_attempts=5)
    with caplog.at_level(logging.WARNING, logger="asteroid_field.game"):
        asteroids = init_asteroids(3, 10, config, Vector2(25, 25), 1000, rng)
    assert len(asteroids) == 3
    assert "No spawn point" in caplog.text


def test_create_bullet_from_nose(config):
    ship = Ship(Vector2(100, 100), config, angle=0)
    bullet = create_bullet(ship, config)
    assert bullet.pos == Vector2(100 + config.ship_radius, 100)
    assert bullet.velocity == Vector2(config.bullet_speed, 0)
    assert bullet.life == config.bullet_lifetime


def test_ship_friction_decays_velocity(config):
    ship = Ship(Vector2(400, 300), config)
    ship.velocity = Vector2(2, 0)
    ship.update(config)
    assert ship.velocity.x == pytest.approx(2 * config.ship_friction)
    assert ship.pos.x == pytest.approx(400 + 2 * config.ship_friction)


def test_ship_thrust_accumulates_without_cap(config):
    ship = Ship(Vector2(400, 300), config, angle=0)
    ship.thrusting = True
    for _ in range(100):
        ship.update(config)
    assert ship.velocity.x == pytest.approx(100 * config.ship_thrust_power)


def test_ship_reset(config):
    ship = Ship(Vector2(10, 10), config, angle=1.0)
    ship.velocity = Vector2(3, 3)
    ship.thrusting = True
    ship.reset(config)
    assert ship.pos == Vector2(config.center)
    assert ship.angle == config.ship_reset_angle
    assert ship.velocity == Vector2(0, 0)
    assert not ship.thrusting


def test_objective_capture_is_one_shot():
    objective = Objective(Vector2(100, 100), 20)
    assert not objective.try_capture(Vector2(200, 100), 40)
    assert objective.try_capture(Vector2(130, 100), 40)
    assert objective.reached
    assert not objective.try_capture(Vector2(100, 100), 40)


def test_create_objective_inside_world(scroll_config, rng):
    for _ in range(50):
        objective = create_objective(scroll_config, rng)
        r = objective.radius
        assert r <= objective.pos.x <= scroll_config.world_width - r
        assert r <= objective.pos.y <= scroll_config.world_height - r
        assert not objective.reached


def test_asteroids_get_their_own_outline_seed(config, rng):
    shapes = {create_asteroid(0, 0, 30, config, rng).shape for _ in range(20)}
    assert len(shapes) > 1
