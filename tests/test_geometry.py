import random

import pytest

from asteroid_field.geometry import clamp, distance, pairwise_distances, random_range, wrap_plain, wrap_with_margin


def test_distance():
    assert distance(0, 0, 3, 4) == 5
    assert distance(1, 1, 1, 1) == 0


def test_random_range_stays_in_bounds():
    rng = random.Random(7)
    values = [random_range(-2.0, 3.0, rng) for _ in range(500)]
    assert all(-2.0 <= v < 3.0 for v in values)


def test_pairwise_distances_shape_and_values():
    dists = pairwise_distances([(0, 0), (10, 0)], [(3, 4), (10, 0), (0, 0)])
    assert dists.shape == (2, 3)
    assert dists[0, 0] == pytest.approx(5)
    assert dists[1, 1] == pytest.approx(0)
    assert dists[1, 2] == pytest.approx(10)


def test_wrap_with_margin():
    assert wrap_with_margin(816, 800, 15) == -15
    assert wrap_with_margin(-16, 800, 15) == 815
    # Inside the margin nothing happens yet
    assert wrap_with_margin(810, 800, 15) == 810
    assert wrap_with_margin(-10, 800, 15) == -10


def test_wrap_plain():
    assert wrap_plain(801, 800) == 0
    assert wrap_plain(-0.5, 800) == 800
    assert wrap_plain(400, 800) == 400


def test_clamp():
    assert clamp(5, 10, 20) == 10
    assert clamp(25, 10, 20) == 20
    assert clamp(15, 10, 20) == 15
