"""Distance, random-range and boundary helpers shared by the simulation."""

import math
import random
from typing import Sequence, Tuple

import numpy as np


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def random_range(low: float, high: float, rng=random) -> float:
    return rng.random() * (high - low) + low


def pairwise_distances(
    points_a: Sequence[Tuple[float, float]], points_b: Sequence[Tuple[float, float]]
) -> np.ndarray:
    """Distance matrix with one row per point of ``points_a``."""
    a = np.asarray(points_a, dtype=float).reshape(-1, 2)
    b = np.asarray(points_b, dtype=float).reshape(-1, 2)
    delta = a[:, np.newaxis, :] - b[np.newaxis, :, :]
    return np.hypot(delta[..., 0], delta[..., 1])


def wrap_with_margin(value: float, extent: float, margin: float) -> float:
    """Teleport to the opposite edge once fully past ``extent`` by ``margin``."""
    if value < -margin:
        return extent + margin
    if value > extent + margin:
        return -margin
    return value


def wrap_plain(value: float, extent: float) -> float:
    if value < 0:
        return extent
    if value > extent:
        return 0.0
    return value


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))
