"""Shared pytest fixtures for lidar_perception tests."""

import numpy as np
import pytest


def _ball(rng: np.random.Generator, center, radius: float, n: int) -> np.ndarray:
    """n points uniformly inside a ball."""
    directions = rng.normal(size=(n, 3))
    directions /= np.linalg.norm(directions, axis=1, keepdims=True)
    radii = radius * rng.uniform(0, 1, n) ** (1 / 3)
    return np.asarray(center, dtype=float) + directions * radii[:, None]


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def two_groups(rng) -> np.ndarray:
    """20 points around the origin followed by 20 points around (10, 10, 10)."""
    return np.vstack([
        _ball(rng, (0, 0, 0), 0.3, 20),
        _ball(rng, (10, 10, 10), 0.3, 20),
    ])


def make_planar_cloud(seed: int, n_plane: int = 100, n_outliers: int = 10) -> np.ndarray:
    """Ground points at z~0 with small noise, then outliers well above the plane."""
    rng = np.random.default_rng(seed)
    plane = np.column_stack([
        rng.uniform(-10, 10, n_plane),
        rng.uniform(-10, 10, n_plane),
        np.clip(rng.normal(0, 0.01, n_plane), -0.02, 0.02),
    ])
    outliers = np.column_stack([
        rng.uniform(-10, 10, n_outliers),
        rng.uniform(-10, 10, n_outliers),
        rng.uniform(2, 5, n_outliers),
    ])
    return np.vstack([plane, outliers])


@pytest.fixture
def planar_cloud() -> np.ndarray:
    return make_planar_cloud(seed=0)


@pytest.fixture
def street_scene(rng) -> np.ndarray:
    """Flat road with two car-sized blobs and a lone stray point, intensity in column 3."""
    road = np.column_stack([
        rng.uniform(-20, 20, 400),
        rng.uniform(-6, 6, 400),
        rng.normal(0, 0.02, 400),
    ])
    car1 = _ball(rng, (8, 2, 1.0), 0.8, 60)
    car2 = _ball(rng, (-10, -3, 1.0), 0.8, 60)
    stray = np.array([[0.0, 0.0, 3.0]])
    xyz = np.vstack([road, car1, car2, stray])
    intensity = rng.uniform(0, 1, (len(xyz), 1))
    return np.hstack([xyz, intensity])


@pytest.fixture
def planar_cloud_factory():
    return make_planar_cloud
