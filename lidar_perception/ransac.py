import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from lidar_perception.errors import DegenerateSampleError

logger = logging.getLogger(__name__)


@dataclass
class PlaneModel:
    """
    Represents a 3D plane: normal * point + d = 0
    """
    # Unit vector with distance parameter to represent plane
    normal: np.ndarray
    d: float

    def distance_to_points(self, points: np.ndarray) -> np.ndarray:
        return np.abs(np.dot(points[:, :3], self.normal) + self.d)

    @property
    def coefficients(self) -> Tuple[float, float, float, float]:
        return float(self.normal[0]), float(self.normal[1]), float(self.normal[2]), float(self.d)

    @property
    def equation_string(self) -> str:
        return f"{self.normal[0]:.4f}x + {self.normal[1]:.4f}y + {self.normal[2]:.4f}z + {self.d:.4f} = 0"


@dataclass
class SegmentationResult:
    plane: Optional[PlaneModel]
    inlier_mask: np.ndarray
    ground_points: np.ndarray
    obstacle_points: np.ndarray
    iterations: int
    degenerate_samples: int

    @property
    def inlier_count(self) -> int:
        return int(self.inlier_mask.sum())


def fit_plane_from_points(p1: np.ndarray, p2: np.ndarray, p3: np.ndarray) -> PlaneModel:
    """
    Fit a plane through three 3D points.
    """
    v1 = p2 - p1
    v2 = p3 - p1

    normal = np.cross(v1, v2)

    norm = np.linalg.norm(normal)
    if norm < 1e-10:
        raise DegenerateSampleError("Points are collinear")

    normal = normal / norm

    d = -np.dot(normal, p1)

    # Keep ground normals pointing up regardless of sample order
    if normal[2] < 0:
        normal = -normal
        d = -d

    return PlaneModel(normal=normal, d=float(d))


def _as_generator(rng: Union[np.random.Generator, int, None]) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def segment_plane(
    points: np.ndarray,
    max_iterations: int = 100,
    distance_tolerance: float = 0.2,
    rng: Union[np.random.Generator, int, None] = None,
    normal_threshold: Optional[float] = None,
) -> SegmentationResult:
    """
    Split a cloud into the best-fit plane (ground) and everything else using RANSAC.

    Each iteration draws 3 distinct points from rng (a Generator or an int seed).
    Collinear draws are skipped and still count as an iteration. Ties in inlier
    count keep the first plane found. With fewer than 3 points, or when no draw
    ever yields a plane, every point is returned as an obstacle and plane is None.
    """
    if max_iterations < 0:
        raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
    if distance_tolerance < 0:
        raise ValueError(f"distance_tolerance must be >= 0, got {distance_tolerance}")

    xyz = points[:, :3]
    n_points = len(xyz)

    best_plane = None
    best_inlier_count = 0
    best_inlier_mask = np.zeros(n_points, dtype=bool)
    degenerate = 0

    if n_points < 3:
        logger.warning(f"Need at least 3 points to fit a plane, got {n_points}; treating all as obstacles")
        return SegmentationResult(
            plane=None,
            inlier_mask=best_inlier_mask,
            ground_points=points[best_inlier_mask],
            obstacle_points=points.copy(),
            iterations=0,
            degenerate_samples=0,
        )

    generator = _as_generator(rng)

    for _ in range(max_iterations):
        sample_indices = generator.choice(n_points, 3, replace=False)
        p1, p2, p3 = xyz[sample_indices]

        try:
            plane = fit_plane_from_points(p1, p2, p3)
        except DegenerateSampleError:
            degenerate += 1
            continue

        if normal_threshold is not None and abs(plane.normal[2]) < normal_threshold:
            continue

        distances = plane.distance_to_points(xyz)
        inlier_mask = distances <= distance_tolerance
        inlier_count = int(np.sum(inlier_mask))

        if best_plane is None or inlier_count > best_inlier_count:
            best_inlier_count = inlier_count
            best_plane = plane
            best_inlier_mask = inlier_mask

    if degenerate:
        logger.debug(f"Skipped {degenerate}/{max_iterations} collinear samples")

    if best_plane is None:
        logger.warning(f"RANSAC found no plane after {max_iterations} iterations; treating all as obstacles")
    else:
        logger.info(f"Plane {best_plane.equation_string} with {best_inlier_count}/{n_points} inliers")

    return SegmentationResult(
        plane=best_plane,
        inlier_mask=best_inlier_mask,
        ground_points=points[best_inlier_mask],
        obstacle_points=points[~best_inlier_mask],
        iterations=max_iterations,
        degenerate_samples=degenerate,
    )
