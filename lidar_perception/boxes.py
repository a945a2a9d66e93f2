import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple

from lidar_perception.errors import EmptyClusterError


@dataclass
class BoundingBox:
    min_x: float
    min_y: float
    min_z: float
    max_x: float
    max_y: float
    max_z: float

    @property
    def center(self) -> Tuple[float, float, float]:
        return (
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
            (self.min_z + self.max_z) / 2,
        )

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return (self.max_x - self.min_x, self.max_y - self.min_y, self.max_z - self.min_z)

    @property
    def volume(self) -> float:
        dx, dy, dz = self.dimensions
        return dx * dy * dz

    def contains(self, point: Sequence[float]) -> bool:
        x, y, z = point[0], point[1], point[2]
        return (
            self.min_x <= x <= self.max_x
            and self.min_y <= y <= self.max_y
            and self.min_z <= z <= self.max_z
        )


def bounding_box(cluster_points: np.ndarray) -> BoundingBox:
    """
    Axis-aligned bounding box of a cluster's points.
    """
    if len(cluster_points) == 0:
        raise EmptyClusterError("Cannot compute a bounding box for an empty cluster")

    xyz = cluster_points[:, :3]
    mins = xyz.min(axis=0)
    maxs = xyz.max(axis=0)

    return BoundingBox(
        float(mins[0]),
        float(mins[1]),
        float(mins[2]),
        float(maxs[0]),
        float(maxs[1]),
        float(maxs[2]),
    )
