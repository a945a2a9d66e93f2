import logging
import numpy as np
from dataclasses import dataclass
from typing import List
from collections import deque

from lidar_perception.kdtree import KdTree

logger = logging.getLogger(__name__)


@dataclass
class ClusterResult:
    labels: np.ndarray
    num_clusters: int
    cluster_sizes: List[int]
    noise_count: int


def euclidean_cluster(
    points: np.ndarray,
    cluster_tolerance: float = 0.5,
    min_size: int = 15,
    max_size: int = 600,
) -> List[np.ndarray]:
    """
    Euclidean clustering using our KdTree.
    Returns one sorted array of row indices per cluster whose size is within [min_size, max_size].
    """
    if cluster_tolerance < 0:
        raise ValueError(f"cluster_tolerance must be >= 0, got {cluster_tolerance}")
    if min_size > max_size:
        raise ValueError(f"min_size ({min_size}) is larger than max_size ({max_size})")

    if len(points) == 0:
        return []

    xyz = points[:, :3]
    n = len(xyz)
    tree = KdTree.from_points(xyz)

    processed = np.zeros(n, dtype=bool)
    clusters = []
    dropped = 0

    for i in range(n):
        if processed[i]:
            continue

        processed[i] = True
        members = [i]
        queue = deque([i])

        while queue:
            j = queue.popleft()
            for k in tree.search(xyz[j], cluster_tolerance):
                if processed[k]:
                    continue
                processed[k] = True
                members.append(k)
                queue.append(k)

        if min_size <= len(members) <= max_size:
            clusters.append(np.sort(np.array(members, dtype=int)))
            logger.debug(f"Cluster {len(clusters) - 1}: {len(members)} points")
        else:
            dropped += 1

    logger.info(f"Found {len(clusters)} clusters in {n} points ({dropped} dropped by size filter)")
    return clusters


def label_clusters(clusters: List[np.ndarray], n_points: int) -> ClusterResult:
    """
    Convert cluster index arrays into per-point labels; -1 marks points in no cluster.
    """
    labels = np.full(n_points, -1, dtype=int)
    for cid, members in enumerate(clusters):
        labels[members] = cid

    cluster_sizes = [len(members) for members in clusters]
    noise_count = int((labels == -1).sum())

    return ClusterResult(
        labels=labels,
        num_clusters=len(clusters),
        cluster_sizes=sorted(cluster_sizes, reverse=True),
        noise_count=noise_count,
    )
