import logging
from dataclasses import dataclass, field
from typing import Optional
import numpy as np
from lidar_perception.ransac import segment_plane, PlaneModel
from lidar_perception.clustering import euclidean_cluster, label_clusters
from lidar_perception.boxes import bounding_box, BoundingBox

logger = logging.getLogger(__name__)


@dataclass
class PipelineParams:
    """Parameters for the LiDAR processing pipeline."""
    # RANSAC
    ransac_iters: int = 100
    dist_thresh: float = 0.2
    normal_thresh: Optional[float] = None
    seed: Optional[int] = None
    # Clustering
    cluster_tol: float = 0.5
    min_cluster: int = 15
    max_cluster: int = 600


@dataclass
class FrameResult:
    """Result of processing a single frame."""
    input_count: int

    # Ground segmentation
    plane_model: Optional[PlaneModel]
    ground_points: np.ndarray
    obstacle_points: np.ndarray

    # Clustering
    clusters: list
    cluster_labels: np.ndarray
    num_clusters: int
    cluster_sizes: list
    noise_count: int

    bounding_boxes: list[BoundingBox] = field(default_factory=list)

    def cluster_points(self, cluster_id: int) -> np.ndarray:
        return self.obstacle_points[self.clusters[cluster_id]]


def run_frame_pipeline(
    points: np.ndarray,
    params: PipelineParams,
    rng: Optional[np.random.Generator] = None,
) -> FrameResult:
    """
    Run ground segmentation, clustering and box fitting on a single in-memory frame.
    rng overrides params.seed when given.
    """
    # Ground segmentation
    segmentation = segment_plane(
        points,
        max_iterations=params.ransac_iters,
        distance_tolerance=params.dist_thresh,
        rng=rng if rng is not None else params.seed,
        normal_threshold=params.normal_thresh,
    )
    ground_points = segmentation.ground_points
    obstacle_points = segmentation.obstacle_points

    # Clustering
    clusters = euclidean_cluster(
        obstacle_points,
        cluster_tolerance=params.cluster_tol,
        min_size=params.min_cluster,
        max_size=params.max_cluster,
    )
    cluster_result = label_clusters(clusters, len(obstacle_points))

    # Boxes
    boxes = [bounding_box(obstacle_points[members]) for members in clusters]

    logger.info(
        f"Frame: {len(points)} points -> {len(ground_points)} ground, "
        f"{len(obstacle_points)} obstacle, {cluster_result.num_clusters} clusters"
    )

    return FrameResult(
        input_count=len(points),
        plane_model=segmentation.plane,
        ground_points=ground_points,
        obstacle_points=obstacle_points,
        clusters=clusters,
        cluster_labels=cluster_result.labels,
        num_clusters=cluster_result.num_clusters,
        cluster_sizes=cluster_result.cluster_sizes,
        noise_count=cluster_result.noise_count,
        bounding_boxes=boxes,
    )
