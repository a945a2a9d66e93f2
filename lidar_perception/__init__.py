"""
LiDAR Perception: Ground plane segmentation and obstacle clustering for single point-cloud frames.
"""

from .kdtree import KdTree
from .ransac import segment_plane, fit_plane_from_points, PlaneModel, SegmentationResult
from .clustering import euclidean_cluster, label_clusters, ClusterResult
from .boxes import bounding_box, BoundingBox
from .errors import DegenerateSampleError, EmptyClusterError
from .pipeline import PipelineParams, FrameResult, run_frame_pipeline

__version__ = "0.1.0"
