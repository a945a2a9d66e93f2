class DegenerateSampleError(ValueError):
    """Three sampled points are collinear and cannot define a plane."""


class EmptyClusterError(ValueError):
    """A bounding box was requested for a cluster with no points."""
