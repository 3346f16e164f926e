"""Point loading and validation."""

from medoid_clustering.data.points import (
    as_point_matrix,
    load_points,
    points_from_frame,
)

__all__ = [
    "as_point_matrix",
    "load_points",
    "points_from_frame",
]
