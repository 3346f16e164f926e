"""Clustering module."""

from medoid_clustering.clustering.clarans import Clarans, SearchState, clarans
from medoid_clustering.clustering.distance import (
    Chebyshev,
    DistanceMetric,
    Euclidean,
    Hamming,
    Manhattan,
    SquaredEuclidean,
    available_metrics,
    get_metric,
    register_metric,
)
from medoid_clustering.clustering.nearest import assign, closest, distance_matrix
from medoid_clustering.clustering.result import ClusteringResult, RestartOutcome
from medoid_clustering.clustering.schemas import ClaransParameters

__all__ = [
    "Clarans",
    "clarans",
    "SearchState",
    "ClaransParameters",
    "ClusteringResult",
    "RestartOutcome",
    "DistanceMetric",
    "SquaredEuclidean",
    "Euclidean",
    "Manhattan",
    "Chebyshev",
    "Hamming",
    "get_metric",
    "register_metric",
    "available_metrics",
    "closest",
    "assign",
    "distance_matrix",
]
