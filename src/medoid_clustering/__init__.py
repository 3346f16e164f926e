"""Medoid-based partitional clustering.

This library partitions points in a real coordinate space into K clusters
whose representatives are actual data points, using randomized CLARANS
search with independent restarts.

Example:
    >>> from medoid_clustering import Clarans
    >>>
    >>> points = [[0.0], [1.0], [2.0], [10.0], [11.0], [12.0]]
    >>> result = Clarans(n_clusters=2, num_local=5, max_neighbor=20, random_state=7).run(points)
    >>>
    >>> print(result.labels)
    >>> print(result.medoids)
"""

__version__ = "0.1.0"

# Public API exports
from medoid_clustering.api import MedoidClustering
from medoid_clustering.clustering import (
    Clarans,
    ClusteringResult,
    DistanceMetric,
    RestartOutcome,
    available_metrics,
    clarans,
    closest,
    get_metric,
)
from medoid_clustering.config import Settings
from medoid_clustering.exceptions import (
    DataQualityError,
    DimensionMismatchError,
    InvalidParameterError,
    InvariantViolationError,
    MedoidClusteringError,
)

__all__ = [
    # Main API
    "Clarans",
    "clarans",
    "ClusteringResult",
    "RestartOutcome",
    "MedoidClustering",
    # Distances
    "DistanceMetric",
    "get_metric",
    "available_metrics",
    "closest",
    # Configuration
    "Settings",
    # Errors
    "MedoidClusteringError",
    "InvalidParameterError",
    "DimensionMismatchError",
    "DataQualityError",
    "InvariantViolationError",
    # Version
    "__version__",
]
