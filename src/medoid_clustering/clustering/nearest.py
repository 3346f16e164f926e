"""Nearest-representative lookups."""

from __future__ import annotations

import math
from typing import Hashable, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from medoid_clustering.clustering.distance import DistanceMetric, SquaredEuclidean
from medoid_clustering.exceptions import DataQualityError, InvariantViolationError

_DEFAULT_METRIC = SquaredEuclidean()


def closest(
    point: ArrayLike,
    candidates: Iterable[tuple[Hashable, ArrayLike]],
    metric: DistanceMetric = _DEFAULT_METRIC,
    exclude: Hashable | None = None,
) -> tuple[Hashable, float]:
    """Return the ``(identity, distance)`` candidate nearest to ``point``.

    Candidates whose identity equals ``exclude`` are skipped. Ties keep the
    first candidate encountered.

    Raises:
        InvariantViolationError: No candidate is left to compare against.
        DataQualityError: The metric produced a NaN distance.
    """
    best_identity: Hashable | None = None
    best_distance = math.inf
    found = False

    for identity, coordinates in candidates:
        if exclude is not None and identity == exclude:
            continue
        distance = metric.distance(point, coordinates)
        if math.isnan(distance):
            raise DataQualityError(f"NaN distance to candidate {identity!r}")
        if not found or distance < best_distance:
            best_identity, best_distance = identity, distance
            found = True

    if not found:
        raise InvariantViolationError("Nearest lookup called without any candidate.")
    return best_identity, best_distance


def distance_matrix(
    points: NDArray[np.float64],
    representatives: NDArray[np.float64],
    metric: DistanceMetric = _DEFAULT_METRIC,
) -> NDArray[np.float64]:
    """``(N, K)`` distances between every point and every representative."""
    if len(representatives) == 0:
        raise InvariantViolationError("Distance matrix requested for zero representatives.")
    columns = [metric.to_many(representative, points) for representative in representatives]
    return np.column_stack(columns)


def assign(
    points: NDArray[np.float64],
    representatives: NDArray[np.float64],
    metric: DistanceMetric = _DEFAULT_METRIC,
) -> tuple[NDArray[np.intp], NDArray[np.float64]]:
    """Slot of the nearest representative per point, and the distance to it."""
    distances = distance_matrix(points, representatives, metric)
    labels = np.argmin(distances, axis=1)
    return labels, distances[np.arange(len(points)), labels]
