"""Dissimilarity metrics shared by the clustering algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from medoid_clustering.exceptions import (
    DataQualityError,
    DimensionMismatchError,
    InvalidParameterError,
)


class DistanceMetric(ABC):
    """Symmetric, non-negative dissimilarity between two coordinate vectors.

    Subclasses only implement ``_reduce`` over the element-wise difference.
    The public methods enforce the contract: equal lengths, finite output.
    """

    name: str = ""

    @abstractmethod
    def _reduce(self, diff: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
        """Collapse element-wise differences into distances along ``axis``."""

    def distance(self, a: ArrayLike, b: ArrayLike) -> float:
        """Distance between two vectors of equal length."""
        left = np.asarray(a, dtype=np.float64)
        right = np.asarray(b, dtype=np.float64)
        if left.ndim != 1 or right.ndim != 1:
            raise InvalidParameterError("distance() expects two 1-D coordinate vectors.")
        if left.shape[0] != right.shape[0]:
            raise DimensionMismatchError(left.shape[0], right.shape[0])
        if not (np.isfinite(left).all() and np.isfinite(right).all()):
            raise DataQualityError("Coordinates contain NaN or infinite values.")

        value = float(self._reduce(left - right, axis=0))
        if not np.isfinite(value):
            raise DataQualityError(f"{self.name} distance is not finite: {value}")
        return value

    def to_many(self, point: ArrayLike, matrix: ArrayLike) -> NDArray[np.float64]:
        """Distances from ``point`` to every row of ``matrix``."""
        vector = np.asarray(point, dtype=np.float64)
        rows = np.asarray(matrix, dtype=np.float64)
        if rows.ndim != 2:
            raise InvalidParameterError("to_many() expects a 2-D matrix of points.")
        if rows.shape[1] != vector.shape[0]:
            raise DimensionMismatchError(vector.shape[0], rows.shape[1])
        if not (np.isfinite(vector).all() and np.isfinite(rows).all()):
            raise DataQualityError("Coordinates contain NaN or infinite values.")

        values = self._reduce(rows - vector, axis=1)
        if not np.isfinite(values).all():
            raise DataQualityError(f"{self.name} distances contain NaN or infinite values.")
        return values

    def __call__(self, a: ArrayLike, b: ArrayLike) -> float:
        return self.distance(a, b)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SquaredEuclidean(DistanceMetric):
    """Sum of squared differences. Orders neighbours like Euclidean without the root."""

    name = "squared_euclidean"

    def _reduce(self, diff: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
        return np.sum(diff * diff, axis=axis)


class Euclidean(DistanceMetric):
    name = "euclidean"

    def _reduce(self, diff: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
        return np.sqrt(np.sum(diff * diff, axis=axis))


class Manhattan(DistanceMetric):
    name = "manhattan"

    def _reduce(self, diff: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
        return np.sum(np.abs(diff), axis=axis)


class Chebyshev(DistanceMetric):
    name = "chebyshev"

    def _reduce(self, diff: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
        return np.max(np.abs(diff), axis=axis)


class Hamming(DistanceMetric):
    """Number of coordinates that differ."""

    name = "hamming"

    def _reduce(self, diff: NDArray[np.float64], axis: int) -> NDArray[np.float64]:
        return np.sum(diff != 0, axis=axis).astype(np.float64)


_METRICS: dict[str, type[DistanceMetric]] = {
    SquaredEuclidean.name: SquaredEuclidean,
    Euclidean.name: Euclidean,
    Manhattan.name: Manhattan,
    Chebyshev.name: Chebyshev,
    Hamming.name: Hamming,
}


def get_metric(metric: str | DistanceMetric) -> DistanceMetric:
    """Resolve a metric instance from its registered name."""
    if isinstance(metric, DistanceMetric):
        return metric

    key = _metric_key(metric)
    if key not in _METRICS:
        available = ", ".join(available_metrics())
        raise InvalidParameterError(f"Unknown distance metric: {metric}. Available: {available}")
    return _METRICS[key]()


def register_metric(name: str, metric_class: type[DistanceMetric]) -> None:
    """Register a new distance metric."""
    _METRICS[_metric_key(name)] = metric_class


def available_metrics() -> Sequence[str]:
    """Names accepted by ``get_metric``."""
    return sorted(_METRICS)


def _metric_key(name: str) -> str:
    return str(name).strip().lower().replace("-", "_")
