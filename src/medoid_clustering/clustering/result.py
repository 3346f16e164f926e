"""Immutable outputs of a clustering run."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class RestartOutcome:
    """Summary of one independent local search."""

    restart: int
    initial_medoids: tuple[int, ...]
    initial_cost: float
    medoid_indices: tuple[int, ...]
    cost: float
    accepted_swaps: int
    trials: int

    @property
    def improvement(self) -> float:
        """How much the local search lowered the initial cost."""
        return self.initial_cost - self.cost


@dataclass(frozen=True, slots=True)
class ClusteringResult:
    """Partition of the input points around K medoids.

    ``labels[i]`` is the position in ``medoid_indices`` of the medoid nearest
    to point ``i``. ``medoids`` holds copies of those points' coordinates.
    """

    labels: NDArray[np.intp]
    medoid_indices: tuple[int, ...]
    medoids: NDArray[np.float64]
    cost: float
    restarts: tuple[RestartOutcome, ...] = ()
    iterations: int = 0
    converged: bool = True

    @property
    def n_clusters(self) -> int:
        """Number of clusters K."""
        return len(self.medoid_indices)

    @property
    def n_points(self) -> int:
        """Number of points that were partitioned."""
        return len(self.labels)

    @property
    def centroids(self) -> NDArray[np.float64]:
        """Alias of ``medoids`` for code written against centroid methods."""
        return self.medoids

    @property
    def best_restart(self) -> RestartOutcome | None:
        """Restart that produced the returned medoid set."""
        for outcome in self.restarts:
            if outcome.medoid_indices == self.medoid_indices:
                return outcome
        return None

    def clusters(self) -> list[NDArray[np.intp]]:
        """Point indices grouped by cluster label."""
        return [np.flatnonzero(self.labels == label) for label in range(self.n_clusters)]

    def cluster_sizes(self) -> list[int]:
        return np.bincount(self.labels, minlength=self.n_clusters).tolist()

    def to_dataframe(self) -> pd.DataFrame:
        """One row per point: its index, cluster label and medoid index."""
        medoid_lookup = np.asarray(self.medoid_indices, dtype=np.intp)
        return pd.DataFrame(
            {
                "point_index": np.arange(self.n_points),
                "cluster": self.labels,
                "medoid_index": medoid_lookup[self.labels],
            }
        )
