"""Randomized medoid search (CLARANS).

Each restart draws K distinct points as medoids, then repeatedly proposes
replacing one medoid with a random non-medoid point. A proposal is applied
only when its swap cost delta is negative. A restart stops after
``max_neighbor`` consecutive rejected proposals. The cheapest medoid set
over all restarts wins.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray
from tqdm import tqdm

from medoid_clustering.clustering.distance import DistanceMetric
from medoid_clustering.clustering.nearest import assign, distance_matrix
from medoid_clustering.clustering.result import ClusteringResult, RestartOutcome
from medoid_clustering.clustering.schemas import ClaransParameters
from medoid_clustering.data.points import as_point_matrix
from medoid_clustering.exceptions import InvalidParameterError, InvariantViolationError

# Deltas within this fraction of the current cost are treated as no change.
IMPROVEMENT_TOLERANCE = 1e-12


@dataclass(slots=True)
class SearchState:
    """Working state of a single restart. Never shared between restarts."""

    points: NDArray[np.float64]
    metric: DistanceMetric
    medoid_indices: list[int]
    current_indexes: set[int]
    distances: NDArray[np.float64]
    labels: NDArray[np.intp]

    @classmethod
    def initialize(
        cls,
        points: NDArray[np.float64],
        medoid_indices: list[int],
        metric: DistanceMetric,
    ) -> "SearchState":
        """Build the assignment map for an initial medoid set."""
        if len(set(medoid_indices)) != len(medoid_indices):
            raise InvariantViolationError(f"Duplicate medoids in {medoid_indices}")
        distances = distance_matrix(points, points[medoid_indices], metric)
        return cls(
            points=points,
            metric=metric,
            medoid_indices=list(medoid_indices),
            current_indexes=set(medoid_indices),
            distances=distances,
            labels=np.argmin(distances, axis=1),
        )

    @property
    def n_clusters(self) -> int:
        return len(self.medoid_indices)

    def has_neighbors(self) -> bool:
        """False once every point is already a medoid."""
        return len(self.current_indexes) < len(self.points)

    def nearest_distances(self) -> NDArray[np.float64]:
        """Distance from each point to the medoid it is assigned to."""
        return self.distances[np.arange(len(self.points)), self.labels]

    def cost(self) -> float:
        """Total dissimilarity of the current medoid set."""
        return float(self.nearest_distances().sum())

    def swap_delta(self, slot: int, candidate_distances: NDArray[np.float64]) -> float:
        """Change in total cost if medoid ``slot`` were replaced by the candidate.

        Per point: members of ``slot`` move to the closer of the candidate and
        their nearest remaining medoid. Everyone else moves to the candidate
        only if it is strictly closer than their nearest remaining medoid.
        """
        distance_current = self.nearest_distances()
        if self.n_clusters == 1:
            distance_nearest = np.full(len(self.points), np.inf)
        else:
            distance_nearest = np.delete(self.distances, slot, axis=1).min(axis=1)

        in_slot = self.labels == slot
        contributions = np.where(
            in_slot,
            np.minimum(candidate_distances, distance_nearest) - distance_current,
            np.where(
                candidate_distances < distance_nearest,
                candidate_distances - distance_nearest,
                0.0,
            ),
        )
        return float(contributions.sum())

    def apply_swap(
        self,
        slot: int,
        candidate: int,
        candidate_distances: NDArray[np.float64],
    ) -> None:
        """Replace medoid ``slot`` and reassign every point."""
        replaced = self.medoid_indices[slot]
        self.medoid_indices[slot] = candidate
        self.current_indexes.remove(replaced)
        self.current_indexes.add(candidate)
        self.distances[:, slot] = candidate_distances
        self.labels = np.argmin(self.distances, axis=1)


class Clarans:
    """CLARANS k-medoids clustering.

    Args:
        n_clusters: Number of clusters K, between 1 and the number of points.
        num_local: Number of independent restarts.
        max_neighbor: Consecutive rejected swaps that end a restart. Zero
            keeps every restart at its random initial medoid set.
        metric: Metric name or instance, squared Euclidean by default.
        random_state: Seed for reproducible runs.
        n_jobs: Worker threads used to run restarts concurrently.

    A proposed swap is accepted when its cost delta is below
    ``-IMPROVEMENT_TOLERANCE * max(1, current cost)``, so swaps that only
    change the cost by rounding noise count as rejected.
    """

    def __init__(
        self,
        n_clusters: int,
        num_local: int = 5,
        max_neighbor: int = 100,
        metric: str | DistanceMetric = "squared_euclidean",
        random_state: int | None = None,
        n_jobs: int = 1,
    ) -> None:
        self.params = ClaransParameters.build(
            n_clusters=n_clusters,
            num_local=num_local,
            max_neighbor=max_neighbor,
            metric=metric,
            random_state=random_state,
            n_jobs=n_jobs,
        )

    @property
    def metric(self) -> DistanceMetric:
        return self.params.metric

    def run(self, points: ArrayLike, progress: bool = False) -> ClusteringResult:
        """Cluster ``points`` and return the best partition found."""
        matrix = as_point_matrix(points)
        n_points = matrix.shape[0]
        params = self.params
        if params.n_clusters > n_points:
            raise InvalidParameterError(
                f"n_clusters ({params.n_clusters}) cannot exceed the number of points ({n_points})."
            )

        logger.info(
            "Running CLARANS: points={}, dims={}, k={}, num_local={}, max_neighbor={}, metric={}",
            n_points,
            matrix.shape[1],
            params.n_clusters,
            params.num_local,
            params.max_neighbor,
            params.metric.name,
        )
        start = time.perf_counter()

        seeds = np.random.SeedSequence(params.random_state).spawn(params.num_local)
        outcomes = self._run_restarts(matrix, seeds, progress=progress)

        best_outcome = outcomes[0]
        for outcome in outcomes[1:]:
            if outcome.cost < best_outcome.cost:
                best_outcome = outcome

        result = self._assemble(matrix, best_outcome, outcomes)
        logger.info(
            "CLARANS finished in {:.1f} ms: cost={:.6g}, medoids={}, best restart={}",
            (time.perf_counter() - start) * 1000,
            result.cost,
            list(result.medoid_indices),
            best_outcome.restart,
        )
        return result

    def _run_restarts(
        self,
        points: NDArray[np.float64],
        seeds: list[np.random.SeedSequence],
        progress: bool,
    ) -> list[RestartOutcome]:
        workers = min(self.params.n_jobs, len(seeds))
        with tqdm(total=len(seeds), desc="Restarts", unit="restart", disable=not progress) as pbar:
            if workers == 1:
                outcomes = []
                for restart, seed in enumerate(seeds):
                    outcomes.append(self._local_search(points, restart, seed))
                    pbar.update(1)
                return outcomes

            def run_one(job: tuple[int, np.random.SeedSequence]) -> RestartOutcome:
                outcome = self._local_search(points, *job)
                pbar.update(1)
                return outcome

            with ThreadPoolExecutor(max_workers=workers) as executor:
                return list(executor.map(run_one, enumerate(seeds)))

    def _local_search(
        self,
        points: NDArray[np.float64],
        restart: int,
        seed: np.random.SeedSequence,
    ) -> RestartOutcome:
        """One restart: random initial medoids, then swaps until a local optimum."""
        params = self.params
        rng = np.random.default_rng(seed)
        n_points = len(points)

        initial = rng.choice(n_points, size=params.n_clusters, replace=False).tolist()
        state = SearchState.initialize(points, initial, params.metric)
        initial_cost = state.cost()

        accepted = 0
        evaluated = 0
        trial = 0
        while trial < params.max_neighbor and state.has_neighbors():
            slot = int(rng.integers(params.n_clusters))
            candidate = int(rng.integers(n_points))
            while candidate in state.current_indexes:
                candidate = int(rng.integers(n_points))

            candidate_distances = params.metric.to_many(points[candidate], points)
            delta = state.swap_delta(slot, candidate_distances)
            evaluated += 1

            if delta < -IMPROVEMENT_TOLERANCE * max(1.0, state.cost()):
                state.apply_swap(slot, candidate, candidate_distances)
                accepted += 1
                trial = 0
            else:
                trial += 1

        outcome = RestartOutcome(
            restart=restart,
            initial_medoids=tuple(initial),
            initial_cost=initial_cost,
            medoid_indices=tuple(state.medoid_indices),
            cost=state.cost(),
            accepted_swaps=accepted,
            trials=evaluated,
        )
        logger.debug(
            "Restart {}: cost {:.6g} -> {:.6g} after {} accepted of {} trials",
            restart,
            outcome.initial_cost,
            outcome.cost,
            accepted,
            evaluated,
        )
        return outcome

    def _assemble(
        self,
        points: NDArray[np.float64],
        best: RestartOutcome,
        outcomes: list[RestartOutcome],
    ) -> ClusteringResult:
        medoid_indices = list(best.medoid_indices)
        medoids = points[medoid_indices].copy()
        labels, distances = assign(points, medoids, self.params.metric)
        labels.setflags(write=False)
        medoids.setflags(write=False)
        return ClusteringResult(
            labels=labels,
            medoid_indices=tuple(medoid_indices),
            medoids=medoids,
            cost=float(distances.sum()),
            restarts=tuple(outcomes),
            iterations=0,
            converged=True,
        )


def clarans(
    points: ArrayLike,
    n_clusters: int,
    num_local: int = 5,
    max_neighbor: int = 100,
    **kwargs: Any,
) -> ClusteringResult:
    """Functional shortcut for ``Clarans(...).run(points)``."""
    progress = kwargs.pop("progress", False)
    return Clarans(
        n_clusters=n_clusters,
        num_local=num_local,
        max_neighbor=max_neighbor,
        **kwargs,
    ).run(points, progress=progress)
