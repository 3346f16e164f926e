"""Tests for the CLARANS medoid search."""

from __future__ import annotations

import dataclasses
import itertools

import numpy as np
import pytest

from medoid_clustering.clustering.clarans import Clarans, SearchState, clarans
from medoid_clustering.clustering.distance import Manhattan, SquaredEuclidean
from medoid_clustering.exceptions import DataQualityError, InvalidParameterError

TWO_GROUPS = [[0.0], [1.0], [2.0], [10.0], [11.0], [12.0]]


def _brute_force_cost(points: np.ndarray, medoid_indices: list[int]) -> float:
    metric = SquaredEuclidean()
    return float(
        sum(min(metric.distance(point, points[index]) for index in medoid_indices) for point in points)
    )


def _random_points(seed: int, n_points: int, dims: int = 2) -> np.ndarray:
    return np.random.default_rng(seed).normal(size=(n_points, dims))


@pytest.mark.parametrize("seed", range(10))
def test_two_separated_groups_never_mix(seed: int) -> None:
    result = Clarans(n_clusters=2, num_local=5, max_neighbor=20, random_state=seed).run(TWO_GROUPS)

    labels = result.labels.tolist()
    assert labels[0] == labels[1] == labels[2]
    assert labels[3] == labels[4] == labels[5]
    assert labels[0] != labels[3]

    low, high = sorted(float(value) for value in result.medoids[:, 0])
    assert low in {0.0, 1.0, 2.0}
    assert high in {10.0, 11.0, 12.0}


def test_two_groups_settle_on_middle_points() -> None:
    result = Clarans(n_clusters=2, num_local=5, max_neighbor=100, random_state=0).run(TWO_GROUPS)

    # The middle point of each group is the unique squared-Euclidean optimum.
    assert sorted(result.medoid_indices) == [1, 4]
    assert result.cost == pytest.approx(4.0)


def test_result_shape_and_medoids_are_input_points() -> None:
    points = _random_points(seed=3, n_points=40, dims=3)

    result = Clarans(n_clusters=4, num_local=3, max_neighbor=30, random_state=5).run(points)

    assert result.n_points == 40
    assert result.labels.shape == (40,)
    assert set(result.labels.tolist()) <= set(range(4))
    assert result.n_clusters == 4
    assert result.medoids.shape == (4, 3)
    assert len(set(result.medoid_indices)) == 4
    for index, medoid in zip(result.medoid_indices, result.medoids):
        assert np.array_equal(medoid, points[index])
    assert result.iterations == 0
    assert result.converged is True
    assert len(result.restarts) == 3


def test_labels_point_to_the_nearest_medoid() -> None:
    points = _random_points(seed=8, n_points=30)

    result = Clarans(n_clusters=3, num_local=2, max_neighbor=25, random_state=1).run(points)

    metric = SquaredEuclidean()
    for point, label in zip(points, result.labels):
        distances = [metric.distance(point, medoid) for medoid in result.medoids]
        assert distances[label] == pytest.approx(min(distances))
    assert result.cost == pytest.approx(_brute_force_cost(points, list(result.medoid_indices)))


def test_search_never_worsens_the_initial_medoids() -> None:
    points = _random_points(seed=21, n_points=50)

    result = Clarans(n_clusters=5, num_local=4, max_neighbor=40, random_state=2).run(points)

    for outcome in result.restarts:
        assert outcome.cost <= outcome.initial_cost + 1e-9
        assert outcome.improvement >= -1e-9
    assert result.cost <= min(outcome.initial_cost for outcome in result.restarts) + 1e-9
    assert result.cost == pytest.approx(min(outcome.cost for outcome in result.restarts))
    assert result.best_restart is not None


def test_zero_neighbors_keeps_the_best_random_medoid_set() -> None:
    points = _random_points(seed=13, n_points=25)

    result = Clarans(n_clusters=3, num_local=6, max_neighbor=0, random_state=4).run(points)

    rescored = []
    for outcome in result.restarts:
        assert outcome.accepted_swaps == 0
        assert outcome.trials == 0
        assert outcome.medoid_indices == outcome.initial_medoids
        cost = _brute_force_cost(points, list(outcome.initial_medoids))
        assert outcome.initial_cost == pytest.approx(cost)
        rescored.append(cost)
    assert result.cost == pytest.approx(min(rescored))


def test_swaps_that_leave_the_cost_unchanged_are_rejected() -> None:
    points = [[1.0, 1.0]] * 6
    result = Clarans(n_clusters=2, num_local=3, max_neighbor=10, random_state=0).run(points)

    assert result.cost == 0.0
    for outcome in result.restarts:
        assert outcome.accepted_swaps == 0
        assert outcome.trials == 10
        assert outcome.medoid_indices == outcome.initial_medoids


def test_every_point_is_its_own_medoid_when_k_equals_n() -> None:
    points = _random_points(seed=5, n_points=7)

    result = Clarans(n_clusters=7, num_local=2, max_neighbor=10, random_state=0).run(points)

    assert sorted(result.medoid_indices) == list(range(7))
    assert result.cost == 0.0
    assert sorted(result.labels.tolist()) == list(range(7))


def test_single_cluster_matches_brute_force() -> None:
    points = _random_points(seed=17, n_points=9)
    totals = [_brute_force_cost(points, [index]) for index in range(len(points))]

    result = Clarans(n_clusters=1, num_local=3, max_neighbor=200, random_state=9).run(points)

    assert result.medoid_indices == (int(np.argmin(totals)),)
    assert result.labels.tolist() == [0] * 9
    assert result.cost == pytest.approx(min(totals))


def test_swap_delta_equals_cost_difference() -> None:
    points = _random_points(seed=29, n_points=15)
    metric = SquaredEuclidean()
    medoids = [0, 5, 9]
    state = SearchState.initialize(points, medoids, metric)

    for slot, candidate in itertools.product(range(3), [1, 7, 14]):
        swapped = list(medoids)
        swapped[slot] = candidate
        expected = _brute_force_cost(points, swapped) - _brute_force_cost(points, medoids)

        delta = state.swap_delta(slot, metric.to_many(points[candidate], points))

        assert delta == pytest.approx(expected)


def test_apply_swap_updates_working_state() -> None:
    points = _random_points(seed=31, n_points=12)
    metric = SquaredEuclidean()
    state = SearchState.initialize(points, [2, 4], metric)

    state.apply_swap(0, 10, metric.to_many(points[10], points))

    assert state.medoid_indices == [10, 4]
    assert state.current_indexes == {10, 4}
    rebuilt = SearchState.initialize(points, [10, 4], metric)
    assert state.labels.tolist() == rebuilt.labels.tolist()
    assert state.cost() == pytest.approx(rebuilt.cost())


def test_seeded_runs_are_reproducible_across_thread_counts() -> None:
    points = _random_points(seed=41, n_points=60)

    sequential = Clarans(n_clusters=4, num_local=6, max_neighbor=30, random_state=12).run(points)
    repeated = Clarans(n_clusters=4, num_local=6, max_neighbor=30, random_state=12).run(points)
    threaded = Clarans(
        n_clusters=4, num_local=6, max_neighbor=30, random_state=12, n_jobs=3
    ).run(points)

    assert sequential.medoid_indices == repeated.medoid_indices == threaded.medoid_indices
    assert sequential.restarts == threaded.restarts
    assert np.array_equal(sequential.labels, threaded.labels)


def test_alternative_metric_is_used_for_assignment() -> None:
    result = Clarans(
        n_clusters=2, num_local=3, max_neighbor=100, metric=Manhattan(), random_state=6
    ).run(TWO_GROUPS)

    assert result.labels[0] != result.labels[5]
    assert result.cost == pytest.approx(4.0)


def test_functional_shortcut() -> None:
    result = clarans(TWO_GROUPS, n_clusters=2, num_local=2, max_neighbor=20, random_state=1)

    assert result.n_clusters == 2
    assert result.to_dataframe()["cluster"].nunique() == 2


def test_result_is_immutable() -> None:
    result = clarans(TWO_GROUPS, n_clusters=2, random_state=0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.cost = 0.0  # type: ignore[misc]
    with pytest.raises(ValueError):
        result.labels[0] = 1
    with pytest.raises(ValueError):
        result.medoids[0, 0] = 99.0


def test_result_dataframe_and_groups() -> None:
    result = clarans(TWO_GROUPS, n_clusters=2, random_state=3)

    frame = result.to_dataframe()

    assert frame.columns.tolist() == ["point_index", "cluster", "medoid_index"]
    assert len(frame.index) == 6
    assert sorted(result.cluster_sizes()) == [3, 3]
    groups = sorted(sorted(members.tolist()) for members in result.clusters())
    assert groups == [[0, 1, 2], [3, 4, 5]]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_clusters": 0},
        {"n_clusters": 2, "num_local": 0},
        {"n_clusters": 2, "max_neighbor": -1},
        {"n_clusters": 2, "n_jobs": 0},
        {"n_clusters": 2, "metric": "cosine"},
        {"n_clusters": 2, "random_state": -1},
        {"n_clusters": True},
        {"n_clusters": "3"},
        {"n_clusters": 2.0},
        {"n_clusters": 2, "num_local": 1.5},
    ],
)
def test_invalid_parameters_are_rejected(kwargs: dict) -> None:
    with pytest.raises(InvalidParameterError):
        Clarans(**kwargs)


def test_more_clusters_than_points_is_rejected() -> None:
    with pytest.raises(InvalidParameterError):
        Clarans(n_clusters=7).run(TWO_GROUPS)


def test_bad_point_collections_are_rejected() -> None:
    algorithm = Clarans(n_clusters=1)

    with pytest.raises(InvalidParameterError):
        algorithm.run([])
    with pytest.raises(InvalidParameterError):
        algorithm.run([[1.0, 2.0], [3.0]])
    with pytest.raises(DataQualityError):
        algorithm.run([[1.0, 2.0], [float("nan"), 3.0]])
