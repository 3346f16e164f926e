"""Examples of using medoid_clustering library.

This file demonstrates various use cases:
1. Basic usage on a small 1-D dataset
2. Choosing a different distance metric
3. Settings-driven runs that persist assignments and metrics
4. Inspecting individual restarts
"""

from pathlib import Path

import numpy as np
import pandas as pd

# Import the library
from medoid_clustering import Clarans, MedoidClustering, Settings, available_metrics


# =============================================================================
# Example 1: Basic Usage
# =============================================================================
def example_1_basic_usage():
    """Simplest way to cluster a handful of points."""
    print("=" * 80)
    print("Example 1: Basic Usage")
    print("=" * 80)

    points = [[0.0], [1.0], [2.0], [10.0], [11.0], [12.0]]

    result = Clarans(n_clusters=2, num_local=5, max_neighbor=20, random_state=42).run(points)

    print(f"\nLabels: {result.labels.tolist()}")
    print(f"Medoids: {result.medoids.ravel().tolist()}")
    print(f"Total cost: {result.cost:.3f}")


# =============================================================================
# Example 2: Distance Metrics
# =============================================================================
def example_2_metrics():
    """Same data, every registered metric."""
    print("\n" + "=" * 80)
    print("Example 2: Distance Metrics")
    print("=" * 80)

    rng = np.random.default_rng(0)
    blobs = np.vstack(
        [
            rng.normal(loc=(0, 0), scale=0.5, size=(30, 2)),
            rng.normal(loc=(5, 5), scale=0.5, size=(30, 2)),
            rng.normal(loc=(0, 5), scale=0.5, size=(30, 2)),
        ]
    )

    for metric in available_metrics():
        result = Clarans(n_clusters=3, metric=metric, random_state=1).run(blobs)
        print(f"  {metric:<18} cost={result.cost:10.3f} sizes={result.cluster_sizes()}")


# =============================================================================
# Example 3: Settings-driven Runs
# =============================================================================
def example_3_persisted_runs():
    """Use MedoidClustering to store assignments and append run metrics."""
    print("\n" + "=" * 80)
    print("Example 3: Persisted Runs")
    print("=" * 80)

    settings = Settings(
        num_local=8,
        max_neighbor=150,
        random_seed=7,
        n_jobs=4,
        results_dir=Path("ai_data") / "examples",
    )
    clustering = MedoidClustering(settings=settings)

    df = pd.DataFrame(
        {
            "city": ["A", "B", "C", "D", "E", "F"],
            "lat": [48.1, 48.2, 48.15, 52.5, 52.4, 52.45],
            "lon": [11.5, 11.6, 11.55, 13.4, 13.3, 13.35],
        }
    )
    result = clustering.fit(df, n_clusters=2, columns=["lat", "lon"], run_id="example-cities")

    df["cluster"] = result.labels
    print(df)
    print(f"\nAssignments: {clustering.last_assignments_path}")
    print(f"Metrics: {clustering.metrics_tracker.metrics_path}")


# =============================================================================
# Example 4: Inspecting Restarts
# =============================================================================
def example_4_restarts():
    """Each restart reports how far local search moved from its random start."""
    print("\n" + "=" * 80)
    print("Example 4: Restarts")
    print("=" * 80)

    points = np.random.default_rng(3).uniform(size=(500, 2))
    result = Clarans(n_clusters=10, num_local=5, max_neighbor=100, random_state=3).run(points)

    for outcome in result.restarts:
        print(
            f"  restart {outcome.restart}: {outcome.initial_cost:8.3f} -> {outcome.cost:8.3f} "
            f"({outcome.accepted_swaps} swaps / {outcome.trials} trials)"
        )
    print(f"\nBest restart: {result.best_restart.restart}")


if __name__ == "__main__":
    example_1_basic_usage()
    example_2_metrics()
    example_3_persisted_runs()
    example_4_restarts()
