"""CLI entry point for clustering a points file."""

from __future__ import annotations

import argparse
from pathlib import Path

from medoid_clustering.api import MedoidClustering
from medoid_clustering.clustering.distance import available_metrics
from medoid_clustering.config import get_settings
from medoid_clustering.data.points import load_points
from medoid_clustering.utils.logger import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cluster points around K medoids with CLARANS.")
    parser.add_argument(
        "--input",
        required=True,
        help="Path to CSV or Parquet file, one point per row.",
    )
    parser.add_argument(
        "--format",
        choices=["auto", "csv", "parquet"],
        default="auto",
        help="Input file format. Defaults to auto-detect by extension.",
    )
    parser.add_argument(
        "-k",
        "--clusters",
        type=int,
        required=True,
        help="Number of clusters.",
    )
    parser.add_argument(
        "--columns",
        nargs="+",
        default=None,
        help="Coordinate columns (default: every numeric column).",
    )
    parser.add_argument("--num-local", type=int, default=None, help="Number of restarts.")
    parser.add_argument(
        "--max-neighbor",
        type=int,
        default=None,
        help="Consecutive rejected swaps that end a restart.",
    )
    parser.add_argument(
        "--metric",
        choices=list(available_metrics()),
        default=None,
        help="Distance metric (default: squared_euclidean).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--jobs", type=int, default=None, help="Worker threads for restarts.")
    parser.add_argument(
        "--run-id",
        default=None,
        help="Optional run identifier. If omitted it will be generated automatically.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    overrides = {}
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.jobs is not None:
        overrides["n_jobs"] = args.jobs
    settings = get_settings().model_copy(update=overrides)
    setup_logger(settings)

    dataframe = load_points(Path(args.input), columns=args.columns, file_format=args.format)
    clustering = MedoidClustering(settings=settings)
    result = clustering.fit(
        dataframe,
        n_clusters=args.clusters,
        columns=args.columns,
        run_id=args.run_id,
        num_local=args.num_local,
        max_neighbor=args.max_neighbor,
        metric=args.metric,
    )

    print(f"[CLARANS] {result.n_points} points, {result.n_clusters} clusters.")
    print(f"Total cost: {result.cost:.6g}")
    print(f"Medoid rows: {list(result.medoid_indices)}")
    print(f"Cluster sizes: {result.cluster_sizes()}")
    if clustering.last_assignments_path:
        print(f"Assignments stored at: {clustering.last_assignments_path}")
    print(f"Metrics appended to: {clustering.metrics_tracker.metrics_path}")


if __name__ == "__main__":
    main()
