"""Public API for medoid clustering."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence
from uuid import uuid4

import pandas as pd
from loguru import logger
from numpy.typing import ArrayLike

from medoid_clustering.clustering.clarans import Clarans
from medoid_clustering.clustering.result import ClusteringResult
from medoid_clustering.config import Settings, get_settings
from medoid_clustering.data.points import as_point_matrix, points_from_frame
from medoid_clustering.utils.metrics import MetricsTracker


class MedoidClustering:
    """High-level API that runs CLARANS with settings-driven defaults."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize clustering facade.

        Args:
            settings: Configuration settings. If None, loads from environment.
        """
        self.settings = settings or get_settings()
        self.metrics_tracker = MetricsTracker(settings=self.settings)
        self.results_dir = Path(self.settings.results_dir)
        self.last_assignments_path: Path | None = None

    def fit(
        self,
        data: pd.DataFrame | ArrayLike,
        n_clusters: int,
        columns: Sequence[str] | None = None,
        run_id: str | None = None,
        num_local: int | None = None,
        max_neighbor: int | None = None,
        metric: str | None = None,
    ) -> ClusteringResult:
        """Cluster points and record the run.

        Args:
            data: DataFrame or array-like of shape (N, d).
            n_clusters: Number of clusters K.
            columns: Coordinate columns when ``data`` is a DataFrame. Defaults
                to every numeric column.
            run_id: Identifier used for persisted files. Auto-generated if not provided.
            num_local: Overrides ``settings.num_local``.
            max_neighbor: Overrides ``settings.max_neighbor``.
            metric: Overrides ``settings.metric``.

        Returns:
            ClusteringResult with labels, medoids and per-restart outcomes.
        """
        if isinstance(data, pd.DataFrame):
            points = points_from_frame(data, columns)
        else:
            points = as_point_matrix(data)

        run_id = run_id or self._generate_run_id()
        algorithm = Clarans(
            n_clusters=n_clusters,
            num_local=num_local if num_local is not None else self.settings.num_local,
            max_neighbor=max_neighbor if max_neighbor is not None else self.settings.max_neighbor,
            metric=metric or self.settings.metric,
            random_state=self.settings.random_seed,
            n_jobs=self.settings.n_jobs,
        )
        logger.info("Starting run {} on {} points", run_id, len(points))
        result = algorithm.run(points, progress=self.settings.show_progress)

        self.last_assignments_path = self._persist_assignments(run_id, result)
        self.metrics_tracker.append(self._build_metrics(run_id, algorithm, result))
        return result

    def _persist_assignments(self, run_id: str, result: ClusteringResult) -> Path | None:
        """Persist assignments to disk."""
        if not self.settings.save_results:
            return None

        self.results_dir.mkdir(parents=True, exist_ok=True)
        csv_path = self.results_dir / f"{run_id}.csv"
        result.to_dataframe().to_csv(csv_path, index=False)
        logger.info("Assignments for run {} stored at {}", run_id, csv_path)
        return csv_path

    @staticmethod
    def _build_metrics(
        run_id: str,
        algorithm: Clarans,
        result: ClusteringResult,
    ) -> dict[str, float | int | str]:
        """Build metrics dictionary from results."""
        params = algorithm.params
        return {
            "run_id": run_id,
            "timestamp_utc": datetime.now(tz=timezone.utc).isoformat(),
            "points": result.n_points,
            "clusters": result.n_clusters,
            "metric": params.metric.name,
            "num_local": params.num_local,
            "max_neighbor": params.max_neighbor,
            "cost": round(result.cost, 6),
            "accepted_swaps": sum(outcome.accepted_swaps for outcome in result.restarts),
            "trials": sum(outcome.trials for outcome in result.restarts),
        }

    @staticmethod
    def _generate_run_id() -> str:
        timestamp = datetime.now(tz=timezone.utc).strftime("%Y%m%dT%H%M%S")
        return f"run-{timestamp}-{uuid4().hex[:6]}"
