"""Helpers for turning tabular data into a validated point matrix."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
from loguru import logger
from numpy.typing import ArrayLike, NDArray

from medoid_clustering.exceptions import DataQualityError, InvalidParameterError


def load_points(
    path: Path | str,
    columns: Sequence[str] | None = None,
    file_format: str = "auto",
) -> pd.DataFrame:
    """Read a CSV or Parquet file of points into a DataFrame.

    When ``columns`` is given only those columns are kept, in that order.
    """
    source = Path(path).expanduser()
    if not source.exists():
        msg = f"Points file does not exist: {source}"
        raise FileNotFoundError(msg)

    if file_format == "auto":
        suffix = source.suffix.lower()
        if suffix == ".csv":
            file_format = "csv"
        elif suffix in {".parquet", ".pq"}:
            file_format = "parquet"
        else:
            raise ValueError(f"Cannot auto-detect format for {source}. Use --format.")

    if file_format == "csv":
        dataframe = pd.read_csv(source)
    elif file_format == "parquet":
        dataframe = pd.read_parquet(source)
    else:
        raise ValueError(f"Unsupported format: {file_format}")

    if columns:
        _require_columns(dataframe, columns)
        dataframe = dataframe[list(columns)]

    logger.info("Loaded {} rows x {} columns from {}", *dataframe.shape, source)
    return dataframe


def points_from_frame(
    dataframe: pd.DataFrame,
    columns: Sequence[str] | None = None,
) -> NDArray[np.float64]:
    """Extract coordinates from a DataFrame.

    Without explicit ``columns`` every numeric column is used.
    """
    if not isinstance(dataframe, pd.DataFrame):
        msg = "points_from_frame expects a pandas.DataFrame."
        raise TypeError(msg)

    if columns:
        _require_columns(dataframe, columns)
        selected = dataframe[list(columns)]
    else:
        selected = dataframe.select_dtypes(include="number")
        if selected.columns.empty:
            raise InvalidParameterError("DataFrame has no numeric columns to cluster on.")

    try:
        values = selected.to_numpy(dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise InvalidParameterError(f"Columns {list(selected.columns)} are not numeric.") from err
    return as_point_matrix(values)


def as_point_matrix(data: ArrayLike | pd.DataFrame) -> NDArray[np.float64]:
    """Validate points and return them as a read-only ``(N, d)`` float matrix.

    A flat sequence of numbers is read as N one-dimensional points.

    Raises:
        InvalidParameterError: No points, zero dimensions or ragged rows.
        DataQualityError: Any coordinate is NaN or infinite.
    """
    if isinstance(data, pd.DataFrame):
        return points_from_frame(data)

    try:
        matrix = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise InvalidParameterError(
            "Points must be numeric vectors that all share the same dimension."
        ) from err

    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    if matrix.ndim != 2:
        raise InvalidParameterError(f"Points must form a 2-D matrix, got {matrix.ndim} dimensions.")
    if matrix.shape[0] == 0:
        raise InvalidParameterError("Point collection is empty.")
    if matrix.shape[1] == 0:
        raise InvalidParameterError("Points must have at least one coordinate.")
    if not np.isfinite(matrix).all():
        bad_rows = np.flatnonzero(~np.isfinite(matrix).all(axis=1))
        raise DataQualityError(
            f"{len(bad_rows)} point(s) contain NaN or infinite coordinates, first at row {bad_rows[0]}."
        )

    matrix.setflags(write=False)
    return matrix


def _require_columns(dataframe: pd.DataFrame, columns: Sequence[str]) -> None:
    missing = [column for column in columns if column not in dataframe.columns]
    if missing:
        msg = f"DataFrame is missing required columns: {missing}"
        raise InvalidParameterError(msg)
