"""Tests for point loading and validation."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from medoid_clustering.data.points import as_point_matrix, load_points, points_from_frame
from medoid_clustering.exceptions import DataQualityError, InvalidParameterError


def _frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "name": ["a", "b", "c"],
            "x": [0.0, 1.0, 10.0],
            "y": [0.5, 1.5, 10.5],
        }
    )


def test_load_points_reads_csv_columns(tmp_path: Path) -> None:
    path = tmp_path / "points.csv"
    _frame().to_csv(path, index=False)

    dataframe = load_points(path, columns=["y", "x"])

    assert dataframe.columns.tolist() == ["y", "x"]
    assert len(dataframe.index) == 3


def test_load_points_reads_parquet(tmp_path: Path) -> None:
    path = tmp_path / "points.parquet"
    _frame().to_parquet(path, index=False)

    dataframe = load_points(path)

    assert dataframe["x"].tolist() == [0.0, 1.0, 10.0]


def test_load_points_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_points(tmp_path / "missing.csv")

    odd = tmp_path / "points.txt"
    odd.write_text("x\n1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_points(odd)

    path = tmp_path / "points.csv"
    _frame().to_csv(path, index=False)
    with pytest.raises(InvalidParameterError):
        load_points(path, columns=["z"])


def test_points_from_frame_uses_numeric_columns() -> None:
    matrix = points_from_frame(_frame())

    assert matrix.shape == (3, 2)
    assert matrix[2].tolist() == [10.0, 10.5]

    with pytest.raises(InvalidParameterError):
        points_from_frame(_frame(), columns=["name"])
    with pytest.raises(InvalidParameterError):
        points_from_frame(pd.DataFrame({"name": ["a"]}))


def test_as_point_matrix_reads_flat_sequences_as_one_dimensional() -> None:
    matrix = as_point_matrix([0, 1, 2])

    assert matrix.shape == (3, 1)
    assert matrix.dtype == np.float64
    assert not matrix.flags.writeable


def test_as_point_matrix_does_not_alias_caller_data() -> None:
    source = np.array([[1.0, 2.0], [3.0, 4.0]])

    matrix = as_point_matrix(source)

    source[0, 0] = 100.0
    assert matrix[0, 0] == 1.0


def test_as_point_matrix_rejects_malformed_input() -> None:
    with pytest.raises(InvalidParameterError):
        as_point_matrix([])
    with pytest.raises(InvalidParameterError):
        as_point_matrix([[1.0], [2.0, 3.0]])
    with pytest.raises(InvalidParameterError):
        as_point_matrix(np.zeros((2, 0)))
    with pytest.raises(InvalidParameterError):
        as_point_matrix(np.zeros((2, 2, 2)))
    with pytest.raises(DataQualityError):
        as_point_matrix([[0.0, 1.0], [np.inf, 2.0]])
