"""Pydantic models validating search parameters."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from medoid_clustering.clustering.distance import DistanceMetric, get_metric
from medoid_clustering.exceptions import InvalidParameterError


class ClaransParameters(BaseModel):
    """Schema for the randomized medoid search configuration."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    n_clusters: StrictInt = Field(ge=1)
    num_local: StrictInt = Field(ge=1)
    max_neighbor: StrictInt = Field(ge=0)
    metric: DistanceMetric = Field(default_factory=lambda: get_metric("squared_euclidean"))
    random_state: StrictInt | None = Field(default=None, ge=0)
    n_jobs: StrictInt = Field(default=1, ge=1)

    @field_validator("metric", mode="before")
    @classmethod
    def resolve_metric(cls, v: Any) -> DistanceMetric:
        """Accept a registered metric name or a metric instance."""
        if v is None:
            return get_metric("squared_euclidean")
        return get_metric(v)

    @classmethod
    def build(cls, **values: Any) -> "ClaransParameters":
        """Validate values, reporting failures as ``InvalidParameterError``."""
        try:
            return cls(**values)
        except ValidationError as err:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in err.errors()
            )
            raise InvalidParameterError(f"Invalid clustering parameters: {problems}") from err
