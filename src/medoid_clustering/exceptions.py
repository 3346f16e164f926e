"""Exception hierarchy for medoid clustering."""


class MedoidClusteringError(Exception):
    """Base class for every error raised by the library."""


class InvalidParameterError(MedoidClusteringError, ValueError):
    """Caller supplied parameters or points the algorithm cannot run on."""


class DimensionMismatchError(InvalidParameterError):
    """Two coordinate vectors of different length were compared."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Coordinate length mismatch: {left} != {right}")
        self.left = left
        self.right = right


class DataQualityError(MedoidClusteringError, ValueError):
    """Coordinates or distances are NaN or infinite."""


class InvariantViolationError(MedoidClusteringError, RuntimeError):
    """Internal bookkeeping is broken. Indicates a bug, never retried."""
