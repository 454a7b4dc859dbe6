"""Core data structures for PyDEA."""

from pydea.core.types import WeightModel, ReturnsToScale
from pydea.core.data import as_matrix
from pydea.core.result import AdditiveDEAResult
from pydea.core.exceptions import (
    PyDEAError,
    DataValidationError,
    DimensionError,
    NaNInfError,
    ConfigurationError,
    InvalidModelError,
    InvalidReturnsToScaleError,
    SolverError,
    SolveFailedError,
    DataQualityWarning,
    NumericalInstabilityWarning,
)

__all__ = [
    "WeightModel",
    "ReturnsToScale",
    "as_matrix",
    "AdditiveDEAResult",
    "PyDEAError",
    "DataValidationError",
    "DimensionError",
    "NaNInfError",
    "ConfigurationError",
    "InvalidModelError",
    "InvalidReturnsToScaleError",
    "SolverError",
    "SolveFailedError",
    "DataQualityWarning",
    "NumericalInstabilityWarning",
]
