"""
PyDEA: Data Envelopment Analysis with weighted additive models.

Efficiency scores, slacks and peers for decision-making units from
observed inputs and outputs.
"""

from pydea.core.types import WeightModel, ReturnsToScale
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
from pydea.algorithms.weights import compute_weights
from pydea.algorithms.additive import solve_additive, deaadd

__version__ = "0.1.0"

__all__ = [
    # Model tags
    "WeightModel",
    "ReturnsToScale",
    # Result types
    "AdditiveDEAResult",
    # Algorithms
    "solve_additive",
    "deaadd",
    "compute_weights",
    # Exceptions
    "PyDEAError",
    "DataValidationError",
    "DimensionError",
    "NaNInfError",
    "ConfigurationError",
    "InvalidModelError",
    "InvalidReturnsToScaleError",
    "SolverError",
    "SolveFailedError",
    # Warnings
    "DataQualityWarning",
    "NumericalInstabilityWarning",
]
