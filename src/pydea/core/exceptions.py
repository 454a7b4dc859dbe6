"""Custom exceptions and warnings for PyDEA.

This module provides a hierarchy of exceptions for specific error types,
all inheriting from ValueError so that generic error handling keeps
working.

Exception Hierarchy:
    PyDEAError (ValueError)
    ├── DataValidationError
    │   ├── DimensionError
    │   └── NaNInfError
    ├── ConfigurationError
    │   ├── InvalidModelError
    │   └── InvalidReturnsToScaleError
    └── SolverError
        └── SolveFailedError

Warning Classes:
    DataQualityWarning (UserWarning)
    NumericalInstabilityWarning (UserWarning)
"""

from __future__ import annotations


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class PyDEAError(ValueError):
    """Base exception for all PyDEA errors.

    Inherits from ValueError - code that catches ValueError will also
    catch every PyDEA error.

    Example:
        >>> try:
        ...     result = solve_additive(X, Y, "MIP")
        ... except PyDEAError as e:
        ...     print(f"PyDEA error: {e}")
    """

    pass


# =============================================================================
# DATA VALIDATION EXCEPTIONS
# =============================================================================


class DataValidationError(PyDEAError):
    """Raised when input data fails validation checks.

    This is the base class for all data-related validation errors.
    Use more specific subclasses when possible.
    """

    pass


class DimensionError(DataValidationError):
    """Raised when array dimensions are incompatible.

    Common causes:
        - inputs and outputs have a different number of DMUs
        - reference set has a different number of inputs/outputs
        - weight matrices do not match the shape of the data
        - arrays that are empty or have more than 2 dimensions

    Example:
        >>> X = np.array([[1, 2], [3, 4]])    # 2 DMUs
        >>> Y = np.array([1, 2, 3])           # 3 DMUs
        >>> solve_additive(X, Y)
        DimensionError: number of observations is different in inputs (2)
        and outputs (3)
    """

    pass


class NaNInfError(DataValidationError):
    """Raised when NaN or Inf values are detected in input or output data.

    Common causes:
        - Missing data encoded as NaN
        - Division by zero in preprocessing
    """

    pass


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================


class ConfigurationError(PyDEAError):
    """Raised when a model option is not recognized.

    Configuration errors are detected before any linear program is
    solved, so no solver work is wasted.
    """

    pass


class InvalidModelError(ConfigurationError):
    """Raised when the weighting model tag is not recognized.

    Valid tags are "Ones", "MIP", "Normalized", "RAM", "BAM" and "Custom"
    (case-insensitive) or members of ``WeightModel``.
    """

    pass


class InvalidReturnsToScaleError(ConfigurationError):
    """Raised when the returns-to-scale tag is not "CRS" or "VRS"."""

    pass


# =============================================================================
# SOLVER EXCEPTIONS
# =============================================================================


class SolverError(PyDEAError):
    """Raised when the linear programming solver fails.

    This occurs when scipy.optimize.linprog cannot return an optimal
    solution.

    Common causes:
        - Infeasible constraints (the DMU cannot be enveloped by the
          reference set, e.g. a mismatched reference set under VRS)
        - Unbounded problem (a reference unit produces output from zero
          input under CRS)
        - Non-finite objective weights (MIP weights for zero data)
    """

    pass


class SolveFailedError(SolverError):
    """Raised when the linear program of one DMU has no optimal solution.

    The batch is aborted; no partial result is returned.

    Attributes:
        dmu_index: Zero-based index of the DMU whose problem failed
        reason: Message reported by the solver
        status: linprog status code (None if the solver raised)
    """

    def __init__(self, dmu_index: int, reason: str, status: int | None = None):
        self.dmu_index = dmu_index
        self.reason = reason
        self.status = status
        super().__init__(
            f"Linear program for DMU {dmu_index} could not be solved "
            f"(status={status}): {reason}"
        )

    def __reduce__(self):
        return (type(self), (self.dmu_index, self.reason, self.status))


# =============================================================================
# WARNINGS
# =============================================================================


class DataQualityWarning(UserWarning):
    """Warning for data quality issues that don't prevent computation.

    Emitted when:
        - MIP weights are infinite because of zero-valued data
        - Weights are supplied together with a non-custom model and
          therefore ignored

    Example:
        >>> import warnings
        >>> warnings.filterwarnings('error', category=DataQualityWarning)
    """

    pass


class NumericalInstabilityWarning(UserWarning):
    """Warning for potential numerical issues in computations.

    Emitted when the solver returns a negative objective value beyond
    the configured tolerance. The additive objective is non-negative by
    construction, so this points at an ill-conditioned problem.
    """

    pass
