"""Input normalization and shape validation for DEA data.

Inputs, outputs, weights and reference sets may be given either as a
single-column sequence or as a full matrix. Everything is promoted to a
2-D float64 matrix here, so the solver core only ever sees matrices.
"""

from __future__ import annotations

import numpy as np

from pydea.core.exceptions import DimensionError, NaNInfError
from pydea.core.types import FloatArray, MatrixLike


def as_matrix(
    values: MatrixLike,
    name: str,
    allow_nonfinite: bool = False,
) -> FloatArray:
    """
    Convert a vector or matrix to a 2-D float64 array.

    A 1-D sequence of length n is treated as an (n x 1) matrix.

    Args:
        values: Sequence, nested sequence or array of numbers
        name: Name used in error messages (e.g. "X", "wY")
        allow_nonfinite: Accept NaN/Inf entries (used for weights)

    Returns:
        2-D float64 array

    Raises:
        DimensionError: If the data is scalar, has more than 2 dimensions
            or is empty
        NaNInfError: If the data contains NaN/Inf and allow_nonfinite is False

    Example:
        >>> as_matrix([12, 14, 25], "Y").shape
        (3, 1)
    """
    arr = np.asarray(values, dtype=np.float64)

    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    elif arr.ndim != 2:
        raise DimensionError(
            f"{name} must be a vector or a 2D matrix, got {arr.ndim}D array "
            f"with shape {arr.shape}"
        )

    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise DimensionError(f"{name} is empty (shape {arr.shape})")

    if not allow_nonfinite:
        invalid = ~np.isfinite(arr)
        if np.any(invalid):
            rows = np.where(np.any(invalid, axis=1))[0]
            row_preview = rows[:5].tolist()
            row_msg = str(row_preview) + ("..." if len(rows) > 5 else "")
            raise NaNInfError(
                f"Found {int(invalid.sum())} NaN/Inf values in {name} "
                f"({len(rows)} observations). Affected rows: {row_msg}."
            )

    return arr


def validate_additive_inputs(
    X: FloatArray,
    Y: FloatArray,
    Xref: FloatArray,
    Yref: FloatArray,
) -> None:
    """
    Check that observation and reference matrices are compatible.

    Raises:
        DimensionError: On the first violated condition, in this order:
            rows of X vs Y, rows of Xref vs Yref, columns of X vs Xref,
            columns of Y vs Yref
    """
    nx, m = X.shape
    ny, s = Y.shape
    nrefx, mref = Xref.shape
    nrefy, sref = Yref.shape

    if nx != ny:
        raise DimensionError(
            f"number of observations is different in inputs ({nx}) and outputs ({ny})"
        )
    if nrefx != nrefy:
        raise DimensionError(
            f"number of observations is different in inputs reference set ({nrefx}) "
            f"and outputs reference set ({nrefy})"
        )
    if m != mref:
        raise DimensionError(
            f"number of inputs in evaluation set ({m}) and reference set ({mref}) "
            f"is different"
        )
    if s != sref:
        raise DimensionError(
            f"number of outputs in evaluation set ({s}) and reference set ({sref}) "
            f"is different"
        )


def validate_weight_shapes(
    wX: FloatArray,
    wY: FloatArray,
    X: FloatArray,
    Y: FloatArray,
) -> None:
    """Check that weight matrices have exactly the shapes of X and Y."""
    if wX.shape != X.shape:
        raise DimensionError(
            f"size of weights matrix for inputs {wX.shape} should be equal to "
            f"size of inputs {X.shape}"
        )
    if wY.shape != Y.shape:
        raise DimensionError(
            f"size of weights matrix for outputs {wY.shape} should be equal to "
            f"size of outputs {Y.shape}"
        )
