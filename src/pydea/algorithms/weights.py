"""Objective weights for weighted additive DEA models.

Each weighting scheme is a pure function (X, Y) -> (wX, wY) returning
matrices with the shapes of X and Y. One weight per observation and
measure is returned even when a scheme only depends on column
statistics, so every DMU can pick its own row.

Schemes:
    - ones_weights(): standard additive model
    - mip_weights(): Measure of Inefficiency Proportions
    - normalized_weights(): Normalized weighted additive model
    - ram_weights(): Range Adjusted Measure
    - bam_weights(): Bounded Adjusted Measure

References:
    Charnes, A., Cooper, W.W., Golany, B., Seiford, L. & Stutz, J. (1985).
        "Foundations of data envelopment analysis for Pareto-Koopmans
        efficient empirical production functions"
    Lovell, C.A.K. & Pastor, J.T. (1995). "Units invariant and translation
        invariant DEA models"
    Cooper, W.W., Park, K.S. & Pastor, J.T. (1999). "RAM: A Range Adjusted
        Measure of Inefficiency for Use with Additive Models"
    Cooper, W.W., Pastor, J.T., Borras, F., Aparicio, J. & Pastor, D.
        (2011). "BAM: a bounded adjusted measure of efficiency for use with
        bounded additive models"
"""

from __future__ import annotations

import warnings
from typing import Callable, Union

import numpy as np

from pydea.core.data import as_matrix
from pydea.core.exceptions import DataQualityWarning, InvalidModelError
from pydea.core.types import FloatArray, MatrixLike, WeightModel

WeightPair = tuple[FloatArray, FloatArray]


def _safe_reciprocal(denominator: FloatArray) -> FloatArray:
    """1 / denominator, with 0 wherever the denominator is not positive and finite."""
    out = np.zeros_like(denominator, dtype=np.float64)
    valid = np.isfinite(denominator) & (denominator > 0)
    np.divide(1.0, denominator, out=out, where=valid)
    return out


def ones_weights(X: FloatArray, Y: FloatArray) -> WeightPair:
    """All weights equal to 1 (plain additive model)."""
    return np.ones(X.shape), np.ones(Y.shape)


def mip_weights(X: FloatArray, Y: FloatArray) -> WeightPair:
    """
    Measure of Inefficiency Proportions: weight = 1 / value, element-wise.

    Unlike the other schemes, zero-valued data gives an infinite weight
    that is kept as is: MIP is undefined for such observations and the
    LP of the affected DMU will fail to solve. compute_weights() warns
    about it.
    """
    with np.errstate(divide="ignore"):
        wX = 1.0 / X
        wY = 1.0 / Y
    return wX, wY


def normalized_weights(X: FloatArray, Y: FloatArray) -> WeightPair:
    """
    Normalized weighted additive model: weight = 1 / sample std of the column.

    Columns with zero (or undefined) standard deviation get weight 0.
    """
    n = X.shape[0]
    if n > 1:
        std_x = np.std(X, axis=0, ddof=1)
        std_y = np.std(Y, axis=0, ddof=1)
    else:
        # Sample deviation is undefined for a single observation
        std_x = np.zeros(X.shape[1])
        std_y = np.zeros(Y.shape[1])

    wX = np.broadcast_to(_safe_reciprocal(std_x), X.shape).copy()
    wY = np.broadcast_to(_safe_reciprocal(std_y), Y.shape).copy()
    return wX, wY


def ram_weights(X: FloatArray, Y: FloatArray) -> WeightPair:
    """
    Range Adjusted Measure: weight = 1 / ((m + s) * range of the column).

    Columns with zero range get weight 0.
    """
    m, s = X.shape[1], Y.shape[1]
    range_x = np.ptp(X, axis=0)
    range_y = np.ptp(Y, axis=0)

    wX = np.broadcast_to(_safe_reciprocal((m + s) * range_x), X.shape).copy()
    wY = np.broadcast_to(_safe_reciprocal((m + s) * range_y), Y.shape).copy()
    return wX, wY


def bam_weights(X: FloatArray, Y: FloatArray) -> WeightPair:
    """
    Bounded Adjusted Measure.

    Input weight of observation i: 1 / ((m + s) * (X[i, j] - min_j X)).
    Output weight of observation i: 1 / ((m + s) * (max_j Y - Y[i, j])).
    Observations lying on the bound get weight 0.
    """
    m, s = X.shape[1], Y.shape[1]
    dist_x = X - X.min(axis=0)
    dist_y = Y.max(axis=0) - Y

    return _safe_reciprocal((m + s) * dist_x), _safe_reciprocal((m + s) * dist_y)


_WEIGHT_STRATEGIES: dict[WeightModel, Callable[[FloatArray, FloatArray], WeightPair]] = {
    WeightModel.ONES: ones_weights,
    WeightModel.MIP: mip_weights,
    WeightModel.NORMALIZED: normalized_weights,
    WeightModel.RAM: ram_weights,
    WeightModel.BAM: bam_weights,
}


def compute_weights(
    X: MatrixLike,
    Y: MatrixLike,
    model: Union[WeightModel, str] = WeightModel.ONES,
    stacklevel: int = 2,
) -> WeightPair:
    """
    Compute the objective weights of a weighted additive DEA model.

    Args:
        X: n x m input matrix (or length-n vector for a single input)
        Y: n x s output matrix (or length-n vector for a single output)
        model: Weighting model tag: "Ones", "MIP", "Normalized", "RAM" or "BAM"
        stacklevel: Stack level of the DataQualityWarning emitted for
            infinite MIP weights, relative to this function

    Returns:
        Tuple (wX, wY) of weight matrices with the shapes of X and Y

    Raises:
        InvalidModelError: If the tag is unknown, or is "Custom" (custom
            weights are supplied by the caller, not computed)

    Example:
        >>> wX, wY = compute_weights([[1, 2], [3, 4]], [5, 6], "RAM")
        >>> wX
        array([[0.16666667, 0.16666667],
               [0.16666667, 0.16666667]])
    """
    model = WeightModel.parse(model)
    strategy = _WEIGHT_STRATEGIES.get(model)
    if strategy is None:
        raise InvalidModelError(
            f"Weights for model {model.value!r} are supplied by the caller, "
            f"they cannot be computed"
        )

    X = as_matrix(X, "X")
    Y = as_matrix(Y, "Y")
    wX, wY = strategy(X, Y)

    n_inf = int(np.sum(np.isinf(wX)) + np.sum(np.isinf(wY)))
    if n_inf:
        warnings.warn(
            f"{model.value} weights are infinite for {n_inf} zero-valued entries. "
            f"MIP is undefined for zero data; affected DMUs cannot be solved.",
            DataQualityWarning,
            stacklevel=stacklevel,
        )
    return wX, wY
