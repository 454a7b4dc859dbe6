"""Weighted additive DEA models.

For every DMU a linear program is solved over the production
possibility set spanned by a reference set of peers:

    max   wX_i @ sX + wY_i @ sY
    s.t.  Xref.T @ lambda + sX = x_i
          Yref.T @ lambda - sY = y_i
          sum(lambda) = 1                      (VRS only)
          Xref.T @ lambda >= min(X, axis=0)    (BAM under CRS only)
          Yref.T @ lambda <= max(Y, axis=0)    (BAM under CRS only)
          sX, sY, lambda >= 0

The optimal objective is the efficiency score of the DMU (0 means
efficient). The problems are independent of each other and are solved
in a thread pool; results are joined by position.

Names:
    - solve_additive(): weighted additive DEA model
    - deaadd(): alias of solve_additive()

References:
    Charnes, A., Cooper, W.W., Golany, B., Seiford, L. & Stutz, J. (1985)
    Cooper, W.W., Seiford, L.M. & Tone, K. (2007). "Data Envelopment
        Analysis", Chapter 4
"""

from __future__ import annotations

import os
import time
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Union

import numpy as np
from scipy import sparse
from scipy.optimize import linprog

from pydea.algorithms.weights import compute_weights
from pydea.core.data import as_matrix, validate_additive_inputs, validate_weight_shapes
from pydea.core.exceptions import (
    ConfigurationError,
    DataQualityWarning,
    DimensionError,
    NumericalInstabilityWarning,
    SolveFailedError,
)
from pydea.core.result import AdditiveDEAResult
from pydea.core.types import FloatArray, MatrixLike, ReturnsToScale, WeightModel

DEFAULT_TOLERANCE = 1e-9
DEFAULT_METHOD = "highs"
HIGHS_METHODS = ("highs", "highs-ds", "highs-ipm")


@dataclass(frozen=True)
class _AdditiveProblem:
    """Data shared read-only by all per-DMU problems.

    The constraint matrices do not depend on the evaluated DMU; only the
    objective (its weights) and the right-hand side (its data) do.
    """

    X: FloatArray
    Y: FloatArray
    wX: FloatArray
    wY: FloatArray
    A_eq: FloatArray
    A_ub: FloatArray | None
    b_ub: FloatArray | None
    vrs: bool
    method: str
    tolerance: float


@dataclass(frozen=True)
class _DMUSolution:
    efficiency: float
    slack_x: FloatArray
    slack_y: FloatArray
    lambdas: FloatArray


def _build_problem(
    X: FloatArray,
    Y: FloatArray,
    Xref: FloatArray,
    Yref: FloatArray,
    wX: FloatArray,
    wY: FloatArray,
    rts: ReturnsToScale,
    model: WeightModel,
    method: str,
    tolerance: float,
) -> _AdditiveProblem:
    """Build the constraint matrices shared by all DMUs."""
    m, s = X.shape[1], Y.shape[1]
    nref = Xref.shape[0]

    # Variable layout: [sX (m), sY (s), lambda (nref)]
    A_input = np.hstack([np.eye(m), np.zeros((m, s)), Xref.T])
    A_output = np.hstack([np.zeros((s, m)), -np.eye(s), Yref.T])
    rows = [A_input, A_output]

    vrs = rts is ReturnsToScale.VRS
    if vrs:
        rows.append(np.concatenate([np.zeros(m + s), np.ones(nref)])[np.newaxis, :])
    A_eq = np.vstack(rows)

    A_ub = None
    b_ub = None
    if rts is ReturnsToScale.CRS and model is WeightModel.BAM:
        # Keep the composite unit inside the observed bounding box
        A_ub = np.vstack([
            np.hstack([np.zeros((m, m + s)), -Xref.T]),
            np.hstack([np.zeros((s, m + s)), Yref.T]),
        ])
        b_ub = np.concatenate([-X.min(axis=0), Y.max(axis=0)])

    return _AdditiveProblem(
        X=X,
        Y=Y,
        wX=wX,
        wY=wY,
        A_eq=A_eq,
        A_ub=A_ub,
        b_ub=b_ub,
        vrs=vrs,
        method=method,
        tolerance=tolerance,
    )


def _solve_dmu(i: int, problem: _AdditiveProblem) -> _DMUSolution:
    """Solve the additive LP of DMU i.

    Raises:
        SolveFailedError: If the solver does not report an optimal solution
    """
    m = problem.X.shape[1]
    s = problem.Y.shape[1]
    nref = problem.A_eq.shape[1] - m - s

    # linprog minimizes, so the weighted slack sum is negated
    c = -np.concatenate([problem.wX[i], problem.wY[i], np.zeros(nref)])
    b_eq = np.concatenate([problem.X[i], problem.Y[i]])
    if problem.vrs:
        b_eq = np.append(b_eq, 1.0)

    try:
        result = linprog(
            c,
            A_ub=problem.A_ub,
            b_ub=problem.b_ub,
            A_eq=problem.A_eq,
            b_eq=b_eq,
            bounds=(0, None),
            method=problem.method,
            options={"presolve": True},
        )
    except ValueError as e:
        raise SolveFailedError(i, str(e)) from e

    if result.status != 0 or result.x is None:
        raise SolveFailedError(i, result.message, result.status)

    tol = problem.tolerance
    x = result.x
    efficiency = -float(result.fun)
    if abs(efficiency) <= tol:
        efficiency = 0.0
    elif efficiency < 0:
        warnings.warn(
            f"Negative efficiency {efficiency:.3e} for DMU {i} exceeds the tolerance "
            f"{tol:.1e}; the problem may be ill-conditioned.",
            NumericalInstabilityWarning,
            stacklevel=2,
        )

    slack_x = np.where(x[:m] < tol, 0.0, x[:m])
    slack_y = np.where(x[m:m + s] < tol, 0.0, x[m:m + s])
    lambdas = np.where(np.abs(x[m + s:]) < tol, 0.0, x[m + s:])

    return _DMUSolution(
        efficiency=efficiency,
        slack_x=slack_x,
        slack_y=slack_y,
        lambdas=lambdas,
    )


def _resolve_workers(n_jobs: int | None, n: int) -> int:
    """Number of worker threads for n DMUs."""
    cpus = os.cpu_count() or 1
    valid_int = isinstance(n_jobs, (int, np.integer)) and not isinstance(
        n_jobs, (bool, np.bool_)
    )
    if n_jobs is None or (valid_int and n_jobs == -1):
        workers = cpus
    elif valid_int and n_jobs > 0:
        workers = int(n_jobs)
    else:
        raise ConfigurationError(
            f"n_jobs must be None, -1 or a positive integer, got {n_jobs!r}"
        )
    return max(1, min(workers, n))


def _check_solver_options(method: str, tolerance: float) -> None:
    """Reject solver settings before any DMU is solved."""
    if method not in HIGHS_METHODS:
        valid = ", ".join(repr(name) for name in HIGHS_METHODS)
        raise ConfigurationError(f"Invalid method {method!r}. Method should be one of: {valid}")
    if isinstance(tolerance, (bool, np.bool_)) or not isinstance(
        tolerance, (int, float, np.number)
    ):
        raise ConfigurationError(f"tolerance must be a number, got {tolerance!r}")
    if not (np.isfinite(tolerance) and tolerance >= 0):
        raise ConfigurationError(
            f"tolerance must be finite and non-negative, got {tolerance!r}"
        )


def _solve_all(problem: _AdditiveProblem, workers: int) -> list[_DMUSolution]:
    """Solve every DMU, keeping DMU order in the returned list."""
    n = problem.X.shape[0]
    if workers == 1:
        return [_solve_dmu(i, problem) for i in range(n)]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_solve_dmu, i, problem) for i in range(n)]
        try:
            return [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            raise


def solve_additive(
    X: MatrixLike,
    Y: MatrixLike,
    model: Union[WeightModel, str] = WeightModel.ONES,
    *,
    rts: Union[ReturnsToScale, str] = ReturnsToScale.VRS,
    wX: MatrixLike | None = None,
    wY: MatrixLike | None = None,
    Xref: MatrixLike | None = None,
    Yref: MatrixLike | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
    method: str = DEFAULT_METHOD,
    n_jobs: int | None = None,
) -> AdditiveDEAResult:
    """
    Compute a weighted additive DEA model.

    Every DMU is scored by the maximal weighted sum of input and output
    slacks that a combination of reference units shows to be achievable.
    A score of 0 means the DMU is efficient.

    All inputs are validated before any linear program is solved.

    Args:
        X: n x m input matrix, or a length-n vector for a single input
        Y: n x s output matrix, or a length-n vector for a single output
        model: Weighting model: "Ones" (standard additive model), "MIP"
            (Measure of Inefficiency Proportions), "Normalized", "RAM"
            (Range Adjusted Measure), "BAM" (Bounded Adjusted Measure) or
            "Custom" (weights given by wX and wY)
        rts: Returns to scale, "VRS" (default) or "CRS"
        wX: n x m input weights, only with model="Custom"
        wY: n x s output weights, only with model="Custom"
        Xref: Reference set of inputs (default X)
        Yref: Reference set of outputs (default Y)
        tolerance: Efficiency scores, slacks and peer weights within this
            tolerance of zero are reported as exactly zero
        method: HiGHS method passed to scipy.optimize.linprog
            ("highs", "highs-ds" or "highs-ipm")
        n_jobs: Worker threads. None uses all cores, 1 solves
            sequentially, -1 uses all cores

    Returns:
        AdditiveDEAResult with efficiency scores, slacks and peer weights

    Raises:
        DimensionError: If the shapes of data, reference set or weights
            are incompatible
        NaNInfError: If the data contains NaN/Inf
        InvalidModelError: If the weighting model is unknown
        InvalidReturnsToScaleError: If rts is not CRS or VRS
        ConfigurationError: If method is not a HiGHS method, tolerance is
            negative or not finite, or n_jobs is not valid
        SolveFailedError: If the LP of a DMU has no optimal solution

    Example:
        >>> import numpy as np
        >>> from pydea import solve_additive
        >>> X = np.array([[5, 13], [16, 12], [16, 26], [17, 15], [18, 14], [23, 6],
        ...               [25, 10], [27, 22], [37, 14], [42, 25], [5, 17]])
        >>> Y = np.array([12, 14, 25, 26, 8, 9, 27, 30, 31, 26, 12])
        >>> result = solve_additive(X, Y, "MIP")
        >>> round(result.efficiency[1], 6)
        0.507519
    """
    start_time = time.perf_counter()

    model = WeightModel.parse(model)
    rts = ReturnsToScale.parse(rts)
    _check_solver_options(method, tolerance)

    X = as_matrix(X, "X")
    Y = as_matrix(Y, "Y")
    Xref = X if Xref is None else as_matrix(Xref, "Xref")
    Yref = Y if Yref is None else as_matrix(Yref, "Yref")
    validate_additive_inputs(X, Y, Xref, Yref)

    if model is WeightModel.CUSTOM:
        if wX is None or wY is None:
            raise DimensionError(
                "model='Custom' requires both weight matrices wX and wY"
            )
        wX = as_matrix(wX, "wX", allow_nonfinite=True)
        wY = as_matrix(wY, "wY", allow_nonfinite=True)
    else:
        if wX is not None or wY is not None:
            warnings.warn(
                f"Weights wX/wY are ignored with model={model.value!r}; "
                f"use model='Custom' to supply weights.",
                DataQualityWarning,
                stacklevel=2,
            )
        wX, wY = compute_weights(X, Y, model, stacklevel=3)
    validate_weight_shapes(wX, wY, X, Y)

    n, m = X.shape
    s = Y.shape[1]
    nref = Xref.shape[0]
    workers = _resolve_workers(n_jobs, n)

    problem = _build_problem(X, Y, Xref, Yref, wX, wY, rts, model, method, tolerance)
    solutions = _solve_all(problem, workers)

    efficiency = np.array([sol.efficiency for sol in solutions])
    slack_x = np.vstack([sol.slack_x for sol in solutions])
    slack_y = np.vstack([sol.slack_y for sol in solutions])

    rows, cols, vals = [], [], []
    for i, sol in enumerate(solutions):
        (nonzero,) = np.nonzero(sol.lambdas)
        rows.extend([i] * len(nonzero))
        cols.extend(nonzero.tolist())
        vals.extend(sol.lambdas[nonzero].tolist())
    peer_weights = sparse.coo_matrix(
        (
            np.asarray(vals, dtype=np.float64),
            (np.asarray(rows, dtype=np.intp), np.asarray(cols, dtype=np.intp)),
        ),
        shape=(n, nref),
    ).tocsr()

    computation_time = (time.perf_counter() - start_time) * 1000

    return AdditiveDEAResult(
        num_dmus=n,
        num_inputs=m,
        num_outputs=s,
        rts=rts,
        efficiency=efficiency,
        slack_inputs=slack_x,
        slack_outputs=slack_y,
        peer_weights=peer_weights,
        weights=model,
        tolerance=tolerance,
        computation_time_ms=computation_time,
    )


# =============================================================================
# ALIASES
# =============================================================================

deaadd = solve_additive
"""Alias for solve_additive, the name used by DEA packages."""
