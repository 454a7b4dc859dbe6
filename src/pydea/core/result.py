"""Result dataclasses for DEA models.

Result containers are built once, after every DMU has been solved, and
are read-only afterwards: fields cannot be reassigned and the numeric
arrays are flagged non-writeable.

Names:
    - AdditiveDEAResult: weighted additive DEA model result
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import sparse

from pydea.core.exceptions import DimensionError
from pydea.core.types import BoolArray, ReturnsToScale, WeightModel


def _readonly(values: Any, dtype: Any = np.float64) -> NDArray:
    arr = np.array(values, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


def _readonly_sparse(matrix: Any) -> sparse.csr_matrix:
    csr = sparse.csr_matrix(matrix, dtype=np.float64, copy=True)
    csr.sort_indices()
    for buf in (csr.data, csr.indices, csr.indptr):
        buf.setflags(write=False)
    return csr


@dataclass(frozen=True)
class AdditiveDEAResult:
    """
    Result of a weighted additive DEA model.

    The efficiency score of a DMU is the optimal weighted sum of its
    slacks. A score of 0 means the DMU lies on the efficient frontier of
    the reference set; larger scores mean more inefficiency.

    Attributes:
        num_dmus: Number of evaluated DMUs n
        num_inputs: Number of input measures m
        num_outputs: Number of output measures s
        rts: Returns-to-scale regime used
        efficiency: Length-n array of efficiency scores (0 = efficient)
        slack_inputs: n x m matrix of optimal input slacks
        slack_outputs: n x s matrix of optimal output slacks
        peer_weights: Sparse n x nref matrix of peer weights (lambdas).
            Row i holds the combination of reference units that defines
            the target of DMU i
        weights: Weighting model used in the objective
        tolerance: Values within this tolerance of zero were set to zero
        computation_time_ms: Time taken in milliseconds
    """

    num_dmus: int
    num_inputs: int
    num_outputs: int
    rts: ReturnsToScale
    efficiency: NDArray[np.float64]
    slack_inputs: NDArray[np.float64]
    slack_outputs: NDArray[np.float64]
    peer_weights: sparse.csr_matrix
    weights: WeightModel
    tolerance: float = 1e-9
    computation_time_ms: float = 0.0

    def __post_init__(self) -> None:
        """Freeze the arrays and check the shape invariants."""
        object.__setattr__(self, "rts", ReturnsToScale.parse(self.rts))
        object.__setattr__(self, "weights", WeightModel.parse(self.weights))
        object.__setattr__(self, "efficiency", _readonly(self.efficiency).reshape(-1))
        object.__setattr__(self, "slack_inputs", _readonly(self.slack_inputs))
        object.__setattr__(self, "slack_outputs", _readonly(self.slack_outputs))
        object.__setattr__(self, "peer_weights", _readonly_sparse(self.peer_weights))

        n, m, s = self.num_dmus, self.num_inputs, self.num_outputs
        if self.efficiency.shape != (n,):
            raise DimensionError(
                f"efficiency has shape {self.efficiency.shape}, expected ({n},)"
            )
        if self.slack_inputs.shape != (n, m):
            raise DimensionError(
                f"slack_inputs has shape {self.slack_inputs.shape}, expected ({n}, {m})"
            )
        if self.slack_outputs.shape != (n, s):
            raise DimensionError(
                f"slack_outputs has shape {self.slack_outputs.shape}, expected ({n}, {s})"
            )
        if self.peer_weights.shape[0] != n:
            raise DimensionError(
                f"peer_weights has {self.peer_weights.shape[0]} rows, expected {n}"
            )

    def nobs(self) -> int:
        """Number of evaluated DMUs."""
        return self.num_dmus

    def ninputs(self) -> int:
        """Number of input measures."""
        return self.num_inputs

    def noutputs(self) -> int:
        """Number of output measures."""
        return self.num_outputs

    @property
    def num_references(self) -> int:
        """Number of units in the reference set."""
        return self.peer_weights.shape[1]

    @property
    def is_efficient(self) -> BoolArray:
        """Boolean array, True where the DMU has zero efficiency score."""
        return self.efficiency == 0.0

    @property
    def num_efficient(self) -> int:
        """Number of DMUs on the efficient frontier."""
        return int(np.sum(self.is_efficient))

    def slacks(self, which: str) -> NDArray[np.float64]:
        """
        Return the slack matrix for inputs ("X") or outputs ("Y").

        Raises:
            ValueError: If which is neither "X" nor "Y"
        """
        key = which.upper()
        if key == "X":
            return self.slack_inputs
        if key == "Y":
            return self.slack_outputs
        raise ValueError(f"which must be 'X' or 'Y', got {which!r}")

    def peers(self, dmu: int) -> dict[int, float]:
        """
        Peers of one DMU and their weights.

        Args:
            dmu: Zero-based DMU index

        Returns:
            Mapping reference-unit index -> peer weight, only non-zero
            weights, ordered by reference index
        """
        if not -self.num_dmus <= dmu < self.num_dmus:
            raise IndexError(f"DMU index {dmu} out of range for {self.num_dmus} DMUs")
        dmu = dmu % self.num_dmus
        start, end = self.peer_weights.indptr[dmu], self.peer_weights.indptr[dmu + 1]
        cols = self.peer_weights.indices[start:end]
        vals = self.peer_weights.data[start:end]
        return {int(j): float(v) for j, v in zip(cols, vals) if v != 0.0}

    def peer_matrix(self) -> NDArray[np.float64]:
        """Dense copy of the peer-weight matrix."""
        return self.peer_weights.toarray()

    def to_dict(self) -> dict[str, Any]:
        """Return dictionary representation for serialization."""
        coo = self.peer_weights.tocoo()
        return {
            "num_dmus": self.num_dmus,
            "num_inputs": self.num_inputs,
            "num_outputs": self.num_outputs,
            "num_references": self.num_references,
            "rts": self.rts.value,
            "weights": self.weights.value,
            "efficiency": self.efficiency.tolist(),
            "slack_inputs": self.slack_inputs.tolist(),
            "slack_outputs": self.slack_outputs.tolist(),
            "peer_weights": [
                [int(i), int(j), float(v)]
                for i, j, v in zip(coo.row, coo.col, coo.data)
            ],
            "num_efficient": self.num_efficient,
            "tolerance": self.tolerance,
            "computation_time_ms": self.computation_time_ms,
        }

    def __repr__(self) -> str:
        """Compact string representation."""
        return (
            f"AdditiveDEAResult(dmus={self.num_dmus}, inputs={self.num_inputs}, "
            f"outputs={self.num_outputs}, weights={self.weights.value}, "
            f"rts={self.rts.value}, efficient={self.num_efficient}, "
            f"{self.computation_time_ms:.2f}ms)"
        )
