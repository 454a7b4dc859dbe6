"""Core algorithms for weighted additive DEA."""

from pydea.algorithms.weights import (
    compute_weights,
    ones_weights,
    mip_weights,
    normalized_weights,
    ram_weights,
    bam_weights,
)
from pydea.algorithms.additive import solve_additive, deaadd

__all__ = [
    "compute_weights",
    "ones_weights",
    "mip_weights",
    "normalized_weights",
    "ram_weights",
    "bam_weights",
    "solve_additive",
    "deaadd",
]
