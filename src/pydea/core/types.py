"""Type aliases and model tags for PyDEA."""

from __future__ import annotations

from enum import Enum
from typing import TypeAlias, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydea.core.exceptions import InvalidModelError, InvalidReturnsToScaleError

# Matrix types
FloatArray: TypeAlias = NDArray[np.float64]
BoolArray: TypeAlias = NDArray[np.bool_]

# Anything accepted where a data matrix is expected (vector or matrix)
MatrixLike: TypeAlias = ArrayLike


class WeightModel(str, Enum):
    """Weighting schemes of the weighted additive DEA model.

    Members:
        ONES: standard additive model, unweighted slacks
        MIP: Measure of Inefficiency Proportions (Charnes et al., 1987)
        NORMALIZED: Normalized weighted additive model (Lovell and Pastor, 1995)
        RAM: Range Adjusted Measure (Cooper et al., 1999)
        BAM: Bounded Adjusted Measure (Cooper et al., 2011)
        CUSTOM: weights supplied by the caller
    """

    ONES = "Ones"
    MIP = "MIP"
    NORMALIZED = "Normalized"
    RAM = "RAM"
    BAM = "BAM"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: Union["WeightModel", str]) -> "WeightModel":
        """Convert a tag (enum member or case-insensitive name) to a member."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        valid = ", ".join(member.value for member in cls)
        raise InvalidModelError(f"Invalid model {value!r}. Model should be one of: {valid}")


class ReturnsToScale(str, Enum):
    """Returns-to-scale regime of the production possibility set."""

    CRS = "CRS"
    VRS = "VRS"

    @classmethod
    def parse(cls, value: Union["ReturnsToScale", str]) -> "ReturnsToScale":
        """Convert a tag to a member.

        Accepts the members, "CRS"/"VRS" and "constant"/"variable",
        case-insensitively.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("crs", "constant"):
                return cls.CRS
            if key in ("vrs", "variable"):
                return cls.VRS
        raise InvalidReturnsToScaleError(
            f"Invalid returns to scale {value!r}. Returns to scale should be 'CRS' or 'VRS'"
        )
