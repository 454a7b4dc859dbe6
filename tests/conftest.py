"""Pytest fixtures for PyDEA tests."""

import numpy as np
import pytest
from scipy.optimize import linprog

import pydea.algorithms.additive as additive_module


@pytest.fixture
def mip_example() -> tuple[np.ndarray, np.ndarray]:
    """
    Eleven DMUs with two inputs and one output.

    Classic textbook data set for the additive model (Cooper, Seiford and
    Tone). Under MIP weights and VRS, DMUs 1, 4, 9 and 10 (zero-based) are
    inefficient, all others lie on the frontier.
    """
    X = np.array([
        [5, 13], [16, 12], [16, 26], [17, 15], [18, 14], [23, 6],
        [25, 10], [27, 22], [37, 14], [42, 25], [5, 17],
    ], dtype=float)
    Y = np.array([12, 14, 25, 26, 8, 9, 27, 30, 31, 26, 12], dtype=float)
    return X, Y


@pytest.fixture
def two_unit_example() -> tuple[np.ndarray, np.ndarray]:
    """
    One input, one output, two DMUs.

    DMU 0 uses 2 units of input for 2 units of output, DMU 1 uses 4 units
    of input for the same output: DMU 1 can save 2 units of input.
    """
    X = np.array([2.0, 4.0])
    Y = np.array([2.0, 2.0])
    return X, Y


@pytest.fixture
def solver_calls(monkeypatch) -> list:
    """Count linprog calls made by the additive model.

    Returns a list that receives one entry per solver call.
    """
    calls = []

    def counting_linprog(*args, **kwargs):
        calls.append(1)
        return linprog(*args, **kwargs)

    monkeypatch.setattr(additive_module, "linprog", counting_linprog)
    return calls
