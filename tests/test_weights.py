"""Tests for weighted additive model weights."""

import numpy as np
import pytest

from pydea import (
    DataQualityWarning,
    InvalidModelError,
    WeightModel,
    compute_weights,
)
from pydea.algorithms.weights import (
    bam_weights,
    mip_weights,
    normalized_weights,
    ones_weights,
    ram_weights,
)


class TestOnesWeights:
    """Tests for the standard additive model."""

    def test_all_ones(self, mip_example):
        """Test that every weight is 1 and shapes match the data."""
        X, Y = mip_example
        wX, wY = compute_weights(X, Y, "Ones")

        assert wX.shape == (11, 2)
        assert wY.shape == (11, 1)
        assert np.all(wX == 1.0)
        assert np.all(wY == 1.0)

    def test_strategy_function(self):
        """Test the strategy on its own."""
        wX, wY = ones_weights(np.zeros((3, 2)), np.zeros((3, 4)))

        assert wX.shape == (3, 2)
        assert wY.shape == (3, 4)
        assert np.all(wX == 1.0) and np.all(wY == 1.0)


class TestMIPWeights:
    """Tests for Measure of Inefficiency Proportions weights."""

    def test_reciprocal_of_data(self, mip_example):
        """Test that weights are the exact element-wise reciprocal."""
        X, Y = mip_example
        wX, wY = compute_weights(X, Y, WeightModel.MIP)

        assert np.array_equal(wX, 1.0 / X)
        assert np.array_equal(wY, 1.0 / Y.reshape(-1, 1))

    def test_zero_data_gives_infinite_weight(self):
        """Zero data keeps an infinite MIP weight (MIP is undefined there)."""
        X = np.array([[0.0, 2.0], [4.0, 5.0]])
        Y = np.array([[1.0], [0.0]])

        wX, wY = mip_weights(X, Y)

        assert np.isinf(wX[0, 0])
        assert np.isinf(wY[1, 0])
        assert wX[0, 1] == pytest.approx(0.5)
        assert wX[1, 0] == pytest.approx(0.25)

    def test_zero_data_warning_points_at_caller(self):
        """Test that the infinite-weight warning is attributed to the calling code."""
        X = np.array([[0.0, 2.0], [4.0, 5.0]])
        Y = np.array([[1.0], [0.0]])

        with pytest.warns(DataQualityWarning, match="infinite for 2") as record:
            compute_weights(X, Y, "MIP")

        assert len(record) == 1
        assert record[0].filename == __file__


class TestNormalizedWeights:
    """Tests for normalized weights."""

    def test_inverse_sample_std(self):
        """Test weight = 1 / sample standard deviation of the column."""
        X = np.array([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0]])
        Y = np.array([[1.0], [3.0], [5.0]])
        wX, wY = normalized_weights(X, Y)

        assert np.allclose(wX[:, 0], 1.0)
        assert np.allclose(wX[:, 1], 0.5)
        assert np.allclose(wY[:, 0], 0.5)

    def test_constant_column_gives_zero(self):
        """Test that a zero-deviation column gets weight 0, not inf."""
        X = np.array([[1.0, 7.0], [2.0, 7.0], [3.0, 7.0]])
        Y = np.array([5.0, 5.0, 5.0])
        wX, wY = compute_weights(X, Y, "Normalized")

        assert np.all(wX[:, 1] == 0.0)
        assert np.all(wY == 0.0)
        assert np.all(np.isfinite(wX))

    def test_single_observation(self):
        """Test that a single DMU gives zero weights instead of NaN."""
        wX, wY = compute_weights([[3.0, 4.0]], [[2.0]], "Normalized")

        assert np.all(wX == 0.0)
        assert np.all(wY == 0.0)


class TestRAMWeights:
    """Tests for Range Adjusted Measure weights."""

    def test_range_formula(self, mip_example):
        """Test weight = 1 / ((m + s) * range)."""
        X, Y = mip_example
        wX, wY = ram_weights(X, Y.reshape(-1, 1))

        assert np.allclose(wX[:, 0], 1.0 / (3 * (42 - 5)))
        assert np.allclose(wX[:, 1], 1.0 / (3 * (26 - 6)))
        assert np.allclose(wY[:, 0], 1.0 / (3 * (31 - 8)))

    def test_zero_range_gives_zero(self):
        """Test that a constant column gets weight 0."""
        X = np.array([[1.0, 4.0], [3.0, 4.0]])
        Y = np.array([[2.0], [2.0]])
        wX, wY = compute_weights(X, Y, "ram")

        assert np.allclose(wX[:, 0], 1.0 / (3 * 2))
        assert np.all(wX[:, 1] == 0.0)
        assert np.all(wY == 0.0)


class TestBAMWeights:
    """Tests for Bounded Adjusted Measure weights."""

    def test_bound_distance_formula(self):
        """Test input weights use distance to the minimum, outputs to the maximum."""
        X = np.array([[1.0], [3.0], [5.0]])
        Y = np.array([[2.0], [4.0], [8.0]])
        wX, wY = bam_weights(X, Y)

        assert np.allclose(wX[:, 0], [0.0, 0.25, 0.125])
        assert np.allclose(wY[:, 0], [1.0 / 12.0, 0.125, 0.0])

    def test_bound_observations_are_finite(self, mip_example):
        """Test that observations on the bound get weight 0, never inf or NaN."""
        X, Y = mip_example
        wX, wY = compute_weights(X, Y, "BAM")

        assert np.all(np.isfinite(wX))
        assert np.all(np.isfinite(wY))
        # X[:, 0] minimum is 5 at DMUs 0 and 10, Y maximum is 31 at DMU 8
        assert wX[0, 0] == 0.0 and wX[10, 0] == 0.0
        assert wY[8, 0] == 0.0


class TestModelTags:
    """Tests for weighting model tag handling."""

    def test_unknown_tag_raises(self, mip_example):
        """Test that an unknown tag raises InvalidModelError."""
        X, Y = mip_example
        with pytest.raises(InvalidModelError, match="Invalid model"):
            compute_weights(X, Y, "SBM")

    def test_custom_cannot_be_computed(self, mip_example):
        """Test that custom weights cannot be computed."""
        X, Y = mip_example
        with pytest.raises(InvalidModelError):
            compute_weights(X, Y, WeightModel.CUSTOM)

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("ones", WeightModel.ONES),
            ("MIP", WeightModel.MIP),
            ("normalized", WeightModel.NORMALIZED),
            ("Ram", WeightModel.RAM),
            (WeightModel.BAM, WeightModel.BAM),
            ("custom", WeightModel.CUSTOM),
        ],
    )
    def test_parse_is_case_insensitive(self, tag, expected):
        """Test that tags are parsed case-insensitively."""
        assert WeightModel.parse(tag) is expected

    def test_invalid_model_is_value_error(self):
        """InvalidModelError can be caught as ValueError."""
        with pytest.raises(ValueError):
            WeightModel.parse(42)
