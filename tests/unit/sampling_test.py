# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Unit Tests for Derivative Sampling

Tests the dense curve grid, the arrow grid, arrow placement by derivative
sign, and the validation that guards every sampler.
"""

import math

import numpy as np
import pytest

from phaser.exceptions import InvalidArgumentError, InvalidRangeError, InvalidStepError
from phaser.sampling import (
    arrow_half_span,
    dense_grid,
    evaluate_derivative,
    place_arrows,
    sample_arrows,
    sample_derivative,
    validate_range,
    validate_step,
)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def logistic():
    """Logistic growth dy/dt = y(1 - y)."""
    def f(t, state, parameters):
        y = state["y"]
        return [y * (1 - y)]
    return f


@pytest.fixture
def counting():
    """Wrap a derivative function and count its calls."""
    class Counter:
        def __init__(self, value=1.0):
            self.calls = 0
            self.value = value

        def __call__(self, t, state, parameters):
            self.calls += 1
            return [self.value]

    return Counter


def constant(value):
    def f(t, state, parameters):
        return [value]
    return f


# ============================================================================
# Dense Grid Tests
# ============================================================================


class TestDenseGrid:
    """Test the fixed-step curve grid."""

    @pytest.mark.parametrize(
        "low, high, step",
        [(0.0, 1.0, 0.3), (-2.0, 3.0, 0.7), (1.0, 2.0, 0.4), (0.0, 1.0, 0.25)],
    )
    def test_length_and_bounds(self, low, high, step):
        """Grid has floor((b - a) / step) + 1 ascending points inside [a, b]."""
        y = dense_grid((low, high), step)

        assert len(y) == math.floor((high - low) / step) + 1
        assert y[0] == low
        assert y[-1] <= high
        assert np.all(np.diff(y) > 0)

    def test_last_point_falls_short_of_upper_bound(self):
        """Span not a multiple of the step is not rounded up to the bound."""
        y = dense_grid((0.0, 1.0), 0.3)

        np.testing.assert_allclose(y, [0.0, 0.3, 0.6, 0.9])
        assert y[-1] < 1.0

    def test_exact_multiple_includes_upper_bound(self):
        """3.0 / 0.01 is 300 steps despite binary rounding."""
        y = dense_grid((-0.5, 2.5), 0.01)

        assert len(y) == 301
        assert y[0] == -0.5
        assert y[-1] == pytest.approx(2.5)
        assert y[-1] <= 2.5

    def test_step_larger_than_span(self):
        """A step larger than the span gives the lower bound only."""
        y = dense_grid((0.0, 1.0), 5.0)
        np.testing.assert_array_equal(y, [0.0])


# ============================================================================
# Evaluation Tests
# ============================================================================


class TestEvaluateDerivative:
    """Test single-point evaluation."""

    def test_passes_zero_time_named_state_and_parameters(self):
        """Derivative receives t = 0, {name: y} and parameters unchanged."""
        seen = {}

        def f(t, state, parameters):
            seen["t"] = t
            seen["state"] = dict(state)
            seen["parameters"] = parameters
            return [1.0]

        params = {"r": 2.0}
        evaluate_derivative(f, 0.5, state_name="N", parameters=params)

        assert seen["t"] == 0
        assert seen["state"] == {"N": 0.5}
        assert seen["parameters"] is params

    def test_first_component_used(self):
        """Only the first output component is kept."""
        def f(t, state, parameters):
            return [3.0, -7.0]

        assert evaluate_derivative(f, 0.0) == 3.0

    def test_scalar_and_array_outputs(self):
        """Scalars and arrays are accepted."""
        assert evaluate_derivative(lambda t, s, p: 2.5, 0.0) == 2.5
        assert evaluate_derivative(lambda t, s, p: np.array([[4.0, 1.0]]), 0.0) == 4.0

    def test_empty_output_rejected(self):
        """An empty result is a contract violation."""
        with pytest.raises(InvalidArgumentError, match="empty"):
            evaluate_derivative(lambda t, s, p: [], 0.0)


class TestSampleDerivative:
    """Test dense (y, dy) sampling."""

    def test_logistic_values(self, logistic):
        """dy matches y(1 - y) at every grid point."""
        y, dy = sample_derivative(logistic, (-0.5, 2.5), y_step=0.01)

        assert len(y) == 301
        np.testing.assert_allclose(dy, y * (1 - y))

    def test_sign_structure(self, logistic):
        """Negative below 0, positive on (0, 1), negative above 1."""
        y, dy = sample_derivative(logistic, (-0.5, 2.5))

        assert np.all(dy[y < -1e-9] < 0)
        assert np.all(dy[(y > 1e-9) & (y < 1 - 1e-9)] > 0)
        assert np.all(dy[y > 1 + 1e-9] < 0)

    def test_outputs_read_only(self, logistic):
        """Returned arrays cannot be modified."""
        y, dy = sample_derivative(logistic, (0, 1), y_step=0.1)

        with pytest.raises(ValueError):
            y[0] = 10.0
        with pytest.raises(ValueError):
            dy[0] = 10.0

    def test_one_call_per_point(self, counting):
        """Derivative evaluated exactly once per grid point."""
        deriv = counting()
        y, _ = sample_derivative(deriv, (0, 1), y_step=0.25)
        assert deriv.calls == len(y) == 5


# ============================================================================
# Arrow Tests
# ============================================================================


class TestSampleArrows:
    """Test the sparse arrow grid."""

    @pytest.mark.parametrize("point_count", [2, 3, 10, 25])
    def test_count_and_endpoints(self, logistic, point_count):
        """point_count evenly spaced positions, both endpoints included."""
        samples = sample_arrows(logistic, (-0.5, 2.5), point_count=point_count)

        assert len(samples.positions) == point_count
        assert len(samples.values) == point_count
        assert samples.positions[0] == -0.5
        assert samples.positions[-1] == 2.5
        np.testing.assert_allclose(np.diff(samples.positions), 3.0 / (point_count - 1))

    def test_half_span(self, logistic):
        """Half span is half the spacing scaled by overlap_fraction."""
        samples = sample_arrows(logistic, (0, 9), point_count=10, overlap_fraction=0.5)
        assert samples.half_span == pytest.approx(0.25)

    def test_half_span_linear_in_overlap(self, logistic):
        """Doubling overlap_fraction doubles the half span."""
        small = sample_arrows(logistic, (-0.5, 2.5), overlap_fraction=0.3)
        large = sample_arrows(logistic, (-0.5, 2.5), overlap_fraction=0.6)

        assert large.half_span == pytest.approx(2 * small.half_span)

    def test_arrow_half_span_helper(self):
        """Helper uses the first gap."""
        assert arrow_half_span(np.array([0.0, 2.0, 4.0]), 0.75) == pytest.approx(0.75)

    @pytest.mark.parametrize("point_count", [1, 0, -3, 2.5, True])
    def test_invalid_point_count(self, counting, point_count):
        """Fewer than 2 points or non-integers are rejected."""
        deriv = counting()
        with pytest.raises(InvalidArgumentError, match="point_count"):
            sample_arrows(deriv, (0, 1), point_count=point_count)
        assert deriv.calls == 0

    @pytest.mark.parametrize("overlap_fraction", [0, -0.5, "big"])
    def test_invalid_overlap(self, counting, overlap_fraction):
        """Non-positive or non-numeric overlap is rejected."""
        deriv = counting()
        with pytest.raises(InvalidArgumentError, match="overlap_fraction"):
            sample_arrows(deriv, (0, 1), overlap_fraction=overlap_fraction)
        assert deriv.calls == 0


class TestPlaceArrows:
    """Test arrow orientation by derivative sign."""

    def test_constant_positive(self):
        """Every arrow points right: start < end."""
        samples = sample_arrows(constant(2.0), (0, 1), point_count=5)
        positive, negative = place_arrows(samples)

        assert len(positive) == 5
        assert len(negative) == 0
        np.testing.assert_allclose(positive.starts, samples.positions - samples.half_span)
        np.testing.assert_allclose(positive.ends, samples.positions + samples.half_span)
        assert np.all(positive.starts < positive.ends)

    def test_constant_negative(self):
        """Every arrow points left: start > end."""
        samples = sample_arrows(constant(-1.0), (0, 1), point_count=5)
        positive, negative = place_arrows(samples)

        assert len(positive) == 0
        assert len(negative) == 5
        np.testing.assert_allclose(negative.starts, samples.positions + samples.half_span)
        np.testing.assert_allclose(negative.ends, samples.positions - samples.half_span)
        assert np.all(negative.starts > negative.ends)

    def test_constant_zero(self):
        """No arrows at equilibria."""
        samples = sample_arrows(constant(0.0), (0, 1), point_count=5)
        positive, negative = place_arrows(samples)

        assert len(positive) == 0
        assert len(negative) == 0

    def test_logistic_partition(self, logistic):
        """Arrows point right on (0, 1) and left outside it."""
        samples = sample_arrows(logistic, (-0.5, 2.5), point_count=10)
        positive, negative = place_arrows(samples)

        assert positive.direction == "positive"
        assert negative.direction == "negative"
        assert len(positive) == 3
        assert len(negative) == 7
        assert np.all((positive.positions > 0) & (positive.positions < 1))
        assert np.all((negative.positions < 0) | (negative.positions > 1))

    def test_heights_on_axis(self, logistic):
        """Arrows lie on y = 0."""
        positive, _ = place_arrows(sample_arrows(logistic, (-0.5, 2.5)))
        np.testing.assert_array_equal(positive.heights, np.zeros(len(positive)))


# ============================================================================
# Validation Tests
# ============================================================================


class TestValidation:
    """Test range and step validation."""

    def test_valid_range_normalized(self):
        """Lists, tuples and arrays become float pairs."""
        assert validate_range([0, 1]) == (0.0, 1.0)
        assert validate_range(np.array([-1.5, 2.0])) == (-1.5, 2.0)

    @pytest.mark.parametrize("y_range", [[2, 1], [1, 1], (0.5, -0.5)])
    def test_decreasing_range(self, y_range):
        with pytest.raises(InvalidRangeError, match="greater than"):
            validate_range(y_range)

    @pytest.mark.parametrize("y_range", [[0], [0, 1, 2], []])
    def test_wrong_length(self, y_range):
        with pytest.raises(InvalidRangeError, match="length 2"):
            validate_range(y_range)

    @pytest.mark.parametrize("y_range", ["ab", 3.0, None])
    def test_not_a_sequence(self, y_range):
        with pytest.raises(InvalidRangeError):
            validate_range(y_range)

    def test_non_finite(self):
        with pytest.raises(InvalidRangeError, match="finite"):
            validate_range([0, np.inf])

    @pytest.mark.parametrize("step", [0, -0.01, "0.1", None])
    def test_invalid_step(self, step):
        with pytest.raises(InvalidStepError):
            validate_step(step)

    def test_step_name_in_message(self):
        with pytest.raises(InvalidStepError, match="^h must"):
            validate_step(-1, name="h")

    def test_invalid_inputs_never_evaluate(self, counting):
        """No evaluation happens after a failed precondition."""
        deriv = counting()

        with pytest.raises(InvalidRangeError):
            sample_derivative(deriv, [2, 1])
        with pytest.raises(InvalidStepError):
            sample_derivative(deriv, [0, 1], y_step=0)
        with pytest.raises(InvalidArgumentError):
            sample_derivative("not callable", [0, 1])

        assert deriv.calls == 0
