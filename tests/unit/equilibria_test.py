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
Unit Tests for Equilibrium Location and Stability
"""

import dataclasses

import pytest

from phaser.equilibria import Equilibrium, find_equilibria, stability
from phaser.exceptions import InvalidArgumentError, InvalidRangeError, InvalidStepError


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def logistic():
    def f(t, state, parameters):
        y = state["y"]
        return [y * (1 - y)]
    return f


@pytest.fixture
def bistable():
    """dy/dt = y - y³: stable at ±1, unstable at 0."""
    def f(t, state, parameters):
        y = state["y"]
        return [y - y**3]
    return f


@pytest.fixture
def harvested():
    """Logistic growth with constant harvesting, parameters (r, h)."""
    def f(t, state, parameters):
        r, h = parameters
        n = state["N"]
        return [r * n * (1 - n) - h]
    return f


# ============================================================================
# stability() Tests
# ============================================================================


class TestStability:
    """Test classification of single equilibria."""

    def test_logistic_origin_unstable(self, logistic):
        eq = stability(logistic, 0.0)

        assert isinstance(eq, Equilibrium)
        assert eq.classification == "unstable"
        assert eq.derivative == pytest.approx(1.0, abs=1e-6)

    def test_logistic_capacity_stable(self, logistic):
        eq = stability(logistic, 1.0)

        assert eq.classification == "stable"
        assert eq.derivative == pytest.approx(-1.0, abs=1e-6)

    def test_tangent_zero_semi_stable(self):
        """y² touches zero without crossing."""
        eq = stability(lambda t, s, p: [s["y"] ** 2], 0.0)
        assert eq.classification == "semi-stable"

    @pytest.mark.parametrize("c", [0.5, 1.0, 2.0, -3.7])
    def test_tangent_zero_away_from_origin(self, c):
        """(y - c)² touches zero at c without crossing."""
        eq = stability(lambda t, s, p: [(s["y"] - c) ** 2], c)
        assert eq.classification == "semi-stable"

    def test_tangent_zero_from_below(self):
        assert stability(lambda t, s, p: [-((s["y"] - 0.5) ** 2)], 0.5).classification == (
            "semi-stable"
        )

    def test_flat_crossings(self):
        """Cubic crossings have tiny slopes but still classify by sign."""
        assert stability(lambda t, s, p: [-s["y"] ** 3], 0.0).classification == "stable"
        assert stability(lambda t, s, p: [s["y"] ** 3], 0.0).classification == "unstable"

    def test_custom_state_name_and_parameters(self, harvested):
        eq = stability(harvested, 1.0, parameters=(1.0, 0.0), state_name="N")
        assert eq.classification == "stable"

    @pytest.mark.parametrize("h", [0, -1e-7])
    def test_invalid_step(self, logistic, h):
        with pytest.raises(InvalidStepError, match="h must"):
            stability(logistic, 0.0, h=h)

    def test_not_callable(self):
        with pytest.raises(InvalidArgumentError):
            stability(42, 0.0)

    def test_frozen(self, logistic):
        eq = stability(logistic, 0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            eq.value = 3.0


# ============================================================================
# find_equilibria() Tests
# ============================================================================


class TestFindEquilibria:
    """Test equilibrium location over a scan range."""

    def test_logistic(self, logistic):
        """Roots at 0 (unstable) and 1 (stable)."""
        equilibria = find_equilibria(logistic, (-0.5, 2.5))

        assert len(equilibria) == 2
        assert equilibria[0].value == pytest.approx(0.0, abs=1e-8)
        assert equilibria[0].classification == "unstable"
        assert equilibria[1].value == pytest.approx(1.0, abs=1e-8)
        assert equilibria[1].classification == "stable"

    def test_bistable(self, bistable):
        equilibria = find_equilibria(bistable, (-2, 2))

        assert [eq.value for eq in equilibria] == pytest.approx([-1.0, 0.0, 1.0], abs=1e-8)
        assert [eq.classification for eq in equilibria] == ["stable", "unstable", "stable"]

    def test_root_between_grid_points(self):
        """Sign changes between samples are refined with Brent's method."""
        equilibria = find_equilibria(lambda t, s, p: [s["y"] - 0.123456], (0, 1), y_step=0.1)

        assert len(equilibria) == 1
        assert equilibria[0].value == pytest.approx(0.123456, abs=1e-8)
        assert equilibria[0].classification == "unstable"

    def test_tangent_zero_on_grid(self):
        """A grid point landing on a tangential zero is reported."""
        equilibria = find_equilibria(lambda t, s, p: [s["y"] ** 2], (-1, 1))

        assert len(equilibria) == 1
        assert equilibria[0].value == pytest.approx(0.0, abs=1e-12)
        assert equilibria[0].classification == "semi-stable"

    def test_tangent_zero_on_grid_away_from_origin(self):
        equilibria = find_equilibria(lambda t, s, p: [(s["y"] - 0.5) ** 2], (0, 1))

        assert len(equilibria) == 1
        assert equilibria[0].value == pytest.approx(0.5, abs=1e-12)
        assert equilibria[0].classification == "semi-stable"

    def test_no_equilibria(self):
        assert find_equilibria(lambda t, s, p: [1.0], (0, 1)) == []

    def test_parameters_and_state_name(self, harvested):
        """rN(1 - N) - h = 0 with r = 1, h = 0.21 has roots 0.3 and 0.7."""
        equilibria = find_equilibria(harvested, (0, 1), parameters=(1.0, 0.21), state_name="N")

        assert [eq.value for eq in equilibria] == pytest.approx([0.3, 0.7], abs=1e-8)
        assert [eq.classification for eq in equilibria] == ["unstable", "stable"]

    def test_invalid_range(self, logistic):
        with pytest.raises(InvalidRangeError):
            find_equilibria(logistic, (2, 1))

    def test_invalid_h_checked_before_sampling(self):
        calls = []

        def f(t, state, parameters):
            calls.append(state)
            return [1.0]

        with pytest.raises(InvalidStepError):
            find_equilibria(f, (0, 1), h=0)
        assert calls == []
