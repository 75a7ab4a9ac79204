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
Equilibria of One-Dimensional Autonomous Systems

Locates points where dy/dt = f(y) = 0 inside a scan range and classifies
their stability from the sign of f on either side of y*:

    + then -       ->  stable       (nearby states move towards y*)
    - then +       ->  unstable     (nearby states move away from y*)
    same sign      ->  semi-stable  (f touches zero without crossing)

Usage
-----
>>> from phaser.equilibria import find_equilibria, stability
>>>
>>> def logistic(t, state, parameters):
...     return [state["y"] * (1 - state["y"])]
>>>
>>> for eq in find_equilibria(logistic, (-0.5, 2.5)):
...     print(f"{eq.value:.3f} {eq.classification}")
0.000 unstable
1.000 stable
>>>
>>> stability(logistic, 1.0).classification
'stable'
"""

from dataclasses import dataclass
from typing import Any, List

import numpy as np
from scipy.optimize import brentq

from phaser.sampling import (
    evaluate_derivative,
    sample_derivative,
    validate_derivative,
    validate_step,
)
from phaser.types import DerivativeFunction, Stability, YRange


@dataclass(frozen=True)
class Equilibrium:
    """
    Equilibrium of a one-dimensional autonomous system.

    Attributes
    ----------
    value : float
        State value y* with f(y*) = 0
    derivative : float
        Finite-difference estimate of f'(y*)
    classification : Stability
        'stable', 'unstable' or 'semi-stable'
    """

    value: float
    derivative: float
    classification: Stability


def stability(
    deriv: DerivativeFunction,
    y_star: float,
    parameters: Any = None,
    state_name: str = "y",
    h: float = 1e-7,
) -> Equilibrium:
    """
    Classify an equilibrium by the sign of the derivative on either side.

    Parameters
    ----------
    deriv : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]
    y_star : float
        Equilibrium to classify
    parameters : Any
        Passed through to deriv
    state_name : str
        Name of the state variable
    h : float
        Finite-difference step, > 0

    Returns
    -------
    Equilibrium

    Notes
    -----
    The sign of f at y* ± h decides the classification: equal signs give
    'semi-stable' (f touches zero without crossing, e.g. (y - c)² at c),
    a sign change from + to - gives 'stable' and from - to + 'unstable'.
    The central-difference slope is recorded on the result only.
    """
    validate_derivative(deriv)
    h = validate_step(h, name="h")

    f_minus = evaluate_derivative(deriv, y_star - h, state_name, parameters)
    f_plus = evaluate_derivative(deriv, y_star + h, state_name, parameters)
    slope = (f_plus - f_minus) / (2 * h)

    if np.sign(f_minus) == np.sign(f_plus):
        classification = "semi-stable"
    elif f_minus > f_plus:
        classification = "stable"
    else:
        classification = "unstable"

    return Equilibrium(value=float(y_star), derivative=float(slope), classification=classification)


def find_equilibria(
    deriv: DerivativeFunction,
    y_range: YRange,
    y_step: float = 0.01,
    parameters: Any = None,
    state_name: str = "y",
    tol: float = 1e-10,
    h: float = 1e-7,
) -> List[Equilibrium]:
    """
    Locate and classify equilibria inside a scan range.

    Samples f on the same dense grid the phase portrait draws, then takes
    every exact zero and every sign change between neighbouring samples.
    Sign changes are refined with Brent's method.

    Parameters
    ----------
    deriv : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]
    y_range : YRange
        Scan bounds (low, high)
    y_step : float
        Grid spacing used to bracket roots
    parameters : Any
        Passed through to deriv
    state_name : str
        Name of the state variable
    tol : float
        Absolute tolerance for root refinement and deduplication
    h : float
        Finite-difference step for stability classification

    Returns
    -------
    List[Equilibrium]
        Sorted by value

    Notes
    -----
    Tangential zeros that fall between grid points (f touches zero without
    changing sign) are not detected; shrink y_step or use stability()
    directly on a known point.
    """
    h = validate_step(h, name="h")
    y, dy = sample_derivative(deriv, y_range, y_step, parameters, state_name)

    def f(value: float) -> float:
        return evaluate_derivative(deriv, value, state_name, parameters)

    roots = [float(v) for v in y[dy == 0]]
    for i in np.nonzero(dy[:-1] * dy[1:] < 0)[0]:
        roots.append(float(brentq(f, y[i], y[i + 1], xtol=tol)))

    unique: List[float] = []
    for root in sorted(roots):
        if not unique or root - unique[-1] > tol:
            unique.append(root)

    return [stability(deriv, root, parameters, state_name, h) for root in unique]


__all__ = [
    "Equilibrium",
    "stability",
    "find_equilibria",
]
