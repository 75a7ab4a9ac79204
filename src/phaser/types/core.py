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
Core Types for Phase Analysis

Type aliases shared across the launcher, the samplers and the plotting layer.

Mathematical Context
--------------------
An autonomous ODE system has the form

    dy/dt = f(y; p)

where the right-hand side does not depend on t. Derivative functions still
receive t as their first argument so that any function written for a general
(t, y, p) solver interface can be analysed unchanged; phaser always passes
t = 0.

Usage
-----
>>> from phaser.types import DerivativeFunction, SystemType
>>>
>>> def logistic(t, state, parameters):
...     y = state["y"]
...     return [y * (1 - y)]
>>>
>>> system: SystemType = "one_dim"
"""

from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from typing_extensions import Literal, TypedDict

# ============================================================================
# Scalars and Arrays
# ============================================================================

ScalarLike = Union[float, int, np.number]
"""Real scalar accepted wherever a single state value is expected."""

SampleArray = np.ndarray
"""
One-dimensional float64 array of sample values.

Arrays returned inside result records are marked read-only.
"""

# ============================================================================
# Derivative Functions
# ============================================================================

StateMapping = Mapping[str, float]
"""Named state passed to a derivative function, e.g. {"y": 0.5}."""

DerivativeOutput = Union[Sequence[float], np.ndarray, float]
"""
Return value of a derivative function.

Only the first component is used by the one-dimensional routines; scalars
and arrays of any shape are flattened before it is taken.
"""

DerivativeFunction = Callable[[float, StateMapping, Any], DerivativeOutput]
"""
Derivative function f(t, state, parameters) -> [dy, ...].

Examples
--------
>>> def harvest(t, state, parameters):
...     r, h = parameters
...     y = state["y"]
...     return [r * y * (1 - y) - h]
"""

# ============================================================================
# Tags
# ============================================================================

SystemType = Literal["one_dim", "two_dim"]
"""
Dimensionality tag of an autonomous system.

- 'one_dim': a single state variable
- 'two_dim': a planar system with two state variables
"""

SYSTEM_DIMENSIONS = {"one_dim": 1, "two_dim": 2}
"""Number of state variables implied by each system tag."""

ArrowDirection = Literal["positive", "negative"]
"""Direction of an arrow batch along the state axis."""

Stability = Literal["stable", "unstable", "semi-stable"]
"""Classification of a one-dimensional equilibrium."""

StateNames = Tuple[str, ...]
"""Ordered state-variable names."""

YRange = Tuple[float, float]
"""Scan bounds (low, high) of the state variable."""

# ============================================================================
# Configuration
# ============================================================================


class PhasePortraitConfig(TypedDict, total=False):
    """
    Keyword options accepted by phase_portrait.

    Every key is optional; omitted keys take the routine's defaults. A config
    can be stored once and splatted into repeated calls.

    Examples
    --------
    >>> config: PhasePortraitConfig = {
    ...     "y_step": 0.005,
    ...     "point_count": 15,
    ...     "overlap_fraction": 0.5,
    ...     "theme": "publication",
    ... }
    >>> result = phase_portrait(logistic, (-0.5, 2.5), **config)
    """

    y_step: float
    parameters: Any
    point_count: int
    overlap_fraction: float
    arrow_head_length: float
    color: Union[str, Sequence[str]]
    state_name: str
    add_grid: bool
    xlabel: Optional[str]
    ylabel: Optional[str]
    title: Optional[str]
    theme: Union[str, dict]
    line_options: Optional[dict]
    arrow_options: Optional[dict]


__all__ = [
    "ScalarLike",
    "SampleArray",
    "StateMapping",
    "DerivativeOutput",
    "DerivativeFunction",
    "SystemType",
    "SYSTEM_DIMENSIONS",
    "ArrowDirection",
    "Stability",
    "StateNames",
    "YRange",
    "PhasePortraitConfig",
]
