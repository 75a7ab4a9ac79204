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
Phase Portrait - One-Dimensional Autonomous Systems

Plots dy/dt against y for an autonomous ODE dy/dt = f(y) and lays arrows
along the y axis pointing in the direction the state moves. Equilibria are
where the curve crosses the axis; arrows converging on a crossing mark a
stable equilibrium, arrows diverging from it an unstable one.

Key Features
------------
- Dense derivative curve on a fixed-step grid
- Direction arrows on a separate, fixed-count grid
- Arrow length controlled by an overlap fraction of the arrow spacing
- Pluggable renderer (Plotly by default) and named themes
- Frozen result record with every resolved option and the sampled curve

Usage
-----
>>> from phaser.visualization import phase_portrait
>>>
>>> def logistic(t, state, parameters):
...     y = state["y"]
...     return [y * (1 - y)]
>>>
>>> result = phase_portrait(logistic, (-0.5, 2.5), point_count=10, overlap_fraction=0.5)
>>> print(len(result.y))  # 301
>>> result.figure.show()
"""

import warnings
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Sequence, Union

import numpy as np

from phaser.exceptions import InvalidArgumentError
from phaser.sampling import (
    ArrowBatch,
    place_arrows,
    sample_arrows,
    sample_derivative,
    validate_arrow_options,
    validate_derivative,
    validate_range,
    validate_step,
)
from phaser.types import DerivativeFunction, SampleArray, YRange
from phaser.visualization.renderer import PlotlyRenderer, RendererProtocol


@dataclass(frozen=True)
class PhasePortraitResult:
    """
    Everything phase_portrait() was given and computed.

    Attributes
    ----------
    deriv : DerivativeFunction
        As per input
    y_range : YRange
        Scan bounds as a (low, high) float pair
    y_step : float
        As per input
    parameters : Any
        As per input
    point_count : int
        Number of arrow sample positions
    overlap_fraction : float
        As per input
    arrow_head_length : float
        As per input
    color : str
        As per input, reduced to its first element if a sequence was given
    state_name : str
        As per input
    xlabel : str
        Resolved x axis label
    ylabel : str
        Resolved y axis label
    add_grid : bool
        As per input
    y : np.ndarray
        State values at which the derivative was evaluated (read-only)
    dy : np.ndarray
        Derivative at each value of y (read-only)
    positive_arrows : ArrowBatch
        Arrows drawn where the derivative is positive
    negative_arrows : ArrowBatch
        Arrows drawn where the derivative is negative
    half_span : float
        Half the horizontal extent of each arrow
    figure : Any
        Whatever the renderer returned from render()
    """

    deriv: DerivativeFunction
    y_range: YRange
    y_step: float
    parameters: Any
    point_count: int
    overlap_fraction: float
    arrow_head_length: float
    color: str
    state_name: str
    xlabel: str
    ylabel: str
    add_grid: bool
    y: SampleArray
    dy: SampleArray
    positive_arrows: ArrowBatch
    negative_arrows: ArrowBatch
    half_span: float
    figure: Any = None


def _resolve_color(color: Union[str, Sequence[str]]) -> str:
    """Reduce color to a single value, keeping the first of a sequence."""
    if isinstance(color, str):
        return color
    if not isinstance(color, (Sequence, np.ndarray)):
        raise InvalidArgumentError(
            f"color must be a string or a sequence of strings, got {type(color).__name__}"
        )
    if len(color) == 0:
        raise InvalidArgumentError("color must not be an empty sequence")
    if not isinstance(color[0], str):
        raise InvalidArgumentError(f"color entries must be strings, got {color[0]!r}")

    if len(color) > 1:
        warnings.warn(
            f"color has {len(color)} elements; only the first ('{color[0]}') is used.",
            UserWarning,
        )
    return color[0]


def _check_options(name: str, options: Optional[dict]) -> dict:
    if options is None:
        return {}
    if not isinstance(options, dict):
        raise InvalidArgumentError(f"{name} must be a dict, got {type(options).__name__}")
    return dict(options)


def phase_portrait(
    deriv: DerivativeFunction,
    y_range: YRange,
    y_step: float = 0.01,
    parameters: Any = None,
    point_count: int = 10,
    overlap_fraction: float = 0.75,
    arrow_head_length: float = 0.075,
    color: Union[str, Sequence[str]] = "black",
    state_name: str = "y",
    add_grid: bool = True,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    title: Optional[str] = None,
    theme: Union[str, dict] = "default",
    renderer: Optional[RendererProtocol] = None,
    line_options: Optional[dict] = None,
    arrow_options: Optional[dict] = None,
) -> PhasePortraitResult:
    """
    Plot the phase portrait of a one-dimensional autonomous ODE.

    Parameters
    ----------
    deriv : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]; called with t = 0 and
        state = {state_name: y}. Only the first output component is used.
    y_range : YRange
        Limits (low, high) of the state variable, high > low
    y_step : float
        Spacing of the grid the curve is drawn on. Smaller values give a
        smoother curve at a small cost in evaluations. Default 0.01
    parameters : Any
        Passed to deriv unchanged
    point_count : int
        Number of arrow positions, evenly spaced over y_range with both
        endpoints included. At least 2. Default 10
    overlap_fraction : float
        Fraction of the arrow spacing each arrow covers; arrows do not
        overlap while <= 1. Default 0.75
    arrow_head_length : float
        Length of the arrow heads. Default 0.075
    color : str or Sequence[str]
        Color of the curve and arrows. A sequence is reduced to its first
        element with a UserWarning. Default 'black'
    state_name : str
        Name of the state variable. Default 'y'
    add_grid : bool
        If True, show grid lines. Default True
    xlabel : Optional[str]
        x axis label, defaults to state_name
    ylabel : Optional[str]
        y axis label, defaults to 'd' + state_name
    title : Optional[str]
        Figure title
    theme : str or dict
        Theme for the default PlotlyRenderer; ignored if renderer is given
    renderer : Optional[RendererProtocol]
        Drawing backend, defaults to PlotlyRenderer(theme=theme)
    line_options : Optional[dict]
        Extra keyword arguments for renderer.line()
    arrow_options : Optional[dict]
        Extra keyword arguments for every renderer.arrows() call

    Returns
    -------
    PhasePortraitResult

    Raises
    ------
    InvalidArgumentError
        Non-callable deriv, non-bool add_grid, bad arrow options or color
    InvalidRangeError
        y_range not an increasing pair
    InvalidStepError
        y_step <= 0

    All checks run before deriv is evaluated.

    Examples
    --------
    >>> result = phase_portrait(logistic, (-0.5, 2.5))
    >>> len(result.positive_arrows), len(result.negative_arrows)
    (3, 7)
    >>>
    >>> # Parameterised system with a custom state name
    >>> def harvest(t, state, parameters):
    ...     r, h = parameters
    ...     n = state["N"]
    ...     return [r * n * (1 - n) - h]
    >>>
    >>> result = phase_portrait(
    ...     harvest, (0, 1), parameters=(1.0, 0.1), state_name="N", color="navy"
    ... )
    >>> result.ylabel
    'dN'
    """
    validate_derivative(deriv)
    y_range = validate_range(y_range)
    y_step = validate_step(y_step)
    color = _resolve_color(color)
    if not isinstance(add_grid, bool):
        raise InvalidArgumentError(f"add_grid must be True or False, got {add_grid!r}")
    point_count, overlap_fraction = validate_arrow_options(point_count, overlap_fraction)
    if isinstance(arrow_head_length, bool) or not isinstance(arrow_head_length, Real):
        raise InvalidArgumentError(
            f"arrow_head_length must be a real number, got {type(arrow_head_length).__name__}"
        )
    if arrow_head_length < 0:
        raise InvalidArgumentError(
            f"arrow_head_length must be non-negative, got {arrow_head_length}"
        )
    if not isinstance(state_name, str) or not state_name:
        raise InvalidArgumentError(f"state_name must be a non-empty string, got {state_name!r}")
    line_options = _check_options("line_options", line_options)
    arrow_options = _check_options("arrow_options", arrow_options)

    xlabel = state_name if xlabel is None else xlabel
    ylabel = f"d{state_name}" if ylabel is None else ylabel

    if renderer is None:
        renderer = PlotlyRenderer(theme=theme)

    # Curve
    y, dy = sample_derivative(deriv, y_range, y_step, parameters, state_name)
    renderer.line(
        y,
        dy,
        color=color,
        xlabel=xlabel,
        ylabel=ylabel,
        add_grid=add_grid,
        title=title,
        **line_options,
    )

    # Arrows
    samples = sample_arrows(deriv, y_range, point_count, overlap_fraction, parameters, state_name)
    positive, negative = place_arrows(samples)
    for batch in (positive, negative):
        if len(batch) > 0:
            renderer.arrows(
                batch.starts,
                batch.heights,
                batch.ends,
                head_length=float(arrow_head_length),
                color=color,
                **arrow_options,
            )

    return PhasePortraitResult(
        deriv=deriv,
        y_range=y_range,
        y_step=y_step,
        parameters=parameters,
        point_count=point_count,
        overlap_fraction=overlap_fraction,
        arrow_head_length=float(arrow_head_length),
        color=color,
        state_name=state_name,
        xlabel=xlabel,
        ylabel=ylabel,
        add_grid=add_grid,
        y=y,
        dy=dy,
        positive_arrows=positive,
        negative_arrows=negative,
        half_span=samples.half_span,
        figure=renderer.render(),
    )


__all__ = [
    "PhasePortraitResult",
    "phase_portrait",
]
