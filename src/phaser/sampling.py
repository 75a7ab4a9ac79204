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
Derivative Sampling for One-Dimensional Phase Portraits

Evaluates an autonomous derivative function on two grids over the same scan
range:

- a dense, fixed-step grid used to draw the curve dy against y
- a sparse, fixed-count grid used to place direction arrows on the y axis

Main Functions
--------------
sample_derivative : Dense (y, dy) samples
sample_arrows : Sparse arrow positions, derivative values and half span
place_arrows : Split arrow samples into positive and negative batches

Usage
-----
>>> from phaser.sampling import sample_derivative, sample_arrows, place_arrows
>>>
>>> def logistic(t, state, parameters):
...     return [state["y"] * (1 - state["y"])]
>>>
>>> y, dy = sample_derivative(logistic, (-0.5, 2.5), y_step=0.01)
>>> print(y.shape)  # (301,)
>>>
>>> samples = sample_arrows(logistic, (-0.5, 2.5), point_count=10)
>>> positive, negative = place_arrows(samples)
>>> print(len(positive), len(negative))  # 3 7
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Sequence, Tuple

import numpy as np

from phaser.exceptions import InvalidArgumentError, InvalidRangeError, InvalidStepError
from phaser.types import ArrowDirection, DerivativeFunction, SampleArray, YRange

# Added before flooring the step count so that spans that are exact decimal
# multiples of the step (3.0 / 0.01) keep their last point.
STEP_COUNT_FUZZ = 1e-10


# ============================================================================
# Result Containers
# ============================================================================


@dataclass(frozen=True)
class ArrowSamples:
    """
    Sparse derivative samples used to place direction arrows.

    Attributes
    ----------
    positions : np.ndarray
        Evenly spaced state values, endpoints included, shape (point_count,)
    values : np.ndarray
        Derivative at each position, shape (point_count,)
    half_span : float
        Half of the horizontal extent of each arrow
    """

    positions: SampleArray
    values: SampleArray
    half_span: float


@dataclass(frozen=True)
class ArrowBatch:
    """
    Arrows sharing one direction along the state axis.

    Attributes
    ----------
    direction : ArrowDirection
        'positive' for rightward motion, 'negative' for leftward motion
    positions : np.ndarray
        Sample positions the arrows are centred on
    starts : np.ndarray
        Tail of each arrow
    ends : np.ndarray
        Head of each arrow
    """

    direction: ArrowDirection
    positions: SampleArray
    starts: SampleArray
    ends: SampleArray

    def __len__(self) -> int:
        return self.positions.shape[0]

    @property
    def heights(self) -> SampleArray:
        """Vertical position of every arrow (all on the y axis)."""
        return np.zeros_like(self.starts)


# ============================================================================
# Validation
# ============================================================================


def validate_derivative(deriv: Any) -> DerivativeFunction:
    """Raise InvalidArgumentError unless deriv is callable."""
    if not callable(deriv):
        raise InvalidArgumentError(
            f"deriv must be a callable f(t, state, parameters), got {type(deriv).__name__}"
        )
    return deriv


def validate_range(y_range: Any) -> YRange:
    """
    Check scan bounds and return them as a (low, high) float pair.

    Raises
    ------
    InvalidRangeError
        If y_range is not a length-2 sequence of finite reals with
        y_range[1] > y_range[0]
    """
    if isinstance(y_range, (str, bytes)) or not isinstance(y_range, (Sequence, np.ndarray)):
        raise InvalidRangeError(
            f"y_range must be a sequence of length 2, got {type(y_range).__name__}"
        )
    if len(y_range) != 2:
        raise InvalidRangeError(f"y_range must have length 2, got length {len(y_range)}")

    low, high = y_range
    if not all(isinstance(v, Real) for v in (low, high)):
        raise InvalidRangeError(f"y_range entries must be real numbers, got {y_range!r}")
    if not (np.isfinite(low) and np.isfinite(high)):
        raise InvalidRangeError(f"y_range entries must be finite, got {y_range!r}")
    if high <= low:
        raise InvalidRangeError(
            f"y_range[1] must be greater than y_range[0], got ({low}, {high})"
        )

    return float(low), float(high)


def validate_step(step: Any, name: str = "y_step") -> float:
    """Raise InvalidStepError unless step is a real number > 0."""
    if isinstance(step, bool) or not isinstance(step, Real):
        raise InvalidStepError(f"{name} must be a real number, got {type(step).__name__}")
    if not step > 0:
        raise InvalidStepError(f"{name} must be greater than zero, got {step}")
    return float(step)


def validate_arrow_options(point_count: Any, overlap_fraction: Any) -> Tuple[int, float]:
    """Check arrow density options and return them normalized."""
    if isinstance(point_count, bool) or not isinstance(point_count, (int, np.integer)):
        raise InvalidArgumentError(
            f"point_count must be an integer, got {type(point_count).__name__}"
        )
    if point_count < 2:
        raise InvalidArgumentError(f"point_count must be at least 2, got {point_count}")

    if isinstance(overlap_fraction, bool) or not isinstance(overlap_fraction, Real):
        raise InvalidArgumentError(
            f"overlap_fraction must be a real number, got {type(overlap_fraction).__name__}"
        )
    if not overlap_fraction > 0:
        raise InvalidArgumentError(
            f"overlap_fraction must be greater than zero, got {overlap_fraction}"
        )

    return int(point_count), float(overlap_fraction)


# ============================================================================
# Evaluation
# ============================================================================


def evaluate_derivative(
    deriv: DerivativeFunction,
    y: float,
    state_name: str = "y",
    parameters: Any = None,
) -> float:
    """
    Evaluate the first derivative component at a single state value.

    The independent variable is always 0; the system is autonomous.

    Parameters
    ----------
    deriv : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]
    y : float
        State value
    state_name : str
        Key under which y is passed in the state mapping
    parameters : Any
        Passed through to deriv unchanged

    Returns
    -------
    float
        First component of deriv's output
    """
    output = np.ravel(np.asarray(deriv(0, {state_name: float(y)}, parameters), dtype=float))
    if output.size == 0:
        raise InvalidArgumentError("deriv returned an empty result; expected at least one value")
    return float(output[0])


def dense_grid(y_range: YRange, y_step: float) -> SampleArray:
    """
    Fixed-step grid from y_range[0] towards y_range[1].

    Contains floor((high - low) / y_step) + 1 points. The last point falls
    short of the upper bound when the span is not a multiple of the step.
    """
    low, high = y_range
    n_steps = int(np.floor((high - low) / y_step + STEP_COUNT_FUZZ))
    y = low + np.arange(n_steps + 1, dtype=float) * y_step
    return np.minimum(y, high)


def sample_derivative(
    deriv: DerivativeFunction,
    y_range: YRange,
    y_step: float = 0.01,
    parameters: Any = None,
    state_name: str = "y",
) -> Tuple[SampleArray, SampleArray]:
    """
    Sample the derivative on the dense grid.

    Parameters
    ----------
    deriv : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]
    y_range : YRange
        Scan bounds (low, high), high > low
    y_step : float
        Grid spacing, > 0
    parameters : Any
        Passed through to deriv
    state_name : str
        Name of the state variable

    Returns
    -------
    y : np.ndarray
        Read-only ascending grid
    dy : np.ndarray
        Read-only derivative values at y

    Raises
    ------
    InvalidArgumentError, InvalidRangeError, InvalidStepError
        Before any evaluation of deriv

    Examples
    --------
    >>> y, dy = sample_derivative(logistic, (0.0, 1.0), y_step=0.3)
    >>> y  # last point stops short of 1.0
    array([0. , 0.3, 0.6, 0.9])
    """
    validate_derivative(deriv)
    y_range = validate_range(y_range)
    y_step = validate_step(y_step)

    y = dense_grid(y_range, y_step)
    dy = np.empty_like(y)
    for i, y_i in enumerate(y):
        dy[i] = evaluate_derivative(deriv, y_i, state_name, parameters)

    y.setflags(write=False)
    dy.setflags(write=False)
    return y, dy


def arrow_half_span(positions: SampleArray, overlap_fraction: float) -> float:
    """
    Half the horizontal extent of each arrow.

    The gap between neighbouring positions scaled by overlap_fraction, halved.
    Arrows do not overlap while overlap_fraction <= 1.
    """
    return 0.5 * overlap_fraction * float(positions[1] - positions[0])


def sample_arrows(
    deriv: DerivativeFunction,
    y_range: YRange,
    point_count: int = 10,
    overlap_fraction: float = 0.75,
    parameters: Any = None,
    state_name: str = "y",
) -> ArrowSamples:
    """
    Sample the derivative at point_count evenly spaced positions.

    Both endpoints of y_range are included.

    Returns
    -------
    ArrowSamples
        Positions, derivative values and the arrow half span
    """
    validate_derivative(deriv)
    y_range = validate_range(y_range)
    point_count, overlap_fraction = validate_arrow_options(point_count, overlap_fraction)

    positions = np.linspace(y_range[0], y_range[1], point_count)
    values = np.array(
        [evaluate_derivative(deriv, p, state_name, parameters) for p in positions]
    )

    positions.setflags(write=False)
    values.setflags(write=False)
    return ArrowSamples(
        positions=positions,
        values=values,
        half_span=arrow_half_span(positions, overlap_fraction),
    )


def place_arrows(samples: ArrowSamples) -> Tuple[ArrowBatch, ArrowBatch]:
    """
    Split arrow samples by derivative sign.

    Positive derivatives give arrows from p - half_span to p + half_span,
    negative ones the reverse. Samples where the derivative is exactly zero
    get no arrow.

    Returns
    -------
    positive : ArrowBatch
    negative : ArrowBatch
    """
    shift = samples.half_span

    pos = samples.positions[samples.values > 0]
    neg = samples.positions[samples.values < 0]

    positive = ArrowBatch(direction="positive", positions=pos, starts=pos - shift, ends=pos + shift)
    negative = ArrowBatch(direction="negative", positions=neg, starts=neg + shift, ends=neg - shift)
    return positive, negative


__all__ = [
    "ArrowSamples",
    "ArrowBatch",
    "validate_derivative",
    "validate_range",
    "validate_step",
    "validate_arrow_options",
    "evaluate_derivative",
    "dense_grid",
    "sample_derivative",
    "arrow_half_span",
    "sample_arrows",
    "place_arrows",
]
