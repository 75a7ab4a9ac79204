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
Launcher - Bundled System Definition

Groups the arguments every analysis call repeats (derivative function,
parameters, dimensionality and state names) into one frozen record.

Usage
-----
>>> from phaser.launcher import build_launcher
>>>
>>> def logistic(t, state, parameters):
...     r = parameters
...     return [r * state["N"] * (1 - state["N"])]
>>>
>>> launcher = build_launcher(logistic, parameters=2.0, system="one_dim", state_names=["N"])
>>> result = launcher.phase_portrait((-0.5, 1.5))
>>> equilibria = launcher.find_equilibria((-0.5, 1.5))
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Sequence, Union

from phaser.exceptions import InvalidArgumentError
from phaser.types import SYSTEM_DIMENSIONS, DerivativeFunction, StateNames, SystemType, YRange

if TYPE_CHECKING:
    from phaser.equilibria import Equilibrium
    from phaser.visualization.phase_portrait import PhasePortraitResult

DEFAULT_STATE_NAMES = {"one_dim": ("y",), "two_dim": ("x", "y")}

# Keyword arguments the analysis helpers fill in from the launcher itself.
LAUNCHER_FIELDS = ("deriv", "parameters", "state_name")


@dataclass(frozen=True)
class Launcher:
    """
    Frozen description of an autonomous system under analysis.

    Attributes
    ----------
    derivative : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]
    parameters : Any
        Passed to derivative unchanged
    system : SystemType
        'one_dim' or 'two_dim'
    state_names : Tuple[str, ...]
        One name per state variable
    """

    derivative: DerivativeFunction
    parameters: Any
    system: SystemType
    state_names: StateNames

    @property
    def dimension(self) -> int:
        """Number of state variables."""
        return SYSTEM_DIMENSIONS[self.system]

    def _require_one_dim(self, operation: str) -> None:
        if self.system != "one_dim":
            raise InvalidArgumentError(
                f"{operation} requires a 'one_dim' system, launcher is '{self.system}'"
            )

    def _check_options(self, operation: str, options: dict) -> None:
        fixed = sorted(set(options) & set(LAUNCHER_FIELDS))
        if fixed:
            raise InvalidArgumentError(
                f"{operation} takes {', '.join(fixed)} from the launcher; "
                "build a new launcher to change them"
            )

    def phase_portrait(self, y_range: YRange, **options) -> "PhasePortraitResult":
        """
        Plot the phase portrait of this system.

        Keyword options are those of phaser.visualization.phase_portrait,
        except deriv, parameters and state_name which come from the launcher.
        """
        from phaser.visualization.phase_portrait import phase_portrait

        self._require_one_dim("phase_portrait")
        self._check_options("phase_portrait", options)
        return phase_portrait(
            self.derivative,
            y_range,
            parameters=self.parameters,
            state_name=self.state_names[0],
            **options,
        )

    def find_equilibria(self, y_range: YRange, **options) -> List["Equilibrium"]:
        """Locate and classify the equilibria of this system inside y_range."""
        from phaser.equilibria import find_equilibria

        self._require_one_dim("find_equilibria")
        self._check_options("find_equilibria", options)
        return find_equilibria(
            self.derivative,
            y_range,
            parameters=self.parameters,
            state_name=self.state_names[0],
            **options,
        )


def build_launcher(
    derivative: DerivativeFunction,
    parameters: Any = None,
    system: SystemType = None,
    state_names: Union[str, Sequence[str]] = "default",
) -> Launcher:
    """
    Validate and bundle a system definition.

    Parameters
    ----------
    derivative : DerivativeFunction
        f(t, state, parameters) -> [dy, ...]
    parameters : Any
        Passed to derivative unchanged
    system : SystemType
        'one_dim' or 'two_dim'; required
    state_names : str or Sequence[str]
        State variable names. 'default' gives ('y',) for one_dim and
        ('x', 'y') for two_dim. Any other single string is one name.

    Returns
    -------
    Launcher

    Raises
    ------
    InvalidArgumentError
        If derivative is not callable, system is unknown, or the number of
        state names does not match system

    Examples
    --------
    >>> launcher = build_launcher(f, system="two_dim")
    >>> launcher.state_names
    ('x', 'y')
    >>>
    >>> build_launcher(f, system="two_dim", state_names=["x"])
    Traceback (most recent call last):
    ...
    InvalidArgumentError: two_dim system requires 2 state names, got 1
    """
    if not callable(derivative):
        raise InvalidArgumentError(
            f"derivative must be callable, got {type(derivative).__name__}"
        )

    if system not in tuple(SYSTEM_DIMENSIONS):
        raise InvalidArgumentError(
            f"system must be either 'one_dim' or 'two_dim', got {system!r}"
        )

    if isinstance(state_names, str):
        names = DEFAULT_STATE_NAMES[system] if state_names == "default" else (state_names,)
    else:
        if not isinstance(state_names, Sequence):
            raise InvalidArgumentError(
                f"state_names must be a string or a sequence of strings, got {state_names!r}"
            )
        names = tuple(state_names)
        if not all(isinstance(name, str) for name in names):
            raise InvalidArgumentError(f"state_names must be strings, got {state_names!r}")

    expected = SYSTEM_DIMENSIONS[system]
    if len(names) != expected:
        raise InvalidArgumentError(
            f"{system} system requires {expected} state name{'s' if expected > 1 else ''}, "
            f"got {len(names)}"
        )

    return Launcher(
        derivative=derivative,
        parameters=parameters,
        system=system,
        state_names=names,
    )


__all__ = [
    "Launcher",
    "build_launcher",
]
