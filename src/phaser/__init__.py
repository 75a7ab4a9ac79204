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
phaser
======

Qualitative analysis of low-dimensional autonomous ODE systems.

>>> from phaser import build_launcher, phase_portrait, find_equilibria
>>>
>>> def logistic(t, state, parameters):
...     y = state["y"]
...     return [y * (1 - y)]
>>>
>>> result = phase_portrait(logistic, (-0.5, 2.5))
>>> [eq.classification for eq in find_equilibria(logistic, (-0.5, 2.5))]
['unstable', 'stable']
"""

from .equilibria import Equilibrium, find_equilibria, stability
from .exceptions import (
    InvalidArgumentError,
    InvalidRangeError,
    InvalidStepError,
    PhaserError,
)
from .launcher import Launcher, build_launcher
from .visualization import PhasePortraitResult, phase_portrait

__version__ = "0.1.0"

__all__ = [
    # Launcher
    "Launcher",
    "build_launcher",
    # Phase portraits
    "phase_portrait",
    "PhasePortraitResult",
    # Equilibria
    "Equilibrium",
    "find_equilibria",
    "stability",
    # Exceptions
    "PhaserError",
    "InvalidArgumentError",
    "InvalidRangeError",
    "InvalidStepError",
]
