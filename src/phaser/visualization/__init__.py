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
Visualization Tools
===================

Phase portraits for one-dimensional autonomous systems, the renderer they
draw through, and styling themes.

Phase Portraits
---------------
>>> from phaser.visualization import phase_portrait
>>>
>>> result = phase_portrait(logistic, (-0.5, 2.5), point_count=10)
>>> result.figure.show()

Renderers and Themes
--------------------
>>> from phaser.visualization import PlotlyRenderer, PlotThemes
>>>
>>> renderer = PlotlyRenderer(theme="publication")
>>> result = phase_portrait(logistic, (-0.5, 2.5), renderer=renderer)
>>>
>>> PlotThemes.apply_theme(result.figure, "dark")

Authors
-------
Gil Benezer

License
-------
GNU Affero General Public License v3.0
"""

from .phase_portrait import PhasePortraitResult, phase_portrait
from .renderer import PlotlyRenderer, RendererProtocol
from .themes import PlotThemes

__all__ = [
    # Phase portraits
    "phase_portrait",
    "PhasePortraitResult",
    # Renderers
    "RendererProtocol",
    "PlotlyRenderer",
    # Themes
    "PlotThemes",
]
