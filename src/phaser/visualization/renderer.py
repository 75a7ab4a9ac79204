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
Renderers for Phase Portraits

phase_portrait() only computes samples; drawing is delegated to a renderer
with two call shapes:

- line(x, y, ...) : the derivative curve
- arrows(starts, heights, ends, ...) : one batch of direction arrows

Any object with these methods plus render() satisfies RendererProtocol.
PlotlyRenderer is the default.

Usage
-----
>>> from phaser.visualization.renderer import PlotlyRenderer
>>>
>>> renderer = PlotlyRenderer(theme="publication")
>>> result = phase_portrait(logistic, (-0.5, 2.5), renderer=renderer)
>>> result.figure.write_html("logistic.html")
"""

from typing import Any, Dict, Optional, Protocol, Union

import numpy as np
import plotly.graph_objects as go

from phaser.types import SampleArray
from phaser.visualization.themes import PlotThemes


class RendererProtocol(Protocol):
    """
    Drawing backend consumed by phase_portrait().

    Methods
    -------
    line(x, y, *, color, xlabel, ylabel, add_grid, title=None, **options)
        Draw the derivative curve with axis labels and optional grid
    arrows(starts, heights, ends, *, head_length, color, **options)
        Draw one batch of arrows from (starts[i], heights[i]) to
        (ends[i], heights[i])
    render()
        Return the finished figure
    """

    def line(
        self,
        x: SampleArray,
        y: SampleArray,
        *,
        color: str,
        xlabel: str,
        ylabel: str,
        add_grid: bool,
        title: Optional[str] = None,
        **options,
    ) -> None:
        ...

    def arrows(
        self,
        starts: SampleArray,
        heights: SampleArray,
        ends: SampleArray,
        *,
        head_length: float,
        color: str,
        **options,
    ) -> None:
        ...

    def render(self) -> Any:
        ...


class PlotlyRenderer:
    """
    Plotly implementation of RendererProtocol.

    The curve is a single go.Scatter trace; each arrow is an axis-referenced
    annotation lying on y = 0.

    Attributes
    ----------
    figure : go.Figure
        Figure being drawn into
    theme : str or dict
        Theme applied at construction

    Examples
    --------
    >>> renderer = PlotlyRenderer(theme="dark", width=900)
    >>> renderer.line(y, dy, color="black", xlabel="y", ylabel="dy", add_grid=True)
    >>> renderer.arrows(starts, np.zeros(3), ends, head_length=0.075, color="black")
    >>> fig = renderer.render()
    """

    # Arrow head length that maps to Plotly's default arrowsize of 1
    REFERENCE_HEAD_LENGTH = 0.075
    # Smallest arrowsize Plotly accepts
    MIN_ARROW_SIZE = 0.3

    def __init__(
        self,
        theme: Union[str, Dict] = "default",
        width: int = 700,
        height: int = 500,
    ):
        self.theme = theme
        self._theme_config = PlotThemes.get_theme(theme)
        self.figure = go.Figure()
        self.figure.update_layout(width=width, height=height, showlegend=False)
        PlotThemes.apply_theme(self.figure, theme)

    def line(
        self,
        x: SampleArray,
        y: SampleArray,
        *,
        color: str,
        xlabel: str,
        ylabel: str,
        add_grid: bool,
        title: Optional[str] = None,
        **options,
    ) -> None:
        """Add the derivative curve and set axis titles and grid visibility."""
        line_style = {"color": color}
        if "line_width" in self._theme_config:
            line_style["width"] = self._theme_config["line_width"]
        line_style.update(options.pop("line", {}))

        trace = {"mode": "lines", "name": ylabel}
        trace.update(options)
        self.figure.add_trace(go.Scatter(x=np.asarray(x), y=np.asarray(y), line=line_style, **trace))

        self.figure.update_layout(title=title, xaxis_title=xlabel, yaxis_title=ylabel)
        self.figure.update_xaxes(showgrid=add_grid)
        self.figure.update_yaxes(showgrid=add_grid, zeroline=True)

    def arrows(
        self,
        starts: SampleArray,
        heights: SampleArray,
        ends: SampleArray,
        *,
        head_length: float,
        color: str,
        **options,
    ) -> None:
        """Add one annotation arrow per (start, height, end) triple."""
        style = {
            "arrowhead": 2 if head_length > 0 else 0,
            "arrowsize": max(self.MIN_ARROW_SIZE, head_length / self.REFERENCE_HEAD_LENGTH),
            "arrowwidth": 2,
            "arrowcolor": color,
        }
        style.update(options)

        for x0, y0, x1 in zip(np.asarray(starts), np.asarray(heights), np.asarray(ends)):
            self.figure.add_annotation(
                x=float(x1),
                y=float(y0),
                ax=float(x0),
                ay=float(y0),
                xref="x",
                yref="y",
                axref="x",
                ayref="y",
                text="",
                showarrow=True,
                **style,
            )

    def render(self) -> go.Figure:
        """Return the figure."""
        return self.figure


__all__ = [
    "RendererProtocol",
    "PlotlyRenderer",
]
