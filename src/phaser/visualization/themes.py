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
Plot Themes for Phase Portraits

Named styling presets applied to a finished Plotly figure.

Themes
------
DEFAULT : Plotly white template, the look used by phase_portrait()
PUBLICATION : Serif fonts and a plain template for papers
DARK : Dark template for screens
PRESENTATION : Large fonts and thick lines for slides

Usage
-----
>>> from phaser.visualization.themes import PlotThemes
>>>
>>> result = phase_portrait(logistic, (-0.5, 2.5))
>>> fig = PlotThemes.apply_theme(result.figure, theme="publication")
>>> fig.write_html("logistic.html")
"""

from typing import Dict, List, Union

import plotly.graph_objects as go


class PlotThemes:
    """
    Styling presets for phase portrait figures.

    Each theme is a plain dict; any subset of its keys may also be passed as
    a custom theme.

    Keys
    ----
    template : str
        Plotly layout template
    font_family : str
    font_size : int
    line_width : float
        Width of the derivative curve
    zero_line_color : str
        Color of the y = 0 axis line the arrows sit on

    Examples
    --------
    >>> custom = dict(PlotThemes.DEFAULT, font_size=16)
    >>> fig = PlotThemes.apply_theme(fig, theme=custom)
    """

    DEFAULT = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 2,
        "zero_line_color": "gray",
    }

    PUBLICATION = {
        "template": "simple_white",
        "font_family": "Times New Roman, serif",
        "font_size": 14,
        "line_width": 2.5,
        "zero_line_color": "black",
    }

    DARK = {
        "template": "plotly_dark",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 2,
        "zero_line_color": "lightgray",
    }

    PRESENTATION = {
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 18,
        "line_width": 3,
        "zero_line_color": "gray",
    }

    @staticmethod
    def available() -> List[str]:
        """Names accepted by get_theme() and apply_theme()."""
        return ["default", "publication", "dark", "presentation"]

    @staticmethod
    def get_theme(theme: Union[str, Dict] = "default") -> Dict:
        """
        Resolve a theme name or custom dict to a theme config.

        Raises
        ------
        ValueError
            If a theme name is not recognized
        TypeError
            If theme is neither str nor dict
        """
        if isinstance(theme, dict):
            return theme
        if not isinstance(theme, str):
            raise TypeError("theme must be str or dict")

        theme_lower = theme.lower()
        if theme_lower == "default":
            return PlotThemes.DEFAULT
        elif theme_lower == "publication":
            return PlotThemes.PUBLICATION
        elif theme_lower == "dark":
            return PlotThemes.DARK
        elif theme_lower == "presentation":
            return PlotThemes.PRESENTATION

        raise ValueError(
            f"Unknown theme '{theme}'. Available: {', '.join(PlotThemes.available())}"
        )

    @staticmethod
    def apply_theme(fig: go.Figure, theme: Union[str, Dict] = "default") -> go.Figure:
        """
        Apply a theme to a Plotly figure in place.

        Parameters
        ----------
        fig : go.Figure
            Figure to style
        theme : str or dict
            Theme name or custom theme dictionary

        Returns
        -------
        go.Figure
            The same figure, styled
        """
        config = PlotThemes.get_theme(theme)

        if "template" in config:
            fig.update_layout(template=config["template"])

        if "font_family" in config or "font_size" in config:
            font = {}
            if "font_family" in config:
                font["family"] = config["font_family"]
            if "font_size" in config:
                font["size"] = config["font_size"]
            fig.update_layout(font=font)

        if "line_width" in config:
            for trace in fig.data:
                if hasattr(trace, "line"):
                    trace.line.width = config["line_width"]

        if "zero_line_color" in config:
            fig.update_yaxes(zerolinecolor=config["zero_line_color"])

        return fig


__all__ = [
    "PlotThemes",
]
