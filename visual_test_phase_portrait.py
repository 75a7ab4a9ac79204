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
Visual Test Suite for Phase Portraits

Generates HTML files for visual inspection of one-dimensional phase portraits.
Run this script to create a gallery of test plots.

Usage:
    python visual_test_phase_portrait.py

Output:
    Creates HTML files in ./visual_tests/phase_portrait/
"""

from pathlib import Path

import numpy as np

from phaser import build_launcher, find_equilibria, phase_portrait
from phaser.visualization import PlotlyRenderer


def setup_output_directory():
    """Create output directory for visual tests."""
    output_dir = Path("visual_tests/phase_portrait")
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def logistic(t, state, parameters):
    y = state["y"]
    return [y * (1 - y)]


def bistable(t, state, parameters):
    y = state["y"]
    return [y - y**3]


def harvested_logistic(t, state, parameters):
    r, h = parameters
    n = state["N"]
    return [r * n * (1 - n) - h]


def saddle_node(t, state, parameters):
    y = state["y"]
    return [y**2]


def print_equilibria(deriv, y_range, **kwargs):
    for eq in find_equilibria(deriv, y_range, **kwargs):
        print(f"    y* = {eq.value:+.4f}  ({eq.classification})")


def test_1_logistic(output_dir):
    """Logistic growth: unstable at 0, stable at 1."""
    print("1. Logistic growth")
    result = phase_portrait(
        logistic,
        (-0.5, 2.5),
        point_count=10,
        overlap_fraction=0.5,
        title="Logistic Growth",
    )
    result.figure.write_html(output_dir / "01_logistic.html")
    print_equilibria(logistic, (-0.5, 2.5))


def test_2_bistable(output_dir):
    """Bistable switch: stable at ±1, unstable at 0."""
    print("2. Bistable switch")
    result = phase_portrait(bistable, (-1.5, 1.5), point_count=13, color="#EF553B")
    result.figure.write_html(output_dir / "02_bistable.html")
    print_equilibria(bistable, (-1.5, 1.5))


def test_3_harvesting_launcher(output_dir):
    """Harvested logistic through a launcher, custom state name."""
    print("3. Harvested logistic (launcher)")
    launcher = build_launcher(
        harvested_logistic, parameters=(1.0, 0.21), system="one_dim", state_names="N"
    )
    result = launcher.phase_portrait((0, 1), point_count=11, title="Harvested Logistic")
    result.figure.write_html(output_dir / "03_harvested_logistic.html")
    for eq in launcher.find_equilibria((0, 1)):
        print(f"    N* = {eq.value:+.4f}  ({eq.classification})")


def test_4_semi_stable(output_dir):
    """y² has a semi-stable equilibrium at 0."""
    print("4. Semi-stable equilibrium")
    result = phase_portrait(saddle_node, (-1, 1), point_count=9, theme="publication")
    result.figure.write_html(output_dir / "04_semi_stable.html")
    print_equilibria(saddle_node, (-1, 1))


def test_5_dense_arrows_dark(output_dir):
    """Many short arrows on a dark theme."""
    print("5. Dense arrows, dark theme")
    renderer = PlotlyRenderer(theme="dark", width=900)
    result = phase_portrait(
        lambda t, s, p: [np.sin(s["y"])],
        (-2 * np.pi, 2 * np.pi),
        point_count=30,
        overlap_fraction=0.9,
        arrow_head_length=0.05,
        color="white",
        renderer=renderer,
    )
    result.figure.write_html(output_dir / "05_sine_dark.html")


def test_6_color_truncation(output_dir):
    """Only the first color of a sequence is used."""
    print("6. Color truncation (expect a UserWarning)")
    result = phase_portrait(logistic, (-0.5, 2.5), color=["green", "red"], add_grid=False)
    result.figure.write_html(output_dir / "06_color_truncation.html")


def main():
    output_dir = setup_output_directory()
    print(f"Writing visual tests to {output_dir}/\n")

    test_1_logistic(output_dir)
    test_2_bistable(output_dir)
    test_3_harvesting_launcher(output_dir)
    test_4_semi_stable(output_dir)
    test_5_dense_arrows_dark(output_dir)
    test_6_color_truncation(output_dir)

    print(f"\nDone. Open the HTML files in {output_dir}/ to inspect.")


if __name__ == "__main__":
    main()
