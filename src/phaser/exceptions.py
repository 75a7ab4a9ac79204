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
Exceptions raised by phaser entry points.

All validation happens before the derivative function is evaluated, so any
of these propagating to the caller means no sampling took place.
"""


class PhaserError(ValueError):
    """Base class for phaser validation failures"""
    pass


class InvalidArgumentError(PhaserError):
    """Raised for malformed or type-mismatched configuration"""
    pass


class InvalidRangeError(PhaserError):
    """Raised when scan bounds are not an increasing pair"""
    pass


class InvalidStepError(PhaserError):
    """Raised when a step size is not strictly positive"""
    pass


__all__ = [
    "PhaserError",
    "InvalidArgumentError",
    "InvalidRangeError",
    "InvalidStepError",
]
