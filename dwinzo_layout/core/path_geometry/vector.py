# ==============================================================================
# Dwinzo Layout - Industrial Site Layout Tools
# Copyright (c) 2025 Dwinzo Layout Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
#
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program. If not, see <https://www.gnu.org/licenses/>.
# ==============================================================================

"""
3D Vector Utilities for Path Geometry
======================================

Provides a lightweight immutable 3D vector used for waypoints, curve
samples, tangents and offsets. Y is the up axis; layouts are drawn on
the ground plane y = 0.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union


@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector.

    Instances are never mutated, so a waypoint held by one component can be
    shared with another without copying. ``copy()`` still returns a distinct
    object for callers that need an independently owned point.

    Attributes:
        x: X coordinate
        y: Y coordinate (up)
        z: Z coordinate

    Example:
        >>> a = Vector3(0.0, 0.0, 0.0)
        >>> b = Vector3(3.0, 0.0, 4.0)
        >>> (b - a).length
        5.0
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value: Union["Vector3", Sequence[float]]) -> "Vector3":
        """Build a vector from another vector or an (x, y, z) sequence."""
        if isinstance(value, Vector3):
            return value
        if len(value) == 2:
            # (x, z) ground-plane pair
            return cls(float(value[0]), 0.0, float(value[1]))
        return cls(float(value[0]), float(value[1]), float(value[2]))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> "Vector3":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"

    @property
    def length(self) -> float:
        """Vector magnitude."""
        return math.sqrt(self.x ** 2 + self.y ** 2 + self.z ** 2)

    @property
    def length_squared(self) -> float:
        """Squared length (avoids sqrt for comparisons)."""
        return self.x ** 2 + self.y ** 2 + self.z ** 2

    def normalized(self) -> "Vector3":
        """Return unit vector in same direction.

        Returns:
            Unit vector, or zero vector if length is zero.
        """
        length = self.length
        if length > 0:
            return Vector3(self.x / length, self.y / length, self.z / length)
        return Vector3(0.0, 0.0, 0.0)

    def dot(self, other: "Vector3") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Cross product with another vector."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def angle_to(self, other: "Vector3") -> float:
        """Unsigned angle between two vectors in radians.

        Returns pi/2 when either vector has zero length.
        """
        denominator = math.sqrt(self.length_squared * other.length_squared)
        if denominator == 0:
            return math.pi / 2
        cos_theta = self.dot(other) / denominator
        return math.acos(max(-1.0, min(1.0, cos_theta)))

    def distance_to(self, other: "Vector3") -> float:
        """Distance to another point."""
        return (other - self).length

    def lerp(self, other: "Vector3", alpha: float) -> "Vector3":
        """Linear interpolation towards another point."""
        return Vector3(
            self.x + (other.x - self.x) * alpha,
            self.y + (other.y - self.y) * alpha,
            self.z + (other.z - self.z) * alpha,
        )

    def with_y(self, y: float) -> "Vector3":
        """Same point at a different height."""
        return Vector3(self.x, y, self.z)

    def copy(self) -> "Vector3":
        """Independently owned copy with identical coordinates."""
        return Vector3(self.x, self.y, self.z)

    def is_close(self, other: "Vector3", tolerance: float = 1e-9) -> bool:
        """Component-wise comparison with tolerance."""
        return (
            abs(self.x - other.x) < tolerance
            and abs(self.y - other.y) < tolerance
            and abs(self.z - other.z) < tolerance
        )

    def to_tuple(self) -> Tuple[float, float, float]:
        """Convert to (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    def ground(self) -> Tuple[float, float]:
        """Project onto the ground plane as an (x, z) pair."""
        return (self.x, self.z)


# Waypoints are plain vectors; the alias documents intent at call sites.
Waypoint = Vector3

UP = Vector3(0.0, 1.0, 0.0)
ZERO = Vector3(0.0, 0.0, 0.0)


__all__ = ["Vector3", "Waypoint", "UP", "ZERO"]
