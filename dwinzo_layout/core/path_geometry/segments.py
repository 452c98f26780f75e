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
Curve Primitives Module
========================

Defines the primitives a smoothed path is made of:
- CurvePrimitive: Abstract base class
- LineSegment: Straight run between two points
- QuadraticBlend: Quadratic Bezier corner blend

Every primitive is parameterised by arc-length fraction ``u`` in [0, 1],
so equal steps in ``u`` cover equal distances along the primitive.
"""

import bisect
from abc import ABC, abstractmethod
from typing import List

from .vector import Vector3

# Chord divisions used to build the arc-length table of a blend
ARC_LENGTH_DIVISIONS = 200


class CurvePrimitive(ABC):
    """Abstract base class for smoothed-path primitives.

    All primitives must implement:
    - point_at(u): position at arc-length fraction u
    - tangent_at(u): unit tangent at arc-length fraction u
    - length: total arc length
    """

    segment_type = "ABSTRACT"

    def __init__(self, start: Vector3, end: Vector3, curvature: float = 0.0):
        self.start = start
        self.end = end
        self.curvature = curvature

    @property
    @abstractmethod
    def length(self) -> float:
        """Arc length of the primitive."""
        pass

    @abstractmethod
    def point_at(self, u: float) -> Vector3:
        """Position at arc-length fraction u (0 = start, 1 = end)."""
        pass

    @abstractmethod
    def tangent_at(self, u: float) -> Vector3:
        """Unit tangent at arc-length fraction u."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.start!r} -> {self.end!r}, L={self.length:.3f})"


class LineSegment(CurvePrimitive):
    """Straight segment.

    Example:
        >>> seg = LineSegment(Vector3(0, 0, 0), Vector3(4, 0, 0))
        >>> seg.point_at(0.25)
        Vector3(1.000, 0.000, 0.000)
    """

    segment_type = "LINE"

    def __init__(self, start: Vector3, end: Vector3):
        super().__init__(start, end, 0.0)
        self._length = start.distance_to(end)

    @property
    def length(self) -> float:
        return self._length

    def point_at(self, u: float) -> Vector3:
        return self.start.lerp(self.end, u)

    def tangent_at(self, u: float) -> Vector3:
        return (self.end - self.start).normalized()


class QuadraticBlend(CurvePrimitive):
    """Quadratic Bezier corner blend.

    Runs from ``start`` to ``end`` pulled towards ``control`` (the
    unrounded corner waypoint). Arc-length fractions are mapped to the Bezier
    parameter through a cumulative chord-length table.

    Bezier equation:
        B(s) = (1-s)^2 * P0 + 2(1-s)s * P1 + s^2 * P2
    """

    segment_type = "QUADRATIC_BLEND"

    def __init__(
        self,
        start: Vector3,
        control: Vector3,
        end: Vector3,
        curvature: float = 0.0
    ):
        super().__init__(start, end, curvature)
        self.control = control
        self._lengths = self._build_arc_length_table()

    def _bezier(self, s: float) -> Vector3:
        inv = 1.0 - s
        return (
            self.start * (inv * inv)
            + self.control * (2.0 * inv * s)
            + self.end * (s * s)
        )

    def _derivative(self, s: float) -> Vector3:
        return (
            (self.control - self.start) * (2.0 * (1.0 - s))
            + (self.end - self.control) * (2.0 * s)
        )

    def _build_arc_length_table(self) -> List[float]:
        lengths = [0.0]
        previous = self.start
        total = 0.0
        for i in range(1, ARC_LENGTH_DIVISIONS + 1):
            current = self._bezier(i / ARC_LENGTH_DIVISIONS)
            total += previous.distance_to(current)
            lengths.append(total)
            previous = current
        return lengths

    @property
    def length(self) -> float:
        return self._lengths[-1]

    def parameter_at(self, u: float) -> float:
        """Map arc-length fraction u to the Bezier parameter s."""
        u = max(0.0, min(1.0, u))
        target = u * self.length
        if target <= 0.0:
            return 0.0

        i = bisect.bisect_right(self._lengths, target) - 1
        i = max(0, min(i, ARC_LENGTH_DIVISIONS - 1))

        before = self._lengths[i]
        if before == target:
            return i / ARC_LENGTH_DIVISIONS

        segment_length = self._lengths[i + 1] - before
        fraction = (target - before) / segment_length if segment_length > 0 else 0.0
        return min(1.0, (i + fraction) / ARC_LENGTH_DIVISIONS)

    def point_at(self, u: float) -> Vector3:
        return self._bezier(self.parameter_at(u))

    def tangent_at(self, u: float) -> Vector3:
        tangent = self._derivative(self.parameter_at(u))
        if tangent.length_squared == 0:
            return (self.end - self.start).normalized()
        return tangent.normalized()


__all__ = [
    "ARC_LENGTH_DIVISIONS",
    "CurvePrimitive",
    "LineSegment",
    "QuadraticBlend",
]
