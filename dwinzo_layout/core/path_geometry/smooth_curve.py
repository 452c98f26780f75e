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
Smooth Curve Module
====================

Composite curve made of LineSegment and QuadraticBlend primitives.

The public parameter ``t`` in [0, 1] is a fraction of the total arc
length, not of the primitive count: ``point_at(0.5)`` is always halfway
along the curve no matter how many corners precede it.
"""

import bisect
from typing import List, Sequence, Tuple

from .segments import CurvePrimitive
from .vector import Vector3


class SmoothCurve:
    """Arc-length parameterised composite curve.

    Attributes:
        primitives: Ordered curve primitives (end of one is start of next)
        length: Total arc length

    Example:
        >>> from dwinzo_layout.core.path_geometry import build_rounded_path
        >>> curve, curvatures = build_rounded_path(
        ...     [Vector3(0, 0, 0), Vector3(5, 0, 0), Vector3(5, 0, 5)], 1.0)
        >>> curve.point_at(0.0)
        Vector3(0.000, 0.000, 0.000)
    """

    def __init__(self, primitives: Sequence[CurvePrimitive]):
        if not primitives:
            raise ValueError("SmoothCurve requires at least one primitive")

        self.primitives: Tuple[CurvePrimitive, ...] = tuple(primitives)

        cumulative = []
        total = 0.0
        for primitive in self.primitives:
            total += primitive.length
            cumulative.append(total)
        self._cumulative = cumulative

    @property
    def length(self) -> float:
        """Total arc length."""
        return self._cumulative[-1]

    @property
    def start(self) -> Vector3:
        return self.primitives[0].start

    @property
    def end(self) -> Vector3:
        return self.primitives[-1].end

    @property
    def is_degenerate(self) -> bool:
        """True when the curve has zero length (all points coincide)."""
        return self.length <= 0.0

    def _locate(self, t: float) -> Tuple[CurvePrimitive, float]:
        """Find the primitive containing t and the local arc-length fraction.

        Zero-length primitives (left by repeated waypoints) have no direction,
        so a boundary distance resolves to the nearest primitive with length.
        """
        t = max(0.0, min(1.0, t))
        distance = t * self.length

        last = len(self.primitives) - 1
        i = min(bisect.bisect_left(self._cumulative, distance), last)
        while i < last and self.primitives[i].length <= 0:
            i += 1
        while i > 0 and self.primitives[i].length <= 0:
            i -= 1

        primitive = self.primitives[i]
        if primitive.length <= 0:
            return primitive, 0.0

        u = 1.0 - (self._cumulative[i] - distance) / primitive.length
        return primitive, max(0.0, min(1.0, u))

    def point_at(self, t: float) -> Vector3:
        """Position at arc-length fraction t.

        A zero-length curve returns its single point for every t.
        """
        if self.is_degenerate:
            return self.start
        primitive, u = self._locate(t)
        return primitive.point_at(u)

    def tangent_at(self, t: float) -> Vector3:
        """Unit tangent at arc-length fraction t (zero on a degenerate curve)."""
        if self.is_degenerate:
            return Vector3(0.0, 0.0, 0.0)
        primitive, u = self._locate(t)
        return primitive.tangent_at(u)

    def curvature_at(self, t: float) -> float:
        """Curvature of the primitive at t (0 on straight runs)."""
        if self.is_degenerate:
            return 0.0
        primitive, _ = self._locate(t)
        return primitive.curvature

    def sample(self, divisions: int) -> Tuple[List[Vector3], List[Vector3]]:
        """Sample positions and unit tangents at t = i / divisions.

        Args:
            divisions: Number of intervals (divisions + 1 samples)

        Returns:
            Tuple of (points, tangents)
        """
        if divisions < 1:
            raise ValueError(f"divisions must be >= 1, got {divisions}")

        points = []
        tangents = []
        for i in range(divisions + 1):
            t = i / divisions
            points.append(self.point_at(t))
            tangents.append(self.tangent_at(t))
        return points, tangents

    def max_gap(self) -> float:
        """Largest distance between the end of a primitive and the next start."""
        gap = 0.0
        for previous, current in zip(self.primitives, self.primitives[1:]):
            gap = max(gap, previous.end.distance_to(current.start))
        return gap

    def __len__(self) -> int:
        return len(self.primitives)

    def __repr__(self) -> str:
        return f"SmoothCurve({len(self.primitives)} primitives, L={self.length:.3f})"


__all__ = ["SmoothCurve"]
