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
Path Geometry Package
======================

Smoothing of user-drawn polylines into arc-length parameterised curves.

This package provides:
- Vector3 immutable value type (waypoints, tangents, offsets)
- Line and quadratic-blend curve primitives
- SmoothCurve composite with point/tangent/curvature sampling
- build_rounded_path: corner rounding with per-waypoint curvature

Example:
    >>> from dwinzo_layout.core.path_geometry import build_rounded_path
    >>> curve, curvatures = build_rounded_path(
    ...     [(0, 0, 0), (5, 0, 0), (5, 0, 5)], radius=1.0)
    >>> round(curve.length, 2)
    9.62
"""

from .vector import Vector3, Waypoint, UP, ZERO

from .segments import (
    ARC_LENGTH_DIVISIONS,
    CurvePrimitive,
    LineSegment,
    QuadraticBlend,
)

from .smooth_curve import SmoothCurve

from .curve_builder import (
    build_rounded_path,
    calculate_blend_distance,
    polyline_length,
    corner_angle,
)

__all__ = [
    # Classes
    "Vector3",
    "Waypoint",
    "CurvePrimitive",
    "LineSegment",
    "QuadraticBlend",
    "SmoothCurve",
    # Constants
    "UP",
    "ZERO",
    "ARC_LENGTH_DIVISIONS",
    # Builder functions
    "build_rounded_path",
    "calculate_blend_distance",
    "polyline_length",
    "corner_angle",
]
