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
Rounded Path Builder
=====================

Turns a polyline of waypoints into a SmoothCurve by replacing every
interior corner with a quadratic blend.

For each interior waypoint P[i]:
    v1 = normalize(P[i] - P[i-1])       incoming direction
    v2 = normalize(P[i+1] - P[i])       outgoing direction
    d  = min(r, 0.45 |P[i]-P[i-1]|, 0.45 |P[i+1]-P[i]|)

    p1 = P[i] - v1 * d                  blend start
    p2 = P[i] + v2 * d                  blend end

Nearly straight corners (angle < 0.01 rad) and corners squeezed below
1 mm of blend distance pass straight through with curvature 0.
"""

import math
from typing import List, Sequence, Tuple, Union

from ..logging_config import get_logger
from .segments import CurvePrimitive, LineSegment, QuadraticBlend
from .smooth_curve import SmoothCurve
from .vector import Vector3

logger = get_logger(__name__)

# Corner deflection below which a waypoint is treated as straight-through
MIN_BLEND_ANGLE = 0.01

# Blend distance below which a corner is not rounded
MIN_BLEND_DISTANCE = 0.001

# Fraction of each adjacent leg a blend may consume
MAX_LEG_FRACTION = 0.45


def calculate_blend_distance(
    prev_point: Vector3,
    corner: Vector3,
    next_point: Vector3,
    radius: float
) -> float:
    """Blend distance at a corner.

    Args:
        prev_point: Previous waypoint
        corner: Corner waypoint
        next_point: Next waypoint
        radius: Rounding radius (upper bound)

    Returns:
        Distance from the corner to each blend endpoint
    """
    return min(
        radius,
        corner.distance_to(prev_point) * MAX_LEG_FRACTION,
        corner.distance_to(next_point) * MAX_LEG_FRACTION,
    )


def build_rounded_path(
    points: Sequence[Union[Vector3, Sequence[float]]],
    radius: float
) -> Tuple[SmoothCurve, List[float]]:
    """Build a smoothed curve and per-waypoint curvature from a polyline.

    Args:
        points: Ordered waypoints (at least two)
        radius: Rounding radius, maximum corner blend distance

    Returns:
        Tuple of (curve, curvatures) where curvatures has one entry per
        input waypoint: 0 for the endpoints and straight joints,
        1 / blend distance for rounded corners.

    Raises:
        ValueError: If fewer than 2 waypoints are given or radius <= 0

    Example:
        >>> curve, curvatures = build_rounded_path(
        ...     [(0, 0, 0), (5, 0, 0), (5, 0, 5)], radius=1.0)
        >>> curvatures
        [0.0, 1.0, 0.0]
    """
    waypoints = [Vector3.of(p) for p in points]

    if len(waypoints) < 2:
        raise ValueError(
            f"Rounded path requires at least 2 waypoints, got {len(waypoints)}"
        )
    if radius <= 0:
        raise ValueError(f"Rounding radius must be positive, got {radius}")

    primitives: List[CurvePrimitive] = []
    curvatures = [0.0]
    last = waypoints[0]

    for i in range(1, len(waypoints) - 1):
        prev_point = waypoints[i - 1]
        corner = waypoints[i]
        next_point = waypoints[i + 1]

        v1 = (corner - prev_point).normalized()
        v2 = (next_point - corner).normalized()
        angle = v1.angle_to(v2)
        blend = calculate_blend_distance(prev_point, corner, next_point, radius)

        if angle < MIN_BLEND_ANGLE or blend < MIN_BLEND_DISTANCE:
            primitives.append(LineSegment(last, corner))
            curvatures.append(0.0)
            last = corner
            continue

        p1 = corner - v1 * blend
        p2 = corner + v2 * blend
        curvature = 1.0 / blend

        primitives.append(LineSegment(last, p1))
        primitives.append(QuadraticBlend(p1, corner, p2, curvature))
        curvatures.append(curvature)
        last = p2

    primitives.append(LineSegment(last, waypoints[-1]))
    curvatures.append(0.0)

    curve = SmoothCurve(primitives)
    logger.debug(
        "Rounded path: %d waypoints -> %d primitives, length %.3f",
        len(waypoints), len(primitives), curve.length
    )
    return curve, curvatures


def polyline_length(points: Sequence[Vector3]) -> float:
    """Sum of straight leg lengths of a polyline."""
    return sum(a.distance_to(b) for a, b in zip(points, points[1:]))


def corner_angle(prev_point: Vector3, corner: Vector3, next_point: Vector3) -> float:
    """Deflection angle at a corner in radians (0 = straight through)."""
    v1 = (corner - prev_point).normalized()
    v2 = (next_point - corner).normalized()
    return v1.angle_to(v2)


__all__ = [
    "MIN_BLEND_ANGLE",
    "MIN_BLEND_DISTANCE",
    "MAX_LEG_FRACTION",
    "build_rounded_path",
    "calculate_blend_distance",
    "polyline_length",
    "corner_angle",
]
