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
Rail and Support Generator
===========================

Side rails run parallel to the belt centre line. Each rail is built by
offsetting the centre-line samples sideways and rounding the resulting
polyline again with a tighter radius, so the rail follows bends without
kinks where the offset samples bunch up on the inside of a corner.

Support legs stand under both rails at a fixed ground interval. Stations
are spaced evenly in curve parameter (t = i / count), not in measured arc
length; since t is already arc-length based this is uneven only where the
inner/outer offset shortens or stretches a bend.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from .constants import BELT_DIVISIONS, SUPPORT_INTERVAL
from .logging_config import get_logger
from .path_geometry import UP, SmoothCurve, Vector3, build_rounded_path

logger = get_logger(__name__)

LEFT = -1
RIGHT = 1


@dataclass(frozen=True)
class SupportAnchor:
    """Ground position of one support leg.

    Attributes:
        position: Leg foot position
        side: -1 under the left rail, +1 under the right rail
        t: Curve parameter of the station
    """
    position: Vector3
    side: int
    t: float


def offset_point(curve: SmoothCurve, t: float, offset: float) -> Vector3:
    """Point at t pushed ``offset`` along the ground-plane normal.

    Negative offsets go to the left edge, positive to the right edge,
    matching the belt's lateral sign.
    """
    normal = UP.cross(curve.tangent_at(t)).normalized()
    return curve.point_at(t) + normal * offset


def offset_polyline(
    curve: SmoothCurve,
    offset: float,
    y_offset: float,
    divisions: int = BELT_DIVISIONS
) -> List[Vector3]:
    """Sample the curve and offset every sample sideways at height y_offset."""
    if divisions < 1:
        raise ValueError(f"Rail divisions must be >= 1, got {divisions}")
    return [
        offset_point(curve, i / divisions, offset).with_y(y_offset)
        for i in range(divisions + 1)
    ]


def generate_rails(
    curve: SmoothCurve,
    offset: float,
    radius: float,
    y_offset: float,
    divisions: int = BELT_DIVISIONS
) -> Tuple[SmoothCurve, SmoothCurve]:
    """Build the left and right rail curves.

    Args:
        curve: Belt centre-line curve
        offset: Lateral distance of each rail from the centre line
        radius: Rounding radius applied to the offset polylines
        y_offset: Rail height
        divisions: Number of sample intervals along the centre line

    Returns:
        (left_rail, right_rail)

    Raises:
        ValueError: If offset or radius is not positive
    """
    if offset <= 0:
        raise ValueError(f"Rail offset must be positive, got {offset}")

    left, _ = build_rounded_path(offset_polyline(curve, -offset, y_offset, divisions), radius)
    right, _ = build_rounded_path(offset_polyline(curve, offset, y_offset, divisions), radius)

    logger.debug(
        "Rails generated: offset %.3f, radius %.3f, lengths %.3f / %.3f",
        offset, radius, left.length, right.length
    )
    return left, right


def support_stations(length: float, interval: float = SUPPORT_INTERVAL) -> List[float]:
    """Curve parameters of the support stations.

    ``floor(length / interval)`` intervals, with a station at both ends.
    A curve shorter than one interval still gets a single station at its
    start.
    """
    if interval <= 0:
        raise ValueError(f"Support interval must be positive, got {interval}")

    count = math.floor(length / interval)
    if count == 0:
        return [0.0]
    return [i / count for i in range(count + 1)]


def generate_supports(
    curve: SmoothCurve,
    offset: float,
    interval: float = SUPPORT_INTERVAL
) -> List[SupportAnchor]:
    """Support anchors under both rails.

    Args:
        curve: Belt centre-line curve
        offset: Lateral distance of each rail from the centre line
        interval: Ground distance between stations

    Returns:
        Anchors ordered by station, left before right at each station
    """
    anchors = []
    for t in support_stations(curve.length, interval):
        for side in (LEFT, RIGHT):
            anchors.append(SupportAnchor(offset_point(curve, t, side * offset), side, t))

    logger.debug("Supports generated: %d anchors", len(anchors))
    return anchors


__all__ = [
    "LEFT",
    "RIGHT",
    "SupportAnchor",
    "offset_point",
    "offset_polyline",
    "generate_rails",
    "support_stations",
    "generate_supports",
]
