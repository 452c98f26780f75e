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
Snapping Engine
================

Corrects a raw pointer position against the layout already drawn. Rules
are tried in priority order and the first match wins:

    1. POINT    an existing waypoint or camera target within
                point_threshold; the nearest one is returned as a copy
    2. SEGMENT  the clamped projection onto the first path edge found
                within line_threshold
    3. AXIS     x (or failing that z) locked to the last point of the
                path being drawn when within axis_offset
    4. NONE     the raw point

A corrected point is fed through the rules again until it stops moving,
so a segment projection that lands next to a waypoint ends on the
waypoint, and snapping an already snapped point returns it unchanged.

Example:
    >>> from dwinzo_layout.core.settings import SnapConfig
    >>> result = snap_point(
    ...     Vector3(0.2, 0.0, 0.1),
    ...     paths=[[Vector3(0, 0, 0), Vector3(5, 0, 0)]],
    ...     config=SnapConfig(),
    ... )
    >>> result.kind, result.point
    (<SnapKind.POINT: 'POINT'>, Vector3(0.000, 0.000, 0.000))
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .logging_config import get_logger
from .path_geometry import Vector3
from .settings import SnapConfig

logger = get_logger(__name__)

# Movement below which a re-snapped point counts as settled
SETTLED_TOLERANCE = 1e-9


class SnapKind(Enum):
    """Which rule produced a snapped point."""
    POINT = "POINT"
    SEGMENT = "SEGMENT"
    AXIS_X = "AXIS_X"
    AXIS_Z = "AXIS_Z"
    NONE = "NONE"


@dataclass(frozen=True)
class SnapResult:
    """Corrected pointer position.

    Attributes:
        point: Position to use
        kind: Rule that produced it
    """
    point: Vector3
    kind: SnapKind

    @property
    def snapped(self) -> bool:
        return self.kind is not SnapKind.NONE


def closest_point_on_segment(point: Vector3, a: Vector3, b: Vector3) -> Vector3:
    """Clamped projection of ``point`` onto segment [a, b].

    A zero-length segment projects everything onto ``a``.
    """
    ab = b - a
    denom = ab.length_squared
    if denom == 0.0:
        return a.copy()
    t = (point - a).dot(ab) / denom
    t = max(0.0, min(1.0, t))
    return a + ab * t


def find_point_snap(
    hover: Vector3,
    candidates: Iterable[Vector3],
    threshold: float
) -> Optional[Vector3]:
    """Nearest candidate strictly within ``threshold`` of hover, copied."""
    best = None
    best_distance = threshold
    for candidate in candidates:
        distance = hover.distance_to(candidate)
        if distance < best_distance:
            best = candidate
            best_distance = distance
    return best.copy() if best is not None else None


def find_segment_snap(
    hover: Vector3,
    paths: Iterable[Sequence[Vector3]],
    threshold: float
) -> Optional[Vector3]:
    """Projection onto the first path edge strictly within ``threshold``."""
    for path in paths:
        points = list(path)
        for a, b in zip(points, points[1:]):
            closest = closest_point_on_segment(hover, a, b)
            if closest.distance_to(hover) < threshold:
                return closest
    return None


def axis_lock(
    hover: Vector3,
    last_point: Optional[Vector3],
    offset: float
) -> SnapResult:
    """Lock x or z of hover to the last placed point.

    x is checked first; only one axis locks per call.
    """
    if last_point is not None:
        if abs(hover.x - last_point.x) < offset:
            return SnapResult(Vector3(last_point.x, hover.y, hover.z), SnapKind.AXIS_X)
        if abs(hover.z - last_point.z) < offset:
            return SnapResult(Vector3(hover.x, hover.y, last_point.z), SnapKind.AXIS_Z)
    return SnapResult(hover, SnapKind.NONE)


def _apply_rules(
    hover: Vector3,
    paths: List[List[Vector3]],
    candidates: List[Vector3],
    last_point: Optional[Vector3],
    config: SnapConfig
) -> SnapResult:
    """One pass of the priority rules."""
    target = find_point_snap(hover, candidates, config.point_threshold)
    if target is not None:
        return SnapResult(target, SnapKind.POINT)

    projected = find_segment_snap(hover, paths, config.line_threshold)
    if projected is not None:
        return SnapResult(projected, SnapKind.SEGMENT)

    return axis_lock(hover, last_point, config.axis_offset)


def snap_point(
    hover: Vector3,
    paths: Iterable[Sequence[Vector3]] = (),
    camera_targets: Sequence[Vector3] = (),
    last_point: Optional[Vector3] = None,
    config: Optional[SnapConfig] = None
) -> SnapResult:
    """Apply the snapping rules to a raw pointer position.

    The rules are re-applied to each corrected point until it settles.
    Waypoints settle at once; a segment projection can only move on to an
    earlier segment, so the number of passes is bounded by the edge count.

    Args:
        hover: Raw pointer position on the ground plane
        paths: Every drawn path, committed and in progress, in all modes
        camera_targets: Camera target points (point snap only)
        last_point: Last point of the path being drawn, for axis lock
        config: Snap thresholds (defaults when None)

    Returns:
        SnapResult with the corrected point and the last rule that moved it
    """
    config = config or SnapConfig()
    paths = [list(path) for path in paths]

    candidates = [point for path in paths for point in path]
    candidates.extend(camera_targets)

    result = SnapResult(hover, SnapKind.NONE)
    max_passes = sum(max(len(path) - 1, 0) for path in paths) + 3
    for _ in range(max_passes):
        corrected = _apply_rules(result.point, paths, candidates, last_point, config)
        if corrected.kind is SnapKind.POINT:
            result = corrected
            break
        if corrected.point.is_close(result.point, SETTLED_TOLERANCE):
            if not result.snapped:
                # Already on its target: keep the point as given
                result = SnapResult(result.point, corrected.kind)
            break
        result = corrected

    if result.snapped:
        logger.debug("Snap %s: %s -> %s", result.kind.value, hover, result.point)
    return result


def resolve_snap(
    hover: Vector3,
    paths: Iterable[Sequence[Vector3]] = (),
    camera_targets: Sequence[Vector3] = (),
    last_point: Optional[Vector3] = None,
    config: Optional[SnapConfig] = None
) -> Vector3:
    """Like snap_point, returning only the corrected position."""
    return snap_point(hover, paths, camera_targets, last_point, config).point


__all__ = [
    "SnapKind",
    "SnapResult",
    "closest_point_on_segment",
    "find_point_snap",
    "find_segment_snap",
    "axis_lock",
    "snap_point",
    "resolve_snap",
    "SETTLED_TOLERANCE",
]
