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
Collision Detector
===================

Ground-plane overlap test between two thickened paths.

Every path edge becomes a quad (CollisionSegment) offset width/2 to each
side along the edge's ground normal. Two paths collide when any pair of
their quads overlaps:

    1. axis-aligned bounding boxes of the four corners overlap (3D, inclusive)
    2. the quads projected to (x, z) intersect: an edge pair crosses, or the
       first corner of either quad lies inside the other (containment)
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .logging_config import get_logger
from .path_geometry import UP, Vector3

logger = get_logger(__name__)

Point2D = Tuple[float, float]


@dataclass(frozen=True)
class CollisionSegment:
    """Thickened quad for one path edge.

    Attributes:
        left_start: Start point pushed to the left
        right_start: Start point pushed to the right
        left_end: End point pushed to the left
        right_end: End point pushed to the right
    """
    left_start: Vector3
    right_start: Vector3
    left_end: Vector3
    right_end: Vector3

    @property
    def corners(self) -> Tuple[Vector3, Vector3, Vector3, Vector3]:
        return (self.left_start, self.right_start, self.left_end, self.right_end)

    @property
    def polygon(self) -> List[Vector3]:
        """Corners in outline order."""
        return [self.left_start, self.right_start, self.right_end, self.left_end]

    def bounds(self) -> Tuple[Vector3, Vector3]:
        """(min, max) corners of the axis-aligned bounding box."""
        xs = [c.x for c in self.corners]
        ys = [c.y for c in self.corners]
        zs = [c.z for c in self.corners]
        return Vector3(min(xs), min(ys), min(zs)), Vector3(max(xs), max(ys), max(zs))


def create_segments(path: Sequence[Vector3], width: float) -> List[CollisionSegment]:
    """Thicken every edge of a path into a CollisionSegment.

    Raises:
        ValueError: If width is not positive
    """
    if width <= 0:
        raise ValueError(f"Collision width must be positive, got {width}")

    half_width = width / 2.0
    points = list(path)
    segments = []
    for start, end in zip(points, points[1:]):
        direction = (end - start).normalized()
        normal = UP.cross(direction).normalized()
        segments.append(CollisionSegment(
            left_start=start + normal * -half_width,
            right_start=start + normal * half_width,
            left_end=end + normal * -half_width,
            right_end=end + normal * half_width,
        ))
    return segments


def boxes_overlap(a: CollisionSegment, b: CollisionSegment) -> bool:
    """Inclusive axis-aligned bounding box overlap."""
    a_min, a_max = a.bounds()
    b_min, b_max = b.bounds()
    return not (
        a_max.x < b_min.x or a_min.x > b_max.x
        or a_max.y < b_min.y or a_min.y > b_max.y
        or a_max.z < b_min.z or a_min.z > b_max.z
    )


def _ccw(a: Point2D, b: Point2D, c: Point2D) -> bool:
    return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])


def segments_intersect(a1: Point2D, a2: Point2D, b1: Point2D, b2: Point2D) -> bool:
    """Orientation test for two 2D segments crossing.

    Touching and collinear overlaps are not reported.
    """
    return (
        _ccw(a1, b1, b2) != _ccw(a2, b1, b2)
        and _ccw(a1, a2, b1) != _ccw(a1, a2, b2)
    )


def point_in_polygon(point: Point2D, polygon: Sequence[Point2D]) -> bool:
    """Even-odd ray casting test."""
    px, py = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > py) != (yj > py):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def polygons_intersect(poly1: Sequence[Vector3], poly2: Sequence[Vector3]) -> bool:
    """Ground-plane intersection of two polygons given as 3D corners."""
    flat1 = [p.ground() for p in poly1]
    flat2 = [p.ground() for p in poly2]

    for i, p1 in enumerate(flat1):
        p2 = flat1[(i + 1) % len(flat1)]
        for j, p3 in enumerate(flat2):
            p4 = flat2[(j + 1) % len(flat2)]
            if segments_intersect(p1, p2, p3, p4):
                return True

    return point_in_polygon(flat1[0], flat2) or point_in_polygon(flat2[0], flat1)


def segments_collide(a: CollisionSegment, b: CollisionSegment) -> bool:
    """Bounding-box prefilter followed by the exact polygon test."""
    return boxes_overlap(a, b) and polygons_intersect(a.polygon, b.polygon)


def paths_collide(
    path1: Sequence[Vector3],
    path2: Sequence[Vector3],
    width: float
) -> bool:
    """True if the two paths, thickened to ``width``, overlap anywhere.

    Paths with fewer than two points have no edges and never collide.

    Args:
        path1: First path waypoints
        path2: Second path waypoints
        width: Full thickness of both paths

    Returns:
        True on the first overlapping segment pair found
    """
    segments1 = create_segments(path1, width)
    segments2 = create_segments(path2, width)

    for i, seg1 in enumerate(segments1):
        for j, seg2 in enumerate(segments2):
            if segments_collide(seg1, seg2):
                logger.debug("Collision between edge %d and edge %d", i, j)
                return True
    return False


__all__ = [
    "CollisionSegment",
    "create_segments",
    "boxes_overlap",
    "segments_intersect",
    "point_in_polygon",
    "polygons_intersect",
    "segments_collide",
    "paths_collide",
]
