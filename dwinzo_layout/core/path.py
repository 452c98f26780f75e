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
Path Value Type
================

An ordered, immutable sequence of waypoints. Insertion order defines the
direction of travel. Every edit returns a new Path; a Path already handed
to a renderer or cache is never changed underneath it.
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .path_geometry import SmoothCurve, Vector3, build_rounded_path

# A path needs this many waypoints before it can be curved or collision tested
MIN_RENDERABLE_POINTS = 2


@dataclass(frozen=True)
class Path:
    """Ordered waypoint sequence.

    Attributes:
        points: Waypoints in drawing order
        finished: True once the path has been committed by the user

    Example:
        >>> path = Path().append(Vector3(0, 0, 0)).append(Vector3(5, 0, 0))
        >>> path.is_renderable
        True
    """

    points: Tuple[Vector3, ...] = field(default_factory=tuple)
    finished: bool = False

    @classmethod
    def from_points(
        cls,
        points: Sequence[Union[Vector3, Sequence[float]]],
        finished: bool = False
    ) -> "Path":
        """Build a path from vectors or (x, y, z) tuples."""
        return cls(tuple(Vector3.of(p) for p in points), finished)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Vector3]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Vector3:
        return self.points[index]

    @property
    def is_renderable(self) -> bool:
        """True when the path has enough points to produce geometry."""
        return len(self.points) >= MIN_RENDERABLE_POINTS

    @property
    def last_point(self) -> Optional[Vector3]:
        """Most recently placed waypoint, or None for an empty path."""
        return self.points[-1] if self.points else None

    def append(self, point: Vector3) -> "Path":
        """Return a new path with ``point`` added at the end.

        Raises:
            ValueError: If the path is already finished
        """
        if self.finished:
            raise ValueError("Cannot append to a finished path")
        return replace(self, points=self.points + (point,))

    def replace_at(self, index: int, point: Vector3) -> "Path":
        """Return a new path with the waypoint at ``index`` swapped out.

        Raises:
            IndexError: If index is out of range
        """
        if not -len(self.points) <= index < len(self.points):
            raise IndexError(f"Waypoint index {index} out of range")
        updated = list(self.points)
        updated[index] = point
        return replace(self, points=tuple(updated))

    def remove_at(self, index: int) -> "Path":
        """Return a new path without the waypoint at ``index``.

        Raises:
            IndexError: If index is out of range
        """
        if not -len(self.points) <= index < len(self.points):
            raise IndexError(f"Waypoint index {index} out of range")
        updated = list(self.points)
        del updated[index]
        return replace(self, points=tuple(updated))

    def without_last(self) -> "Path":
        """Return a new path with the last waypoint dropped."""
        return replace(self, points=self.points[:-1])

    def finish(self) -> "Path":
        """Return a frozen copy marked as committed."""
        return replace(self, finished=True)

    def edges(self) -> List[Tuple[Vector3, Vector3]]:
        """Consecutive waypoint pairs."""
        return list(zip(self.points, self.points[1:]))

    def smooth_curve(self, radius: float) -> Tuple[SmoothCurve, List[float]]:
        """Round the path into a curve.

        Args:
            radius: Rounding radius

        Returns:
            Tuple of (curve, per-waypoint curvatures)

        Raises:
            ValueError: If the path has fewer than 2 waypoints
        """
        if not self.is_renderable:
            raise ValueError(
                f"Path needs at least {MIN_RENDERABLE_POINTS} waypoints "
                f"before a curve can be built, has {len(self.points)}"
            )
        return build_rounded_path(self.points, radius)


__all__ = ["Path", "MIN_RENDERABLE_POINTS"]
