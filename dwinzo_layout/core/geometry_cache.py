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
Derived Geometry Cache

Keeps curves, belts and conveyor assemblies for paths that have not
changed since the last frame. Entries are keyed by the path's waypoints
and the parameters they were built with; an edited path has different
waypoints and simply misses. Entries are evicted least recently used first
once max_entries is reached, so the superseded shapes of a path being
edited age out on their own. Recomputing is always correct, the cache only
saves time.
"""

from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, List, Tuple

from .belt_surface import BeltMesh, generate_belt
from .conveyor import ConveyorGeometry, build_conveyor_geometry
from .logging_config import get_logger
from .path import Path
from .path_geometry import SmoothCurve
from .settings import BeltSettings

logger = get_logger(__name__)

# Entries kept before eviction starts
DEFAULT_MAX_ENTRIES = 128


class GeometryCache:
    """(path, parameters) keyed LRU store of derived geometry.

    Args:
        max_entries: Entries kept before the least recently used is evicted

    Raises:
        ValueError: If max_entries is less than 1
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"Cache size must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def _get(self, kind: str, path: Path, params: Hashable, build: Callable[[], Any]):
        key = (kind, path.points, params)
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]

        self.misses += 1
        value = build()
        self._entries[key] = value
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
            self.evictions += 1
        logger.debug("Cached %s for %d-point path", kind, len(path))
        return value

    def get_curve(self, path: Path, radius: float) -> Tuple[SmoothCurve, List[float]]:
        """Smoothed curve and curvatures of ``path`` at ``radius``."""
        return self._get("curve", path, radius, lambda: path.smooth_curve(radius))

    def get_belt(self, path: Path, settings: BeltSettings) -> BeltMesh:
        """Belt surface of ``path`` built with ``settings``."""
        def build():
            curve, _ = self.get_curve(path, settings.bend_radius)
            return generate_belt(curve, settings.half_width, settings.height, settings.divisions)
        return self._get("belt", path, settings, build)

    def get_conveyor(self, path: Path, settings: BeltSettings) -> ConveyorGeometry:
        """Full conveyor assembly of ``path`` built with ``settings``."""
        return self._get(
            "conveyor", path, settings, lambda: build_conveyor_geometry(path, settings)
        )

    def invalidate(self, path: Path) -> int:
        """Drop every entry built from ``path``.

        Returns:
            Number of entries removed
        """
        stale = [key for key in self._entries if key[1] == path.points]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug("Invalidated %d cache entries", len(stale))
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, int]:
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }


__all__ = ["DEFAULT_MAX_ENTRIES", "GeometryCache"]
