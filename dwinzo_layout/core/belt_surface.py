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
Belt Surface Generator
=======================

Builds the ribbon mesh a conveyor belt is drawn with. The curve is sampled
at N+1 uniform parameter steps; every sample is pushed out to a left and a
right edge point along the ground-plane normal, and consecutive edge pairs
are triangulated into a quad strip.

Each vertex carries the attributes the stripe shader needs:

    d         normalized arc length along the belt, from sampled chord
              lengths (not i/N, curve speed is uneven near corners)
    curvature curvature of the primitive under the sample
    lateral   -1 on the left edge, +1 on the right edge

Buffers are float32 numpy arrays laid out as a triangle soup, one row per
vertex, ready to upload as GPU attributes.

Example:
    >>> from dwinzo_layout.core.path_geometry import build_rounded_path
    >>> curve, _ = build_rounded_path([(0, 0, 0), (4, 0, 0)], radius=0.8)
    >>> mesh = generate_belt(curve, half_width=0.45, y_offset=-0.1, divisions=4)
    >>> mesh.triangle_count
    8
"""

from dataclasses import dataclass

import numpy as np

from .constants import BELT_DIVISIONS
from .logging_config import get_logger
from .path_geometry import UP, SmoothCurve

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class BeltMesh:
    """Render-ready belt surface.

    Attributes:
        positions: (V, 3) vertex positions, V = 6 * divisions
        path_position: (V,) normalized arc-length coordinate d
        curvature: (V,) curvature at the vertex's sample
        lateral: (V,) -1 for left edge vertices, +1 for right edge vertices
        uvs: (V, 2) texture coordinates (u across, v = d along)
        left_edge: (N+1, 3) left edge sample points
        right_edge: (N+1, 3) right edge sample points
        arc_lengths: (N+1,) cumulative chord length at each sample
        total_length: Sampled belt length
    """
    positions: np.ndarray
    path_position: np.ndarray
    curvature: np.ndarray
    lateral: np.ndarray
    uvs: np.ndarray
    left_edge: np.ndarray
    right_edge: np.ndarray
    arc_lengths: np.ndarray
    total_length: float

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return self.vertex_count // 3

    @property
    def divisions(self) -> int:
        return int(self.left_edge.shape[0]) - 1

    def __repr__(self) -> str:
        return (f"BeltMesh({self.triangle_count} triangles, "
                f"L={self.total_length:.3f})")


def cumulative_arc_lengths(points: np.ndarray) -> np.ndarray:
    """Cumulative chord length of an (N, 3) polyline, starting at 0."""
    if len(points) == 0:
        return np.zeros(0)
    chords = np.linalg.norm(np.diff(points, axis=0), axis=1)
    return np.concatenate(([0.0], np.cumsum(chords)))


def generate_belt(
    curve: SmoothCurve,
    half_width: float,
    y_offset: float,
    divisions: int = BELT_DIVISIONS
) -> BeltMesh:
    """Generate the belt ribbon for a smoothed path.

    Args:
        curve: Centre-line curve
        half_width: Distance from centre line to each belt edge
        y_offset: Belt surface height (every vertex gets this y)
        divisions: Number of sample intervals along the curve

    Returns:
        BeltMesh with 2 * divisions triangles

    Raises:
        ValueError: If half_width <= 0 or divisions < 1
    """
    if half_width <= 0:
        raise ValueError(f"Belt half-width must be positive, got {half_width}")
    if divisions < 1:
        raise ValueError(f"Belt divisions must be >= 1, got {divisions}")

    points, tangents = curve.sample(divisions)

    left_edge = np.empty((divisions + 1, 3))
    right_edge = np.empty((divisions + 1, 3))
    centre = np.empty((divisions + 1, 3))
    sample_curvature = np.empty(divisions + 1)

    for i, (point, tangent) in enumerate(zip(points, tangents)):
        normal = UP.cross(tangent).normalized()
        left = (point + normal * -half_width).with_y(y_offset)
        right = (point + normal * half_width).with_y(y_offset)
        left_edge[i] = left.to_tuple()
        right_edge[i] = right.to_tuple()
        centre[i] = point.to_tuple()
        sample_curvature[i] = curve.curvature_at(i / divisions)

    arc_lengths = cumulative_arc_lengths(centre)
    total_length = float(arc_lengths[-1])
    if total_length > 0:
        d = arc_lengths / total_length
    else:
        d = np.zeros(divisions + 1)

    # Two triangles per quad:
    #   (left[i], left[i+1], right[i]) and (left[i+1], right[i+1], right[i])
    i0 = np.arange(divisions)
    i1 = i0 + 1
    corner_index = np.stack([i0, i1, i0, i1, i1, i0], axis=1)
    corner_lateral = np.array([-1.0, -1.0, 1.0, -1.0, 1.0, 1.0])
    is_right = np.tile(corner_lateral > 0, divisions)
    sample_index = corner_index.reshape(-1)

    positions = np.where(
        is_right[:, None], right_edge[sample_index], left_edge[sample_index]
    )
    lateral = np.tile(corner_lateral, divisions)
    path_position = d[sample_index]
    uvs = np.stack([(lateral + 1.0) * 0.5, path_position], axis=1)

    logger.debug(
        "Belt generated: %d samples, %d triangles, length %.3f",
        divisions + 1, 2 * divisions, total_length
    )

    return BeltMesh(
        positions=positions.astype(np.float32),
        path_position=path_position.astype(np.float32),
        curvature=sample_curvature[sample_index].astype(np.float32),
        lateral=lateral.astype(np.float32),
        uvs=uvs.astype(np.float32),
        left_edge=left_edge,
        right_edge=right_edge,
        arc_lengths=arc_lengths,
        total_length=total_length,
    )


__all__ = ["BeltMesh", "generate_belt", "cumulative_arc_lengths"]
