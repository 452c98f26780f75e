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
Tests for the Collision Detector
=================================

Tests for thickened-path overlap, symmetry and the separation guarantee.
"""

import pytest

from dwinzo_layout.core.collision import (
    boxes_overlap,
    create_segments,
    paths_collide,
    point_in_polygon,
    polygons_intersect,
    segments_intersect,
)
from dwinzo_layout.core.path_geometry import Vector3


def translated(path, offset):
    return [p + offset for p in path]


@pytest.fixture
def conveyor():
    return [Vector3(0, 0, 0), Vector3(5, 0, 0), Vector3(5, 0, 5)]


class TestCreateSegments:
    """Tests for thickening path edges into quads."""

    @pytest.mark.unit
    def test_one_segment_per_edge(self, conveyor):
        assert len(create_segments(conveyor, 1.0)) == 2

    @pytest.mark.unit
    def test_quad_corners(self):
        (segment,) = create_segments([Vector3(0, 0, 0), Vector3(4, 0, 0)], 1.0)
        assert segment.left_start == Vector3(0, 0, 0.5)
        assert segment.right_start == Vector3(0, 0, -0.5)
        assert segment.left_end == Vector3(4, 0, 0.5)
        assert segment.right_end == Vector3(4, 0, -0.5)

    @pytest.mark.unit
    def test_short_path_has_no_segments(self):
        assert create_segments([Vector3(0, 0, 0)], 1.0) == []

    @pytest.mark.unit
    def test_invalid_width(self, conveyor):
        with pytest.raises(ValueError):
            create_segments(conveyor, 0.0)


class TestPrimitives:
    """Tests for the 2D intersection primitives."""

    @pytest.mark.unit
    def test_crossing_segments(self):
        assert segments_intersect((0, 0), (2, 2), (0, 2), (2, 0))

    @pytest.mark.unit
    def test_parallel_segments(self):
        assert not segments_intersect((0, 0), (2, 0), (0, 1), (2, 1))

    @pytest.mark.unit
    def test_point_in_polygon(self):
        square = [(0, 0), (4, 0), (4, 4), (0, 4)]
        assert point_in_polygon((2, 2), square)
        assert not point_in_polygon((5, 2), square)

    @pytest.mark.unit
    def test_containment_without_edge_crossing(self):
        """Test a quad fully inside another is caught by the inside test."""
        outer = [Vector3(0, 0, 0), Vector3(10, 0, 0), Vector3(10, 0, 10), Vector3(0, 0, 10)]
        inner = [Vector3(4, 0, 4), Vector3(6, 0, 4), Vector3(6, 0, 6), Vector3(4, 0, 6)]
        assert polygons_intersect(outer, inner)
        assert polygons_intersect(inner, outer)

    @pytest.mark.unit
    def test_disjoint_polygons(self):
        a = [Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(1, 0, 1), Vector3(0, 0, 1)]
        b = [Vector3(3, 0, 0), Vector3(4, 0, 0), Vector3(4, 0, 1), Vector3(3, 0, 1)]
        assert not polygons_intersect(a, b)

    @pytest.mark.unit
    def test_box_prefilter(self):
        (a,) = create_segments([Vector3(0, 0, 0), Vector3(4, 0, 0)], 1.0)
        (b,) = create_segments([Vector3(0, 0, 3), Vector3(4, 0, 3)], 1.0)
        (c,) = create_segments([Vector3(2, 0, -3), Vector3(2, 0, 3)], 1.0)
        assert not boxes_overlap(a, b)
        assert boxes_overlap(a, c)


class TestPathsCollide:
    """Tests for paths_collide."""

    @pytest.mark.unit
    def test_offset_two_units_no_collision(self):
        """Test identical paths 2 apart with width 1 do not collide."""
        path = [Vector3(0, 0, 0), Vector3(5, 0, 0)]
        other = translated(path, Vector3(0, 0, 2))
        assert not paths_collide(path, other, 1.0)

    @pytest.mark.unit
    def test_offset_half_unit_collides(self):
        """Test identical paths 0.5 apart with width 1 overlap."""
        path = [Vector3(0, 0, 0), Vector3(5, 0, 0)]
        other = translated(path, Vector3(0, 0, 0.5))
        assert paths_collide(path, other, 1.0)
        assert paths_collide(other, path, 1.0)

    @pytest.mark.unit
    def test_leg_ending_on_other_path_collides(self, conveyor):
        """Test a shifted copy whose first leg runs into the original corner leg."""
        other = translated(conveyor, Vector3(0, 0, 2))
        assert paths_collide(conveyor, other, 1.0)

    @pytest.mark.unit
    def test_crossing_paths(self):
        a = [Vector3(0, 0, 0), Vector3(10, 0, 0)]
        b = [Vector3(5, 0, -5), Vector3(5, 0, 5)]
        assert paths_collide(a, b, 1.0)

    @pytest.mark.unit
    def test_single_point_path_never_collides(self, conveyor):
        assert not paths_collide(conveyor, [Vector3(0, 0, 0)], 1.0)

    @pytest.mark.unit
    @pytest.mark.parametrize("offset", [
        Vector3(0, 0, 0.5),
        Vector3(0, 0, 2),
        Vector3(3, 0, 3),
        Vector3(-2.5, 0, 4.2),
        Vector3(12, 0, 0),
    ])
    def test_symmetry(self, conveyor, offset):
        """Test collides(A, B) == collides(B, A)."""
        other = translated(conveyor, offset)
        assert paths_collide(conveyor, other, 1.0) == paths_collide(other, conveyor, 1.0)


class TestSeparation:
    """Tests for the parallel true-negative guarantee."""

    @pytest.mark.unit
    @pytest.mark.parametrize("gap", [1.01, 1.5, 2.0, 5.0, 50.0])
    @pytest.mark.parametrize("slide", [-3.0, 0.0, 2.5, 20.0])
    def test_parallel_paths_beyond_width_never_collide(self, gap, slide):
        """Test parallel paths farther apart than the width never collide."""
        a = [Vector3(0, 0, 0), Vector3(10, 0, 0)]
        b = translated(a, Vector3(slide, 0, gap))
        assert not paths_collide(a, b, 1.0)
        assert not paths_collide(b, a, 1.0)
