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
Tests for the Snapping Engine
==============================

Tests for rule priority, snap targets and idempotence.
"""

import pytest

from dwinzo_layout.core.path import Path
from dwinzo_layout.core.path_geometry import Vector3
from dwinzo_layout.core.settings import SnapConfig
from dwinzo_layout.core.snapping import (
    SnapKind,
    axis_lock,
    closest_point_on_segment,
    find_point_snap,
    find_segment_snap,
    resolve_snap,
    snap_point,
)


@pytest.fixture
def existing_paths():
    """One conveyor along x and one vehicle path along z, far apart."""
    return [
        Path.from_points([(0, 0, 0), (10, 0, 0)]),
        Path.from_points([(20, 0, 0), (20, 0, 10)]),
    ]


class TestClosestPointOnSegment:
    """Tests for clamped projection."""

    @pytest.mark.unit
    def test_interior_projection(self):
        p = closest_point_on_segment(Vector3(3, 0, 2), Vector3(0, 0, 0), Vector3(10, 0, 0))
        assert p == Vector3(3, 0, 0)

    @pytest.mark.unit
    def test_clamped_to_endpoints(self):
        a, b = Vector3(0, 0, 0), Vector3(10, 0, 0)
        assert closest_point_on_segment(Vector3(-4, 0, 1), a, b) == a
        assert closest_point_on_segment(Vector3(14, 0, 1), a, b) == b

    @pytest.mark.unit
    def test_zero_length_segment(self):
        a = Vector3(1, 0, 1)
        assert closest_point_on_segment(Vector3(5, 0, 5), a, a) == a


class TestPointSnap:
    """Tests for the point rule."""

    @pytest.mark.unit
    def test_scenario_snaps_to_existing_waypoint(self, snap_config):
        """Test hover (0.2, 0, 0.1) near waypoint (0, 0, 0) returns it exactly."""
        origin = Vector3(0, 0, 0)
        result = snap_point(
            Vector3(0.2, 0, 0.1), [[origin, Vector3(5, 0, 0)]], config=snap_config
        )
        assert result.kind is SnapKind.POINT
        assert result.point == Vector3(0, 0, 0)

    @pytest.mark.unit
    def test_returns_copy(self, snap_config):
        """Test the snapped point is not the same object as the waypoint."""
        origin = Vector3(0, 0, 0)
        result = snap_point(Vector3(0.1, 0, 0), [[origin]], config=snap_config)
        assert result.point == origin
        assert result.point is not origin

    @pytest.mark.unit
    def test_camera_targets_are_candidates(self, snap_config):
        target = Vector3(3, 0, 3)
        result = snap_point(Vector3(3.2, 0, 3), camera_targets=[target], config=snap_config)
        assert result.kind is SnapKind.POINT
        assert result.point == target

    @pytest.mark.unit
    def test_nearest_candidate_wins(self):
        found = find_point_snap(
            Vector3(0.3, 0, 0), [Vector3(0, 0, 0), Vector3(0.5, 0, 0)], 0.5
        )
        assert found == Vector3(0.5, 0, 0)

    @pytest.mark.unit
    def test_threshold_is_strict(self):
        assert find_point_snap(Vector3(0.5, 0, 0), [Vector3(0, 0, 0)], 0.5) is None


class TestSegmentSnap:
    """Tests for the segment rule."""

    @pytest.mark.unit
    def test_snaps_onto_segment(self, existing_paths, snap_config):
        result = snap_point(Vector3(5, 0, 0.2), existing_paths, config=snap_config)
        assert result.kind is SnapKind.SEGMENT
        assert result.point.is_close(Vector3(5, 0, 0), 1e-12)

    @pytest.mark.unit
    def test_outside_line_threshold(self, existing_paths, snap_config):
        result = snap_point(Vector3(5, 0, 0.35), existing_paths, config=snap_config)
        assert result.kind is SnapKind.NONE

    @pytest.mark.unit
    def test_first_segment_wins(self):
        """Test the first qualifying segment is used, not the nearest."""
        paths = [
            [Vector3(0, 0, 0.25), Vector3(10, 0, 0.25)],
            [Vector3(0, 0, 0.05), Vector3(10, 0, 0.05)],
        ]
        found = find_segment_snap(Vector3(5, 0, 0), paths, 0.3)
        assert found.is_close(Vector3(5, 0, 0.25), 1e-12)

    @pytest.mark.unit
    def test_point_snap_has_priority(self, snap_config):
        """Test a nearby waypoint wins over an even closer segment."""
        paths = [
            [Vector3(0, 0, 0), Vector3(10, 0, 0)],
            [Vector3(5, 0, 0.45), Vector3(5, 0, 3)],
        ]
        result = snap_point(Vector3(5, 0, 0.05), paths, config=snap_config)
        assert result.kind is SnapKind.POINT
        assert result.point == Vector3(5, 0, 0.45)

    @pytest.mark.unit
    def test_projection_next_to_waypoint_settles_on_it(self, existing_paths, snap_config):
        """Test a projection landing within point range of a waypoint ends on the waypoint."""
        result = snap_point(Vector3(0.45, 0, 0.25), existing_paths, config=snap_config)
        assert result.kind is SnapKind.POINT
        assert result.point == Vector3(0, 0, 0)

    @pytest.mark.unit
    def test_projection_settles_on_earlier_segment(self, snap_config):
        """Test a projection within line range of an earlier edge moves onto it."""
        paths = [
            [Vector3(0, 0, 0), Vector3(10, 0, 0)],
            [Vector3(0, 0, 0.2), Vector3(10, 0, 0.2)],
        ]
        result = snap_point(Vector3(5, 0, 0.45), paths, config=snap_config)
        assert result.kind is SnapKind.SEGMENT
        assert result.point.is_close(Vector3(5, 0, 0), 1e-12)

    @pytest.mark.unit
    def test_axis_lock_onto_segment(self, snap_config):
        """Test an axis-locked point that lands near an edge is projected onto it."""
        paths = [[Vector3(0, 0, 0), Vector3(10, 0, 10)]]
        result = snap_point(
            Vector3(5.5, 0, 5.0), paths, last_point=Vector3(5.1, 0, 20), config=snap_config
        )
        assert result.kind is SnapKind.SEGMENT
        assert result.point.is_close(Vector3(5.05, 0, 5.05), 1e-9)


class TestAxisLock:
    """Tests for the axis-lock rule."""

    @pytest.mark.unit
    def test_locks_x(self, snap_config):
        result = snap_point(
            Vector3(3.3, 0, 7), last_point=Vector3(3, 0, 0), config=snap_config
        )
        assert result.kind is SnapKind.AXIS_X
        assert result.point == Vector3(3, 0, 7)

    @pytest.mark.unit
    def test_locks_z_when_x_far(self, snap_config):
        result = snap_point(
            Vector3(8, 0, 0.4), last_point=Vector3(3, 0, 0), config=snap_config
        )
        assert result.kind is SnapKind.AXIS_Z
        assert result.point == Vector3(8, 0, 0)

    @pytest.mark.unit
    def test_only_one_axis_locks(self):
        """Test x takes precedence when both axes are within the offset."""
        result = axis_lock(Vector3(3.2, 0, 0.2), Vector3(3, 0, 0), 0.5)
        assert result.kind is SnapKind.AXIS_X
        assert result.point == Vector3(3, 0, 0.2)

    @pytest.mark.unit
    def test_no_last_point(self):
        hover = Vector3(1, 0, 1)
        result = axis_lock(hover, None, 0.5)
        assert result.kind is SnapKind.NONE
        assert result.point == hover


class TestPassThrough:
    """Tests for the unchanged-point rule."""

    @pytest.mark.unit
    def test_empty_layout_returns_hover(self, snap_config):
        hover = Vector3(4.2, 0, -1.7)
        result = snap_point(hover, config=snap_config)
        assert result.kind is SnapKind.NONE
        assert not result.snapped
        assert result.point == hover

    @pytest.mark.unit
    def test_default_config(self):
        assert resolve_snap(Vector3(0.2, 0, 0.1), [[Vector3(0, 0, 0)]]) == Vector3(0, 0, 0)

    @pytest.mark.unit
    def test_custom_thresholds(self):
        """Test per-session thresholds change the outcome."""
        tight = SnapConfig(point_threshold=0.1, line_threshold=0.1, axis_offset=0.1)
        result = snap_point(Vector3(0.2, 0, 0.1), [[Vector3(0, 0, 0)]], config=tight)
        assert result.kind is SnapKind.NONE


class TestIdempotence:
    """Tests for snap(snap(p)) == snap(p)."""

    @pytest.mark.unit
    @pytest.mark.parametrize("hover", [
        Vector3(0.2, 0, 0.1),     # point
        Vector3(5, 0, 0.2),       # segment
        Vector3(20.1, 0, 5),      # segment on the vehicle path
        Vector3(13, 0, 4),        # nothing
        Vector3(0.45, 0, 0.25),   # projection lands near a waypoint
        Vector3(0.6, 0, 0.1),     # segment, outside point range
    ])
    def test_snap_twice_same_point(self, existing_paths, snap_config, hover):
        once = resolve_snap(hover, existing_paths, config=snap_config)
        twice = resolve_snap(once, existing_paths, config=snap_config)
        assert twice == once

    @pytest.mark.unit
    def test_axis_lock_idempotent(self, snap_config):
        last = Vector3(3, 0, 0)
        once = resolve_snap(Vector3(3.3, 0, 7), last_point=last, config=snap_config)
        twice = resolve_snap(once, last_point=last, config=snap_config)
        assert twice == once
