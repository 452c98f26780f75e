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
Tests for the Conveyor Assembly
================================

Tests for building conveyor geometry and handing it to a Renderer.
"""

import pytest

from dwinzo_layout.core.conveyor import (
    build_conveyor_geometry,
    build_vehicle_curve,
    carrier_poses,
    render_camera,
    render_conveyor,
    render_vehicle,
)
from dwinzo_layout.core.path import Path
from dwinzo_layout.core.path_geometry import Vector3
from dwinzo_layout.core.motion import IDENTITY
from dwinzo_layout.core.settings import BeltSettings, MotionSettings


@pytest.fixture
def settings():
    """Belt settings with a coarse sampling for speed."""
    return BeltSettings(divisions=50)


@pytest.fixture
def straight_geometry(straight_waypoints, settings):
    return build_conveyor_geometry(Path.from_points(straight_waypoints), settings)


class TestBuildConveyorGeometry:
    """Tests for build_conveyor_geometry."""

    @pytest.mark.unit
    def test_straight_conveyor(self, straight_geometry):
        assert straight_geometry.length == pytest.approx(10.0)
        assert straight_geometry.belt.total_length == pytest.approx(10.0)
        assert straight_geometry.curvatures == (0.0, 0.0)

    @pytest.mark.unit
    def test_supports_and_carriers(self, straight_geometry):
        """Test 11 stations with two legs each and ceil(10 / 1.5) carriers."""
        assert len(straight_geometry.supports) == 22
        assert len(straight_geometry.carrier_offsets) == 7

    @pytest.mark.unit
    def test_rails_either_side(self, straight_geometry):
        left, right = straight_geometry.rails
        assert left.start.z > 0
        assert right.start.z < 0

    @pytest.mark.unit
    def test_accepts_point_list(self, l_shaped_waypoints, settings):
        geometry = build_conveyor_geometry(l_shaped_waypoints, settings)
        assert geometry.curvatures[1] > 0
        assert geometry.settings is settings

    @pytest.mark.unit
    def test_too_short_path(self, settings):
        with pytest.raises(ValueError):
            build_conveyor_geometry([Vector3(0, 0, 0)], settings)


class TestCarrierPoses:
    """Tests for carrier placement."""

    @pytest.mark.unit
    def test_carriers_ride_belt_height(self, straight_geometry):
        position, rotation = carrier_poses(straight_geometry, 0.0)[0]
        assert position.is_close(Vector3(0, -0.1, 0))
        assert len(rotation) == 4

    @pytest.mark.unit
    def test_carriers_move_with_belt(self, straight_geometry):
        position, _ = carrier_poses(straight_geometry, 1.0)[0]
        assert position.is_close(Vector3(1.2, -0.1, 0))


class TestRendering:
    """Tests for the Renderer hand-off."""

    @pytest.mark.unit
    def test_render_conveyor(self, mock_renderer, straight_geometry):
        render_conveyor(mock_renderer, straight_geometry, name="c1")

        mock_renderer.draw_belt.assert_called_once_with(straight_geometry.belt)
        mock_renderer.draw_rails.assert_called_once_with(straight_geometry.rails, 0.025)
        mock_renderer.place_supports.assert_called_once_with(straight_geometry.supports)
        assert mock_renderer.place_entity.call_count == 7
        assert mock_renderer.place_entity.call_args_list[0].args[0] == "c1.carrier.0"

    @pytest.mark.unit
    def test_render_vehicle(self, mock_renderer, straight_waypoints):
        curve = build_vehicle_curve(straight_waypoints)
        render_vehicle(mock_renderer, curve, elapsed=1.0)

        name, position, rotation = mock_renderer.place_entity.call_args.args
        assert name == "vehicle"
        assert position.is_close(Vector3(5, 0, 0))
        assert len(rotation) == 4

    @pytest.mark.unit
    def test_rail_thickness_from_settings(self, mock_renderer, straight_waypoints):
        geometry = build_conveyor_geometry(
            straight_waypoints, BeltSettings(divisions=20, rail_thickness=0.05)
        )
        render_conveyor(mock_renderer, geometry)

        assert mock_renderer.draw_rails.call_args.args[1] == 0.05

    @pytest.mark.unit
    def test_vehicle_heading_smoothed(self, mock_renderer, straight_waypoints):
        """Test the previous heading is approached, not replaced."""
        curve = build_vehicle_curve(straight_waypoints)
        target = render_vehicle(mock_renderer, curve, elapsed=1.0)
        smoothed = render_vehicle(mock_renderer, curve, elapsed=1.0, previous=IDENTITY)

        assert smoothed != pytest.approx(target)
        assert smoothed != pytest.approx(IDENTITY)
        assert mock_renderer.place_entity.call_args.args[2] == smoothed

    @pytest.mark.unit
    def test_full_vehicle_smoothing_snaps_heading(self, mock_renderer, straight_waypoints):
        curve = build_vehicle_curve(straight_waypoints)
        target = render_vehicle(mock_renderer, curve, elapsed=1.0)
        rotation = render_vehicle(
            mock_renderer, curve, elapsed=1.0,
            settings=MotionSettings(vehicle_smoothing=1.0),
            previous=IDENTITY,
        )

        assert rotation == pytest.approx(target)


class TestRenderCamera:
    """Tests for placing the flythrough camera."""

    @pytest.fixture
    def curve(self, straight_waypoints):
        return build_vehicle_curve(straight_waypoints)

    @pytest.mark.unit
    def test_camera_above_path(self, mock_renderer, curve):
        index, look_at = render_camera(mock_renderer, curve, 0.5)

        name, position, rotation = mock_renderer.place_entity.call_args.args
        assert name == "camera"
        assert position.is_close(Vector3(5, 2, 0))
        assert len(rotation) == 4
        assert index == 0
        assert look_at.is_close(Vector3(5.5, 0, 0))

    @pytest.mark.unit
    def test_reached_target_skipped(self, mock_renderer, curve):
        """Test a target within reach hands focus to the next one."""
        targets = [Vector3(5.5, 0, 0), Vector3(8, 0, 0)]
        index, look_at = render_camera(mock_renderer, curve, 0.5, targets=targets)

        assert index == 1
        assert look_at.is_close(Vector3(8, 0, 0))

    @pytest.mark.unit
    def test_look_at_smoothed(self, mock_renderer, curve):
        targets = [Vector3(8, 0, 0)]
        _, look_at = render_camera(
            mock_renderer, curve, 0.5, targets=targets, previous_look_at=Vector3(0, 0, 0)
        )

        assert look_at.is_close(Vector3(0.8, 0, 0))

    @pytest.mark.unit
    def test_custom_offset(self, mock_renderer, curve):
        settings = MotionSettings(camera_offset=(0.0, 4.0, 1.0))
        render_camera(mock_renderer, curve, 0.5, settings=settings, name="cam")

        name, position, _ = mock_renderer.place_entity.call_args.args
        assert name == "cam"
        assert position.is_close(Vector3(4, 4, 0))
