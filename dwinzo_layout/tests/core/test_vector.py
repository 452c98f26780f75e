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
Tests for Vector3
==================

Tests for the immutable 3D vector used for waypoints and tangents.
"""

import math

import pytest

from dwinzo_layout.core.path_geometry import UP, ZERO, Vector3


class TestConstruction:
    """Tests for building vectors."""

    @pytest.mark.unit
    def test_of_triple(self):
        """Test building from an (x, y, z) tuple."""
        assert Vector3.of((1, 2, 3)) == Vector3(1.0, 2.0, 3.0)

    @pytest.mark.unit
    def test_of_ground_pair(self):
        """Test that an (x, z) pair lands on the ground plane."""
        assert Vector3.of((4, 7)) == Vector3(4.0, 0.0, 7.0)

    @pytest.mark.unit
    def test_of_vector_returns_same(self):
        """Test that an existing vector passes through."""
        v = Vector3(1, 0, 1)
        assert Vector3.of(v) is v

    @pytest.mark.unit
    def test_frozen(self):
        """Test that coordinates cannot be changed in place."""
        v = Vector3(1, 2, 3)
        with pytest.raises(AttributeError):
            v.x = 5.0

    @pytest.mark.unit
    def test_copy_is_distinct_but_equal(self):
        """Test that copy returns an independently owned equal vector."""
        v = Vector3(1, 2, 3)
        c = v.copy()
        assert c == v
        assert c is not v


class TestArithmetic:
    """Tests for operators and products."""

    @pytest.mark.unit
    def test_add_sub(self):
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        assert a + b == Vector3(5, 7, 9)
        assert b - a == Vector3(3, 3, 3)

    @pytest.mark.unit
    def test_scale(self):
        v = Vector3(1, -2, 3)
        assert v * 2 == Vector3(2, -4, 6)
        assert 2 * v == Vector3(2, -4, 6)
        assert v / 2 == Vector3(0.5, -1, 1.5)
        assert -v == Vector3(-1, 2, -3)

    @pytest.mark.unit
    def test_length(self):
        """Test 3-4-5 triangle length."""
        assert Vector3(3, 0, 4).length == pytest.approx(5.0)
        assert Vector3(3, 0, 4).length_squared == pytest.approx(25.0)

    @pytest.mark.unit
    def test_normalized_zero_vector(self):
        """Test that a zero vector normalizes to zero instead of failing."""
        assert ZERO.normalized() == ZERO

    @pytest.mark.unit
    def test_cross_up_with_x_points_to_negative_z(self):
        """Test the ground normal convention used for belt edges."""
        assert UP.cross(Vector3(1, 0, 0)) == Vector3(0, 0, -1)

    @pytest.mark.unit
    def test_dot(self):
        assert Vector3(1, 2, 3).dot(Vector3(4, 5, 6)) == pytest.approx(32.0)


class TestGeometry:
    """Tests for angles, distances and interpolation."""

    @pytest.mark.unit
    def test_angle_right_angle(self):
        assert Vector3(1, 0, 0).angle_to(Vector3(0, 0, 1)) == pytest.approx(math.pi / 2)

    @pytest.mark.unit
    def test_angle_parallel(self):
        assert Vector3(2, 0, 0).angle_to(Vector3(5, 0, 0)) == pytest.approx(0.0)

    @pytest.mark.unit
    def test_angle_with_zero_vector(self):
        """Test that a zero vector reports a right angle."""
        assert ZERO.angle_to(Vector3(1, 0, 0)) == pytest.approx(math.pi / 2)

    @pytest.mark.unit
    def test_distance(self):
        assert Vector3(0, 0, 0).distance_to(Vector3(0, 3, 4)) == pytest.approx(5.0)

    @pytest.mark.unit
    def test_lerp_midpoint(self):
        assert Vector3(0, 0, 0).lerp(Vector3(2, 4, 6), 0.5) == Vector3(1, 2, 3)

    @pytest.mark.unit
    def test_with_y_and_ground(self):
        v = Vector3(1, 2, 3)
        assert v.with_y(-0.1) == Vector3(1, -0.1, 3)
        assert v.ground() == (1, 3)

    @pytest.mark.unit
    def test_is_close(self):
        assert Vector3(1, 1, 1).is_close(Vector3(1 + 1e-12, 1, 1))
        assert not Vector3(1, 1, 1).is_close(Vector3(1.1, 1, 1))
