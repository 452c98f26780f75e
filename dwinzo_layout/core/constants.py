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
Layout Editor Default Constants
================================

Defaults for snapping, belt geometry and motion. Sessions copy these into
their settings objects (see settings.py), so changing a session's values
never touches these module-level defaults.

Snap thresholds (ground-plane units):
    SNAP_POINT_THRESHOLD  - distance to an existing waypoint or target
    SNAP_LINE_THRESHOLD   - distance to an existing path segment
    SNAP_AXIS_OFFSET      - x/z offset from the last point that locks an axis
"""

# Snapping
SNAP_POINT_THRESHOLD = 0.5
SNAP_LINE_THRESHOLD = 0.3
SNAP_AXIS_OFFSET = 0.5

# Conveyor belt
CONVEYOR_WIDTH = 1.0
CONVEYOR_HEIGHT = -0.1
CONVEYOR_BEND_RADIUS = 0.8
BELT_DIVISIONS = 500
BELT_WIDTH_FACTOR = 0.45       # half-width and rail offset as a fraction of width
RAIL_RADIUS_FACTOR = 0.8       # rails are re-rounded at this fraction of the bend radius
SUPPORT_INTERVAL = 1.0
RAIL_THICKNESS = 0.025
MATERIAL_GAP = 1.5
BELT_SPEED = 1.2

# Stripe texture
STRIPE_WIDTH = 0.15
STRIPE_GAP_WIDTH = 0.15
STRIPE_CURVATURE_COMPENSATION = 0.3
STRAIGHT_EFFECTIVE_RADIUS = 10000.0
MIN_COMPENSATED_CURVATURE = 0.001

# Vehicles and camera
VEHICLE_ROUNDING_RADIUS = 5.0
VEHICLE_SPEED = 5.0
CAMERA_SPEED = 0.05
CAMERA_OFFSET = (0.0, 2.0, 0.0)
CAMERA_LOOK_AHEAD = 0.05
CAMERA_TARGET_REACH = 1.0
VEHICLE_SLERP_FACTOR = 0.2
CAMERA_LERP_FACTOR = 0.1

# Collision and feedback
COLLISION_WIDTH = 1.0
WARNING_DURATION = 3.0
COLLISION_WARNING = "Conveyors cannot overlap!"

__all__ = [
    "SNAP_POINT_THRESHOLD",
    "SNAP_LINE_THRESHOLD",
    "SNAP_AXIS_OFFSET",
    "CONVEYOR_WIDTH",
    "CONVEYOR_HEIGHT",
    "CONVEYOR_BEND_RADIUS",
    "BELT_DIVISIONS",
    "BELT_WIDTH_FACTOR",
    "RAIL_RADIUS_FACTOR",
    "SUPPORT_INTERVAL",
    "RAIL_THICKNESS",
    "MATERIAL_GAP",
    "BELT_SPEED",
    "STRIPE_WIDTH",
    "STRIPE_GAP_WIDTH",
    "STRIPE_CURVATURE_COMPENSATION",
    "STRAIGHT_EFFECTIVE_RADIUS",
    "MIN_COMPENSATED_CURVATURE",
    "VEHICLE_ROUNDING_RADIUS",
    "VEHICLE_SPEED",
    "CAMERA_SPEED",
    "CAMERA_OFFSET",
    "CAMERA_LOOK_AHEAD",
    "CAMERA_TARGET_REACH",
    "VEHICLE_SLERP_FACTOR",
    "CAMERA_LERP_FACTOR",
    "COLLISION_WIDTH",
    "WARNING_DURATION",
    "COLLISION_WARNING",
]
