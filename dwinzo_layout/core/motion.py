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
Motion Sampler
===============

Places moving entities along a SmoothCurve: material carriers riding a
belt, vehicles looping a route, and the camera on a flythrough.

Sampling is stateless. ``sample_motion(curve, t)`` always returns the same
position and forward direction for the same t, so any frame can be
reproduced. Smoothing between frames (slerp for vehicle heading, lerp for
the camera) belongs to the consumer and is provided here as plain helpers.

Frame progress is an explicit ``advance(state, dt, camera_speed)`` over an
immutable AnimationState, callable from a render loop or a test alike.

Orientation uses a look-at frame: z = -forward, x = up × z, y = z × x,
returned as a unit quaternion (w, x, y, z).
"""

import math
from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

import numpy as np

from .constants import CAMERA_LOOK_AHEAD, CAMERA_OFFSET, CAMERA_TARGET_REACH
from .logging_config import get_logger
from .path_geometry import UP, SmoothCurve, Vector3

logger = get_logger(__name__)

Quaternion = Tuple[float, float, float, float]

IDENTITY: Quaternion = (1.0, 0.0, 0.0, 0.0)

# Nudge applied when forward is parallel to up
_PARALLEL_NUDGE = 0.0001


@dataclass(frozen=True)
class MotionSample:
    """Position and travel direction at one curve parameter."""
    position: Vector3
    forward: Vector3
    t: float


def sample_motion(curve: SmoothCurve, t: float, reverse: bool = False) -> MotionSample:
    """Position and forward direction at t.

    Args:
        curve: Curve to travel along
        t: Arc-length parameter, clamped to [0, 1]
        reverse: Negate the forward direction for travel against the path

    Returns:
        MotionSample for the clamped t
    """
    t = max(0.0, min(1.0, t))
    forward = curve.tangent_at(t)
    if reverse:
        forward = -forward
    return MotionSample(curve.point_at(t), forward, t)


# =============================================================================
# Orientation
# =============================================================================

def _matrix_to_quaternion(m: np.ndarray) -> Quaternion:
    """Unit quaternion (w, x, y, z) from a 3x3 rotation matrix."""
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0:
        s = 0.5 / math.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (m[2, 1] - m[1, 2]) * s
        y = (m[0, 2] - m[2, 0]) * s
        z = (m[1, 0] - m[0, 1]) * s
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = 2.0 * math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2])
        w = (m[2, 1] - m[1, 2]) / s
        x = 0.25 * s
        y = (m[0, 1] + m[1, 0]) / s
        z = (m[0, 2] + m[2, 0]) / s
    elif m[1, 1] > m[2, 2]:
        s = 2.0 * math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2])
        w = (m[0, 2] - m[2, 0]) / s
        x = (m[0, 1] + m[1, 0]) / s
        y = 0.25 * s
        z = (m[1, 2] + m[2, 1]) / s
    else:
        s = 2.0 * math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1])
        w = (m[1, 0] - m[0, 1]) / s
        x = (m[0, 2] + m[2, 0]) / s
        y = (m[1, 2] + m[2, 1]) / s
        z = 0.25 * s
    q = np.array([w, x, y, z])
    q /= np.linalg.norm(q)
    return tuple(float(v) for v in q)


def look_rotation(forward: Vector3, up: Vector3 = UP) -> Quaternion:
    """Rotation that points an entity's -Z axis along ``forward``.

    Args:
        forward: Travel direction (need not be normalized)
        up: World up

    Returns:
        Unit quaternion (w, x, y, z); identity for a zero forward vector
    """
    z_axis = -np.array(forward.to_tuple(), dtype=float)
    if not np.any(z_axis):
        return IDENTITY
    z_axis /= np.linalg.norm(z_axis)
    up_axis = np.array(up.to_tuple(), dtype=float)

    x_axis = np.cross(up_axis, z_axis)
    if np.linalg.norm(x_axis) == 0:
        if abs(up_axis[2]) == 1:
            z_axis[0] += _PARALLEL_NUDGE
        else:
            z_axis[2] += _PARALLEL_NUDGE
        z_axis /= np.linalg.norm(z_axis)
        x_axis = np.cross(up_axis, z_axis)

    x_axis /= np.linalg.norm(x_axis)
    y_axis = np.cross(z_axis, x_axis)

    return _matrix_to_quaternion(np.column_stack([x_axis, y_axis, z_axis]))


def slerp(q0: Quaternion, q1: Quaternion, alpha: float) -> Quaternion:
    """Spherical interpolation between two unit quaternions (shortest arc)."""
    a = np.array(q0, dtype=float)
    b = np.array(q1, dtype=float)
    dot = float(np.dot(a, b))
    if dot < 0:
        b = -b
        dot = -dot

    if dot > 0.9995:
        result = a + (b - a) * alpha
    else:
        theta = math.acos(min(1.0, dot))
        sin_theta = math.sin(theta)
        result = (math.sin((1 - alpha) * theta) * a + math.sin(alpha * theta) * b) / sin_theta

    result /= np.linalg.norm(result)
    return tuple(float(v) for v in result)


def lerp(start: Vector3, end: Vector3, alpha: float) -> Vector3:
    """Linear position smoothing."""
    return start.lerp(end, alpha)


# =============================================================================
# Parameters
# =============================================================================

def carrier_offsets(length: float, gap: float) -> List[float]:
    """Starting parameters of material carriers spaced ``gap`` apart.

    ``ceil(length / gap)`` carriers; none on a zero-length belt.
    """
    if gap <= 0:
        raise ValueError(f"Carrier gap must be positive, got {gap}")
    if length <= 0:
        return []
    count = math.ceil(length / gap)
    return [i * gap / length for i in range(count)]


def carrier_parameter(offset: float, elapsed: float, speed: float, length: float) -> float:
    """Parameter of a carrier after ``elapsed`` seconds, wrapping at the end."""
    if length <= 0:
        return offset % 1.0
    return (offset + elapsed * speed / length) % 1.0


def vehicle_parameter(elapsed: float, speed: float, length: float) -> float:
    """Parameter of a vehicle looping its route at constant speed."""
    if length <= 0:
        return 0.0
    return ((elapsed * speed) % length) / length


# =============================================================================
# Camera
# =============================================================================

@dataclass(frozen=True)
class CameraPose:
    """Camera placement on a flythrough."""
    position: Vector3
    look_at: Vector3


def camera_pose(
    curve: SmoothCurve,
    t: float,
    offset: Sequence[float] = CAMERA_OFFSET,
    look_ahead: float = CAMERA_LOOK_AHEAD
) -> CameraPose:
    """Camera position and look-at point at t.

    The offset is expressed in the path frame: x along the binormal
    (tangent × up), y along world up, z backwards along the tangent.
    """
    t = max(0.0, min(1.0, t))
    point = curve.point_at(t)
    tangent = curve.tangent_at(t)
    binormal = tangent.cross(UP).normalized()

    ox, oy, oz = offset
    position = point + binormal * ox + UP * oy - tangent * oz
    return CameraPose(position, curve.point_at(min(t + look_ahead, 1.0)))


def next_target_index(
    position: Vector3,
    targets: Sequence[Vector3],
    current: int,
    reach_distance: float = CAMERA_TARGET_REACH
) -> int:
    """Index of the next camera target still ahead.

    Every target from ``current`` on that lies within reach_distance of
    the camera's path position counts as reached.
    """
    index = current
    for i in range(current, len(targets)):
        if position.distance_to(targets[i]) < reach_distance:
            index = i + 1
    return index


def camera_focus(position: Vector3, targets: Sequence[Vector3], index: int) -> Vector3:
    """Point the camera looks at: the next target, or its own path position."""
    if index < len(targets):
        return targets[index]
    return position


# =============================================================================
# Animation State
# =============================================================================

@dataclass(frozen=True)
class AnimationState:
    """Playback clock for belts, vehicles and the camera.

    Attributes:
        elapsed: Seconds of playback so far
        camera_t: Camera progress along its path, 0 to 1
        camera_finished: Set once the camera reaches the end
        playing: Nothing advances while False
    """
    elapsed: float = 0.0
    camera_t: float = 0.0
    camera_finished: bool = False
    playing: bool = False

    def play(self) -> "AnimationState":
        """Start playback from the beginning of the camera path."""
        return AnimationState(playing=True)

    def stop(self) -> "AnimationState":
        return replace(self, playing=False)


def advance(state: AnimationState, dt: float, camera_speed: float) -> AnimationState:
    """Advance playback by dt seconds.

    Camera progress grows by camera_speed * dt and stops at 1, where
    camera_finished is set and playback ends.
    """
    if not state.playing or dt <= 0:
        return state

    camera_t = min(1.0, state.camera_t + camera_speed * dt)
    finished = camera_t >= 1.0
    if finished and not state.camera_finished:
        logger.debug("Camera flythrough finished after %.2fs", state.elapsed + dt)

    return AnimationState(
        elapsed=state.elapsed + dt,
        camera_t=camera_t,
        camera_finished=finished,
        playing=not finished,
    )


__all__ = [
    "Quaternion",
    "IDENTITY",
    "MotionSample",
    "sample_motion",
    "look_rotation",
    "slerp",
    "lerp",
    "carrier_offsets",
    "carrier_parameter",
    "vehicle_parameter",
    "CameraPose",
    "camera_pose",
    "next_target_index",
    "camera_focus",
    "AnimationState",
    "advance",
]
