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
Conveyor Assembly
==================

Core operations that turn a committed path into everything a conveyor or
vehicle route needs on screen, place the flythrough camera, and hand the
result to a Renderer.

The renderer is passed in as a tool class (see core/tool.py):

    geometry = build_conveyor_geometry(path, settings.belt)
    render_conveyor(SceneRenderer, geometry, elapsed=state.elapsed)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Union

from .belt_surface import BeltMesh, generate_belt
from .logging_config import get_logger
from .motion import (
    Quaternion,
    camera_focus,
    camera_pose,
    carrier_offsets,
    carrier_parameter,
    lerp,
    look_rotation,
    next_target_index,
    sample_motion,
    slerp,
    vehicle_parameter,
)
from .path import Path
from .path_geometry import SmoothCurve, Vector3
from .rails import SupportAnchor, generate_rails, generate_supports
from .settings import BeltSettings, MotionSettings

if TYPE_CHECKING:
    from . import tool

logger = get_logger(__name__)

PathLike = Union[Path, Sequence[Vector3]]


@dataclass(frozen=True, eq=False)
class ConveyorGeometry:
    """Derived geometry of one conveyor.

    Attributes:
        curve: Smoothed centre line
        curvatures: Per-waypoint curvature of the centre line
        belt: Belt surface buffers
        rails: (left, right) rail curves
        supports: Support leg anchors
        carrier_offsets: Starting parameters of the material carriers
        settings: Settings the geometry was built with
    """
    curve: SmoothCurve
    curvatures: Tuple[float, ...]
    belt: BeltMesh
    rails: Tuple[SmoothCurve, SmoothCurve]
    supports: Tuple[SupportAnchor, ...]
    carrier_offsets: Tuple[float, ...]
    settings: BeltSettings

    @property
    def length(self) -> float:
        return self.curve.length


def _as_path(path: PathLike) -> Path:
    return path if isinstance(path, Path) else Path.from_points(path)


def build_conveyor_geometry(
    path: PathLike,
    settings: Optional[BeltSettings] = None
) -> ConveyorGeometry:
    """Build belt, rails, supports and carrier layout for a conveyor path.

    Args:
        path: Conveyor waypoints (at least two)
        settings: Belt settings (defaults when None)

    Returns:
        ConveyorGeometry

    Raises:
        ValueError: If the path has fewer than 2 waypoints
    """
    settings = settings or BeltSettings()
    curve, curvatures = _as_path(path).smooth_curve(settings.bend_radius)

    belt = generate_belt(curve, settings.half_width, settings.height, settings.divisions)
    rails = generate_rails(
        curve,
        settings.rail_offset,
        settings.rail_radius,
        settings.height,
        settings.divisions,
    )
    supports = generate_supports(curve, settings.rail_offset, settings.support_interval)
    offsets = carrier_offsets(curve.length, settings.material_gap)

    logger.debug(
        "Conveyor geometry: length %.3f, %d supports, %d carriers",
        curve.length, len(supports), len(offsets)
    )

    return ConveyorGeometry(
        curve=curve,
        curvatures=tuple(curvatures),
        belt=belt,
        rails=rails,
        supports=tuple(supports),
        carrier_offsets=tuple(offsets),
        settings=settings,
    )


def build_vehicle_curve(
    path: PathLike,
    settings: Optional[MotionSettings] = None
) -> SmoothCurve:
    """Smoothed route for a vehicle path.

    Raises:
        ValueError: If the path has fewer than 2 waypoints
    """
    settings = settings or MotionSettings()
    curve, _ = _as_path(path).smooth_curve(settings.vehicle_radius)
    return curve


def carrier_poses(
    geometry: ConveyorGeometry,
    elapsed: float
) -> List[Tuple[Vector3, Tuple[float, float, float, float]]]:
    """Position and rotation of every material carrier at ``elapsed``.

    Carriers ride on the belt surface, so they are lifted by the belt height.
    """
    poses = []
    for offset in geometry.carrier_offsets:
        t = carrier_parameter(offset, elapsed, geometry.settings.belt_speed, geometry.length)
        sample = sample_motion(geometry.curve, t)
        position = sample.position + Vector3(0.0, geometry.settings.height, 0.0)
        poses.append((position, look_rotation(sample.forward)))
    return poses


def render_conveyor(
    renderer: "type[tool.Renderer]",
    geometry: ConveyorGeometry,
    elapsed: float = 0.0,
    name: str = "conveyor"
) -> None:
    """Hand a conveyor to the renderer.

    Args:
        renderer: Renderer tool class
        geometry: Geometry from build_conveyor_geometry
        elapsed: Playback time used to place the material carriers
        name: Prefix for carrier entity names
    """
    renderer.draw_belt(geometry.belt)
    renderer.draw_rails(geometry.rails, geometry.settings.rail_thickness)
    renderer.place_supports(geometry.supports)
    for i, (position, rotation) in enumerate(carrier_poses(geometry, elapsed)):
        renderer.place_entity(f"{name}.carrier.{i}", position, rotation)


def render_vehicle(
    renderer: "type[tool.Renderer]",
    curve: SmoothCurve,
    elapsed: float,
    settings: Optional[MotionSettings] = None,
    name: str = "vehicle",
    previous: Optional[Quaternion] = None
) -> Quaternion:
    """Place a vehicle on its route at ``elapsed``.

    Args:
        renderer: Renderer tool class
        curve: Vehicle route
        elapsed: Playback time
        settings: Motion settings (defaults when None)
        name: Entity name
        previous: Rotation returned for the previous frame; when given the
                  new heading is approached by settings.vehicle_smoothing

    Returns:
        Rotation the vehicle was placed with
    """
    settings = settings or MotionSettings()
    t = vehicle_parameter(elapsed, settings.vehicle_speed, curve.length)
    sample = sample_motion(curve, t)
    rotation = look_rotation(sample.forward)
    if previous is not None:
        rotation = slerp(previous, rotation, settings.vehicle_smoothing)
    renderer.place_entity(name, sample.position, rotation)
    return rotation


def render_camera(
    renderer: "type[tool.Renderer]",
    curve: SmoothCurve,
    camera_t: float,
    targets: Sequence[Vector3] = (),
    target_index: int = 0,
    previous_look_at: Optional[Vector3] = None,
    settings: Optional[MotionSettings] = None,
    name: str = "camera"
) -> Tuple[int, Vector3]:
    """Place the flythrough camera at ``camera_t`` along ``curve``.

    The camera looks at the next camera target it has not yet passed, or
    ahead along the path once every target is reached. Targets count as
    reached when the camera's path position comes within
    settings.target_reach_distance.

    Returns:
        (target_index, look_at) to hand back on the next frame
    """
    settings = settings or MotionSettings()
    pose = camera_pose(curve, camera_t, settings.camera_offset, settings.look_ahead)
    index = next_target_index(
        curve.point_at(camera_t), targets, target_index, settings.target_reach_distance
    )
    focus = camera_focus(pose.look_at, targets, index)
    if previous_look_at is None:
        look_at = focus
    else:
        look_at = lerp(previous_look_at, focus, settings.camera_smoothing)

    renderer.place_entity(name, pose.position, look_rotation(look_at - pose.position))
    return index, look_at


__all__ = [
    "ConveyorGeometry",
    "build_conveyor_geometry",
    "build_vehicle_curve",
    "carrier_poses",
    "render_conveyor",
    "render_vehicle",
    "render_camera",
]
