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
Scene Frame
============

Draws one frame of an editing session: every visible conveyor, every
vehicle on its route, the flythrough camera while playback runs, and the
transient warning.

A frame depends on the previous one only through the smoothed vehicle
headings and the camera's target index and look-at point. Those are
returned as a SceneFrame and handed back on the next call:

    frame = SceneFrame()
    while running:
        state = session.advance(state, dt, settings)
        frame = render_session(SceneRenderer, state, settings, cache, frame)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .conveyor import render_camera, render_conveyor, render_vehicle
from .geometry_cache import GeometryCache
from .logging_config import get_logger
from .motion import Quaternion
from .path_geometry import Vector3
from .session import DrawMode, EditorState, visible_paths
from .settings import EditorSettings

if TYPE_CHECKING:
    from . import tool

logger = get_logger(__name__)


@dataclass(frozen=True)
class SceneFrame:
    """What one frame leaves behind for the next.

    Attributes:
        vehicle_rotations: Heading each vehicle was drawn with, in path order
        camera_target: Index of the next camera target
        camera_look_at: Smoothed look-at point; None while not playing
    """
    vehicle_rotations: Tuple[Quaternion, ...] = ()
    camera_target: int = 0
    camera_look_at: Optional[Vector3] = None


def render_session(
    renderer: "type[tool.Renderer]",
    state: EditorState,
    settings: Optional[EditorSettings] = None,
    cache: Optional[GeometryCache] = None,
    previous: Optional[SceneFrame] = None
) -> SceneFrame:
    """Hand everything visible in ``state`` to the renderer.

    Conveyors and vehicles include a renderable draft. The camera follows
    the first committed conveyor and is only placed while playback runs;
    a stopped session resets the target index so the next flythrough
    starts from the first target.

    Args:
        renderer: Renderer tool class
        state: Session state to draw
        settings: Session settings (defaults when None)
        cache: Geometry cache shared across frames (a throwaway one when None)
        previous: Frame returned by the previous call

    Returns:
        SceneFrame to pass as ``previous`` next time
    """
    settings = settings or EditorSettings()
    cache = cache if cache is not None else GeometryCache()
    previous = previous or SceneFrame()
    elapsed = state.animation.elapsed

    conveyors = visible_paths(state, DrawMode.CONVEYOR)
    for i, path in enumerate(conveyors):
        geometry = cache.get_conveyor(path, settings.belt)
        render_conveyor(renderer, geometry, elapsed, name=f"conveyor.{i}")

    rotations = []
    for i, path in enumerate(visible_paths(state, DrawMode.VEHICLE)):
        curve, _ = cache.get_curve(path, settings.motion.vehicle_radius)
        prior = previous.vehicle_rotations[i] if i < len(previous.vehicle_rotations) else None
        rotations.append(
            render_vehicle(renderer, curve, elapsed, settings.motion, f"vehicle.{i}", prior)
        )

    camera_target, camera_look_at = 0, None
    if state.animation.playing and state.conveyors:
        curve, _ = cache.get_curve(state.conveyors[0], settings.belt.bend_radius)
        camera_target, camera_look_at = render_camera(
            renderer,
            curve,
            state.animation.camera_t,
            state.camera_targets,
            previous.camera_target,
            previous.camera_look_at,
            settings.motion,
        )

    renderer.show_warning(state.warning_message)

    logger.debug(
        "Frame at %.2fs: %d conveyors, %d vehicles", elapsed, len(conveyors), len(rotations)
    )
    return SceneFrame(tuple(rotations), camera_target, camera_look_at)


__all__ = ["SceneFrame", "render_session"]
