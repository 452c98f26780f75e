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
Dwinzo Layout Core Module

Path geometry and editing logic for the layout editor.
This module contains:
- Interface definitions (tool.py) for the render boundary
- Curve building, belt surfaces, rails and supports
- Snapping, collision testing and motion sampling
- The editing session state machine and per-frame scene drawing

Architecture:
    Layer 1: Core (this module) - Pure Python geometry and session logic
    Layer 2: Tool (host integration) - scene graph and shader implementations
    Layer 3: UI - panels, buttons and input listeners
"""

# Import logging configuration first (no dependencies)
from .logging_config import get_logger, setup_logging

# Import interface definitions (no external dependencies)
from .tool import interface, Renderer

from . import constants
from .settings import (
    SnapConfig,
    BeltSettings,
    StripeSettings,
    MotionSettings,
    EditorSettings,
)
from .path_geometry import (
    Vector3,
    Waypoint,
    SmoothCurve,
    LineSegment,
    QuadraticBlend,
    build_rounded_path,
)
from .path import Path
from .belt_surface import BeltMesh, generate_belt
from .stripe_flow import stripe_phase, stripe_mask, belt_stripes
from .rails import SupportAnchor, generate_rails, generate_supports
from .snapping import SnapKind, SnapResult, snap_point, resolve_snap
from .collision import CollisionSegment, create_segments, paths_collide
from .motion import (
    MotionSample,
    sample_motion,
    look_rotation,
    slerp,
    AnimationState,
)
from .conveyor import (
    ConveyorGeometry,
    build_conveyor_geometry,
    build_vehicle_curve,
    render_conveyor,
    render_vehicle,
    render_camera,
)
from .geometry_cache import GeometryCache
from . import session
from .scene import SceneFrame, render_session

logger = get_logger(__name__)

__all__ = [
    "get_logger",
    "setup_logging",
    "interface",
    "Renderer",
    "constants",
    "SnapConfig",
    "BeltSettings",
    "StripeSettings",
    "MotionSettings",
    "EditorSettings",
    "Vector3",
    "Waypoint",
    "SmoothCurve",
    "LineSegment",
    "QuadraticBlend",
    "build_rounded_path",
    "Path",
    "BeltMesh",
    "generate_belt",
    "stripe_phase",
    "stripe_mask",
    "belt_stripes",
    "SupportAnchor",
    "generate_rails",
    "generate_supports",
    "SnapKind",
    "SnapResult",
    "snap_point",
    "resolve_snap",
    "CollisionSegment",
    "create_segments",
    "paths_collide",
    "MotionSample",
    "sample_motion",
    "look_rotation",
    "slerp",
    "AnimationState",
    "ConveyorGeometry",
    "build_conveyor_geometry",
    "build_vehicle_curve",
    "render_conveyor",
    "render_vehicle",
    "render_camera",
    "GeometryCache",
    "session",
    "SceneFrame",
    "render_session",
]
