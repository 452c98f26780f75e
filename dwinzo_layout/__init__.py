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
Dwinzo Layout - Industrial Site Layout Tools

Path geometry for an interactive 3D layout editor: conveyor belts,
vehicle routes and camera flythroughs drawn on a ground plane.
"""

__version__ = "0.1.0"

from . import core
from .core import (
    EditorSettings,
    GeometryCache,
    Path,
    Renderer,
    Vector3,
    build_conveyor_geometry,
    build_rounded_path,
    paths_collide,
    render_session,
    snap_point,
)
from .core.session import EditorState, handle_event, advance

__all__ = [
    "__version__",
    "core",
    "EditorSettings",
    "GeometryCache",
    "Path",
    "Renderer",
    "Vector3",
    "build_conveyor_geometry",
    "build_rounded_path",
    "paths_collide",
    "render_session",
    "snap_point",
    "EditorState",
    "handle_event",
    "advance",
]
