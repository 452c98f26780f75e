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
Interface definitions for the render boundary.

The core never talks to a 3D engine directly. Host integrations implement
these interfaces as classes of classmethods and pass the class itself into
core functions:

    Layer 1: Core (dwinzo_layout.core) - geometry, snapping, session logic
    Layer 2: Tool (host integration) - scene graph, meshes, shaders
    Layer 3: UI - panels, buttons, input listeners

Usage:
    from typing import TYPE_CHECKING

    if TYPE_CHECKING:
        from dwinzo_layout.core import tool

    def render_conveyor(renderer: type[tool.Renderer], geometry):
        renderer.draw_belt(geometry.belt)
"""
from typing import TYPE_CHECKING, Optional, Sequence, Tuple
import abc

if TYPE_CHECKING:
    from .belt_surface import BeltMesh
    from .path_geometry import SmoothCurve, Vector3
    from .rails import SupportAnchor


def interface(cls):
    """
    Decorator that converts all public methods to @classmethod @abstractmethod.

    Tool classes are passed as types (not instances) to core functions, and
    all methods are called as class methods.

    Example:
        @interface
        class Renderer:
            def draw_belt(cls, mesh): pass  # Becomes @classmethod @abstractmethod

        # In the host integration:
        class SceneRenderer(core.tool.Renderer):
            @classmethod
            def draw_belt(cls, mesh):
                upload_buffers(mesh)

        # In core function:
        def render_conveyor(renderer: type[tool.Renderer], geometry):
            renderer.draw_belt(geometry.belt)
    """
    for name, method in list(cls.__dict__.items()):
        if callable(method) and not name.startswith('_'):
            setattr(cls, name, classmethod(abc.abstractmethod(method)))
    cls.__original_qualname__ = cls.__qualname__
    return cls


# =============================================================================
# Render Boundary
# =============================================================================

@interface
class Renderer:
    """
    Interface for the host scene graph.

    Receives render-ready geometry produced by the core. Implementations own
    GPU buffers, materials and model instances; the core only hands over
    values and never reads anything back.
    """

    def draw_belt(cls, mesh: "BeltMesh") -> None:
        """
        Upload a belt surface.

        Args:
            mesh: Vertex buffers (position, arc-length coordinate, curvature,
                  lateral sign) ready for the stripe shader.
        """
        pass

    def draw_rails(cls, rails: Tuple["SmoothCurve", "SmoothCurve"], thickness: float) -> None:
        """
        Draw the left and right rails as tubes along the given curves.

        Args:
            rails: (left, right) rail curves
            thickness: Tube radius
        """
        pass

    def place_supports(cls, anchors: Sequence["SupportAnchor"]) -> None:
        """
        Instance support legs at the given anchors.

        Args:
            anchors: Support anchor points along both rails
        """
        pass

    def place_entity(
        cls,
        name: str,
        position: "Vector3",
        rotation: Tuple[float, float, float, float]
    ) -> None:
        """
        Position a moving model (material carrier, vehicle, camera).

        Args:
            name: Stable entity name chosen by the caller
            position: World position
            rotation: Unit quaternion (w, x, y, z)
        """
        pass

    def show_warning(cls, message: Optional[str]) -> None:
        """
        Show a transient user-facing warning, or clear it when None.

        Args:
            message: Warning text, or None to hide the current warning
        """
        pass


__all__ = ["interface", "Renderer"]
