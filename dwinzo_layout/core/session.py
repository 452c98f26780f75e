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
Layout Editing Session
=======================

The editing session is a finite-state machine over an immutable
EditorState. Input events from the host are discrete values; each one is
applied with ``handle_event(state, event, settings)`` and produces a new
state. Nothing is mutated, so a renderer still drawing the previous state
never sees a half-applied edit.

Phases:
    IDLE             nothing being drawn in the active mode
    DRAWING          the active mode has a draft path with points
    DRAGGING_TARGET  a camera target is held by the pointer

Keyboard mapping done by the host:
    Enter / Escape -> FinishPath
    Delete         -> DeletePressed
    Ctrl down/up   -> CtrlChanged

Time moves only through ``advance(state, dt, settings)``, which expires
warnings and drives playback.

Example:
    >>> state = EditorState()
    >>> settings = EditorSettings()
    >>> for x in (0.0, 5.0):
    ...     state = handle_event(state, Clicked(Vector3(x, 0.0, 3.0)), settings)
    >>> state = handle_event(state, FinishPath(), settings)
    >>> len(state.conveyors)
    1
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from . import motion
from .collision import paths_collide
from .constants import COLLISION_WARNING
from .logging_config import get_logger
from .path import Path
from .path_geometry import Vector3
from .settings import EditorSettings
from .snapping import snap_point

logger = get_logger(__name__)


class DrawMode(Enum):
    """What a click places."""
    CONVEYOR = "CONVEYOR"
    VEHICLE = "VEHICLE"
    CAMERA = "CAMERA"


class Phase(Enum):
    """Editing phase of the session."""
    IDLE = "IDLE"
    DRAWING = "DRAWING"
    DRAGGING_TARGET = "DRAGGING_TARGET"


@dataclass(frozen=True)
class TransientWarning:
    """User-facing message that disappears at ``expires_at`` (session clock)."""
    message: str
    expires_at: float


# =============================================================================
# Events
# =============================================================================

@dataclass(frozen=True)
class PointerMoved:
    """Pointer hovering over the ground plane."""
    point: Vector3


@dataclass(frozen=True)
class Clicked:
    """Click on the ground plane."""
    point: Vector3


@dataclass(frozen=True)
class FinishPath:
    """Enter or Escape: commit the draft of the active mode."""


@dataclass(frozen=True)
class DeletePressed:
    """Delete: remove the selected camera target."""


@dataclass(frozen=True)
class ModeChanged:
    mode: DrawMode


@dataclass(frozen=True)
class TargetPressed:
    """Pointer down on a camera target: select it and start dragging."""
    index: int


@dataclass(frozen=True)
class TargetDragged:
    """Pointer moved while holding a camera target."""
    point: Vector3


@dataclass(frozen=True)
class TargetReleased:
    """Pointer up after dragging a camera target."""


@dataclass(frozen=True)
class CtrlChanged:
    pressed: bool


@dataclass(frozen=True)
class PlayToggled:
    """Start or stop playback."""


# =============================================================================
# State
# =============================================================================

@dataclass(frozen=True)
class EditorState:
    """Complete state of one editing session.

    Attributes:
        mode: Active drawing mode
        phase: Current FSM phase
        conveyors: Committed conveyor paths
        vehicles: Committed vehicle paths
        conveyor_draft: Conveyor path being drawn
        vehicle_draft: Vehicle path being drawn
        camera_targets: Camera targets in flythrough order
        hover: Snapped pointer position for the preview line
        selected_target: Index of the selected camera target
        drag_origin: Position of the held target when the drag started
        ctrl_pressed: Ctrl modifier state
        warning: Transient warning, if one is showing
        clock: Session time in seconds
        animation: Playback state
    """
    mode: DrawMode = DrawMode.CONVEYOR
    phase: Phase = Phase.IDLE
    conveyors: Tuple[Path, ...] = ()
    vehicles: Tuple[Path, ...] = ()
    conveyor_draft: Path = field(default_factory=Path)
    vehicle_draft: Path = field(default_factory=Path)
    camera_targets: Tuple[Vector3, ...] = ()
    hover: Optional[Vector3] = None
    selected_target: Optional[int] = None
    drag_origin: Optional[Vector3] = None
    ctrl_pressed: bool = False
    warning: Optional[TransientWarning] = None
    clock: float = 0.0
    animation: motion.AnimationState = field(default_factory=motion.AnimationState)

    def draft(self, mode: Optional[DrawMode] = None) -> Path:
        """Draft path of ``mode`` (active mode by default).

        Camera mode has no draft and returns an empty path.
        """
        mode = mode or self.mode
        if mode is DrawMode.CONVEYOR:
            return self.conveyor_draft
        if mode is DrawMode.VEHICLE:
            return self.vehicle_draft
        return Path()

    def committed(self, mode: Optional[DrawMode] = None) -> Tuple[Path, ...]:
        mode = mode or self.mode
        if mode is DrawMode.CONVEYOR:
            return self.conveyors
        if mode is DrawMode.VEHICLE:
            return self.vehicles
        return ()

    def all_paths(self) -> List[Path]:
        """Every committed and draft path in both drawing modes."""
        return [*self.conveyors, self.conveyor_draft, *self.vehicles, self.vehicle_draft]

    @property
    def last_point(self) -> Optional[Vector3]:
        """Reference point for axis lock in the active mode."""
        if self.mode is DrawMode.CAMERA:
            return self.camera_targets[-1] if self.camera_targets else None
        return self.draft().last_point

    @property
    def warning_message(self) -> Optional[str]:
        return self.warning.message if self.warning else None


def _with_draft(state: EditorState, draft: Path) -> EditorState:
    if state.mode is DrawMode.CONVEYOR:
        return replace(state, conveyor_draft=draft)
    return replace(state, vehicle_draft=draft)


def _with_committed(state: EditorState, paths: Tuple[Path, ...]) -> EditorState:
    if state.mode is DrawMode.CONVEYOR:
        return replace(state, conveyors=paths)
    return replace(state, vehicles=paths)


def _resting_phase(state: EditorState) -> Phase:
    return Phase.DRAWING if len(state.draft()) > 0 else Phase.IDLE


def _snap(
    state: EditorState,
    point: Vector3,
    settings: EditorSettings,
    exclude_target: Optional[int] = None
) -> Vector3:
    targets = [
        target for i, target in enumerate(state.camera_targets) if i != exclude_target
    ]
    return snap_point(
        point,
        state.all_paths(),
        targets,
        state.last_point,
        settings.snap,
    ).point


def _constrain_to_axis(origin: Vector3, point: Vector3) -> Vector3:
    """Keep only the larger of the x / z moves away from ``origin``."""
    if abs(point.x - origin.x) >= abs(point.z - origin.z):
        return Vector3(point.x, point.y, origin.z)
    return Vector3(origin.x, point.y, point.z)


# =============================================================================
# Transitions
# =============================================================================

def _on_pointer_moved(state: EditorState, event: PointerMoved, settings: EditorSettings) -> EditorState:
    if state.phase is Phase.DRAGGING_TARGET:
        return state
    return replace(state, hover=_snap(state, event.point, settings))


def _on_clicked(state: EditorState, event: Clicked, settings: EditorSettings) -> EditorState:
    if state.phase is Phase.DRAGGING_TARGET:
        return state

    snapped = _snap(state, event.point, settings)

    if state.mode is DrawMode.CAMERA:
        logger.debug("Camera target %d placed at %s", len(state.camera_targets), snapped)
        return replace(state, camera_targets=state.camera_targets + (snapped,))

    if snapped == state.draft().last_point:
        logger.debug("Ignored click on the last waypoint %s", snapped)
        return state

    draft = state.draft().append(snapped)

    if state.mode is DrawMode.CONVEYOR and draft.is_renderable:
        new_edge = draft.points[-2:]
        for i, conveyor in enumerate(state.conveyors):
            if paths_collide(new_edge, conveyor.points, settings.collision_width):
                logger.warning("Rejected conveyor point %s: overlaps conveyor %d", snapped, i)
                return replace(state, warning=TransientWarning(
                    COLLISION_WARNING, state.clock + settings.warning_duration
                ))

    return replace(_with_draft(state, draft), phase=Phase.DRAWING)


def _on_finish_path(state: EditorState, event: FinishPath, settings: EditorSettings) -> EditorState:
    if state.phase is Phase.DRAGGING_TARGET:
        return state

    if state.mode is not DrawMode.CAMERA:
        draft = state.draft()
        if draft.is_renderable:
            state = _with_committed(state, state.committed() + (draft.finish(),))
            logger.info(
                "%s path committed with %d points", state.mode.value.lower(), len(draft)
            )
        elif len(draft) > 0:
            logger.debug("Discarded %d-point draft", len(draft))
        state = _with_draft(state, Path())

    return replace(state, phase=Phase.IDLE, hover=None, selected_target=None)


def _on_delete_pressed(state: EditorState, event: DeletePressed, settings: EditorSettings) -> EditorState:
    index = state.selected_target
    if index is None:
        return state

    targets = state.camera_targets[:index] + state.camera_targets[index + 1:]
    logger.info("Camera target %d deleted", index)
    state = replace(state, camera_targets=targets, selected_target=None, drag_origin=None)
    if state.phase is Phase.DRAGGING_TARGET:
        state = replace(state, phase=_resting_phase(state))
    return state


def _on_mode_changed(state: EditorState, event: ModeChanged, settings: EditorSettings) -> EditorState:
    if state.phase is Phase.DRAGGING_TARGET or event.mode is state.mode:
        return state
    state = replace(state, mode=event.mode, hover=None)
    return replace(state, phase=_resting_phase(state))


def _on_target_pressed(state: EditorState, event: TargetPressed, settings: EditorSettings) -> EditorState:
    if not 0 <= event.index < len(state.camera_targets):
        raise IndexError(f"Camera target index {event.index} out of range")
    return replace(
        state,
        phase=Phase.DRAGGING_TARGET,
        selected_target=event.index,
        drag_origin=state.camera_targets[event.index],
        hover=None,
    )


def _on_target_dragged(state: EditorState, event: TargetDragged, settings: EditorSettings) -> EditorState:
    if state.phase is not Phase.DRAGGING_TARGET:
        return state

    index = state.selected_target
    point = _snap(state, event.point, settings, exclude_target=index)
    if state.ctrl_pressed:
        point = _constrain_to_axis(state.drag_origin, point)

    targets = list(state.camera_targets)
    targets[index] = point
    return replace(state, camera_targets=tuple(targets))


def _on_target_released(state: EditorState, event: TargetReleased, settings: EditorSettings) -> EditorState:
    if state.phase is not Phase.DRAGGING_TARGET:
        return state
    state = replace(state, drag_origin=None)
    return replace(state, phase=_resting_phase(state))


def _on_ctrl_changed(state: EditorState, event: CtrlChanged, settings: EditorSettings) -> EditorState:
    return replace(state, ctrl_pressed=event.pressed)


def _on_play_toggled(state: EditorState, event: PlayToggled, settings: EditorSettings) -> EditorState:
    if state.animation.playing:
        animation = state.animation.stop()
    else:
        animation = state.animation.play()
    logger.info("Playback %s", "started" if animation.playing else "stopped")
    return replace(state, animation=animation)


_HANDLERS = {
    PointerMoved: _on_pointer_moved,
    Clicked: _on_clicked,
    FinishPath: _on_finish_path,
    DeletePressed: _on_delete_pressed,
    ModeChanged: _on_mode_changed,
    TargetPressed: _on_target_pressed,
    TargetDragged: _on_target_dragged,
    TargetReleased: _on_target_released,
    CtrlChanged: _on_ctrl_changed,
    PlayToggled: _on_play_toggled,
}


def handle_event(state: EditorState, event, settings: Optional[EditorSettings] = None) -> EditorState:
    """Apply one input event.

    Args:
        state: Current session state
        event: One of the event dataclasses in this module
        settings: Session settings (defaults when None)

    Returns:
        New session state (``state`` itself when the event changes nothing)

    Raises:
        TypeError: If the event type is unknown
        IndexError: If TargetPressed names a target that does not exist
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unknown editor event: {event!r}")
    return handler(state, event, settings or EditorSettings())


def advance(state: EditorState, dt: float, settings: Optional[EditorSettings] = None) -> EditorState:
    """Move session time forward by dt seconds.

    Expires the transient warning and advances playback.

    Raises:
        ValueError: If dt is negative
    """
    if dt < 0:
        raise ValueError(f"Time step must be non-negative, got {dt}")
    settings = settings or EditorSettings()

    clock = state.clock + dt
    warning = state.warning
    if warning is not None and clock >= warning.expires_at:
        warning = None

    animation = motion.advance(state.animation, dt, settings.motion.camera_speed)
    return replace(state, clock=clock, warning=warning, animation=animation)


def preview_line(state: EditorState) -> Optional[Tuple[Vector3, ...]]:
    """Draft points followed by the hover point, or None when there is no preview."""
    draft = state.draft()
    if len(draft) == 0 or state.hover is None:
        return None
    return draft.points + (state.hover,)


def visible_paths(state: EditorState, mode: DrawMode) -> List[Path]:
    """Paths of ``mode`` that produce geometry: committed ones plus a renderable draft."""
    paths = list(state.committed(mode))
    draft = state.draft(mode)
    if draft.is_renderable:
        paths.append(draft)
    return paths


__all__ = [
    "DrawMode",
    "Phase",
    "TransientWarning",
    "PointerMoved",
    "Clicked",
    "FinishPath",
    "DeletePressed",
    "ModeChanged",
    "TargetPressed",
    "TargetDragged",
    "TargetReleased",
    "CtrlChanged",
    "PlayToggled",
    "EditorState",
    "handle_event",
    "advance",
    "preview_line",
    "visible_paths",
]
