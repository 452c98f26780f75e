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
Editing Session Settings
=========================

Per-session configuration grouped by concern. Each group is a frozen
dataclass seeded from constants.py and validated on construction; a
session receives one EditorSettings and passes it explicitly to the
components that need it.

Example Usage:
    >>> settings = EditorSettings.from_dict({
    ...     "snap": {"point_threshold": 0.4},
    ...     "belt": {"width": 1.2},
    ... })
    >>> settings.snap.point_threshold
    0.4
    >>> settings.snap.line_threshold
    0.3
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Tuple

from . import constants


def _require_positive(owner: str, **values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{owner}.{name} must be positive, got {value}")


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


@dataclass(frozen=True)
class SnapConfig:
    """Snap thresholds for one editing session.

    Attributes:
        point_threshold: Snap to an existing waypoint/target within this distance
        line_threshold: Snap onto an existing segment within this distance
        axis_offset: Lock x or z to the last point within this offset
    """
    point_threshold: float = constants.SNAP_POINT_THRESHOLD
    line_threshold: float = constants.SNAP_LINE_THRESHOLD
    axis_offset: float = constants.SNAP_AXIS_OFFSET

    def __post_init__(self):
        _require_positive(
            "SnapConfig",
            point_threshold=self.point_threshold,
            line_threshold=self.line_threshold,
            axis_offset=self.axis_offset,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapConfig":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class BeltSettings:
    """Conveyor belt geometry settings.

    Attributes:
        width: Overall conveyor width
        height: Belt surface height relative to the ground plane
        bend_radius: Rounding radius for conveyor corners
        divisions: Sample intervals along the curve for belt and rails
        belt_width_factor: Half-width and rail offset as a fraction of width
        rail_radius_factor: Rails are re-rounded at bend_radius times this
        rail_thickness: Tube radius the rails are drawn with
        support_interval: Ground distance between support legs
        material_gap: Spacing of material units riding the belt
        belt_speed: Belt surface speed (units per second)
    """
    width: float = constants.CONVEYOR_WIDTH
    height: float = constants.CONVEYOR_HEIGHT
    bend_radius: float = constants.CONVEYOR_BEND_RADIUS
    divisions: int = constants.BELT_DIVISIONS
    belt_width_factor: float = constants.BELT_WIDTH_FACTOR
    rail_radius_factor: float = constants.RAIL_RADIUS_FACTOR
    rail_thickness: float = constants.RAIL_THICKNESS
    support_interval: float = constants.SUPPORT_INTERVAL
    material_gap: float = constants.MATERIAL_GAP
    belt_speed: float = constants.BELT_SPEED

    def __post_init__(self):
        _require_positive(
            "BeltSettings",
            width=self.width,
            bend_radius=self.bend_radius,
            divisions=self.divisions,
            belt_width_factor=self.belt_width_factor,
            rail_radius_factor=self.rail_radius_factor,
            rail_thickness=self.rail_thickness,
            support_interval=self.support_interval,
            material_gap=self.material_gap,
        )
        if self.belt_speed < 0:
            raise ValueError(f"BeltSettings.belt_speed must be >= 0, got {self.belt_speed}")

    @property
    def half_width(self) -> float:
        """Belt half-width."""
        return self.width * self.belt_width_factor

    @property
    def rail_offset(self) -> float:
        """Lateral distance of each rail from the centre line."""
        return self.width * self.belt_width_factor

    @property
    def rail_radius(self) -> float:
        """Rounding radius used for the rails."""
        return self.bend_radius * self.rail_radius_factor

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BeltSettings":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class StripeSettings:
    """Belt stripe texture settings consumed by the stripe shader."""
    stripe_width: float = constants.STRIPE_WIDTH
    gap_width: float = constants.STRIPE_GAP_WIDTH
    curvature_compensation: float = constants.STRIPE_CURVATURE_COMPENSATION

    def __post_init__(self):
        _require_positive(
            "StripeSettings",
            stripe_width=self.stripe_width,
            gap_width=self.gap_width,
        )

    @property
    def cycle_length(self) -> float:
        """One stripe plus one gap."""
        return self.stripe_width + self.gap_width

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StripeSettings":
        return cls(**_known_fields(cls, data))


@dataclass(frozen=True)
class MotionSettings:
    """Vehicle and camera motion settings.

    Attributes:
        vehicle_radius: Rounding radius for vehicle routes
        vehicle_speed: Vehicle speed (units per second)
        camera_speed: Flythrough progress per second (fraction of the path)
        camera_offset: Camera offset in the path frame (binormal, up, back)
        look_ahead: Parameter distance of the camera look-at point
        target_reach_distance: Distance at which a camera target counts as reached
        vehicle_smoothing: Per-frame slerp factor for vehicle heading
        camera_smoothing: Per-frame lerp factor for the camera look-at point
    """
    vehicle_radius: float = constants.VEHICLE_ROUNDING_RADIUS
    vehicle_speed: float = constants.VEHICLE_SPEED
    camera_speed: float = constants.CAMERA_SPEED
    camera_offset: Tuple[float, float, float] = constants.CAMERA_OFFSET
    look_ahead: float = constants.CAMERA_LOOK_AHEAD
    target_reach_distance: float = constants.CAMERA_TARGET_REACH
    vehicle_smoothing: float = constants.VEHICLE_SLERP_FACTOR
    camera_smoothing: float = constants.CAMERA_LERP_FACTOR

    def __post_init__(self):
        _require_positive(
            "MotionSettings",
            vehicle_radius=self.vehicle_radius,
            target_reach_distance=self.target_reach_distance,
        )
        if len(self.camera_offset) != 3:
            raise ValueError("MotionSettings.camera_offset must have 3 components")
        for name in ("vehicle_smoothing", "camera_smoothing"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"MotionSettings.{name} must be in (0, 1], got {value}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["camera_offset"] = list(self.camera_offset)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MotionSettings":
        values = _known_fields(cls, data)
        if "camera_offset" in values:
            values["camera_offset"] = tuple(float(v) for v in values["camera_offset"])
        return cls(**values)


@dataclass(frozen=True)
class EditorSettings:
    """Complete configuration for one editing session.

    Attributes:
        snap: Snap thresholds
        belt: Conveyor geometry
        stripes: Belt stripe texture
        motion: Vehicle and camera motion
        collision_width: Width used when testing conveyors for overlap
        warning_duration: Seconds a transient warning stays visible
    """
    snap: SnapConfig = field(default_factory=SnapConfig)
    belt: BeltSettings = field(default_factory=BeltSettings)
    stripes: StripeSettings = field(default_factory=StripeSettings)
    motion: MotionSettings = field(default_factory=MotionSettings)
    collision_width: float = constants.COLLISION_WIDTH
    warning_duration: float = constants.WARNING_DURATION

    def __post_init__(self):
        _require_positive(
            "EditorSettings",
            collision_width=self.collision_width,
            warning_duration=self.warning_duration,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "snap": self.snap.to_dict(),
            "belt": self.belt.to_dict(),
            "stripes": self.stripes.to_dict(),
            "motion": self.motion.to_dict(),
            "collision_width": self.collision_width,
            "warning_duration": self.warning_duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        kwargs: Dict[str, Any] = {}
        if "snap" in data:
            kwargs["snap"] = SnapConfig.from_dict(data["snap"])
        if "belt" in data:
            kwargs["belt"] = BeltSettings.from_dict(data["belt"])
        if "stripes" in data:
            kwargs["stripes"] = StripeSettings.from_dict(data["stripes"])
        if "motion" in data:
            kwargs["motion"] = MotionSettings.from_dict(data["motion"])
        for key in ("collision_width", "warning_duration"):
            if key in data:
                kwargs[key] = float(data[key])
        return cls(**kwargs)


__all__ = [
    "SnapConfig",
    "BeltSettings",
    "StripeSettings",
    "MotionSettings",
    "EditorSettings",
]
