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
Stripe Flow
============

Reference evaluation of the belt stripe shader. The shader runs on the GPU;
these functions compute the same values on the CPU so the attribute
contract of BeltMesh can be checked without a renderer.

Through a bend the inner edge is shorter than the outer one. The phase is
scaled by R / (R + lateral * halfWidth), R = 1 / curvature, so a stripe
spans the full belt width as a line perpendicular to travel. R is floored
at the full belt width: a bend tighter than that would put the inner edge
at or past the turning centre and flip the sign of the phase.
"""

import numpy as np

from .constants import MIN_COMPENSATED_CURVATURE, STRAIGHT_EFFECTIVE_RADIUS
from .settings import BeltSettings, StripeSettings


def effective_radius(curvature):
    """Turning radius used for compensation (very large on straights)."""
    curvature = np.asarray(curvature, dtype=float)
    safe = np.where(curvature > MIN_COMPENSATED_CURVATURE, curvature, 1.0)
    radius = np.where(
        curvature > MIN_COMPENSATED_CURVATURE, 1.0 / safe, STRAIGHT_EFFECTIVE_RADIUS
    )
    return radius if radius.ndim else float(radius)


def stripe_phase(d, total_length, time, speed, curvature, lateral, half_width):
    """Stripe phase of belt vertices at a given time.

    Accepts scalars or numpy arrays (e.g. BeltMesh attribute buffers).

    Args:
        d: Normalized arc-length coordinate
        total_length: Belt length
        time: Elapsed animation time (seconds)
        speed: Belt speed (units per second)
        curvature: Curvature at the vertex
        lateral: -1 left edge, +1 right edge
        half_width: Belt half-width

    Returns:
        Compensated distance along the belt
    """
    base = np.asarray(d, dtype=float) * total_length - time * speed
    radius = np.maximum(effective_radius(curvature), 2.0 * half_width)
    radius_at_point = radius + np.asarray(lateral, dtype=float) * half_width
    phase = base * radius / radius_at_point
    return phase if np.ndim(phase) else float(phase)


def scaled_stripe_phase(d, total_length, time, speed, curvature, compensation):
    """Stripe phase for the single-edge belt shader.

    The simpler shader has no lateral attribute; it stretches the
    coordinate by ``curvature * compensation`` instead of using the
    per-edge radius.
    """
    d = np.asarray(d, dtype=float)
    adjusted = d + np.asarray(curvature, dtype=float) * compensation * d
    phase = adjusted * total_length - time * speed
    return phase if np.ndim(phase) else float(phase)


def stripe_mask(phase, stripe_width, gap_width):
    """True where the phase falls on a stripe, False in a gap.

    Uses floor modulo (GLSL ``mod``), so negative phases wrap the same way
    the shader does.
    """
    cycle = stripe_width + gap_width
    mask = np.mod(np.asarray(phase, dtype=float), cycle) < stripe_width
    return mask if mask.ndim else bool(mask)


def belt_stripes(mesh, time, belt=None, stripes=None, lateral_compensation=True):
    """Stripe mask of every BeltMesh vertex at ``time``.

    Args:
        mesh: BeltMesh from generate_belt
        time: Elapsed animation time (seconds)
        belt: BeltSettings supplying belt speed and half-width
        stripes: StripeSettings supplying the pattern
        lateral_compensation: Use the per-edge radius correction; when
            False, the single-edge shader's curvature_compensation is used

    Returns:
        Boolean array, one entry per vertex
    """
    belt = belt or BeltSettings()
    stripes = stripes or StripeSettings()

    if lateral_compensation:
        phase = stripe_phase(
            mesh.path_position, mesh.total_length, time, belt.belt_speed,
            mesh.curvature, mesh.lateral, belt.half_width,
        )
    else:
        phase = scaled_stripe_phase(
            mesh.path_position, mesh.total_length, time, belt.belt_speed,
            mesh.curvature, stripes.curvature_compensation,
        )
    return np.atleast_1d(stripe_mask(phase, stripes.stripe_width, stripes.gap_width))


__all__ = [
    "effective_radius",
    "stripe_phase",
    "scaled_stripe_phase",
    "stripe_mask",
    "belt_stripes",
]
