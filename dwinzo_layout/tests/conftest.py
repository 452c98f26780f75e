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
Pytest Configuration and Fixtures
==================================

Shared fixtures for the Dwinzo Layout test suite.
"""

from typing import List
from unittest.mock import MagicMock

import pytest

from dwinzo_layout.core import tool
from dwinzo_layout.core.path_geometry import Vector3
from dwinzo_layout.core.settings import EditorSettings, SnapConfig


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external deps)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow running tests")


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def l_shaped_waypoints() -> List[Vector3]:
    """Three waypoints forming a right-angle corner at (5, 0, 0).

    Returns:
        Waypoints (0,0,0) -> (5,0,0) -> (5,0,5)
    """
    return [Vector3(0, 0, 0), Vector3(5, 0, 0), Vector3(5, 0, 5)]


@pytest.fixture
def straight_waypoints() -> List[Vector3]:
    """Two waypoints along the x axis, 10 units apart."""
    return [Vector3(0, 0, 0), Vector3(10, 0, 0)]


@pytest.fixture
def zigzag_waypoints() -> List[Vector3]:
    """Five waypoints with alternating turns and uneven leg lengths."""
    return [
        Vector3(0, 0, 0),
        Vector3(4, 0, 0),
        Vector3(4, 0, 3),
        Vector3(9, 0, 3),
        Vector3(9.5, 0, 8),
    ]


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def snap_config() -> SnapConfig:
    """Default session snap thresholds (0.5 / 0.3 / 0.5)."""
    return SnapConfig()


@pytest.fixture
def editor_settings() -> EditorSettings:
    """Default editing session settings."""
    return EditorSettings()


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_renderer() -> MagicMock:
    """Mock Renderer tool class recording every call.

    Returns:
        MagicMock constrained to the Renderer interface
    """
    return MagicMock(spec=tool.Renderer)
