"""Pytest configuration and fixtures for hillshade tests."""
import sys
from pathlib import Path

# Add src/ to Python path for imports
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

import pytest
import numpy as np

from hillshade.color_mapping import ColorStop
from hillshade.config import RenderSettings


@pytest.fixture
def gray_stops():
    """Black at 0 to white at 65536."""
    return (ColorStop(0.0, (0, 0, 0)), ColorStop(65536.0, (255, 255, 255)))


@pytest.fixture
def terrain_stops():
    """A small water/lowland/forest/rock/snow gradient."""
    return (
        ColorStop(0.0, (30, 70, 150)),
        ColorStop(10.0, (220, 210, 150)),
        ColorStop(400.0, (60, 120, 50)),
        ColorStop(1500.0, (130, 110, 90)),
        ColorStop(2500.0, (250, 250, 250)),
    )


@pytest.fixture
def make_settings(terrain_stops):
    """Factory for RenderSettings with test-friendly defaults."""

    def _make(**overrides):
        values = dict(
            min_height=0.0,
            max_height=3000.0,
            height_pixel_ratio=30.0,
            color_stops=terrain_stops,
            light_pitch_deg=45.0,
            light_yaw_deg=315.0,
        )
        values.update(overrides)
        return RenderSettings(**values)

    return _make


@pytest.fixture
def sample_raw():
    """A 40x50 uint16 grid with a smooth peak in the center."""
    x = np.linspace(-10, 10, 50)
    y = np.linspace(-10, 10, 40)
    X, Y = np.meshgrid(x, y)
    Z = 2000 + 40000 * np.exp(-(X**2 + Y**2) / 30)
    return Z.astype(np.uint16)
