"""
Tests for the light model.
"""

import math

import pytest
import numpy as np

from hillshade.lighting import LightSource, hillshade, slope_aspect


class TestLightSource:
    """Tests for LightSource angles."""

    def test_overhead_light(self):
        """Pitch 90 puts the light at the zenith."""
        assert LightSource(90, 0).zenith == 0.0

    def test_zenith(self):
        """Zenith is the complement of pitch."""
        assert LightSource(30, 0).zenith == pytest.approx(math.radians(60))

    def test_azimuth_compass_to_math(self):
        """Compass north maps to pi/2, east to 0, and 315 (NW) to 3pi/4."""
        assert LightSource(45, 0).azimuth == pytest.approx(math.pi / 2)
        assert LightSource(45, 90).azimuth == pytest.approx(0.0)
        assert LightSource(45, 315).azimuth == pytest.approx(3 * math.pi / 4)
        assert LightSource(45, 450).azimuth == pytest.approx(0.0)


class TestSlopeAspect:
    """Tests for slope_aspect."""

    def test_flat(self):
        """Flat ground has zero slope and aspect 0."""
        slope, aspect = slope_aspect(0.0, 0.0)
        assert slope == 0.0
        assert aspect == 0.0

    def test_vertical_gradient_aspects(self):
        """With dz/dx = 0 the aspect is pi/2 or 3pi/2 by the sign of dz/dy."""
        _, up = slope_aspect(0.0, 2.0)
        _, down = slope_aspect(0.0, -2.0)
        assert up == pytest.approx(math.pi / 2)
        assert down == pytest.approx(3 * math.pi / 2)

    def test_general_aspect(self):
        """Aspect is atan2(dz/dy, -dz/dx)."""
        _, aspect = slope_aspect(1.0, 1.0)
        assert aspect == pytest.approx(math.atan2(1.0, -1.0))

    def test_slope_uses_z_factor(self):
        """Slope is atan(z_factor * |gradient|)."""
        slope, _ = slope_aspect(3.0, 4.0, z_factor=0.2)
        assert slope == pytest.approx(math.atan(1.0))


class TestHillshade:
    """Tests for the shade factor."""

    @pytest.mark.parametrize("yaw", [0, 45, 137, 315])
    @pytest.mark.parametrize("pitch", [0, 20, 45, 90])
    def test_flat_equals_cos_zenith(self, pitch, yaw):
        """On a flat surface the shade is cos(zenith) whatever the azimuth."""
        light = LightSource(pitch, yaw)
        assert float(hillshade(0.0, 0.0, light)) == math.cos(light.zenith)

    def test_always_in_unit_range(self):
        """Shade stays in [0, 1] for random gradients and lights."""
        rng = np.random.default_rng(0)
        dzdx = rng.normal(scale=500, size=2000)
        dzdy = rng.normal(scale=500, size=2000)
        for pitch in (-30, 0, 15, 60, 90, 120):
            for yaw in (0, 90, 200, 315):
                shade = hillshade(dzdx, dzdy, LightSource(pitch, yaw), z_factor=0.05)
                assert np.all(shade >= 0)
                assert np.all(shade <= 1)

    def test_slope_facing_light_is_brighter(self):
        """A slope facing the light is lit more than the opposite slope."""
        light = LightSource(45, 270)  # from the west
        # Rising toward +x (east) means the slope faces west
        west_facing = float(hillshade(10.0, 0.0, light, z_factor=0.1))
        east_facing = float(hillshade(-10.0, 0.0, light, z_factor=0.1))
        assert west_facing > east_facing

    def test_surface_normal_to_light(self):
        """A slope tilted exactly toward the light gets full illumination."""
        light = LightSource(45, 270)
        # slope of 45 degrees: z_factor * |g| = 1
        shade = float(hillshade(1.0, 0.0, light, z_factor=1.0))
        assert shade == pytest.approx(1.0)

    def test_array_shape(self):
        """Array inputs give array output of the same shape."""
        shade = hillshade(np.zeros((4, 5)), np.ones((4, 5)), LightSource())
        assert shade.shape == (4, 5)
