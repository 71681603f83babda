"""
Directional light model for hillshading.

A LightSource is configured from a pitch (degrees above the horizon) and a
compass yaw (degrees clockwise from north). Slope and aspect come from the
surface gradient, and the shade factor is the Lambertian term

    cos(zenith) * cos(slope) + sin(zenith) * sin(slope) * cos(azimuth - aspect)

clamped to [0, 1].
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class LightSource:
    """Light direction given as pitch above the horizon and compass yaw."""

    pitch_deg: float = 45.0
    yaw_deg: float = 315.0

    @property
    def zenith(self) -> float:
        """Angle from vertical in radians."""
        return (90 - self.pitch_deg) * math.pi / 180

    @property
    def azimuth(self) -> float:
        """Compass yaw converted to a math angle (counter-clockwise from east) in radians."""
        return ((450 - self.yaw_deg) % 360) * math.pi / 180


def slope_aspect(dzdx, dzdy, z_factor=1.0):
    """
    Convert a surface gradient into slope and aspect.

    Args:
        dzdx: Gradient along x in raw sample units per pixel (scalar or array)
        dzdy: Gradient along y in raw sample units per pixel (scalar or array)
        z_factor: Raw units per pixel to elevation units per ground distance,
            i.e. heightScale / heightPixelRatio * outScale

    Returns:
        tuple: (slope, aspect) in radians

    Notes:
        On a flat surface the aspect is undefined and reported as 0. It has no
        effect there because the sin(slope) term of the shade factor is 0.
    """
    dzdx = np.asarray(dzdx, dtype=np.float64)
    dzdy = np.asarray(dzdy, dtype=np.float64)

    slope = np.arctan(z_factor * np.sqrt(dzdx * dzdx + dzdy * dzdy))
    aspect = np.where(
        dzdx != 0,
        np.arctan2(dzdy, -dzdx),
        np.where(dzdy > 0, math.pi / 2, np.where(dzdy < 0, 3 * math.pi / 2, 0.0)),
    )
    return slope, aspect


def hillshade(dzdx, dzdy, light, z_factor=1.0):
    """
    Compute the illumination factor of a surface under a light source.

    Args:
        dzdx: Gradient along x (scalar or array)
        dzdy: Gradient along y (scalar or array)
        light: LightSource
        z_factor: See slope_aspect

    Returns:
        Shade factor in [0, 1], same shape as the gradient inputs
    """
    slope, aspect = slope_aspect(dzdx, dzdy, z_factor)
    zenith = light.zenith
    shade = math.cos(zenith) * np.cos(slope) + math.sin(zenith) * np.sin(slope) * np.cos(
        light.azimuth - aspect
    )
    return np.clip(shade, 0.0, 1.0)
