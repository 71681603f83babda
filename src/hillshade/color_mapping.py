"""
Elevation-to-color gradient for relief rendering.

A gradient is an ascending list of ColorStop breakpoints. Elevations below the
first stop take the first stop's color, elevations above the last stop take the
last stop's color, and anything in between is blended in HSL space between the
two surrounding stops, with hue taking the short way around the color wheel.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .color_space import HSLColor, hsl_to_rgb, hsl_to_rgb_array, rgb_to_hsl_array

logger = logging.getLogger(__name__)

# Half of the 6-unit hue circle; hue differences beyond this wrap around
HUE_HALF_TURN = 3.0
HUE_FULL_TURN = 6.0


@dataclass(frozen=True)
class ColorStop:
    """An elevation threshold paired with an RGB color (0-255 channels)."""

    height: float
    color: Tuple[int, int, int]

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        r, g, b = self.color
        return int(r), int(g), int(b), 255


def validate_stops(stops: Sequence[ColorStop]) -> None:
    """
    Check that a stop list can drive a gradient.

    Args:
        stops: Sequence of ColorStop

    Raises:
        ValueError: If the list is empty, a height is NaN or infinite, or
            heights are not in ascending order
    """
    if len(stops) == 0:
        raise ValueError("Color stop list is empty")

    for stop in stops:
        if not np.isfinite(stop.height):
            raise ValueError(f"Color stop height must be finite, got {stop.height}")

    for prev, curr in zip(stops, stops[1:]):
        if curr.height < prev.height:
            raise ValueError(
                f"Color stops must be sorted by ascending height: "
                f"{curr.height} follows {prev.height}"
            )


def blend_hsl(prev_hsl, curr_hsl, f):
    """
    Blend two HSL colors, weighting the first by f and the second by 1 - f.

    Hue takes the shorter arc: when the hues are three or more units apart the
    smaller one is moved a full turn up before blending, and the result is
    reduced back into [0, 6).

    Args:
        prev_hsl: Array-like (..., 3) of (h, s, l)
        curr_hsl: Array-like (..., 3) of (h, s, l)
        f: Weight of prev_hsl, scalar or array broadcastable to (...)

    Returns:
        np.ndarray (..., 3) of blended (h, s, l)
    """
    prev_hsl = np.asarray(prev_hsl, dtype=np.float64)
    curr_hsl = np.asarray(curr_hsl, dtype=np.float64)
    f = np.asarray(f, dtype=np.float64)

    prev_h = prev_hsl[..., 0]
    curr_h = curr_hsl[..., 0]
    diff = prev_h - curr_h
    prev_h = np.where(diff < -HUE_HALF_TURN, prev_h + HUE_FULL_TURN, prev_h)
    curr_h = np.where(diff >= HUE_HALF_TURN, curr_h + HUE_FULL_TURN, curr_h)

    hue = np.mod(prev_h * f + curr_h * (1 - f), HUE_FULL_TURN)
    saturation = prev_hsl[..., 1] * f + curr_hsl[..., 1] * (1 - f)
    lightness = prev_hsl[..., 2] * f + curr_hsl[..., 2] * (1 - f)

    return np.stack([hue, saturation, lightness], axis=-1)


def gradient_color(elevation: float, stops: Sequence[ColorStop]) -> Tuple[int, int, int, int]:
    """
    Color a single elevation.

    Stops are scanned in list order and the first one at or above the
    elevation decides the color, so the list must be sorted ascending.

    Args:
        elevation: Elevation in the same units as the stop heights
        stops: Ascending sequence of ColorStop

    Returns:
        (r, g, b, a) tuple with a == 255

    Raises:
        ValueError: If stops is empty
    """
    if len(stops) == 0:
        raise ValueError("Color stop list is empty")

    for i, stop in enumerate(stops):
        if elevation <= stop.height:
            if i == 0:
                return stop.rgba

            prev = stops[i - 1]
            f = (stop.height - elevation) / (stop.height - prev.height)
            h, s, l = blend_hsl(rgb_to_hsl_array(prev.color), rgb_to_hsl_array(stop.color), f)
            return hsl_to_rgb(HSLColor(float(h), float(s), float(l), 1.0))

    return stops[-1].rgba


def gradient_colormap(elevation, stops: Sequence[ColorStop]) -> np.ndarray:
    """
    Color a grid of elevations with a stop gradient.

    Produces the same color per pixel as gradient_color, computed for the
    whole grid at once.

    Args:
        elevation: 2D array of elevations
        stops: Ascending sequence of ColorStop

    Returns:
        Array of RGBA colors with shape (height, width, 4) as uint8
    """
    validate_stops(stops)
    elevation = np.asarray(elevation, dtype=np.float64)
    logger.debug(f"Creating gradient colormap from {len(stops)} color stops")

    heights = np.array([stop.height for stop in stops], dtype=np.float64)
    stop_rgb = np.array([stop.color for stop in stops], dtype=np.uint8)
    stop_hsl = rgb_to_hsl_array(stop_rgb)

    # Index of the first stop with height >= elevation
    upper = np.searchsorted(heights, elevation, side="left")
    below_first = upper == 0
    above_last = upper == len(stops)
    between = ~(below_first | above_last)

    rgba = np.empty(elevation.shape + (4,), dtype=np.uint8)
    rgba[..., 3] = 255
    rgba[below_first, :3] = stop_rgb[0]
    rgba[above_last, :3] = stop_rgb[-1]

    if np.any(between):
        curr_idx = upper[between]
        prev_idx = curr_idx - 1
        e = elevation[between]
        f = (heights[curr_idx] - e) / (heights[curr_idx] - heights[prev_idx])
        blended = blend_hsl(stop_hsl[prev_idx], stop_hsl[curr_idx], f)
        rgba[between, :3] = hsl_to_rgb_array(blended)

    logger.debug(
        f"Gradient pixels: {np.sum(below_first)} below first stop, "
        f"{np.sum(between)} blended, {np.sum(above_last)} above last stop"
    )
    return rgba


def gradient_strip(stops: Sequence[ColorStop], width=256, height=32, margin=0.0):
    """
    Render the gradient itself as a horizontal strip, low to high.

    Args:
        stops: Ascending sequence of ColorStop
        width: Strip width in pixels (default: 256)
        height: Strip height in pixels (default: 32)
        margin: Fraction of the stop range added below the first and above the
            last stop, to show the clamped ends (default: 0.0)

    Returns:
        tuple: (rgba, elevations) where rgba is (height, width, 4) uint8 and
            elevations is the elevation sampled by each column
    """
    validate_stops(stops)
    low, high = stops[0].height, stops[-1].height
    pad = (high - low) * margin
    elevations = np.linspace(low - pad, high + pad, width)
    row = gradient_colormap(elevations[np.newaxis, :], stops)
    return np.repeat(row, height, axis=0), elevations
