"""
RGB <-> HSL conversion for relief coloring.

Hue lives on a 6-unit circle (one unit per 60 degree sector, values in [0, 6)),
saturation, lightness and alpha in [0, 1]. RGB channels are 0-255 integers.

Each conversion comes in two forms:
- scalar functions (rgb_to_hsl, hsl_to_rgb) working on one color
- array functions (rgb_to_hsl_array, hsl_to_rgb_array) working on (..., 3)
  arrays, used for whole images
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class HSLColor:
    """A color in HSL space with hue in [0, 6)."""

    h: float
    s: float
    l: float
    a: float = 1.0


def rgb_to_hsl_array(rgb):
    """
    Convert RGB colors to HSL.

    Hue is taken from whichever channel is smallest. Ties are resolved blue
    first, then red, so only gray colors (max == min) end up with hue 0 by
    default.

    Args:
        rgb: Array-like of shape (..., 3) with channels in 0-255

    Returns:
        np.ndarray of shape (..., 3) holding (h, s, l) as float64
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    hi = np.maximum(np.maximum(r, g), b)
    lo = np.minimum(np.minimum(r, g), b)
    span = hi - lo
    chromatic = span > 0
    safe_span = np.where(chromatic, span, 1.0)

    hue = np.select(
        [~chromatic, (b <= r) & (b <= g), (r <= g) & (r <= b)],
        [0.0, (g - r) / safe_span + 1, (b - g) / safe_span + 3],
        default=(r - b) / safe_span + 5,
    )

    # 255 - |hi + lo - 255| is only zero for pure black or white
    denom = np.where(chromatic, 255 - np.abs(hi + lo - 255), 1.0)
    saturation = np.where(chromatic, span / denom, 0.0)
    lightness = (hi + lo) / 2 / 255

    return np.stack([hue, saturation, lightness], axis=-1)


def hsl_to_rgb_array(hsl):
    """
    Convert HSL colors to 0-255 RGB.

    Args:
        hsl: Array-like of shape (..., 3) holding (h, s, l)

    Returns:
        np.ndarray of shape (..., 3) with dtype uint8
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    h, s, l = hsl[..., 0], hsl[..., 1], hsl[..., 2]

    half_chroma = s * (1 - np.abs(2 * l - 1)) / 2
    hi = l + half_chroma
    lo = l - half_chroma
    span = hi - lo

    # h < 1 falls in the first sector and h >= 5 in the last, as with a chain of
    # "h < 1, h < 2, ..." comparisons
    sector = np.clip(np.floor(h), 0, 5)
    conditions = [sector == k for k in range(5)]

    r = np.select(
        conditions,
        [hi, lo + span * (2 - h), lo, lo, lo + span * (h - 4)],
        default=hi,
    )
    g = np.select(
        conditions,
        [lo + span * h, hi, hi, lo + span * (4 - h), lo],
        default=lo,
    )
    b = np.select(
        conditions,
        [lo, lo, lo + span * (h - 2), hi, hi],
        default=lo + span * (6 - h),
    )

    rgb = np.stack([r, g, b], axis=-1)
    return np.clip(np.rint(rgb * 255), 0, 255).astype(np.uint8)


def rgb_to_hsl(r, g, b, a=255):
    """Convert one RGBA color (0-255 channels) to an HSLColor."""
    h, s, l = rgb_to_hsl_array([r, g, b])
    return HSLColor(float(h), float(s), float(l), a / 255)


def hsl_to_rgb(color):
    """Convert one HSLColor to an (r, g, b, a) tuple of 0-255 ints."""
    r, g, b = hsl_to_rgb_array([color.h, color.s, color.l])
    a = int(np.clip(np.rint(color.a * 255), 0, 255))
    return int(r), int(g), int(b), a
