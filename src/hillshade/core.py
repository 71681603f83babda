"""
Shaded-relief rendering.

Every output pixel is the elevation gradient color of its input pixel with the
HSL lightness multiplied by the hillshade factor at that pixel. Pixels depend
only on the read-only input grid and the settings, so rows can be rendered in
independent bands on worker threads.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace

import numpy as np
from tqdm import tqdm

from .color_mapping import gradient_color, gradient_colormap
from .color_space import hsl_to_rgb, hsl_to_rgb_array, rgb_to_hsl, rgb_to_hsl_array
from .lighting import hillshade
from .surface import _check_kernel_fits, surface_gradient, surface_gradients

logger = logging.getLogger(__name__)

DEFAULT_BAND_ROWS = 256


def water_mask(elevation, settings):
    """
    Boolean mask of pixels that receive no light.

    Args:
        elevation: Elevation array
        settings: RenderSettings

    Returns:
        np.ndarray of bool, True where shading is skipped
    """
    elevation = np.asarray(elevation)
    if not settings.no_light_under_water:
        return np.zeros(elevation.shape, dtype=bool)
    return elevation <= settings.water_height


def apply_shade(rgba, shade):
    """
    Multiply the HSL lightness of colors by a shade factor.

    Args:
        rgba: uint8 array (..., 4)
        shade: Factor in [0, 1], broadcastable to rgba[..., 0]

    Returns:
        uint8 array (..., 4), fully opaque
    """
    hsl = rgb_to_hsl_array(rgba[..., :3])
    hsl[..., 2] *= shade
    shaded = np.empty_like(rgba)
    shaded[..., :3] = hsl_to_rgb_array(hsl)
    shaded[..., 3] = 255
    return shaded


def _render_band(raw, dzdx, dzdy, settings, rows, out):
    elevation = settings.elevation(raw[rows])
    rgba = gradient_colormap(elevation, settings.color_stops)

    lit = ~water_mask(elevation, settings)
    if np.any(lit):
        shade = hillshade(dzdx[rows][lit], dzdy[rows][lit], settings.light, settings.z_factor)
        rgba[lit] = apply_shade(rgba[lit], shade)

    out[rows] = rgba


def render_relief(raw, settings, workers=1, band_rows=DEFAULT_BAND_ROWS, progress=False):
    """
    Render a shaded-relief RGBA image from a raw 16-bit elevation grid.

    Args:
        raw: 2D array of raw samples (H, W), H and W >= 3
        settings: RenderSettings
        workers: Number of threads rendering row bands (default: 1)
        band_rows: Rows per band (default: 256)
        progress: Show a tqdm progress bar over bands

    Returns:
        np.ndarray: uint8 RGBA image of shape (H, W, 4)

    Raises:
        ValueError: If the grid is smaller than 3x3 or workers/band_rows < 1
    """
    raw = np.asarray(raw)
    if workers < 1 or band_rows < 1:
        raise ValueError("workers and band_rows must be at least 1")

    dzdx, dzdy = surface_gradients(raw)
    height, width = raw.shape
    logger.info(f"Rendering {width}x{height} relief with {workers} worker(s)")
    logger.info(
        f"Light pitch {settings.light_pitch_deg:.1f}, yaw {settings.light_yaw_deg:.1f}; "
        f"z factor {settings.z_factor:.6f}"
    )

    out = np.empty((height, width, 4), dtype=np.uint8)
    bands = [slice(start, min(start + band_rows, height)) for start in range(0, height, band_rows)]

    with tqdm(total=len(bands), desc="Rendering relief", disable=not progress) as pbar:
        if workers == 1:
            for rows in bands:
                _render_band(raw, dzdx, dzdy, settings, rows, out)
                pbar.update(1)
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(_render_band, raw, dzdx, dzdy, settings, rows, out)
                    for rows in bands
                ]
                for future in as_completed(futures):
                    future.result()
                    pbar.update(1)

    if settings.no_light_under_water:
        masked = np.sum(water_mask(settings.elevation(raw), settings))
        logger.info(f"Skipped shading for {masked} pixels at or below water height")
    logger.info(f"Rendered image with shape {out.shape}")
    return out


def render_pixel(raw, x, y, settings):
    """
    Render a single output pixel.

    Uses the scalar code path and gives the same color as render_relief at
    (x, y).

    Args:
        raw: 2D array of raw samples indexed [y, x]
        x: Column
        y: Row
        settings: RenderSettings

    Returns:
        (r, g, b, a) tuple

    Raises:
        ValueError: If the grid is smaller than 3x3 or (x, y) lies outside it
    """
    raw = np.asarray(raw)
    _check_kernel_fits(raw.shape)
    height, width = raw.shape
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) outside {width}x{height} grid")

    elevation = float(settings.elevation(raw[y, x]))
    color = gradient_color(elevation, settings.color_stops)

    if settings.no_light_under_water and elevation <= settings.water_height:
        return color

    dzdx, dzdy = surface_gradient(raw, x, y)
    shade = float(hillshade(dzdx, dzdy, settings.light, settings.z_factor))
    hsl = rgb_to_hsl(*color)
    r, g, b, _ = hsl_to_rgb(replace(hsl, l=hsl.l * shade))
    return r, g, b, 255
