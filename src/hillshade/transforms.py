"""
Raster transformation operations applied before rendering.
"""

import logging

import numpy as np
from scipy.ndimage import zoom


def resize_raster(out_scale=1.0):
    """
    Create a transform function that resizes a height map by a scale factor.

    The output has int(width * out_scale) x int(height * out_scale) pixels and
    is bilinearly interpolated. Integer input dtypes are kept (values are
    rounded and clipped to the dtype's range).

    Args:
        out_scale: Resize factor (default: 1.0, no change)

    Returns:
        function: A transform function taking and returning a 2D array
    """
    logger = logging.getLogger(__name__)

    if not out_scale > 0:
        raise ValueError(f"out_scale must be positive, got {out_scale}")

    def transform(raster_data):
        """
        Resize raster data using scipy.ndimage.zoom with linear interpolation.

        Args:
            raster_data: Input 2D raster numpy array

        Returns:
            np.ndarray: Resized array with the input's dtype
        """
        if out_scale == 1.0:
            return raster_data

        height, width = raster_data.shape
        target = (int(height * out_scale), int(width * out_scale))
        if target[0] < 1 or target[1] < 1:
            raise ValueError(f"Scaling {width}x{height} by {out_scale} leaves no pixels")

        logger.info(f"Resizing raster by factor {out_scale}")

        # Per-axis factors so zoom lands exactly on the truncated target shape
        factors = (target[0] / height, target[1] / width)
        resized = zoom(
            raster_data.astype(np.float64), zoom=factors, order=1, prefilter=False, mode="nearest"
        )

        if np.issubdtype(raster_data.dtype, np.integer):
            info = np.iinfo(raster_data.dtype)
            resized = np.clip(np.rint(resized), info.min, info.max)
        resized = resized.astype(raster_data.dtype)

        logger.info(f"Original shape: {raster_data.shape}")
        logger.info(f"Resized shape: {resized.shape}")
        return resized

    return transform
