"""
Raster input and image output for hillshade.

Height maps are read with rasterio, so any single-band 16-bit raster GDAL can
open (PNG, GeoTIFF, ...) is accepted. Rendered images are written as RGBA PNG
with Pillow.
"""

import logging
from pathlib import Path

import numpy as np
import rasterio
from PIL import Image

logger = logging.getLogger(__name__)


class InputFormatError(ValueError):
    """Raised when a height map is not a single-band unsigned 16-bit raster."""

    pass


def load_height_map(path) -> np.ndarray:
    """
    Load a grayscale 16-bit height map.

    Args:
        path: Path to the raster file

    Returns:
        2D uint16 numpy array indexed [row, col]

    Raises:
        InputFormatError: If the raster has more than one band or is not uint16
        OSError: If the file cannot be opened
    """
    path = Path(path)
    logger.info(f"Loading height map: {path}")

    try:
        ds = rasterio.open(path)
    except rasterio.errors.RasterioIOError as e:
        raise OSError(f"Cannot open height map {path}: {e}") from e

    with ds:
        if ds.count != 1:
            raise InputFormatError(f"Height map must have exactly one band, {path} has {ds.count}")
        if ds.dtypes[0] != "uint16":
            raise InputFormatError(f"Height map must be uint16, {path} is {ds.dtypes[0]}")
        data = ds.read(1)

    logger.info(f"  Shape: {data.shape}")
    logger.info(f"  Raw value range: {data.min()} to {data.max()}")
    return data


def write_image(path, rgba: np.ndarray) -> Path:
    """
    Write an RGBA image as PNG.

    Args:
        path: Output path; parent directories are created
        rgba: uint8 array of shape (height, width, 4)

    Returns:
        Path of the written file

    Raises:
        ValueError: If rgba is not an (H, W, 4) uint8 array
        OSError: If the file cannot be written
    """
    rgba = np.asarray(rgba)
    if rgba.ndim != 3 or rgba.shape[2] != 4 or rgba.dtype != np.uint8:
        raise ValueError(f"Expected (H, W, 4) uint8 image, got {rgba.shape} {rgba.dtype}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(rgba).save(path, format="PNG")
    logger.info(f"Saved {rgba.shape[1]}x{rgba.shape[0]} image to {path}")
    return path
