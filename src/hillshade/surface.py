"""
Surface gradient estimation from a raw elevation grid.

Gradients are estimated with the 3x3 Horn (Sobel-like) kernel on raw sample
units. Pixels on the outer rows and columns do not shrink or pad the kernel:
their kernel center is moved one step inward, so an edge pixel reports the
gradient of its inner neighbour.

Kernel layout around the center E:

    A B C
    D E F
    G H I

    dz/dx = ((C + 2F + I) - (A + 2D + G)) / 8
    dz/dy = ((G + 2H + I) - (A + 2B + C)) / 8
"""

import logging

import numpy as np
from scipy.ndimage import sobel

logger = logging.getLogger(__name__)

# Smallest grid side that holds a full kernel
KERNEL_SIZE = 3


def _check_kernel_fits(shape):
    if len(shape) != 2:
        raise ValueError(f"Elevation grid must be 2D, got shape {shape}")
    height, width = shape
    if height < KERNEL_SIZE or width < KERNEL_SIZE:
        raise ValueError(f"Elevation grid must be at least 3x3, got {width}x{height}")


def _nudge(index, size):
    if index == 0:
        return 1
    if index == size - 1:
        return size - 2
    return index


def surface_gradient(raw, x, y):
    """
    Estimate (dz/dx, dz/dy) at one pixel.

    Args:
        raw: 2D array of raw elevation samples indexed [y, x]
        x: Column of the pixel
        y: Row of the pixel

    Returns:
        tuple: (dzdx, dzdy) as floats in raw sample units per pixel

    Raises:
        ValueError: If the grid is smaller than 3x3 or (x, y) lies outside it
    """
    raw = np.asarray(raw)
    _check_kernel_fits(raw.shape)
    height, width = raw.shape
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) outside {width}x{height} grid")

    tx = _nudge(x, width)
    ty = _nudge(y, height)
    window = raw[ty - 1:ty + 2, tx - 1:tx + 2].astype(np.float64)
    (a, b, c), (d, _, f), (g, h, i) = window

    dzdx = ((c + 2 * f + i) - (a + 2 * d + g)) / 8
    dzdy = ((g + 2 * h + i) - (a + 2 * b + c)) / 8
    return float(dzdx), float(dzdy)


def surface_gradients(raw):
    """
    Estimate dz/dx and dz/dy for every pixel of a grid.

    Args:
        raw: 2D array of raw elevation samples (H, W), H and W >= 3

    Returns:
        tuple: (dzdx, dzdy) float64 arrays of shape (H, W)
    """
    raw = np.asarray(raw)
    _check_kernel_fits(raw.shape)
    logger.info(f"Computing surface gradients for grid shape: {raw.shape}")

    # Integer samples stay exact in float64, so this matches surface_gradient bit for bit
    z = raw.astype(np.float64)
    dzdx = sobel(z, axis=1)[1:-1, 1:-1] / 8
    dzdy = sobel(z, axis=0)[1:-1, 1:-1] / 8

    # Interior estimates only; edges copy their inner neighbour
    dzdx = np.pad(dzdx, 1, mode="edge")
    dzdy = np.pad(dzdy, 1, mode="edge")

    logger.debug(f"Gradient ranges - dx: {dzdx.min():.2f} to {dzdx.max():.2f}")
    logger.debug(f"Gradient ranges - dy: {dzdy.min():.2f} to {dzdy.max():.2f}")
    return dzdx, dzdy
