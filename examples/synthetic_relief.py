#!/usr/bin/env python3
"""
Render shaded relief for a synthetic island.

Writes a 16-bit GeoTIFF with a few overlapping hills that dip below sea level
at the edges, then renders it with the settings in hillshade_settings.json
(next to this script). Output lands in examples/output/.

Usage:
    python examples/synthetic_relief.py
    python examples/synthetic_relief.py --size 1024 --workers 4 --progress
"""

import argparse
import logging
from pathlib import Path

import numpy as np
import rasterio

from hillshade.cli import run
from hillshade.config import load_settings

logger = logging.getLogger(__name__)

EXAMPLE_DIR = Path(__file__).resolve().parent
SETTINGS_PATH = EXAMPLE_DIR / "hillshade_settings.json"


def synthetic_island(size, seed=0):
    """Elevation grid (meters) for a ragged island, sea floor at the edges."""
    rng = np.random.default_rng(seed)
    yy, xx = np.mgrid[0:size, 0:size] / size

    dist = np.hypot(xx - 0.5, yy - 0.5)
    elevation = 2600 * np.exp(-(dist**2) / 0.05) - 200

    for _ in range(12):
        cx, cy = rng.uniform(0.25, 0.75, 2)
        r = rng.uniform(0.03, 0.09)
        h = rng.uniform(-300, 500)
        elevation += h * np.exp(-((xx - cx) ** 2 + (yy - cy) ** 2) / (2 * r**2))

    elevation += 25 * np.sin(xx * 40) * np.cos(yy * 33)
    return elevation


def write_dem(path, elevation, settings):
    """Quantize elevation to raw uint16 with the settings' height range."""
    raw = (elevation - settings.height_offset) / settings.height_scale
    raw = np.clip(np.rint(raw), 0, 65535).astype(np.uint16)

    path.parent.mkdir(parents=True, exist_ok=True)
    with rasterio.open(
        path, "w", driver="GTiff", height=raw.shape[0], width=raw.shape[1], count=1, dtype="uint16"
    ) as dst:
        dst.write(raw, 1)
    logger.info(f"Wrote synthetic DEM {raw.shape} to {path}")


def main():
    parser = argparse.ArgumentParser(description="Render a synthetic island with hillshade")
    parser.add_argument("--size", type=int, default=512, help="DEM size in pixels (default: 512)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for hill placement")
    parser.add_argument("--workers", type=int, default=1, help="Render threads (default: 1)")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    settings = load_settings(SETTINGS_PATH)
    write_dem(settings.image_path, synthetic_island(args.size, args.seed), settings)

    out_path = run(SETTINGS_PATH, workers=args.workers, progress=args.progress)
    print(f"Saved: {out_path}")


if __name__ == "__main__":
    main()
