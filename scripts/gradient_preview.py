#!/usr/bin/env python3
"""
Color stop design preview.

Renders the elevation gradient of a settings file as a strip and a shaded
synthetic peak with the same settings, side by side, for iterating on color
stops and light direction without a real height map.

Usage:
    python scripts/gradient_preview.py SETTINGS [--output preview.png]
"""

import argparse
import logging
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from hillshade.color_mapping import gradient_strip
from hillshade.config import load_settings
from hillshade.core import render_relief

logger = logging.getLogger(__name__)


def synthetic_peaks(settings, size=256):
    """Raw uint16 grid with a few hills spanning the gradient's elevation range."""
    low = max(settings.color_stops[0].height, settings.min_height)
    high = min(settings.color_stops[-1].height, settings.max_height)

    yy, xx = np.mgrid[0:size, 0:size] / size
    terrain = np.zeros((size, size))
    for cx, cy, r, h in [(0.35, 0.4, 0.25, 1.0), (0.7, 0.65, 0.18, 0.7), (0.75, 0.2, 0.12, 0.45)]:
        terrain += h * np.exp(-((xx - cx) ** 2 + (yy - cy) ** 2) / (2 * r**2))
    terrain = terrain / terrain.max()

    elevation = low + terrain * (high - low)
    raw = (elevation - settings.height_offset) / settings.height_scale
    return np.clip(np.rint(raw), 0, 65535).astype(np.uint16)


def show_preview(settings_path, output):
    """Save a gradient strip and a shaded synthetic peak to output."""
    settings = load_settings(settings_path)

    strip, elevations = gradient_strip(settings.color_stops, width=512, height=48, margin=0.05)
    relief = render_relief(synthetic_peaks(settings), settings)

    fig, (ax_strip, ax_relief) = plt.subplots(
        2, 1, figsize=(8, 9), gridspec_kw={"height_ratios": [1, 6]}
    )
    ax_strip.imshow(strip, extent=(elevations[0], elevations[-1], 0, 1), aspect="auto")
    for stop in settings.color_stops:
        ax_strip.axvline(stop.height, color="black", linewidth=0.8)
    ax_strip.set_yticks([])
    ax_strip.set_xlabel("Elevation")
    ax_strip.set_title("Color stops")

    ax_relief.imshow(relief)
    ax_relief.set_title(
        f"Light pitch {settings.light_pitch_deg:.0f}, yaw {settings.light_yaw_deg:.0f}"
    )
    ax_relief.axis("off")

    plt.tight_layout()
    output.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output, dpi=120)
    plt.close()
    print(f"Saved: {output}")


def main():
    parser = argparse.ArgumentParser(description="Preview color stops and hillshade settings")
    parser.add_argument("settings", type=Path, help="Path to the JSON settings file")
    parser.add_argument(
        "--output", "-o", type=Path, default=Path("gradient_preview.png"), help="Output image"
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING)
    show_preview(args.settings, args.output)


if __name__ == "__main__":
    main()
