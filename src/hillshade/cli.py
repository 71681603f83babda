"""
Command-line entry point: render a shaded-relief PNG from a settings file.

Usage:
    hillshade [SETTINGS] [--workers N] [--log-level LEVEL] [--progress]

SETTINGS defaults to hillshade_settings.json in the current directory. The
image is only written once the whole relief has been rendered; any settings,
input format or I/O error aborts the run with exit status 1.
"""

import argparse
import logging
import sys

from .config import DEFAULT_LOG_LEVEL, DEFAULT_SETTINGS_PATH, ConfigError, load_settings
from .core import render_relief
from .data_loading import InputFormatError, load_height_map, write_image
from .surface import KERNEL_SIZE
from .transforms import resize_raster

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a shaded-relief image from a 16-bit grayscale height map"
    )
    parser.add_argument(
        "settings",
        nargs="?",
        default=DEFAULT_SETTINGS_PATH,
        help=f"Path to the JSON or YAML settings file (default: {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=1,
        help="Number of threads rendering row bands (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=DEFAULT_LOG_LEVEL,
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show a progress bar while rendering"
    )
    args = parser.parse_args(argv)
    if args.workers < 1:
        parser.error("--workers must be at least 1")
    return args


def run(settings_path, workers=1, progress=False):
    """
    Load settings, render the relief and write it.

    Args:
        settings_path: Path to the JSON or YAML settings file
        workers: Rendering threads
        progress: Show a progress bar

    Returns:
        Path of the written image

    Raises:
        ConfigError: If settings are invalid or lack imagePath/outPath
        InputFormatError: If the height map is not single-band uint16 or is
            smaller than 3x3 after scaling
        OSError: If the height map cannot be read or the image cannot be written
    """
    settings = load_settings(settings_path)
    if settings.image_path is None:
        raise ConfigError("Missing required setting 'imagePath'")
    if settings.out_path is None:
        raise ConfigError("Missing required setting 'outPath'")

    raw = load_height_map(settings.image_path)

    try:
        raw = resize_raster(settings.out_scale)(raw)
    except ValueError as e:
        raise InputFormatError(f"Cannot resize height map {settings.image_path}: {e}") from e

    height, width = raw.shape
    if height < KERNEL_SIZE or width < KERNEL_SIZE:
        raise InputFormatError(
            f"Height map {settings.image_path} is {width}x{height} after scaling, "
            f"at least {KERNEL_SIZE}x{KERNEL_SIZE} is needed"
        )

    relief = render_relief(raw, settings, workers=workers, progress=progress)

    return write_image(settings.out_path, relief)


def main(argv=None):
    """Run the hillshade command line tool and return its exit status."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        out_path = run(args.settings, workers=args.workers, progress=args.progress)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except InputFormatError as e:
        logger.error(f"Input format error: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

    logger.info(f"Done: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
