"""
Render settings for hillshade.

Settings are read from a JSON or YAML file whose keys follow the hillshade
settings format (camelCase), e.g.:

    {
        "imagePath": "heightmap.png",
        "outPath": "relief.png",
        "minHeight": -50,
        "maxHeight": 3000,
        "waterHeight": 0,
        "heightPixelRatio": 30,
        "lightPitch": 45,
        "lightYaw": 315,
        "noLightUnderWater": true,
        "outScale": 1.0,
        "heightColorStops": [
            {"height": 0, "color": [40, 90, 160]},
            {"height": 500, "color": "#3a7d44"},
            {"height": 3000, "color": "white"}
        ]
    }

The file format is chosen by extension: .yaml and .yml files are parsed with
PyYAML, anything else as JSON. Every value is validated on load; a bad file
(including NaN or infinite numbers) raises ConfigError before any raster is
touched.
"""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
import yaml
from matplotlib.colors import to_rgb

from .color_mapping import ColorStop, validate_stops
from .lighting import LightSource

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "hillshade_settings.json"
DEFAULT_LOG_LEVEL = "INFO"
YAML_SUFFIXES = (".yaml", ".yml")

# Raw samples are unsigned 16-bit
RAW_LEVELS = 65536


class ConfigError(ValueError):
    """Raised when render settings are missing or malformed."""

    pass


@dataclass(frozen=True)
class RenderSettings:
    """Immutable per-run settings shared by every pixel of a render."""

    min_height: float
    max_height: float
    height_pixel_ratio: float
    color_stops: Tuple[ColorStop, ...]
    light_pitch_deg: float = 45.0
    light_yaw_deg: float = 315.0
    no_light_under_water: bool = False
    water_height: float = 0.0
    out_scale: float = 1.0
    image_path: Optional[Path] = None
    out_path: Optional[Path] = None

    def __post_init__(self):
        for name in (
            "min_height",
            "max_height",
            "height_pixel_ratio",
            "light_pitch_deg",
            "light_yaw_deg",
            "water_height",
            "out_scale",
        ):
            if not math.isfinite(getattr(self, name)):
                raise ConfigError(f"{name} must be a finite number, got {getattr(self, name)}")
        if not self.max_height > self.min_height:
            raise ConfigError(
                f"maxHeight ({self.max_height}) must be greater than minHeight ({self.min_height})"
            )
        if not self.height_pixel_ratio > 0:
            raise ConfigError(f"heightPixelRatio must be positive, got {self.height_pixel_ratio}")
        if not self.out_scale > 0:
            raise ConfigError(f"outScale must be positive, got {self.out_scale}")
        try:
            validate_stops(self.color_stops)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @property
    def height_scale(self) -> float:
        """Elevation units per raw sample step."""
        return (self.max_height - self.min_height) / RAW_LEVELS

    @property
    def height_offset(self) -> float:
        return self.min_height

    @property
    def z_factor(self) -> float:
        """Scale from raw gradient units to elevation per ground distance."""
        return self.height_scale / self.height_pixel_ratio * self.out_scale

    @property
    def light(self) -> LightSource:
        return LightSource(self.light_pitch_deg, self.light_yaw_deg)

    def elevation(self, raw):
        """Map raw samples (scalar or array) to elevation."""
        return np.asarray(raw, dtype=np.float64) * self.height_scale + self.height_offset


def parse_color(value) -> Tuple[int, int, int]:
    """
    Parse a stop color.

    Args:
        value: [r, g, b] with 0-255 integers, or any matplotlib color string
            ("#2e8b57", "seagreen", ...)

    Returns:
        (r, g, b) tuple of ints

    Raises:
        ConfigError: If the value is not a valid color
    """
    if isinstance(value, str):
        try:
            rgb = to_rgb(value)
        except ValueError as e:
            raise ConfigError(f"Invalid color {value!r}: {e}") from e
        return tuple(int(round(channel * 255)) for channel in rgb)

    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ConfigError(f"Color must be [r, g, b] or a color name, got {value!r}")
    for channel in value:
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ConfigError(f"Color channels must be integers in 0-255, got {value!r}")
    return tuple(value)


def _number(raw: Dict[str, Any], key: str, default=None) -> float:
    if key not in raw:
        if default is None:
            raise ConfigError(f"Missing required setting '{key}'")
        return default
    value = raw[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"Setting '{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigError(f"Setting '{key}' must be finite, got {value!r}")
    return float(value)


def _parse_stops(entries) -> Tuple[ColorStop, ...]:
    if not isinstance(entries, list):
        raise ConfigError("Setting 'heightColorStops' must be a list")
    stops = []
    for n, entry in enumerate(entries):
        if not isinstance(entry, dict) or "height" not in entry or "color" not in entry:
            raise ConfigError(f"Color stop {n} must have 'height' and 'color'")
        height = _number(entry, "height")
        stops.append(ColorStop(height, parse_color(entry["color"])))
    return tuple(stops)


def settings_from_dict(raw: Dict[str, Any], base_dir: Optional[Path] = None) -> RenderSettings:
    """
    Build RenderSettings from a parsed settings mapping.

    Args:
        raw: Mapping with the camelCase settings keys
        base_dir: Directory that relative imagePath/outPath resolve against

    Returns:
        RenderSettings

    Raises:
        ConfigError: If a setting is missing or malformed
    """
    if not isinstance(raw, dict):
        raise ConfigError("Settings must be a mapping of setting names to values")
    if "heightColorStops" not in raw:
        raise ConfigError("Missing required setting 'heightColorStops'")

    no_light_under_water = raw.get("noLightUnderWater", False)
    if not isinstance(no_light_under_water, bool):
        raise ConfigError("Setting 'noLightUnderWater' must be true or false")

    paths = {}
    for key in ("imagePath", "outPath"):
        value = raw.get(key)
        if value is None:
            paths[key] = None
            continue
        if not isinstance(value, str):
            raise ConfigError(f"Setting '{key}' must be a string")
        path = Path(value)
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path
        paths[key] = path

    return RenderSettings(
        min_height=_number(raw, "minHeight"),
        max_height=_number(raw, "maxHeight"),
        height_pixel_ratio=_number(raw, "heightPixelRatio"),
        color_stops=_parse_stops(raw["heightColorStops"]),
        light_pitch_deg=_number(raw, "lightPitch", 45.0),
        light_yaw_deg=_number(raw, "lightYaw", 315.0),
        no_light_under_water=no_light_under_water,
        water_height=_number(raw, "waterHeight", 0.0),
        out_scale=_number(raw, "outScale", 1.0),
        image_path=paths["imagePath"],
        out_path=paths["outPath"],
    )


def load_settings(path) -> RenderSettings:
    """
    Load and validate render settings from a JSON or YAML file.

    Args:
        path: Path to the settings file

    Returns:
        RenderSettings

    Raises:
        ConfigError: If the file cannot be read or holds invalid settings
    """
    path = Path(path)
    logger.info(f"Loading settings from {path}")

    try:
        with open(path, "r") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                raw = yaml.safe_load(f)
            else:
                raw = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Settings file {path} is not valid JSON: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Settings file {path} is not valid YAML: {e}") from e

    settings = settings_from_dict(raw, base_dir=path.parent)
    logger.info(
        f"Elevation range: {settings.min_height:.1f} to {settings.max_height:.1f}, "
        f"{len(settings.color_stops)} color stops"
    )
    logger.debug(f"Settings: {settings}")
    return settings
