"""
Shaded-relief rendering from 16-bit height maps.

Core functionality:
- RGB <-> HSL conversion with hue on a 6-unit circle
- Elevation color gradients blended in HSL space
- Horn gradient estimation and Lambertian hillshading
- RenderSettings loaded from JSON settings files
- render_relief to compose color and shading into an RGBA image
"""

from .color_space import HSLColor, rgb_to_hsl, hsl_to_rgb, rgb_to_hsl_array, hsl_to_rgb_array
from .color_mapping import (
    ColorStop,
    blend_hsl,
    gradient_color,
    gradient_colormap,
    gradient_strip,
    validate_stops,
)
from .surface import surface_gradient, surface_gradients
from .lighting import LightSource, slope_aspect, hillshade
from .config import ConfigError, RenderSettings, load_settings, settings_from_dict
from .core import render_relief, render_pixel
from .data_loading import InputFormatError, load_height_map, write_image
from .transforms import resize_raster

__all__ = [
    "HSLColor",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsl_array",
    "hsl_to_rgb_array",
    "ColorStop",
    "blend_hsl",
    "gradient_color",
    "gradient_colormap",
    "gradient_strip",
    "validate_stops",
    "surface_gradient",
    "surface_gradients",
    "LightSource",
    "slope_aspect",
    "hillshade",
    "ConfigError",
    "RenderSettings",
    "load_settings",
    "settings_from_dict",
    "render_relief",
    "render_pixel",
    "InputFormatError",
    "load_height_map",
    "write_image",
    "resize_raster",
]
