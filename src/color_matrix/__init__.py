"""
color-matrix: colorspace-tagged images for OpenCV.

Tracks which color model a NumPy pixel buffer holds, routes conversions
between colorspaces and composites highlight masks over a background.
"""

from color_matrix.common import ROI, ColorSpace
from color_matrix.config import Settings, get_settings, reload_settings, setup_logging
from color_matrix.core.image import (
    ConversionRouter,
    HighlightCompositor,
    TaggedImage,
    compute_hue_map,
    convert,
    highlight_over_bg,
    plan_route,
    to_3channel_gray,
    to_bgr,
    to_gray,
    to_hsv,
    to_rgb,
)
from color_matrix.exceptions import (
    CapacityExceededException,
    ColorMatrixException,
    ColorspaceMismatchException,
    MaskShapeException,
    UnsupportedConversionException,
)

__version__ = "0.1.0"

__all__ = [
    "ColorSpace",
    "ROI",
    "TaggedImage",
    "ConversionRouter",
    "HighlightCompositor",
    "compute_hue_map",
    "convert",
    "highlight_over_bg",
    "plan_route",
    "to_3channel_gray",
    "to_bgr",
    "to_gray",
    "to_hsv",
    "to_rgb",
    "Settings",
    "get_settings",
    "reload_settings",
    "setup_logging",
    "ColorMatrixException",
    "ColorspaceMismatchException",
    "UnsupportedConversionException",
    "CapacityExceededException",
    "MaskShapeException",
]
