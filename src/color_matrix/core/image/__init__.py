"""
Colorspace-aware image utilities.

- tagged: TaggedImage, a NumPy buffer plus its ColorSpace tag
- routing: conversion between colorspaces through the edge table
- highlight: painting masks in distinct hues over a background

All utilities are re-exported from this module for convenient access.
"""

from color_matrix.core.image.highlight import (
    HighlightCompositor,
    compute_hue_map,
    highlight_over_bg,
)
from color_matrix.core.image.routing import (
    ROUTES,
    ConversionRouter,
    convert,
    plan_route,
    to_3channel_gray,
    to_bgr,
    to_gray,
    to_hsv,
    to_rgb,
)
from color_matrix.core.image.tagged import (
    TaggedImage,
    channel_count,
    check_colorspace_match,
    is_empty,
)

__all__ = [
    # Tagged buffers
    "TaggedImage",
    "channel_count",
    "check_colorspace_match",
    "is_empty",
    # Routing
    "ROUTES",
    "ConversionRouter",
    "convert",
    "plan_route",
    "to_3channel_gray",
    "to_bgr",
    "to_gray",
    "to_hsv",
    "to_rgb",
    # Highlighting
    "HighlightCompositor",
    "compute_hue_map",
    "highlight_over_bg",
]
