"""
Common package - fundamental types without project dependencies.

- Enums (ColorSpace)
- Constants (ImageConstants, HighlightConstants, SystemConstants)
- Base models (ROI)

IMPORTANT: This package must NOT import from core to avoid circular dependencies.
"""

from color_matrix.common.base import ROI
from color_matrix.common.constants import HighlightConstants, ImageConstants, SystemConstants
from color_matrix.common.enums import ColorSpace

__all__ = [
    # Enums
    "ColorSpace",
    # Constants
    "HighlightConstants",
    "ImageConstants",
    "SystemConstants",
    # Base models
    "ROI",
]
