"""
Constants for the color-matrix package.
Centralizes the magic numbers used by tagging, routing and compositing.
"""


class ImageConstants:
    """Constants related to pixel buffers."""

    # Buffers created by the package are 8-bit per channel
    DEFAULT_DTYPE = "uint8"
    DEFAULT_FILL = 0

    # Value range of an 8-bit channel
    CHANNEL_MIN = 0
    CHANNEL_MAX = 255


class HighlightConstants:
    """Constants related to mask compositing."""

    # Mask pixels strictly above this value are highlighted
    MASK_THRESHOLD = 127

    # Hue is stored in one byte, hue 0 means "no highlight"
    HUE_RANGE = 255
    MAX_MASKS = 255  # exclusive upper bound is 256

    # Highlighted pixels are fully saturated and fully bright
    HIGHLIGHT_SATURATION = 255
    HIGHLIGHT_VALUE = 255


class SystemConstants:
    """System-wide constants."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ENV_PREFIX = "CM_"
