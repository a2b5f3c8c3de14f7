"""
Colorspace enumeration.

Every pixel buffer handled by the package carries one of these tags. The set is
closed: adding a member means adding its edges to the routing table in
``core.image.routing``.
"""

from enum import Enum
from typing import Optional


class ColorSpace(str, Enum):
    """Recognized colorspace tags."""

    UNKNOWN = "unknown"
    BGR = "bgr"
    RGB = "rgb"
    HSV = "hsv"
    GRAY = "gray"
    WHITE_ON_BLACK = "white_on_black"  # Gray variant used for highlight masks

    @property
    def channels(self) -> Optional[int]:
        """Required channel count, or None when the tag imposes no constraint."""
        return _REQUIRED_CHANNELS[self]

    @property
    def is_known(self) -> bool:
        return self is not ColorSpace.UNKNOWN

    @property
    def is_single_channel(self) -> bool:
        return self.channels == 1

    @property
    def is_triple_channel(self) -> bool:
        return self.channels == 3


_REQUIRED_CHANNELS = {
    ColorSpace.UNKNOWN: None,
    ColorSpace.BGR: 3,
    ColorSpace.RGB: 3,
    ColorSpace.HSV: 3,
    ColorSpace.GRAY: 1,
    ColorSpace.WHITE_ON_BLACK: 1,
}
