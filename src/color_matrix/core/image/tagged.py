"""
Colorspace-tagged pixel buffers.

A TaggedImage pairs a NumPy buffer with the ColorSpace it currently holds.
The tag is only ever changed through ``set_tag`` and ``assign_buffer``, which
both check that a non-empty buffer has the channel count its tag requires.

Buffers are shared, not copied: assigning an array stores a reference to it,
so in-place pixel edits are visible through every handle on that array. Use
``copy()`` when an isolated buffer is needed.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

from color_matrix.common.base import ROI
from color_matrix.common.constants import ImageConstants
from color_matrix.common.enums import ColorSpace
from color_matrix.config import get_settings
from color_matrix.exceptions import ColorspaceMismatchException, UnsupportedConversionException

logger = logging.getLogger(__name__)


def channel_count(buffer: np.ndarray) -> int:
    """Number of channels in a buffer (2-D arrays are single channel)."""
    if buffer.ndim == 2:
        return 1
    return buffer.shape[2]


def is_empty(buffer: Optional[np.ndarray]) -> bool:
    """True when the buffer holds no pixel data."""
    if buffer is None:
        return True
    return buffer.ndim < 2 or buffer.shape[0] == 0 or buffer.shape[1] == 0


def check_colorspace_match(buffer: Optional[np.ndarray], colorspace: ColorSpace) -> None:
    """
    Check that a buffer's channel count agrees with a colorspace.

    Empty buffers and UNKNOWN tags always pass.

    Raises:
        ColorspaceMismatchException: If the channel counts differ
    """
    if is_empty(buffer) or colorspace.channels is None:
        return

    actual = channel_count(buffer)
    if actual != colorspace.channels:
        raise ColorspaceMismatchException(colorspace, actual)


class TaggedImage:
    """Pixel buffer plus the colorspace tag describing it."""

    def __init__(
        self,
        buffer: Optional[np.ndarray] = None,
        colorspace: ColorSpace = ColorSpace.UNKNOWN,
        strict: Optional[bool] = None,
    ):
        self._buffer: Optional[np.ndarray] = None
        self._colorspace = ColorSpace.UNKNOWN
        self._strict = strict

        self.set_tag(colorspace)
        if buffer is not None:
            self.assign_buffer(buffer)

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        colorspace: ColorSpace,
        fill: Union[int, Sequence[int]] = ImageConstants.DEFAULT_FILL,
    ) -> "TaggedImage":
        """
        Create an image of explicit size filled with a constant value.

        Args:
            width: Number of columns
            height: Number of rows
            colorspace: Tag of the new image, decides the channel count
            fill: Scalar, or one value per channel

        Returns:
            New TaggedImage owning a freshly allocated buffer
        """
        channels = colorspace.channels
        if channels is None:
            raise UnsupportedConversionException(
                colorspace, colorspace, reason="cannot allocate a buffer for an unknown colorspace"
            )

        shape = (height, width) if channels == 1 else (height, width, channels)
        buffer = np.empty(shape, dtype=ImageConstants.DEFAULT_DTYPE)
        buffer[...] = fill

        image = cls(colorspace=colorspace)
        image.assign_buffer(buffer)
        if image.colorspace != colorspace:
            # Keep WHITE_ON_BLACK rather than the inferred GRAY
            image.set_tag(colorspace)
        return image

    @property
    def strict(self) -> bool:
        if self._strict is None:
            return get_settings().tags.strict
        return self._strict

    @property
    def colorspace(self) -> ColorSpace:
        return self._colorspace

    def get_tag(self) -> ColorSpace:
        return self._colorspace

    @property
    def buffer(self) -> Optional[np.ndarray]:
        """The shared pixel buffer (not a copy)."""
        return self._buffer

    @property
    def empty(self) -> bool:
        return is_empty(self._buffer)

    @property
    def shape(self) -> tuple:
        if self._buffer is None:
            return (0, 0)
        return self._buffer.shape

    @property
    def height(self) -> int:
        return self.shape[0]

    @property
    def width(self) -> int:
        return self.shape[1]

    @property
    def channels(self) -> int:
        if self._buffer is None:
            return 0
        return channel_count(self._buffer)

    def set_tag(self, colorspace: ColorSpace) -> None:
        """
        Set the colorspace tag.

        Raises:
            ColorspaceMismatchException: If the buffer is non-empty and its
                channel count differs from what the tag requires
        """
        colorspace = ColorSpace(colorspace)
        check_colorspace_match(self._buffer, colorspace)
        self._colorspace = colorspace

    def assign_buffer(self, buffer: Union[np.ndarray, "TaggedImage"]) -> None:
        """
        Take a shared reference to a new pixel buffer, inferring the tag where possible.

        A single channel buffer is always GRAY. A three channel buffer replacing
        a GRAY tag becomes BGR. Any other tag is kept.

        Args:
            buffer: NumPy array, or another TaggedImage whose buffer is shared

        Raises:
            ColorspaceMismatchException: In strict mode, if the current tag
                disagrees with the incoming buffer
        """
        if isinstance(buffer, TaggedImage):
            buffer = buffer.buffer
        if buffer is self._buffer:
            return

        mismatch = False
        try:
            check_colorspace_match(buffer, self._colorspace)
        except ColorspaceMismatchException as e:
            if self.strict:
                raise
            logger.warning(f"Re-inferring tag after mismatch: {e.message}")
            mismatch = True

        colorspace = self._colorspace
        if not is_empty(buffer):
            channels = channel_count(buffer)
            if channels == 1:
                colorspace = ColorSpace.GRAY
            elif channels == 3 and colorspace == ColorSpace.GRAY:
                # 3 channels is ambiguous, fall back to the default ordering
                colorspace = ColorSpace.BGR

            if mismatch and colorspace.channels not in (None, channels):
                colorspace = ColorSpace.UNKNOWN

        if colorspace != self._colorspace:
            logger.debug(f"Tag inferred from buffer: {self._colorspace.name} -> {colorspace.name}")

        self._buffer = buffer
        self._colorspace = colorspace

    def copy(self) -> "TaggedImage":
        """Deep copy of buffer and tag."""
        buffer = None if self._buffer is None else self._buffer.copy()
        out = TaggedImage(colorspace=self._colorspace, strict=self._strict)
        out._buffer = buffer
        return out

    def view(self, roi: Union[ROI, dict]) -> "TaggedImage":
        """
        Rectangular sub-view sharing this image's storage.

        Raises:
            ValueError: If the ROI lies outside the image
        """
        if isinstance(roi, dict):
            roi = ROI.from_dict(roi)
        roi.validate_with_constraints(image_width=self.width, image_height=self.height)

        out = TaggedImage(colorspace=self._colorspace, strict=self._strict)
        out._buffer = self._buffer[roi.y : roi.y2, roi.x : roi.x2]
        return out

    def paste(self, source: Union[np.ndarray, "TaggedImage"], x: int, y: int) -> None:
        """
        Copy another buffer into this image with its top-left corner at (x, y).

        The pixels are written in place, so every handle sharing this buffer sees them.

        Raises:
            ValueError: If channel counts differ or the source does not fit
        """
        if isinstance(source, TaggedImage):
            source = source.buffer

        if channel_count(source) != self.channels:
            raise ValueError(
                f"Cannot paste a {channel_count(source)}-channel buffer "
                f"into a {self.channels}-channel image"
            )

        roi = ROI(x=x, y=y, width=source.shape[1], height=source.shape[0])
        self.view(roi).buffer[...] = source

    def __repr__(self) -> str:
        return f"TaggedImage(colorspace={self._colorspace.name}, shape={self.shape})"
