"""
Mask highlighting over a grayscale background.

Each mask is painted in its own fully saturated hue over the background's
luminance. Hues are spaced evenly across one byte with hue 0 left free, and
masks are painted in order, so where masks overlap the last one wins.
"""

import logging
from typing import Iterable, List, Optional, Union

import numpy as np

from color_matrix.common.constants import HighlightConstants
from color_matrix.common.enums import ColorSpace
from color_matrix.config import get_settings
from color_matrix.core.image.routing import (
    ConversionRouter,
    ImageLike,
    as_tagged,
    default_router,
)
from color_matrix.core.image.tagged import TaggedImage
from color_matrix.exceptions import CapacityExceededException, MaskShapeException

logger = logging.getLogger(__name__)

MaskInput = Union[ImageLike, Iterable[ImageLike]]


def compute_hue_map(count: int) -> List[int]:
    """
    Assign one hue per mask.

    Args:
        count: Number of masks, 0 < count < 256

    Returns:
        ``(i + 1) * (255 // count)`` for each mask index ``i``; strictly
        increasing and never 0. OpenCV wraps 8-bit hue at 180, so hues
        h and h + 180 render as the same color

    Raises:
        CapacityExceededException: If count is out of range
    """
    if not 0 < count <= HighlightConstants.MAX_MASKS:
        raise CapacityExceededException(count, limit=HighlightConstants.MAX_MASKS + 1)

    hue_step = HighlightConstants.HUE_RANGE // count
    return [(i + 1) * hue_step for i in range(count)]


def _collect_masks(masks: MaskInput) -> List[TaggedImage]:
    # A single buffer or image is a one-element sequence
    if isinstance(masks, (TaggedImage, np.ndarray)):
        return [as_tagged(masks)]
    return [as_tagged(mask) for mask in masks]


class HighlightCompositor:
    """Paints masks in distinct hues over a background image."""

    def __init__(
        self,
        threshold: Optional[int] = None,
        saturation: Optional[int] = None,
        value: Optional[int] = None,
        router: Optional[ConversionRouter] = None,
    ):
        config = get_settings().highlight
        self.threshold = config.mask_threshold if threshold is None else threshold
        self.saturation = config.saturation if saturation is None else saturation
        self.value = config.value if value is None else value
        self.router = router or default_router

    def _prepare_mask(self, index: int, mask: TaggedImage, size: tuple) -> np.ndarray:
        if mask.empty or mask.shape[:2] != size:
            raise MaskShapeException(index, expected=size, actual=mask.shape[:2])

        if mask.channels != 1:
            mask = self.router.convert(mask, ColorSpace.GRAY)
        # (rows, cols, 1) arrays index like (rows, cols)
        return mask.buffer.reshape(size)

    def compose(self, background: ImageLike, masks: MaskInput) -> TaggedImage:
        """
        Highlight masks over a background.

        Args:
            background: Image in any routable colorspace
            masks: One mask, or an ordered collection of masks, each the
                background's size

        Returns:
            New BGR image; the background is not modified

        Raises:
            CapacityExceededException: If there are no masks or 256 or more
            MaskShapeException: If a mask is empty or differs in size
            UnsupportedConversionException: If the background cannot be routed
        """
        background = as_tagged(background)
        masks = _collect_masks(masks)
        hue_map = compute_hue_map(len(masks))

        if background.empty:
            raise ValueError("Background image is empty")

        size = background.shape[:2]
        mask_buffers = [
            self._prepare_mask(index, mask, size) for index, mask in enumerate(masks)
        ]

        logger.debug(f"Highlighting {len(masks)} mask(s) over {background!r}, hues {hue_map}")

        # Fresh buffer: the proxy through GRAY always allocates
        working = self.router.to_3channel_gray(background, ColorSpace.HSV)
        pixels = working.buffer

        for hue, mask in zip(hue_map, mask_buffers):
            pixels[mask > self.threshold] = (hue, self.saturation, self.value)

        return self.router.convert(working, ColorSpace.BGR)


def highlight_over_bg(
    background: ImageLike, masks: MaskInput, threshold: Optional[int] = None
) -> TaggedImage:
    """
    Highlight one or more masks over a background.

    ``masks`` may be a single mask or any ordered collection (list, tuple,
    generator); all shapes give the same result. See ``HighlightCompositor.compose``.
    """
    return HighlightCompositor(threshold=threshold).compose(background, masks)
