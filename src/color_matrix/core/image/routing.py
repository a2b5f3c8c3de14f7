"""
Colorspace conversion routing.

Conversions are described by a single table of edges. Each edge maps a
(source, target) pair to the OpenCV conversion codes applied in order, so a
pair without a direct primitive is routed through a proxy colorspace:

- HSV -> GRAY goes through BGR (HSV2BGR, then BGR2GRAY)
- GRAY -> HSV goes through BGR (GRAY2BGR, then BGR2HSV)

GRAY and WHITE_ON_BLACK share their outgoing edges; WHITE_ON_BLACK -> GRAY is a
re-tag with no pixel work. Every conversion returns a new TaggedImage and
leaves the source untouched.
"""

import logging
from typing import Dict, Optional, Tuple, Union

import cv2
import numpy as np

from color_matrix.common.enums import ColorSpace
from color_matrix.core.image.tagged import TaggedImage
from color_matrix.exceptions import UnsupportedConversionException

logger = logging.getLogger(__name__)

ImageLike = Union[TaggedImage, np.ndarray]
RouteTable = Dict[Tuple[ColorSpace, ColorSpace], Tuple[int, ...]]

_SINGLE_CHANNEL = (ColorSpace.GRAY, ColorSpace.WHITE_ON_BLACK)

# Targets accepted by to_3channel_gray
TRIPLE_CHANNEL_TARGETS = (ColorSpace.BGR, ColorSpace.RGB, ColorSpace.HSV)


def _build_routes() -> RouteTable:
    routes: RouteTable = {
        # -> GRAY
        (ColorSpace.HSV, ColorSpace.GRAY): (cv2.COLOR_HSV2BGR, cv2.COLOR_BGR2GRAY),
        (ColorSpace.BGR, ColorSpace.GRAY): (cv2.COLOR_BGR2GRAY,),
        (ColorSpace.RGB, ColorSpace.GRAY): (cv2.COLOR_RGB2GRAY,),
        # -> HSV
        (ColorSpace.BGR, ColorSpace.HSV): (cv2.COLOR_BGR2HSV,),
        (ColorSpace.RGB, ColorSpace.HSV): (cv2.COLOR_RGB2HSV,),
        # -> BGR
        (ColorSpace.HSV, ColorSpace.BGR): (cv2.COLOR_HSV2BGR,),
        (ColorSpace.RGB, ColorSpace.BGR): (cv2.COLOR_RGB2BGR,),
        # -> RGB
        (ColorSpace.BGR, ColorSpace.RGB): (cv2.COLOR_BGR2RGB,),
        (ColorSpace.HSV, ColorSpace.RGB): (cv2.COLOR_HSV2RGB,),
    }

    for source in _SINGLE_CHANNEL:
        routes[(source, ColorSpace.GRAY)] = ()
        routes[(source, ColorSpace.HSV)] = (cv2.COLOR_GRAY2BGR, cv2.COLOR_BGR2HSV)
        routes[(source, ColorSpace.BGR)] = (cv2.COLOR_GRAY2BGR,)
        routes[(source, ColorSpace.RGB)] = (cv2.COLOR_GRAY2RGB,)

    return routes


ROUTES = _build_routes()


def as_tagged(image: ImageLike) -> TaggedImage:
    """Wrap a raw buffer in a TaggedImage, inferring what tag it can."""
    if isinstance(image, TaggedImage):
        return image
    return TaggedImage(buffer=image)


class ConversionRouter:
    """
    Applies the edge table to tagged images.

    The module-level functions delegate to a default router built from
    ``ROUTES``; a custom table can be passed to route through other edges.
    """

    def __init__(self, routes: Optional[RouteTable] = None):
        self.routes = dict(ROUTES if routes is None else routes)

    def plan(self, source: ColorSpace, target: ColorSpace) -> Tuple[int, ...]:
        """
        Find the OpenCV conversion codes leading from source to target.

        Returns:
            Codes to apply in order, empty when only a re-tag is needed

        Raises:
            UnsupportedConversionException: If either end is UNKNOWN or no edge exists
        """
        if not source.is_known or not target.is_known:
            raise UnsupportedConversionException(source, target, reason="colorspace is unknown")

        if source == target:
            return ()

        if (source, target) not in self.routes:
            raise UnsupportedConversionException(source, target)
        return self.routes[(source, target)]

    def supports(self, source: ColorSpace, target: ColorSpace) -> bool:
        try:
            self.plan(source, target)
        except UnsupportedConversionException:
            return False
        return True

    def convert(self, image: ImageLike, target: ColorSpace) -> TaggedImage:
        """
        Convert an image to the target colorspace.

        The result is tagged before its pixels are assigned, so tag and buffer
        agree at every point. Re-tags share the source buffer.

        Args:
            image: Tagged image or raw buffer
            target: Desired colorspace

        Returns:
            New TaggedImage tagged ``target``
        """
        image = as_tagged(image)
        codes = self.plan(image.colorspace, target)

        logger.debug(
            f"Routing {image.colorspace.name} -> {target.name} via {len(codes)} conversion(s)"
        )

        out = TaggedImage(colorspace=target, strict=True)
        if image.empty:
            return out

        buffer = image.buffer
        for code in codes:
            buffer = cv2.cvtColor(buffer, code)

        out.assign_buffer(buffer)
        if out.colorspace != target:
            # Single channel buffers are inferred as GRAY on assignment
            out.set_tag(target)
        return out

    def to_3channel_gray(self, image: ImageLike, target: ColorSpace) -> TaggedImage:
        """
        Produce a visually gray image expressed in a three channel colorspace.

        The image is first reduced to GRAY (rejecting unsupported sources),
        then expanded to ``target``. For BGR and RGB all three channels are
        equal; for HSV hue and saturation are zero and value carries the
        luminance.

        Raises:
            UnsupportedConversionException: If target is not BGR, RGB or HSV,
                or the source cannot be routed to GRAY
        """
        image = as_tagged(image)
        if target not in TRIPLE_CHANNEL_TARGETS:
            raise UnsupportedConversionException(
                image.colorspace, target, reason="target is not a three channel colorspace"
            )

        return self.convert(self.convert(image, ColorSpace.GRAY), target)


default_router = ConversionRouter()


def plan_route(source: ColorSpace, target: ColorSpace) -> Tuple[int, ...]:
    return default_router.plan(source, target)


def convert(image: ImageLike, target: ColorSpace) -> TaggedImage:
    return default_router.convert(image, target)


def to_gray(image: ImageLike) -> TaggedImage:
    """Convert to single channel GRAY."""
    return default_router.convert(image, ColorSpace.GRAY)


def to_hsv(image: ImageLike) -> TaggedImage:
    """Convert to HSV."""
    return default_router.convert(image, ColorSpace.HSV)


def to_bgr(image: ImageLike) -> TaggedImage:
    """Convert to BGR."""
    return default_router.convert(image, ColorSpace.BGR)


def to_rgb(image: ImageLike) -> TaggedImage:
    """Convert to RGB."""
    return default_router.convert(image, ColorSpace.RGB)


def to_3channel_gray(image: ImageLike, target: ColorSpace) -> TaggedImage:
    """Gray image expanded to BGR, RGB or HSV. See ``ConversionRouter.to_3channel_gray``."""
    return default_router.to_3channel_gray(image, target)
