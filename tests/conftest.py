"""
Pytest configuration and fixtures for color-matrix tests
"""

import numpy as np
import pytest

from color_matrix.common.enums import ColorSpace
from color_matrix.config import get_settings
from color_matrix.core.image.tagged import TaggedImage


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from cached settings and stray CM_ variables"""
    for name in ("CM_TAGS_STRICT", "CM_HIGHLIGHT_MASK_THRESHOLD", "CM_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bgr_array():
    """4x4 BGR image with a distinct color per quadrant"""
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    image[:2, :2] = [255, 0, 0]  # Blue
    image[:2, 2:] = [0, 255, 0]  # Green
    image[2:, :2] = [0, 0, 255]  # Red
    image[2:, 2:] = [40, 90, 200]
    return image


@pytest.fixture
def bgr_image(bgr_array):
    """Tagged BGR image"""
    return TaggedImage(bgr_array, ColorSpace.BGR)


@pytest.fixture
def gray_background():
    """Uniform mid-gray 2x2 BGR image"""
    return TaggedImage(np.full((2, 2, 3), 128, dtype=np.uint8), ColorSpace.BGR)


@pytest.fixture
def random_hsv_array():
    """8-bit HSV pixels using OpenCV's 0-179 hue range"""
    rng = np.random.default_rng(42)
    image = rng.integers(0, 256, size=(6, 6, 3), dtype=np.uint8)
    image[:, :, 0] = rng.integers(0, 180, size=(6, 6), dtype=np.uint8)
    return image
