"""
Custom exceptions for color-matrix.

All of these signal a broken caller contract. They are raised at the boundary
of an operation, before any output image is produced.
"""

from typing import Dict, Optional


class ColorMatrixException(Exception):
    """Base exception for color-matrix."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ColorspaceMismatchException(ColorMatrixException):
    """Raised when a tag disagrees with a buffer's channel count."""

    def __init__(self, colorspace, actual_channels: int):
        super().__init__(
            message=(
                f"Colorspace {colorspace.name} requires {colorspace.channels} channel(s), "
                f"buffer has {actual_channels}"
            ),
            details={
                "colorspace": colorspace.value,
                "expected_channels": colorspace.channels,
                "actual_channels": actual_channels,
            },
        )


class UnsupportedConversionException(ColorMatrixException):
    """Raised when no routing edge exists between two colorspaces."""

    def __init__(self, source, target, reason: Optional[str] = None):
        message = f"Unsupported conversion: {source.name} -> {target.name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message=message,
            details={"source": source.value, "target": target.value},
        )


class CapacityExceededException(ColorMatrixException):
    """Raised when the mask count cannot be represented in one byte of hue."""

    def __init__(self, count: int, limit: int = 256):
        super().__init__(
            message=f"Mask count {count} out of range, expected 0 < count < {limit}",
            details={"count": count, "limit": limit},
        )


class MaskShapeException(ColorMatrixException):
    """Raised when a mask does not match the background's dimensions."""

    def __init__(self, index: int, expected: tuple, actual: tuple):
        super().__init__(
            message=f"Mask {index} has size {actual}, background has {expected}",
            details={"index": index, "expected": list(expected), "actual": list(actual)},
        )
