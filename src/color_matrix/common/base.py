"""
Base data models - fundamental types without dependencies.

IMPORTANT: This module must NOT import from core to avoid circular dependencies.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ROI(BaseModel):
    """Rectangular region of an image, used for sub-views and copy-into."""

    x: int = Field(..., ge=0, description="X coordinate")
    y: int = Field(..., ge=0, description="Y coordinate")
    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ROI":
        """Create ROI from dictionary."""
        return cls(
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
        )

    @property
    def x2(self) -> int:
        """Get right edge coordinate."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate."""
        return self.y + self.height

    def is_valid(
        self, image_width: Optional[int] = None, image_height: Optional[int] = None
    ) -> bool:
        """Check that the ROI lies inside the given image bounds."""
        if image_width is not None and self.x2 > image_width:
            return False

        if image_height is not None and self.y2 > image_height:
            return False

        return True

    def validate_with_constraints(self, image_width: int, image_height: int) -> None:
        """
        Validate ROI against image bounds.

        Raises:
            ValueError: If ROI exceeds the image
        """
        if not self.is_valid(image_width, image_height):
            raise ValueError(
                f"ROI {self.to_dict()} exceeds image bounds {image_width}x{image_height}"
            )
