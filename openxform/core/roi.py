"""
Rectangular region of interest scoping buffer operations to a sub-area.
"""

import logging
from dataclasses import dataclass

from openxform.core.pixels import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionOfInterest:
    """
    Axis-aligned integer rectangle in buffer pixel coordinates.

    Instances are immutable; a raster replaces its ROI rather than editing it,
    so an ROI handed to a transform cannot change underneath it.
    """
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def full(cls, buffer_width: int, buffer_height: int) -> "RegionOfInterest":
        return cls(0, 0, buffer_width, buffer_height)

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    def is_full(self, buffer_width: int, buffer_height: int) -> bool:
        return (self.x == 0 and self.y == 0
                and self.width == buffer_width and self.height == buffer_height)

    def clamp_to(self, buffer_width: int, buffer_height: int) -> "RegionOfInterest":
        """
        Intersect this rectangle with ``[0, buffer_width) x [0, buffer_height)``.

        An empty intersection degenerates to the full-buffer region, the same
        as having no ROI at all.

        Args:
            buffer_width: Width of the buffer the ROI annotates
            buffer_height: Height of the buffer the ROI annotates

        Returns:
            A region lying entirely inside the buffer
        """
        left = max(self.x, 0)
        top = max(self.y, 0)
        right = min(self.x + self.width, buffer_width)
        bottom = min(self.y + self.height, buffer_height)

        if right <= left or bottom <= top:
            logger.debug(f"ROI {self} does not intersect {buffer_width}x{buffer_height} buffer; "
                         f"using full buffer")
            return RegionOfInterest.full(buffer_width, buffer_height)

        return RegionOfInterest(left, top, right - left, bottom - top)

    def crop(self, buffer: PixelBuffer) -> PixelBuffer:
        """Copy the pixels inside this region into a new buffer, without resampling."""
        region = self.clamp_to(buffer.width, buffer.height)
        pixels = buffer.as_2d()[region.y:region.bottom, region.x:region.right]
        return PixelBuffer(region.width, region.height, pixels)
