"""
Raster: a packed-ARGB image with its transform configuration.

A Raster couples a PixelBuffer with the two settings transforms read at
call time, the region of interest and the interpolation mode, and exposes
the caller-facing resize/rotate/crop operations.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

from openxform.constants.constants import (DEFAULT_FOREGROUND_VALUE,
                                          PIXEL_MASK, InterpolationMode)
from openxform.core.context import TransformContext
from openxform.core.pixels import PixelBuffer
from openxform.core.roi import RegionOfInterest
from openxform.processing.geometric_transform import (GeometricTransformEngine,
                                                     normalize_angle)

logger = logging.getLogger(__name__)


class Raster:
    """
    Packed-ARGB raster with ROI, interpolation mode and background settings.

    The ROI and interpolation mode are independent, mutable settings with no
    ordering constraints; each transform reads them when it runs.
    """

    def __init__(self, width: int, height: int,
                 pixels: Optional[Union[Sequence[int], np.ndarray, PixelBuffer]] = None,
                 *, context: Optional[TransformContext] = None):
        """
        Create a raster.

        Args:
            width: Width in pixels (> 0)
            height: Height in pixels (> 0)
            pixels: Initial row-major packed pixels; copied. Zero-filled if omitted.
            context: Collaborators and configuration; a private default context
                is created if omitted
        """
        if isinstance(pixels, PixelBuffer):
            pixels = pixels.data
        self._buffer = PixelBuffer(width, height, pixels)
        self._context = context or TransformContext()
        self._engine = GeometricTransformEngine(self._context.config)
        self._interpolation = self._context.config.interpolation
        self._background = self._context.config.background_value
        self._color = DEFAULT_FOREGROUND_VALUE
        self._roi = RegionOfInterest.full(width, height)

    @classmethod
    def from_buffer(cls, buffer: PixelBuffer, *,
                    context: Optional[TransformContext] = None) -> "Raster":
        return cls(buffer.width, buffer.height, buffer, context=context)

    # -- Properties ---------------------------------------------------------

    @property
    def width(self) -> int:
        return self._buffer.width

    @property
    def height(self) -> int:
        return self._buffer.height

    @property
    def buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def context(self) -> TransformContext:
        return self._context

    # -- Settings -----------------------------------------------------------

    def set_interpolation_method(self, mode: Union[InterpolationMode, str]) -> None:
        self._interpolation = InterpolationMode.parse(mode)

    def get_interpolation_method(self) -> InterpolationMode:
        return self._interpolation

    def set_roi(self, x: int, y: int, width: int, height: int) -> None:
        """Set the ROI, clamped to the raster; an empty intersection selects everything."""
        self._roi = RegionOfInterest(x, y, width, height).clamp_to(self.width, self.height)

    def reset_roi(self) -> None:
        self._roi = RegionOfInterest.full(self.width, self.height)

    def get_roi(self) -> RegionOfInterest:
        return self._roi

    def set_background_value(self, pixel: int) -> None:
        self._background = int(pixel) & PIXEL_MASK

    def get_background_value(self) -> int:
        return self._background

    def set_color(self, pixel: int) -> None:
        """Set the drawing colour used by ``fill`` and ``fill_rect``."""
        self._color = int(pixel) & PIXEL_MASK

    # -- Pixel access -------------------------------------------------------

    def get_pixels(self) -> np.ndarray:
        """Live reference to the internal pixel array; writes modify this raster."""
        return self._buffer.data

    def get_pixels_copy(self) -> np.ndarray:
        return self._buffer.data.copy()

    def get_pixel(self, x: int, y: int) -> int:
        return self._buffer.get(x, y)

    def put_pixel(self, x: int, y: int, pixel: int) -> None:
        self._buffer.set(x, y, pixel)

    def fill(self) -> None:
        """Fill the current ROI with the drawing colour."""
        self._buffer.fill(self._color, self._roi)

    def fill_rect(self, x: int, y: int, width: int, height: int) -> None:
        """Fill a rectangle, clipped to the raster, with the drawing colour."""
        left, top = max(x, 0), max(y, 0)
        right, bottom = min(x + width, self.width), min(y + height, self.height)
        if right <= left or bottom <= top:
            # Unlike an ROI, a rect outside the raster selects nothing
            return
        self._buffer.fill(self._color, RegionOfInterest(left, top, right - left, bottom - top))

    # -- Transforms ---------------------------------------------------------

    def crop(self) -> "Raster":
        """New raster holding exactly the pixels of the current ROI."""
        return self._derive(self._roi.crop(self._buffer))

    def duplicate(self) -> "Raster":
        """Independent copy sharing this raster's settings and context."""
        copy = self._derive(self._buffer.copy())
        copy._roi = self._roi
        return copy

    def resize(self, width: int, height: int) -> "Raster":
        """
        Resample the current ROI into a new raster of ``width`` x ``height``.

        This raster is not modified. The result inherits the interpolation
        mode and background value; its ROI covers the whole result.

        Raises:
            InvalidDimensionsError: If ``width`` or ``height`` is not positive
        """
        mode = self._interpolation
        buffer = self._engine.resize(self._buffer, self._roi, mode, width, height)
        self._context.record("Size...", {
            "width": str(width),
            "height": str(height),
            "interpolation": mode.value,
        })
        return self._derive(buffer)

    def rotate(self, angle_degrees: float) -> None:
        """
        Rotate the current ROI in place about its centre.

        Angles are reduced modulo 360; a multiple of 360 leaves the pixels
        untouched. Width and height never change.

        Raises:
            InvalidAngleError: If the angle is NaN or infinite; nothing is
                snapshotted, recorded or written
        """
        mode = self._interpolation
        if normalize_angle(angle_degrees) != 0.0:
            self._context.snapshot(self, "rotate")
        self._engine.rotate(self._buffer, angle_degrees, mode, self._roi, self._background)
        self._context.record("Rotate... ", {
            "angle": f"{angle_degrees:g}",
            "interpolation": mode.value,
        })

    def _derive(self, buffer: PixelBuffer) -> "Raster":
        raster = Raster.from_buffer(buffer, context=self._context)
        raster._interpolation = self._interpolation
        raster._background = self._background
        raster._color = self._color
        return raster

    def __repr__(self) -> str:
        return (f"Raster({self.width}x{self.height}, roi={self._roi}, "
                f"interpolation={self._interpolation.value})")
