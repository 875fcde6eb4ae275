"""
Packed pixel storage for OpenXform.

A PixelBuffer is a flat, row-major ``uint32`` array holding one packed ARGB
value per pixel. Channel extraction and packing are pure bit operations on
8-bit lanes; nothing here resamples or converts colour.
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from openxform.constants.constants import (ALPHA_SHIFT, BLUE_SHIFT,
                                          CHANNEL_MASK, CHANNEL_SHIFTS,
                                          GREEN_SHIFT, PIXEL_MASK, RED_SHIFT)
from openxform.core.exceptions import InvalidDimensionsError, OutOfBoundsError

if TYPE_CHECKING:
    from openxform.core.roi import RegionOfInterest

logger = logging.getLogger(__name__)

PIXEL_DTYPE = np.uint32


def pack_argb(alpha: int, red: int, green: int, blue: int) -> int:
    """Pack four 8-bit channel values into a single 32-bit pixel."""
    return (((alpha & CHANNEL_MASK) << ALPHA_SHIFT)
            | ((red & CHANNEL_MASK) << RED_SHIFT)
            | ((green & CHANNEL_MASK) << GREEN_SHIFT)
            | ((blue & CHANNEL_MASK) << BLUE_SHIFT))


def pack_rgb(red: int, green: int, blue: int) -> int:
    """Pack an opaque RGB colour."""
    return pack_argb(0xFF, red, green, blue)


def unpack_argb(pixel: int) -> Tuple[int, int, int, int]:
    """Split a packed pixel into its (alpha, red, green, blue) lanes."""
    pixel = int(pixel) & PIXEL_MASK
    return tuple((pixel >> shift) & CHANNEL_MASK for shift in CHANNEL_SHIFTS)


def split_channels(values: np.ndarray) -> np.ndarray:
    """
    Unpack an array of packed pixels into a trailing lane axis.

    Args:
        values: Array of packed pixels, any shape

    Returns:
        float64 array of shape ``values.shape + (4,)`` in ARGB lane order
    """
    packed = np.asarray(values, dtype=PIXEL_DTYPE)
    lanes = np.empty(packed.shape + (len(CHANNEL_SHIFTS),), dtype=np.float64)
    for index, shift in enumerate(CHANNEL_SHIFTS):
        lanes[..., index] = (packed >> np.uint32(shift)) & np.uint32(CHANNEL_MASK)
    return lanes


def merge_channels(lanes: np.ndarray) -> np.ndarray:
    """
    Pack a trailing ARGB lane axis back into ``uint32`` pixels.

    Lanes must already be integral and within 0-255; values are masked,
    not clamped.
    """
    lanes = np.asarray(lanes).astype(np.uint32)
    packed = np.zeros(lanes.shape[:-1], dtype=PIXEL_DTYPE)
    for index, shift in enumerate(CHANNEL_SHIFTS):
        packed |= (lanes[..., index] & np.uint32(CHANNEL_MASK)) << np.uint32(shift)
    return packed


def _as_pixel_array(data: Union[Sequence[int], np.ndarray]) -> np.ndarray:
    array = np.asarray(data)
    if array.size and array.dtype.kind not in "iu":
        raise TypeError(f"Pixel data must be integral, got dtype {array.dtype}")
    if array.dtype.kind in "iu" and array.dtype != PIXEL_DTYPE:
        # Signed inputs (e.g. Java-style ARGB ints) wrap onto their unsigned value
        array = (array.astype(np.int64) & PIXEL_MASK).astype(PIXEL_DTYPE)
    return np.array(array, dtype=PIXEL_DTYPE).ravel()


class PixelBuffer:
    """
    Flat, row-major store of packed pixels plus its dimensions.

    The buffer owns its storage exclusively: data passed in is copied, and
    ``copy()`` never shares memory with the original.
    """

    __slots__ = ('_width', '_height', '_data')

    def __init__(self, width: int, height: int,
                 data: Optional[Union[Sequence[int], np.ndarray]] = None):
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(
                f"Buffer dimensions must be positive, got {width}x{height}")

        if data is None:
            pixels = np.zeros(width * height, dtype=PIXEL_DTYPE)
        else:
            pixels = _as_pixel_array(data)
            if pixels.size != width * height:
                raise InvalidDimensionsError(
                    f"Expected {width * height} pixels for {width}x{height}, got {pixels.size}")

        self._width = int(width)
        self._height = int(height)
        self._data = pixels

    @classmethod
    def from_rows(cls, rows: Union[Iterable[Sequence[int]], np.ndarray]) -> "PixelBuffer":
        """Build a buffer from a 2D array or a list of equal-length rows."""
        grid = np.asarray(rows if isinstance(rows, np.ndarray) else list(rows))
        if grid.ndim != 2:
            raise InvalidDimensionsError(f"Rows must form a 2D grid, got {grid.ndim}D")
        height, width = grid.shape
        return cls(width, height, grid)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def data(self) -> np.ndarray:
        """Live flat view of the pixels; writes go straight into the buffer."""
        return self._data

    def as_2d(self) -> np.ndarray:
        """Live (height, width) view of the pixels."""
        return self._data.reshape(self._height, self._width)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBoundsError(
                f"Pixel ({x}, {y}) outside {self._width}x{self._height} buffer")

    def get(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return int(self._data[y * self._width + x])

    def set(self, x: int, y: int, pixel: int) -> None:
        self._check_bounds(x, y)
        self._data[y * self._width + x] = int(pixel) & PIXEL_MASK

    def fill(self, pixel: int, roi: Optional["RegionOfInterest"] = None) -> None:
        """Set every pixel, or every pixel inside ``roi``, to ``pixel``."""
        value = PIXEL_DTYPE(int(pixel) & PIXEL_MASK)
        if roi is None:
            self._data.fill(value)
            return
        region = roi.clamp_to(self._width, self._height)
        self.as_2d()[region.y:region.bottom, region.x:region.right] = value

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._width, self._height, self._data)

    def __len__(self) -> int:
        return self._data.size

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (self._width == other._width and self._height == other._height
                and np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelBuffer({self._width}x{self._height})"
