"""
Consolidated constants for OpenXform.

This module defines the interpolation modes, packed-pixel channel layout and
the engine defaults shared by the core and processing packages.
"""

from enum import Enum
from typing import Tuple, Union


class InterpolationMode(Enum):
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    BICUBIC = "bicubic"

    @classmethod
    def parse(cls, value: Union["InterpolationMode", str]) -> "InterpolationMode":
        """
        Resolve an interpolation mode from an enum member, value or name.

        ``"none"`` is accepted as an alias for NEAREST, matching the macro
        vocabulary of the interactive front end.

        Raises:
            KernelNotFoundError: If the value names no known mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _MODE_ALIASES:
                return _MODE_ALIASES[key]
            for mode in cls:
                if key == mode.value:
                    return mode

        # Local import keeps constants free of package-level dependencies
        from openxform.core.exceptions import KernelNotFoundError
        raise KernelNotFoundError(f"Unknown interpolation mode: {value!r}")


_MODE_ALIASES = {
    "none": InterpolationMode.NEAREST,
    "nearest_neighbor": InterpolationMode.NEAREST,
    "linear": InterpolationMode.BILINEAR,
    "cubic": InterpolationMode.BICUBIC,
}

# Packed pixel layout: ARGB, one 8-bit lane per channel
ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0
CHANNEL_SHIFTS: Tuple[int, int, int, int] = (ALPHA_SHIFT, RED_SHIFT, GREEN_SHIFT, BLUE_SHIFT)
CHANNEL_MASK = 0xFF
PIXEL_MASK = 0xFFFFFFFF
CHANNEL_MIN = 0
CHANNEL_MAX = 255

# Catmull-Rom member of the cubic convolution family
BICUBIC_A = -0.5

# Default values
DEFAULT_INTERPOLATION_MODE = InterpolationMode.BILINEAR
DEFAULT_BACKGROUND_VALUE = 0xFFFFFFFF  # opaque white
DEFAULT_FOREGROUND_VALUE = 0xFF000000  # opaque black
DEFAULT_CPU_THREAD_COUNT = 1
DEFAULT_PARALLEL_THRESHOLD = 65536  # destination pixels
DEFAULT_LOG_DIRECTORY_NAME = "openxform"
