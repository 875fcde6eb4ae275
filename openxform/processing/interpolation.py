"""
Interpolation Kernels

Resampling strategies that read a PixelBuffer at fractional source
coordinates. Each kernel is a flat, stateless class exposing a single
``sample`` capability; kernels are looked up by InterpolationMode through
the KERNELS registry.

All kernels share one edge policy: coordinates are clamped to the nearest
valid pixel before sampling (replicate-edge, never wrap or zero-fill). At
integer coordinates every kernel returns the stored pixel unchanged.
"""

import abc
import logging
from typing import Any, Dict, Tuple, Type, Union

import numpy as np

from openxform.constants.constants import (BICUBIC_A, CHANNEL_MAX,
                                          CHANNEL_MIN, InterpolationMode)
from openxform.core.exceptions import KernelNotFoundError
from openxform.core.pixels import PixelBuffer, merge_channels, split_channels

logger = logging.getLogger(__name__)

Coordinate = Union[float, np.ndarray]


def _prepare(buffer: PixelBuffer, fx: Coordinate, fy: Coordinate) -> Tuple[np.ndarray, np.ndarray, bool]:
    """Broadcast and edge-clamp coordinates into the buffer extent."""
    scalar = np.ndim(fx) == 0 and np.ndim(fy) == 0
    fx, fy = np.broadcast_arrays(np.asarray(fx, dtype=np.float64),
                                 np.asarray(fy, dtype=np.float64))
    fx = np.clip(fx, 0.0, buffer.width - 1)
    fy = np.clip(fy, 0.0, buffer.height - 1)
    return fx, fy, scalar


def _finish(lanes: np.ndarray, scalar: bool) -> Any:
    """Round interpolated lanes to the nearest integer in [0, 255] and repack."""
    rounded = np.clip(np.floor(lanes + 0.5), CHANNEL_MIN, CHANNEL_MAX)
    packed = merge_channels(rounded)
    return int(packed) if scalar else packed


class InterpolationKernel(abc.ABC):
    """
    Interface for interpolation kernels.

    All implementations must:
    1. Accept fractional coordinates in source-buffer space, scalar or array
    2. Clamp out-of-range coordinates to the buffer edge
    3. Be stateless (no instance attributes)
    4. Return packed pixels: an int for scalar input, a uint32 array otherwise
    """

    mode: InterpolationMode

    @classmethod
    @abc.abstractmethod
    def sample(cls, buffer: PixelBuffer, fx: Coordinate, fy: Coordinate) -> Any:
        """
        Sample ``buffer`` at fractional coordinates.

        Args:
            buffer: Source buffer, never modified
            fx: Column coordinate(s); may lie outside ``[0, width)``
            fy: Row coordinate(s); may lie outside ``[0, height)``

        Returns:
            Packed pixel(s) with the broadcast shape of ``fx`` and ``fy``
        """
        pass


class NearestKernel(InterpolationKernel):
    """Closest stored pixel, returned verbatim; ``.5`` ties round to the larger index."""

    mode = InterpolationMode.NEAREST

    @classmethod
    def sample(cls, buffer: PixelBuffer, fx: Coordinate, fy: Coordinate) -> Any:
        fx, fy, scalar = _prepare(buffer, fx, fy)
        xi = np.minimum(np.floor(fx + 0.5), buffer.width - 1).astype(np.intp)
        yi = np.minimum(np.floor(fy + 0.5), buffer.height - 1).astype(np.intp)
        values = buffer.as_2d()[yi, xi]
        return int(values) if scalar else values.astype(np.uint32)


class BilinearKernel(InterpolationKernel):
    """Per-channel linear blend of the four surrounding pixels."""

    mode = InterpolationMode.BILINEAR

    @classmethod
    def sample(cls, buffer: PixelBuffer, fx: Coordinate, fy: Coordinate) -> Any:
        fx, fy, scalar = _prepare(buffer, fx, fy)
        lanes = split_channels(buffer.as_2d())

        x0 = np.floor(fx).astype(np.intp)
        y0 = np.floor(fy).astype(np.intp)
        x1 = np.minimum(x0 + 1, buffer.width - 1)
        y1 = np.minimum(y0 + 1, buffer.height - 1)
        tx = (fx - x0)[..., np.newaxis]
        ty = (fy - y0)[..., np.newaxis]

        top = lanes[y0, x0] + (lanes[y0, x1] - lanes[y0, x0]) * tx
        bottom = lanes[y1, x0] + (lanes[y1, x1] - lanes[y1, x0]) * tx
        return _finish(top + (bottom - top) * ty, scalar)


def cubic_weights(t: np.ndarray, a: float = BICUBIC_A) -> Tuple[np.ndarray, ...]:
    """
    Cubic convolution weights for the four taps at offsets -1, 0, 1, 2.

    Args:
        t: Fractional position(s) in ``[0, 1)`` past the base pixel
        a: Kernel coefficient; ``-0.5`` gives Catmull-Rom

    Returns:
        Tuple of four weight arrays, each shaped like ``t``
    """
    def near(d):  # |d| <= 1
        return ((a + 2.0) * d - (a + 3.0)) * d * d + 1.0

    def far(d):  # 1 < |d| < 2
        return ((a * d - 5.0 * a) * d + 8.0 * a) * d - 4.0 * a

    return far(1.0 + t), near(t), near(1.0 - t), far(2.0 - t)


class BicubicKernel(InterpolationKernel):
    """Per-channel cubic convolution over the surrounding 4x4 neighbourhood."""

    mode = InterpolationMode.BICUBIC

    @classmethod
    def sample(cls, buffer: PixelBuffer, fx: Coordinate, fy: Coordinate) -> Any:
        fx, fy, scalar = _prepare(buffer, fx, fy)
        lanes = split_channels(buffer.as_2d())

        x0 = np.floor(fx).astype(np.intp)
        y0 = np.floor(fy).astype(np.intp)
        wx = cubic_weights(fx - x0)
        wy = cubic_weights(fy - y0)

        result = np.zeros(fx.shape + (lanes.shape[-1],), dtype=np.float64)
        for j, offset_y in enumerate(range(-1, 3)):
            yj = np.clip(y0 + offset_y, 0, buffer.height - 1)
            row = np.zeros_like(result)
            for i, offset_x in enumerate(range(-1, 3)):
                xi = np.clip(x0 + offset_x, 0, buffer.width - 1)
                row += lanes[yj, xi] * wx[i][..., np.newaxis]
            result += row * wy[j][..., np.newaxis]
        return _finish(result, scalar)


KERNELS: Dict[InterpolationMode, Type[InterpolationKernel]] = {
    kernel.mode: kernel for kernel in (NearestKernel, BilinearKernel, BicubicKernel)
}


def get_kernel(mode: Union[InterpolationMode, str]) -> Type[InterpolationKernel]:
    """
    Return the kernel registered for ``mode``.

    Raises:
        KernelNotFoundError: If no kernel is registered for the mode
    """
    resolved = InterpolationMode.parse(mode)
    try:
        return KERNELS[resolved]
    except KeyError:
        raise KernelNotFoundError(f"No kernel registered for {resolved.value}") from None
