"""
Geometric Transform Engine

Resize and rotate for packed-pixel buffers by inverse mapping: every
destination pixel is mapped back to a fractional source coordinate and
sampled through an interpolation kernel.

Destination rows carry no data dependency on one another, so the rows are
split into bands that may be computed on a thread pool. Each band writes a
disjoint slice of the output and only reads the source, which makes the
result independent of scheduling.
"""

import concurrent.futures
import logging
import math
from typing import Callable, List, Optional, Tuple, Union

import numpy as np

from openxform.constants.constants import PIXEL_MASK, InterpolationMode
from openxform.core.config import TransformConfig, get_default_transform_config
from openxform.core.exceptions import InvalidAngleError, InvalidDimensionsError
from openxform.core.pixels import PIXEL_DTYPE, PixelBuffer
from openxform.core.roi import RegionOfInterest
from openxform.processing.interpolation import get_kernel

logger = logging.getLogger(__name__)

BandFunc = Callable[[int, int], np.ndarray]


def normalize_angle(angle_degrees: float) -> float:
    """
    Reduce an angle in degrees into ``[0, 360)``.

    Raises:
        InvalidAngleError: If the angle is NaN or infinite
    """
    angle = float(angle_degrees)
    if not math.isfinite(angle):
        raise InvalidAngleError(f"Rotation angle must be finite, got {angle_degrees!r}")
    angle %= 360.0
    # Tiny negative angles round up to exactly 360.0
    return 0.0 if angle == 360.0 else angle


class GeometricTransformEngine:
    """
    Orchestrates resize and rotate over a PixelBuffer.

    The engine holds no per-call state; the source buffer, region, mode and
    target are all passed to each call and never retained.
    """

    def __init__(self, config: Optional[TransformConfig] = None):
        self.config = config or get_default_transform_config()

    def resize(self, source: PixelBuffer, roi: Optional[RegionOfInterest],
               mode: Union[InterpolationMode, str],
               target_width: int, target_height: int) -> PixelBuffer:
        """
        Resample the ROI of ``source`` into a new buffer of the target size.

        Destination pixel ``(ox, oy)`` samples the ROI at
        ``(ox * roi.width / target_width, oy * roi.height / target_height)``,
        top-left aligned with no half-pixel offset. Sampling is confined to
        the ROI, so edge replication happens at the ROI border.

        Args:
            source: Buffer to read; never modified
            roi: Region to resample, or None for the whole buffer
            mode: Interpolation mode used to sample
            target_width: Width of the result (> 0)
            target_height: Height of the result (> 0)

        Returns:
            A new, independently owned PixelBuffer

        Raises:
            InvalidDimensionsError: If a target dimension is not positive
        """
        if target_width <= 0 or target_height <= 0:
            raise InvalidDimensionsError(
                f"Resize target must be positive, got {target_width}x{target_height}")

        kernel = get_kernel(mode)
        region = (roi or RegionOfInterest.full(source.width, source.height)).clamp_to(
            source.width, source.height)
        cropped = region.crop(source)

        logger.debug(f"Resizing {region} of {source!r} to {target_width}x{target_height} "
                     f"with {kernel.mode.value}")

        if target_width == region.width and target_height == region.height:
            return cropped

        xs = np.arange(target_width, dtype=np.float64) * region.width / target_width
        ys = np.arange(target_height, dtype=np.float64) * region.height / target_height
        if kernel.mode is InterpolationMode.NEAREST:
            # Take the source pixel whose footprint holds the mapped point;
            # integer upscales then repeat each pixel as a whole block
            xs, ys = np.floor(xs), np.floor(ys)

        def compute_band(row_start: int, row_stop: int) -> np.ndarray:
            fx, fy = np.meshgrid(xs, ys[row_start:row_stop])
            return kernel.sample(cropped, fx, fy)

        pixels = self._compute_rows(target_width, target_height, compute_band)
        return PixelBuffer(target_width, target_height, pixels)

    def rotate(self, buffer: PixelBuffer, angle_degrees: float,
               mode: Union[InterpolationMode, str],
               roi: Optional[RegionOfInterest] = None,
               background: Optional[int] = None) -> None:
        """
        Rotate ``buffer`` in place about the centre of its ROI.

        Destination pixel ``(ox, oy)`` samples the source at
        ``cx + dx*cos + dy*sin, cy - dx*sin + dy*cos`` with ``(dx, dy)`` the
        offset from the centre. Pixels that map outside the region receive
        ``background``. Width and height are unchanged.

        Args:
            buffer: Buffer to rotate; modified only after the full result is computed
            angle_degrees: Rotation angle; any finite value, reduced modulo 360
            mode: Interpolation mode used to sample
            roi: Region to rotate, or None for the whole buffer
            background: Fill pixel; defaults to ``config.background_value``

        Raises:
            InvalidAngleError: If the angle is not finite; the buffer is untouched
        """
        angle = normalize_angle(angle_degrees)
        if angle == 0.0:
            logger.debug(f"Rotation by {angle_degrees} degrees is the identity; skipping")
            return

        kernel = get_kernel(mode)
        fill = self.config.background_value if background is None else int(background) & PIXEL_MASK
        region = (roi or RegionOfInterest.full(buffer.width, buffer.height)).clamp_to(
            buffer.width, buffer.height)
        source = region.crop(buffer)

        logger.debug(f"Rotating {region} of {buffer!r} by {angle} degrees with {kernel.mode.value}")

        theta = math.radians(angle)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        cx, cy = region.width / 2.0, region.height / 2.0
        dxs = np.arange(region.width, dtype=np.float64) - cx
        dys = np.arange(region.height, dtype=np.float64) - cy

        def compute_band(row_start: int, row_stop: int) -> np.ndarray:
            dx, dy = np.meshgrid(dxs, dys[row_start:row_stop])
            fx = cx + dx * cos_t + dy * sin_t
            fy = cy - dx * sin_t + dy * cos_t
            inside = ((fx >= -0.5) & (fx < region.width - 0.5)
                      & (fy >= -0.5) & (fy < region.height - 0.5))
            band = np.full(fx.shape, fill, dtype=PIXEL_DTYPE)
            if inside.any():
                band[inside] = kernel.sample(source, fx[inside], fy[inside])
            return band

        rotated = self._compute_rows(region.width, region.height, compute_band)
        buffer.as_2d()[region.y:region.bottom, region.x:region.right] = rotated.reshape(
            region.height, region.width)

    # -- Internal -----------------------------------------------------------

    def _row_bands(self, height: int, workers: int) -> List[Tuple[int, int]]:
        step = max(1, math.ceil(height / workers))
        return [(start, min(start + step, height)) for start in range(0, height, step)]

    def _compute_rows(self, width: int, height: int, compute_band: BandFunc) -> np.ndarray:
        """Evaluate ``compute_band`` over all destination rows, possibly in parallel."""
        out = np.empty((height, width), dtype=PIXEL_DTYPE)
        workers = min(self.config.num_workers, height)

        if workers <= 1 or width * height < self.config.parallel_threshold:
            out[:] = compute_band(0, height)
            return out.ravel()

        bands = self._row_bands(height, workers)
        logger.debug(f"Computing {width}x{height} destination in {len(bands)} bands "
                     f"on {workers} threads")

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_band = {
                executor.submit(compute_band, start, stop): (start, stop)
                for start, stop in bands
            }
            for future in concurrent.futures.as_completed(future_to_band):
                start, stop = future_to_band[future]
                out[start:stop] = future.result()
        return out.ravel()
