"""
OpenXform: a raster geometric-transform engine.

This module provides the public API for OpenXform: packed-pixel buffers,
regions of interest, interpolation kernels and the resize/rotate engine,
fronted by the Raster class.
"""

import logging

__version__ = "0.1.0"


# Set up basic logging configuration if none exists
# This ensures INFO level logging works when used outside a host application
def _ensure_basic_logging():
    """Ensure basic logging is configured if no configuration exists."""
    root_logger = logging.getLogger()

    # Only configure if no handlers exist and level is too high
    if not root_logger.handlers and root_logger.level > logging.INFO:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

# Configure basic logging on import
_ensure_basic_logging()

# Re-export public API
from openxform.constants.constants import InterpolationMode  # noqa: E402
from openxform.core.config import (TransformConfig,  # noqa: E402
                                   get_default_transform_config,
                                   load_transform_config)
from openxform.core.context import (CommandRecorder,  # noqa: E402
                                    TransformContext, UndoSink)
from openxform.core.exceptions import (ImmutabilityError,  # noqa: E402
                                       InvalidAngleError,
                                       InvalidDimensionsError,
                                       KernelNotFoundError, OpenXformError,
                                       OutOfBoundsError)
from openxform.core.pixels import (PixelBuffer, pack_argb,  # noqa: E402
                                   pack_rgb, unpack_argb)
from openxform.core.raster import Raster  # noqa: E402
from openxform.core.roi import RegionOfInterest  # noqa: E402
from openxform.processing.geometric_transform import (  # noqa: E402
    GeometricTransformEngine)

__all__ = [
    # Core types
    "Raster",
    "PixelBuffer",
    "RegionOfInterest",
    "InterpolationMode",
    "GeometricTransformEngine",

    # Configuration and context
    "TransformConfig",
    "get_default_transform_config",
    "load_transform_config",
    "TransformContext",
    "UndoSink",
    "CommandRecorder",

    # Pixel helpers
    "pack_argb",
    "pack_rgb",
    "unpack_argb",

    # Errors
    "OpenXformError",
    "OutOfBoundsError",
    "InvalidDimensionsError",
    "InvalidAngleError",
    "KernelNotFoundError",
    "ImmutabilityError",
]
