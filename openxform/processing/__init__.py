"""
Raster processing module for openxform.

This module provides the interpolation kernels and the geometric transform
engine that resizes and rotates packed-pixel buffers.
"""

from openxform.processing.geometric_transform import GeometricTransformEngine
from openxform.processing.interpolation import (KERNELS, BicubicKernel,
                                               BilinearKernel,
                                               InterpolationKernel,
                                               NearestKernel, get_kernel)

__all__ = [
    'BicubicKernel',
    'BilinearKernel',
    'GeometricTransformEngine',
    'InterpolationKernel',
    'KERNELS',
    'NearestKernel',
    'get_kernel',
]
