"""
Global pytest configuration and fixtures for OpenXform tests.

This module provides the shared rasters the transform tests are built on.
"""

import logging

import numpy as np
import pytest

from openxform import InterpolationMode, Raster, pack_rgb

WHITE = pack_rgb(255, 255, 255)
BLACK = pack_rgb(0, 0, 0)
RED = pack_rgb(255, 0, 0)
GREEN = pack_rgb(0, 255, 0)
BLUE = pack_rgb(0, 0, 255)
YELLOW = pack_rgb(255, 255, 0)


@pytest.fixture
def gradient_raster():
    """4x4 raster where pixel (x, y) is rgb(10x, 10y, x + y), nearest-neighbour mode."""
    pixels = [pack_rgb(x * 10, y * 10, x + y) for y in range(4) for x in range(4)]
    raster = Raster(4, 4, pixels)
    raster.set_interpolation_method(InterpolationMode.NEAREST)
    raster.reset_roi()
    return raster


@pytest.fixture
def quadrant_raster():
    """2x2 raster of red, green / blue, yellow."""
    raster = Raster(2, 2, [RED, GREEN, BLUE, YELLOW])
    raster.set_interpolation_method(InterpolationMode.NEAREST)
    return raster


@pytest.fixture
def l_shape_raster():
    """
    100x100 white raster with an asymmetric black L and a red marker.

    The pattern has no rotational symmetry, so every non-trivial rotation
    changes at least one pixel.
    """
    raster = Raster(100, 100)
    raster.set_color(WHITE)
    raster.fill()
    raster.set_color(BLACK)
    raster.fill_rect(10, 10, 40, 5)
    raster.fill_rect(10, 10, 5, 40)
    raster.set_color(RED)
    raster.fill_rect(80, 80, 5, 5)
    return raster


@pytest.fixture
def noise_pixels():
    """Reproducible random opaque pixels for a 40x30 raster."""
    rng = np.random.default_rng(1234)
    rgb = rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint32)
    return (np.uint32(0xFF000000) | (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]).ravel()


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level after a test reconfigures logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    package_level = logging.getLogger("openxform").level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger("openxform").setLevel(package_level)
