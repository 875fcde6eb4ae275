"""
Configuration dataclasses for OpenXform.

This module defines the TransformConfig consumed by rasters and the geometric
transform engine, plus a loader for user-supplied YAML overrides.
Configuration is intended to be immutable and provided as Python objects.
"""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from openxform.constants.constants import (DEFAULT_BACKGROUND_VALUE,
                                          DEFAULT_CPU_THREAD_COUNT,
                                          DEFAULT_INTERPOLATION_MODE,
                                          DEFAULT_PARALLEL_THRESHOLD,
                                          PIXEL_MASK, InterpolationMode)
from openxform.core.exceptions import KernelNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformConfig:
    """Engine and raster defaults for geometric transforms."""
    interpolation: InterpolationMode = DEFAULT_INTERPOLATION_MODE
    """Interpolation mode a new raster starts with."""

    background_value: int = DEFAULT_BACKGROUND_VALUE
    """Packed pixel written where a rotation maps outside the source region."""

    num_workers: int = DEFAULT_CPU_THREAD_COUNT
    """Threads used to compute destination row bands. 1 disables the pool."""

    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD
    """Minimum number of destination pixels before work is split across threads."""

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'interpolation', InterpolationMode.parse(self.interpolation))
        object.__setattr__(self, 'background_value', int(self.background_value) & PIXEL_MASK)
        if self.num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {self.num_workers}")
        if self.parallel_threshold < 1:
            raise ValueError(f"parallel_threshold must be >= 1, got {self.parallel_threshold}")


def get_default_transform_config() -> TransformConfig:
    """Provides a default instance of TransformConfig."""
    return TransformConfig()


def load_transform_config(config_file: Union[str, Path]) -> TransformConfig:
    """
    Load a TransformConfig from a YAML file, falling back to defaults.

    Missing files, empty documents, malformed YAML and invalid field values
    all yield the default configuration; the reason is logged.

    Args:
        config_file: Path to a YAML mapping of TransformConfig fields

    Returns:
        The loaded configuration, or the defaults
    """
    config_file = Path(config_file)
    if not config_file.exists():
        logger.info(f"No transform config at {config_file}; using defaults.")
        return get_default_transform_config()

    logger.info(f"Attempting to load TransformConfig from {config_file}")
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            loaded_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning(f"Error parsing YAML from {config_file}: {e}. Using default config.")
        return get_default_transform_config()

    if not loaded_data or not isinstance(loaded_data, dict):
        logger.warning(f"Config file {config_file} is empty or not a valid structure. Using default config.")
        return get_default_transform_config()

    try:
        return _construct_config_from_data(loaded_data)
    except (TypeError, ValueError, KernelNotFoundError) as e:
        logger.warning(f"Error constructing TransformConfig from {config_file}: {e}. Using default config.")
        return get_default_transform_config()


def _construct_config_from_data(loaded_data: Dict[str, Any]) -> TransformConfig:
    known = {f.name for f in dataclasses.fields(TransformConfig)}
    unknown = set(loaded_data) - known
    if unknown:
        raise TypeError(f"Unknown TransformConfig fields: {sorted(unknown)}")

    config = dataclasses.replace(get_default_transform_config(), **loaded_data)
    logger.info("Successfully loaded TransformConfig.")
    return config
