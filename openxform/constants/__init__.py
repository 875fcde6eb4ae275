from openxform.constants.constants import (BICUBIC_A, CHANNEL_SHIFTS,
                                          DEFAULT_BACKGROUND_VALUE,
                                          DEFAULT_INTERPOLATION_MODE,
                                          InterpolationMode)

__all__ = [
    'BICUBIC_A',
    'CHANNEL_SHIFTS',
    'DEFAULT_BACKGROUND_VALUE',
    'DEFAULT_INTERPOLATION_MODE',
    'InterpolationMode',
]
