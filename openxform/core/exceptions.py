"""
Custom exceptions for the OpenXform core system.
Ensures that errors are specific and fail loudly.
"""

class OpenXformError(Exception):
    """Base class for all OpenXform custom exceptions."""
    pass

class OutOfBoundsError(OpenXformError, IndexError):
    """Raised when a pixel coordinate lies outside the extent of a buffer."""
    pass

class InvalidDimensionsError(OpenXformError, ValueError):
    """Raised when a requested width or height is non-positive, or data does not fit the dimensions."""
    pass

class KernelNotFoundError(OpenXformError, KeyError):
    """Raised when a requested interpolation kernel is not registered."""
    pass

class ImmutabilityError(OpenXformError, AttributeError):
    """Raised when an attempt is made to modify an immutable object after initialization."""
    pass

class InvalidAngleError(OpenXformError, ValueError):
    """Raised when a rotation angle is not a finite number."""
    pass
