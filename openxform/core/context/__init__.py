"""
Core context package containing components for context management.
"""

from .transform_context import CommandRecorder, TransformContext, UndoSink

__all__ = [
    'CommandRecorder',
    'TransformContext',
    'UndoSink',
]
