"""
Transform Context for OpenXform.

This module defines the TransformContext, the explicit carrier of the
collaborators a raster notifies while it transforms: configuration, an
undo sink and a command recorder. Nothing here is reachable globally; a
raster only sees the context it was given.
"""

import abc
from typing import Any, Dict, Optional

from openxform.core.config import TransformConfig, get_default_transform_config
from openxform.core.exceptions import ImmutabilityError


class UndoSink(abc.ABC):
    """Receives a snapshot of a raster before it is mutated in place."""

    @abc.abstractmethod
    def snapshot(self, raster: Any, label: str) -> None:
        """
        Capture the state of ``raster`` before an in-place operation.

        Args:
            raster: The raster about to change
            label: Name of the operation, e.g. ``"rotate"``
        """
        pass


class CommandRecorder(abc.ABC):
    """Receives a macro-style record of each completed transform."""

    @abc.abstractmethod
    def record(self, command: str, options: Dict[str, str]) -> None:
        """
        Record a completed command.

        Args:
            command: Command name, e.g. ``"Rotate... "``
            options: Option keys mapped to their string values
        """
        pass


class TransformContext:
    """
    Collaborators for raster operations.

    After ``freeze()`` the context is immutable; rasters sharing a frozen
    context cannot rewire each other's collaborators.

    Attributes:
        config: TransformConfig supplying raster defaults and engine tuning.
        undo: Optional UndoSink notified before in-place mutation.
        recorder: Optional CommandRecorder notified after each transform.
    """

    def __init__(
        self,
        config: Optional[TransformConfig] = None,
        undo: Optional[UndoSink] = None,
        recorder: Optional[CommandRecorder] = None,
    ):
        # Direct assignment bypasses the custom __setattr__ during initialization.
        object.__setattr__(self, '_is_frozen', False)

        self.config = config or get_default_transform_config()
        self.undo = undo
        self.recorder = recorder

    def __setattr__(self, name: str, value: Any) -> None:
        """
        Set an attribute, preventing modification if the context is frozen.
        """
        if getattr(self, '_is_frozen', False) and name != '_is_frozen':
            raise ImmutabilityError(f"Cannot modify attribute '{name}' of a frozen TransformContext.")
        super().__setattr__(name, value)

    def snapshot(self, raster: Any, label: str) -> None:
        if self.undo is not None:
            self.undo.snapshot(raster, label)

    def record(self, command: str, options: Dict[str, str]) -> None:
        if self.recorder is not None:
            self.recorder.record(command, options)

    def freeze(self) -> None:
        """Freezes the context, making its attributes immutable."""
        self._is_frozen = True

    def is_frozen(self) -> bool:
        return self._is_frozen
