"""Exception types raised by the composer core."""

from __future__ import annotations


class CanvasComposerError(Exception):
    """Base class for all composer errors."""


class DecodeError(CanvasComposerError):
    """A file could not be turned into a usable bitmap."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class EmptyCompositionError(CanvasComposerError):
    """Flatten was requested while no layer is visible."""


class GenerationError(CanvasComposerError):
    """A submission to the generation service failed."""
