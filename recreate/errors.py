"""Exception hierarchy. Every error here is fatal to a mosaic run."""

from __future__ import annotations


class MosaicError(Exception):
    """Base class for all errors raised by :mod:`recreate`."""


class InvalidConfigError(MosaicError, ValueError):
    """A configuration value is out of range."""


class InvalidGridError(MosaicError, ValueError):
    """Zero or degenerate grid request / reference dimensions."""


class EmptyCandidateSetError(MosaicError):
    """No usable candidate images to build the mosaic from."""


class EmptyRegionError(MosaicError):
    """A cell region with zero area. Indicates a grid planning bug."""


class ResizeError(MosaicError):
    """Resampling an image failed."""


class DecodeError(MosaicError):
    """An image could not be read or decoded."""
