"""Custom exception hierarchy for photocrop."""

from __future__ import annotations


class CropperError(Exception):
    """Base class for all custom errors raised by photocrop."""


class DecodeError(CropperError):
    """Raised when source bytes cannot be decoded into a raster.

    Fatal to the editing session; there is nothing to retry.
    """


class ExtractionError(CropperError):
    """Raised when the crop rectangle is missing or degenerate.

    Recoverable: the caller should wait for a settled interaction snapshot
    and try again.
    """


class EncodeError(CropperError):
    """Raised when the output raster cannot be encoded within safety bounds."""


__all__ = ["CropperError", "DecodeError", "EncodeError", "ExtractionError"]
