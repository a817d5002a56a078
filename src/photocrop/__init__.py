"""photocrop: flip, rotate and crop a photo into a new lossless image."""

from __future__ import annotations

from .core import (
    CropRectangle,
    FlipState,
    RasterImage,
    decode_image,
    encode,
    extract,
    flip,
    normalize_rotation,
    rotated_bounds,
    to_data_url,
)
from .errors import CropperError, DecodeError, EncodeError, ExtractionError

__all__ = [
    "CropRectangle",
    "CropperError",
    "DecodeError",
    "EncodeError",
    "ExtractionError",
    "FlipState",
    "RasterImage",
    "decode_image",
    "encode",
    "extract",
    "flip",
    "normalize_rotation",
    "rotated_bounds",
    "to_data_url",
]
