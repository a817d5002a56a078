"""Pure raster transforms: decode, flip, extract and encode."""

from .encode import encode, to_data_url
from .extract import extract
from .flip import FlipState, flip
from .geometry import CropRectangle, normalize_rotation, rotated_bounds
from .raster import RasterImage, decode_image

__all__ = [
    "CropRectangle",
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
