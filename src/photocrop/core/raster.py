"""Immutable RGBA raster used by every stage of the crop pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from PySide6.QtGui import QImage

from ..errors import DecodeError
from ..utils import image_loader

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RasterImage:
    """RGBA8888 pixels stored as a read-only ``(height, width, 4)`` array.

    Transform steps never mutate a raster; they return a new one.  Equality is
    pixel-exact.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"expected an (H, W, 4) array, got shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError(f"raster must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}")
        # Copy anything the caller could still write to.
        arr = np.array(arr, dtype=np.uint8, order="C", copy=True)
        arr.flags.writeable = False
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """Return ``(width, height)``."""
        return self.width, self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return bool(np.array_equal(self.pixels, other.pixels))

    def __repr__(self) -> str:
        return f"RasterImage({self.width}x{self.height})"

    @classmethod
    def filled(cls, width: int, height: int, rgba: tuple[int, int, int, int]) -> "RasterImage":
        """Return a raster of *width* x *height* filled with a single colour."""

        arr = np.empty((int(height), int(width), 4), dtype=np.uint8)
        arr[...] = rgba
        return cls(arr)

    @classmethod
    def from_qimage(cls, image: QImage) -> "RasterImage":
        """Copy the pixels of *image* into a new raster."""

        if image is None or image.isNull():
            raise DecodeError("Cannot rasterize a null image")
        converted = image.convertToFormat(QImage.Format.Format_RGBA8888)
        width = converted.width()
        height = converted.height()
        bytes_per_line = converted.bytesPerLine()
        ptr = converted.constBits()
        if hasattr(ptr, "setsize"):
            ptr.setsize(converted.sizeInBytes())
        buffer = np.frombuffer(ptr, dtype=np.uint8, count=bytes_per_line * height)
        # Qt pads scanlines to 32-bit boundaries; RGBA rows are already aligned
        # but the stride is honoured regardless.
        surface = buffer.reshape((height, bytes_per_line))[:, : width * 4]
        return cls(surface.reshape((height, width, 4)))

    def to_qimage(self) -> QImage:
        """Return a detached ``Format_RGBA8888`` :class:`QImage` copy."""

        data = self.pixels.tobytes()
        image = QImage(data, self.width, self.height, self.width * 4, QImage.Format.Format_RGBA8888)
        # ``copy`` detaches the image from ``data`` which is released on return.
        return image.copy()


def decode_image(data: bytes) -> RasterImage:
    """Decode container *data* into a :class:`RasterImage`.

    Raises :class:`DecodeError` when neither Qt nor Pillow can read the bytes.
    """

    image = image_loader.qimage_from_bytes(data)
    if image is None or image.isNull():
        _LOGGER.error("Unable to decode source image (%d bytes)", len(data or b""))
        raise DecodeError("Source image could not be decoded")
    return RasterImage.from_qimage(image)


__all__ = ["RasterImage", "decode_image"]
