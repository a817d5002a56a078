"""Lossless encoding of output rasters."""

from __future__ import annotations

import base64
import logging

from PySide6.QtCore import QBuffer, QByteArray, QIODevice

from ..config import MAX_OUTPUT_DIMENSION, OUTPUT_FORMAT, OUTPUT_MIME_TYPE
from ..errors import EncodeError
from .raster import RasterImage

_LOGGER = logging.getLogger(__name__)


def encode(image: RasterImage, *, max_dimension: int = MAX_OUTPUT_DIMENSION) -> bytes:
    """Return *image* encoded as PNG.

    Identical pixels always produce identical bytes.  Rasters wider or taller
    than *max_dimension* raise :class:`EncodeError` instead of being truncated.
    """

    if image.width > max_dimension or image.height > max_dimension:
        _LOGGER.error(
            "Refusing to encode %dx%d raster (limit %d px)",
            image.width,
            image.height,
            max_dimension,
        )
        raise EncodeError(
            f"Output {image.width}x{image.height} exceeds the {max_dimension}px limit"
        )

    payload = QByteArray()
    buffer = QBuffer(payload)
    if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
        raise EncodeError("Unable to open the output buffer")
    try:
        # Quality only affects zlib effort for PNG; the pixels stay lossless.
        saved = image.to_qimage().save(buffer, OUTPUT_FORMAT, -1)
    finally:
        buffer.close()
    if not saved:
        _LOGGER.error("Qt failed to write %s output for %r", OUTPUT_FORMAT, image)
        raise EncodeError(f"Failed to encode image as {OUTPUT_FORMAT}")
    return bytes(payload.data())


def to_data_url(encoded: bytes) -> str:
    """Return *encoded* as a ``data:`` URL suitable for an ``<img>`` source."""

    return f"data:{OUTPUT_MIME_TYPE};base64,{base64.b64encode(encoded).decode('ascii')}"


__all__ = ["encode", "to_data_url"]
