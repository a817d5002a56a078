"""Helpers for decoding Qt image primitives with Pillow fallbacks."""

from __future__ import annotations

from io import BytesIO
from typing import Optional
import logging

from PIL import Image, ImageOps
from PIL.ImageQt import ImageQt
from PySide6.QtCore import QBuffer, QByteArray, QIODevice
from PySide6.QtGui import QImage, QImageReader

_LOGGER = logging.getLogger(__name__)


def qimage_from_bytes(data: bytes) -> Optional[QImage]:
    """Return a :class:`QImage` decoded from container *data* (PNG, JPEG, ...).

    Qt gets the first attempt because its reader honours EXIF orientation
    without materialising an intermediate copy.  Pillow covers the formats the
    installed Qt image plugins do not.
    """

    if not data:
        return None
    image = _load_with_qt(data)
    if image is not None:
        return image
    return _load_with_pillow(data)


def _load_with_qt(data: bytes) -> Optional[QImage]:
    payload = QByteArray(data)
    buffer = QBuffer(payload)
    if not buffer.open(QIODevice.OpenModeFlag.ReadOnly):
        return None
    try:
        reader = QImageReader(buffer)
        # Orientation tags are applied here so that crop coordinates always
        # refer to the image the user actually sees.
        reader.setAutoTransform(True)
        image = reader.read()
    finally:
        buffer.close()
    if image.isNull():
        _LOGGER.debug("Qt could not decode %d bytes: %s", len(data), reader.errorString())
        return None
    return image


def _load_with_pillow(data: bytes) -> Optional[QImage]:
    try:
        with Image.open(BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            qt_image = ImageQt(img.convert("RGBA"))
    except Exception:
        _LOGGER.exception("Pillow failed to decode image bytes")
        return None
    return QImage(qt_image)


__all__ = ["qimage_from_bytes"]
