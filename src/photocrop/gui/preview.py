"""Display-only helpers for the crop preview."""

from __future__ import annotations

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QImage, QPainter, QPainterPath

from ..core.raster import RasterImage


def circular_preview(image: RasterImage) -> QImage:
    """Return *image* masked to its inscribed ellipse for on-screen display.

    The mask is never written back into the raster, encoded results stay
    rectangular.
    """

    source = image.to_qimage().convertToFormat(QImage.Format.Format_ARGB32_Premultiplied)
    masked = QImage(source.size(), QImage.Format.Format_ARGB32_Premultiplied)
    masked.fill(Qt.GlobalColor.transparent)

    path = QPainterPath()
    path.addEllipse(QRectF(0.0, 0.0, float(image.width), float(image.height)))
    painter = QPainter(masked)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setClipPath(path)
        painter.drawImage(0, 0, source)
    finally:
        painter.end()
    return masked


__all__ = ["circular_preview"]
