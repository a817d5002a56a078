"""Geometric crop extraction: rotate the flipped raster, then copy the crop."""

from __future__ import annotations

import logging
import math

import numpy as np
from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QImage, QPainter

from ..errors import ExtractionError
from .geometry import CropRectangle, normalize_rotation, quarter_turns, rotated_bounds, round_px
from .raster import RasterImage

_LOGGER = logging.getLogger(__name__)


def extract(
    flipped_image: RasterImage,
    rotation: float,
    crop_rect: CropRectangle | None,
) -> RasterImage:
    """Return the region *crop_rect* of *flipped_image* rotated by *rotation*.

    *crop_rect* is expressed in the unrotated image's pixel space; the image is
    rotated about its centre into a buffer sized to the rotated bounding box
    and the rectangle is shifted by the padding that buffer adds.  The result
    is always ``round(width) x round(height)`` pixels; anything outside the
    rotated image is transparent.  Circular masks are a display concern and
    are never applied here.
    """

    if crop_rect is None:
        raise ExtractionError("No crop rectangle available yet")
    if crop_rect.is_degenerate():
        raise ExtractionError(f"Degenerate crop rectangle: {crop_rect}")
    out_w = round_px(crop_rect.width)
    out_h = round_px(crop_rect.height)
    if out_w < 1 or out_h < 1:
        raise ExtractionError(f"Crop rectangle rounds to an empty raster: {crop_rect}")

    degrees = normalize_rotation(rotation)
    img_w = float(flipped_image.width)
    img_h = float(flipped_image.height)
    bound_w, bound_h = rotated_bounds(img_w, img_h, degrees)

    working = _render_rotated(flipped_image, degrees, bound_w, bound_h)

    offset_x = (bound_w - img_w) / 2.0
    offset_y = (bound_h - img_h) / 2.0
    left = round_px(crop_rect.x + offset_x)
    top = round_px(crop_rect.y + offset_y)

    output = np.zeros((out_h, out_w, 4), dtype=np.uint8)
    buf_h, buf_w = working.shape[:2]
    src_left = max(left, 0)
    src_top = max(top, 0)
    src_right = min(left + out_w, buf_w)
    src_bottom = min(top + out_h, buf_h)
    if src_right > src_left and src_bottom > src_top:
        output[
            src_top - top : src_bottom - top,
            src_left - left : src_right - left,
        ] = working[src_top:src_bottom, src_left:src_right]
    else:
        _LOGGER.warning("Crop rectangle %s lies outside the rotated image", crop_rect)

    _LOGGER.debug(
        "Extracted %dx%d at (%d, %d) from %dx%d buffer (rotation %.3f°)",
        out_w,
        out_h,
        left,
        top,
        buf_w,
        buf_h,
        degrees,
    )
    return RasterImage(output)


def _render_rotated(
    image: RasterImage,
    degrees: float,
    bound_w: float,
    bound_h: float,
) -> np.ndarray:
    """Return the rotated pixels centred in a transparent bounding-box buffer."""

    steps = quarter_turns(degrees)
    if steps is not None:
        # Quarter turns map pixels one-to-one; ``rot90`` turns counter-clockwise
        # so clockwise screen rotation uses negative steps.
        return np.rot90(image.pixels, k=-steps)

    buf_w = max(1, math.ceil(bound_w - 1e-6))
    buf_h = max(1, math.ceil(bound_h - 1e-6))
    canvas = QImage(buf_w, buf_h, QImage.Format.Format_ARGB32_Premultiplied)
    canvas.fill(Qt.GlobalColor.transparent)
    source = image.to_qimage().convertToFormat(QImage.Format.Format_ARGB32_Premultiplied)

    painter = QPainter(canvas)
    try:
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        # The image centre sits at the float centre of the bounding box, which
        # keeps the crop offset exact even though the buffer is rounded up.
        painter.translate(bound_w / 2.0, bound_h / 2.0)
        painter.rotate(degrees)
        painter.translate(-image.width / 2.0, -image.height / 2.0)
        painter.drawImage(QPointF(0.0, 0.0), source)
    finally:
        painter.end()

    return RasterImage.from_qimage(canvas).pixels


__all__ = ["extract"]
