"""Pure geometry helpers shared by the controller and the extractor."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CropRectangle:
    """Crop selection in the displayed (flipped, unrotated) image's pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0.0:
            return 0.0
        return self.width / self.height

    def is_degenerate(self) -> bool:
        """Return True when the rectangle cannot describe any pixels."""
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            return True
        return self.width <= 0.0 or self.height <= 0.0

    def translated(self, dx: float, dy: float) -> "CropRectangle":
        return CropRectangle(self.x + dx, self.y + dy, self.width, self.height)


def normalize_rotation(degrees: float) -> float:
    """Map any angle in degrees onto ``[0, 360)``."""

    value = math.fmod(float(degrees), 360.0)
    if value < 0.0:
        value += 360.0
    # ``fmod`` of tiny negatives can land exactly on 360 after the shift.
    if value >= 360.0:
        value = 0.0
    return value


def rotated_bounds(width: float, height: float, degrees: float) -> tuple[float, float]:
    """Return the bounding box of a ``width`` x ``height`` rectangle rotated about its centre."""

    theta = math.radians(normalize_rotation(degrees))
    cos_t = abs(math.cos(theta))
    sin_t = abs(math.sin(theta))
    bound_w = width * cos_t + height * sin_t
    bound_h = width * sin_t + height * cos_t
    return bound_w, bound_h


def quarter_turns(degrees: float, *, tolerance: float = 1e-9) -> int | None:
    """Return 0-3 when *degrees* is a multiple of 90°, otherwise ``None``."""

    normalized = normalize_rotation(degrees)
    steps = round(normalized / 90.0)
    if abs(normalized - steps * 90.0) > tolerance:
        return None
    return int(steps) % 4


def fit_aspect_size(container_w: float, container_h: float, ratio: float) -> tuple[float, float]:
    """Return the largest ``(w, h)`` with ``w / h == ratio`` inside the container."""

    if container_w <= 0.0 or container_h <= 0.0 or ratio <= 0.0:
        return 0.0, 0.0
    if container_w / container_h > ratio:
        return container_h * ratio, container_h
    return container_w, container_w / ratio


def rotate_vector(dx: float, dy: float, degrees: float) -> tuple[float, float]:
    """Rotate ``(dx, dy)`` by *degrees* in y-down screen coordinates."""

    theta = math.radians(degrees)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return dx * cos_t - dy * sin_t, dx * sin_t + dy * cos_t


def round_px(value: float) -> int:
    """Round half up to the nearest integer pixel."""
    return int(math.floor(value + 0.5))


__all__ = [
    "CropRectangle",
    "fit_aspect_size",
    "normalize_rotation",
    "quarter_turns",
    "rotate_vector",
    "rotated_bounds",
    "round_px",
]
