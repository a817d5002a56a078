"""
Crop session model for state management.

This module holds the crop parameter vector and derives the crop rectangle
from it without any direct UI interaction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ...config import (
    ASPECT_PRESETS,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    SMALL_IMAGE_INITIAL_ZOOM,
    SMALL_IMAGE_THRESHOLD_PX,
)
from ...core.flip import FlipState
from ...core.geometry import CropRectangle, fit_aspect_size


@dataclass(frozen=True)
class AspectConstraint:
    """Either a fixed ``w:h`` ratio or ``free`` (the image's natural ratio)."""

    label: str = "Original"
    ratio: float | None = None

    @classmethod
    def free(cls) -> "AspectConstraint":
        return cls()

    @classmethod
    def fixed(cls, width: int, height: int) -> "AspectConstraint":
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid aspect ratio {width}:{height}")
        return cls(f"{width}:{height}", float(width) / float(height))

    @classmethod
    def parse(cls, label: str) -> "AspectConstraint":
        """Return the constraint for a preset label or a ``"w:h"`` string."""

        for name, value in ASPECT_PRESETS:
            if name.lower() == label.strip().lower():
                return cls.free() if value is None else cls.fixed(*value)
        try:
            width_text, height_text = label.split(":")
            return cls.fixed(int(width_text), int(height_text))
        except ValueError:
            raise ValueError(f"unrecognised aspect ratio {label!r}") from None

    @property
    def is_free(self) -> bool:
        return self.ratio is None

    def resolve(self, natural_ratio: float) -> float:
        return natural_ratio if self.ratio is None else self.ratio


@dataclass(frozen=True)
class CropSnapshot:
    """Consistent view of every crop parameter at one point in time."""

    crop_rect: CropRectangle
    zoom: float
    rotation: float
    flip: FlipState
    aspect: AspectConstraint
    revision: int


def clamp_zoom(value: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, float(value)))


def is_small_image(width: int, height: int) -> bool:
    """Return True when either side is below the small-image threshold.

    One short side is enough: a 1200x250 banner is as awkward to crop as a
    thumbnail, so this does not require both dimensions to be small.
    """
    return width < SMALL_IMAGE_THRESHOLD_PX or height < SMALL_IMAGE_THRESHOLD_PX


class CropSessionModel:
    """Manages the crop parameter vector for the loaded image."""

    def __init__(self) -> None:
        self._image_size: tuple[int, int] = (0, 0)
        self._center_x: float = 0.0
        self._center_y: float = 0.0
        self._zoom: float = DEFAULT_ZOOM
        self._initial_zoom: float = DEFAULT_ZOOM
        self._rotation: float = 0.0
        self._flip = FlipState()
        self._aspect = AspectConstraint.free()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def has_image(self) -> bool:
        width, height = self._image_size
        return width > 0 and height > 0

    @property
    def image_size(self) -> tuple[int, int]:
        return self._image_size

    @property
    def natural_ratio(self) -> float:
        width, height = self._image_size
        if width <= 0 or height <= 0:
            return 1.0
        return float(width) / float(height)

    @property
    def center(self) -> tuple[float, float]:
        return self._center_x, self._center_y

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def initial_zoom(self) -> float:
        return self._initial_zoom

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def flip(self) -> FlipState:
        return self._flip

    @property
    def aspect(self) -> AspectConstraint:
        return self._aspect

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def load(self, width: int, height: int) -> None:
        """Initialise every parameter for a freshly loaded image."""

        self._image_size = (int(width), int(height))
        self._initial_zoom = SMALL_IMAGE_INITIAL_ZOOM if is_small_image(width, height) else DEFAULT_ZOOM
        self.reset()

    def reset(self) -> None:
        width, height = self._image_size
        self._center_x = width / 2.0
        self._center_y = height / 2.0
        self._zoom = self._initial_zoom
        self._rotation = 0.0
        self._flip = FlipState()
        self._aspect = AspectConstraint.free()

    def set_zoom(self, value: float) -> bool:
        new_zoom = clamp_zoom(value)
        if abs(new_zoom - self._zoom) <= 1e-9:
            return False
        self._zoom = new_zoom
        self.clamp_center()
        return True

    def set_rotation(self, degrees: float) -> bool:
        new_rotation = float(degrees)
        if abs(new_rotation - self._rotation) <= 1e-9:
            return False
        self._rotation = new_rotation
        return True

    def set_flip(self, state: FlipState) -> bool:
        if state == self._flip:
            return False
        self._flip = state
        return True

    def set_aspect(self, constraint: AspectConstraint) -> bool:
        if constraint == self._aspect:
            return False
        self._aspect = constraint
        self.clamp_center()
        return True

    def translate_center(self, dx: float, dy: float) -> bool:
        """Move the crop centre by ``(dx, dy)`` image pixels."""

        old = self.center
        self._center_x += float(dx)
        self._center_y += float(dy)
        self.clamp_center()
        new = self.center
        return any(abs(a - b) > 1e-9 for a, b in zip(old, new))

    def clamp_center(self) -> None:
        """Keep the crop rectangle inside the displayed image."""

        width, height = self._image_size
        crop_w, crop_h = self.crop_size()
        half_w = crop_w * 0.5
        half_h = crop_h * 0.5
        self._center_x = max(half_w, min(width - half_w, self._center_x))
        self._center_y = max(half_h, min(height - half_h, self._center_y))

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------
    def crop_size(self) -> tuple[float, float]:
        """Return the crop ``(width, height)`` for the current aspect and zoom."""

        width, height = self._image_size
        ratio = self._aspect.resolve(self.natural_ratio)
        base_w, base_h = fit_aspect_size(float(width), float(height), ratio)
        return base_w / self._zoom, base_h / self._zoom

    def crop_rect(self) -> CropRectangle | None:
        if not self.has_image:
            return None
        crop_w, crop_h = self.crop_size()
        width, height = self._image_size
        # Clamp once more against float drift from repeated pans.
        left = max(0.0, min(width - crop_w, self._center_x - crop_w * 0.5))
        top = max(0.0, min(height - crop_h, self._center_y - crop_h * 0.5))
        if not (math.isfinite(left) and math.isfinite(top)):
            return None
        return CropRectangle(left, top, crop_w, crop_h)
