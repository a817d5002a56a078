"""
Crop interaction controller.

This module acts as the coordinator between raw UI events and the crop
session model.  Every change produces exactly one :class:`CropSnapshot`, so
consumers never observe a crop rectangle paired with a flip or rotation from
a different moment.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from PySide6.QtCore import QPointF

from ...config import ROTATION_SLIDER_RANGE, ROTATION_STEP_DEGREES, ZOOM_WHEEL_STEP
from ...core.flip import FlipState
from .model import AspectConstraint, CropSessionModel, CropSnapshot, is_small_image
from .strategies import InteractionStrategy, PanStrategy

_LOGGER = logging.getLogger(__name__)


class CropInteractionController:
    """Translates pointer, zoom, rotation, flip and aspect input into snapshots."""

    def __init__(
        self,
        *,
        on_snapshot_changed: Callable[[CropSnapshot], None] | None = None,
        view_scale_provider: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the crop interaction controller.

        Parameters
        ----------
        on_snapshot_changed:
            Callback receiving every new :class:`CropSnapshot`.
        view_scale_provider:
            Callable returning viewport pixels per image pixel, used to convert
            drag deltas.  Defaults to ``1.0``.
        """
        self._on_snapshot_changed = on_snapshot_changed
        self._view_scale_provider = view_scale_provider or (lambda: 1.0)

        self._model = CropSessionModel()
        self._revision: int = 0
        self._snapshot: CropSnapshot | None = None
        self._current_strategy: InteractionStrategy | None = None
        self._small_image: bool = False
        self._show_drag_hint: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def snapshot(self) -> CropSnapshot | None:
        """Return the latest snapshot, or ``None`` before an image is loaded."""
        return self._snapshot

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def is_small_image(self) -> bool:
        """Advisory flag: the image is below the comfortable editing size."""
        return self._small_image

    @property
    def show_drag_hint(self) -> bool:
        """Advisory flag: suggest dragging to reposition the crop."""
        return self._show_drag_hint

    @property
    def image_size(self) -> tuple[int, int]:
        return self._model.image_size

    def load_image(self, width: int, height: int) -> None:
        """Initialise the session for an image of ``width`` x ``height`` pixels."""

        if width <= 0 or height <= 0:
            _LOGGER.warning("Ignoring image with invalid size %dx%d", width, height)
            return
        self._current_strategy = None
        self._model.load(width, height)
        self._small_image = is_small_image(width, height)
        self._show_drag_hint = not self._small_image
        if self._small_image:
            _LOGGER.info("Image %dx%d is small; starting at zoom %.1f", width, height, self._model.zoom)
        self._emit_snapshot()

    def reset(self) -> None:
        """Restore centre, zoom, rotation, flip and aspect in a single step."""
        if not self._model.has_image:
            return
        self._current_strategy = None
        self._model.reset()
        self._emit_snapshot()

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------
    def set_zoom(self, value: float) -> None:
        if not _is_finite(value):
            _LOGGER.debug("Ignoring non-finite zoom %r", value)
            return
        if self._model.set_zoom(value):
            self._emit_snapshot()

    def zoom_by(self, steps: float) -> None:
        """Apply wheel input: each step changes zoom by a fixed increment."""
        if not _is_finite(steps):
            return
        self.set_zoom(self._model.zoom + float(steps) * ZOOM_WHEEL_STEP)

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------
    def set_rotation(self, degrees: float) -> None:
        """Apply a slider value, clamped to the slider's range."""
        if not _is_finite(degrees):
            _LOGGER.debug("Ignoring non-finite rotation %r", degrees)
            return
        low, high = ROTATION_SLIDER_RANGE
        self._apply_rotation(max(low, min(high, float(degrees))))

    def rotate_left(self) -> None:
        self._apply_rotation(self._model.rotation - ROTATION_STEP_DEGREES)

    def rotate_right(self) -> None:
        self._apply_rotation(self._model.rotation + ROTATION_STEP_DEGREES)

    def _apply_rotation(self, degrees: float) -> None:
        # The raw value is kept so the UI can show e.g. -90; geometry
        # normalises it when consumed.
        if self._model.set_rotation(degrees):
            self._emit_snapshot()

    # ------------------------------------------------------------------
    # Flip / aspect
    # ------------------------------------------------------------------
    def set_flip(self, state: FlipState) -> None:
        if self._model.set_flip(state):
            self._emit_snapshot()

    def toggle_flip_horizontal(self) -> None:
        self.set_flip(self._model.flip.toggled_horizontal())

    def toggle_flip_vertical(self) -> None:
        self.set_flip(self._model.flip.toggled_vertical())

    def set_aspect(self, constraint: AspectConstraint) -> None:
        if self._model.set_aspect(constraint):
            self._emit_snapshot()

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------
    def pan_by(self, dx: float, dy: float) -> None:
        """Move the crop centre by ``(dx, dy)`` image pixels."""
        if not (_is_finite(dx) and _is_finite(dy)):
            return
        if self._model.translate_center(dx, dy):
            self._emit_snapshot()

    def begin_drag(self) -> None:
        self._show_drag_hint = False
        self._current_strategy = PanStrategy(
            model=self._model,
            get_view_scale=self._view_scale_provider,
            on_crop_changed=self._emit_snapshot,
        )

    def drag(self, delta_view: QPointF) -> None:
        """Forward a pointer movement (viewport pixels) to the active strategy."""
        if self._current_strategy is None:
            return
        if not (_is_finite(delta_view.x()) and _is_finite(delta_view.y())):
            return
        self._current_strategy.on_drag(delta_view)

    def end_drag(self) -> None:
        if self._current_strategy is None:
            return
        self._current_strategy.on_end()
        self._current_strategy = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _emit_snapshot(self) -> None:
        crop_rect = self._model.crop_rect()
        if crop_rect is None:
            return
        self._revision += 1
        snapshot = CropSnapshot(
            crop_rect=crop_rect,
            zoom=self._model.zoom,
            rotation=self._model.rotation,
            flip=self._model.flip,
            aspect=self._model.aspect,
            revision=self._revision,
        )
        self._snapshot = snapshot
        _LOGGER.debug("Crop snapshot r%d: %s", snapshot.revision, crop_rect)
        if self._on_snapshot_changed is not None:
            self._on_snapshot_changed(snapshot)


def _is_finite(value: float) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False
