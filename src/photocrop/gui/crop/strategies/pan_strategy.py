"""
Pan strategy: dragging moves the image underneath the crop window.
"""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QPointF

from ....core.geometry import rotate_vector
from ..model import CropSessionModel
from .abstract import InteractionStrategy


class PanStrategy(InteractionStrategy):
    """Strategy for repositioning the crop centre by dragging the image."""

    def __init__(
        self,
        *,
        model: CropSessionModel,
        get_view_scale: Callable[[], float],
        on_crop_changed: Callable[[], None],
    ) -> None:
        """Initialize pan strategy.

        Parameters
        ----------
        model:
            Crop session model.
        get_view_scale:
            Callable that returns viewport pixels per image pixel.
        on_crop_changed:
            Callback when the crop centre moved.
        """
        self._model = model
        self._get_view_scale = get_view_scale
        self._on_crop_changed = on_crop_changed

    def on_drag(self, delta_view: QPointF) -> None:
        """Handle pan drag movement."""
        if not self._model.has_image:
            return

        view_scale = self._get_view_scale()
        if view_scale <= 1e-6:
            return

        # The image follows the pointer, so the crop window travels the other
        # way.  Undo the on-screen rotation to land in image space.
        dx, dy = rotate_vector(
            -float(delta_view.x()) / view_scale,
            -float(delta_view.y()) / view_scale,
            -self._model.rotation,
        )
        if self._model.translate_center(dx, dy):
            self._on_crop_changed()

    def on_end(self) -> None:
        """Handle end of pan interaction."""
        # No special cleanup needed
