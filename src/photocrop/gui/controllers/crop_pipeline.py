"""Coordinates decoding, flipping and background extraction for one image."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from PySide6.QtCore import QObject, QThreadPool, Signal

from ...core.flip import FlipState, flip
from ...core.raster import RasterImage, decode_image
from ...errors import ExtractionError
from ..crop.controller import CropInteractionController
from ..crop.model import CropSnapshot
from ..tasks.extraction_worker import CropResult, ExtractionWorker

_LOGGER = logging.getLogger(__name__)


class CropPipeline(QObject):
    """Owns the source raster, its flipped variant and the in-flight extraction.

    At most one :class:`ExtractionWorker` runs at a time.  Commits made while
    it is busy are queued, keeping only the newest.  Results whose snapshot is
    no longer current, or that were cancelled, are dropped instead of emitted.
    """

    previewChanged = Signal(object)
    """Emitted with the flipped :class:`RasterImage` whenever it is recomputed."""

    snapshotChanged = Signal(object)
    """Emitted with every :class:`CropSnapshot` produced by the controller."""

    resultReady = Signal(object)
    """Emitted with the :class:`CropResult` of a committed, still-current crop."""

    extractionFailed = Signal(str)
    """Emitted when extraction or encoding failed; the preview is left untouched."""

    def __init__(
        self,
        parent: Optional[QObject] = None,
        *,
        thread_pool: QThreadPool | None = None,
        view_scale_provider: Callable[[], float] | None = None,
    ) -> None:
        super().__init__(parent)
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._controller = CropInteractionController(
            on_snapshot_changed=self._on_snapshot_changed,
            view_scale_provider=view_scale_provider,
        )
        self._source: RasterImage | None = None
        self._flipped: RasterImage | None = None
        self._flipped_state = FlipState()

        # Generation tracking to prevent stale updates
        self._generation = 0
        self._active_worker: ExtractionWorker | None = None
        self._pending: tuple[RasterImage, CropSnapshot] | None = None

    @property
    def controller(self) -> CropInteractionController:
        return self._controller

    @property
    def source_image(self) -> RasterImage | None:
        return self._source

    @property
    def flipped_image(self) -> RasterImage | None:
        return self._flipped

    def is_busy(self) -> bool:
        """Return True while an extraction is running."""
        return self._active_worker is not None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_bytes(self, data: bytes) -> None:
        """Decode *data* and start a new session.

        :class:`~photocrop.errors.DecodeError` propagates to the caller and the
        previous session is left as it was.
        """
        image = decode_image(data)
        self.load_image(image)

    def load_image(self, image: RasterImage) -> None:
        self.cancel()
        self._source = image
        self._flipped = image
        self._flipped_state = FlipState()
        self.previewChanged.emit(image)
        self._controller.load_image(image.width, image.height)

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    def commit(self) -> None:
        """Schedule extraction of the current snapshot.

        Raises :class:`ExtractionError` when no crop has been established yet.
        """
        snapshot = self._controller.snapshot()
        if snapshot is None or self._flipped is None:
            raise ExtractionError("Crop interaction has not produced a rectangle yet")
        request = (self._flipped, snapshot)
        if self._active_worker is not None:
            _LOGGER.debug("Extraction busy; queueing snapshot r%d", snapshot.revision)
            self._pending = request
            return
        self._start(request)

    def cancel(self) -> None:
        """Discard queued work and ignore the result of any running worker."""
        # QRunnable cannot be stopped once started; bumping the generation
        # makes its result stale instead.
        self._pending = None
        self._generation += 1

    def _start(self, request: tuple[RasterImage, CropSnapshot]) -> None:
        flipped, snapshot = request
        self._generation += 1
        worker = ExtractionWorker(flipped, snapshot, generation=self._generation)
        worker.signals.ready.connect(self._handle_ready)
        worker.signals.error.connect(self._handle_error)
        worker.signals.finished.connect(self._handle_finished)
        self._active_worker = worker
        _LOGGER.debug("Starting extraction g%d for snapshot r%d", worker.generation, snapshot.revision)
        self._thread_pool.start(worker)

    def _handle_ready(self, result: CropResult, generation: int) -> None:
        if generation != self._generation:
            _LOGGER.debug("Dropping cancelled extraction g%d", generation)
            return
        if result.snapshot.revision != self._controller.revision:
            _LOGGER.debug(
                "Dropping stale extraction for r%d (current r%d)",
                result.snapshot.revision,
                self._controller.revision,
            )
            return
        self.resultReady.emit(result)

    def _handle_error(self, generation: int, message: str) -> None:
        if generation != self._generation:
            return
        _LOGGER.error("Crop extraction failed: %s", message)
        self.extractionFailed.emit(message)

    def _handle_finished(self, generation: int) -> None:
        worker = self._active_worker
        if worker is None or worker.generation != generation:
            return
        self._active_worker = None
        if self._pending is not None:
            request, self._pending = self._pending, None
            self._start(request)

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------
    def _on_snapshot_changed(self, snapshot: CropSnapshot) -> None:
        # The flipped raster is refreshed before anyone sees the snapshot so a
        # commit always pairs the rectangle with the matching pixels.
        if self._source is not None and snapshot.flip != self._flipped_state:
            self._flipped = flip(self._source, snapshot.flip)
            self._flipped_state = snapshot.flip
            self.previewChanged.emit(self._flipped)
        self.snapshotChanged.emit(snapshot)


__all__ = ["CropPipeline"]
