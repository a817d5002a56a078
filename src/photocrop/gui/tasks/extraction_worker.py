"""Worker that extracts and encodes the crop off the UI thread."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtCore import QObject, QRunnable, Signal

from ...config import DEFAULT_DOWNLOAD_NAME
from ...core.encode import encode
from ...core.extract import extract
from ...core.raster import RasterImage
from ...errors import CropperError
from ..crop.model import CropSnapshot

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropResult:
    """Output raster and its encoding, tagged with the snapshot it came from."""

    image: RasterImage
    encoded: bytes
    snapshot: CropSnapshot

    @property
    def download_name(self) -> str:
        """Return the filename suggested when the result is saved."""
        return DEFAULT_DOWNLOAD_NAME


class ExtractionWorkerSignals(QObject):
    """Signals exposed by :class:`ExtractionWorker`.

    The signal container is kept separate from the runnable itself so slots
    always execute on the GUI thread regardless of which pool thread picked up
    the job.
    """

    ready = Signal(object, int)
    """Emitted with ``(CropResult, generation)`` once encoding finished."""

    error = Signal(int, str)
    """Emitted with ``(generation, message)`` when extraction or encoding failed."""

    finished = Signal(int)
    """Emitted with the generation after every run, successful or not."""


class ExtractionWorker(QRunnable):
    """Run :func:`extract` and :func:`encode` for one immutable snapshot."""

    def __init__(self, flipped_image: RasterImage, snapshot: CropSnapshot, *, generation: int) -> None:
        super().__init__()
        self._flipped_image = flipped_image
        self._snapshot = snapshot
        self._generation = generation
        self.signals = ExtractionWorkerSignals()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def snapshot(self) -> CropSnapshot:
        return self._snapshot

    def run(self) -> None:  # type: ignore[override]
        """Execute the extraction on a background thread."""

        try:
            output = extract(self._flipped_image, self._snapshot.rotation, self._snapshot.crop_rect)
            encoded = encode(output)
        except CropperError as exc:
            _LOGGER.warning("Extraction g%d failed: %s", self._generation, exc)
            self.signals.error.emit(self._generation, str(exc))
        else:
            self.signals.ready.emit(CropResult(output, encoded, self._snapshot), self._generation)
        finally:
            self.signals.finished.emit(self._generation)


__all__ = ["CropResult", "ExtractionWorker", "ExtractionWorkerSignals"]
