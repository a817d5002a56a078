"""Background tasks for the crop pipeline."""

from .extraction_worker import CropResult, ExtractionWorker, ExtractionWorkerSignals

__all__ = ["CropResult", "ExtractionWorker", "ExtractionWorkerSignals"]
