"""Controllers coordinating the crop workflow."""

from .crop_pipeline import CropPipeline

__all__ = ["CropPipeline"]
