"""
Crop interaction module.

This package turns pointer, zoom, rotation, flip and aspect input into
immutable crop snapshots consumed by the extraction pipeline.
"""

from .controller import CropInteractionController
from .model import AspectConstraint, CropSessionModel, CropSnapshot

__all__ = [
    "AspectConstraint",
    "CropInteractionController",
    "CropSessionModel",
    "CropSnapshot",
]
