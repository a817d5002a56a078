"""
Interaction strategies for crop box manipulation.
"""

from .abstract import InteractionStrategy
from .pan_strategy import PanStrategy

__all__ = ["InteractionStrategy", "PanStrategy"]
