"""Horizontal and vertical mirroring of rasters."""

from __future__ import annotations

from dataclasses import dataclass

from .raster import RasterImage, decode_image


@dataclass(frozen=True)
class FlipState:
    """Mirror flags active for the displayed image."""

    horizontal: bool = False
    vertical: bool = False

    @property
    def is_identity(self) -> bool:
        return not (self.horizontal or self.vertical)

    def toggled_horizontal(self) -> "FlipState":
        return FlipState(not self.horizontal, self.vertical)

    def toggled_vertical(self) -> "FlipState":
        return FlipState(self.horizontal, not self.vertical)


def flip(image: RasterImage | bytes, state: FlipState) -> RasterImage:
    """Return *image* mirrored according to *state*.

    ``horizontal`` reverses every row, ``vertical`` reverses the row order and
    both together amount to a 180° point reflection.  Applying the same state
    twice yields the original pixels.  Raw container bytes are decoded first
    and raise :class:`~photocrop.errors.DecodeError` when unreadable.
    """

    if not isinstance(image, RasterImage):
        image = decode_image(image)
    if state.is_identity:
        return image
    pixels = image.pixels
    if state.horizontal:
        pixels = pixels[:, ::-1]
    if state.vertical:
        pixels = pixels[::-1, :]
    return RasterImage(pixels)


__all__ = ["FlipState", "flip"]
