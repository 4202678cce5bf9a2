"""In-memory 32-bit images and colour conversion for lower-depth displays."""

from __future__ import annotations

from typing import Iterator, Sequence

BITS_PER_PIXEL = 32


def convert_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a display of *depth* bits.

    Displays of 24 bits or more take the colour unchanged. Otherwise *shifts*
    gives, for red, green and blue in turn, the position of the channel in
    the pixel and the number of bits it occupies.
    """
    if depth >= 24:
        return color
    if len(shifts) != 6:
        raise ValueError("shifts must hold six values: position and width per channel")
    red_pos, red_bits, green_pos, green_bits, blue_pos, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_pos)
        + ((green >> (16 - green_bits)) << green_pos)
        + ((blue >> (16 - blue_bits)) << blue_pos)
    )


class Image:
    """A width x height grid of 32-bit pixels, initially all zero."""

    bits_per_pixel = BITS_PER_PIXEL

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = [0] * (width * height)

    @property
    def size_line(self) -> int:
        """Number of bytes in one row of pixels."""
        return self.width * self.bits_per_pixel // 8

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at column *x*, row *y*."""
        return self._pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Store *color*, truncated to 32 bits, at column *x*, row *y*."""
        self._pixels[self._index(x, y)] = color & 0xFFFFFFFF

    def rows(self) -> Iterator[tuple[int, ...]]:
        """Yield each row of pixels, top to bottom."""
        for start in range(0, len(self._pixels), self.width):
            yield tuple(self._pixels[start:start + self.width])

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"