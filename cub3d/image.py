"""Off-screen 32-bit pixel images."""

from __future__ import annotations

import struct

_PIXEL = struct.Struct("<I")


class Image:
    """A ``width`` x ``height`` image of 32-bit little-endian 0xAARRGGBB pixels.

    Every pixel starts at 0. Rows are stored one after another, ``size_line``
    bytes each.
    """

    bpp = 32
    endian = 0

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self._data = bytearray(self.size_line * height)

    @property
    def size_line(self) -> int:
        """Number of bytes in one row."""
        return self.width * (self.bpp // 8)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * (self.bpp // 8)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` (taken modulo 2**32) at column ``x``, row ``y``."""
        _PIXEL.pack_into(self._data, self._offset(x, y), color & 0xFFFFFFFF)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at column ``x``, row ``y`` as an unsigned 32-bit value."""
        return _PIXEL.unpack_from(self._data, self._offset(x, y))[0]

    def to_bytes(self) -> bytes:
        """Return a copy of the raw pixel data."""
        return bytes(self._data)

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"