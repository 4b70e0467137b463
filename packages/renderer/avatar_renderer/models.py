"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    pixel_format: str
    bytes: bytes

    def pixel(self, x: int, y: int) -> RGBA:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        offset = (y * self.width + x) * 4
        r, g, b, a = self.bytes[offset : offset + 4]
        return (r, g, b, a)


@dataclass(frozen=True)
class GlyphPlacement:
    char: str
    x: int
    y: int
    advance: int
