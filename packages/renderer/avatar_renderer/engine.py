"""Text rendering capability used by the composer, with a Pillow implementation."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Protocol

from PIL import Image, ImageDraw, ImageFont

from avatar_core.errors import FontLoadError, GlyphDrawError, GlyphMetricsError

from .models import RGBA, PixelBuffer

# Point sizes are specified at this resolution; other DPI values scale from it.
POINTS_PER_INCH = 72.0


class TextEngine(Protocol):
    def load_font(self, path: str | Path, size: float, dpi: int) -> Any: ...

    def glyph_advance(self, font: Any, char: str) -> int: ...

    def new_canvas(self, width: int, height: int, color: RGBA) -> Any: ...

    def draw_glyph(self, canvas: Any, font: Any, point: tuple[int, int], char: str, color: RGBA) -> None: ...

    def snapshot(self, canvas: Any) -> PixelBuffer: ...


class PillowTextEngine:
    """FreeType rendering through Pillow.

    Draw points are the left end of the glyph baseline.
    """

    def load_font(self, path: str | Path, size: float, dpi: int) -> ImageFont.FreeTypeFont:
        try:
            pixels = max(1, round(size * dpi / POINTS_PER_INCH))
            return ImageFont.truetype(str(path), size=pixels)
        except (OSError, ValueError, OverflowError) as exc:
            raise FontLoadError(f"cannot load font {path}: {exc}") from exc

    def glyph_advance(self, font: ImageFont.FreeTypeFont, char: str) -> int:
        try:
            advance = font.getlength(char)
        except (OSError, ValueError, TypeError) as exc:
            raise GlyphMetricsError(f"no advance width for {char!r}: {exc}") from exc
        if not math.isfinite(advance) or advance <= 0:
            raise GlyphMetricsError(f"no advance width for {char!r}")
        return int(advance)

    def new_canvas(self, width: int, height: int, color: RGBA) -> Image.Image:
        return Image.new("RGBA", (width, height), color)

    def draw_glyph(
        self,
        canvas: Image.Image,
        font: ImageFont.FreeTypeFont,
        point: tuple[int, int],
        char: str,
        color: RGBA,
    ) -> None:
        try:
            ImageDraw.Draw(canvas).text(point, char, font=font, fill=color, anchor="ls")
        except (OSError, ValueError, TypeError) as exc:
            raise GlyphDrawError(f"cannot draw {char!r} at {point}: {exc}") from exc

    def snapshot(self, canvas: Image.Image) -> PixelBuffer:
        if canvas.mode != "RGBA":
            canvas = canvas.convert("RGBA")
        return PixelBuffer(width=canvas.width, height=canvas.height, pixel_format="RGBA", bytes=canvas.tobytes())
