"""Horizontal centering of the initials on the canvas."""

from __future__ import annotations

from typing import Any

from .engine import TextEngine
from .models import GlyphPlacement
from .text import graphemes

MAX_GLYPHS = 2


def _halve(value: int) -> int:
    # Rounds toward zero so wide glyph pairs shift symmetrically off-canvas.
    half = abs(value) // 2
    return half if value >= 0 else -half


def layout(
    token: str,
    font: Any,
    engine: TextEngine,
    canvas_width: int,
    spacer: int,
    baseline: int,
    offset_x: int = 0,
) -> list[GlyphPlacement]:
    """Place up to two glyphs of ``token`` centered on a shared baseline.

    The pair is measured as ``advance0 + spacer + advance1`` where a missing
    second glyph counts as zero, so a lone initial sits slightly left of
    center by half the spacer.
    """
    chars = graphemes(token)[:MAX_GLYPHS]
    widths = [engine.glyph_advance(font, c) for c in chars]
    padded = widths + [0] * (MAX_GLYPHS - len(widths))

    combined = padded[0] + spacer + padded[1]
    x0 = _halve(canvas_width - combined) + offset_x
    xs = [x0, x0 + padded[0] + spacer]

    return [
        GlyphPlacement(char=char, x=xs[i], y=baseline, advance=widths[i])
        for i, char in enumerate(chars)
    ]
