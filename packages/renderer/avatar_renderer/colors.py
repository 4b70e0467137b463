"""Hex color parsing and the default background palette."""

from __future__ import annotations

import hashlib
import re

from .models import RGBA
from .text import first_grapheme

WHITE: RGBA = (255, 255, 255, 255)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")

PALETTE: tuple[str, ...] = (
    "#1ABC9C",
    "#2ECC71",
    "#3498DB",
    "#9B59B6",
    "#34495E",
    "#16A085",
    "#27AE60",
    "#2980B9",
    "#8E44AD",
    "#2C3E50",
    "#F1C40F",
    "#E67E22",
    "#E74C3C",
    "#D35400",
    "#C0392B",
    "#7F8C8D",
)

# RGBA form of PALETTE, same order.
_PALETTE_RGBA: tuple[RGBA, ...] = tuple(
    (int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16), 255) for h in PALETTE
)


def parse_hex_color(value: str | None) -> RGBA | None:
    """Parse ``#RRGGBB``/``RRGGBB``; anything else yields None."""
    if not value:
        return None
    match = _HEX_RE.match(value.strip())
    if match is None:
        return None
    digits = match.group(1)
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    return (r, g, b, 255)


def palette_index(char: str) -> int:
    digest = hashlib.sha1(char.encode("utf-8", "surrogatepass")).digest()
    return int.from_bytes(digest[:4], "big") % len(PALETTE)


def default_background(token: str) -> RGBA:
    return _PALETTE_RGBA[palette_index(first_grapheme(token))]


def resolve_colors(token: str, font_color: str | None, back_color: str | None) -> tuple[RGBA, RGBA]:
    """Return ``(foreground, background)``.

    Malformed overrides are ignored and fall back to white text on the
    palette color picked by the token's first character.
    """
    foreground = parse_hex_color(font_color) or WHITE
    background = parse_hex_color(back_color) or default_background(token)
    return foreground, background
