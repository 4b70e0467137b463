"""Renderer package for initials avatar composition."""

from .cache import AvatarCache
from .colors import PALETTE, default_background, parse_hex_color, resolve_colors
from .composer import AvatarComposer
from .encoder import encode_png, to_image
from .engine import PillowTextEngine, TextEngine
from .layout import layout
from .models import GlyphPlacement, PixelBuffer
from .text import graphemes, normalize

__all__ = [
    "AvatarCache",
    "AvatarComposer",
    "GlyphPlacement",
    "PALETTE",
    "PillowTextEngine",
    "PixelBuffer",
    "TextEngine",
    "default_background",
    "encode_png",
    "graphemes",
    "layout",
    "normalize",
    "parse_hex_color",
    "resolve_colors",
    "to_image",
]
