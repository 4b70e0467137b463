"""Avatar composition: normalize, look up, render, cache."""

from __future__ import annotations

from avatar_core.config import DEFAULT_CONFIG, AvatarConfig
from avatar_core.errors import EmptyInputError

from .cache import AvatarCache
from .colors import resolve_colors
from .engine import PillowTextEngine, TextEngine
from .layout import layout
from .models import PixelBuffer
from .text import normalize


class AvatarComposer:
    """Renders initials avatars through a text engine and caches them by token.

    The first successful render of a token fixes its cached appearance;
    later calls with different color overrides get the cached buffer.
    """

    def __init__(self, engine: TextEngine | None = None, cache: AvatarCache | None = None) -> None:
        self.engine = engine or PillowTextEngine()
        self.cache = cache if cache is not None else AvatarCache()

    def initials(self, text: str) -> str:
        return normalize(text)

    def compose(
        self,
        text: str,
        font_color: str | None = None,
        back_color: str | None = None,
        config: AvatarConfig | None = None,
    ) -> PixelBuffer:
        """Return the avatar for ``text``.

        ``font_color``/``back_color`` default to the config's colors when None.
        Raises EmptyInputError, FontLoadError, GlyphMetricsError or
        GlyphDrawError; nothing is cached on failure.
        """
        cfg = config or DEFAULT_CONFIG
        token = normalize(text)
        if not token.strip():
            raise EmptyInputError("text has no initials to draw")

        cached = self.cache.get(token)
        if cached is not None:
            return cached

        font = self.engine.load_font(cfg.font_path, cfg.font_size, cfg.dpi)
        foreground, background = resolve_colors(
            token,
            cfg.font_color if font_color is None else font_color,
            cfg.back_color if back_color is None else back_color,
        )

        canvas = self.engine.new_canvas(cfg.width, cfg.height, background)
        placements = layout(token, font, self.engine, cfg.width, cfg.spacer, cfg.text_y, cfg.text_x)
        for glyph in placements:
            self.engine.draw_glyph(canvas, font, (glyph.x, glyph.y), glyph.char, foreground)

        buffer = self.engine.snapshot(canvas)
        self.cache.put(token, buffer)
        return buffer
