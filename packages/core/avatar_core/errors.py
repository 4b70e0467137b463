"""Error types raised by avatar composition."""

from __future__ import annotations


class AvatarError(Exception):
    """Base class for every avatar pipeline failure."""


class ConfigError(AvatarError, ValueError):
    pass


class EmptyInputError(AvatarError, ValueError):
    """Raised when text normalizes to nothing drawable."""


class FontLoadError(AvatarError):
    """Font source could not be read or parsed."""


class GlyphMetricsError(AvatarError):
    """Font has no usable advance width for a character."""


class GlyphDrawError(AvatarError):
    pass


class EncodingError(AvatarError):
    pass
