"""PNG encoding of composed pixel buffers."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

from avatar_core.errors import EncodingError

from .models import PixelBuffer


def to_image(buffer: PixelBuffer) -> Image.Image:
    try:
        return Image.frombytes(buffer.pixel_format, (buffer.width, buffer.height), buffer.bytes)
    except ValueError as exc:
        raise EncodingError(f"invalid {buffer.pixel_format} buffer {buffer.width}x{buffer.height}: {exc}") from exc


def encode_png(buffer: PixelBuffer) -> bytes:
    image = to_image(buffer)
    out = BytesIO()
    try:
        image.save(out, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodingError(f"PNG encoding failed: {exc}") from exc
    return out.getvalue()
