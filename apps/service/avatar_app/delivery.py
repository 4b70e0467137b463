"""Delivery adapters that encode composed avatars to files or HTTP responses."""

from __future__ import annotations

import hashlib
import string
from pathlib import Path
from urllib.parse import quote

from fastapi import Response

from avatar_core.config import AvatarConfig
from avatar_core.logging_setup import get_logger, log_event
from avatar_renderer import AvatarComposer, encode_png

CACHE_MAX_AGE = 30 * 24 * 60 * 60  # 30 days
PNG_MEDIA_TYPE = "image/png"

_ETAG_SAFE = "".join(c for c in string.punctuation if c not in '"\\%')

log = get_logger("delivery")


def etag_for(token: str, content: bytes | None = None) -> str:
    """Quoted entity tag for a token; non-ASCII characters are percent-encoded.

    With ``content`` the tag also carries a digest of the encoded image, for
    bounded caches that may evict a token and re-render it in other colors.
    """
    tag = "avatar" + quote(token, safe=_ETAG_SAFE, errors="surrogatepass")
    if content is not None:
        tag += "-" + hashlib.sha1(content).hexdigest()[:16]
    return f'"{tag}"'


def cache_headers(token: str, length: int, etag: str | None = None) -> dict[str, str]:
    return {
        "Content-Type": PNG_MEDIA_TYPE,
        "Content-Length": str(length),
        "Cache-Control": f"max-age={CACHE_MAX_AGE}",
        "Etag": etag or etag_for(token),
    }


def to_disk(
    composer: AvatarComposer,
    text: str,
    path: str | Path,
    config: AvatarConfig | None = None,
    font_color: str | None = None,
    back_color: str | None = None,
) -> Path:
    buffer = composer.compose(text, font_color=font_color, back_color=back_color, config=config)
    data = encode_png(buffer)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    log_event(log, "avatar_written", f"avatar written to {out}", token=composer.initials(text), path=str(out))
    return out


def avatar_response(
    composer: AvatarComposer,
    text: str,
    config: AvatarConfig | None = None,
    font_color: str | None = None,
    back_color: str | None = None,
    content_etag: bool = False,
) -> Response:
    buffer = composer.compose(text, font_color=font_color, back_color=back_color, config=config)
    data = encode_png(buffer)
    token = composer.initials(text)
    etag = etag_for(token, data if content_etag else None)
    log_event(log, "avatar_served", f"avatar served bytes={len(data)}", token=token, status=200, etag=etag)
    return Response(content=data, media_type=PNG_MEDIA_TYPE, headers=cache_headers(token, len(data), etag))
