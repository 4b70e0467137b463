"""Reduce display names to the one or two character initials token."""

from __future__ import annotations

import regex

_GRAPHEME = regex.compile(r"\X")


def graphemes(value: str) -> list[str]:
    """Split ``value`` into user-perceived characters."""
    return _GRAPHEME.findall(value)


def utf8_length(value: str) -> int:
    """Byte length of ``value`` in UTF-8, counting undecodable argv bytes as one each."""
    try:
        return len(value.encode("utf-8", "surrogateescape"))
    except UnicodeEncodeError:
        # Lone high surrogates have no byte to escape back to.
        return len(value.encode("utf-8", "surrogatepass"))


def first_grapheme(value: str) -> str:
    match = _GRAPHEME.match(value)
    return match.group() if match else ""


def normalize(raw: str) -> str:
    """Return the initials token for ``raw``.

    Whitespace-only input comes back unchanged. A single word whose UTF-8
    length is even is returned whole and uppercased; otherwise the token is
    the first grapheme of the first word plus the first grapheme of the
    second word, if any. Case is left alone in that branch.
    """
    if not raw.strip():
        return raw

    parts = raw.split()
    if len(parts) == 1 and utf8_length(raw) % 2 == 0:
        return raw.upper()

    token = first_grapheme(parts[0])
    if len(parts) > 1:
        token += first_grapheme(parts[1])
    return token
