"""Thread-safe store of rendered avatars keyed by initials token."""

from __future__ import annotations

import threading
from collections import OrderedDict

from .models import PixelBuffer


class AvatarCache:
    """Token to pixel buffer map shared by every caller of a composer.

    With ``max_entries=None`` entries are kept for the life of the object.
    A positive bound evicts the least recently used token. Concurrent
    renders of one token are not deduplicated; the last ``put`` wins.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, PixelBuffer] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, token: str) -> PixelBuffer | None:
        with self._lock:
            buffer = self._entries.get(token)
            if buffer is not None and self.max_entries is not None:
                self._entries.move_to_end(token)
            return buffer

    def put(self, token: str, buffer: PixelBuffer) -> None:
        with self._lock:
            self._entries[token] = buffer
            self._entries.move_to_end(token)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def tokens(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
