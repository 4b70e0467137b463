"""Delivery adapters, HTTP service, and CLI for initials avatars."""

from .delivery import avatar_response, etag_for, to_disk

__all__ = ["avatar_response", "etag_for", "to_disk"]
