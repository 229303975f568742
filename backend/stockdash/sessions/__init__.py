"""Login sessions and per-identity subscriptions."""

from .store import SessionStore, mask_token

__all__ = ["SessionStore", "mask_token"]
