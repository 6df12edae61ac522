from __future__ import annotations

from typing import Protocol


class PostSaveGate(Protocol):
    """Asked once after a successful save: may the post-save side effect run?"""

    def allow_post_save_effect(self) -> bool:
        raise NotImplementedError


class NullGate:
    """Gate used when monetization is disabled; never allows the side effect."""

    def allow_post_save_effect(self) -> bool:
        return False
