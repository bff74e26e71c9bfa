"""In-memory domain models."""

from lotto_mirror.models.cache import CacheSnapshot, CacheState, DrawCache
from lotto_mirror.models.draw import Draw

__all__ = ["CacheSnapshot", "CacheState", "Draw", "DrawCache"]
