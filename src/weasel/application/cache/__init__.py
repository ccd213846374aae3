"""In-memory caching utilities."""

from weasel.application.cache.lru_cache import TimedLruCache

__all__ = ["TimedLruCache"]
