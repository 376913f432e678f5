"""Database layer for short links."""

from .base import ShortLinkStoreBase
from .memory import InMemoryShortLinkStore
from .postgres import PostgresShortLinkStore
from .cache import RedisCache
from .models import ShortLink

__all__ = [
    "ShortLinkStoreBase",
    "InMemoryShortLinkStore",
    "PostgresShortLinkStore",
    "RedisCache",
    "ShortLink",
]
