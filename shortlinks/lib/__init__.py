"""Core business logic for short links."""

from .shortcode import ShortCodeGenerator
from .uniqueness import UniqueCodeAllocator
from .registry import LinkRegistry
from .expiration import compute_expiry, is_expired
from .errors import (
    ShortLinkError,
    InvalidInputError,
    NotFoundError,
    ExpiredError,
    DuplicateShortCodeError,
    CodeAllocationError,
    StoreUnavailableError,
)

__all__ = [
    "ShortCodeGenerator",
    "UniqueCodeAllocator",
    "LinkRegistry",
    "compute_expiry",
    "is_expired",
    "ShortLinkError",
    "InvalidInputError",
    "NotFoundError",
    "ExpiredError",
    "DuplicateShortCodeError",
    "CodeAllocationError",
    "StoreUnavailableError",
]
