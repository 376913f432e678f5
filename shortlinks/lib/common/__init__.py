"""Common utilities for short links."""

from .validators import is_valid_url, is_valid_expiry_minutes
from .urls import extract_forwarded_headers, build_base_url, build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_expiry_minutes",
    "extract_forwarded_headers",
    "build_base_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
