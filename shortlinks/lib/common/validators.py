"""Validation utilities for short links."""

from urllib.parse import urlparse
from typing import Any, Tuple

from ..expiration import MIN_EXPIRY_MINUTES, MAX_EXPIRY_MINUTES

MAX_URL_LENGTH = 2048


def is_valid_url(url: Any) -> Tuple[bool, str]:
    """Validate a redirect target.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
        hostname = result.hostname
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ("http", "https"):
        return False, "URL must use http or https protocol"

    if not hostname:
        return False, "URL must have a valid host"

    return True, ""


def is_valid_expiry_minutes(value: Any) -> Tuple[bool, str]:
    """Validate an expiry lifetime in minutes.

    Args:
        value: Candidate lifetime

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, "expires_in_minutes must be an integer"

    if not MIN_EXPIRY_MINUTES <= value <= MAX_EXPIRY_MINUTES:
        return False, (
            f"expires_in_minutes must be between {MIN_EXPIRY_MINUTES} "
            f"and {MAX_EXPIRY_MINUTES}"
        )

    return True, ""
