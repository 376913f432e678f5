"""Expiration policy for short links.

All functions are pure; the current instant is always passed in by the caller
so expiry is re-evaluated on every resolution.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

MIN_EXPIRY_MINUTES = 1
MAX_EXPIRY_MINUTES = 525600  # one year


def utcnow() -> datetime:
    """Default clock: timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def compute_expiry(
    created_at: datetime,
    expires_in_minutes: Optional[int] = None,
) -> Optional[datetime]:
    """Compute the expiry instant for a link.

    Args:
        created_at: Creation timestamp
        expires_in_minutes: Lifetime in minutes, or None for no expiry

    Returns:
        created_at + expires_in_minutes, or None
    """
    if expires_in_minutes is None:
        return None
    return created_at + timedelta(minutes=expires_in_minutes)


def is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    """Check whether a link has expired.

    The expiry instant itself is still valid.

    Args:
        expires_at: Expiry timestamp, or None for links that never expire
        now: Current instant

    Returns:
        True iff expires_at is set and now is strictly after it
    """
    if expires_at is None:
        return False
    return now > expires_at
