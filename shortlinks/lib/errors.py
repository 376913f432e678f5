"""Exceptions raised by the short link core."""


class ShortLinkError(Exception):
    """Base class for short link errors."""


class InvalidInputError(ShortLinkError, ValueError):
    """Malformed URL, empty short code or out-of-range expiry."""


class NotFoundError(ShortLinkError, LookupError):
    """No record exists for the given id or short code."""


class ExpiredError(ShortLinkError):
    """The record exists but its expiry instant has passed."""


class DuplicateShortCodeError(ShortLinkError):
    """The store rejected a write because the short code is already taken."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' already exists")
        self.short_code = short_code


class CodeAllocationError(ShortLinkError):
    """Every allocation round ended in a write-time conflict."""


class StoreUnavailableError(ShortLinkError):
    """The backing store could not be reached or failed mid-operation."""
