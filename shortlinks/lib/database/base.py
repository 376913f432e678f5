"""Abstract base class for short link store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List

from .models import ShortLink


class ShortLinkStoreBase(ABC):
    """Abstract base class for short link persistence.

    Each call is expected to be atomic on its own; no operation spans
    several calls in a transaction.
    """

    @abstractmethod
    async def find_by_id(self, link_id: int) -> Optional[ShortLink]:
        """Get a record by its numeric id.

        Args:
            link_id: Record id

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_code(self, short_code: str) -> Optional[ShortLink]:
        """Get a record by its short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[ShortLink]:
        """Return every record, ordered by id."""
        pass

    @abstractmethod
    async def insert(self, link: ShortLink) -> ShortLink:
        """Insert a new record.

        Assigns ``id`` and ``updated_at``; fills ``created_at`` when the
        caller left it empty.

        Args:
            link: Record to insert (``id`` is ignored)

        Returns:
            The stored record

        Raises:
            DuplicateShortCodeError: If the short code is already taken
        """
        pass

    @abstractmethod
    async def save(self, link: ShortLink) -> Optional[ShortLink]:
        """Persist changes to an existing record and bump ``updated_at``.

        Args:
            link: Record with a valid ``id``

        Returns:
            The stored record, or None if it no longer exists

        Raises:
            DuplicateShortCodeError: If the short code is already taken
        """
        pass

    @abstractmethod
    async def delete(self, link: ShortLink) -> None:
        """Delete a record permanently."""
        pass

    @abstractmethod
    async def increment_clicks(
        self,
        link_id: int,
        now: Optional[datetime] = None,
    ) -> Optional[ShortLink]:
        """Atomically add one to the click counter.

        When ``now`` is given the increment only applies to a record that is
        not expired at that instant.

        Args:
            link_id: Record id
            now: Instant the expiry is checked against

        Returns:
            The updated record, or None if it no longer exists or has expired
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
