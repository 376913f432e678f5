"""Create, resolve and manage short links."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from .shortcode import ShortCodeGenerator
from .uniqueness import UniqueCodeAllocator
from .expiration import compute_expiry, is_expired, utcnow
from .errors import (
    CodeAllocationError,
    DuplicateShortCodeError,
    ExpiredError,
    InvalidInputError,
    NotFoundError,
)
from .database.base import ShortLinkStoreBase
from .database.cache import RedisCache
from .database.models import ShortLink
from .common.validators import is_valid_url, is_valid_expiry_minutes


_UPDATABLE_FIELDS = {"original_url", "expires_in_minutes", "short_code"}


class LinkRegistry:
    """Lifecycle of short link records.

    Every operation is a short sequence of independent store calls; nothing
    is wrapped in a cross-call transaction. Click counting relies on the
    store's atomic increment.
    """

    def __init__(
        self,
        store: ShortLinkStoreBase,
        cache: Optional[RedisCache] = None,
        generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utcnow,
        max_collision_retries: int = 10,
        max_insert_retries: int = 3,
    ):
        """Initialize link registry.

        Args:
            store: Persistent store
            cache: Optional lookup cache for the redirect path
            generator: Optional short code generator
            logger: Optional logger
            clock: Returns the current instant (timezone-aware UTC)
            max_collision_retries: Candidates checked per allocation round
            max_insert_retries: Allocation rounds tried when the insert hits
                a uniqueness conflict
        """
        self.store = store
        self.cache = cache
        self.generator = generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.max_insert_retries = max_insert_retries
        self.allocator = UniqueCodeAllocator(
            store,
            generator=self.generator,
            max_attempts=max_collision_retries,
            logger=self.logger,
        )

    async def create(
        self,
        original_url: str,
        expires_in_minutes: Optional[int] = None,
    ) -> ShortLink:
        """Create a new short link.

        Args:
            original_url: The redirect target
            expires_in_minutes: Optional lifetime, 1..525600

        Returns:
            The stored record

        Raises:
            InvalidInputError: If the URL or the lifetime is invalid
            CodeAllocationError: If every allocation round hit a write conflict
        """
        self._validate_url(original_url)
        if expires_in_minutes is not None:
            self._validate_expiry(expires_in_minutes)

        for round_index in range(self.max_insert_retries):
            short_code = await self.allocator.allocate(original_url, round_index)

            now = self.clock()
            link = ShortLink(
                original_url=original_url,
                short_code=short_code,
                clicks=0,
                created_at=now,
                expires_at=compute_expiry(now, expires_in_minutes),
            )

            try:
                link = await self.store.insert(link)
            except DuplicateShortCodeError:
                self.logger.warning(
                    f"Short code {short_code} was claimed concurrently, reallocating"
                )
                continue

            self.logger.info(f"Created short URL: {link.short_code} -> {link.original_url}")
            return link

        raise CodeAllocationError(
            f"Unable to store a unique short code after {self.max_insert_retries} attempts"
        )

    async def find_all(self) -> List[ShortLink]:
        """Return every record, expired ones included."""
        return await self.store.find_all()

    async def find_by_id(self, link_id: int) -> ShortLink:
        """Get a record by id.

        Raises:
            NotFoundError: If no record has that id
        """
        link = await self.store.find_by_id(link_id)
        if link is None:
            raise NotFoundError(f"URL with ID {link_id} not found")
        return link

    async def resolve(self, short_code: str) -> ShortLink:
        """Resolve a short code on the redirect path and count the click.

        Args:
            short_code: The short code to lookup

        Returns:
            The record with its click counter already incremented

        Raises:
            InvalidInputError: If the code is empty
            NotFoundError: If no record matches
            ExpiredError: If the record has expired
        """
        short_code = self._normalize_code(short_code)
        now = self.clock()

        link = None
        if self.cache:
            link = await self.cache.get_link(short_code)
            if link and is_expired(link.expires_at, now):
                # Snapshot may predate an update; the store decides
                await self.cache.delete(short_code)
                link = None
            elif link:
                self.logger.debug(f"Cache hit for {short_code}")

        if link is None:
            link = await self._get_active_link(short_code, now)
            if self.cache:
                await self.cache.set_link(link)

        updated = await self.store.increment_clicks(link.id, now)
        if updated is None:
            # Removed or expired after the lookup
            if self.cache:
                await self.cache.delete(short_code)
            current = await self.store.find_by_id(link.id)
            if current is None or current.short_code != short_code:
                raise NotFoundError(f"URL with short code {short_code} not found")
            raise ExpiredError(f"URL with short code {short_code} has expired")

        self.logger.debug(f"Resolved {short_code} -> {updated.original_url} ({updated.clicks} clicks)")
        return updated

    async def resolve_info(self, short_code: str) -> ShortLink:
        """Look up a short code without counting a click.

        Raises:
            InvalidInputError: If the code is empty
            NotFoundError: If no record matches
            ExpiredError: If the record has expired
        """
        return await self._get_active_link(self._normalize_code(short_code))

    async def update(self, link_id: int, patch: Mapping[str, Any]) -> ShortLink:
        """Apply caller-supplied changes to a record.

        Accepted keys are ``original_url`` and ``expires_in_minutes`` (None
        removes the expiry). Short codes are immutable: ``short_code`` is
        only accepted when it equals the current code.

        Args:
            link_id: Record id
            patch: Fields to change

        Returns:
            The stored record

        Raises:
            NotFoundError: If no record has that id
            InvalidInputError: If the patch is invalid
        """
        unknown = set(patch) - _UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        link = await self.find_by_id(link_id)

        if "short_code" in patch and patch["short_code"] != link.short_code:
            raise InvalidInputError("Short codes cannot be changed after creation")

        if "original_url" in patch:
            self._validate_url(patch["original_url"])
            link.original_url = patch["original_url"]

        if "expires_in_minutes" in patch:
            minutes = patch["expires_in_minutes"]
            if minutes is not None:
                self._validate_expiry(minutes)
            link.expires_at = compute_expiry(self.clock(), minutes)

        link = await self.store.save(link)
        if link is None:
            raise NotFoundError(f"URL with ID {link_id} not found")
        if self.cache:
            await self.cache.delete(link.short_code)

        self.logger.info(f"Updated short URL {link.id}: {link.short_code} -> {link.original_url}")
        return link

    async def remove(self, link_id: int) -> None:
        """Delete a record permanently.

        Raises:
            NotFoundError: If no record has that id
        """
        link = await self.find_by_id(link_id)
        await self.store.delete(link)
        if self.cache:
            await self.cache.delete(link.short_code)

        self.logger.info(f"Deleted short URL {link.id}: {link.short_code}")

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()
        cache_healthy = await self.cache.ping() if self.cache else True

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close store and cache connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()

    async def _get_active_link(self, short_code: str, now: Optional[datetime] = None) -> ShortLink:
        link = await self.store.find_by_code(short_code)
        if link is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError(f"URL with short code {short_code} not found")
        self._check_expiry(link, now)
        return link

    def _check_expiry(self, link: ShortLink, now: Optional[datetime] = None) -> None:
        if is_expired(link.expires_at, now or self.clock()):
            raise ExpiredError(f"URL with short code {link.short_code} has expired")

    @staticmethod
    def _normalize_code(short_code: Optional[str]) -> str:
        if not isinstance(short_code, str) or not short_code.strip():
            raise InvalidInputError("Short code cannot be empty")
        return short_code.strip()

    @staticmethod
    def _validate_url(url: Any) -> None:
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

    @staticmethod
    def _validate_expiry(minutes: Any) -> None:
        is_valid, error = is_valid_expiry_minutes(minutes)
        if not is_valid:
            raise InvalidInputError(error)
