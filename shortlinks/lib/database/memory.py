"""In-memory store for short links."""

import dataclasses
import itertools
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .base import ShortLinkStoreBase
from .models import ShortLink
from ..errors import DuplicateShortCodeError
from ..expiration import is_expired, utcnow


class InMemoryShortLinkStore(ShortLinkStoreBase):
    """Dictionary-backed store.

    Records are copied on the way in and out, so callers never hold a
    reference to stored state. None of the methods await between reading
    and writing, which makes every call atomic within one event loop.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[logging.Logger] = None,
    ):
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self._records: Dict[int, ShortLink] = {}
        self._by_code: Dict[str, int] = {}
        self._ids = itertools.count(1)

    async def find_by_id(self, link_id: int) -> Optional[ShortLink]:
        record = self._records.get(link_id)
        return dataclasses.replace(record) if record else None

    async def find_by_code(self, short_code: str) -> Optional[ShortLink]:
        link_id = self._by_code.get(short_code)
        if link_id is None:
            return None
        return dataclasses.replace(self._records[link_id])

    async def find_all(self) -> List[ShortLink]:
        return [dataclasses.replace(self._records[k]) for k in sorted(self._records)]

    async def insert(self, link: ShortLink) -> ShortLink:
        if link.short_code in self._by_code:
            raise DuplicateShortCodeError(link.short_code)

        now = self.clock()
        record = dataclasses.replace(
            link,
            id=next(self._ids),
            created_at=link.created_at or now,
            updated_at=now,
        )
        self._records[record.id] = record
        self._by_code[record.short_code] = record.id

        self.logger.debug(f"Inserted short link {record.id}: {record.short_code}")
        return dataclasses.replace(record)

    async def save(self, link: ShortLink) -> Optional[ShortLink]:
        current = self._records.get(link.id)
        if current is None:
            return None

        owner = self._by_code.get(link.short_code)
        if owner is not None and owner != link.id:
            raise DuplicateShortCodeError(link.short_code)

        record = dataclasses.replace(link, updated_at=self.clock())
        if current.short_code != record.short_code:
            del self._by_code[current.short_code]
            self._by_code[record.short_code] = record.id
        self._records[record.id] = record
        return dataclasses.replace(record)

    async def delete(self, link: ShortLink) -> None:
        record = self._records.pop(link.id, None)
        if record is not None:
            self._by_code.pop(record.short_code, None)

    async def increment_clicks(
        self,
        link_id: int,
        now: Optional[datetime] = None,
    ) -> Optional[ShortLink]:
        record = self._records.get(link_id)
        if record is None:
            return None
        if now is not None and is_expired(record.expires_at, now):
            return None
        record.clicks += 1
        record.updated_at = self.clock()
        return dataclasses.replace(record)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
