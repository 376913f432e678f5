"""Allocation of short codes that are not yet taken."""

import logging
from typing import Optional

from .shortcode import ShortCodeGenerator
from .database.base import ShortLinkStoreBase


class UniqueCodeAllocator:
    """Ask the store whether candidate codes are free and retry on collision.

    The existence check and the later insert are separate store calls, so a
    concurrent writer can still claim the returned code. The registry covers
    that window by retrying on the store's write-time uniqueness conflict.
    """

    def __init__(
        self,
        store: ShortLinkStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize allocator.

        Args:
            store: Store queried for existing codes
            generator: Candidate code generator
            max_attempts: Candidates checked before escalating to a longer code
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self, seed_url: str, round_index: int = 0) -> str:
        """Return a short code that no stored record currently uses.

        Args:
            seed_url: URL the candidates are derived from (hash strategy)
            round_index: Allocation round; later rounds use fresh attempt
                indices so the hash strategy does not replay candidates

        Returns:
            A free short code, or an unchecked longer code after
            ``max_attempts`` collisions
        """
        first_attempt = round_index * self.max_attempts

        for attempt in range(first_attempt, first_attempt + self.max_attempts):
            code = self.generator.generate(seed=seed_url, attempt=attempt)

            if await self.store.find_by_code(code) is None:
                if attempt > first_attempt:
                    self.logger.debug(
                        f"Generated code after {attempt - first_attempt + 1} attempts: {code}"
                    )
                return code

            self.logger.debug(f"Short code collision: {code}")

        # At the fallback length a collision is treated as negligible and is
        # not re-checked.
        code = self.generator.generate_fallback(seed_url)
        self.logger.warning(
            f"{self.max_attempts} collisions in a row, falling back to "
            f"{len(code)}-character code {code}"
        )
        return code
