"""Short code generation utilities."""

import hashlib
import secrets
import string
import uuid
from typing import Optional


class ShortCodeGenerator:
    """Generate candidate short codes for URLs.

    Two strategies are supported:

    * ``random``: independent symbols drawn from the ``secrets`` CSPRNG.
    * ``hash``: SHA-256 of the URL and a per-attempt salt, reproducible for
      the same inputs.

    The generator holds configuration only and performs no I/O.
    """

    # Base62 characters (A-Z, a-z, 0-9)
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    STRATEGIES = ("random", "hash")

    # Largest multiple of 62 that fits in a byte; higher bytes are skipped
    # so every symbol is equally likely.
    _BYTE_LIMIT = 256 - (256 % len(BASE62_CHARS))

    def __init__(
        self,
        default_length: int = 6,
        fallback_length: int = 8,
        strategy: str = "random",
    ):
        """Initialize short code generator.

        Args:
            default_length: Length of regular codes
            fallback_length: Length used once collision retries are exhausted
            strategy: Either "random" or "hash"
        """
        if strategy not in self.STRATEGIES:
            raise ValueError(f"Unknown short code strategy: {strategy!r}")
        if default_length < 1 or fallback_length < 1:
            raise ValueError("Short code lengths must be positive")

        self.default_length = default_length
        self.fallback_length = fallback_length
        self.strategy = strategy

    def generate(
        self,
        seed: Optional[str] = None,
        attempt: int = 0,
        length: Optional[int] = None,
    ) -> str:
        """Generate a candidate code using the configured strategy.

        Args:
            seed: URL the code is derived from (hash strategy only)
            attempt: Attempt index, used as the salt by the hash strategy
            length: Length of the code (uses default if not specified)

        Returns:
            Candidate short code
        """
        if self.strategy == "hash":
            return self.generate_from_url(seed or "", salt=str(attempt), length=length)
        return self.generate_random(length)

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))

    def generate_from_url(
        self,
        url: str,
        salt: str = "",
        length: Optional[int] = None,
    ) -> str:
        """Generate short code from a URL hash.

        The same (url, salt) pair always yields the same code; callers vary
        the salt per attempt so that a collision is not replayed.

        Args:
            url: The URL to hash
            salt: Per-attempt salt
            length: Length of the code (uses default if not specified)

        Returns:
            Short code based on URL hash
        """
        length = length or self.default_length
        material = f"{url}\x00{salt}".encode("utf-8")

        chars = []
        block = 0
        while len(chars) < length:
            digest = hashlib.sha256(material + block.to_bytes(4, "big")).digest()
            for byte in digest:
                if byte >= self._BYTE_LIMIT:
                    continue
                chars.append(self.BASE62_CHARS[byte % len(self.BASE62_CHARS)])
                if len(chars) == length:
                    break
            block += 1

        return ''.join(chars)

    def generate_fallback(self, seed: Optional[str] = None) -> str:
        """Generate a longer code once collision retries are exhausted.

        The hash strategy salts with a fresh UUID so the result is not
        reproducible from the URL alone.

        Args:
            seed: URL the code is derived from (hash strategy only)

        Returns:
            Short code of ``fallback_length`` characters
        """
        if self.strategy == "hash":
            return self.generate_from_url(
                seed or "",
                salt=uuid.uuid4().hex,
                length=self.fallback_length,
            )
        return self.generate_random(self.fallback_length)

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code is non-empty and strictly alphanumeric.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
