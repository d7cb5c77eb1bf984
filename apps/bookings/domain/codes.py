"""
Access codes and booking references.

Both identifiers come from an injected random source so tests can drive
them deterministically. Uniqueness is enforced by the database; callers
regenerate on collision.
"""

import random
import re
import secrets
import string
from datetime import date
from typing import Protocol

ACCESS_CODE_SPACE = 1_000_000
REFERENCE_ALPHABET = string.ascii_uppercase + string.digits
REFERENCE_SUFFIX_LENGTH = 5

ACCESS_CODE_PATTERN = re.compile(r'^\d{6}$')
BOOKING_REFERENCE_PATTERN = re.compile(r'^BK-\d{8}-[A-Z0-9]{5}$')


class RandomSource(Protocol):
    def randbelow(self, n: int) -> int:
        ...


class SystemRandomSource:
    """Cryptographically secure source backed by the secrets module"""

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)


class SeededRandomSource:
    """Deterministic source for tests and fixtures"""

    def __init__(self, seed: int = 0):
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._random.randrange(n)


class BookingCodeGenerator:
    def __init__(self, random_source: RandomSource | None = None):
        self.random_source = random_source or SystemRandomSource()

    def access_code(self) -> str:
        return '%06d' % self.random_source.randbelow(ACCESS_CODE_SPACE)

    def booking_reference(self, today: date) -> str:
        suffix = ''.join(
            REFERENCE_ALPHABET[self.random_source.randbelow(len(REFERENCE_ALPHABET))]
            for _ in range(REFERENCE_SUFFIX_LENGTH)
        )
        return f"BK-{today:%Y%m%d}-{suffix}"
