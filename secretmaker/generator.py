"""
secretmaker.generator
Cryptographic strength secret strings with at least one character from each
of four sub-pools: numbers, lowercase, uppercase and special characters.
"""

import logging
from typing import List, Optional

from .exceptions import SecretAssemblyError, SecretLengthError
from .randindex import RandomIndexProvider

logger = logging.getLogger(__name__)

NUMBERS = "1234567890"
LOWER = "abcdefghijklmnopqrstuvwxyz"
UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
# no space, double quote, backslash or DEL
SPECIAL = "!#$%&'()*+,-./:;<=>?@[]^_`{|}~"

SUB_POOLS = (NUMBERS, LOWER, UPPER, SPECIAL)
POOL_NAMES = ("numbers", "lower", "upper", "special")
COMBINED = "".join(SUB_POOLS)

NUMBERS_END = len(NUMBERS) - 1
LOWER_END = NUMBERS_END + len(LOWER)
UPPER_END = LOWER_END + len(UPPER)
POOL_ENDS = (NUMBERS_END, LOWER_END, UPPER_END, len(COMBINED) - 1)

MIN_SECRET_LENGTH = len(SUB_POOLS)
MAX_SECRET_LENGTH = 0xFFFF


def pool_index(index: int) -> int:
    """Return which sub-pool (0..3) a COMBINED index falls in."""
    if not 0 <= index < len(COMBINED):
        raise IndexError(f"index {index} outside combined pool")
    for slot, end in enumerate(POOL_ENDS):
        if index <= end:
            return slot
    raise AssertionError("pool boundaries do not cover the combined pool")


class _Compensation:
    """
    Per-secret record of which sub-pools have had their first fill draw
    suppressed. One instance lives for a single get_new_secret() call.
    """

    def __init__(self) -> None:
        self.compensated = [False] * len(SUB_POOLS)
        self.count = 0

    @property
    def done(self) -> bool:
        return self.count >= len(SUB_POOLS)

    def suppress(self, index: int) -> bool:
        """Mark the pool holding index and return True if this draw must be dropped."""
        if self.done:
            return False
        slot = pool_index(index)
        if self.compensated[slot]:
            return False
        self.compensated[slot] = True
        self.count += 1
        return True


def shuffle_in_place(buffer: List[str], provider: RandomIndexProvider) -> None:
    """
    Fisher-Yates shuffle. Picks build up from the end of the buffer; at each
    step every not-yet-placed position, including 0, can be chosen.
    """
    for i in range(len(buffer) - 1, 0, -1):
        j = provider.random_index_in_range(i)
        buffer[i], buffer[j] = buffer[j], buffer[i]


class SecretAssembler:
    """
    Builds secrets of a fixed length.

    Lengths outside [MIN_SECRET_LENGTH, MAX_SECRET_LENGTH] are rejected with
    SecretLengthError; they are never clamped.
    """

    def __init__(self, length: Optional[int] = None, provider: Optional[RandomIndexProvider] = None):
        if length is None:
            length = len(COMBINED)
        if isinstance(length, bool) or not isinstance(length, int):
            raise SecretLengthError(f"length must be an int, got {type(length).__name__}")
        if length < MIN_SECRET_LENGTH:
            raise SecretLengthError(
                f"String length too short; must be {MIN_SECRET_LENGTH} or more characters."
            )
        if length > MAX_SECRET_LENGTH:
            raise SecretLengthError(
                f"String length too long; cannot exceed {MAX_SECRET_LENGTH} characters."
            )
        self.length = length
        self.provider = provider or RandomIndexProvider()

    def _pick(self, pool: str) -> str:
        return pool[self.provider.random_index_in_range(len(pool) - 1)]

    def _fill(self, buffer: List[str], count: int, state: _Compensation) -> None:
        # Forcing one character per sub-pool over-represents the smaller pools.
        # Dropping the first fill draw that lands in each pool evens most of it
        # out; what remains is negligible from about 64 characters up.
        max_draws = count + len(SUB_POOLS)
        target = len(buffer) + count
        draws = 0
        while len(buffer) < target:
            if draws >= max_draws:
                raise SecretAssemblyError(
                    f"fill needed more than {max_draws} draws for {count} characters"
                )
            draws += 1
            index = self.provider.random_index_in_range(len(COMBINED) - 1)
            if state.suppress(index):
                continue
            buffer.append(COMBINED[index])

    def get_new_secret(self) -> str:
        """
        Return a new secret of self.length characters containing at least one
        character from each sub-pool.
        """
        state = _Compensation()
        buffer: List[str] = []

        for pool in SUB_POOLS:
            buffer.append(self._pick(pool))

        self._fill(buffer, self.length - len(SUB_POOLS), state)

        # the guaranteed characters sit at the front until shuffled
        shuffle_in_place(buffer, self.provider)

        logger.debug("assembled secret: length=%d pools_compensated=%d", len(buffer), state.count)
        return "".join(buffer)


def generate(length: Optional[int] = None) -> str:
    """Generate a single secret."""
    return SecretAssembler(length).get_new_secret()


def generate_batch(count: int, length: Optional[int] = None) -> List[str]:
    """Generate count secrets of the same length with one assembler."""
    if count <= 0:
        raise ValueError("count must be > 0")
    assembler = SecretAssembler(length)
    return [assembler.get_new_secret() for _ in range(count)]
