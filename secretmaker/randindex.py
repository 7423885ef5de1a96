"""
secretmaker.randindex
Unbiased random indexes from a cryptographic byte source.

A random byte source only hands out whole bytes, so reducing them with a
modulo favours the low indexes whenever the range size is not a power of two.
Instead we keep just enough high-order bits of a 32-bit word to cover the
range and throw away any draw that lands past the end. Every kept draw has at
least a 50% chance of being accepted.
"""

import logging
import secrets
from typing import Callable

from .exceptions import RandomSourceError

logger = logging.getLogger(__name__)

WORD_BITS = 32
MAX_DRAW_ATTEMPTS = 1000

ByteSource = Callable[[int], bytes]


def _word_bits(bits: int) -> int:
    # widen in whole bytes only when the range does not fit a 32-bit word
    if bits <= WORD_BITS:
        return WORD_BITS
    return (bits + 7) // 8 * 8


class RandomIndexProvider:
    """
    Cryptographic strength random index generator.

    byte_source is called with a byte count and must return that many random
    bytes. It defaults to secrets.token_bytes (the OS CSPRNG), which holds no
    handle between calls and is safe to share between threads.
    """

    def __init__(self, byte_source: ByteSource = secrets.token_bytes):
        self._byte_source = byte_source

    def _draw(self, num_bytes: int) -> int:
        try:
            raw = self._byte_source(num_bytes)
        except Exception as e:
            raise RandomSourceError("random byte source failed") from e
        if len(raw) != num_bytes:
            raise RandomSourceError(
                f"random byte source returned {len(raw)} bytes, expected {num_bytes}"
            )
        return int.from_bytes(raw, "big")

    def random_index_in_range(self, a: int, b: int = 0) -> int:
        """
        Return an int in the inclusive range [min(a, b), max(a, b)].
        Each value in the range is equally likely.
        """
        for name, value in (("a", a), ("b", b)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")

        low = min(a, b)
        span = abs(a - b)
        bits = span.bit_length()
        word_bits = _word_bits(bits)
        shift = word_bits - bits
        num_bytes = word_bits // 8

        for attempt in range(1, MAX_DRAW_ATTEMPTS + 1):
            value = self._draw(num_bytes) >> shift
            if value <= span:
                if attempt > 1:
                    logger.debug("index in [0, %d] accepted after %d draws", span, attempt)
                return low + value

        raise RandomSourceError(
            f"no index in [0, {span}] after {MAX_DRAW_ATTEMPTS} draws; random source looks broken"
        )


_default_provider = RandomIndexProvider()


def random_index_in_range(a: int, b: int = 0) -> int:
    """Module-level shortcut using the default secrets-backed provider."""
    return _default_provider.random_index_in_range(a, b)
