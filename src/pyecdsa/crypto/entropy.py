"""
Sources of randomness for private keys and signing nonces

Scalars are drawn by rejection sampling so that every value in [1, n-1] is
equally likely. Production code uses SystemRandomSource; any object with a
`random_bytes` method can be passed instead.
"""

import logging
import secrets
from typing import Protocol

logger = logging.getLogger(__name__)

# Maximum number of rejected draws before sampling gives up. Each draw is
# accepted with probability above 1/2, so reaching this means the source is
# broken rather than unlucky.
MAX_SAMPLING_ATTEMPTS = 128


class RandomSourceFailure(Exception):
    """The random source is unavailable or did not deliver enough bytes"""
    pass


class RandomSource(Protocol):
    """Interface of a source of uniformly random bytes"""

    def random_bytes(self, count: int) -> bytes:
        ...


class SystemRandomSource:
    """Random source backed by the operating system CSPRNG via `secrets`"""

    def random_bytes(self, count: int) -> bytes:
        try:
            return secrets.token_bytes(count)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceFailure(f"System random source unavailable: {e}") from e


def random_scalar(source: RandomSource, n: int) -> int:
    """
    Draw an integer uniformly from [1, n-1].

    Candidates are masked to the bit length of n; zero and values >= n are
    discarded and redrawn rather than reduced, which would bias the result.

    Raises:
        RandomSourceFailure: if the source fails, returns too few bytes, or
            keeps producing out-of-range values
    """
    if n < 2:
        raise ValueError("Range upper bound must be at least 2")

    bits = n.bit_length()
    byte_len = (bits + 7) // 8
    mask = (1 << bits) - 1

    for _ in range(MAX_SAMPLING_ATTEMPTS):
        data = source.random_bytes(byte_len)
        if len(data) != byte_len:
            raise RandomSourceFailure(
                f"Random source returned {len(data)} bytes, expected {byte_len}"
            )

        candidate = int.from_bytes(data, byteorder='big') & mask
        if 1 <= candidate < n:
            return candidate
        logger.debug("Rejected out-of-range scalar candidate, redrawing")

    raise RandomSourceFailure(
        f"No scalar in range after {MAX_SAMPLING_ATTEMPTS} draws"
    )
