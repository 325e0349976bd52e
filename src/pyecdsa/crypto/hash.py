"""
Simple wrapper around various hash options, used to digest messages before
they are signed or verified.

Signing and verification take a zero-argument factory returning a hash engine
(anything with `update` and `finish`), so the digest is replaceable. The
default is SHA-256.
"""

import hashlib
from typing import Callable, Protocol


class HashResult:
    """Container for hash results that can return bytes via as_ref()"""

    def __init__(self, hash_bytes: bytes):
        self._bytes = hash_bytes

    def as_ref(self) -> bytes:
        """Return the hash bytes"""
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)


class HashEngine(Protocol):
    """Interface of an incremental message digest"""

    def update(self, data: bytes) -> None:
        ...

    def finish(self) -> HashResult:
        ...


HasherFactory = Callable[[], HashEngine]


class Hasher:
    """Hash engine that supports SHA256, SHA384, and SHA512"""

    SUPPORTED_ALGORITHMS = ('sha256', 'sha384', 'sha512')

    def __init__(self, algorithm: str):
        if algorithm not in self.SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        self._algorithm = algorithm
        self._hasher = hashlib.new(algorithm)

    @classmethod
    def sha256(cls) -> 'Hasher':
        """Create a SHA256 hasher"""
        return cls('sha256')

    @classmethod
    def sha384(cls) -> 'Hasher':
        """Create a SHA384 hasher"""
        return cls('sha384')

    @classmethod
    def sha512(cls) -> 'Hasher':
        """Create a SHA512 hasher"""
        return cls('sha512')

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def update(self, data: bytes) -> None:
        """Update the hasher with new data"""
        self._hasher.update(data)

    def finish(self) -> HashResult:
        """Finalize the hash and return the result"""
        return HashResult(self._hasher.digest())


def digest_message(message: bytes, hasher: HasherFactory = Hasher.sha256) -> bytes:
    """Hash a complete message with a fresh engine from the factory"""
    engine = hasher()
    engine.update(message)
    return engine.finish().as_ref()
