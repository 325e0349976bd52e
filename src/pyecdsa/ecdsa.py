"""
ECDSA key generation, signing and verification

Every operation takes the curve configuration explicitly. Randomness and
message hashing are injectable: by default keys and nonces come from the
operating system CSPRNG and messages are digested with SHA-256.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .crypto.ec import (
    AffinePoint, CurveParameters, CurvePoint, add_two_mul, generator, is_on_curve, scalar_mult
)
from .crypto.entropy import RandomSource, SystemRandomSource, random_scalar
from .crypto.field import mod_inverse
from .crypto.hash import Hasher, HasherFactory, digest_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signature:
    """An ECDSA signature, both components in [1, n-1] when produced by sign_message"""
    r: int
    s: int

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.s


@dataclass(frozen=True)
class KeyPair:
    """A private scalar and the public point derived from it"""
    private_key: int
    public_key: AffinePoint

    def __repr__(self) -> str:
        # Keep the private scalar out of logs and tracebacks
        return f"KeyPair(private_key=<hidden>, public_key={self.public_key!r})"


def message_to_scalar(message: bytes, curve: CurveParameters,
                      hasher: HasherFactory = Hasher.sha256) -> int:
    """
    Derive the integer z signed in place of the message.

    The digest is read as a big-endian integer, truncated to its leftmost
    n.bit_length() bits when longer, then reduced modulo n.
    """
    digest = digest_message(message, hasher)
    z = int.from_bytes(digest, byteorder='big')

    excess_bits = len(digest) * 8 - curve.n.bit_length()
    if excess_bits > 0:
        z >>= excess_bits

    return z % curve.n


def derive_public_key(private_key: int, curve: CurveParameters) -> AffinePoint:
    """
    Compute the public point Q = d * G for a private scalar d.

    Raises:
        ValueError: if d is outside [1, n-1]
    """
    if not (1 <= private_key < curve.n):
        raise ValueError("Private key must be an integer in [1, n-1]")

    public_key = scalar_mult(private_key, generator(curve), curve)
    if public_key.is_infinity():
        # Only possible when n is not the true order of G
        raise ValueError("Private key maps to the point at infinity")
    return public_key


def generate_key_pair(curve: CurveParameters,
                      random_source: Optional[RandomSource] = None) -> KeyPair:
    """
    Generate a fresh key pair on the curve.

    Raises:
        RandomSourceFailure: if no private scalar could be drawn
    """
    source = SystemRandomSource() if random_source is None else random_source
    private_key = random_scalar(source, curve.n)
    logger.debug("Generated private key, deriving public key")
    return KeyPair(private_key, derive_public_key(private_key, curve))


def sign_message(message: bytes, private_key: int, curve: CurveParameters,
                 random_source: Optional[RandomSource] = None,
                 hasher: HasherFactory = Hasher.sha256) -> Signature:
    """
    Sign a message with the given private key.

    The nonce inverse uses extended Euclid, whose running time depends on its
    input, so the nonce is multiplied by a random blinding factor before it is
    inverted. Each attempt draws two scalars from the random source: the
    nonce k, then (once r != 0) the blinding factor.

    Args:
        message: Message bytes, hashed before signing
        private_key: Private scalar d in [1, n-1]
        curve: Curve parameters
        random_source: Source for the per-signature nonce and blinding factor,
            defaults to the system CSPRNG
        hasher: Factory for the message digest, must match the verifier's

    Returns:
        Signature (r, s) with 1 <= r, s <= n-1

    Raises:
        ValueError: if the private key is out of range
        RandomSourceFailure: if no nonce could be drawn
    """
    if not (1 <= private_key < curve.n):
        raise ValueError("Private key must be an integer in [1, n-1]")

    source = SystemRandomSource() if random_source is None else random_source
    n = curve.n
    z = message_to_scalar(message, curve, hasher)
    G = generator(curve)

    while True:
        k = random_scalar(source, n)

        R = scalar_mult(k, G, curve)
        if R.is_infinity():
            logger.debug("Nonce produced the point at infinity, retrying")
            continue

        r = R.x % n
        if r == 0:
            logger.debug("Nonce produced r == 0, retrying")
            continue

        # Invert the nonce blinded by a fresh random factor b, so the variable-time
        # inversion runs on k*b rather than on k
        b = random_scalar(source, n)
        k_inv = (mod_inverse((k * b) % n, n) * b) % n

        s = (k_inv * (z + r * private_key)) % n
        if s == 0:
            logger.debug("Nonce produced s == 0, retrying")
            continue

        return Signature(r, s)


def verify_signature(message: bytes, signature: Signature, public_key: CurvePoint,
                     curve: CurveParameters, hasher: HasherFactory = Hasher.sha256) -> bool:
    """
    Validates the given signature against the given public key and message.

    Malformed but well-typed input (out-of-range components, a public key that
    is not on the curve) makes this return False rather than raise.

    Args:
        message: Message bytes that were signed
        signature: Signature (r, s)
        public_key: Signer's public point
        curve: Curve parameters
        hasher: Factory for the message digest, must match the signer's

    Returns:
        True if signature is valid, False otherwise
    """
    r, s = signature
    n = curve.n

    if not (1 <= r < n and 1 <= s < n):
        logger.debug("Signature component out of range")
        return False

    if public_key.is_infinity() or not is_on_curve(public_key, curve):
        logger.debug("Public key is not a valid curve point")
        return False

    z = message_to_scalar(message, curve, hasher)

    # Calculate u_a = z * s^(-1) mod n and u_b = r * s^(-1) mod n
    w = mod_inverse(s, n)
    u_a = (z * w) % n
    u_b = (r * w) % n

    V = add_two_mul(u_a, generator(curve), u_b, public_key, curve)
    if V.is_infinity():
        logger.debug("Verification point is the point at infinity")
        return False

    # Verify that V.x ≡ r (mod n)
    return (V.x % n) == r
