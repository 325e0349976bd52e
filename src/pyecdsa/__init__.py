"""
Python ECDSA Library

Elliptic Curve Digital Signature Algorithm over prime-field short Weierstrass
curves: key-pair generation, message signing and signature verification.

The curve configuration is always passed explicitly; SECP256K1 is the default
used by the command-line tool and SECP256R1 is also provided. Private keys and
nonces are drawn from the operating system CSPRNG unless a RandomSource is
supplied, and messages are hashed with SHA-256 unless another hasher factory is
supplied.
"""

from .ecdsa import (
    KeyPair,
    Signature,
    derive_public_key,
    generate_key_pair,
    message_to_scalar,
    sign_message,
    verify_signature,
)

from .crypto import (
    AffinePoint,
    CurveParameters,
    CurvePoint,
    DomainError,
    Hasher,
    INFINITY,
    Infinity,
    RandomSource,
    RandomSourceFailure,
    SECP256K1,
    SECP256R1,
    SystemRandomSource,
    mod_inverse,
    point_add,
    point_double,
    scalar_mult,
)

from .ser import (
    SerializationError,
    public_key_from_bytes,
    public_key_to_bytes,
    signature_from_bytes,
    signature_to_bytes,
)

__version__ = "0.1.0"

__all__ = [
    # Signature scheme
    "KeyPair",
    "Signature",
    "derive_public_key",
    "generate_key_pair",
    "message_to_scalar",
    "sign_message",
    "verify_signature",

    # Curve arithmetic and configuration
    "AffinePoint",
    "CurveParameters",
    "CurvePoint",
    "DomainError",
    "INFINITY",
    "Infinity",
    "SECP256K1",
    "SECP256R1",
    "mod_inverse",
    "point_add",
    "point_double",
    "scalar_mult",

    # Capabilities
    "Hasher",
    "RandomSource",
    "RandomSourceFailure",
    "SystemRandomSource",

    # Serialization
    "SerializationError",
    "public_key_from_bytes",
    "public_key_to_bytes",
    "signature_from_bytes",
    "signature_to_bytes",
]
