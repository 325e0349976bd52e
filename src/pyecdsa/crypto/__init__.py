"""
Cryptographic primitives for ECDSA

This module provides prime field inversion, elliptic curve group arithmetic,
message digests and random scalar sampling, along with the secp256k1 and
secp256r1 curve configurations.
"""

from .field import DomainError, mod_inverse
from .ec import (
    AffinePoint,
    CurveParameters,
    CurvePoint,
    INFINITY,
    Infinity,
    add_two_mul,
    generator,
    is_on_curve,
    point_add,
    point_double,
    point_from_affine,
    point_negate,
    scalar_mult,
)
from .hash import Hasher, HashEngine, HasherFactory, HashResult, digest_message
from .entropy import RandomSource, RandomSourceFailure, SystemRandomSource, random_scalar
from .secp256k1 import SECP256K1
from .secp256r1 import SECP256R1

__all__ = [
    'DomainError',
    'mod_inverse',
    'AffinePoint',
    'CurveParameters',
    'CurvePoint',
    'INFINITY',
    'Infinity',
    'add_two_mul',
    'generator',
    'is_on_curve',
    'point_add',
    'point_double',
    'point_from_affine',
    'point_negate',
    'scalar_mult',
    'Hasher',
    'HashEngine',
    'HasherFactory',
    'HashResult',
    'digest_message',
    'RandomSource',
    'RandomSourceFailure',
    'SystemRandomSource',
    'random_scalar',
    'SECP256K1',
    'SECP256R1',
]
