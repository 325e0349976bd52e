"""
secp256r1 (P-256) curve parameters
"""

from .ec import AffinePoint, CurveParameters


SECP256R1 = CurveParameters(
    # Curve parameters for y^2 = x^3 + ax + b
    a=0xffffffff00000001000000000000000000000000fffffffffffffffffffffffc,
    b=0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b,

    # Curve field prime (p)
    p=0xffffffff00000001000000000000000000000000ffffffffffffffffffffffff,

    g=AffinePoint(
        0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296,
        0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5,
    ),

    # Scalar field prime (n) - order of the base point
    n=0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551,
)
