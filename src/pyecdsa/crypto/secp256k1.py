"""
secp256k1 curve parameters, the default configuration
"""

from .ec import AffinePoint, CurveParameters


# The 256-bit Koblitz curve from SEC 2, section 2.4.1
SECP256K1 = CurveParameters(
    # Curve parameters for y^2 = x^3 + 7
    a=0,
    b=7,

    # Curve field prime, 2^256 - 2^32 - 977
    p=0xfffffffffffffffffffffffffffffffffffffffffffffffffffffffefffffc2f,

    g=AffinePoint(
        0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798,
        0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8,
    ),

    # Order of the base point
    n=0xfffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141,
)
