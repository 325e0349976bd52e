"""
Logic to read and write signatures and public keys as fixed-width bytes

Integers are big-endian and left-padded to the width of the curve: signatures
are r || s with each half as wide as n, public keys are x || y with each half
as wide as p.
"""

from typing import Tuple

from .crypto.ec import AffinePoint, CurveParameters, CurvePoint, point_from_affine
from .ecdsa import Signature


class SerializationError(Exception):
    """Error during serialization/deserialization"""
    pass


def read_scalar(data: bytes, offset: int, width: int) -> Tuple[int, int]:
    """Read a width-byte big-endian integer at offset, return (value, new_offset)"""
    if offset < 0 or offset + width > len(data):
        raise SerializationError(f"Not enough data for {width}-byte integer")
    return int.from_bytes(data[offset:offset + width], byteorder='big'), offset + width


def write_scalar(value: int, width: int) -> bytes:
    """Write a non-negative integer as exactly width big-endian bytes"""
    if value < 0:
        raise SerializationError("Cannot encode a negative integer")
    try:
        return value.to_bytes(width, byteorder='big')
    except OverflowError as e:
        raise SerializationError(f"Integer does not fit in {width} bytes") from e


def signature_to_bytes(signature: Signature, curve: CurveParameters) -> bytes:
    """Encode a signature as r || s"""
    width = curve.scalar_bytes
    r, s = signature
    return write_scalar(r, width) + write_scalar(s, width)


def signature_from_bytes(data: bytes, curve: CurveParameters) -> Signature:
    """
    Decode an r || s signature.

    Component ranges are not checked here, verification rejects
    out-of-range values.
    """
    width = curve.scalar_bytes
    if len(data) != width * 2:
        raise SerializationError(f"Signature must be exactly {width * 2} bytes")

    r, offset = read_scalar(data, 0, width)
    s, _ = read_scalar(data, offset, width)
    return Signature(r, s)


def public_key_to_bytes(public_key: CurvePoint, curve: CurveParameters) -> bytes:
    """Encode a public key as x || y"""
    if public_key.is_infinity():
        raise SerializationError("The point at infinity has no affine encoding")
    width = curve.coord_bytes
    return write_scalar(public_key.x, width) + write_scalar(public_key.y, width)


def public_key_from_bytes(data: bytes, curve: CurveParameters) -> AffinePoint:
    """Decode an x || y public key, rejecting points that are not on the curve"""
    width = curve.coord_bytes
    if len(data) != width * 2:
        raise SerializationError(f"Public key must be exactly {width * 2} bytes")

    x, offset = read_scalar(data, 0, width)
    y, _ = read_scalar(data, offset, width)
    if x >= curve.p or y >= curve.p:
        raise SerializationError("Public key coordinate out of field range")

    point = point_from_affine(x, y, curve)
    if point is None:
        raise SerializationError("Public key is not on the curve")
    return point
