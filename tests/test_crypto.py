"""
Test cases for the crypto module: field inversion, curve group arithmetic,
hashing and random scalar sampling
"""

import hashlib
import math
from typing import Tuple

import pytest

from pyecdsa.crypto import ec, entropy
from pyecdsa.crypto.ec import (
    AffinePoint, CurveParameters, INFINITY, Infinity, add_two_mul, generator, is_on_curve,
    point_add, point_double, point_from_affine, point_negate, scalar_mult,
)
from pyecdsa.crypto.entropy import (
    MAX_SAMPLING_ATTEMPTS, RandomSourceFailure, SystemRandomSource, random_scalar,
)
from pyecdsa.crypto.field import DomainError, mod_inverse
from pyecdsa.crypto.hash import Hasher, digest_message
from pyecdsa.crypto.secp256k1 import SECP256K1
from pyecdsa.crypto.secp256r1 import SECP256R1


# y^2 = x^3 + 2x + 2 over F_17, generator of order 19
TOY_CURVE = CurveParameters(a=2, b=2, p=17, g=AffinePoint(5, 1), n=19)

# Multiples 1G..18G of the toy generator
TOY_MULTIPLES = [
    (5, 1), (6, 3), (10, 6), (3, 1), (9, 16), (16, 13), (0, 6), (13, 7), (7, 6),
    (7, 11), (13, 10), (0, 11), (16, 4), (9, 1), (3, 16), (10, 11), (6, 14), (5, 16),
]

# y^2 = x^3 + x over F_23, where (0, 0) is a genuine point of order 2
ORIGIN_CURVE = CurveParameters(a=1, b=0, p=23, g=AffinePoint(0, 0), n=2)

SECP256K1_2G = AffinePoint(
    0xc6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5,
    0x1ae168fea63dc339a3c58419466ceaeef7f632653266d0e1236431a950cfe52a,
)
SECP256K1_3G = AffinePoint(
    0xf9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9,
    0x388f7b0f632de8140fe337e62a37f3566500a99934c2231b6cb9fd7584b8e672,
)
SECP256R1_2G = AffinePoint(
    0x7cf27b188d034f7e8a52380304b51ac3c08969e277f21b35a60b48fc47669978,
    0x07775510db8ed040293d9ac69f7430dbba7dade63ce982299e04b79d227873d1,
)


class FixedRandomSource:
    """Random source returning queued byte strings, failing once they run out"""

    def __init__(self, *chunks: bytes):
        self._chunks = list(chunks)

    def random_bytes(self, count: int) -> bytes:
        if not self._chunks:
            raise RandomSourceFailure("Fixed random source exhausted")
        return self._chunks.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._chunks)


# Field arithmetic

def test_mod_inverse_small():
    """Test the inverse of 2 modulo 7"""
    assert mod_inverse(2, 7) == 4


def test_mod_inverse_all_coprime_pairs():
    """(k * k^-1) mod m == 1 for every coprime 0 < k < m up to a bound"""
    for m in range(2, 60):
        for k in range(1, m):
            if math.gcd(k, m) != 1:
                continue
            inv = mod_inverse(k, m)
            assert 0 <= inv < m
            assert (k * inv) % m == 1, f"Inverse of {k} mod {m} failed"


def test_mod_inverse_normalizes_input():
    """Negative and oversized inputs are reduced before inverting"""
    assert mod_inverse(-3, 7) == mod_inverse(4, 7) == 2
    assert mod_inverse(9, 7) == 4
    assert mod_inverse(SECP256K1.n - 1, SECP256K1.n) == SECP256K1.n - 1


def test_mod_inverse_domain_errors():
    with pytest.raises(DomainError):
        mod_inverse(0, 7)
    with pytest.raises(DomainError):
        mod_inverse(14, 7)
    with pytest.raises(DomainError):
        mod_inverse(4, 8)
    with pytest.raises(DomainError):
        mod_inverse(3, 1)


# Curve parameters

def test_curve_parameters_validation():
    """Malformed curve configurations are rejected at construction"""
    with pytest.raises(ValueError):
        CurveParameters(a=2, b=2, p=17, g=AffinePoint(5, 2), n=19)
    with pytest.raises(ValueError):
        CurveParameters(a=0, b=0, p=17, g=AffinePoint(0, 0), n=19)
    with pytest.raises(ValueError):
        CurveParameters(a=1, b=1, p=3, g=AffinePoint(0, 1), n=2)
    with pytest.raises(ValueError):
        CurveParameters(a=2, b=2, p=17, g=AffinePoint(5, 1), n=1)
    with pytest.raises(ValueError):
        CurveParameters(a=2, b=2, p=17, g=INFINITY, n=19)


def test_curve_parameters_are_immutable():
    with pytest.raises(AttributeError):
        SECP256K1.n = 7


def test_standard_curve_sizes():
    assert SECP256K1.coord_bytes == 32
    assert SECP256K1.scalar_bytes == 32
    assert SECP256R1.coord_bytes == 32
    assert TOY_CURVE.coord_bytes == 1


# Points

def test_generators_on_curve():
    for curve in (SECP256K1, SECP256R1, TOY_CURVE, ORIGIN_CURVE):
        assert is_on_curve(generator(curve), curve)
    assert is_on_curve(INFINITY, SECP256K1)


def test_point_from_affine():
    assert point_from_affine(5, 1, TOY_CURVE) == AffinePoint(5, 1)
    assert point_from_affine(5 + 17, 1 - 17, TOY_CURVE) == AffinePoint(5, 1)
    assert point_from_affine(5, 2, TOY_CURVE) is None


def test_is_on_curve_rejects_unreduced_coordinates():
    assert not is_on_curve(AffinePoint(5 + 17, 1), TOY_CURVE)
    assert not is_on_curve(AffinePoint(5, -16), TOY_CURVE)


def test_identity_is_distinct_from_origin():
    assert INFINITY == Infinity()
    assert INFINITY != AffinePoint(0, 0)
    assert INFINITY.is_infinity()
    assert not AffinePoint(0, 0).is_infinity()


def test_identity_laws():
    """P + O == P, O + P == P, 0 * P == O and 1 * P == P"""
    for curve in (SECP256K1, SECP256R1, TOY_CURVE, ORIGIN_CURVE):
        G = generator(curve)
        assert point_add(INFINITY, G, curve) == G
        assert point_add(G, INFINITY, curve) == G
        assert point_add(INFINITY, INFINITY, curve) == INFINITY
        assert scalar_mult(0, G, curve) == INFINITY
        assert scalar_mult(1, G, curve) == G
        assert scalar_mult(5, INFINITY, curve) == INFINITY
        assert point_double(INFINITY, curve) == INFINITY


def test_toy_curve_multiples():
    """Every multiple of the toy generator matches the textbook table"""
    G = generator(TOY_CURVE)
    for k, (x, y) in enumerate(TOY_MULTIPLES, start=1):
        assert scalar_mult(k, G, TOY_CURVE) == AffinePoint(x, y), f"{k}G mismatch"
    assert scalar_mult(19, G, TOY_CURVE) == INFINITY
    assert scalar_mult(20, G, TOY_CURVE) == G
    assert scalar_mult(19 * 40 + 3, G, TOY_CURVE) == AffinePoint(10, 6)


def test_toy_curve_repeated_addition():
    """Adding G one step at a time walks the same table as scalar_mult"""
    G = generator(TOY_CURVE)
    acc = INFINITY
    for x, y in TOY_MULTIPLES:
        acc = point_add(acc, G, TOY_CURVE)
        assert acc == AffinePoint(x, y)
    assert point_add(acc, G, TOY_CURVE) == INFINITY


def test_doubling_matches_addition():
    """add(P, P) dispatches to doubling instead of the chord formula"""
    for curve in (SECP256K1, SECP256R1, TOY_CURVE):
        P = generator(curve)
        for _ in range(5):
            assert point_add(P, P, curve) == point_double(P, curve)
            P = point_double(P, curve)

    for x, y in TOY_MULTIPLES:
        P = AffinePoint(x, y)
        assert point_add(P, P, TOY_CURVE) == point_double(P, TOY_CURVE)


def test_inverse_points_sum_to_identity():
    for curve in (SECP256K1, TOY_CURVE):
        G = generator(curve)
        assert point_add(G, point_negate(G, curve), curve) == INFINITY
    assert point_add(AffinePoint(0, 6), AffinePoint(0, 11), TOY_CURVE) == INFINITY
    assert point_negate(INFINITY, TOY_CURVE) == INFINITY


def test_point_at_origin():
    """(0, 0) is an ordinary point of order two, not the identity"""
    origin = AffinePoint(0, 0)
    assert point_add(origin, INFINITY, ORIGIN_CURVE) == origin
    assert point_add(INFINITY, origin, ORIGIN_CURVE) == origin
    assert point_double(origin, ORIGIN_CURVE) == INFINITY
    assert point_add(origin, origin, ORIGIN_CURVE) == INFINITY
    assert scalar_mult(1, origin, ORIGIN_CURVE) == origin
    assert scalar_mult(2, origin, ORIGIN_CURVE) == INFINITY
    assert scalar_mult(3, origin, ORIGIN_CURVE) == origin

    other = AffinePoint(1, 5)
    assert is_on_curve(other, ORIGIN_CURVE)
    assert point_add(origin, other, ORIGIN_CURVE) == AffinePoint(1, 18)


def test_secp256k1_known_multiples():
    G = generator(SECP256K1)
    assert scalar_mult(2, G, SECP256K1) == SECP256K1_2G
    assert point_double(G, SECP256K1) == SECP256K1_2G
    assert scalar_mult(3, G, SECP256K1) == SECP256K1_3G
    assert point_add(G, SECP256K1_2G, SECP256K1) == SECP256K1_3G
    assert scalar_mult(SECP256K1.n - 1, G, SECP256K1) == AffinePoint(G.x, SECP256K1.p - G.y)
    assert scalar_mult(SECP256K1.n, G, SECP256K1) == INFINITY


def test_secp256r1_known_multiples():
    G = generator(SECP256R1)
    assert scalar_mult(2, G, SECP256R1) == SECP256R1_2G
    assert scalar_mult(SECP256R1.n, G, SECP256R1) == INFINITY


def test_scalar_mult_is_linear():
    """(a + b)G == aG + bG"""
    G = generator(SECP256K1)
    a = 0x1234567890abcdef1234567890abcdef
    b = SECP256K1.n - 12345
    lhs = scalar_mult((a + b) % SECP256K1.n, G, SECP256K1)
    rhs = point_add(scalar_mult(a, G, SECP256K1), scalar_mult(b, G, SECP256K1), SECP256K1)
    assert lhs == rhs
    assert add_two_mul(a, G, b, G, SECP256K1) == lhs


def count_scalar_mult_operations(monkeypatch, k: int, point, curve) -> Tuple[int, int]:
    """Run scalar_mult counting group additions and field inversions"""
    counts = {"add": 0, "inverse": 0}
    real_add = ec._projective_add
    real_inverse = ec.mod_inverse

    def counting_add(first, second, c):
        counts["add"] += 1
        return real_add(first, second, c)

    def counting_inverse(value, modulus):
        counts["inverse"] += 1
        return real_inverse(value, modulus)

    monkeypatch.setattr(ec, "_projective_add", counting_add)
    monkeypatch.setattr(ec, "mod_inverse", counting_inverse)
    try:
        result = scalar_mult(k, point, curve)
    finally:
        monkeypatch.undo()

    assert result == reference_scalar_mult(k, point, curve)
    return counts["add"], counts["inverse"]


def reference_scalar_mult(k: int, point, curve):
    """Reference k * point by repeated doubling and affine addition"""
    result = INFINITY
    addend = point
    while k:
        if k & 1:
            result = point_add(result, addend, curve)
        addend = point_double(addend, curve)
        k >>= 1
    return result


def test_scalar_mult_fixed_operation_sequence(monkeypatch):
    """Scalars of any bit length or bit pattern below n cost the same group operations"""
    n = SECP256K1.n
    G = generator(SECP256K1)
    scalars = [
        1,
        2,
        2 ** 200,
        n - 1,
        int("55" * 32, 16) % n,
        int("aa" * 32, 16) % n,
        0x1e99423a4ed27608a15a2616a2b0e9e52ced330ac530edcc32c8ffc6a526aedd,
    ]

    counts = [count_scalar_mult_operations(monkeypatch, k, G, SECP256K1) for k in scalars]
    assert counts[0] == (2 * n.bit_length(), 0)
    for k, count in zip(scalars, counts):
        assert count == counts[0], f"scalar {k:#x} took {count}, expected {counts[0]}"


def test_scalar_mult_fixed_operation_sequence_toy(monkeypatch):
    G = generator(TOY_CURVE)
    counts = {count_scalar_mult_operations(monkeypatch, k, G, TOY_CURVE)
              for k in range(1, TOY_CURVE.n)}
    assert counts == {(2 * TOY_CURVE.n.bit_length(), 0)}


def test_scalar_mult_negative():
    with pytest.raises(ValueError):
        scalar_mult(-1, generator(TOY_CURVE), TOY_CURVE)


def test_scalar_mult_results_on_curve():
    G = generator(SECP256R1)
    for k in (2, 3, 0xdeadbeef, SECP256R1.n // 2):
        assert is_on_curve(scalar_mult(k, G, SECP256R1), SECP256R1)


# Hashing

def test_hasher_sha256():
    hasher = Hasher.sha256()
    hasher.update(b"ab")
    hasher.update(b"c")
    result = hasher.finish()
    assert len(result) == 32
    assert result.as_ref().hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_hasher_variants():
    assert digest_message(b"message", Hasher.sha384) == hashlib.sha384(b"message").digest()
    assert digest_message(b"message", Hasher.sha512) == hashlib.sha512(b"message").digest()
    assert digest_message(b"message") == hashlib.sha256(b"message").digest()
    assert Hasher.sha512().algorithm == "sha512"


def test_hasher_unsupported():
    with pytest.raises(ValueError):
        Hasher("md5")
    with pytest.raises(ValueError):
        Hasher("sha1")


# Random scalars

def test_random_scalar_accepts_in_range():
    source = FixedRandomSource(b"\x0a")
    assert random_scalar(source, 19) == 10
    assert source.remaining == 0


def test_random_scalar_rejects_out_of_range():
    """Zero and values >= n are redrawn, not reduced"""
    source = FixedRandomSource(b"\x00", b"\x13", b"\x1f", b"\x12")
    assert random_scalar(source, 19) == 18
    assert source.remaining == 0


def test_random_scalar_masks_to_bit_length():
    source = FixedRandomSource(b"\xe3")
    assert random_scalar(source, 19) == 3


def test_random_scalar_full_width():
    n = SECP256K1.n
    source = FixedRandomSource((n - 1).to_bytes(32, "big"))
    assert random_scalar(source, n) == n - 1
    source = FixedRandomSource(n.to_bytes(32, "big"), (1).to_bytes(32, "big"))
    assert random_scalar(source, n) == 1


def test_random_scalar_short_read():
    with pytest.raises(RandomSourceFailure):
        random_scalar(FixedRandomSource(b""), 19)
    with pytest.raises(RandomSourceFailure):
        random_scalar(FixedRandomSource(b"\x01" * 31), SECP256K1.n)


def test_random_scalar_gives_up():
    source = FixedRandomSource(*([b"\x00"] * (MAX_SAMPLING_ATTEMPTS + 1)))
    with pytest.raises(RandomSourceFailure):
        random_scalar(source, 19)
    assert source.remaining == 1


def test_random_scalar_exhausted_source():
    with pytest.raises(RandomSourceFailure):
        random_scalar(FixedRandomSource(), 19)


def test_random_scalar_invalid_bound():
    with pytest.raises(ValueError):
        random_scalar(FixedRandomSource(b"\x00"), 1)


def test_system_random_source():
    source = SystemRandomSource()
    assert len(source.random_bytes(32)) == 32
    for _ in range(20):
        assert 1 <= random_scalar(source, 19) < 19


def test_system_random_source_failure(monkeypatch):
    def unavailable(count):
        raise OSError("no entropy")

    monkeypatch.setattr(entropy.secrets, "token_bytes", unavailable)
    with pytest.raises(RandomSourceFailure):
        SystemRandomSource().random_bytes(32)
