"""
Group arithmetic on short Weierstrass curves over prime fields

Points are affine. The identity element is a distinct type rather than a
reserved coordinate pair, so a genuine point at (0, 0) stays distinguishable
from the point at infinity. Scalar multiplication works internally in
projective coordinates with complete addition formulas.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .field import mod_inverse


@dataclass(frozen=True)
class Infinity:
    """The point at infinity, the identity element of the curve group"""

    def is_infinity(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "INFINITY"


@dataclass(frozen=True)
class AffinePoint:
    """A curve point given by affine coordinates, both in [0, p)"""
    x: int
    y: int

    def is_infinity(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"AffinePoint(x={self.x:#x}, y={self.y:#x})"


CurvePoint = Union[Infinity, AffinePoint]

INFINITY = Infinity()


@dataclass(frozen=True)
class CurveParameters:
    """
    Domain parameters for the curve y^2 = x^3 + ax + b (mod p)

    g generates a cyclic subgroup of order n. Instances are immutable and are
    passed explicitly to every operation.
    """
    # Curve parameters for y^2 = x^3 + ax + b
    a: int
    b: int

    # Curve field prime (p)
    p: int

    # Generator point
    g: AffinePoint

    # Order of the subgroup generated by g (n)
    n: int

    def __post_init__(self):
        if self.p <= 3:
            raise ValueError("Field prime must be greater than 3")
        if not (0 <= self.a < self.p and 0 <= self.b < self.p):
            raise ValueError("Curve coefficients must lie in [0, p)")
        if (4 * pow(self.a, 3, self.p) + 27 * self.b * self.b) % self.p == 0:
            raise ValueError("Curve is singular")
        if self.n <= 1:
            raise ValueError("Subgroup order must be greater than 1")
        if not isinstance(self.g, AffinePoint) or not is_on_curve(self.g, self):
            raise ValueError("Generator is not a point on the curve")

    @property
    def coord_bytes(self) -> int:
        """Byte length of a field element"""
        return (self.p.bit_length() + 7) // 8

    @property
    def scalar_bytes(self) -> int:
        """Byte length of a scalar modulo n"""
        return (self.n.bit_length() + 7) // 8


def generator(curve: CurveParameters) -> AffinePoint:
    """Return the generator point for the curve"""
    return curve.g


def is_on_curve(point: CurvePoint, curve: CurveParameters) -> bool:
    """Check that the point is the identity or satisfies the curve equation"""
    if point.is_infinity():
        return True
    if not (0 <= point.x < curve.p and 0 <= point.y < curve.p):
        return False

    left = (point.y * point.y) % curve.p
    right = (point.x * point.x * point.x + curve.a * point.x + curve.b) % curve.p
    return left == right


def point_from_affine(x: int, y: int, curve: CurveParameters) -> Optional[AffinePoint]:
    """Create point from affine coordinates, validating it's on the curve"""
    point = AffinePoint(x % curve.p, y % curve.p)
    if not is_on_curve(point, curve):
        return None
    return point


def point_negate(point: CurvePoint, curve: CurveParameters) -> CurvePoint:
    if point.is_infinity():
        return INFINITY
    return AffinePoint(point.x, (-point.y) % curve.p)


def point_double(point: CurvePoint, curve: CurveParameters) -> CurvePoint:
    """Point doubling, the tangent through P meets the curve again at -2P"""
    if point.is_infinity() or point.y == 0:
        # Vertical tangent
        return INFINITY

    p = curve.p
    slope = ((3 * point.x * point.x + curve.a) * mod_inverse(2 * point.y, p)) % p
    x3 = (slope * slope - 2 * point.x) % p
    y3 = (slope * (point.x - x3) - point.y) % p

    return AffinePoint(x3, y3)


def point_add(first: CurvePoint, second: CurvePoint, curve: CurveParameters) -> CurvePoint:
    """Point addition, the chord through P and Q meets the curve again at -(P+Q)"""
    if first.is_infinity():
        return second
    if second.is_infinity():
        return first

    if first.x == second.x:
        if first.y == second.y:
            return point_double(first, curve)
        # Q = -P
        return INFINITY

    p = curve.p
    slope = ((second.y - first.y) * mod_inverse(second.x - first.x, p)) % p
    x3 = (slope * slope - first.x - second.x) % p
    y3 = (slope * (first.x - x3) - first.y) % p

    return AffinePoint(x3, y3)


ProjectivePoint = Tuple[int, int, int]

# The identity in projective coordinates
_PROJECTIVE_INFINITY = (0, 1, 0)


def _to_projective(point: CurvePoint) -> ProjectivePoint:
    if point.is_infinity():
        return _PROJECTIVE_INFINITY
    return (point.x, point.y, 1)


def _to_affine(point: ProjectivePoint, curve: CurveParameters) -> CurvePoint:
    """Convert from projective coordinates (X:Y:Z) to x = X/Z, y = Y/Z"""
    x, y, z = point
    if z == 0:
        return INFINITY

    # Fermat inversion, the exponent p - 2 is public
    z_inv = pow(z, curve.p - 2, curve.p)
    return AffinePoint((x * z_inv) % curve.p, (y * z_inv) % curve.p)


def _projective_add(first: ProjectivePoint, second: ProjectivePoint,
                    curve: CurveParameters) -> ProjectivePoint:
    """
    Complete point addition in homogeneous projective coordinates

    https://eprint.iacr.org/2015/1060 (Renes, Costello, Batina), algorithm 1.
    The same formula covers P + Q, P + P, P + (-P) and the identity, so there
    is no branching on the inputs. Valid whenever first - second is not a
    point of order two.
    """
    x1, y1, z1 = first
    x2, y2, z2 = second
    p = curve.p
    a = curve.a
    b3 = 3 * curve.b

    t0 = (x1 * x2) % p
    t1 = (y1 * y2) % p
    t2 = (z1 * z2) % p
    # X1*Y2 + X2*Y1, X1*Z2 + X2*Z1, Y1*Z2 + Y2*Z1
    xy = (x1 * y2 + x2 * y1) % p
    xz = (x1 * z2 + x2 * z1) % p
    yz = (y1 * z2 + y2 * z1) % p

    # Y1*Y2 -/+ (a*xz + 3b*Z1*Z2)
    lo = (t1 - a * xz - b3 * t2) % p
    hi = (t1 + a * xz + b3 * t2) % p
    # 3*X1*X2 + a*Z1*Z2
    u = (3 * t0 + a * t2) % p
    # a*X1*X2 + 3b*xz - a^2*Z1*Z2
    v = (a * t0 + b3 * xz - a * a * t2) % p

    x3 = (xy * lo - yz * v) % p
    y3 = (u * v + hi * lo) % p
    z3 = (yz * hi + xy * u) % p

    return (x3, y3, z3)


def scalar_mult(k: int, point: CurvePoint, curve: CurveParameters) -> CurvePoint:
    """
    Scalar multiplication using a Montgomery ladder over complete formulas.

    For 0 <= k < n the ladder always runs n.bit_length() steps, each one
    complete addition and one complete doubling, and the bit only picks which
    ladder slot receives which result. The complete formulas have no special
    cases for the identity or equal points, so the field operations performed
    do not depend on k. A single inversion converts the result back to affine
    coordinates. Invariant: ladder[1] == ladder[0] + point.

    Python integer arithmetic is not itself constant-time; this fixes the
    sequence of group operations, not the timing of each multiplication.
    """
    if k < 0:
        raise ValueError("Scalar must be non-negative")

    if not point.is_infinity() and point.y == 0:
        # Points of order two, where the complete formulas do not apply.
        # Never a key or nonce point on odd-order curves.
        return point if k & 1 else INFINITY

    ladder = [_PROJECTIVE_INFINITY, _to_projective(point)]
    for i in reversed(range(max(curve.n.bit_length(), k.bit_length()))):
        bit = (k >> i) & 1
        ladder[1 - bit] = _projective_add(ladder[0], ladder[1], curve)
        ladder[bit] = _projective_add(ladder[bit], ladder[bit], curve)

    return _to_affine(ladder[0], curve)


def add_two_mul(u_a: int, point_a: CurvePoint, u_b: int, point_b: CurvePoint,
                curve: CurveParameters) -> CurvePoint:
    """Calculates u_a * point_a + u_b * point_b"""
    return point_add(scalar_mult(u_a, point_a, curve), scalar_mult(u_b, point_b, curve), curve)
