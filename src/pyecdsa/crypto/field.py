"""
Arithmetic in the prime fields underlying the curve

Only modular inversion is needed beyond what Python integers already provide.
"""


class DomainError(Exception):
    """An integer has no inverse modulo the given modulus"""
    pass


def mod_inverse(k: int, m: int) -> int:
    """
    Compute the inverse of k mod m using the extended Euclidean algorithm.

    k may be negative or larger than m, it is reduced into [0, m) first.

    Raises:
        DomainError: if m < 2 or gcd(k, m) != 1 (which includes k ≡ 0 mod m)
    """
    if m < 2:
        raise DomainError(f"Modulus must be at least 2, got {m}")

    k %= m
    if k == 0:
        raise DomainError("Zero has no modular inverse")

    old_r, r = k, m
    old_s, s = 1, 0
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s

    if old_r != 1:
        raise DomainError(f"No inverse exists, gcd is {old_r}")

    return old_s % m
