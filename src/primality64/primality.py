# -----------------------------------------------------------------------------
#  primality.py
#  Deterministic Miller-Rabin test for the whole u64 range
# -----------------------------------------------------------------------------

from __future__ import annotations

from primality64.powmod import WIDTH_64, WIDTH_128, mul_mod, pow_mod
from primality64.utility import U32_MAX, as_u64

"""
Miller-Rabin alone only says "composite" or "probably prime". For bounded n
it is known which small witness sets admit no strong pseudoprime, so picking
the set by magnitude gives an exact answer for every u64.

See https://en.wikipedia.org/wiki/Miller%E2%80%93Rabin_primality_test
(section "Testing against small sets of bases").
"""

# Largest prime below 2**64 (2**64 - 59), https://t5k.org/lists/2small/0bit.html
MAX_U64_PRIME = 18_446_744_073_709_551_557

# (exclusive upper bound, witnesses)
WITNESS_BANDS: tuple[tuple[int, tuple[int, ...]], ...] = (
    (2_047, (2,)),
    (1_373_653, (2, 3)),
    (4_759_123_141, (2, 7, 61)),
)
FULL_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def max_representable_prime() -> int:
    return MAX_U64_PRIME


def witnesses_for(n: int) -> tuple[int, ...]:
    """Return the witness set that makes the strong test exact for n."""
    for bound, wits in WITNESS_BANDS:
        if n < bound:
            return wits
    return FULL_WITNESSES


def width_for(n: int) -> int:
    """64-bit arithmetic while n*n fits, 128-bit otherwise."""
    return WIDTH_64 if n <= U32_MAX else WIDTH_128


def sprp(n: int, a: int, width: int) -> bool:
    """
    One strong-probable-prime round of odd n > 3 to base a.

    Writes n - 1 = 2**r * d with d odd, then checks whether a**d is 1 or
    whether one of the next r - 1 squarings reaches n - 1.
    """
    d = n - 1
    r = (d & -d).bit_length() - 1
    d >>= r
    assert (d << r) + 1 == n

    x = pow_mod(a, d, n, width)
    if x == 1 or x == n - 1:
        return True
    for _ in range(1, r):
        x = mul_mod(x, x, n, width)
        if x == n - 1:
            return True
    return False


def is_prime(n: int) -> bool:
    """
    Exact primality for any n in [0, 2**64 - 1].

    >>> is_prime(5), is_prime(6)
    (True, False)
    >>> is_prime(MAX_U64_PRIME)
    True
    """
    n = as_u64(n)
    if n in (2, 3):
        return True
    if n & 1 == 0 or n < 5:
        return False

    width = width_for(n)
    return all(sprp(n, a, width) for a in witnesses_for(n))
