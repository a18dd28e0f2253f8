# -----------------------------------------------------------------------------
#  sequence.py
#  Ascending prime sequences driven by a mod-210 wheel
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import cache
from itertools import takewhile
from math import gcd

from primality64.prime import Prime, _certified_unchecked
from primality64.primality import is_prime
from primality64.utility import U64_MAX, PrimeCeilingError, as_u64

WHEEL_MODULUS = 2 * 3 * 5 * 7


def _wheel_jumps(modulus: int) -> bytes:
    """
    For every residue i, the smallest j >= 1 such that i + j shares no factor
    with the modulus. Adding jumps[c % modulus] to c skips every candidate
    divisible by 2, 3, 5 or 7.
    """
    out = bytearray()
    for i in range(modulus):
        j = 1
        while gcd(i + j, modulus) != 1:
            j += 1
        out.append(j)
    return bytes(out)


# average jump ~3.70
PRIME_JUMPS = _wheel_jumps(WHEEL_MODULUS)


def _jump_after(cursor: int) -> int:
    if cursor < WHEEL_MODULUS:
        return 1
    return PRIME_JUMPS[cursor % WHEEL_MODULUS]


class PrimeIter:
    """
    Primes in ascending order, starting at the first prime >= n.

    Raises PrimeCeilingError once it has to look past 2**64 - 1, i.e. right
    after MAX_U64_PRIME has been produced. Bound consumption with
    itertools.takewhile() or islice() to avoid that.

    >>> list(takewhile(lambda p: p < 20, PrimeIter.from_(5)))
    [5, 7, 11, 13, 17, 19]
    """

    __slots__ = ("_last", "_jump")

    def __init__(self, n: int = 2) -> None:
        n = as_u64(n)
        # primes >= 0 are primes >= 2, cursor sits just below the first candidate
        self._last = max(n, 2) - 1
        self._jump = _jump_after(self._last)

    @classmethod
    def from_(cls, n: int) -> PrimeIter:
        return cls(n)

    @classmethod
    def all(cls) -> PrimeIter:
        return cls(2)

    def copy(self) -> PrimeIter:
        other = PrimeIter.__new__(PrimeIter)
        other._last = self._last
        other._jump = self._jump
        return other

    __copy__ = copy

    def __iter__(self) -> PrimeIter:
        return self

    def __next__(self) -> int:
        while True:
            cand = self._last + self._jump
            if cand > U64_MAX:
                raise PrimeCeilingError(
                    f"no u64 prime after {self._last}; the largest is 2**64 - 59"
                )
            self._last = cand
            self._jump = _jump_after(cand)
            if is_prime(cand):
                return cand

    def __repr__(self) -> str:
        return f"PrimeIter(last={self._last})"


class CertIter:
    """Same sequence as PrimeIter, each value wrapped as a certified Prime."""

    __slots__ = ("_pi",)

    def __init__(self, n: int = 2) -> None:
        self._pi = PrimeIter(n)

    @classmethod
    def from_(cls, n: int) -> CertIter:
        return cls(n)

    @classmethod
    def all(cls) -> CertIter:
        return cls(2)

    @classmethod
    def from_pi(cls, pi: PrimeIter) -> CertIter:
        it = cls.__new__(cls)
        it._pi = pi
        return it

    def __iter__(self) -> CertIter:
        return self

    def __next__(self) -> Prime:
        # PrimeIter only yields values that already passed is_prime()
        return _certified_unchecked(next(self._pi))


def prime_sequence_from(n: int) -> PrimeIter:
    return PrimeIter.from_(n)


def certified_prime_sequence_from(n: int) -> CertIter:
    return CertIter.from_(n)


@cache
def primes_below(limit: int) -> tuple[Prime, ...]:
    """Certified primes p < limit, cached per limit."""
    limit = as_u64(limit, "limit")
    return tuple(takewhile(lambda p: p.get() < limit, CertIter.all()))
