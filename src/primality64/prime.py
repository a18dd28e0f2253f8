# -----------------------------------------------------------------------------
#  prime.py
#  Certified prime value
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import total_ordering

from primality64.primality import is_prime
from primality64.utility import NotPrimeError, as_u64


@total_ordering
class Prime:
    """
    A u64 that has passed the primality oracle.

    Build one with Prime(n) (raises NotPrimeError for non-primes) or
    Prime.new(n) (returns None instead). Ordered and hashed by value.
    """

    __slots__ = ("_n",)

    def __init__(self, n: int) -> None:
        n = as_u64(n)
        if not is_prime(n):
            raise NotPrimeError(f"{n} is not prime")
        object.__setattr__(self, "_n", n)

    @classmethod
    def new(cls, n: int) -> Prime | None:
        """Return a certified prime for n, or None if n is not prime."""
        n = as_u64(n)
        if not is_prime(n):
            return None
        return _certified_unchecked(n)

    def get(self) -> int:
        return self._n

    def __setattr__(self, name, value):
        raise AttributeError("Prime is immutable")

    def __int__(self) -> int:
        return self._n

    def __index__(self) -> int:
        return self._n

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Prime):
            return self._n == other._n
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Prime):
            return self._n < other._n
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._n)

    def __repr__(self) -> str:
        return f"Prime({self._n})"

    def __str__(self) -> str:
        return str(self._n)

    def __reduce__(self):
        return (Prime, (self._n,))


def _certified_unchecked(n: int) -> Prime:
    # Only for callers that have already run n through is_prime().
    p = object.__new__(Prime)
    object.__setattr__(p, "_n", n)
    return p


def certified_prime_from(n: int) -> Prime | None:
    return Prime.new(n)


def certified_prime_value(p: Prime) -> int:
    return p.get()
