# -----------------------------------------------------------------------------
#  arith.py
#  Arithmetic functions derived from a prime factorization
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable, Iterator

import gmpy2

from primality64.factor import PrimeFactorization, factor
from primality64.utility import PreconditionError, as_u64


def _as_factorization(x: PrimeFactorization | int) -> PrimeFactorization:
    if isinstance(x, PrimeFactorization):
        return x
    return factor(x)


def euler_totient(x: PrimeFactorization | int) -> int:
    """
    φ(n) = ∏ p^(e-1) · (p-1) over the prime powers of n.

    Takes a factorization or a u64 (factored here; 0 is rejected).

    >>> euler_totient(180)
    48
    """
    pf = _as_factorization(x)
    phi = 1
    for p, e in pf.items():
        pv = p.get()
        phi *= pv ** (e - 1) * (pv - 1)
    return phi


def mobius_of(pf: PrimeFactorization) -> int:
    """μ(n): 0 unless squarefree, else (-1)^ω(n)."""
    if any(e > 1 for _, e in pf.items()):
        return 0
    return -1 if len(pf) % 2 else 1


def mobius(x: PrimeFactorization | int, y: int = 1) -> int:
    """
    Möbius function of x / y.

    With a factorization, y is ignored and μ of that number is returned.
    With integers: y == 0 raises PreconditionError; x == 0 or y not dividing
    x gives 0.

    >>> mobius(90, 2), mobius(90, 3), mobius(90, 6)
    (0, -1, 1)
    """
    if isinstance(x, PrimeFactorization):
        return mobius_of(x)
    x = as_u64(x, "x")
    y = as_u64(y, "y")
    if y == 0:
        raise PreconditionError("mobius: denominator is 0")
    if x == 0 or x % y != 0:
        return 0
    return mobius_of(factor(x // y))


def for_all_divisors(pf: PrimeFactorization, visit: Callable[[int], object]) -> None:
    """
    Call visit(d) once for every divisor d of the factored number, 1 and n
    included, in no particular order. Nothing is collected.
    """
    powers = [(p.get(), e) for p, e in pf.items()]

    def _walk(i: int, acc: int) -> None:
        if i == len(powers):
            visit(acc)
            return
        p, e = powers[i]
        for _ in range(e + 1):
            _walk(i + 1, acc)
            acc *= p

    _walk(0, 1)


def divisors(pf: PrimeFactorization) -> Iterator[int]:
    """Divisors of the factored number in ascending order."""
    ds = [1]
    for p, e in pf.items():
        pv = p.get()
        cur = []
        pe = 1
        for _ in range(e + 1):
            for d in ds:
                cur.append(d * pe)
            pe *= pv
        ds = cur
    yield from sorted(ds)


def divisor_count(pf: PrimeFactorization) -> int:
    """τ(n) = ∏ (e + 1)."""
    t = 1
    for _, e in pf.items():
        t *= e + 1
    return t


def divisor_sum(pf: PrimeFactorization) -> int:
    """σ(n) = ∏ (p^(e+1) − 1)/(p − 1), in gmpy2 bigints (σ can leave the u64 range)."""
    acc = gmpy2.mpz(1)
    for p, e in pf.items():
        pz = gmpy2.mpz(p.get())
        acc *= (pow(pz, e + 1) - 1) // (pz - 1)
    return int(acc)
